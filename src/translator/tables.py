"""Translation tables: the Groovy dialect as lookup data.

The analyser never hard-codes a target name; everything it emits for
operators, collection methods, keywords and declarations comes from a
TranslationTables instance, so an alternate dialect is a different table.
Tables can be loaded from JSON; a partial document is merged over the
defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .scope import VariableType


@dataclass(frozen=True)
class ArrayMethod:
    name: str
    parameters: Optional[tuple[str, ...]] = None  # None: emitted as a plain member
    custom: bool = False  # parameter names come from the closure literal


@dataclass(frozen=True)
class NumberMethod:
    name: str
    parameters: tuple[str, ...] = ("it",)


def _default_operators() -> dict[str, str]:
    return {
        "+": "add",
        "-": "subtract",
        "*": "multiply",
        "<<": "leftShift",
        "+=": "add",
        "-=": "subtract",
        "*=": "multiply",
        "<<=": "leftShift",
    }


def _default_array_methods() -> dict[str, ArrayMethod]:
    return {
        "each": ArrayMethod("forEach", ("it",)),
        "eachWithIndex": ArrayMethod("forEach", custom=True),
        "collect": ArrayMethod("map", ("it",)),
        "findAll": ArrayMethod("filter", ("it",)),
        "find": ArrayMethod("find", ("it",)),
        "any": ArrayMethod("some", ("it",)),
        "every": ArrayMethod("every", ("it",)),
        "inject": ArrayMethod("reduce", custom=True),
        "join": ArrayMethod("join"),
        "reverse": ArrayMethod("reverse"),
        "contains": ArrayMethod("includes"),
        "indexOf": ArrayMethod("indexOf"),
        "add": ArrayMethod("push"),
        "sort": ArrayMethod("sort"),
    }


def _default_array_properties() -> dict[str, str]:
    return {"size": "length"}


def _default_map_methods() -> dict[str, str]:
    return {"containsKey": "hasOwnProperty"}


def _default_number_methods() -> dict[str, NumberMethod]:
    return {"times": NumberMethod("times", ("it",))}


def _default_keywords() -> dict[str, str]:
    return {
        "println": "console.log",
        "print": "console.log",
        "System.out.println": "console.log",
        "System.out.print": "console.log",
    }


def _default_declarations() -> dict[str, VariableType]:
    return {
        "def": VariableType.ANY,
        "var": VariableType.ANY,
        "int": VariableType.NUMBER,
        "long": VariableType.NUMBER,
        "double": VariableType.NUMBER,
        "float": VariableType.NUMBER,
        "String": VariableType.STRING,
        "List": VariableType.ARRAY,
        "Map": VariableType.MAP,
    }


@dataclass(frozen=True)
class TranslationTables:
    operators: dict[str, str] = field(default_factory=_default_operators)
    array_methods: dict[str, ArrayMethod] = field(default_factory=_default_array_methods)
    array_properties: dict[str, str] = field(default_factory=_default_array_properties)
    map_methods: dict[str, str] = field(default_factory=_default_map_methods)
    number_methods: dict[str, NumberMethod] = field(default_factory=_default_number_methods)
    keywords: dict[str, str] = field(default_factory=_default_keywords)
    declarations: dict[str, VariableType] = field(default_factory=_default_declarations)
    commands: frozenset[str] = frozenset({"println", "print", "System.out.println", "System.out.print"})
    declaration: str = "var"
    range_function: str = "range"
    iteration: str = "in"

    def keyword(self, name: str) -> str:
        return self.keywords.get(name, name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TranslationTables:
        """Build tables from a (partial) JSON-style document over the defaults."""
        base = cls()
        changes: dict[str, Any] = {}

        for key in ("operators", "array_properties", "map_methods", "keywords"):
            if key in data:
                changes[key] = {**getattr(base, key), **data[key]}

        if "array_methods" in data:
            methods = dict(base.array_methods)
            for name, spec in data["array_methods"].items():
                params = spec.get("parameters")
                methods[name] = ArrayMethod(
                    spec["name"],
                    tuple(params) if params is not None else None,
                    bool(spec.get("custom", False)),
                )
            changes["array_methods"] = methods

        if "number_methods" in data:
            methods = dict(base.number_methods)
            for name, spec in data["number_methods"].items():
                methods[name] = NumberMethod(spec["name"], tuple(spec.get("parameters", ("it",))))
            changes["number_methods"] = methods

        if "declarations" in data:
            declarations = dict(base.declarations)
            for name, type_name in data["declarations"].items():
                try:
                    declarations[name] = VariableType[type_name.upper()]
                except KeyError:
                    raise ValueError(f"Unknown variable type '{type_name}' for declaration '{name}'")
            changes["declarations"] = declarations

        if "commands" in data:
            changes["commands"] = frozenset(data["commands"])

        for key in ("declaration", "range_function", "iteration"):
            if key in data:
                changes[key] = str(data[key])

        unknown = set(data) - {f for f in cls.__dataclass_fields__}
        if unknown:
            raise ValueError(f"Unknown table section(s): {', '.join(sorted(unknown))}")

        return replace(base, **changes)


def default_tables() -> TranslationTables:
    return TranslationTables()


def load_tables(path: str) -> TranslationTables:
    """Read a JSON table document and merge it over the defaults."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Translation tables in '{path}' must be a JSON object")
    return TranslationTables.from_dict(data)
