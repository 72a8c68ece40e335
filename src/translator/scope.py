"""Scope tree and variable type model.

Types are narrowed forward only: once text has been emitted from a
variable's type, later evidence may refine the type for subsequent uses but
never rewrites what was already produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from .errors import ResolutionError
from .tokens import Token

logger = logging.getLogger(__name__)


class VariableType(Enum):
    ANY = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    MAP = auto()
    FUNCTION = auto()


@dataclass(eq=False)
class Variable:
    name: str
    type: VariableType = VariableType.ANY
    scope: Optional[Scope] = None
    token: Optional[Token] = None
    synthetic: bool = False  # registered for a literal receiver, not declared in source

    def narrow(self, new_type: VariableType):
        # ANY carries no evidence
        if new_type is VariableType.ANY or new_type is self.type:
            return
        logger.debug("narrow %s: %s -> %s", self.name, self.type.name, new_type.name)
        self.type = new_type


@dataclass(eq=False)
class Scope:
    parent: Optional[Scope] = None
    variables: dict[str, Variable] = field(default_factory=dict)
    children: list[Scope] = field(default_factory=list)

    @property
    def depth(self) -> int:
        depth = 0
        scope = self.parent
        while scope is not None:
            depth += 1
            scope = scope.parent
        return depth

    def child(self) -> Scope:
        scope = Scope(parent=self)
        self.children.append(scope)
        return scope

    def declare(
        self,
        name: str,
        type: VariableType = VariableType.ANY,
        token: Optional[Token] = None,
        synthetic: bool = False,
    ) -> Variable:
        variable = Variable(name, type, self, token, synthetic)
        self.variables[name] = variable
        logger.debug("declare %s: %s (depth %d)", name, type.name, self.depth)
        return variable

    def find(self, predicate: Callable[[Variable], bool]) -> Optional[Variable]:
        scope = self
        while scope is not None:
            for variable in scope.variables.values():
                if predicate(variable):
                    return variable
            scope = scope.parent
        return None

    def lookup(self, name: str) -> Optional[Variable]:
        scope = self
        while scope is not None:
            if name in scope.variables:
                return scope.variables[name]
            scope = scope.parent
        return None

    def resolve(self, name: str, token: Optional[Token] = None) -> Variable:
        variable = self.lookup(name)
        if variable is None:
            raise ResolutionError.at(f"Cannot resolve '{name}'", token)
        return variable

    def walk(self):
        """Yield this scope and every descendant, parents first."""
        yield self
        for child in self.children:
            yield from child.walk()
