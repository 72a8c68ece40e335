"""Tests for the translation tables."""

import json

import pytest
from src.translator.analyser import translate
from src.translator.scope import VariableType
from src.translator.tables import TranslationTables, default_tables, load_tables


class TestDefaults:
    def test_operators(self):
        tables = default_tables()
        assert tables.operators["+"] == "add"
        assert tables.operators["-="] == "subtract"
        assert tables.operators["<<"] == "leftShift"

    def test_array_methods(self):
        tables = default_tables()
        assert tables.array_methods["each"].name == "forEach"
        assert tables.array_methods["each"].parameters == ("it",)
        assert tables.array_methods["inject"].custom
        assert tables.array_methods["join"].parameters is None

    def test_keyword_fallback(self):
        tables = default_tables()
        assert tables.keyword("println") == "console.log"
        assert tables.keyword("return") == "return"

    def test_declaration_hints(self):
        tables = default_tables()
        assert tables.declarations["def"] == VariableType.ANY
        assert tables.declarations["int"] == VariableType.NUMBER
        assert tables.declarations["List"] == VariableType.ARRAY


class TestFromDict:
    def test_partial_merge_keeps_defaults(self):
        tables = TranslationTables.from_dict({"operators": {"+": "plus"}})
        assert tables.operators["+"] == "plus"
        assert tables.operators["-"] == "subtract"

    def test_array_methods(self):
        tables = TranslationTables.from_dict({
            "array_methods": {"eachWithIndex": {"name": "forEach", "custom": True},
                              "first": {"name": "shift"}},
        })
        assert tables.array_methods["first"].parameters is None
        assert tables.array_methods["eachWithIndex"].custom

    def test_declarations(self):
        tables = TranslationTables.from_dict({"declarations": {"Integer": "number"}})
        assert tables.declarations["Integer"] == VariableType.NUMBER

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown variable type"):
            TranslationTables.from_dict({"declarations": {"x": "tuple"}})

    def test_unknown_section(self):
        with pytest.raises(ValueError, match="Unknown table section"):
            TranslationTables.from_dict({"nope": {}})

    def test_scalars(self):
        tables = TranslationTables.from_dict({"declaration": "let", "range_function": "span"})
        assert tables.declaration == "let"
        assert tables.range_function == "span"


class TestAlternateDialect:
    def test_tables_drive_output(self):
        tables = TranslationTables.from_dict({
            "operators": {"+": "concat"},
            "declaration": "let",
            "range_function": "span",
        })
        out = translate("def a = [1]; def b = a + 2; def r = 1..3;", tables=tables)
        assert out == "let a = [1];let b = concat(a, 2);let r = span(1, 3);"

    def test_load_tables(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"keywords": {"println": "print"}}))
        tables = load_tables(str(path))
        assert tables.keyword("println") == "print"

    def test_load_tables_rejects_non_object(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="must be a JSON object"):
            load_tables(str(path))
