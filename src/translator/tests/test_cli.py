"""Tests for the groovy2js command line."""

import argparse

import pytest
from src.translator.main import _format_error, main, parse_global
from src.translator.runtime import PRELUDE
from src.translator.scope import VariableType


def write(tmp_path, source: str, name: str = "script.groovy") -> str:
    path = tmp_path / name
    path.write_text(source)
    return str(path)


class TestMain:
    def test_writes_output_next_to_input(self, tmp_path):
        path = write(tmp_path, "def a = [1]\ndef b = a + 2\n")
        assert main([path]) == 0
        js = (tmp_path / "script.js").read_text()
        assert js.startswith(PRELUDE)
        assert "var b = add(a, 2);" in js

    def test_no_runtime_to_stdout(self, tmp_path, capsys):
        path = write(tmp_path, "def x = 1")
        assert main([path, "--no-runtime", "-o", "-"]) == 0
        assert capsys.readouterr().out == "var x = 1;\n"

    def test_explicit_output(self, tmp_path):
        path = write(tmp_path, "println 1")
        out = tmp_path / "out.js"
        assert main([path, "--no-runtime", "-o", str(out)]) == 0
        assert out.read_text() == "console.log(1)\n"

    def test_globals(self, tmp_path, capsys):
        path = write(tmp_path, "def b = items + 1")
        assert main([path, "--no-runtime", "-o", "-", "--global", "items:array"]) == 0
        assert capsys.readouterr().out == "var b = add(items, 1);\n"

    def test_tables(self, tmp_path, capsys):
        tables = tmp_path / "tables.json"
        tables.write_text('{"declaration": "let"}')
        path = write(tmp_path, "def x = 1")
        assert main([path, "--no-runtime", "-o", "-", "--tables", str(tables)]) == 0
        assert capsys.readouterr().out == "let x = 1;\n"

    def test_bad_tables(self, tmp_path, capsys):
        tables = tmp_path / "tables.json"
        tables.write_text('{"nope": 1}')
        path = write(tmp_path, "def x = 1")
        assert main([path, "--tables", str(tables)]) == 1
        assert "Cannot load translation tables" in capsys.readouterr().err

    def test_emit_tokens(self, tmp_path, capsys):
        path = write(tmp_path, "x")
        assert main([path, "--emit-tokens"]) == 0
        out = capsys.readouterr().out
        assert "Token(IDENT, 'x', 1:1)" in out
        assert "EOF" in out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.groovy")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_translation_error(self, tmp_path, capsys):
        path = write(tmp_path, "println foo.bar")
        assert main([path]) == 1
        err = capsys.readouterr().err
        assert "error: Cannot resolve 'foo'" in err
        assert "script.groovy:1:9" in err

    def test_lexer_error(self, tmp_path, capsys):
        path = write(tmp_path, "def s = 'open")
        assert main([path]) == 1
        assert "error: Unterminated string literal" in capsys.readouterr().err


class TestGlobals:
    def test_untyped(self):
        assert parse_global("x") == ("x", VariableType.ANY)

    def test_typed(self):
        assert parse_global("cfg:Map") == ("cfg", VariableType.MAP)

    def test_unknown_type(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_global("x:tuple")


class TestFormatError:
    def test_caret(self):
        text = _format_error("abc\ndef x", "f.groovy", "boom", 2, 5)
        assert text.splitlines() == [
            "error: boom",
            "  --> f.groovy:2:5",
            "  |",
            " 2 | def x",
            "  |     ^",
        ]

    def test_out_of_range(self):
        assert _format_error("", "f", "boom", 9, 1) == "error: boom\n --> f:9:1"
