#!/usr/bin/env python3
"""groovy2js — translate Groovy scripts to JavaScript.

Usage: python main.py <input.groovy> [-o output.js] [--tables tables.json]
                      [--global NAME[:TYPE]] [--no-runtime] [--emit-tokens]
"""

import sys
import os
import argparse
import logging
from typing import Optional

from .lexer import Lexer, LexerError
from .errors import TranslationError
from .scope import Scope, VariableType
from .tables import TranslationTables, default_tables, load_tables
from .analyser import Analyser
from .runtime import with_prelude

logger = logging.getLogger(__name__)


def _format_error(source: str, filename: str, message: str,
                  line: int, col: int) -> str:
    """Format an error with source context and caret."""
    lines = source.split('\n')
    if line < 1 or line > len(lines):
        return f"error: {message}\n --> {filename}:{line}:{col}"
    source_line = lines[line - 1]
    width = len(str(line))
    pad = " " * width
    caret = " " * max(col - 1, 0) + "^"
    return (
        f"error: {message}\n"
        f" {pad}--> {filename}:{line}:{col}\n"
        f" {pad} |\n"
        f" {line} | {source_line}\n"
        f" {pad} | {caret}"
    )


def parse_global(spec: str) -> tuple[str, VariableType]:
    """`name` or `name:type` -> (name, VariableType)."""
    name, _, type_name = spec.partition(":")
    if not name:
        raise argparse.ArgumentTypeError(f"invalid global '{spec}'")
    if not type_name:
        return name, VariableType.ANY
    try:
        return name, VariableType[type_name.upper()]
    except KeyError:
        choices = ", ".join(t.name.lower() for t in VariableType)
        raise argparse.ArgumentTypeError(f"unknown type '{type_name}' (choose from {choices})")


def seed_scope(globals_: list[tuple[str, VariableType]]) -> Scope:
    scope = Scope()
    for name, var_type in globals_:
        scope.declare(name, var_type, synthetic=True)
    return scope


def _read_source(path: str) -> Optional[str]:
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, "r") as f:
            return f.read()
    except FileNotFoundError:
        return None


def _output_path(args) -> Optional[str]:
    if args.output:
        return None if args.output == "-" else args.output
    if args.input == "-":
        return None
    return os.path.splitext(args.input)[0] + ".js"


def build_parser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(description="Groovy to JavaScript translator")
    argparser.add_argument("input", help="Input .groovy file ('-' for stdin)")
    argparser.add_argument("-o", "--output",
                           help="Output .js file (default: <input>.js, '-' for stdout)")
    argparser.add_argument("--tables", metavar="FILE",
                           help="JSON translation tables merged over the defaults")
    argparser.add_argument("--global", dest="globals", metavar="NAME[:TYPE]", action="append",
                           type=parse_global, default=[],
                           help="Pre-declare a variable in the root scope (repeatable)")
    argparser.add_argument("--no-runtime", action="store_true",
                           help="Don't prepend the runtime prelude to the output")
    argparser.add_argument("--emit-tokens", action="store_true", help="Print token stream")
    argparser.add_argument("-v", "--verbose", action="store_true", help="Log scope and type decisions")
    return argparser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        stream=sys.stderr, format="%(name)s: %(message)s")

    source = _read_source(args.input)
    if source is None:
        print(f"Error: File '{args.input}' not found", file=sys.stderr)
        return 1
    filename = "<stdin>" if args.input == "-" else os.path.basename(args.input)

    tables: TranslationTables = default_tables()
    if args.tables:
        try:
            tables = load_tables(args.tables)
        except (OSError, ValueError) as e:
            print(f"Error: Cannot load translation tables '{args.tables}': {e}", file=sys.stderr)
            return 1

    if args.emit_tokens:
        try:
            tokens = Lexer(source, filename).tokenize()
        except LexerError as e:
            raw_msg = str(e).rsplit(" at ", 1)[0]
            print(_format_error(source, filename, raw_msg, e.line, e.col), file=sys.stderr)
            return 1
        for tok in tokens:
            print(tok)
        return 0

    try:
        translation = Analyser(source, tables=tables, scope=seed_scope(args.globals),
                               filename=filename).translate()
    except LexerError as e:
        raw_msg = str(e).rsplit(" at ", 1)[0]
        print(_format_error(source, filename, raw_msg, e.line, e.col), file=sys.stderr)
        return 1
    except TranslationError as e:
        print(_format_error(source, filename, e.message, e.line, e.col), file=sys.stderr)
        return 1

    logger.debug("%d variables declared", len(translation.declarations))
    js = translation.output + "\n" if args.no_runtime else with_prelude(translation.output)

    out_path = _output_path(args)
    if out_path is None:
        sys.stdout.write(js)
        return 0

    with open(out_path, "w") as f:
        f.write(js)
    print(f"Translated {args.input} → {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
