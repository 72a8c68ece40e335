"""Diagnostic computation for Groovy documents.

Runs the translator (lexer -> analyser) on source text and converts the
first fatal error into an LSP Diagnostic.
"""

import os
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse, unquote

from lsprotocol import types as lsp

from src.translator.lexer import Lexer, LexerError
from src.translator.errors import TranslationError
from src.translator.analyser import Analyser, Translation
from src.translator.tables import TranslationTables, default_tables
from src.translator.tokens import Token


@dataclass
class AnalysisResult:
    """Cached result of translating a document."""

    uri: str
    source: str
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)
    tokens: Optional[list[Token]] = None
    translation: Optional[Translation] = None
    tables: TranslationTables = field(default_factory=default_tables)


def uri_to_path(uri: str) -> str:
    """Convert file:// URI to filesystem path."""
    parsed = urlparse(uri)
    return unquote(parsed.path)


def _make_diagnostic(
    line: int,
    col: int,
    message: str,
    severity: lsp.DiagnosticSeverity = lsp.DiagnosticSeverity.Error,
    source: str = "groovy2js",
) -> lsp.Diagnostic:
    """Create an LSP Diagnostic.

    The translator uses 1-based line/col; LSP uses 0-based.
    """
    line_0 = max(0, line - 1)
    col_0 = max(0, col - 1)
    return lsp.Diagnostic(
        range=lsp.Range(
            start=lsp.Position(line=line_0, character=col_0),
            end=lsp.Position(line=line_0, character=col_0 + 1),
        ),
        message=message,
        severity=severity,
        source=source,
    )


def compute_diagnostics(
    uri: str, source: str, tables: Optional[TranslationTables] = None
) -> AnalysisResult:
    """Translate the document and return diagnostics."""
    result = AnalysisResult(uri=uri, source=source, tables=tables or default_tables())
    filename = os.path.basename(uri_to_path(uri))

    # Lexing
    try:
        result.tokens = Lexer(source, filename).tokenize()
    except LexerError as e:
        result.diagnostics.append(_make_diagnostic(e.line, e.col, str(e).rsplit(" at ", 1)[0]))
        return result

    # Translation
    try:
        analyser = Analyser(source, tables=result.tables, filename=filename)
        result.translation = analyser.translate()
    except TranslationError as e:
        result.diagnostics.append(_make_diagnostic(e.line, e.col, e.message))

    return result
