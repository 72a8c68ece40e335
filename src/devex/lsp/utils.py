"""Shared utility functions for the groovy2js LSP feature modules."""

from __future__ import annotations

from typing import Optional

from lsprotocol import types as lsp

from src.translator.scope import Variable
from src.translator.tokens import Token, TokenType

from src.devex.lsp.diagnostics import AnalysisResult


def to_position(line: int, col: int) -> lsp.Position:
    """Convert a 1-based translator position to a 0-based LSP position."""
    return lsp.Position(line=max(0, line - 1), character=max(0, col - 1))


def token_range(token: Token, length: Optional[int] = None) -> lsp.Range:
    start = to_position(token.line, token.col)
    end = lsp.Position(line=start.line, character=start.character + (length or len(token.value)))
    return lsp.Range(start=start, end=end)


def find_token_at_position(
    tokens: list[Token], position: lsp.Position
) -> Optional[Token]:
    """Find the token that covers the given 0-based LSP position."""
    target_line = position.line + 1
    target_col = position.character + 1

    for tok in tokens:
        if tok.type == TokenType.EOF:
            continue
        if tok.line != target_line:
            continue
        tok_end_col = tok.col + len(tok.value)
        if tok.col <= target_col < tok_end_col:
            return tok
    return None


def word_at(token: Token, position: lsp.Position) -> str:
    """The dotted prefix of an accessor token up to the segment under the cursor."""
    if token.type != TokenType.ACCESSOR:
        return token.value
    offset = position.character + 1 - token.col
    end = token.value.find(".", offset)
    return token.value if end == -1 else token.value[:end]


def _before(variable: Variable, line: int, col: int) -> bool:
    tok = variable.token
    if tok is None:
        return True
    return (tok.line, tok.col) <= (line, col)


def find_variable(result: AnalysisResult, name: str, token: Token) -> Optional[Variable]:
    """The nearest declaration of `name` at or before `token`.

    The scope tree holds no source extents, so the latest preceding
    declaration wins.
    """
    if result.translation is None:
        return None

    found = None
    for variable in result.translation.declarations:
        if variable.name == name and _before(variable, token.line, token.col):
            found = variable
    if found is not None:
        return found
    return result.translation.scope.lookup(name)
