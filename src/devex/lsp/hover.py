"""Hover provider for Groovy documents.

Shows the inferred type of variables and the JavaScript form of keywords,
declaration keywords and collection methods.
"""

from typing import Optional

from lsprotocol import types as lsp

from src.translator.scope import Variable, VariableType
from src.translator.tables import TranslationTables
from src.translator.tokens import Token, TokenType

from src.devex.lsp.diagnostics import AnalysisResult
from src.devex.lsp.utils import find_token_at_position, find_variable, token_range, word_at


def _format_variable(variable: Variable, tables: TranslationTables) -> str:
    lines = [f"```groovy\n{variable.name}: {variable.type.name.lower()}\n```"]
    if variable.token is not None:
        lines.append(f"Declared at line {variable.token.line}, emitted as `{tables.declaration}`.")
    return "\n".join(lines)


def _format_keyword(word: str, tables: TranslationTables) -> Optional[str]:
    if word in tables.declarations:
        hint = tables.declarations[word]
        content = f"**`{word}`** declares a variable, emitted as `{tables.declaration}`"
        if hint != VariableType.ANY:
            content += f" (type hint: {hint.name.lower()})"
        return content
    if word in tables.keywords:
        return f"**`{word}`** translates to `{tables.keywords[word]}`"
    return None


def _format_member(receiver: Variable, member: str, tables: TranslationTables) -> Optional[str]:
    if receiver.type == VariableType.ARRAY:
        method = tables.array_methods.get(member)
        if method is not None:
            return f"**`{member}`** on a list translates to `{method.name}`"
        prop = tables.array_properties.get(member)
        if prop is not None:
            return f"**`{member}`** on a list translates to the `{prop}` property"
    elif receiver.type == VariableType.MAP and member in tables.map_methods:
        return f"**`{member}`** on a map translates to `{tables.map_methods[member]}`"
    elif receiver.type == VariableType.NUMBER and member in tables.number_methods:
        method = tables.number_methods[member]
        return f"**`{member}`** on a number translates to `{method.name}(n, fn)`"
    return None


def _hover_content(result: AnalysisResult, token: Token, word: str) -> Optional[str]:
    tables = result.tables

    content = _format_keyword(word, tables)
    if content is not None:
        return content

    variable = find_variable(result, word, token)
    if variable is not None:
        return _format_variable(variable, tables)

    if token.type == TokenType.ACCESSOR:
        receiver_name, _, member = word.rpartition(".")
        receiver = find_variable(result, receiver_name, token)
        if receiver is not None:
            return _format_member(receiver, member, tables)
    return None


def get_hover_info(
    result: AnalysisResult, position: lsp.Position
) -> Optional[lsp.Hover]:
    """Return hover information for the token at the given position."""
    if not result.tokens:
        return None

    token = find_token_at_position(result.tokens, position)
    if token is None or token.type not in (TokenType.IDENT, TokenType.ACCESSOR):
        return None

    word = word_at(token, position)
    content = _hover_content(result, token, word)
    if content is None:
        return None

    return lsp.Hover(
        contents=lsp.MarkupContent(
            kind=lsp.MarkupKind.Markdown,
            value=content,
        ),
        range=token_range(token, len(word)),
    )
