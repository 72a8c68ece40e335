"""Document symbol provider for Groovy documents.

Lists the variables declared in the root scope, with a symbol kind taken
from their inferred type.
"""

from __future__ import annotations

from lsprotocol import types as lsp

from src.translator.scope import VariableType

from src.devex.lsp.diagnostics import AnalysisResult
from src.devex.lsp.utils import token_range

_SYMBOL_KINDS = {
    VariableType.ANY: lsp.SymbolKind.Variable,
    VariableType.NUMBER: lsp.SymbolKind.Number,
    VariableType.STRING: lsp.SymbolKind.String,
    VariableType.ARRAY: lsp.SymbolKind.Array,
    VariableType.MAP: lsp.SymbolKind.Object,
    VariableType.FUNCTION: lsp.SymbolKind.Function,
}


def get_document_symbols(result: AnalysisResult) -> list[lsp.DocumentSymbol]:
    """Extract document symbols from the root scope of the translation."""
    if result.translation is None:
        return []

    source_lines = result.source.split("\n")
    symbols: list[lsp.DocumentSymbol] = []
    children: dict[str, list[lsp.DocumentSymbol]] = {}

    for variable in result.translation.scope.variables.values():
        if variable.synthetic or variable.token is None:
            continue
        tok = variable.token
        line_idx = max(0, tok.line - 1)
        end_col = len(source_lines[line_idx]) if line_idx < len(source_lines) else 0
        owner, _, key = variable.name.rpartition(".")
        symbol = lsp.DocumentSymbol(
            name=key if owner else variable.name,
            kind=lsp.SymbolKind.Field if owner else _SYMBOL_KINDS[variable.type],
            range=lsp.Range(
                start=token_range(tok).start,
                end=lsp.Position(line=line_idx, character=end_col),
            ),
            selection_range=token_range(tok),
            detail=variable.type.name.lower(),
        )
        # Map keys (`config.port`) nest under their declaration
        if owner:
            children.setdefault(owner, []).append(symbol)
        else:
            symbols.append(symbol)

    _attach_children(symbols, children, "")
    return symbols


def _attach_children(
    symbols: list[lsp.DocumentSymbol], children: dict[str, list[lsp.DocumentSymbol]], prefix: str
):
    for symbol in symbols:
        path = prefix + symbol.name
        nested = children.get(path)
        if nested:
            symbol.children = nested
            _attach_children(nested, children, path + ".")
