"""Closure literals: `{ a, b -> ... }` and `{ ... }` with the implicit `it`."""

from typing import Optional

from ..scope import Scope, VariableType
from ..tokens import Token, TokenType


class ClosuresMixin:

    def _func(
        self,
        scope: Scope,
        params: tuple[str, ...] = ("it",),
        param_type: VariableType = VariableType.ANY,
    ) -> str:
        """Parse a closure after its `{`; `params` apply when it declares none."""
        inner = scope.child()

        declared = self._closure_parameters()
        if declared is None:
            for name in params:
                inner.declare(name, param_type, synthetic=True)
            names = list(params)
        else:
            names = []
            for tok, hint in declared:
                self._declare(inner, tok, hint)
                names.append(tok.value)

        return f"function ({', '.join(names)}) " + self._body(inner, returns=True)

    def _closure_parameters(self) -> Optional[list[tuple[Token, VariableType]]]:
        """Consume `a, b ->` (optionally typed) if the closure starts with one."""
        offset = 0
        found = []
        while True:
            tok = self.stream.peek(offset)
            if tok.type == TokenType.ARROW and not found:
                break
            hint = VariableType.ANY
            if tok.type == TokenType.IDENT and tok.value in self.tables.declarations \
                    and self.stream.peek(offset + 1).type == TokenType.IDENT:
                hint = self.tables.declarations[tok.value]
                offset += 1
                tok = self.stream.peek(offset)
            if tok.type != TokenType.IDENT:
                return None
            found.append((tok, hint))
            offset += 1
            sep = self.stream.peek(offset).type
            if sep == TokenType.ARROW:
                break
            if sep != TokenType.COMMA:
                return None
            offset += 1

        for _ in range(offset + 1):
            self.stream.advance()
        return found
