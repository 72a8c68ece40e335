"""Array operator folding and range expansion."""

from ..scope import Scope, Variable, VariableType
from ..tokens import Token, TokenType


class OperatorsMixin:

    def _operators(self, scope: Scope, left: Variable) -> str:
        """Rewrite `left op right ...` into runtime calls when `left` is an array.

        Non-array operands keep their native infix operators, so the text is
        returned unchanged and the caller copies the operators through.
        """
        text = left.name
        if left.type != VariableType.ARRAY:
            return text

        symbols = tuple(self.tables.operators)
        while not self.stream.at_line_break():
            tok = self.stream.match_operator(*symbols)
            if tok:
                fn = self.tables.operators[tok.value]
                text = f"{fn}({text}, {self._operand(scope)})"
                continue
            tok = self.stream.match_operator_assign(*symbols)
            if tok:
                fn = self.tables.operators[tok.value]
                return f"{left.name} = {fn}({text}, {self._right_chain(scope, symbols)})"
            break
        return text

    def _right_chain(self, scope: Scope, symbols: tuple[str, ...]) -> str:
        """a += [2] + [3]: the rest of the chain folds into the right operand."""
        text = self._operand(scope)
        while not self.stream.at_line_break():
            tok = self.stream.match_operator(*symbols)
            if not tok:
                break
            text = f"{self.tables.operators[tok.value]}({text}, {self._operand(scope)})"
        return text

    def _operand(self, scope: Scope) -> str:
        tok = self.stream.match_number()
        if tok:
            return tok.value

        if self.stream.match(TokenType.LBRACKET):
            text, _ = self._array(scope)
            return text

        tok = self.stream.match_identifier()
        if tok:
            return self.tables.keyword(tok.value)

        tok = self.stream.match_range()
        if tok:
            return self._range(scope, tok)

        tok = self.stream.match_string()
        if tok:
            return self._string(tok)

        tok = self.stream.match_accessor()
        if tok:
            return self._accessor(scope, tok)

        return self._expression(scope).text

    # ---- Ranges ----

    def _range(self, scope: Scope, tok: Token) -> str:
        exclusive = "..<" in tok.value
        low, _, high = tok.value.partition("..<" if exclusive else "..")

        # 1..n+1: fold the trailing operator chain into the upper bound
        while not self.stream.at_line_break():
            op = self.stream.match_operator()
            if not op:
                break
            high += f" {op.value} {self._operand(scope)}"

        if exclusive:
            high += " - 1"
        return f"{self.tables.range_function}({low}, {high})"
