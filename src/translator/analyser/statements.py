"""Statement parsing: blocks, for loops, conditional heads."""

from ..errors import GrammarViolation
from ..scope import Scope, Variable, VariableType
from ..tokens import TokenType


class StatementsMixin:

    def _statement(self, scope: Scope) -> str:
        tok = self.stream.current
        if tok.type == TokenType.LBRACE:
            return self._lead(tok) + self._block(scope)
        if self.stream.match_identifier("for"):
            return self._for_loop(scope.child())
        if self.stream.match_identifier("if"):
            return self._conditional(scope)
        return self._expression(scope).code

    def _block(self, scope: Scope) -> str:
        self.stream.expect(TokenType.LBRACE, "'{'")
        return self._body(scope.child())

    # ---- for ----

    def _for_loop(self, scope: Scope) -> str:
        """Parse `for (...)` and its body; `scope` is the fresh loop scope."""
        keyword = self.stream.previous
        if not self.stream.match(TokenType.LPAREN):
            raise GrammarViolation.at(
                "A for keyword must be followed by an opened parenthesis", keyword
            )

        header = f"({self.tables.declaration} "
        hint = VariableType.ANY
        decl = self.stream.current
        if decl.type == TokenType.IDENT and decl.value in self.tables.declarations \
                and self.stream.peek(1).type == TokenType.IDENT:
            self.stream.advance()
            hint = self.tables.declarations[decl.value]

        name = self.stream.match_identifier()
        if name:
            variable = self._declare(scope, name, hint)
            header += name.value
            if self.stream.match(TokenType.ASSIGN):
                header += " = " + self._loop_initializer(scope, variable, iterating=False)
            elif self.stream.match_identifier("in") or self.stream.match(TokenType.COLON):
                header += f" {self.tables.iteration} "
                header += self._loop_initializer(scope, variable, iterating=True)

        while not self.stream.match(TokenType.RPAREN):
            if self.stream.is_end():
                raise GrammarViolation.at("Expected ')' to close the for-loop header", keyword)
            header += self._expression(scope).code
        header += ")"

        if self.stream.check(TokenType.LBRACE):
            body = self._block(scope)
        else:
            body = self._statement(scope).strip()
        return f"for {header} {body}"

    def _loop_initializer(self, scope: Scope, variable: Variable, iterating: bool) -> str:
        tok = self.stream.match_number()
        if tok:
            variable.narrow(VariableType.NUMBER)
            return tok.value

        tok = self.stream.match_range()
        if tok:
            variable.narrow(VariableType.NUMBER)
            return self._range(scope, tok)

        tok = self.stream.match_string()
        if tok:
            variable.narrow(VariableType.STRING)
            return self._string(tok)

        if self.stream.match(TokenType.LBRACKET):
            text, kind = self._array(scope)
            # Iterating an array yields indices; iterating a map yields keys
            variable.narrow(VariableType.NUMBER if kind == VariableType.ARRAY else VariableType.STRING)
            return text

        tok = self.stream.match_identifier()
        if tok:
            referent = scope.lookup(tok.value)
            if iterating:
                is_array = referent is not None and referent.type == VariableType.ARRAY
                variable.narrow(VariableType.NUMBER if is_array else VariableType.STRING)
            elif referent is not None:
                variable.narrow(referent.type)
            return tok.value

        return ""

    # ---- if ----

    def _conditional(self, scope: Scope) -> str:
        """Parse only the condition; the body is the statement that follows."""
        keyword = self.stream.previous
        if not self.stream.match(TokenType.LPAREN):
            raise GrammarViolation.at(
                "An if keyword must be followed by an opened parenthesis", keyword
            )
        inner = scope.child()
        condition = ""
        while not self.stream.match(TokenType.RPAREN):
            if self.stream.is_end():
                raise GrammarViolation.at("Expected ')' to close the condition", keyword)
            condition += self._expression(inner).code
        return f"if ({condition.strip()})"
