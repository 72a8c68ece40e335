"""Expression parsing: central dispatch, declarations, assignments, groups."""

from typing import Optional

from ..errors import GrammarViolation
from ..scope import Scope, Variable, VariableType
from ..tokens import Token, TokenType
from .core import Fragment


class ExpressionsMixin:

    def _expression(self, scope: Scope) -> Fragment:
        tok = self.stream.match_identifier()
        if tok:
            return self._identifier(scope, tok)

        tok = self.stream.match(TokenType.LBRACKET)
        if tok:
            return self._array_expression(scope, tok)

        tok = self.stream.match_range()
        if tok:
            text = self._range(scope, tok)
            variable = scope.declare(text, VariableType.ARRAY, token=tok, synthetic=True)
            return Fragment(text, variable, self._lead(tok))

        tok = self.stream.match(TokenType.LPAREN)
        if tok:
            return self._group(scope, tok)

        tok = self.stream.match_accessor()
        if tok:
            return Fragment(self._accessor(scope, tok), lead=self._lead(tok))

        tok = self.stream.match_number()
        if tok:
            return self._number(scope, tok)

        tok = self.stream.match(TokenType.LBRACE)
        if tok:
            text = self._func(scope)
            return Fragment(text, Variable(text, VariableType.FUNCTION), self._lead(tok))

        tok = self.stream.match_string()
        if tok:
            return Fragment(self._string(tok), Variable(tok.value, VariableType.STRING), self._lead(tok))

        # Supported natively by JavaScript: copy the token
        tok = self.stream.current
        if tok.type == TokenType.EOF:
            raise GrammarViolation.at("Unexpected end of input", tok)
        if tok.type == TokenType.RBRACE:
            raise GrammarViolation.at("Unexpected '}'", tok)
        self.stream.advance()
        return Fragment(tok.value, lead=self._lead(tok))

    # ---- Identifiers ----

    def _identifier(self, scope: Scope, tok: Token) -> Fragment:
        lead = self._lead(tok)

        if tok.value in self.tables.declarations and self.stream.check(TokenType.IDENT):
            return Fragment(self._declaration(scope, tok))

        if tok.value in self.tables.commands and not self.stream.check(TokenType.LPAREN) \
                and not self._at_instruction_end():
            return Fragment(self._command(scope, self.tables.keyword(tok.value)), lead=lead)

        name = self.tables.keyword(tok.value)
        variable = scope.lookup(name)

        if self.stream.match(TokenType.ASSIGN):
            return Fragment(self._assignment(scope, tok, variable), variable)

        # Operator continuation only on the same line: `return list + 1`, `new Date`
        if not self.stream.current.newline:
            nxt = self.stream.match_identifier()
            if nxt:
                right_name = self.tables.keyword(nxt.value)
                right = scope.lookup(right_name) or Variable(right_name)
                return Fragment(f"{name} {self._operators(scope, right)}", right, lead)

            nxt = self.stream.match_accessor()
            if nxt:
                return Fragment(f"{name} {self._accessor(scope, nxt)}", lead=lead)

        if variable is not None:
            text = self._operators(scope, variable)
            if text != variable.name:
                variable = Variable(text, variable.type)
            return Fragment(text, variable, lead)

        # Just a keyword or an unknown global
        return Fragment(name, lead=lead)

    def _declaration(self, scope: Scope, keyword: Token) -> str:
        """`def a = 1, b` declares every name with the keyword's type hint."""
        hint = self.tables.declarations[keyword.value]
        declarators = []
        name = self.stream.advance()
        while True:
            variable = self._declare(scope, name, hint)
            text = name.value
            if self.stream.match(TokenType.ASSIGN):
                text += " = " + self._initializer(scope, variable, name.value, declarators=True)
            declarators.append(text)
            if not (self.stream.check(TokenType.COMMA) and self.stream.peek(1).type == TokenType.IDENT):
                break
            self.stream.advance()
            name = self.stream.advance()
        return self._terminate(f"{self.tables.declaration} " + ", ".join(declarators))

    def _assignment(self, scope: Scope, target: Token, variable: Optional[Variable]) -> str:
        return self._terminate(f"{target.value} = " + self._initializer(scope, variable, target.value))

    def _initializer(
        self, scope: Scope, variable: Optional[Variable], name: str, declarators: bool = False
    ) -> str:
        """Parse a right-hand side up to the end of the instruction, narrowing `variable`.

        With `declarators`, a top-level comma also ends it.
        """
        text = self._initial_value(scope, variable, name)
        while not self._at_instruction_end():
            if declarators and self.stream.check(TokenType.COMMA):
                break
            text += self._expression(scope).code
        return text

    def _initial_value(self, scope: Scope, variable: Optional[Variable], name: str) -> str:
        if variable is None:
            variable = Variable(name)

        tok = self.stream.match_number()
        if tok:
            fragment = self._number(scope, tok)
            if fragment.variable is not None:
                variable.narrow(VariableType.NUMBER)
            return fragment.text

        opening = self.stream.match(TokenType.LBRACKET)
        if opening:
            literal, kind = self._array(scope, name)
            # def s = [1, 2].size(): the value is the member's, not the literal's
            call = self._literal_member(scope, literal, kind, opening)
            if call is not None:
                return call.text
            variable.narrow(kind)
            return self._operators(scope, Variable(literal, kind))

        tok = self.stream.match_range()
        if tok:
            variable.narrow(VariableType.ARRAY)
            return self._range(scope, tok)

        tok = self.stream.match_string()
        if tok:
            variable.narrow(VariableType.STRING)
            return self._string(tok)

        if self.stream.match(TokenType.LBRACE):
            variable.narrow(VariableType.FUNCTION)
            return self._func(scope)

        tok = self.stream.match_identifier()
        if tok:
            fragment = self._identifier(scope, tok)
            if fragment.variable is not None:
                variable.narrow(fragment.variable.type)
            return fragment.text

        tok = self.stream.match_accessor()
        if tok:
            referent = scope.lookup(tok.value)
            if referent is not None:
                variable.narrow(referent.type)
            return self._accessor(scope, tok)

        return self._expression(scope).text

    def _command(self, scope: Scope, name: str) -> str:
        """`println x` -> `console.log(x)`: wrap the rest of the instruction."""
        args = ""
        while not self._at_instruction_end():
            args += self._expression(scope).code
        return f"{name}({args.strip()})"

    # ---- Groups and literals ----

    def _group(self, scope: Scope, opening: Token) -> Fragment:
        text = "("
        has_array = False
        while not self.stream.match(TokenType.RPAREN):
            if self.stream.is_end():
                raise GrammarViolation.at("Expected ')' before end of input", opening)
            fragment = self._expression(scope)
            if fragment.variable is not None and fragment.variable.type == VariableType.ARRAY:
                text += fragment.lead + self._operators(scope, fragment.variable)
                has_array = True
            else:
                text += fragment.code
        text += ")"

        if not has_array:
            return Fragment(text, lead=self._lead(opening))

        # (1..3).each { ... }
        call = self._literal_member(scope, text, VariableType.ARRAY, opening)
        if call is not None:
            return call
        text = self._operators(scope, Variable(text, VariableType.ARRAY))
        return Fragment(text, Variable(text, VariableType.ARRAY), self._lead(opening))

    def _array_expression(self, scope: Scope, opening: Token) -> Fragment:
        literal, kind = self._array(scope)

        # Direct method call on the literal: [1, 2].each { ... }
        call = self._literal_member(scope, literal, kind, opening)
        if call is not None:
            return call
        return Fragment(literal, Variable(literal, kind), self._lead(opening))

    def _number(self, scope: Scope, tok: Token) -> Fragment:
        # Method call on a number literal: 3.times { ... }
        call = self._literal_member(scope, tok.value, VariableType.NUMBER, tok)
        if call is not None:
            return call
        return Fragment(tok.value, Variable(tok.value, VariableType.NUMBER), self._lead(tok))

    def _literal_member(
        self, scope: Scope, text: str, kind: VariableType, opening: Token
    ) -> Optional[Fragment]:
        """Resolve `<literal>.member` against a synthetic variable for the literal."""
        if not (self.stream.check(TokenType.DOT) and self.stream.peek(1).type == TokenType.IDENT):
            return None
        self.stream.advance()
        member = self.stream.advance()
        scope.declare(text, kind, token=opening, synthetic=True)
        return Fragment(self._member(scope, text, member.value, member), lead=self._lead(opening))
