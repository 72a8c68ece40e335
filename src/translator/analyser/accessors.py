"""Accessor parsing: `receiver.member` dispatched on the receiver's inferred type."""

from typing import Optional

from ..errors import GrammarViolation
from ..scope import Scope, Variable, VariableType
from ..tables import ArrayMethod
from ..tokens import Token, TokenType


class AccessorsMixin:

    def _accessor(self, scope: Scope, tok: Token) -> str:
        path = tok.value
        if path in self.tables.commands and not self.stream.check(TokenType.LPAREN) \
                and not self._at_instruction_end():
            return self._command(scope, self.tables.keyword(path))
        if path in self.tables.keywords:
            return self.tables.keywords[path]

        receiver, _, member = path.rpartition(".")
        return self._member(scope, receiver, member, tok)

    def _member(self, scope: Scope, receiver: str, member: str, tok: Optional[Token] = None) -> str:
        path = f"{receiver}.{member}"
        left = scope.lookup(path)
        if left is not None:
            owner = scope.lookup(receiver)
            if left.type == VariableType.FUNCTION or (owner is not None and owner.type == VariableType.FUNCTION):
                return self._closure_property(scope, path, tok)
            # A known key: `member` names it rather than a method on the receiver
            return self._operators(scope, left)

        left = scope.resolve(receiver, tok)
        if left.type == VariableType.FUNCTION:
            return self._closure_property(scope, path, tok)
        if left.type == VariableType.ARRAY:
            return self._array_member(scope, receiver, member, path)
        if left.type == VariableType.MAP:
            return f"{receiver}.{self.tables.map_methods.get(member, member)}"
        if left.type == VariableType.NUMBER:
            return self._number_member(scope, receiver, member, path)
        return self._operators(scope, Variable(path))

    # ---- Closures carrying properties ----

    def _closure_property(self, scope: Scope, path: str, tok: Optional[Token]) -> str:
        variable = scope.lookup(path)
        if variable is None:
            variable = scope.declare(path, token=tok)
            self.declarations.append(variable)
        if not self.stream.match(TokenType.ASSIGN):
            return path
        return self._terminate(f"{path} = " + self._initializer(scope, variable, path))

    # ---- Arrays ----

    def _array_member(self, scope: Scope, receiver: str, member: str, path: str) -> str:
        method = self.tables.array_methods.get(member)
        if method is None:
            prop = self.tables.array_properties.get(member)
            if prop is None:
                return self._operators(scope, Variable(path))
            self._discard_call()
            return f"{receiver}.{prop}"

        if method.parameters is None and not method.custom:
            return f"{receiver}.{method.name}"
        return f"{receiver}.{method.name}({self._callback_arguments(scope, method, member)})"

    def _callback_arguments(self, scope: Scope, method: ArrayMethod, member: str) -> str:
        """Parse `(args) { closure }`, `(args, { closure })` or `{ closure }` into call arguments."""
        # Custom methods take their parameter names from the closure literal;
        # the implicit `it` of the others is an element
        if method.custom:
            params, param_type = ("it",), VariableType.ANY
        else:
            params, param_type = method.parameters, VariableType.NUMBER

        args = ""
        closure = None
        opening = self.stream.match(TokenType.LPAREN)
        if opening:
            while not self.stream.match(TokenType.RPAREN):
                if self.stream.is_end():
                    raise GrammarViolation.at("Expected ')' before end of input", opening)
                if self.stream.match(TokenType.LBRACE):
                    closure = self._func(scope, params, param_type)
                    self.stream.expect(TokenType.RPAREN, "')'")
                    break
                args += self._expression(scope).code
            args = args.strip().rstrip(",").rstrip()

        if closure is None:
            if self.stream.match(TokenType.LBRACE):
                closure = self._func(scope, params, param_type)
            elif method.custom or not args:
                raise GrammarViolation.at(
                    f"A function on array ('{member}') must be followed by a {{", self.stream.current
                )
            else:
                return args

        if args:
            return f"{closure}, {args}"
        return closure

    # ---- Numbers ----

    def _number_member(self, scope: Scope, receiver: str, member: str, path: str) -> str:
        method = self.tables.number_methods.get(member)
        if method is None:
            return self._operators(scope, Variable(path))
        self._discard_call()
        if not self.stream.match(TokenType.LBRACE):
            raise GrammarViolation.at(
                f"'{member}' on a number must be followed by a {{", self.stream.current
            )
        closure = self._func(scope, method.parameters, VariableType.NUMBER)
        return f"{method.name}({receiver}, {closure})"

    # ---- Helpers ----

    def _discard_call(self):
        """Consume and drop a parenthesized argument list, if present."""
        opening = self.stream.match(TokenType.LPAREN)
        if not opening:
            return
        depth = 1
        while depth:
            if self.stream.is_end():
                raise GrammarViolation.at("Expected ')' before end of input", opening)
            tok = self.stream.advance()
            if tok.type == TokenType.LPAREN:
                depth += 1
            elif tok.type == TokenType.RPAREN:
                depth -= 1

