"""Array, map and string literals."""

import re
from typing import Optional

from ..errors import GrammarViolation
from ..scope import Scope, VariableType
from ..tokens import Token, TokenType

_KEY_TYPES = (TokenType.IDENT, TokenType.STRING, TokenType.NUMBER)
_INTERPOLATION = re.compile(r"(?<!\\)\$(\{|[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)")


class LiteralsMixin:

    def _array(self, scope: Scope, name: Optional[str] = None) -> tuple[str, VariableType]:
        """Parse after `[` up to the matching `]`; returns the text and ARRAY or MAP."""
        opening = self.stream.previous

        # [:] is the empty map
        if self.stream.match(TokenType.COLON):
            self.stream.expect(TokenType.RBRACKET, "']'")
            return "{}", VariableType.MAP

        if self.stream.check(*_KEY_TYPES) and self.stream.peek(1).type == TokenType.COLON:
            return self._map(scope, name), VariableType.MAP

        items = ""
        while not self.stream.match(TokenType.RBRACKET):
            if self.stream.is_end():
                raise GrammarViolation.at("Expected ']' before end of input", opening)
            if self.stream.check(TokenType.LBRACKET):
                tok = self.stream.advance()
                text, _ = self._array(scope)
                items += self._lead(tok) + text
            else:
                items += self._expression(scope).code
        return "[" + items.strip() + "]", VariableType.ARRAY

    def _map(self, scope: Scope, name: Optional[str]) -> str:
        opening = self.stream.previous
        entries = []
        while True:
            key = self.stream.current
            if key.type not in _KEY_TYPES:
                raise GrammarViolation.at(f"Expected a map key, got '{key.value}'", key)
            self.stream.advance()
            self.stream.expect(TokenType.COLON, "':'")

            # Keys are registered only under a declared name
            variable = None
            path = ""
            if name:
                path = name + "." + key.value.strip("'\"")
                variable = self._declare(scope, key, name=path)

            value = self._initial_value(scope, variable, path)
            while not self.stream.check(TokenType.COMMA, TokenType.RBRACKET):
                if self.stream.is_end():
                    raise GrammarViolation.at("Expected ']' before end of input", opening)
                value += self._expression(scope).code
            entries.append(f"{key.value}: {value.strip()}")

            if self.stream.match(TokenType.RBRACKET):
                break
            self.stream.expect(TokenType.COMMA, "','")
            # Trailing comma
            if self.stream.match(TokenType.RBRACKET):
                break
        return "{" + ", ".join(entries) + "}"

    def _string(self, tok: Token) -> str:
        """Double-quoted strings with `$x` or `${...}` become template literals."""
        text = tok.value
        if not text.startswith('"') or not _INTERPOLATION.search(text):
            return text
        body = text[1:-1].replace("`", "\\`").replace('\\"', '"')
        body = _INTERPOLATION.sub(_template_hole, body)
        return "`" + body + "`"


def _template_hole(match: re.Match) -> str:
    if match.group(1) == "{":
        return "${"
    return "${" + match.group(1) + "}"
