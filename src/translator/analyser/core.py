"""Analyser core: token cursor, output helpers, and the translate() entry point."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..errors import GrammarViolation
from ..lexer import Lexer
from ..scope import Scope, Variable, VariableType
from ..stream import TokenStream
from ..tables import TranslationTables, default_tables
from ..tokens import Token, TokenType

logger = logging.getLogger(__name__)


@dataclass
class Fragment:
    """Text produced by a production and the variable it resolved to."""

    text: str
    variable: Optional[Variable] = None
    lead: str = ""

    @property
    def code(self) -> str:
        return self.lead + self.text


@dataclass
class Translation:
    source: str
    output: str
    scope: Scope
    tokens: list[Token]
    declarations: list[Variable] = field(default_factory=list)


class AnalyserBase:
    def __init__(
        self,
        source: str,
        tables: Optional[TranslationTables] = None,
        scope: Optional[Scope] = None,
        filename: str = "<stdin>",
    ):
        self.source = source
        self.filename = filename
        self.tables = tables or default_tables()
        self.scope = scope if scope is not None else Scope()
        self.tokens = Lexer(source, filename).tokenize()
        self.stream = TokenStream(self.tokens)
        self.declarations: list[Variable] = []
        self._indent = 0

    def translate(self) -> Translation:
        logger.debug("translating %s (%d tokens)", self.filename, len(self.tokens))
        output = self._statements(self.scope, None).strip()
        return Translation(
            source=self.source,
            output=output,
            scope=self.scope,
            tokens=self.tokens,
            declarations=self.declarations,
        )

    # ---- Statement sequences ----

    def _statements(self, scope: Scope, closing: Optional[TokenType]) -> str:
        """Parse statements until `closing` is consumed (or end of input at the root)."""
        opening = self.stream.previous
        out = ""
        while True:
            if closing is not None and self.stream.match(closing):
                return out
            if self.stream.is_end():
                if closing is not None:
                    raise GrammarViolation.at("Expected '}' before end of input", opening)
                return out
            if self.stream.check(TokenType.RBRACE):
                raise GrammarViolation.at("Unexpected '}'", self.stream.current)

            start = self.stream.current
            text = self._statement(scope)
            out += self._separator(out, start, text) + text

    def _separator(self, out: str, start: Token, text: str) -> str:
        # Constructed statements carry no source whitespace of their own
        if not out or not text or text[0].isspace() or not start.newline:
            return ""
        if out.endswith((";", "{")):
            return ""
        return self._newline()

    def _body(self, scope: Scope, returns: bool = False) -> str:
        """Parse statements up to the closing brace and wrap them as a braced body.

        With `returns`, a closure body made of one bare expression yields it.
        """
        self._indent += 1
        try:
            body = self._statements(scope, TokenType.RBRACE).strip()
        finally:
            self._indent -= 1
        pad = "\t" * self._indent
        if not body:
            return "{\n" + pad + "}"
        if returns and _is_bare_expression(body, self.tables.keywords.values()):
            body = "return " + body
        return "{\n" + pad + "\t" + body + "\n" + pad + "}"

    # ---- Output helpers ----

    def _newline(self) -> str:
        return "\n" + "\t" * self._indent

    def _lead(self, token: Token) -> str:
        if token.newline:
            return self._newline()
        return token.lead

    def _raw(self, token: Token) -> str:
        """Verbatim pass-through text of a token, with its leading whitespace."""
        return self._lead(token) + token.value

    def _declare(
        self, scope: Scope, token: Token, type: VariableType = VariableType.ANY, name: str = ""
    ) -> Variable:
        variable = scope.declare(name or token.value, type, token=token)
        self.declarations.append(variable)
        return variable

    def _terminate(self, text: str) -> str:
        """End `text` with a single `;` when the instruction ends here."""
        ended = self.stream.match(TokenType.SEMICOLON) is not None \
            or self.stream.check(TokenType.RBRACE, TokenType.EOF) or self.stream.at_line_break()
        # x = y = 1: the inner assignment already terminated
        if ended and not text.endswith(";"):
            return text + ";"
        return text

    def _at_instruction_end(self) -> bool:
        return self.stream.at_terminator() or self.stream.check(
            TokenType.RPAREN, TokenType.RBRACKET
        )


_STATEMENT_KEYWORDS = ("if", "for", "while", "return", "throw", "break", "continue", "var", "def")


def _is_bare_expression(body: str, commands) -> bool:
    if "\n" in body or ";" in body:
        return False
    first = body.split(" ", 1)[0].split("(", 1)[0]
    return first not in _STATEMENT_KEYWORDS and first not in commands
