"""Token cursor used by the analyser.

Every ``match_*`` probe is a side-effecting lookahead-1 test: on success it
returns the matched token and advances past it; on failure it returns None
and leaves the cursor untouched.
"""

from typing import Optional

from .errors import GrammarViolation
from .tokens import Token, TokenType

# A line break after one of these leaves the instruction open
_OPEN_ENDED = {
    TokenType.OPERATOR,
    TokenType.OPERATOR_ASSIGN,
    TokenType.ASSIGN,
    TokenType.ARROW,
    TokenType.COMMA,
    TokenType.COLON,
    TokenType.DOT,
    TokenType.LPAREN,
    TokenType.LBRACKET,
    TokenType.LBRACE,
}

# Postfix symbols close an instruction; every other symbol needs a right operand
_CLOSING_SYMBOLS = {"++", "--"}


class TokenStream:
    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    # ---- Cursor ----

    @property
    def current(self) -> Token:
        return self.peek()

    @property
    def previous(self) -> Optional[Token]:
        if self.pos == 0:
            return None
        return self.tokens[self.pos - 1]

    def peek(self, offset: int = 0) -> Token:
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.current
        if tok.type != TokenType.EOF:
            self.pos += 1
        return tok

    def is_end(self) -> bool:
        return self.current.type == TokenType.EOF

    # ---- Probes ----

    def check(self, *types: TokenType) -> bool:
        return self.current.type in types

    def match(self, *types: TokenType) -> Optional[Token]:
        if self.current.type in types:
            return self.advance()
        return None

    def expect(self, token_type: TokenType, what: str = "") -> Token:
        tok = self.current
        if tok.type == token_type:
            return self.advance()
        expected = what or token_type.name
        found = tok.value or "end of input"
        raise GrammarViolation.at(f"Expected {expected}, got '{found}'", tok)

    def match_identifier(self, literal: Optional[str] = None) -> Optional[Token]:
        tok = self.current
        if tok.type == TokenType.IDENT and (literal is None or tok.value == literal):
            return self.advance()
        return None

    def match_number(self) -> Optional[Token]:
        return self.match(TokenType.NUMBER)

    def match_string(self) -> Optional[Token]:
        return self.match(TokenType.STRING)

    def match_range(self) -> Optional[Token]:
        return self.match(TokenType.RANGE)

    def match_accessor(self) -> Optional[Token]:
        return self.match(TokenType.ACCESSOR)

    def match_operator(self, *symbols: str) -> Optional[Token]:
        return self._match_symbol(TokenType.OPERATOR, symbols)

    def match_operator_assign(self, *symbols: str) -> Optional[Token]:
        return self._match_symbol(TokenType.OPERATOR_ASSIGN, symbols)

    def _match_symbol(self, token_type: TokenType, symbols: tuple[str, ...]) -> Optional[Token]:
        tok = self.current
        if tok.type == token_type and (not symbols or tok.value in symbols):
            return self.advance()
        return None

    # ---- Instruction boundaries ----

    def at_line_break(self) -> bool:
        """True when the current token starts a new line that ends the instruction."""
        prev = self.previous
        if not self.current.newline or prev is None:
            return False
        if prev.type == TokenType.SYMBOL:
            return prev.value in _CLOSING_SYMBOLS
        return prev.type not in _OPEN_ENDED

    def at_terminator(self) -> bool:
        if self.check(TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF):
            return True
        return self.at_line_break()
