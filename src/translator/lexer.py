"""Lexer for Groovy scripts.

Operators are read by longest match over a trie built from the OPERATORS
table. Literal parsing (numbers, strings, ranges) is hand-coded. Each token
records the whitespace that preceded it so pass-through text keeps the
source's spacing.
"""

from .tokens import OPERATORS, Token, TokenType

# Groovy numeric type suffixes (1L, 2.5G, 3d, ...) carry no meaning in JavaScript
_NUMBER_SUFFIXES = "gGlLdDfFiI"


class LexerError(Exception):
    def __init__(self, message: str, line: int, col: int):
        self.line = line
        self.col = col
        super().__init__(f"{message} at {line}:{col}")


class Lexer:
    def __init__(self, source: str, filename: str = "<stdin>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []
        self._lead = ""

        # Build operator trie for longest-match tokenization
        self._op_trie = _build_trie(OPERATORS)

    def tokenize(self) -> list[Token]:
        self._skip_shebang()
        while self.pos < len(self.source):
            self._skip_whitespace_and_comments()
            if self.pos >= len(self.source):
                break

            ch = self._peek()

            # String literal
            if ch in ('"', "'"):
                self._read_string()
            # Number (possibly the lower bound of a range)
            elif ch.isdigit():
                self._read_number()
            # Identifier, accessor path or range
            elif _is_ident_start(ch):
                self._read_identifier()
            # Operators and punctuation (trie-based longest match)
            else:
                self._read_operator()

        self._emit(TokenType.EOF, "", self.line, self.col)
        return self.tokens

    # --- Character helpers ---

    def _peek(self, offset: int = 0) -> str:
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _emit(self, token_type: TokenType, value: str, line: int, col: int):
        self.tokens.append(Token(token_type, value, line, col, self._lead))
        self._lead = ""

    def _mark_space(self, ch: str):
        if ch == '\n':
            self._lead = "\n"
        elif not self._lead:
            self._lead = " "

    # --- Whitespace and comments ---

    def _skip_shebang(self):
        if self.source.startswith("#!"):
            while self.pos < len(self.source) and self._peek() != '\n':
                self._advance()

    def _skip_whitespace_and_comments(self):
        while self.pos < len(self.source):
            ch = self._peek()
            if ch in (' ', '\t', '\n', '\r'):
                self._mark_space(ch)
                self._advance()
            elif ch == '/' and self._peek(1) == '/':
                self._skip_line_comment()
            elif ch == '/' and self._peek(1) == '*':
                self._skip_block_comment()
            else:
                break

    def _skip_line_comment(self):
        self._mark_space(' ')
        while self.pos < len(self.source) and self._peek() != '\n':
            self._advance()

    def _skip_block_comment(self):
        start_line = self.line
        start_col = self.col
        self._mark_space(' ')
        self._advance()  # /
        self._advance()  # *
        while self.pos < len(self.source):
            if self._peek() == '*' and self._peek(1) == '/':
                self._advance()
                self._advance()
                return
            self._mark_space(self._advance())
        raise LexerError("Unterminated block comment", start_line, start_col)

    # --- Strings ---

    def _read_string(self):
        line, col = self.line, self.col
        quote = self._advance()

        # Triple-quoted string: newlines are escaped into a one-line literal
        if self._peek() == quote and self._peek(1) == quote:
            self._advance()
            self._advance()
            chars: list[str] = []
            while self.pos < len(self.source):
                if self._peek() == quote and self._peek(1) == quote and self._peek(2) == quote:
                    self._advance()
                    self._advance()
                    self._advance()
                    self._emit(TokenType.STRING, quote + ''.join(chars) + quote, line, col)
                    return
                ch = self._advance()
                if ch == '\n':
                    chars.append('\\n')
                elif ch == '\r':
                    continue
                elif ch == '\\':
                    chars.append(ch)
                    if self.pos < len(self.source):
                        chars.append(self._advance())
                elif ch == quote:
                    chars.append('\\' + ch)
                else:
                    chars.append(ch)
            raise LexerError("Unterminated triple-quoted string", line, col)

        chars = []
        while self.pos < len(self.source):
            ch = self._peek()
            if ch == quote:
                self._advance()
                self._emit(TokenType.STRING, quote + ''.join(chars) + quote, line, col)
                return
            elif ch == '\\':
                chars.append(self._advance())
                if self.pos < len(self.source):
                    chars.append(self._advance())
            elif ch == '\n':
                raise LexerError("Unterminated string literal", line, col)
            else:
                chars.append(self._advance())
        raise LexerError("Unterminated string literal", line, col)

    # --- Numbers and ranges ---

    def _read_number(self):
        line, col = self.line, self.col
        value = self._scan_number()
        if self._peek() == '.' and self._peek(1) == '.':
            self._read_range(value, line, col)
        else:
            self._emit(TokenType.NUMBER, value, line, col)

    def _scan_number(self) -> str:
        start = self.pos
        if self._peek() == '0' and self._peek(1) in 'xX':
            self._advance()
            self._advance()
            while self._peek().isalnum() or self._peek() == '_':
                self._advance()
            return self.source[start:self.pos].replace('_', '')

        while self._peek().isdigit() or self._peek() == '_':
            self._advance()
        # Only a dot followed by a digit is a fraction; "3.times" and "1..5" are not
        if self._peek() == '.' and self._peek(1).isdigit():
            self._advance()
            while self._peek().isdigit() or self._peek() == '_':
                self._advance()
        if self._peek() in 'eE' and (
            self._peek(1).isdigit() or (self._peek(1) in '+-' and self._peek(2).isdigit())
        ):
            self._advance()
            if self._peek() in '+-':
                self._advance()
            while self._peek().isdigit():
                self._advance()
        value = self.source[start:self.pos].replace('_', '')
        if self._peek() in _NUMBER_SUFFIXES and not _is_ident_part(self._peek(1)):
            self._advance()
        return value

    def _read_range(self, low: str, line: int, col: int):
        self._advance()  # .
        self._advance()  # .
        separator = ".."
        if self._peek() == '<':
            self._advance()
            separator = "..<"

        if self._peek().isdigit():
            high = self._scan_number()
        elif self._peek() == '-' and self._peek(1).isdigit():
            self._advance()
            high = '-' + self._scan_number()
        elif _is_ident_start(self._peek()):
            high = self._scan_identifier()
        else:
            raise LexerError("Malformed range literal", line, col)
        self._emit(TokenType.RANGE, f"{low}{separator}{high}", line, col)

    # --- Identifier / accessor path ---

    def _scan_identifier(self) -> str:
        start = self.pos
        while _is_ident_part(self._peek()):
            self._advance()
        return self.source[start:self.pos]

    def _read_identifier(self):
        line, col = self.line, self.col
        name = self._scan_identifier()

        if self._peek() == '.' and self._peek(1) == '.':
            self._read_range(name, line, col)
            return

        if self._peek() == '.' and _is_ident_start(self._peek(1)):
            parts = [name]
            while self._peek() == '.' and _is_ident_start(self._peek(1)):
                self._advance()
                parts.append(self._scan_identifier())
            self._emit(TokenType.ACCESSOR, '.'.join(parts), line, col)
            return

        self._emit(TokenType.IDENT, name, line, col)

    # --- Operators and punctuation (trie-based longest match) ---

    def _read_operator(self):
        line, col = self.line, self.col

        # Walk the operator trie for longest match
        node = self._op_trie
        best_match = None
        best_len = 0
        i = 0
        while self.pos + i < len(self.source):
            ch = self.source[self.pos + i]
            if ch not in node:
                break
            node = node[ch]
            i += 1
            if '' in node:  # terminal marker
                best_match = node['']
                best_len = i

        if best_match is not None:
            value = self.source[self.pos:self.pos + best_len]
            for _ in range(best_len):
                self._advance()
            self._emit(best_match, value, line, col)
            return

        ch = self._peek()
        raise LexerError(f"Unexpected character '{ch}'", line, col)


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch in ('_', '$')


def _is_ident_part(ch: str) -> bool:
    return ch.isalnum() or ch in ('_', '$')


def _build_trie(operators: dict[str, TokenType]) -> dict:
    """Build a trie from operator strings for longest-match tokenization.

    Each node is a dict mapping character -> child node.
    Terminal nodes have '' -> TokenType entry.
    """
    root: dict = {}
    for op, token_type in operators.items():
        node = root
        for ch in op:
            if ch not in node:
                node[ch] = {}
            node = node[ch]
        node[''] = token_type  # terminal marker
    return root
