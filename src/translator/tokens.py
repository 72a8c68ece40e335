"""Token type definitions for the Groovy lexer.

Dotted paths (``list.size``) and range literals (``1..n``) are single tokens
so the analyser can resolve them against the scope tree in one probe.
"""

from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    # Literals
    IDENT = auto()
    NUMBER = auto()
    STRING = auto()
    RANGE = auto()            # 1..5, 0..<n
    ACCESSOR = auto()         # list.size, map.key.sub

    # Operators
    OPERATOR = auto()         # + - * / % ** <<
    OPERATOR_ASSIGN = auto()  # += -= *= /= %= **= <<=
    ASSIGN = auto()           # =
    ARROW = auto()            # ->
    SYMBOL = auto()           # comparison, logic, increments: passed through

    # Punctuation
    DOT = auto()              # .
    COMMA = auto()            # ,
    COLON = auto()            # :
    SEMICOLON = auto()        # ;

    # Delimiters
    LPAREN = auto()           # (
    RPAREN = auto()           # )
    LBRACKET = auto()         # [
    RBRACKET = auto()         # ]
    LBRACE = auto()           # {
    RBRACE = auto()           # }

    EOF = auto()


@dataclass
class Token:
    type: TokenType
    value: str
    line: int
    col: int
    lead: str = ""  # "", " " or "\n": whitespace seen before the token

    @property
    def newline(self) -> bool:
        return self.lead == "\n"

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.col})"


# Operator lookup table: string -> TokenType (longest match wins in the lexer)
OPERATORS: dict[str, TokenType] = {
    "+": TokenType.OPERATOR,
    "-": TokenType.OPERATOR,
    "*": TokenType.OPERATOR,
    "/": TokenType.OPERATOR,
    "%": TokenType.OPERATOR,
    "**": TokenType.OPERATOR,
    "<<": TokenType.OPERATOR,

    "+=": TokenType.OPERATOR_ASSIGN,
    "-=": TokenType.OPERATOR_ASSIGN,
    "*=": TokenType.OPERATOR_ASSIGN,
    "/=": TokenType.OPERATOR_ASSIGN,
    "%=": TokenType.OPERATOR_ASSIGN,
    "**=": TokenType.OPERATOR_ASSIGN,
    "<<=": TokenType.OPERATOR_ASSIGN,

    "=": TokenType.ASSIGN,
    "->": TokenType.ARROW,

    "==": TokenType.SYMBOL,
    "!=": TokenType.SYMBOL,
    "===": TokenType.SYMBOL,
    "!==": TokenType.SYMBOL,
    "<": TokenType.SYMBOL,
    ">": TokenType.SYMBOL,
    "<=": TokenType.SYMBOL,
    ">=": TokenType.SYMBOL,
    "<=>": TokenType.SYMBOL,
    "=~": TokenType.SYMBOL,
    "==~": TokenType.SYMBOL,
    "&&": TokenType.SYMBOL,
    "||": TokenType.SYMBOL,
    "!": TokenType.SYMBOL,
    "&": TokenType.SYMBOL,
    "|": TokenType.SYMBOL,
    "^": TokenType.SYMBOL,
    "~": TokenType.SYMBOL,
    ">>": TokenType.SYMBOL,
    ">>>": TokenType.SYMBOL,
    "++": TokenType.SYMBOL,
    "--": TokenType.SYMBOL,
    "?": TokenType.SYMBOL,
    "?.": TokenType.SYMBOL,
    "?:": TokenType.SYMBOL,
    "..": TokenType.SYMBOL,

    ".": TokenType.DOT,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}
