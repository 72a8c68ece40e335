"""Tests for the Groovy lexer."""

import pytest
from src.translator.lexer import Lexer, LexerError
from src.translator.tokens import TokenType


def tokens(source: str):
    return Lexer(source).tokenize()


def kinds(source: str) -> list[TokenType]:
    return [t.type for t in tokens(source)][:-1]


def values(source: str) -> list[str]:
    return [t.value for t in tokens(source)][:-1]


class TestBasics:
    def test_empty_source(self):
        toks = tokens("")
        assert len(toks) == 1
        assert toks[0].type == TokenType.EOF

    def test_declaration(self):
        assert kinds("def x = 1;") == [
            TokenType.IDENT, TokenType.IDENT, TokenType.ASSIGN,
            TokenType.NUMBER, TokenType.SEMICOLON,
        ]

    def test_positions_are_one_based(self):
        toks = tokens("a\n  b")
        assert (toks[0].line, toks[0].col) == (1, 1)
        assert (toks[1].line, toks[1].col) == (2, 3)

    def test_dollar_in_identifier(self):
        assert values("$a_1") == ["$a_1"]


class TestLeadingWhitespace:
    def test_no_space(self):
        assert tokens("a+b")[1].lead == ""

    def test_space(self):
        assert tokens("a + b")[1].lead == " "

    def test_newline_wins_over_space(self):
        toks = tokens("a  \n   b")
        assert toks[1].lead == "\n"
        assert toks[1].newline

    def test_line_comment_before_newline(self):
        toks = tokens("a // note\nb")
        assert toks[1].newline

    def test_block_comment_counts_as_space(self):
        assert tokens("a/* x */b")[1].lead == " "

    def test_multiline_block_comment_counts_as_newline(self):
        assert tokens("a /* x\ny */ b")[1].newline


class TestNumbers:
    def test_integer_and_fraction(self):
        assert values("42 3.14") == ["42", "3.14"]

    def test_exponent(self):
        assert values("1e10 2.5E-3") == ["1e10", "2.5E-3"]

    def test_hex(self):
        assert values("0xFF") == ["0xFF"]

    def test_suffix_dropped(self):
        assert values("10L 2.5d 3G") == ["10", "2.5", "3"]

    def test_underscores_dropped(self):
        assert values("1_000") == ["1000"]

    def test_method_call_on_number(self):
        assert kinds("3.times") == [TokenType.NUMBER, TokenType.DOT, TokenType.IDENT]


class TestRanges:
    def test_inclusive(self):
        toks = tokens("1..5")
        assert toks[0].type == TokenType.RANGE
        assert toks[0].value == "1..5"

    def test_exclusive(self):
        assert values("0..<n") == ["0..<n"]

    def test_identifier_bounds(self):
        assert values("a..b") == ["a..b"]

    def test_negative_upper_bound(self):
        assert values("5..-1") == ["5..-1"]

    def test_trailing_operator_is_separate(self):
        assert kinds("1..n+1") == [TokenType.RANGE, TokenType.OPERATOR, TokenType.NUMBER]

    def test_malformed(self):
        with pytest.raises(LexerError, match="Malformed range literal"):
            tokens("1..;")


class TestAccessors:
    def test_dotted_path(self):
        toks = tokens("list.size")
        assert toks[0].type == TokenType.ACCESSOR
        assert toks[0].value == "list.size"

    def test_long_path(self):
        assert values("System.out.println") == ["System.out.println"]

    def test_dot_after_call_is_punctuation(self):
        assert kinds("f().x") == [
            TokenType.IDENT, TokenType.LPAREN, TokenType.RPAREN,
            TokenType.DOT, TokenType.IDENT,
        ]


class TestStrings:
    def test_single_and_double(self):
        assert values("'a' \"b\"") == ["'a'", '"b"']

    def test_escapes_kept(self):
        assert values(r'"a\"b"') == [r'"a\"b"']

    def test_triple_quoted_newlines(self):
        assert values("'''a\nb'''") == ["'a\\nb'"]

    def test_triple_quoted_inner_quote_escaped(self):
        assert values("'''it's'''") == ["'it\\'s'"]

    def test_unterminated(self):
        with pytest.raises(LexerError, match="Unterminated string literal"):
            tokens('"abc')

    def test_newline_in_string(self):
        with pytest.raises(LexerError):
            tokens('"abc\ndef"')


class TestOperators:
    def test_longest_match(self):
        assert values("a <<= b") == ["a", "<<=", "b"]

    def test_kinds(self):
        assert kinds("+ += = -> == ,") == [
            TokenType.OPERATOR, TokenType.OPERATOR_ASSIGN, TokenType.ASSIGN,
            TokenType.ARROW, TokenType.SYMBOL, TokenType.COMMA,
        ]

    def test_unexpected_character(self):
        with pytest.raises(LexerError, match="Unexpected character"):
            tokens("a @ b")


class TestComments:
    def test_shebang_skipped(self):
        assert values("#!/usr/bin/env groovy\nx") == ["x"]

    def test_comments_skipped(self):
        assert values("a // b\n/* c */ d") == ["a", "d"]

    def test_unterminated_block_comment(self):
        with pytest.raises(LexerError, match="Unterminated block comment"):
            tokens("/* never")
