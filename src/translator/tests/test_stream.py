"""Tests for the analyser's token cursor."""

import pytest
from src.translator.errors import GrammarViolation
from src.translator.lexer import Lexer
from src.translator.stream import TokenStream
from src.translator.tokens import TokenType


def stream(source: str) -> TokenStream:
    return TokenStream(Lexer(source).tokenize())


class TestProbes:
    def test_match_consumes_on_success_only(self):
        s = stream("a = 1")
        assert s.match(TokenType.NUMBER) is None
        assert s.current.value == "a"
        assert s.match_identifier().value == "a"
        assert s.current.type == TokenType.ASSIGN

    def test_match_identifier_literal(self):
        s = stream("for x")
        assert s.match_identifier("if") is None
        assert s.match_identifier("for").value == "for"

    def test_match_operator_filters_symbols(self):
        s = stream("/ 2")
        assert s.match_operator("+", "-") is None
        assert s.match_operator().value == "/"

    def test_match_operator_assign(self):
        s = stream("+= 1")
        assert s.match_operator("+") is None
        assert s.match_operator_assign("+=").value == "+="

    def test_typed_probes(self):
        s = stream("1 'a' 1..2 a.b")
        assert s.match_number().value == "1"
        assert s.match_string().value == "'a'"
        assert s.match_range().value == "1..2"
        assert s.match_accessor().value == "a.b"
        assert s.is_end()

    def test_advance_stops_at_eof(self):
        s = stream("a")
        s.advance()
        assert s.advance().type == TokenType.EOF
        assert s.is_end()

    def test_previous_and_peek(self):
        s = stream("a b c")
        assert s.previous is None
        s.advance()
        assert s.previous.value == "a"
        assert s.peek(1).value == "c"
        assert s.peek(10).type == TokenType.EOF

    def test_expect(self):
        s = stream("x")
        with pytest.raises(GrammarViolation, match="Expected '\\(', got 'x'"):
            s.expect(TokenType.LPAREN, "'('")


class TestInstructionBoundaries:
    def test_line_break_ends_instruction(self):
        s = stream("a\nb")
        s.advance()
        assert s.at_line_break()
        assert s.at_terminator()

    def test_line_break_after_operator_continues(self):
        s = stream("a +\nb")
        s.advance()
        s.advance()
        assert not s.at_line_break()

    def test_line_break_after_comma_continues(self):
        s = stream("a,\nb")
        s.advance()
        s.advance()
        assert not s.at_terminator()

    def test_postfix_increment_closes(self):
        s = stream("i++\nb")
        s.advance()
        s.advance()
        assert s.at_line_break()

    def test_comparison_continues(self):
        s = stream("a &&\nb")
        s.advance()
        s.advance()
        assert not s.at_line_break()

    def test_explicit_terminators(self):
        for source in (";", "}", ""):
            assert stream(source).at_terminator()
