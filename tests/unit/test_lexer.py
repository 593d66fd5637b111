"""
Unit Tests for the Lexer
========================

Token kinds, literal values, positions and lexical errors.
"""

import pytest

from seri.core.dsl.lexer import Lexer
from seri.core.dsl.tokens import Token, TokenKind
from seri.core.errors import LexError
from seri.models.schedule import TimeOfDay


def kinds(source):
    return [token.kind for token in Lexer(source).tokenize()]


class TestTokenization:
    """Test tokenization of well-formed input."""

    def test_session_block(self):
        """Test a title and a header line."""
        assert kinds('"Talk"\ntime: 09:30\n') == [
            TokenKind.STRING,
            TokenKind.NEWLINE,
            TokenKind.KEYWORD,
            TokenKind.PUNCTUATION,
            TokenKind.TIME,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_exactly_one_eof(self):
        tokens = Lexer('"A"\n\n"B"').tokenize()
        assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
        assert tokens[-1].kind == TokenKind.EOF

    def test_empty_source(self):
        tokens = Lexer("").tokenize()
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].describe() == "end of input"

    def test_time_value(self):
        token = Lexer("09:30").tokenize()[0]
        assert token.kind == TokenKind.TIME
        assert token.value == TimeOfDay(hour=9, minute=30)

    def test_single_digit_hour(self):
        token = Lexer("9:05").tokenize()[0]
        assert token.value == TimeOfDay(hour=9, minute=5)

    @pytest.mark.parametrize(
        "literal,minutes",
        [("45m", 45), ("2h", 120), ("1h30m", 90), ("0h5m", 5)],
    )
    def test_duration_values(self, literal, minutes):
        token = Lexer(f"duration: {literal}").tokenize()[2]
        assert token.kind == TokenKind.DURATION
        assert token.value == minutes

    def test_string_escapes(self):
        token = Lexer(r'"say \"hi\"\n\tand \\ go"').tokenize()[0]
        assert token.kind == TokenKind.STRING
        assert token.value == 'say "hi"\n\tand \\ go'

    def test_string_spans_lines(self):
        tokens = Lexer('abstract: "first\nsecond"\n"Next"').tokenize()
        assert tokens[2].value == "first\nsecond"
        assert tokens[-3].value == "Next"
        assert tokens[-3].line == 3

    def test_hash_inside_string_is_not_a_comment(self):
        token = Lexer('"Room #1"').tokenize()[0]
        assert token.value == "Room #1"

    def test_keywords_and_identifiers(self):
        tokens = Lexer("day speakers talk lang en").tokenize()
        assert tokens[0].is_keyword("day")
        assert tokens[1].is_keyword("speakers")
        assert tokens[2].kind == TokenKind.IDENTIFIER
        assert tokens[3].is_keyword("lang")
        assert tokens[4].kind == TokenKind.IDENTIFIER

    def test_punctuation(self):
        tokens = Lexer('speakers: "A", "B"').tokenize()
        assert tokens[1].is_punctuation(":")
        assert tokens[3].is_punctuation(",")


class TestLinesAndComments:
    """Test NEWLINE emission and comment handling."""

    def test_blank_line_emits_newline(self):
        assert kinds('"A"\n\n"B"\n') == [
            TokenKind.STRING,
            TokenKind.NEWLINE,
            TokenKind.NEWLINE,
            TokenKind.STRING,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_comment_only_line_is_invisible(self):
        assert kinds('# heading\n"T"\n') == [
            TokenKind.STRING,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_trailing_comment(self):
        assert kinds('"T" # note\n') == [TokenKind.STRING, TokenKind.NEWLINE, TokenKind.EOF]

    def test_missing_final_newline(self):
        assert kinds('"T"') == [TokenKind.STRING, TokenKind.NEWLINE, TokenKind.EOF]

    def test_positions(self):
        tokens = Lexer('"Talk"\n  time: 10:00\n').tokenize()
        time_keyword = tokens[2]
        assert (time_keyword.line, time_keyword.column) == (2, 3)
        time_literal = tokens[4]
        assert (time_literal.line, time_literal.column) == (2, 9)


class TestLexErrors:
    """Test malformed input."""

    def test_unexpected_character(self):
        with pytest.raises(LexError) as exc_info:
            Lexer('"Talk"\n@\n').tokenize()
        error = exc_info.value
        assert (error.line, error.column) == (2, 1)
        assert error.character == "@"
        assert "line 2, column 1" in str(error)

    def test_unterminated_string(self):
        with pytest.raises(LexError) as exc_info:
            Lexer('"Talk').tokenize()
        assert (exc_info.value.line, exc_info.value.column) == (1, 1)
        assert "unterminated" in exc_info.value.message

    def test_unknown_escape(self):
        with pytest.raises(LexError) as exc_info:
            Lexer(r'"a\q"').tokenize()
        assert exc_info.value.character == "q"

    def test_short_minutes(self):
        with pytest.raises(LexError) as exc_info:
            Lexer('"Talk"\ntime: 9:5\n').tokenize()
        assert (exc_info.value.line, exc_info.value.column) == (2, 9)

    def test_time_out_of_range(self):
        with pytest.raises(LexError, match="out of range"):
            Lexer("time: 24:00").tokenize()

    def test_number_without_unit(self):
        with pytest.raises(LexError, match="duration with a unit"):
            Lexer("duration: 45").tokenize()

    def test_literal_running_into_letters(self):
        with pytest.raises(LexError) as exc_info:
            Lexer("duration: 30min").tokenize()
        assert exc_info.value.character == "i"

    def test_minutes_over_an_hour_in_compound_duration(self):
        with pytest.raises(LexError, match="written as hours"):
            Lexer("duration: 1h75m").tokenize()


class TestLaziness:
    """Test that tokens are produced on demand."""

    def test_tokens_before_error_are_yielded(self):
        stream = Lexer('"Talk"\n@').tokens()
        first = next(stream)
        assert first.kind == TokenKind.STRING
        assert next(stream).kind == TokenKind.NEWLINE
        with pytest.raises(LexError):
            next(stream)

    def test_each_call_rescans(self):
        lexer = Lexer('"A"')
        assert list(lexer.tokens()) == list(lexer.tokens())

    def test_token_repr(self):
        token = Token(TokenKind.STRING, "A", 1, 1)
        assert repr(token) == "Token(STRING, 'A', L1:1)"
