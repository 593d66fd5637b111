"""
Unit Tests for the Parser
=========================

Schedule construction from source text and grammar violations.
"""

import pytest

from seri.core.dsl.lexer import Lexer
from seri.core.dsl.parser import Parser, parse_schedule
from seri.core.errors import (
    DuplicateHeaderError,
    InvalidHeaderValueError,
    LexError,
    MissingTitleError,
    ParseError,
    UnknownHeaderError,
)
from seri.models.schedule import SessionKind, Speaker, TimeOfDay

from tests.data.sample_documents import (
    CONFERENCE_DOCUMENT,
    DUPLICATE_TIME_DOCUMENT,
    LEX_ERROR_DOCUMENT,
    MINIMAL_DOCUMENT,
    MISSING_TITLE_DOCUMENT,
    UNKNOWN_HEADER_DOCUMENT,
)
from tests.utils.assertions import assert_valid_schedule


class TestParseSchedule:
    """Test successful parsing."""

    def test_minimal_document(self):
        schedule = parse_schedule(MINIMAL_DOCUMENT)

        assert_valid_schedule(schedule)
        assert len(schedule.days) == 1
        day = schedule.days[0]
        assert day.label is None
        session = day.sessions[0]
        assert session.title == "Opening keynote"
        assert session.speakers == (Speaker(name="Ada Lovelace"),)
        assert session.start == TimeOfDay(hour=9, minute=0)
        assert session.duration == 60
        assert session.kind == SessionKind.TALK
        assert session.line == 1

    def test_conference_document(self):
        schedule = parse_schedule(CONFERENCE_DOCUMENT)

        assert [day.label for day in schedule.days] == ["Monday, June 2", "Tuesday, June 3"]
        assert schedule.session_count == 5
        monday, tuesday = schedule.days
        assert [s.title for s in monday.sessions] == [
            "Welcome coffee",
            "Compilers in practice",
            "Lunch",
        ]
        assert monday.sessions[0].kind == SessionKind.MEAL
        assert monday.sessions[1].duration == 90
        assert monday.sessions[1].language == "en"
        assert monday.sessions[1].abstract == "How compilers are built.\n\nSecond paragraph."
        assert tuesday.sessions[0].language == "fr"
        assert len(tuesday.sessions[0].speakers) == 3
        assert tuesday.sessions[1].kind == SessionKind.FUN

    def test_empty_source(self):
        assert parse_schedule("").days == ()

    def test_comments_and_blank_lines_only(self):
        assert parse_schedule("# nothing here\n\n   \n# still nothing\n").days == ()

    def test_sessions_before_first_day(self):
        schedule = parse_schedule('"Registration"\n\nday "Monday"\n"Talk"\n')
        assert len(schedule.days) == 2
        assert schedule.days[0].label is None
        assert schedule.days[0].sessions[0].title == "Registration"
        assert schedule.days[1].label == "Monday"

    def test_day_without_label(self):
        schedule = parse_schedule('day\n"Talk"\n')
        assert schedule.days[0].label is None
        assert schedule.days[0].line == 1

    def test_empty_day(self):
        schedule = parse_schedule('day "Monday"\nday "Tuesday"\n"Talk"\n')
        assert schedule.days[0].sessions == ()
        assert len(schedule.days[1].sessions) == 1

    def test_session_without_headers(self):
        session = parse_schedule('"Open discussion"').days[0].sessions[0]
        assert session.start is None
        assert session.duration is None
        assert not session.is_scheduled

    def test_multiple_blank_lines_between_sessions(self):
        schedule = parse_schedule('"A"\n\n\n\n"B"\n')
        assert [s.title for s in schedule.days[0].sessions] == ["A", "B"]

    def test_empty_speaker_names_are_dropped(self):
        session = parse_schedule('"Talk"\nspeakers: "Ada", " ", "Alan"\n').days[0].sessions[0]
        assert [s.name for s in session.speakers] == ["Ada", "Alan"]

    def test_blank_abstract_is_none(self):
        session = parse_schedule('"Talk"\nabstract: "   "\n').days[0].sessions[0]
        assert session.abstract is None

    def test_session_type_is_case_insensitive(self):
        session = parse_schedule('"Bus"\ntype: Transport\n').days[0].sessions[0]
        assert session.kind == SessionKind.TRANSPORT

    def test_parser_accepts_token_list(self):
        tokens = Lexer(CONFERENCE_DOCUMENT).tokenize()
        assert Parser(tokens).parse() == parse_schedule(CONFERENCE_DOCUMENT)

    def test_parsing_is_pure(self):
        assert parse_schedule(CONFERENCE_DOCUMENT) == parse_schedule(CONFERENCE_DOCUMENT)


class TestParseErrors:
    """Test grammar violations."""

    def test_duplicate_header(self):
        with pytest.raises(DuplicateHeaderError) as exc_info:
            parse_schedule(DUPLICATE_TIME_DOCUMENT)
        error = exc_info.value
        assert isinstance(error, ParseError)
        assert error.line == 3
        assert "first given on line 2" in error.message

    def test_missing_title(self):
        with pytest.raises(MissingTitleError) as exc_info:
            parse_schedule(MISSING_TITLE_DOCUMENT)
        assert isinstance(exc_info.value, ParseError)
        assert exc_info.value.line == 1
        assert exc_info.value.expected == "session title"

    def test_missing_title_after_blank_line(self):
        with pytest.raises(ParseError):
            parse_schedule('"Talk"\ntime: 09:00\n\nduration: 30m\n')

    def test_unknown_header(self):
        with pytest.raises(UnknownHeaderError) as exc_info:
            parse_schedule(UNKNOWN_HEADER_DOCUMENT)
        assert "room" in exc_info.value.message
        assert exc_info.value.line == 2

    def test_sessions_need_blank_line(self):
        with pytest.raises(ParseError, match="blank line"):
            parse_schedule('"A"\ntime: 09:00\n"B"\n')

    def test_missing_colon(self):
        with pytest.raises(ParseError) as exc_info:
            parse_schedule('"Talk"\ntime 09:00\n')
        assert exc_info.value.expected == "':'"
        assert exc_info.value.column == 6

    def test_wrong_value_kind(self):
        with pytest.raises(ParseError) as exc_info:
            parse_schedule('"Talk"\ntime: 45m\n')
        assert exc_info.value.found == "duration 45m"

    def test_unknown_session_type(self):
        with pytest.raises(InvalidHeaderValueError, match="keynote"):
            parse_schedule('"Talk"\ntype: keynote\n')

    def test_invalid_language_code(self):
        with pytest.raises(InvalidHeaderValueError, match="two-letter"):
            parse_schedule('"Talk"\nlang: eng\n')

    def test_trailing_tokens_on_day_line(self):
        with pytest.raises(ParseError, match="end of line"):
            parse_schedule('day "Monday" "extra"\n')

    def test_trailing_tokens_on_header_line(self):
        with pytest.raises(ParseError):
            parse_schedule('"Talk"\ntime: 09:00 10:00\n')

    def test_stray_punctuation_at_top_level(self):
        with pytest.raises(ParseError) as exc_info:
            parse_schedule(":\n")
        assert exc_info.value.expected == "a session title"

    def test_lex_errors_propagate(self):
        with pytest.raises(LexError):
            parse_schedule(LEX_ERROR_DOCUMENT)
