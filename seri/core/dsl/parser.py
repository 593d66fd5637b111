"""
DSL Parser
==========

Recursive-descent parser turning the Seri token stream into a Schedule.

Grammar (informal, line oriented):

    document    = { blank } , [ sessions ] , { day_block } , EOF
    day_block   = "day" , [ STRING ] , NEWLINE , sessions
    sessions    = { session , { blank } }
    session     = STRING NEWLINE , { header NEWLINE }
    header      = "speakers" ":" STRING { "," STRING }
                | "time" ":" TIME
                | "duration" ":" DURATION
                | "abstract" ":" STRING
                | "type" ":" IDENT
                | "lang" ":" IDENT

Sessions are separated by blank lines. Sessions written before the first
"day" line belong to an unlabelled day. One token of lookahead is enough;
tokens are pulled lazily from the lexer.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional
import re

from seri.config.logging import get_logger
from seri.core.dsl.lexer import Lexer
from seri.core.dsl.tokens import HEADER_KEYWORDS, Token, TokenKind
from seri.core.errors import (
    DuplicateHeaderError,
    InvalidHeaderValueError,
    MissingTitleError,
    ParseError,
    UnknownHeaderError,
)
from seri.models.schedule import Day, Schedule, Session, SessionKind, Speaker

logger = get_logger(__name__)

_LANGUAGE_CODE = re.compile(r"^[A-Za-z]{2}$")


class Parser:
    """
    Parse a Seri token stream into a Schedule.

    Usage:
        schedule = Parser(Lexer(source).tokens()).parse()
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.logger: Any = logger.bind(component="parser")  # structlog.BoundLoggerBase
        self._tokens: Iterator[Token] = iter(tokens)
        self._current: Token = self._pull()

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def parse(self) -> Schedule:
        """Parse the full token stream into a Schedule."""
        days: List[Day] = []

        self._skip_blank_lines()
        if not self._at_end() and not self._current.is_keyword("day"):
            line = self._current.line
            days.append(Day(label=None, sessions=tuple(self._parse_sessions()), line=line))

        while self._current.is_keyword("day"):
            days.append(self._parse_day())

        if not self._at_end():
            raise self._error("'day' or a session title")

        schedule = Schedule(days=tuple(days))
        self.logger.debug(
            "Parsed schedule", day_count=len(schedule.days), session_count=schedule.session_count
        )
        return schedule

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_day(self) -> Day:
        token = self._advance()  # day
        label: Optional[str] = None
        if self._current.kind == TokenKind.STRING:
            label = str(self._advance().value).strip() or None
        self._expect_newline()
        sessions = self._parse_sessions()
        return Day(label=label, sessions=tuple(sessions), line=token.line)

    def _parse_sessions(self) -> List[Session]:
        sessions: List[Session] = []
        while True:
            self._skip_blank_lines()
            if self._at_end() or self._current.is_keyword("day"):
                return sessions
            sessions.append(self._parse_session())

    def _parse_session(self) -> Session:
        if self._current.kind != TokenKind.STRING:
            if self._starts_header():
                raise MissingTitleError(
                    "session block must start with a title line",
                    self._current.line,
                    self._current.column,
                    expected="session title",
                    found=self._current.describe(),
                )
            raise self._error("a session title")

        title_token = self._advance()
        self._expect_newline()

        fields: Dict[str, Any] = {}
        seen: Dict[str, int] = {}
        while self._current.kind not in (TokenKind.NEWLINE, TokenKind.EOF):
            if self._current.is_keyword("day"):
                break
            self._parse_header(fields, seen)

        return Session(title=str(title_token.value).strip(), line=title_token.line, **fields)

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def _parse_header(self, fields: Dict[str, Any], seen: Dict[str, int]) -> None:
        token = self._current

        if token.kind == TokenKind.IDENTIFIER:
            raise UnknownHeaderError(
                f"unknown header '{token.value}'",
                token.line,
                token.column,
                expected="one of " + ", ".join(HEADER_KEYWORDS),
                found=token.describe(),
            )
        if token.kind != TokenKind.KEYWORD or token.value not in HEADER_KEYWORDS:
            if token.kind == TokenKind.STRING:
                raise ParseError(
                    f"expected a header, found {token.describe()} "
                    "(separate sessions with a blank line)",
                    token.line,
                    token.column,
                    expected="header",
                    found=token.describe(),
                )
            raise self._error("a header")

        name = str(token.value)
        if name in seen:
            raise DuplicateHeaderError(
                f"duplicate header '{name}' (first given on line {seen[name]})",
                token.line,
                token.column,
                expected="a header not given yet",
                found=f"header '{name}'",
            )
        seen[name] = token.line
        self._advance()
        self._expect_punctuation(":")

        if name == "speakers":
            fields["speakers"] = tuple(Speaker(name=n) for n in self._parse_string_list())
        elif name == "time":
            fields["start"] = self._expect(TokenKind.TIME, "a time (HH:MM)").value
        elif name == "duration":
            fields["duration"] = self._expect(TokenKind.DURATION, "a duration (e.g. 45m)").value
        elif name == "abstract":
            text = str(self._expect(TokenKind.STRING, "an abstract string").value).strip()
            fields["abstract"] = text or None
        elif name == "type":
            fields["kind"] = self._parse_kind()
        elif name == "lang":
            fields["language"] = self._parse_language()

        self._expect_newline()

    def _parse_string_list(self) -> List[str]:
        names = [str(self._expect(TokenKind.STRING, "a speaker name").value).strip()]
        while self._current.is_punctuation(","):
            self._advance()
            names.append(str(self._expect(TokenKind.STRING, "a speaker name").value).strip())
        return [n for n in names if n]

    def _parse_kind(self) -> SessionKind:
        token = self._expect(TokenKind.IDENTIFIER, "a session type")
        try:
            return SessionKind(str(token.value).lower())
        except ValueError:
            raise InvalidHeaderValueError(
                f"unknown session type '{token.value}'",
                token.line,
                token.column,
                expected="one of " + ", ".join(kind.value for kind in SessionKind),
                found=token.describe(),
            )

    def _parse_language(self) -> str:
        token = self._expect(TokenKind.IDENTIFIER, "a language code")
        if not _LANGUAGE_CODE.match(str(token.value)):
            raise InvalidHeaderValueError(
                f"'{token.value}' is not a two-letter language code",
                token.line,
                token.column,
                expected="ISO 639-1 code",
                found=token.describe(),
            )
        return str(token.value).lower()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _pull(self) -> Token:
        return next(self._tokens)

    def _advance(self) -> Token:
        token = self._current
        if token.kind != TokenKind.EOF:
            self._current = self._pull()
        return token

    def _at_end(self) -> bool:
        return self._current.kind == TokenKind.EOF

    def _starts_header(self) -> bool:
        token = self._current
        if token.kind == TokenKind.KEYWORD:
            return token.value in HEADER_KEYWORDS
        return token.kind == TokenKind.IDENTIFIER

    def _skip_blank_lines(self) -> None:
        while self._current.kind == TokenKind.NEWLINE:
            self._advance()

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        if self._current.kind != kind:
            raise self._error(expected)
        return self._advance()

    def _expect_punctuation(self, symbol: str) -> Token:
        if not self._current.is_punctuation(symbol):
            raise self._error(f"'{symbol}'")
        return self._advance()

    def _expect_newline(self) -> None:
        if self._current.kind == TokenKind.EOF:
            return
        self._expect(TokenKind.NEWLINE, "end of line")

    def _error(self, expected: str) -> ParseError:
        found = self._current.describe()
        return ParseError(
            f"expected {expected}, found {found}",
            self._current.line,
            self._current.column,
            expected=expected,
            found=found,
        )


def parse_schedule(source: str) -> Schedule:
    """
    Lex and parse Seri source text.

    Args:
        source: Raw Seri source

    Returns:
        Schedule built from the source

    Raises:
        LexError: If the source contains a malformed token
        ParseError: If the token stream violates the grammar
    """
    return Parser(Lexer(source).tokens()).parse()
