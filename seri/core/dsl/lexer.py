"""
Lexer
=====

Hand-written tokenizer for Seri source text.

Tokens are produced lazily by a generator. Each call to Lexer.tokens()
scans the source again from the beginning; a scan cannot be resumed from
the middle. Lexing is linear in the size of the source.
"""

from typing import Iterator, List

from seri.config.logging import get_logger
from seri.core.dsl.tokens import KEYWORDS, PUNCTUATION, Token, TokenKind
from seri.core.errors import LexError
from seri.models.schedule import TimeOfDay

logger = get_logger(__name__)

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"'}


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """
    Tokenize Seri source text.

    Usage:
        tokens = Lexer(source).tokenize()
        for token in Lexer(source).tokens(): ...
    """

    def __init__(self, source: str) -> None:
        self._source = source

    def tokens(self) -> Iterator[Token]:
        """Yield tokens lazily, ending with exactly one EOF token."""
        return _Scanner(self._source).scan()

    def tokenize(self) -> List[Token]:
        """Scan the entire source and return all tokens including EOF."""
        tokens = list(self.tokens())
        logger.debug("Tokenized source", token_count=len(tokens))
        return tokens


class _Scanner:
    """Single-use scanning state behind Lexer.tokens()."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        # Lines holding nothing but a comment do not produce a NEWLINE
        self._line_has_token = False
        self._line_has_comment = False

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def scan(self) -> Iterator[Token]:
        while not self._at_end():
            ch = self._peek()

            if ch in (" ", "\t", "\r"):
                self._advance()
            elif ch == "#":
                self._skip_comment()
            elif ch == "\n":
                if self._line_has_token or not self._line_has_comment:
                    yield Token(TokenKind.NEWLINE, "\n", self._line, self._col)
                self._advance()
                self._line_has_token = False
                self._line_has_comment = False
            else:
                self._line_has_token = True
                yield self._scan_token()

        if self._line_has_token:
            yield Token(TokenKind.NEWLINE, "\n", self._line, self._col)
        yield Token(TokenKind.EOF, None, self._line, self._col)

    def _scan_token(self) -> Token:
        ch = self._peek()

        if ch == '"':
            return self._scan_string()

        if _is_digit(ch):
            return self._scan_number()

        if ch.isalpha() or ch == "_":
            return self._scan_word()

        if ch in PUNCTUATION:
            token = Token(TokenKind.PUNCTUATION, ch, self._line, self._col)
            self._advance()
            return token

        raise LexError(f"unexpected character {ch!r}", self._line, self._col, ch)

    def _skip_comment(self) -> None:
        """Consume a # comment until end of line."""
        self._line_has_comment = True
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _scan_string(self) -> Token:
        """Scan a double-quoted string literal; strings may span lines."""
        start_line = self._line
        start_col = self._col
        self._advance()  # opening quote

        chars: List[str] = []
        while not self._at_end():
            ch = self._peek()
            if ch == '"':
                self._advance()
                return Token(TokenKind.STRING, "".join(chars), start_line, start_col)
            if ch == "\\":
                escape_line, escape_col = self._line, self._col
                self._advance()
                escaped = self._peek()
                if escaped not in _ESCAPES:
                    raise LexError(
                        f"unknown escape sequence '\\{escaped}'",
                        escape_line,
                        escape_col,
                        escaped,
                    )
                chars.append(_ESCAPES[escaped])
                self._advance()
            else:
                chars.append(ch)
                self._advance()

        raise LexError("unterminated string literal", start_line, start_col, '"')

    def _scan_number(self) -> Token:
        """Scan a time literal (H:MM) or a duration literal (Nm, Nh, NhMm)."""
        start_line = self._line
        start_col = self._col
        digits = self._read_digits()

        if self._peek() == ":":
            self._advance()
            minute_col = self._col
            minutes = self._read_digits()
            if len(minutes) != 2:
                raise LexError(
                    "time literals need two minute digits (HH:MM)",
                    start_line,
                    minute_col,
                    self._peek_char_or_end(),
                )
            if len(digits) > 2:
                raise LexError(
                    "time literals need at most two hour digits (HH:MM)",
                    start_line,
                    start_col,
                    digits[0],
                )
            hour, minute = int(digits), int(minutes)
            if hour > 23 or minute > 59:
                raise LexError(
                    f"time {digits}:{minutes} is out of range", start_line, start_col, digits[0]
                )
            self._expect_delimiter()
            return Token(
                TokenKind.TIME, TimeOfDay(hour=hour, minute=minute), start_line, start_col
            )

        if self._peek() == "h":
            self._advance()
            total = int(digits) * 60
            if _is_digit(self._peek()):
                minute_col = self._col
                minutes = self._read_digits()
                if self._peek() != "m":
                    raise LexError(
                        "expected 'm' after the minutes of a duration",
                        self._line,
                        self._col,
                        self._peek_char_or_end(),
                    )
                if int(minutes) > 59:
                    raise LexError(
                        f"{minutes} minutes must be written as hours",
                        start_line,
                        minute_col,
                        minutes[0],
                    )
                self._advance()
                total += int(minutes)
            self._expect_delimiter()
            return Token(TokenKind.DURATION, total, start_line, start_col)

        if self._peek() == "m":
            self._advance()
            self._expect_delimiter()
            return Token(TokenKind.DURATION, int(digits), start_line, start_col)

        raise LexError(
            "numbers must be a time (HH:MM) or a duration with a unit (m or h)",
            self._line,
            self._col,
            self._peek_char_or_end(),
        )

    def _scan_word(self) -> Token:
        """Scan an identifier or keyword."""
        start_col = self._col
        chars: List[str] = []

        while not self._at_end() and (self._peek().isalnum() or self._peek() in "_-"):
            chars.append(self._advance())

        text = "".join(chars)
        kind = TokenKind.KEYWORD if text in KEYWORDS else TokenKind.IDENTIFIER
        return Token(kind, text, self._line, start_col)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_digits(self) -> str:
        chars: List[str] = []
        while not self._at_end() and _is_digit(self._peek()):
            chars.append(self._advance())
        return "".join(chars)

    def _expect_delimiter(self) -> None:
        """Literals must not run into letters or digits (e.g. '30min')."""
        ch = self._peek()
        if ch.isalnum() or ch in "_-:":
            raise LexError(
                f"unexpected character {ch!r} after literal", self._line, self._col, ch
            )

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self) -> str:
        if self._at_end():
            return "\0"
        return self._source[self._pos]

    def _peek_char_or_end(self) -> str:
        return "" if self._at_end() else self._source[self._pos]

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch
