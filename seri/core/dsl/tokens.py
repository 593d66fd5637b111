"""
Tokens
======

Token kinds and the immutable Token value produced by the lexer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from seri.models.schedule import TimeOfDay


class TokenKind(str, Enum):
    """All token kinds recognized by the Seri lexer."""
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    TIME = "time"  # 09:30
    DURATION = "duration"  # 45m, 2h, 1h30m
    STRING = "string"  # "quoted text"
    PUNCTUATION = "punctuation"  # : ,
    NEWLINE = "newline"
    EOF = "eof"


# Header keywords, in the order they are documented
HEADER_KEYWORDS = ("speakers", "time", "duration", "abstract", "type", "lang")

KEYWORDS = frozenset(("day",) + HEADER_KEYWORDS)

PUNCTUATION = frozenset(":,")


TokenValue = Union[str, int, TimeOfDay, None]


@dataclass(frozen=True)
class Token:
    """A single token with its source position."""

    kind: TokenKind
    value: TokenValue
    line: int
    column: int

    def is_keyword(self, name: str) -> bool:
        return self.kind == TokenKind.KEYWORD and self.value == name

    def is_punctuation(self, symbol: str) -> bool:
        return self.kind == TokenKind.PUNCTUATION and self.value == symbol

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        if self.kind == TokenKind.NEWLINE:
            return "end of line"
        if self.kind == TokenKind.STRING:
            return f"string {self.value!r}"
        if self.kind == TokenKind.DURATION:
            return f"duration {self.value}m"
        return f"{self.kind.value} '{self.value}'"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, L{self.line}:{self.column})"
