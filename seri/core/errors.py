"""
Compiler Errors
===============

Typed failures raised by each compilation stage. Every user-input error
derives from SeriError and can be turned into a Diagnostic for drivers.
PassContractError marks a programming error and is deliberately not a
SeriError.
"""

from typing import Optional, Tuple

from seri.models.schemas import Diagnostic, Stage


class SeriError(Exception):
    """Base class of all compilation failures caused by the input."""

    stage: Stage = Stage.PARSE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_diagnostic(self) -> Diagnostic:
        """Describe the failure for a driver."""
        return Diagnostic(stage=self.stage, message=str(self))


class PositionedError(SeriError):
    """Failure located at a source position."""

    def __init__(self, message: str, line: int, column: int) -> None:
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}: {self.message}"

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            stage=self.stage, message=str(self), line=self.line, column=self.column
        )


class LexError(PositionedError):
    """Raised when the lexer meets a character it cannot tokenize."""

    stage = Stage.LEX

    def __init__(self, message: str, line: int, column: int, character: str) -> None:
        self.character = character
        super().__init__(message, line, column)


class ParseError(PositionedError):
    """Raised when the token stream violates the grammar."""

    stage = Stage.PARSE

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ) -> None:
        self.expected = expected
        self.found = found
        super().__init__(message, line, column)


class DuplicateHeaderError(ParseError):
    """A header was given twice within one session."""


class UnknownHeaderError(ParseError):
    """A header name is not part of the language."""


class MissingTitleError(ParseError):
    """A session block does not start with a title line."""


class InvalidHeaderValueError(ParseError):
    """A header value is well-formed but not allowed."""


class SemanticError(SeriError):
    """Raised by a pass when the schedule is internally inconsistent."""

    stage = Stage.SEMANTIC

    def __init__(
        self,
        message: str,
        day_index: int,
        day_label: Optional[str] = None,
        session: Optional[str] = None,
    ) -> None:
        self.day_index = day_index
        self.day_label = day_label
        self.session = session
        super().__init__(message)

    @property
    def day_name(self) -> str:
        return self.day_label or f"day {self.day_index + 1}"

    @property
    def sessions(self) -> Tuple[str, ...]:
        return (self.session,) if self.session is not None else ()

    def __str__(self) -> str:
        if self.session is not None:
            return f"{self.day_name}, session {self.session!r}: {self.message}"
        return f"{self.day_name}: {self.message}"

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            stage=self.stage,
            message=str(self),
            day=self.day_name,
            sessions=list(self.sessions),
        )


class MissingFieldError(SemanticError):
    """A required session field is absent or empty."""


class UnscheduledSessionError(SemanticError):
    """A session lacks a start time or a duration in strict mode."""


class InvalidValueError(SemanticError):
    """A derived value is out of range."""


class OutOfOrderError(SemanticError):
    """Start times decrease in document order."""


class OverlapError(SemanticError):
    """Two sessions of the same day have intersecting time intervals."""

    def __init__(
        self, day_index: int, day_label: Optional[str], session_a: str, session_b: str
    ) -> None:
        self.session_a = session_a
        self.session_b = session_b
        super().__init__(
            f"sessions {session_a!r} and {session_b!r} overlap", day_index, day_label
        )

    @property
    def sessions(self) -> Tuple[str, ...]:
        return (self.session_a, self.session_b)


class RenderError(SeriError):
    """Raised by a backend renderer."""

    stage = Stage.RENDER

    def __init__(self, message: str, renderer: str) -> None:
        self.renderer = renderer
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.renderer} renderer: {self.message}"


class PassContractError(RuntimeError):
    """A pass broke the pipeline contract; this is a bug, not an input error."""
