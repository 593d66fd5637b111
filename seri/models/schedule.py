"""
Schedule Intermediate Representation
====================================

Immutable models produced by the parser, threaded through the pass
pipeline and consumed read-only by the renderers.

A Schedule owns an ordered tuple of Days, a Day owns an ordered tuple of
Sessions. Document order is kept unless a pass re-sorts explicitly.
"""

from typing import Optional, Tuple
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

MINUTES_PER_DAY = 24 * 60


class SessionKind(str, Enum):
    """Kind of a timetable session."""
    TALK = "talk"
    MEAL = "meal"
    BREAK = "break"
    FUN = "fun"
    TRANSPORT = "transport"


class TimeOfDay(BaseModel):
    """Wall-clock time within a day, minute precision."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23, description="Hour of day")
    minute: int = Field(..., ge=0, le=59, description="Minute of hour")

    @property
    def total_minutes(self) -> int:
        """Minutes elapsed since midnight."""
        return self.hour * 60 + self.minute

    def __lt__(self, other: "TimeOfDay") -> bool:
        return self.total_minutes < other.total_minutes

    def __le__(self, other: "TimeOfDay") -> bool:
        return self.total_minutes <= other.total_minutes

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def format_minutes(total: int) -> str:
    """Format minutes since midnight as HH:MM (24:00 allowed for end of day)."""
    return f"{total // 60:02d}:{total % 60:02d}"


class Speaker(BaseModel):
    """A speaker, identified by name only."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Speaker name")

    def __str__(self) -> str:
        return self.name


def cut_text(text: str, length: int) -> str:
    """Cut text to at most `length` characters, marking the cut with '...'."""
    if len(text) <= length:
        return text
    if length > 3:
        return text[: length - 3] + "..."
    return text[:length] + "..."


class Session(BaseModel):
    """One talk or event of a day."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Session title")
    speakers: Tuple[Speaker, ...] = Field(default=(), description="Declared speakers")
    start: Optional[TimeOfDay] = Field(None, description="Start time, None when unscheduled")
    duration: Optional[int] = Field(None, description="Duration in minutes")
    abstract: Optional[str] = Field(None, description="Raw abstract text")
    kind: SessionKind = Field(SessionKind.TALK, description="Session kind")
    language: Optional[str] = Field(None, description="ISO 639-1 language code")
    line: Optional[int] = Field(None, description="Source line of the title")

    @property
    def is_scheduled(self) -> bool:
        """Whether both start and duration are known."""
        return self.start is not None and self.duration is not None

    @property
    def end_minutes(self) -> Optional[int]:
        """End time in minutes since midnight, when start and duration are known."""
        if self.start is None or self.duration is None:
            return None
        return self.start.total_minutes + self.duration

    @property
    def speakers_string(self) -> str:
        return ", ".join(speaker.name for speaker in self.speakers)

    def short_text(self, length: int = 30) -> str:
        """
        Compact label for small boxes.

        Talks show their speakers (first speaker followed by 'et al.' when
        there are more than two), everything else shows the title cut to
        `length` characters.
        """
        if self.kind == SessionKind.TALK and self.speakers:
            names = [speaker.name for speaker in self.speakers]
            if len(names) == 1:
                return names[0]
            if len(names) == 2:
                return f"{names[0]} and {names[1]}"
            return f"{names[0]} et al."
        return cut_text(self.title, length)


class Day(BaseModel):
    """A group of sessions sharing a date context."""

    model_config = ConfigDict(frozen=True)

    label: Optional[str] = Field(None, description="Date label shown in headers")
    sessions: Tuple[Session, ...] = Field(default=(), description="Sessions in order")
    line: Optional[int] = Field(None, description="Source line of the day header")

    def display_name(self, index: int) -> str:
        """Label for diagnostics, falling back to the 1-based position."""
        return self.label or f"day {index + 1}"


class Schedule(BaseModel):
    """Root of the intermediate representation."""

    model_config = ConfigDict(frozen=True)

    days: Tuple[Day, ...] = Field(default=(), description="Days in document order")

    @property
    def session_count(self) -> int:
        return sum(len(day.sessions) for day in self.days)

    def scheduled_sessions(self) -> Tuple[Session, ...]:
        """All sessions with both a start time and a duration."""
        return tuple(s for day in self.days for s in day.sessions if s.is_scheduled)
