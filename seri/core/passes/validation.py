"""
Validation Passes
=================

Passes that check a Schedule without changing it. Each returns its input
unchanged on success and raises the first inconsistency it finds.
"""

from typing import List, Optional

from seri.core.errors import (
    InvalidValueError,
    MissingFieldError,
    OutOfOrderError,
    OverlapError,
    UnscheduledSessionError,
)
from seri.core.passes.base import BasePass, iter_sessions
from seri.models.schedule import MINUTES_PER_DAY, Schedule, Session, TimeOfDay, format_minutes


class HeaderCompletenessPass(BasePass):
    """
    Check that every session carries the fields the current mode requires.

    An empty title is always fatal. A missing start time or duration is
    accepted (the session renders as unscheduled) unless strict mode is on.
    """

    name = "header-completeness"

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def apply(self, schedule: Schedule) -> Schedule:
        for day_index, day, session_index, session in iter_sessions(schedule):
            if not session.title.strip():
                raise MissingFieldError(
                    f"session {session_index + 1} has an empty title",
                    day_index,
                    day.label,
                )
            if not self.strict:
                continue
            if session.start is None:
                raise UnscheduledSessionError(
                    "missing start time ('time:' header)", day_index, day.label, session.title
                )
            if session.duration is None:
                raise UnscheduledSessionError(
                    "missing duration ('duration:' header)", day_index, day.label, session.title
                )
        return schedule

    def __repr__(self) -> str:
        return f"HeaderCompletenessPass(strict={self.strict})"


class TimeBoundsPass(BasePass):
    """Check that durations are positive and sessions end by midnight."""

    name = "time-bounds"

    def apply(self, schedule: Schedule) -> Schedule:
        for day_index, day, _, session in iter_sessions(schedule):
            if session.duration is not None and session.duration <= 0:
                raise InvalidValueError(
                    "duration must be positive", day_index, day.label, session.title
                )
            end = session.end_minutes
            if end is not None and end > MINUTES_PER_DAY:
                raise InvalidValueError(
                    f"ends after midnight ({format_minutes(end % MINUTES_PER_DAY)} next day)",
                    day_index,
                    day.label,
                    session.title,
                )
        return schedule


class ChronologyPass(BasePass):
    """Check that start times never decrease in document order within a day."""

    name = "chronology"

    def apply(self, schedule: Schedule) -> Schedule:
        for day_index, day in enumerate(schedule.days):
            previous: Optional[TimeOfDay] = None
            for session in day.sessions:
                if session.start is None:
                    continue
                if previous is not None and session.start < previous:
                    raise OutOfOrderError(
                        f"starts at {session.start}, before the previous session at {previous}",
                        day_index,
                        day.label,
                        session.title,
                    )
                previous = session.start
        return schedule


class OverlapValidationPass(BasePass):
    """
    Check that fully timed sessions of a day do not intersect.

    Intervals are half-open, so a session may start exactly when the
    previous one ends. Every pair is compared; the first colliding pair in
    document order is reported.
    """

    name = "overlap-validation"

    def apply(self, schedule: Schedule) -> Schedule:
        for day_index, day in enumerate(schedule.days):
            timed: List[Session] = [s for s in day.sessions if s.is_scheduled]
            for i, first in enumerate(timed):
                for second in timed[i + 1:]:
                    if _intersects(first, second):
                        raise OverlapError(day_index, day.label, first.title, second.title)
        return schedule


def _intersects(first: Session, second: Session) -> bool:
    # is_scheduled guarantees start and duration
    first_start, first_end = first.start.total_minutes, first.end_minutes  # type: ignore[union-attr]
    second_start, second_end = second.start.total_minutes, second.end_minutes  # type: ignore[union-attr]
    return first_start < second_end and second_start < first_end  # type: ignore[operator]
