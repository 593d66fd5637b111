"""
Pass Interface
==============

A pass takes a Schedule and returns a Schedule (the same one or a new
one), or raises a SemanticError naming the offending day and session.
Passes keep no state between calls and never mutate their input.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Tuple

from seri.models.schedule import Day, Schedule, Session


class BasePass(ABC):
    """Abstract base class for schedule passes."""

    name: str = "pass"

    @abstractmethod
    def apply(self, schedule: Schedule) -> Schedule:
        """Validate or transform a schedule."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def iter_sessions(schedule: Schedule) -> Iterator[Tuple[int, Day, int, Session]]:
    """Yield (day index, day, session index, session) in document order."""
    for day_index, day in enumerate(schedule.days):
        for session_index, session in enumerate(day.sessions):
            yield day_index, day, session_index, session
