"""
Ordering Pass
=============

Re-sorts the sessions of each day by start time.
"""

from typing import Tuple

from seri.core.passes.base import BasePass
from seri.models.schedule import Schedule, Session


def _start_key(session: Session) -> Tuple[int, int]:
    # Unscheduled sessions go after the scheduled ones
    if session.start is None:
        return (1, 0)
    return (0, session.start.total_minutes)


class OrderingPass(BasePass):
    """
    Sort sessions within each day by start time.

    The sort is stable: sessions sharing a start time, and sessions without
    one, keep their document order.
    """

    name = "ordering"

    def apply(self, schedule: Schedule) -> Schedule:
        days = tuple(
            day.model_copy(update={"sessions": tuple(sorted(day.sessions, key=_start_key))})
            for day in schedule.days
        )
        return schedule.model_copy(update={"days": days})
