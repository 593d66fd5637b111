"""
Pass Pipeline
=============

Sequential, short-circuiting composition of passes. Pass i+1 receives
exactly the Schedule returned by pass i; the first SemanticError stops the
chain and nothing is forwarded to a renderer.
"""

from typing import Any, List, Sequence, Tuple

from seri.config.logging import get_logger
from seri.core.errors import PassContractError
from seri.core.passes.base import BasePass
from seri.core.passes.ordering import OrderingPass
from seri.core.passes.validation import (
    ChronologyPass,
    HeaderCompletenessPass,
    OverlapValidationPass,
    TimeBoundsPass,
)
from seri.models.schedule import Schedule

logger = get_logger(__name__)


class PassPipeline:
    """An ordered, fixed list of passes applied left to right."""

    def __init__(self, passes: Sequence[BasePass]) -> None:
        self.logger: Any = logger.bind(component="pipeline")  # structlog.BoundLoggerBase
        self._passes: Tuple[BasePass, ...] = tuple(passes)

    @property
    def passes(self) -> Tuple[BasePass, ...]:
        return self._passes

    def run(self, schedule: Schedule) -> Schedule:
        """
        Apply every pass in order.

        Args:
            schedule: Schedule produced by the parser or a previous run

        Returns:
            The Schedule returned by the last pass

        Raises:
            SemanticError: From the first pass that rejects the schedule
            PassContractError: If a pass returns something other than a Schedule
        """
        for compiler_pass in self._passes:
            result = compiler_pass.apply(schedule)
            if not isinstance(result, Schedule):
                raise PassContractError(
                    f"pass {compiler_pass.name!r} returned {type(result).__name__}, "
                    "expected Schedule"
                )
            self.logger.debug("Pass applied", compiler_pass=compiler_pass.name)
            schedule = result
        return schedule

    def __repr__(self) -> str:
        return f"PassPipeline({list(self._passes)!r})"


def build_pipeline(strict: bool = False, sort_sessions: bool = False) -> PassPipeline:
    """
    Build the fixed pass order.

    Args:
        strict: Reject sessions lacking a start time or duration
        sort_sessions: Re-sort sessions by start time before the ordering checks

    Returns:
        PassPipeline ready to run
    """
    passes: List[BasePass] = [HeaderCompletenessPass(strict=strict), TimeBoundsPass()]
    if sort_sessions:
        passes.append(OrderingPass())
    passes.extend([ChronologyPass(), OverlapValidationPass()])
    return PassPipeline(passes)


def run_passes(schedule: Schedule, strict: bool = False, sort_sessions: bool = False) -> Schedule:
    """Run the fixed pass order over a schedule."""
    return build_pipeline(strict=strict, sort_sessions=sort_sessions).run(schedule)
