"""
Renderer Interface
==================

Renderers read a validated Schedule and produce output text. They never
mutate the Schedule and keep no state between calls, so the same input
always yields the same output.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from seri.config.logging import get_logger
from seri.core.rendering.templating import apply_template, template_context
from seri.models.schedule import Schedule
from seri.models.schemas import OutputFormat

logger = get_logger(__name__)


class BaseRenderer(ABC):
    """Abstract base class for schedule renderers."""

    output_format: OutputFormat

    def __init__(self, strict: bool = False, short_text_length: int = 30) -> None:
        self.strict = strict
        self.short_text_length = short_text_length
        self.logger: Any = logger.bind(renderer=self.output_format.value)  # structlog.BoundLoggerBase

    @abstractmethod
    def render_body(self, schedule: Schedule) -> str:
        """Render the schedule without any surrounding template."""
        pass

    def render(self, schedule: Schedule, template: Optional[str] = None) -> str:
        """
        Render a schedule, optionally wrapped in a template.

        Args:
            schedule: Validated schedule
            template: Template text with a {{ CALENDAR }} insertion point

        Returns:
            Output text; the bare body when no template is given

        Raises:
            RenderError: If the schedule cannot be drawn or the template is invalid
        """
        body = self.render_body(schedule)
        self.logger.debug(
            "Schedule rendered", days=len(schedule.days), templated=template is not None
        )
        if template is None:
            return body
        return apply_template(
            template, body, self.output_format, self.template_context(schedule)
        )

    def template_context(self, schedule: Schedule) -> Dict[str, Any]:
        """Variables offered to templates next to the insertion point."""
        return template_context(schedule)
