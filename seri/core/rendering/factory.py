"""
Renderer Factory
================

Selects the backend renderer for an output format.
"""

from typing import Any, Dict, Optional, Type

from seri.core.rendering.base import BaseRenderer
from seri.core.rendering.html_renderer import HTMLRenderer
from seri.core.rendering.tikz_renderer import TikZRenderer
from seri.models.schedule import Schedule
from seri.models.schemas import OutputFormat


class RendererFactory:
    """Factory for creating renderers."""

    _renderers: Dict[OutputFormat, Type[BaseRenderer]] = {
        OutputFormat.TIKZ: TikZRenderer,
        OutputFormat.HTML: HTMLRenderer,
    }

    @classmethod
    def create_renderer(cls, output_format: OutputFormat, **options: Any) -> BaseRenderer:
        """
        Create renderer instance.

        Args:
            output_format: Target output format
            **options: Renderer-specific options (strict, short_text_length)

        Returns:
            Renderer instance

        Raises:
            ValueError: If the format is not supported
        """
        try:
            renderer_class = cls._renderers[OutputFormat(output_format)]
        except (KeyError, ValueError):
            raise ValueError(f"Unsupported output format: {output_format}")
        return renderer_class(**options)

    @classmethod
    def formats(cls) -> list:
        return [fmt.value for fmt in cls._renderers]


def render_schedule(
    schedule: Schedule,
    output_format: OutputFormat,
    template: Optional[str] = None,
    **options: Any,
) -> str:
    """
    Render a schedule in the requested format.

    Args:
        schedule: Validated schedule
        output_format: Target output format
        template: Optional template text
        **options: Renderer options

    Returns:
        Rendered output text
    """
    renderer = RendererFactory.create_renderer(output_format, **options)
    return renderer.render(schedule, template)
