"""
HTML Renderer
=============

Renders a schedule as HTML markup through a Jinja2 template with
autoescaping, so titles, speakers and abstracts are always escaped.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import jinja2
from markupsafe import escape

from seri.core.rendering.base import BaseRenderer
from seri.core.rendering.templating import template_context
from seri.models.schedule import Schedule, format_minutes
from seri.models.schemas import OutputFormat

BODY_TEMPLATE = "schedule.html"


def paragraphs(text: Optional[str]) -> List[str]:
    """Split raw text into paragraphs on blank lines."""
    if not text:
        return []
    blocks: List[List[str]] = [[]]
    for line in text.splitlines():
        if line.strip():
            blocks[-1].append(line.strip())
        elif blocks[-1]:
            blocks.append([])
    return [" ".join(block) for block in blocks if block]


class HTMLRenderer(BaseRenderer):
    """Jinja2-based HTML renderer."""

    output_format = OutputFormat.HTML

    def __init__(self, **options: Any) -> None:
        super().__init__(**options)
        self._setup_jinja2_environment()

    def _setup_jinja2_environment(self) -> None:
        """Setup Jinja2 template environment."""
        template_dir = Path(__file__).parent / "templates"
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self.env.filters["clock"] = format_minutes
        self.env.filters["paragraphs"] = paragraphs

    def render_body(self, schedule: Schedule) -> str:
        if not schedule.days:
            return ""
        template = self.env.get_template(BODY_TEMPLATE)
        return template.render(days=schedule.days)

    def template_context(self, schedule: Schedule) -> Dict[str, Any]:
        return template_context(schedule, escape=lambda text: str(escape(text)))

    def __repr__(self) -> str:
        return "HTMLRenderer()"


def render_html(schedule: Schedule, template: Optional[str] = None, **options: Any) -> str:
    """Render a schedule to HTML with default options."""
    return HTMLRenderer(**options).render(schedule, template)
