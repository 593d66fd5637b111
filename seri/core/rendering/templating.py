"""
Templating
==========

Wraps a renderer's body in an optional user template.

A template is opaque text. Only the placeholders `{{ CALENDAR }}`,
`{{ FIRST_DAY }}`, `{{ LAST_DAY }}`, `{{ DAY_RANGE }}` and `{{ DAY_COUNT }}`
are replaced; everything else, including other `{{ ... }}` sequences and
LaTeX or HTML syntax, is copied through unchanged and never evaluated.
"""

import re
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from seri.core.errors import RenderError
from seri.models.schedule import Schedule
from seri.models.schemas import OutputFormat

INSERTION_POINT = "CALENDAR"

TEMPLATE_KEYS = (INSERTION_POINT, "FIRST_DAY", "LAST_DAY", "DAY_RANGE", "DAY_COUNT")

TEMPLATE_DIR = Path(__file__).parent / "templates"

_DEFAULT_TEMPLATES = {
    OutputFormat.TIKZ: "template_tikz.tex",
    OutputFormat.HTML: "template.html",
}

_PLACEHOLDER = re.compile(r"\{\{\s*(" + "|".join(TEMPLATE_KEYS) + r")\s*\}\}")


def template_context(
    schedule: Schedule, escape: Callable[[str], str] = str, separator: str = " to "
) -> Dict[str, Any]:
    """
    Values available to every template besides the insertion point.

    Day labels are passed through escape; DAY_RANGE joins the first and
    last labelled days with separator, or holds one label when they match.
    """
    labels = [escape(day.label) for day in schedule.days if day.label]
    first = labels[0] if labels else ""
    last = labels[-1] if labels else ""
    return {
        "FIRST_DAY": first,
        "LAST_DAY": last,
        "DAY_RANGE": first if first == last else f"{first}{separator}{last}",
        "DAY_COUNT": len(schedule.days),
    }


def apply_template(
    template: str,
    body: str,
    output_format: OutputFormat,
    context: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Insert a rendered body into a template.

    Placeholders are replaced in a single scan, so text coming from the
    body or the context is never searched for placeholders again.

    Args:
        template: Template text containing {{ CALENDAR }}
        body: Renderer output, already escaped for the target format
        output_format: Format of the body
        context: Other placeholder values, see template_context

    Returns:
        The template with its placeholders replaced

    Raises:
        RenderError: If the template lacks the insertion point
    """
    values = {key: str(value) for key, value in (context or {}).items()}
    values[INSERTION_POINT] = body

    if not any(m.group(1) == INSERTION_POINT for m in _PLACEHOLDER.finditer(template)):
        raise RenderError(
            f"template has no {{{{ {INSERTION_POINT} }}}} insertion point", output_format.value
        )

    # Keys missing from the context stay as written.
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def load_default_template(output_format: OutputFormat) -> str:
    """Read the bundled standalone template of a format."""
    return (TEMPLATE_DIR / _DEFAULT_TEMPLATES[output_format]).read_text(encoding="utf-8")
