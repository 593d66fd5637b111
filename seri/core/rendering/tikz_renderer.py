"""
TikZ Renderer
=============

Draws a schedule as a TikZ timetable: one column per day, one row per
hour, one node per session placed at its start time and sized by its
duration. The y axis points down and is measured in hours.
"""

from typing import Any, Dict, List, Optional, Tuple

from seri.core.errors import RenderError
from seri.core.rendering.base import BaseRenderer
from seri.core.rendering.templating import template_context
from seri.models.schedule import Day, Schedule, Session, SessionKind
from seri.models.schemas import OutputFormat

DAY_WIDTH_CM = 4.0
HOUR_HEIGHT_CM = 1.5
PLACEHOLDER_HOURS = 0.5
DEFAULT_FIRST_HOUR = 9

_LATEX_SPECIALS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_KIND_FILLS = {
    SessionKind.TALK: "blue!15",
    SessionKind.MEAL: "orange!20",
    SessionKind.BREAK: "gray!15",
    SessionKind.FUN: "green!15",
    SessionKind.TRANSPORT: "yellow!25",
}


def escape_latex(text: str) -> str:
    """Escape LaTeX special characters and flatten line breaks."""
    flat = " ".join(text.split())
    return "".join(_LATEX_SPECIALS.get(char, char) for char in flat)


def _num(value: float) -> str:
    return f"{value:.2f}"


def _style_block() -> List[str]:
    lines = [
        r"\tikzset{",
        r"  seri session/.style={draw, rounded corners=1pt, anchor=north west,"
        r" align=center, inner sep=2pt, font=\small, text width=3.5cm},",
    ]
    for kind, fill in _KIND_FILLS.items():
        lines.append(f"  seri {kind.value}/.style={{seri session, fill={fill}}},")
    lines.append(r"  seri unscheduled/.style={seri session, dashed},")
    lines.append(r"  seri grid/.style={gray!60, very thin},")
    lines.append("}")
    return lines


class TikZRenderer(BaseRenderer):
    """Render schedules as a LaTeX tikzpicture."""

    output_format = OutputFormat.TIKZ

    def render_body(self, schedule: Schedule) -> str:
        if not schedule.days:
            return ""

        if self.strict:
            self._reject_unscheduled(schedule)

        day_count = len(schedule.days)
        first_hour, last_hour = self._hour_range(schedule)
        top = first_hour - 1
        strip_top = last_hour + PLACEHOLDER_HOURS
        strip_rows = max(
            sum(1 for s in day.sessions if not s.is_scheduled) for day in schedule.days
        )
        bottom = strip_top + strip_rows * PLACEHOLDER_HOURS if strip_rows else last_hour

        lines = _style_block()
        lines.append(
            f"\\begin{{tikzpicture}}[x={DAY_WIDTH_CM}cm, y=-{HOUR_HEIGHT_CM}cm]"
        )

        if schedule.scheduled_sessions():
            lines.extend(
                [
                    "  % Hours",
                    f"  \\foreach \\time in {{{first_hour},...,{last_hour}}}",
                    "    \\node[anchor=east] at (1,\\time) {\\time:00};",
                    f"  \\foreach \\time in {{{first_hour},...,{last_hour}}}",
                    f"    \\draw[seri grid] (1,\\time) -- ({day_count + 1},\\time);",
                ]
            )

        lines.extend(
            [
                "  % Day dividers",
                f"  \\foreach \\day in {{1,...,{day_count + 1}}}",
                f"    \\draw[seri grid] (\\day,{top}) -- (\\day,{_num(bottom)});",
            ]
        )

        if strip_rows:
            lines.append(
                f"  \\node[anchor=east, font=\\itshape] at (1,{_num(strip_top)}) {{unscheduled}};"
            )

        for index, day in enumerate(schedule.days):
            lines.extend(self._render_day(index, day, top, strip_top))

        lines.append(r"\end{tikzpicture}")
        return "\n".join(lines) + "\n"

    def _hour_range(self, schedule: Schedule) -> Tuple[int, int]:
        """First and last hour line covering every scheduled session."""
        timed = schedule.scheduled_sessions()
        if not timed:
            return DEFAULT_FIRST_HOUR, DEFAULT_FIRST_HOUR
        first = min(s.start.hour for s in timed)  # type: ignore[union-attr]
        latest_end = max(s.end_minutes for s in timed)  # type: ignore[type-var]
        last = -(-latest_end // 60)
        return first, max(last, first + 1)

    def _render_day(self, index: int, day: Day, top: int, strip_top: float) -> List[str]:
        column = index + 1
        lines = [f"  % Day {column}" + (f": {escape_latex(day.label)}" if day.label else "")]
        lines.append(r"  \begin{scope}")
        if day.label:
            lines.append(
                f"    \\node[anchor=south, font=\\bfseries] at ({_num(column + 0.5)},{_num(top + 0.5)}) "
                f"{{{escape_latex(day.label)}}};"
            )

        row = 0
        for session in day.sessions:
            if session.is_scheduled:
                y = session.start.total_minutes / 60  # type: ignore[union-attr]
                lines.append(self._node(session, column, y, session.duration / 60))  # type: ignore[operator]
            else:
                y = strip_top + row * PLACEHOLDER_HOURS
                lines.append(self._node(session, column, y, PLACEHOLDER_HOURS, unscheduled=True))
                row += 1

        lines.append(r"  \end{scope}")
        return lines

    def _node(
        self,
        session: Session,
        column: int,
        y: float,
        hours: float,
        unscheduled: bool = False,
    ) -> str:
        style = f"seri {session.kind.value}"
        if unscheduled:
            style += ", seri unscheduled"
        height = _num(hours * HOUR_HEIGHT_CM)
        label = escape_latex(session.short_text(self.short_text_length))
        return (
            f"    \\node[{style}, minimum height={height}cm] "
            f"at ({_num(column + 0.05)},{_num(y)}) {{{label}}};"
        )

    def _reject_unscheduled(self, schedule: Schedule) -> None:
        for index, day in enumerate(schedule.days):
            for session in day.sessions:
                if not session.is_scheduled:
                    raise RenderError(
                        f"{day.display_name(index)}, session {session.title!r} "
                        "has no start time or duration",
                        self.output_format.value,
                    )

    def template_context(self, schedule: Schedule) -> Dict[str, Any]:
        return template_context(schedule, escape=escape_latex, separator=" -- ")

    def __repr__(self) -> str:
        return f"TikZRenderer(strict={self.strict})"


def render_tikz(schedule: Schedule, template: Optional[str] = None, **options: Any) -> str:
    """Render a schedule to TikZ with default options."""
    return TikZRenderer(**options).render(schedule, template)
