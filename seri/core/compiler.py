"""
Compiler
========

Entry points chaining the stages: lex, parse, run the pass pipeline and
render. Each call is independent; nothing is cached between compilations.
"""

from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, Field

from seri.config.logging import get_logger
from seri.config.settings import get_settings
from seri.core.dsl.parser import parse_schedule
from seri.core.errors import SeriError
from seri.core.passes.pipeline import run_passes
from seri.core.rendering.factory import render_schedule
from seri.core.rendering.templating import load_default_template
from seri.models.schedule import Schedule
from seri.models.schemas import CompileResult, OutputFormat

logger = get_logger(__name__)


class CompileOptions(BaseModel):
    """Options controlling one compilation."""

    output_format: OutputFormat = Field(OutputFormat.TIKZ, description="Backend to render with")
    strict: bool = Field(False, description="Reject sessions lacking a start time or duration")
    sort_sessions: bool = Field(False, description="Sort sessions by start time before checks")
    template: Optional[str] = Field(None, description="Template text with {{ CALENDAR }}")
    short_text_length: int = Field(30, ge=4, description="Label length in TikZ boxes")


def check_schedule(source: str, options: Optional[CompileOptions] = None) -> Schedule:
    """
    Lex, parse and validate a document without rendering it.

    Args:
        source: Seri source text
        options: Compilation options

    Returns:
        The Schedule produced by the last pass

    Raises:
        SeriError: The first lex, parse or semantic error
    """
    options = options or CompileOptions()
    schedule = parse_schedule(source)
    logger.debug("Source parsed", days=len(schedule.days), sessions=schedule.session_count)
    return run_passes(schedule, strict=options.strict, sort_sessions=options.sort_sessions)


def compile_schedule(source: str, options: Optional[CompileOptions] = None) -> str:
    """
    Compile a document to output text.

    Args:
        source: Seri source text
        options: Compilation options

    Returns:
        Rendered output

    Raises:
        SeriError: The first error of any stage
    """
    options = options or CompileOptions()
    schedule = check_schedule(source, options)
    return render_schedule(
        schedule,
        options.output_format,
        template=options.template,
        strict=options.strict,
        short_text_length=options.short_text_length,
    )


def compile_source(source: str, options: Optional[CompileOptions] = None) -> CompileResult:
    """
    Compile a document, reporting user-input errors as a diagnostic.

    Args:
        source: Seri source text
        options: Compilation options

    Returns:
        CompileResult with either the output or the diagnostic
    """
    options = options or CompileOptions()
    start_time = datetime.now(timezone.utc)
    summary: Dict[str, int] = {}

    try:
        schedule = check_schedule(source, options)
        summary = {"day_count": len(schedule.days), "session_count": schedule.session_count}
        output = render_schedule(
            schedule,
            options.output_format,
            template=options.template,
            strict=options.strict,
            short_text_length=options.short_text_length,
        )
    except SeriError as e:
        processing_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.info("Compilation failed", stage=e.stage.value, error=str(e))
        return CompileResult(
            success=False,
            output_format=options.output_format,
            diagnostic=e.to_diagnostic(),
            processing_time=processing_time,
            **summary,
        )

    processing_time = (datetime.now(timezone.utc) - start_time).total_seconds()
    logger.info(
        "Compilation succeeded",
        output_format=options.output_format.value,
        processing_time=processing_time,
        **summary,
    )
    return CompileResult(
        success=True,
        output=output,
        output_format=options.output_format,
        processing_time=processing_time,
        **summary,
    )


def build_options(
    output_format: Optional[str] = None,
    strict: Optional[bool] = None,
    sort_sessions: Optional[bool] = None,
    template: Optional[str] = None,
    standalone: Optional[bool] = None,
) -> CompileOptions:
    """
    Build compile options for a driver, filling unset values from settings.

    Args:
        output_format: Backend name, defaults to settings.default_format
        strict: Strict mode, defaults to settings.strict
        sort_sessions: Sort before checks, defaults to settings.sort_sessions
        template: Template text given by the caller
        standalone: Use the bundled template when no template is given

    Returns:
        CompileOptions ready for compile_source
    """
    settings = get_settings()
    fmt = OutputFormat(output_format or settings.default_format)
    if standalone is None:
        standalone = settings.standalone
    if template is None and standalone:
        template = load_default_template(fmt)
    return CompileOptions(
        output_format=fmt,
        strict=settings.strict if strict is None else strict,
        sort_sessions=settings.sort_sessions if sort_sessions is None else sort_sessions,
        template=template,
        short_text_length=settings.short_text_length,
    )
