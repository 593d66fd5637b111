"""
Compile Routes
==============

FastAPI routes compiling and validating Seri documents. A document that
does not compile is a successful request: the response carries
success=false and the diagnostic.
"""

from fastapi import APIRouter, HTTPException

from seri.config.logging import get_logger
from seri.config.settings import get_settings
from seri.core.compiler import build_options, compile_source, check_schedule
from seri.core.errors import SeriError
from seri.models.schemas import (
    CompileRequest,
    CompileResponse,
    ValidationRequest,
    ValidationResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Compilation"])


def ensure_source_size(source: str) -> None:
    """
    Reject sources larger than the configured limit.

    Raises:
        HTTPException: 413 if the source is too large
    """
    limit = get_settings().max_source_bytes
    size = len(source.encode("utf-8"))
    if size > limit:
        raise HTTPException(
            status_code=413, detail=f"Source is {size} bytes, the limit is {limit} bytes"
        )


@router.post("/compile", response_model=CompileResponse)
async def compile_document(request: CompileRequest) -> CompileResponse:
    """Compile a document to TikZ or HTML."""
    ensure_source_size(request.source)

    options = build_options(
        output_format=request.output_format.value,
        strict=request.strict,
        sort_sessions=request.sort_sessions,
        template=request.template,
        standalone=request.standalone,
    )
    result = compile_source(request.source, options)

    logger.info(
        "Compile request handled",
        success=result.success,
        output_format=result.output_format.value,
        sessions=result.session_count,
    )

    return CompileResponse(
        success=result.success,
        output=result.output,
        output_format=result.output_format,
        diagnostic=result.diagnostic,
        processing_time=result.processing_time or 0.0,
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_document(request: ValidationRequest) -> ValidationResponse:
    """Validate a document without rendering it."""
    ensure_source_size(request.source)

    options = build_options(
        strict=request.strict, sort_sessions=request.sort_sessions, standalone=False
    )
    try:
        schedule = check_schedule(request.source, options)
    except SeriError as e:
        logger.info("Validation failed", stage=e.stage.value, error=str(e))
        return ValidationResponse(valid=False, diagnostic=e.to_diagnostic())

    return ValidationResponse(
        valid=True, day_count=len(schedule.days), session_count=schedule.session_count
    )
