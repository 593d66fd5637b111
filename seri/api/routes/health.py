"""
Health Routes
=============

FastAPI routes for health and capability endpoints.
"""

from typing import Any, Dict

from fastapi import APIRouter

from seri.config.settings import get_settings
from seri.core.rendering.factory import RendererFactory
from seri.models.schemas import HealthStatus, OutputFormat

router = APIRouter(prefix="/api/v1", tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Basic health check endpoint."""
    return HealthStatus(
        status="healthy",
        version=get_settings().app_version,
        formats=[OutputFormat(fmt) for fmt in RendererFactory.formats()],
    )


@router.get("/formats")
async def list_formats() -> Dict[str, Any]:
    """List the supported output formats and the default one."""
    return {"formats": RendererFactory.formats(), "default": get_settings().default_format}
