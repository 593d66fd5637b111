"""
Pydantic Models and Schemas
===========================

Diagnostics, compilation results and the request/response models shared
by the HTTP and MCP drivers.
"""

from typing import Any, Dict, Optional, List, Literal
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


# Enums
class OutputFormat(str, Enum):
    """Supported backend output formats."""
    TIKZ = "tikz"
    HTML = "html"


class Stage(str, Enum):
    """Compilation stage that produced a diagnostic."""
    LEX = "lex"
    PARSE = "parse"
    SEMANTIC = "semantic"
    RENDER = "render"


# Diagnostics
class Diagnostic(BaseModel):
    """The single terminal error of a compilation."""
    stage: Stage = Field(..., description="Stage that failed")
    message: str = Field(..., description="Human-readable message")
    line: Optional[int] = Field(None, description="Source line (lex/parse)")
    column: Optional[int] = Field(None, description="Source column (lex/parse)")
    day: Optional[str] = Field(None, description="Offending day (semantic)")
    sessions: List[str] = Field(default_factory=list, description="Offending sessions")


class CompileResult(BaseModel):
    """Outcome of compiling one document."""
    success: bool = Field(..., description="Whether compilation succeeded")
    output: Optional[str] = Field(None, description="Rendered text")
    output_format: OutputFormat = Field(OutputFormat.TIKZ, description="Rendered format")
    diagnostic: Optional[Diagnostic] = Field(None, description="Error if failed")
    day_count: int = Field(0, ge=0, description="Number of days compiled")
    session_count: int = Field(0, ge=0, description="Number of sessions compiled")
    processing_time: Optional[float] = Field(None, description="Compilation time in seconds")


# API Request/Response Models
class ValidationRequest(BaseModel):
    """Request model for schedule validation."""
    source: str = Field(..., description="Seri source text")
    strict: bool = Field(False, description="Reject unscheduled sessions")
    sort_sessions: bool = Field(False, description="Sort sessions by start time before checks")


class CompileRequest(ValidationRequest):
    """Request model for schedule compilation."""
    output_format: OutputFormat = Field(OutputFormat.TIKZ, description="Output format")
    template: Optional[str] = Field(None, description="Template text with {{ CALENDAR }}")
    standalone: bool = Field(False, description="Use the bundled template if none is given")

    @field_validator("template")
    @classmethod
    def validate_template(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank template as no template."""
        if v is not None and not v.strip():
            return None
        return v


class CompileResponse(BaseModel):
    """Response model for compilation."""
    success: bool = Field(..., description="Whether compilation succeeded")
    output: Optional[str] = Field(None, description="Rendered text")
    output_format: OutputFormat = Field(..., description="Rendered format")
    diagnostic: Optional[Diagnostic] = Field(None, description="Error if failed")
    processing_time: float = Field(0.0, description="Total processing time")


class ValidationResponse(BaseModel):
    """Response model for validation."""
    valid: bool = Field(..., description="Whether the schedule is valid")
    diagnostic: Optional[Diagnostic] = Field(None, description="Error if invalid")
    day_count: int = Field(0, ge=0, description="Number of days")
    session_count: int = Field(0, ge=0, description="Number of sessions")


# Health Check Models
class HealthStatus(BaseModel):
    """Health check status."""
    status: Literal["healthy", "unhealthy"] = Field(..., description="Overall status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Check timestamp"
    )
    version: str = Field(..., description="Application version")
    formats: List[OutputFormat] = Field(default_factory=list, description="Output formats")


# Error Models
class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Error timestamp"
    )
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
