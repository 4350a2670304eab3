"""
Response models for the session and health APIs.

Pattern: Pydantic validation
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class SessionResponse(BaseModel):
    """Identifier of the session bound to the request."""

    session_id: str = Field(..., description="Session identifier (also the cookie value)")


class SessionValueResponse(BaseModel):
    """A single session value."""

    key: str
    value: Any = None


class ErrorDetail(BaseModel):
    """Machine-readable error body."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned by the exception handlers."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    provider: str
    gc_state: str
    gc_sweeps: int = 0
    gc_failures: int = 0
    last_sweep_at: Optional[str] = None
