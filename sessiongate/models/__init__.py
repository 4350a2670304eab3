"""Models Package - request/response models for the HTTP API."""

from sessiongate.models.requests import SessionValueRequest
from sessiongate.models.responses import (
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    ReadinessResponse,
    SessionResponse,
    SessionValueResponse,
)

__all__ = [
    "SessionValueRequest",
    "SessionResponse",
    "SessionValueResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "ReadinessResponse",
]
