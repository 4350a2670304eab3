"""
API Middleware Package

Middleware Components:
- logging: Request/response logging with header redaction and correlation IDs
"""

from sessiongate.api.middleware.logging import (
    REQUEST_ID_HEADER,
    RequestLoggingMiddleware,
    redact_sensitive_headers,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
    "redact_sensitive_headers",
]
