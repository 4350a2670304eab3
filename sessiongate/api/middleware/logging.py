"""
Request Logging Middleware

This module implements request/response logging middleware for the API.

- Logs request method, path, duration and status code
- Redacts cookie and credential headers
- Binds a correlation ID (X-Request-ID or generated) for structlog output
"""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from sessiongate.observability.logging import reset_correlation_id, set_correlation_id


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Headers that should be redacted (case-insensitive matching)
SENSITIVE_HEADER_PATTERNS = [
    "authorization",
    "api-key",
    "apikey",
    "x-api-key",
    "x-auth-token",
    "cookie",
    "set-cookie",
]


def redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """
    Redact sensitive headers from a headers dictionary.

    Session cookies are bearer credentials and must never reach the logs.

    Args:
        headers: Dictionary of HTTP headers

    Returns:
        Dictionary with sensitive values replaced with [REDACTED]
    """
    redacted = {}
    for key, value in headers.items():
        key_lower = key.lower()
        is_sensitive = any(
            pattern in key_lower for pattern in SENSITIVE_HEADER_PATTERNS
        )
        redacted[key] = "[REDACTED]" if is_sensitive else value
    return redacted


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    Features:
    - Logs request method, path, and client IP
    - Logs response status code and duration
    - Redacts sensitive headers from logs
    - Echoes the correlation ID in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        start_time = time.perf_counter()

        method = request.method
        path = request.url.path
        client_host = request.client.host if request.client else "unknown"

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = set_correlation_id(request_id)

        redacted_headers = redact_sensitive_headers(dict(request.headers))
        logger.debug(
            f"Request: {method} {path} from {client_host} "
            f"headers={redacted_headers}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {method} {path} from {client_host} "
                f"error={type(e).__name__}: {e} duration={duration_ms:.2f}ms"
            )
            raise
        finally:
            reset_correlation_id(token)

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            log_level,
            f"{method} {path} {response.status_code} "
            f"from {client_host} duration={duration_ms:.2f}ms",
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
