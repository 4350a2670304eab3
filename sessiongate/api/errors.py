"""
Exception handlers

Translate sessiongate errors escaping a route into JSON error bodies:

- ProviderError -> 502 (session backend failure)
- IdentifierGenerationError -> 503 (random source unavailable)
- SessionNotFoundError -> 409 (session destroyed while the request ran)
- any other SessionGateException -> 500
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sessiongate.core.exceptions import (
    IdentifierGenerationError,
    ProviderError,
    SessionGateException,
    SessionNotFoundError,
)


logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: SessionGateException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": str(getattr(exc.error_code, "value", exc.error_code)),
                "message": exc.message,
            }
        },
    )


async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    logger.error(
        f"Session provider error: provider={exc.provider} "
        f"path={request.url.path} message={exc.message}"
    )
    return _error_response(502, exc)


async def identifier_error_handler(
    request: Request, exc: IdentifierGenerationError
) -> JSONResponse:
    logger.error(f"Session identifier generation failed: {exc.message}")
    return _error_response(503, exc)


async def session_gone_handler(
    request: Request, exc: SessionNotFoundError
) -> JSONResponse:
    logger.info(f"Session gone during request on {request.url.path}")
    return _error_response(409, exc)


async def sessiongate_error_handler(
    request: Request, exc: SessionGateException
) -> JSONResponse:
    logger.error(f"Unhandled sessiongate error on {request.url.path}: {exc.message}")
    return _error_response(500, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the sessiongate exception handlers to an application."""
    app.add_exception_handler(ProviderError, provider_error_handler)
    app.add_exception_handler(IdentifierGenerationError, identifier_error_handler)
    app.add_exception_handler(SessionNotFoundError, session_gone_handler)
    app.add_exception_handler(SessionGateException, sessiongate_error_handler)
