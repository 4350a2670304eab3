"""
Session Router

Reference endpoints over the cookie-bound session of the caller. The
session is resolved by the get_session dependency, which issues a cookie
for new clients; payload keys are opaque to the service.
"""

from typing import Union

from fastapi import APIRouter, Depends, Request, Response, status

from sessiongate.api.deps import get_session, get_session_manager
from sessiongate.core.exceptions import ErrorCode
from sessiongate.models.requests import SessionValueRequest
from sessiongate.models.responses import (
    ErrorDetail,
    ErrorResponse,
    SessionResponse,
    SessionValueResponse,
)
from sessiongate.sessions.base import Session
from sessiongate.sessions.manager import SessionManager


router = APIRouter(
    prefix="/v1/session",
    tags=["Session"],
    responses={
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)

_MISSING = object()


@router.get(
    "",
    response_model=SessionResponse,
    summary="Start or resume the caller's session",
)
async def current_session(session: Session = Depends(get_session)) -> SessionResponse:
    """Return the identifier of the caller's session, creating one if needed."""
    return SessionResponse(session_id=session.identifier())


@router.get(
    "/values/{key}",
    response_model=Union[SessionValueResponse, ErrorResponse],
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
    summary="Read a session value",
)
async def read_value(
    key: str,
    response: Response,
    session: Session = Depends(get_session),
) -> Union[SessionValueResponse, ErrorResponse]:
    """
    Read a value from the caller's session.

    A missing key answers 404 through the injected response rather than an
    HTTPException, which would discard the Set-Cookie of a new session.
    """
    value = await session.get(key, _MISSING)
    if value is _MISSING:
        response.status_code = status.HTTP_404_NOT_FOUND
        return ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.KEY_NOT_FOUND.value,
                message=f"Session key not set: {key}",
            )
        )
    return SessionValueResponse(key=key, value=value)


@router.put(
    "/values/{key}",
    response_model=SessionValueResponse,
    summary="Store a session value",
)
async def write_value(
    key: str,
    body: SessionValueRequest,
    session: Session = Depends(get_session),
) -> SessionValueResponse:
    """Store a value in the caller's session."""
    await session.set(key, body.value)
    return SessionValueResponse(key=key, value=body.value)


@router.delete(
    "/values/{key}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a session value",
)
async def delete_value(
    key: str,
    session: Session = Depends(get_session),
) -> None:
    """Remove a key from the caller's session. Absent keys are ignored."""
    await session.delete(key)


@router.post(
    "/destroy",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Destroy the caller's session",
)
async def destroy_session(
    request: Request,
    response: Response,
    manager: SessionManager = Depends(get_session_manager),
) -> None:
    """
    Destroy the caller's session and expire its cookie.

    Requests without a session cookie succeed without effect.
    """
    await manager.destroy(request, response)
