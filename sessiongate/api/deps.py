"""
API Dependencies

This module provides FastAPI dependency injection functions for the API layer.

All dependencies are factory functions that can be overridden in tests
using FastAPI's dependency_overrides mechanism.
"""

from fastapi import Depends, Request, Response

from sessiongate.sessions.base import Session
from sessiongate.sessions.manager import SessionManager


def get_session_manager(request: Request) -> SessionManager:
    """
    Get the SessionManager built during application startup.

    Raises:
        RuntimeError: If the application lifespan has not run.
    """
    manager = getattr(request.app.state, "session_manager", None)
    if manager is None:
        raise RuntimeError("SessionManager not initialized; lifespan did not run")
    return manager


async def get_session(
    request: Request,
    response: Response,
    manager: SessionManager = Depends(get_session_manager),
) -> Session:
    """
    Resolve the session for the current request.

    Any Set-Cookie written by the manager is merged into the endpoint's
    response by FastAPI.
    """
    return await manager.start(request, response)
