"""
Health Router

Liveness and readiness endpoints. Readiness reports the bound session
provider and the GC scheduler state; a disarmed scheduler means the
lifespan has not started or is shutting down.
"""

import logging

from fastapi import APIRouter, Depends, Response

from sessiongate import __version__
from sessiongate.api.deps import get_session_manager
from sessiongate.models.responses import HealthResponse, ReadinessResponse
from sessiongate.sessions.manager import SessionManager
from sessiongate.sessions.scheduler import SchedulerState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(
    response: Response,
    manager: SessionManager = Depends(get_session_manager),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Returns 503 if the GC scheduler is not armed.
    """
    gc = manager.gc
    ready = gc.state is SchedulerState.ARMED
    if not ready:
        logger.warning("Readiness check failed: GC scheduler is idle")
        response.status_code = 503

    return ReadinessResponse(
        status="ready" if ready else "not_ready",
        provider=manager.provider_name,
        gc_state=gc.state.value,
        gc_sweeps=gc.sweep_count,
        gc_failures=gc.failure_count,
        last_sweep_at=gc.last_sweep_at.isoformat() if gc.last_sweep_at else None,
    )
