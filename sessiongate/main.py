"""
sessiongate - Main Application Entry Point

FastAPI application exposing cookie-bound sessions. The lifespan builds the
provider registry, constructs the SessionManager and arms GC; shutdown
stops GC before closing the Redis client.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

import redis.asyncio as redis
from fastapi import FastAPI

from sessiongate import __version__
from sessiongate.api.errors import register_exception_handlers
from sessiongate.api.middleware.logging import RequestLoggingMiddleware
from sessiongate.api.routes.health import router as health_router
from sessiongate.api.routes.sessions import router as sessions_router
from sessiongate.core.config import Settings, get_settings
from sessiongate.observability.logging import configure_logging, get_logger
from sessiongate.sessions.manager import SessionManager
from sessiongate.sessions.registry import ProviderRegistry, build_registry


APP_NAME = "sessiongate"
APP_DESCRIPTION = "Cookie-bound HTTP session lifecycle service"

logger = get_logger(__name__)


def create_redis_client(settings: Settings) -> Optional[redis.Redis]:
    """Create the Redis client when the redis provider is selected."""
    if settings.provider != "redis":
        return None
    return redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ProviderRegistry] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings override; defaults to get_settings().
        registry: Pre-populated registry; defaults to build_registry().
            Supplying one lets tests bind custom providers.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        configure_logging(level=settings.log_level, force=True)

        redis_client = None
        active_registry = registry
        if active_registry is None:
            redis_client = create_redis_client(settings)
            active_registry = build_registry(settings, redis_client=redis_client)

        # Configuration errors surface here and abort startup
        manager = SessionManager.from_settings(settings, active_registry)
        manager.start_gc()

        app.state.settings = settings
        app.state.session_manager = manager
        logger.info(
            "startup_complete",
            service=settings.service_name,
            version=__version__,
            environment=settings.environment,
            provider=settings.provider,
        )

        yield

        await manager.shutdown()
        if redis_client is not None:
            await redis_client.aclose()
        logger.info("shutdown_complete", service=settings.service_name)

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=__version__,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(sessions_router)

    @app.get("/", tags=["Info"])
    async def root() -> dict[str, Any]:
        """Root endpoint returning basic service information."""
        return {
            "service": APP_NAME,
            "version": __version__,
            "docs": "/docs" if settings.environment != "production" else "disabled",
        }

    return app


app = create_app()
