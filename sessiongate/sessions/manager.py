"""Session Manager - cookie-bound session lifecycle.

Resolves the session for an inbound request from its cookie, creates one
when needed, clears it on destroy, and owns the GC scheduler.
"""

import asyncio
from typing import Callable, Optional

from starlette.requests import Request
from starlette.responses import Response

from sessiongate.core.config import Settings
from sessiongate.core.exceptions import ConfigurationError, SessionNotFoundError
from sessiongate.observability.logging import get_logger, redact_session_id
from sessiongate.sessions.base import Session, SessionProvider
from sessiongate.sessions.identifier import generate_session_id
from sessiongate.sessions.registry import ProviderRegistry
from sessiongate.sessions.scheduler import GCScheduler

logger = get_logger(__name__)


class SessionManager:
    """Lifecycle controller binding cookies to provider sessions.

    Configuration is fixed at construction. A single asyncio.Lock
    serializes the create-or-resume and destroy decisions; it does not
    guard provider state or GC.

    Args:
        registry: Registry populated at startup.
        provider_name: Name of the provider to bind.
        cookie_name: Name of the session cookie.
        max_lifetime: Session lifetime in seconds (cookie Max-Age, GC threshold).
        gc_interval: Seconds between sweeps. Defaults to max_lifetime.
        cookie_secure: Set the Secure cookie attribute.
        cookie_domain: Domain cookie attribute.
        id_generator: Identifier factory; injectable for tests.

    Raises:
        ProviderNotFoundError: If provider_name is not registered.
        ConfigurationError: If cookie_name is empty or max_lifetime <= 0.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        provider_name: str,
        cookie_name: str = "sid",
        max_lifetime: int = 3600,
        gc_interval: Optional[float] = None,
        cookie_secure: bool = False,
        cookie_domain: Optional[str] = None,
        id_generator: Callable[[], str] = generate_session_id,
    ) -> None:
        if not cookie_name:
            raise ConfigurationError("cookie_name must be non-empty")
        if max_lifetime <= 0:
            raise ConfigurationError(
                f"max_lifetime must be positive, got {max_lifetime}"
            )

        self._provider: SessionProvider = registry.get(provider_name)
        self._provider_name = provider_name
        self._cookie_name = cookie_name
        self._max_lifetime = max_lifetime
        self._cookie_secure = cookie_secure
        self._cookie_domain = cookie_domain
        self._id_generator = id_generator
        self._lock = asyncio.Lock()
        self._gc = GCScheduler(self._provider, max_lifetime, interval=gc_interval)

    @classmethod
    def from_settings(
        cls, settings: Settings, registry: ProviderRegistry
    ) -> "SessionManager":
        """Build a manager from application settings."""
        return cls(
            registry,
            settings.provider,
            cookie_name=settings.cookie_name,
            max_lifetime=settings.max_lifetime_seconds,
            gc_interval=settings.effective_gc_interval,
            cookie_secure=settings.cookie_secure,
            cookie_domain=settings.cookie_domain,
        )

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    @property
    def max_lifetime(self) -> int:
        return self._max_lifetime

    @property
    def provider(self) -> SessionProvider:
        return self._provider

    @property
    def provider_name(self) -> str:
        return self._provider_name

    @property
    def gc(self) -> GCScheduler:
        return self._gc

    async def start(self, request: Request, response: Response) -> Session:
        """
        Resume the request's session, or create one and set the cookie.

        An unknown or expired cookie value falls back to a fresh session.

        Args:
            request: Inbound request; only its cookies are inspected.
            response: Response that receives the Set-Cookie header.

        Returns:
            The resolved Session. When a cookie is written, its value is
            session.identifier().

        Raises:
            IdentifierGenerationError: If the random source fails.
            ProviderError: If the backend fails on init or read.
        """
        async with self._lock:
            session_id = request.cookies.get(self._cookie_name)
            if session_id:
                try:
                    session = await self._provider.read(session_id)
                except SessionNotFoundError:
                    logger.debug(
                        "session_expired_fallback",
                        session=redact_session_id(session_id),
                    )
                else:
                    logger.debug(
                        "session_resumed", session=redact_session_id(session_id)
                    )
                    return session

            return await self._create(response)

    async def destroy(self, request: Request, response: Response) -> None:
        """
        Discard the request's session and expire its cookie.

        A request without a session cookie is a no-op, as is a cookie naming
        a session the provider no longer has.

        Raises:
            ProviderError: If the backend fails.
        """
        session_id = request.cookies.get(self._cookie_name)
        if not session_id:
            return

        async with self._lock:
            await self._provider.destroy(session_id)
            response.set_cookie(
                key=self._cookie_name,
                value="",
                max_age=-1,
                path="/",
                domain=self._cookie_domain,
                secure=self._cookie_secure,
                httponly=True,
                samesite="lax",
            )
        logger.info("session_destroyed", session=redact_session_id(session_id))

    def start_gc(self) -> None:
        """Arm the GC scheduler. Requires a running event loop."""
        self._gc.start()

    async def shutdown(self) -> None:
        """Stop the GC scheduler."""
        await self._gc.stop()

    async def _create(self, response: Response) -> Session:
        session_id = self._id_generator()
        session = await self._provider.init(session_id)
        response.set_cookie(
            key=self._cookie_name,
            value=session_id,
            max_age=self._max_lifetime,
            path="/",
            domain=self._cookie_domain,
            secure=self._cookie_secure,
            httponly=True,
            samesite="lax",
        )
        logger.info(
            "session_created",
            session=redact_session_id(session_id),
            provider=self._provider_name,
        )
        return session
