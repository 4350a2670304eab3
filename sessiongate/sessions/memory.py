"""In-memory session provider.

Suitable for single-process deployments, development and tests. Sessions
expire after max_lifetime seconds without access.
"""

import asyncio
import time
from typing import Any, Callable, Optional

from sessiongate.core.exceptions import ProviderError, SessionNotFoundError
from sessiongate.observability.logging import get_logger, redact_session_id
from sessiongate.sessions.base import Session, SessionProvider

logger = get_logger(__name__)


class MemorySession(Session):
    """Session whose data lives in a plain dict inside the provider."""

    def __init__(self, session_id: str, clock: Callable[[], float]) -> None:
        self._id = session_id
        self._clock = clock
        self._data: dict[str, Any] = {}
        self.last_accessed: float = clock()

    def identifier(self) -> str:
        return self._id

    def touch(self) -> None:
        self.last_accessed = self._clock()

    async def get(self, key: str, default: Optional[Any] = None) -> Any:
        self.touch()
        return self._data.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.touch()

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        self.touch()

    def is_expired(self, max_lifetime: float, now: float) -> bool:
        return self.last_accessed + max_lifetime < now


class MemorySessionProvider(SessionProvider):
    """
    Dict-backed session provider.

    Args:
        max_lifetime: When set, read() treats sessions idle longer than this
            as already gone, even before the next sweep.
        clock: Time source in seconds; injectable for tests.
    """

    name = "memory"

    def __init__(
        self,
        max_lifetime: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._sessions: dict[str, MemorySession] = {}
        self._lock = asyncio.Lock()
        self._max_lifetime = max_lifetime
        self._clock = clock

    async def init(self, session_id: str) -> Session:
        async with self._lock:
            if session_id in self._sessions:
                raise ProviderError(
                    f"Session already exists: {redact_session_id(session_id)}",
                    provider=self.name,
                )
            session = MemorySession(session_id, self._clock)
            self._sessions[session_id] = session
            return session

    async def read(self, session_id: str) -> Session:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(
                    f"Session not found: {redact_session_id(session_id)}",
                    session_id=session_id,
                )
            if self._max_lifetime is not None and session.is_expired(
                self._max_lifetime, self._clock()
            ):
                del self._sessions[session_id]
                raise SessionNotFoundError(
                    f"Session expired: {redact_session_id(session_id)}",
                    session_id=session_id,
                )
            session.touch()
            return session

    async def destroy(self, session_id: str) -> None:
        async with self._lock:
            self._sessions.pop(session_id, None)

    async def sweep(self, max_lifetime: int) -> int:
        async with self._lock:
            now = self._clock()
            expired = [
                sid
                for sid, session in self._sessions.items()
                if session.is_expired(max_lifetime, now)
            ]
            for sid in expired:
                del self._sessions[sid]

        if expired:
            logger.debug("memory_sweep", evicted=len(expired), remaining=len(self))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
