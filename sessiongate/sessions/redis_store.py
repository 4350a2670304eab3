"""
Redis Session Provider

This module provides Redis-based session storage.

Each session is stored as a JSON document under ``<prefix><session_id>``:

    {"data": {...}, "accessed_at": 1700000000.0}

Keys carry a TTL equal to the session lifetime, refreshed on every read
and write. sweep() additionally removes documents whose accessed_at is
older than the threshold, which covers keys whose TTL was cleared.

Only init() creates keys (SET NX). Later writes use SET XX, so a write
racing a destroy or sweep fails with SessionNotFoundError instead of
bringing the session back.

Pattern: Repository pattern
Pattern: Dependency injection for Redis client
"""

import json
import time
from typing import Any, Callable, Optional

from redis.asyncio import Redis

from sessiongate.core.exceptions import ProviderError, SessionNotFoundError
from sessiongate.observability.logging import get_logger, redact_session_id
from sessiongate.sessions.base import Session, SessionProvider

logger = get_logger(__name__)


class RedisSession(Session):
    """
    Session backed by a Redis JSON document.

    Data is held locally after read and written through on every change.
    """

    def __init__(
        self,
        provider: "RedisSessionProvider",
        session_id: str,
        data: Optional[dict[str, Any]] = None,
    ) -> None:
        self._provider = provider
        self._id = session_id
        self._data: dict[str, Any] = data if data is not None else {}

    def identifier(self) -> str:
        return self._id

    async def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._data.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        await self._provider._save(self._id, self._data)

    async def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            await self._provider._save(self._id, self._data)


class RedisSessionProvider(SessionProvider):
    """
    Redis-based session provider.

    Attributes:
        _redis: The Redis client instance.
        _key_prefix: Prefix for Redis keys.
        _ttl_seconds: TTL applied to every session key.

    Example:
        >>> import redis.asyncio as redis
        >>> client = redis.from_url("redis://localhost:6379")
        >>> provider = RedisSessionProvider(redis_client=client, ttl_seconds=3600)
        >>> session = await provider.init(generate_session_id())
    """

    name = "redis"

    def __init__(
        self,
        redis_client: Redis,
        key_prefix: str = "sessiongate:session:",
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the provider with a Redis client.

        Args:
            redis_client: Async Redis client instance.
            key_prefix: Prefix for all session keys in Redis.
            ttl_seconds: TTL for session keys, normally the max lifetime.
            clock: Time source in seconds; injectable for tests.
        """
        self._redis: Redis = redis_client
        self._key_prefix: str = key_prefix
        self._ttl_seconds: int = max(int(ttl_seconds), 1)
        self._clock = clock

    def _make_key(self, session_id: str) -> str:
        return f"{self._key_prefix}{session_id}"

    def _encode(self, data: dict[str, Any]) -> str:
        return json.dumps({"data": data, "accessed_at": self._clock()})

    async def _save(self, session_id: str, data: dict[str, Any]) -> None:
        """
        Write an existing session document back with a fresh TTL.

        Raises:
            SessionNotFoundError: If the key was destroyed or swept meanwhile.
        """
        try:
            payload = self._encode(data)
        except (TypeError, ValueError) as e:
            raise ProviderError(
                f"Session data is not JSON serializable: {e}", provider=self.name
            ) from e

        try:
            saved = await self._redis.set(
                self._make_key(session_id), payload, ex=self._ttl_seconds, xx=True
            )
        except Exception as e:
            raise ProviderError(
                f"Failed to save session {redact_session_id(session_id)}: {e}",
                provider=self.name,
            ) from e

        if not saved:
            raise SessionNotFoundError(
                f"Session no longer exists: {redact_session_id(session_id)}",
                session_id=session_id,
            )

    async def init(self, session_id: str) -> Session:
        try:
            created = await self._redis.set(
                self._make_key(session_id),
                self._encode({}),
                ex=self._ttl_seconds,
                nx=True,
            )
        except Exception as e:
            raise ProviderError(
                f"Failed to create session {redact_session_id(session_id)}: {e}",
                provider=self.name,
            ) from e

        if not created:
            raise ProviderError(
                f"Session already exists: {redact_session_id(session_id)}",
                provider=self.name,
            )
        return RedisSession(self, session_id)

    async def read(self, session_id: str) -> Session:
        key = self._make_key(session_id)
        try:
            raw = await self._redis.get(key)
        except Exception as e:
            raise ProviderError(
                f"Failed to read session {redact_session_id(session_id)}: {e}",
                provider=self.name,
            ) from e

        if raw is None:
            raise SessionNotFoundError(
                f"Session not found: {redact_session_id(session_id)}",
                session_id=session_id,
            )

        try:
            document = json.loads(raw)
            data = document["data"]
        except (ValueError, KeyError, TypeError) as e:
            raise ProviderError(
                f"Corrupt session document {redact_session_id(session_id)}: {e}",
                provider=self.name,
            ) from e

        # Reading counts as access
        await self._save(session_id, data)
        return RedisSession(self, session_id, data)

    async def destroy(self, session_id: str) -> None:
        try:
            await self._redis.delete(self._make_key(session_id))
        except Exception as e:
            raise ProviderError(
                f"Failed to destroy session {redact_session_id(session_id)}: {e}",
                provider=self.name,
            ) from e

    async def sweep(self, max_lifetime: int) -> int:
        threshold = self._clock() - max_lifetime
        evicted = 0
        try:
            async for key in self._redis.scan_iter(match=f"{self._key_prefix}*"):
                raw = await self._redis.get(key)
                if raw is None:
                    continue
                try:
                    accessed_at = float(json.loads(raw)["accessed_at"])
                except (ValueError, KeyError, TypeError):
                    logger.warning("redis_sweep_corrupt_document", key=str(key))
                    accessed_at = float("-inf")
                if accessed_at < threshold:
                    evicted += await self._redis.delete(key)
        except Exception as e:
            raise ProviderError(f"Sweep failed: {e}", provider=self.name) from e

        return evicted

    async def exists(self, session_id: str) -> bool:
        """Check whether a session key is present."""
        try:
            return await self._redis.exists(self._make_key(session_id)) > 0
        except Exception as e:
            raise ProviderError(
                f"Failed to check session {redact_session_id(session_id)}: {e}",
                provider=self.name,
            ) from e
