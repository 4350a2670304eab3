"""
Provider Registry

Maps backend names to SessionProvider instances. A registry object is
constructed and populated at startup, then passed into SessionManager.
There is no module-level registry; tests build their own.

Pattern: Service Registry
"""

import logging
from typing import Optional

from sessiongate.core.config import Settings
from sessiongate.core.exceptions import (
    DuplicateProviderError,
    InvalidProviderError,
    ProviderNotFoundError,
)
from sessiongate.sessions.base import SessionProvider
from sessiongate.sessions.memory import MemorySessionProvider
from sessiongate.sessions.redis_store import RedisSessionProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Registry of named session providers.

    Each name may be bound exactly once. Misuse raises a ConfigurationError
    subclass so that startup fails before any request is served.

    Attributes:
        _providers: Dictionary mapping names to SessionProvider instances.

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.register("memory", MemorySessionProvider())
        >>> provider = registry.get("memory")
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._providers: dict[str, SessionProvider] = {}

    def register(self, name: str, provider: Optional[SessionProvider]) -> None:
        """
        Bind a provider to a name.

        Args:
            name: The name to register the provider under.
            provider: The provider instance.

        Raises:
            InvalidProviderError: If name is empty or provider is None or
                not a SessionProvider.
            DuplicateProviderError: If name is already registered.
        """
        if not name:
            raise InvalidProviderError(name, "provider name must be non-empty")
        if provider is None:
            raise InvalidProviderError(name, "provider is None")
        if not isinstance(provider, SessionProvider):
            raise InvalidProviderError(
                name, f"{type(provider).__name__} does not implement SessionProvider"
            )
        if name in self._providers:
            raise DuplicateProviderError(name)

        self._providers[name] = provider
        logger.debug(f"Registered session provider: {name}")

    def get(self, name: str) -> SessionProvider:
        """
        Look up a provider by name.

        Raises:
            ProviderNotFoundError: If the name is not registered.
        """
        if name not in self._providers:
            raise ProviderNotFoundError(name, self.names())
        return self._providers[name]

    def has(self, name: str) -> bool:
        """Check if a provider is registered under name."""
        return name in self._providers

    def names(self) -> list[str]:
        """Return the registered provider names, sorted."""
        return sorted(self._providers)

    def __len__(self) -> int:
        return len(self._providers)


def build_registry(settings: Settings, redis_client=None) -> ProviderRegistry:
    """
    Build a registry holding the built-in providers.

    The memory provider is always registered. The redis provider is
    registered when a client is supplied.

    Args:
        settings: Application settings.
        redis_client: Optional async Redis client for the redis provider.

    Returns:
        A populated ProviderRegistry.
    """
    registry = ProviderRegistry()
    registry.register(
        "memory", MemorySessionProvider(max_lifetime=settings.max_lifetime_seconds)
    )

    if redis_client is not None:
        registry.register(
            "redis",
            RedisSessionProvider(
                redis_client=redis_client,
                key_prefix=settings.redis_key_prefix,
                ttl_seconds=settings.max_lifetime_seconds,
            ),
        )

    logger.info(f"Session providers registered: {registry.names()}")
    return registry
