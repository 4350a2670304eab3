"""
Session and Provider Interfaces

This module defines the abstract contracts between the SessionManager and
the storage backends.

Design Pattern:
- Ports and Adapters (Hexagonal Architecture)
- SessionProvider serves as the "port" (interface)
- Concrete providers (memory.py, redis_store.py) serve as "adapters"

The manager depends only on these classes, never on a concrete backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class Session(ABC):
    """
    Per-identifier bag of application data.

    Keys are strings; values are application-defined. Type discipline for
    specific keys is an application contract, not a concern of this package.

    Example:
        >>> session = await manager.start(request, response)
        >>> await session.set("cart", ["sku-1"])
        >>> await session.get("cart")
        ['sku-1']
    """

    @abstractmethod
    def identifier(self) -> str:
        """Return the session identifier this session is stored under."""
        ...

    @abstractmethod
    async def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Return the value stored under key.

        Args:
            key: The key to look up.
            default: Returned when key is absent.
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""
        ...


class SessionProvider(ABC):
    """
    Abstract base class for session storage backends.

    Implementations must be safe for concurrent init/read/destroy calls
    interleaved with sweep; the manager's lock does not guard provider state.

    Attributes:
        name: Short backend name used in logs and errors.

    Methods:
        init: Create an empty session for a freshly generated identifier
        read: Resume an existing session
        destroy: Discard a session (idempotent)
        sweep: Evict sessions older than a lifetime threshold
    """

    name: str = "provider"

    @abstractmethod
    async def init(self, session_id: str) -> Session:
        """
        Create a new, empty session.

        Args:
            session_id: Identifier produced by generate_session_id().

        Returns:
            The new Session.

        Raises:
            ProviderError: If the backend fails or the identifier is taken.
        """
        ...

    @abstractmethod
    async def read(self, session_id: str) -> Session:
        """
        Resume an existing session.

        Never creates a session implicitly.

        Raises:
            SessionNotFoundError: If the identifier is unknown or expired.
            ProviderError: If the backend fails.
        """
        ...

    @abstractmethod
    async def destroy(self, session_id: str) -> None:
        """
        Discard a session. Destroying an unknown identifier is a no-op.

        Raises:
            ProviderError: If the backend fails.
        """
        ...

    @abstractmethod
    async def sweep(self, max_lifetime: int) -> int:
        """
        Evict every session not accessed within max_lifetime seconds.

        Args:
            max_lifetime: Lifetime threshold in seconds.

        Returns:
            Number of sessions evicted.
        """
        ...
