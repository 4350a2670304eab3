"""
Sessions Package - cookie-bound session lifecycle

This package provides identifier generation, the provider contract and
registry, the built-in memory and Redis providers, the GC scheduler and the
SessionManager that ties them together.
"""

from sessiongate.sessions.base import Session, SessionProvider
from sessiongate.sessions.identifier import SESSION_ID_LENGTH, generate_session_id
from sessiongate.sessions.manager import SessionManager
from sessiongate.sessions.memory import MemorySession, MemorySessionProvider
from sessiongate.sessions.redis_store import RedisSession, RedisSessionProvider
from sessiongate.sessions.registry import ProviderRegistry, build_registry
from sessiongate.sessions.scheduler import GCScheduler, SchedulerState

__all__ = [
    "Session",
    "SessionProvider",
    "generate_session_id",
    "SESSION_ID_LENGTH",
    "SessionManager",
    "MemorySession",
    "MemorySessionProvider",
    "RedisSession",
    "RedisSessionProvider",
    "ProviderRegistry",
    "build_registry",
    "GCScheduler",
    "SchedulerState",
]
