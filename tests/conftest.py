"""
Pytest configuration for the sessiongate test suite.

This configuration sets up:
- Test discovery paths
- Shared fixtures following the FakeRepository pattern
- Helpers to build Starlette requests with cookies and inspect Set-Cookie
"""

import sys
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio
import fakeredis.aioredis
from starlette.requests import Request
from starlette.responses import Response

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for service interactions")


# =============================================================================
# Helpers
# =============================================================================


class FakeClock:
    """Manually advanced time source for providers."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _make_request(cookies: Optional[dict[str, str]] = None) -> Request:
    """Build a minimal HTTP request carrying the given cookies."""
    headers = []
    if cookies:
        cookie_header = "; ".join(f"{name}={value}" for name, value in cookies.items())
        headers.append((b"cookie", cookie_header.encode("latin-1")))
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "query_string": b"",
            "headers": headers,
        }
    )


def _set_cookie_headers(response: Response) -> list[str]:
    """Return every Set-Cookie header written to a response."""
    return [
        value.decode("latin-1")
        for key, value in response.raw_headers
        if key.lower() == b"set-cookie"
    ]


def _cookie_value(header: str) -> str:
    """Extract the value from a Set-Cookie header."""
    return header.split(";", 1)[0].split("=", 1)[1]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def make_request():
    """Factory for requests carrying cookies: make_request({"sid": "..."})."""
    return _make_request


@pytest.fixture
def set_cookies():
    """Return the Set-Cookie headers written to a response."""
    return _set_cookie_headers


@pytest.fixture
def cookie_value():
    """Extract the value part of a Set-Cookie header."""
    return _cookie_value


@pytest.fixture
def clock():
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest_asyncio.fixture
async def fake_redis():
    """
    Create a fake Redis client for testing.

    Uses fakeredis to provide a Redis-compatible interface without a real
    Redis instance.
    """
    redis = fakeredis.aioredis.FakeRedis(decode_responses=True)
    yield redis
    await redis.aclose()


@pytest.fixture
def test_settings():
    """Create test settings with safe defaults."""
    from sessiongate.core.config import Settings

    return Settings(
        service_name="sessiongate-test",
        environment="development",
        provider="memory",
        cookie_name="sid",
        max_lifetime_seconds=3600,
        redis_url="redis://localhost:6379",
    )


@pytest.fixture
def memory_provider(clock):
    """Provide an in-memory provider driven by the fake clock."""
    from sessiongate.sessions.memory import MemorySessionProvider

    return MemorySessionProvider(max_lifetime=3600, clock=clock)


@pytest.fixture
def registry(memory_provider):
    """Provide an isolated registry with the memory provider bound."""
    from sessiongate.sessions.registry import ProviderRegistry

    registry = ProviderRegistry()
    registry.register("memory", memory_provider)
    return registry


@pytest.fixture
def manager(registry):
    """Provide a SessionManager bound to the memory provider."""
    from sessiongate.sessions.manager import SessionManager

    return SessionManager(registry, "memory", cookie_name="sid", max_lifetime=3600)


@pytest.fixture
def app(test_settings, registry):
    """Create an application bound to the test registry."""
    from sessiongate.main import create_app

    return create_app(settings=test_settings, registry=registry)


@pytest.fixture
def client(app):
    """
    Create a TestClient with the application lifespan running.

    The lifespan builds the SessionManager and arms GC.
    """
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client
