"""
Unit tests for sessiongate/core/exceptions.py - exception hierarchy.
"""

import pytest

from sessiongate.core.exceptions import (
    ConfigurationError,
    DuplicateProviderError,
    ErrorCode,
    IdentifierGenerationError,
    InvalidProviderError,
    ProviderError,
    ProviderNotFoundError,
    SessionGateException,
    SessionNotFoundError,
)


class TestSessionGateException:
    """Base exception behaviour."""

    def test_message_and_default_code(self):
        exc = SessionGateException("boom")

        assert str(exc) == "boom"
        assert exc.message == "boom"
        assert exc.error_code == ErrorCode.SESSIONGATE_ERROR

    def test_extra_kwargs_become_attributes(self):
        exc = SessionGateException("boom", path="/v1/session")

        assert exc.path == "/v1/session"

    def test_error_codes_are_strings(self):
        assert ErrorCode.PROVIDER_ERROR == "PROVIDER_ERROR"


class TestHierarchy:
    """Every error derives from SessionGateException."""

    @pytest.mark.parametrize(
        "exc",
        [
            ConfigurationError("bad"),
            DuplicateProviderError("memory"),
            InvalidProviderError("memory", "provider is None"),
            ProviderNotFoundError("file"),
            IdentifierGenerationError("no entropy"),
            SessionNotFoundError("gone"),
            ProviderError("down", provider="redis"),
        ],
    )
    def test_catchable_as_base(self, exc):
        with pytest.raises(SessionGateException):
            raise exc

    @pytest.mark.parametrize(
        "exc_type", [DuplicateProviderError, InvalidProviderError, ProviderNotFoundError]
    )
    def test_registry_errors_are_configuration_errors(self, exc_type):
        assert issubclass(exc_type, ConfigurationError)

    def test_runtime_errors_are_not_configuration_errors(self):
        assert not issubclass(ProviderError, ConfigurationError)
        assert not issubclass(SessionNotFoundError, ConfigurationError)
        assert not issubclass(IdentifierGenerationError, ConfigurationError)


class TestRegistryErrors:
    """Attributes carried by registry errors."""

    def test_duplicate_provider(self):
        exc = DuplicateProviderError("memory")

        assert exc.provider_name == "memory"
        assert exc.error_code == ErrorCode.DUPLICATE_PROVIDER
        assert "memory" in exc.message

    def test_invalid_provider(self):
        exc = InvalidProviderError("redis", "provider is None")

        assert exc.reason == "provider is None"
        assert exc.error_code == ErrorCode.INVALID_PROVIDER

    def test_provider_not_found_lists_available(self):
        exc = ProviderNotFoundError("file", available=["memory", "redis"])

        assert exc.available == ["memory", "redis"]
        assert "memory, redis" in exc.message
        assert exc.error_code == ErrorCode.PROVIDER_NOT_FOUND

    def test_provider_not_found_without_available(self):
        exc = ProviderNotFoundError("file")

        assert exc.available == []
        assert "none" in exc.message


class TestRuntimeErrors:
    """Attributes carried by runtime errors."""

    def test_session_not_found(self):
        exc = SessionNotFoundError("gone", session_id="abc")

        assert exc.session_id == "abc"
        assert exc.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_provider_error(self):
        exc = ProviderError("down", provider="redis")

        assert exc.provider == "redis"
        assert exc.error_code == ErrorCode.PROVIDER_ERROR

    def test_identifier_error_preserves_cause(self):
        cause = OSError("getrandom failed")
        try:
            raise IdentifierGenerationError("no entropy") from cause
        except IdentifierGenerationError as exc:
            assert exc.__cause__ is cause
