"""
Custom exceptions for sessiongate.

This module provides the exception hierarchy for the session lifecycle
controller. All exceptions inherit from SessionGateException and carry an
error code for consistent handling in logs and API responses.

Taxonomy:
- ConfigurationError and subclasses: raised at startup (registry population,
  manager construction). They block Manager construction.
- IdentifierGenerationError: the random source failed; surfaced from start().
- SessionNotFoundError: unknown or expired identifier; recovered by start().
- ProviderError: backend failure; propagated for init/read/destroy and
  absorbed (logged) for sweep.
"""

from enum import Enum
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for sessiongate exceptions.

    These codes provide a consistent way to identify error types
    across the API and in logging.
    """

    SESSIONGATE_ERROR = "SESSIONGATE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    DUPLICATE_PROVIDER = "DUPLICATE_PROVIDER"
    INVALID_PROVIDER = "INVALID_PROVIDER"
    PROVIDER_NOT_FOUND = "PROVIDER_NOT_FOUND"
    IDENTIFIER_GENERATION_ERROR = "IDENTIFIER_GENERATION_ERROR"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    KEY_NOT_FOUND = "KEY_NOT_FOUND"


# =============================================================================
# Base Exception
# =============================================================================


class SessionGateException(Exception):
    """
    Base exception for all sessiongate errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.SESSIONGATE_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# Configuration Errors (startup)
# =============================================================================


class ConfigurationError(SessionGateException):
    """
    Exception for invalid startup configuration.

    Raised while populating the provider registry or constructing a
    SessionManager. Never raised while serving a request.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.CONFIGURATION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)


class DuplicateProviderError(ConfigurationError):
    """
    Raised when a provider name is registered twice.

    Attributes:
        provider_name: The name that was already taken.
    """

    def __init__(self, provider_name: str) -> None:
        super().__init__(
            f"Provider already registered: {provider_name}",
            error_code=ErrorCode.DUPLICATE_PROVIDER,
        )
        self.provider_name = provider_name


class InvalidProviderError(ConfigurationError):
    """
    Raised when registration is attempted with a missing or invalid provider.

    Attributes:
        provider_name: The name the provider was to be registered under.
    """

    def __init__(self, provider_name: str, reason: str) -> None:
        super().__init__(
            f"Invalid provider for '{provider_name}': {reason}",
            error_code=ErrorCode.INVALID_PROVIDER,
        )
        self.provider_name = provider_name
        self.reason = reason


class ProviderNotFoundError(ConfigurationError):
    """
    Raised when a provider name is looked up but was never registered.

    Attributes:
        provider_name: The unknown name.
        available: Names that are registered.
    """

    def __init__(self, provider_name: str, available: list[str] | None = None) -> None:
        available = available or []
        super().__init__(
            f"Provider not registered: {provider_name} "
            f"(available: {', '.join(available) or 'none'})",
            error_code=ErrorCode.PROVIDER_NOT_FOUND,
        )
        self.provider_name = provider_name
        self.available = available


# =============================================================================
# Runtime Errors
# =============================================================================


class IdentifierGenerationError(SessionGateException):
    """
    Raised when a session identifier cannot be drawn from the random source.

    A request must never proceed with an empty or predictable identifier,
    so this error is surfaced to the caller of SessionManager.start().
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.IDENTIFIER_GENERATION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)


class SessionNotFoundError(SessionGateException):
    """
    Raised by a provider when an identifier is unknown or has expired.

    Attributes:
        session_id: Identifier that could not be resolved.
    """

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        error_code: str = ErrorCode.SESSION_NOT_FOUND,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.session_id = session_id


class ProviderError(SessionGateException):
    """
    Exception for session backend failures.

    Raised when the storage behind a provider fails, for example a Redis
    connection error or a serialization problem.

    Attributes:
        provider: Name of the provider (e.g., "memory", "redis").
    """

    def __init__(
        self,
        message: str,
        provider: str,
        error_code: str = ErrorCode.PROVIDER_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.provider = provider
