"""
Core module for sessiongate.

This module contains configuration and the exception hierarchy.
"""

from sessiongate.core.config import Settings, get_settings
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

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "SessionGateException",
    "ConfigurationError",
    "DuplicateProviderError",
    "InvalidProviderError",
    "ProviderNotFoundError",
    "IdentifierGenerationError",
    "SessionNotFoundError",
    "ProviderError",
]
