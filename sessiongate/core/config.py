"""
Core configuration module for sessiongate.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the SESSIONGATE_ prefix.
"""

import re
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


# RFC 6265 cookie-name token characters
_COOKIE_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the SESSIONGATE_ prefix for environment variables.
    Example: SESSIONGATE_MAX_LIFETIME_SECONDS=7200
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="sessiongate",
        description="Name of the service for logging and identification",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface the service binds to",
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port the service listens on",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # =========================================================================
    # Session Configuration
    # =========================================================================
    provider: str = Field(
        default="memory",
        description="Name of the registered session provider to bind the manager to",
    )
    cookie_name: str = Field(
        default="sid",
        description="Name of the cookie carrying the session identifier",
    )
    max_lifetime_seconds: int = Field(
        default=3600,
        gt=0,
        description="Session lifetime in seconds; also the cookie Max-Age",
    )
    gc_interval_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds between GC sweeps; defaults to max_lifetime_seconds",
    )
    cookie_secure: bool = Field(
        default=False,
        description="Set the Secure attribute on the session cookie",
    )
    cookie_domain: Optional[str] = Field(
        default=None,
        description="Domain attribute for the session cookie",
    )

    # =========================================================================
    # Redis Configuration
    # =========================================================================
    redis_url: str = Field(
        default="redis://localhost:6379",
        description="Redis connection URL for the redis session provider",
    )
    redis_key_prefix: str = Field(
        default="sessiongate:session:",
        description="Key prefix for session documents stored in Redis",
    )

    model_config = {
        "env_prefix": "SESSIONGATE_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str) -> str:
        """Validate Redis URL format."""
        if not v.startswith(("redis://", "rediss://")):
            raise ValueError("Redis URL must start with redis:// or rediss://")
        return v

    @field_validator("cookie_name")
    @classmethod
    def validate_cookie_name(cls, v: str) -> str:
        """Cookie names must be non-empty RFC 6265 tokens."""
        if not _COOKIE_NAME_RE.match(v):
            raise ValueError(f"Invalid cookie name: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalise the log level."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def effective_gc_interval(self) -> float:
        """GC period in seconds, falling back to the session lifetime."""
        if self.gc_interval_seconds is not None:
            return self.gc_interval_seconds
        return float(self.max_lifetime_seconds)


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
