"""
Observability Package

Structured JSON logging with correlation ID propagation.
"""

from sessiongate.observability.logging import (
    configure_logging,
    get_correlation_id,
    get_log_level,
    get_logger,
    redact_session_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_log_level",
    "set_correlation_id",
    "reset_correlation_id",
    "get_correlation_id",
    "redact_session_id",
]
