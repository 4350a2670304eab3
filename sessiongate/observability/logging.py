"""
Structured Logging Module

This module provides structured JSON logging with correlation ID support.

Pattern: Structured logging for observability
Pattern: Singleton configuration (configure once at startup)

Module-level loggers are bound at import time, before settings are read.
The level is therefore enforced by a processor that reads the currently
configured threshold, so configure_logging(force=True) applies to them too.

Session identifiers are bearer credentials; log them through
redact_session_id() only.
"""

import contextvars
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

import structlog
from structlog.types import EventDict, Processor


_configured: bool = False
_min_level: int = logging.INFO


# =============================================================================
# Correlation ID Context
# =============================================================================

_correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)


def set_correlation_id(correlation_id: str) -> contextvars.Token:
    """
    Set the correlation ID for the current context.

    Returns:
        Token that can be passed to reset_correlation_id()
    """
    return _correlation_id_var.set(correlation_id)


def reset_correlation_id(token: contextvars.Token) -> None:
    """Restore the correlation ID that was active before set_correlation_id()."""
    _correlation_id_var.reset(token)


def get_correlation_id() -> Optional[str]:
    return _correlation_id_var.get()


def redact_session_id(session_id: Optional[str]) -> str:
    """Shorten a session identifier to a loggable prefix."""
    if not session_id:
        return "<none>"
    return f"{session_id[:8]}..."


# =============================================================================
# Custom Processors
# =============================================================================


def drop_below_level(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Drop events below the configured level."""
    if _level_to_int(method_name) < _min_level:
        raise structlog.DropEvent
    return event_dict


def add_correlation_id(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add correlation ID to log event if set."""
    correlation_id = get_correlation_id()
    if correlation_id is not None:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def add_timestamp(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def rename_level(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Rename log_level to level for cleaner output."""
    if "log_level" in event_dict:
        event_dict["level"] = event_dict.pop("log_level")
    return event_dict


# =============================================================================
# Singleton Configuration
# =============================================================================


def configure_logging(
    level: str = "INFO",
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog for the application.

    Subsequent calls are no-ops unless force=True. A forced call changes the
    level for every logger, including ones bound earlier; the stream only
    applies to loggers bound afterwards.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream (default: sys.stdout)
        force: Reconfigure even if already configured
    """
    global _configured, _min_level

    if _configured and not force:
        return

    _min_level = _level_to_int(level)

    processors: list[Processor] = [
        drop_below_level,
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_correlation_id,
        rename_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=False,
    )

    _configured = True


def get_log_level() -> str:
    """Return the name of the level currently enforced."""
    return logging.getLevelName(_min_level)


# =============================================================================
# Logger Factory
# =============================================================================


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger tagged with its module name.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("session_created", session=redact_session_id(sid))
    """
    configure_logging()
    return structlog.get_logger().bind(logger=name)


def _level_to_int(level: str) -> int:
    """Convert level string to logging int."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "EXCEPTION": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level.upper(), logging.INFO)
