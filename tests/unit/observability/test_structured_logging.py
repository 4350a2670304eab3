"""
Tests for structured logging - JSON output, correlation IDs, redaction.
"""

import io
import json

import pytest

from sessiongate.observability.logging import (
    configure_logging,
    get_correlation_id,
    get_log_level,
    get_logger,
    redact_session_id,
    reset_correlation_id,
    set_correlation_id,
)


@pytest.fixture
def log_stream():
    """Route structlog output to an in-memory stream for one test."""
    stream = io.StringIO()
    configure_logging(level="DEBUG", stream=stream, force=True)
    yield stream
    configure_logging(force=True)


def _records(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestCorrelationId:
    """Context-local correlation ID management."""

    def test_set_and_reset(self):
        outer = get_correlation_id()
        token = set_correlation_id("req-1")

        assert get_correlation_id() == "req-1"

        reset_correlation_id(token)
        assert get_correlation_id() == outer

    def test_nested_tokens_restore_in_order(self):
        outer = set_correlation_id("outer")
        inner = set_correlation_id("inner")

        reset_correlation_id(inner)
        assert get_correlation_id() == "outer"
        reset_correlation_id(outer)


class TestRedactSessionId:
    """Session identifiers are shortened before logging."""

    def test_keeps_prefix_only(self):
        sid = "AbCdEfGh" + "x" * 35

        assert redact_session_id(sid) == "AbCdEfGh..."

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty(self, value):
        assert redact_session_id(value) == "<none>"


class TestModuleLoggers:
    """Loggers created at import time by the session modules."""

    def test_session_modules_import_with_bound_loggers(self):
        from sessiongate.sessions import manager, memory, redis_store, scheduler

        for module in (manager, memory, redis_store, scheduler):
            assert module.logger._context["logger"] == module.__name__

    def test_module_logger_accepts_events(self):
        from sessiongate.sessions import manager

        manager.logger.info("session_created", session=redact_session_id("abcdefghijk"))
        manager.logger.debug("session_resumed", session="<none>")

    def test_get_logger_binds_name(self):
        logger = get_logger("sessiongate.test")

        assert logger._context == {"logger": "sessiongate.test"}


class TestJsonOutput:
    """Rendered log records."""

    def test_record_fields(self, log_stream):
        logger = get_logger("sessiongate.test")

        logger.info("session_created", provider="memory")

        [record] = _records(log_stream)
        assert record["event"] == "session_created"
        assert record["provider"] == "memory"
        assert record["level"] == "info"
        assert record["logger"] == "sessiongate.test"
        assert "timestamp" in record

    def test_correlation_id_included(self, log_stream):
        logger = get_logger("sessiongate.test")

        token = set_correlation_id("req-42")
        try:
            logger.info("session_resumed")
        finally:
            reset_correlation_id(token)
        logger.info("outside")

        inside, outside = _records(log_stream)
        assert inside["correlation_id"] == "req-42"
        assert "correlation_id" not in outside

    def test_exception_logged_at_error_level(self, log_stream):
        configure_logging(level="ERROR", stream=log_stream, force=True)
        logger = get_logger("sessiongate.test")

        try:
            raise RuntimeError("sweep exploded")
        except RuntimeError:
            logger.exception("gc_sweep_failed")

        [record] = _records(log_stream)
        assert record["event"] == "gc_sweep_failed"
        assert "RuntimeError" in record["exception"]

    def test_configure_is_noop_without_force(self, log_stream):
        other = io.StringIO()
        configure_logging(level="ERROR", stream=other)

        get_logger("sessiongate.test").info("still_here")

        assert other.getvalue() == ""
        assert _records(log_stream)[0]["event"] == "still_here"


class TestLevel:
    """Level filtering, including loggers bound before reconfiguration."""

    def test_level_filtering(self, log_stream):
        configure_logging(level="WARNING", stream=log_stream, force=True)
        logger = get_logger("sessiongate.test")

        logger.info("hidden")
        logger.warning("shown")

        assert [r["event"] for r in _records(log_stream)] == ["shown"]

    def test_forced_reconfigure_applies_to_existing_loggers(self):
        stream = io.StringIO()
        configure_logging(level="INFO", stream=stream, force=True)
        try:
            logger = get_logger("sessiongate.test")
            logger.debug("before")

            configure_logging(level="DEBUG", stream=io.StringIO(), force=True)
            logger.debug("after")
        finally:
            configure_logging(force=True)

        assert [r["event"] for r in _records(stream)] == ["after"]

    def test_get_log_level(self):
        configure_logging(level="debug", force=True)
        try:
            assert get_log_level() == "DEBUG"
        finally:
            configure_logging(force=True)

        assert get_log_level() == "INFO"
