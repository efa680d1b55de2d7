"""Unit tests for structured logging helpers and the AuditLogger."""
from __future__ import annotations

import io
import json
import logging
from typing import Any

import pytest
import structlog
from structlog.testing import capture_logs

from lexscope.observability.logging import (
    AuditLogger,
    AuditOutcome,
    JsonLoggerFactory,
    get_logger,
)


class _RecordingLogger:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def warning(self, event: str, **kw: Any) -> None:
        self.calls.append((event, kw))


# ---------------------------------------------------------------------------
# AuditLogger
# ---------------------------------------------------------------------------


class TestAuditLogger:
    def test_log_access_fields(self) -> None:
        logger = _RecordingLogger()
        AuditLogger(service="lexscope", logger=logger).log_access(
            "u1", "cases:42", "read", AuditOutcome.DENIED, scope="own"
        )
        ((event, kw),) = logger.calls
        assert event == "audit.access"
        assert kw["service"] == "lexscope"
        assert kw["user_id"] == "u1"
        assert kw["resource"] == "cases:42"
        assert kw["action"] == "read"
        assert kw["outcome"] == "denied"
        assert kw["scope"] == "own"
        assert kw["timestamp"].endswith("+00:00")

    def test_plain_string_outcome(self) -> None:
        logger = _RecordingLogger()
        AuditLogger(logger=logger).log_access("u1", "cases", "read", "partial")
        assert logger.calls[0][1]["outcome"] == "partial"

    def test_default_logger_is_structlog(self) -> None:
        with capture_logs() as logs:
            AuditLogger().log_access("u1", "cases", "read")
        (entry,) = logs
        assert entry["log_level"] == "warning"
        assert entry["outcome"] == "success"


class TestGetLogger:
    def test_binds_initial_values(self) -> None:
        with capture_logs() as logs:
            get_logger("test", component="evaluator").info("policy.test")
        assert logs[0]["component"] == "evaluator"


# ---------------------------------------------------------------------------
# JsonLoggerFactory
# ---------------------------------------------------------------------------


class TestJsonLoggerFactory:
    @pytest.fixture
    def stream(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        buffer = io.StringIO()
        try:
            yield buffer
        finally:
            structlog.reset_defaults()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def _lines(self, stream: io.StringIO) -> list[dict[str, Any]]:
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    def test_structlog_event_with_policy_fields(self, stream: io.StringIO) -> None:
        JsonLoggerFactory.configure(logging.INFO, stream=stream)
        with structlog.contextvars.bound_contextvars(user_id="u1", resource="cases"):
            structlog.get_logger("json-test").warning("policy.access.denied", reason="nope")
        (payload,) = self._lines(stream)
        assert payload["event"] == "policy.access.denied"
        assert payload["reason"] == "nope"
        assert payload["user_id"] == "u1"
        assert payload["resource"] == "cases"
        assert payload["level"] == "warning"
        assert payload["logger"] == "json-test"
        assert "timestamp" in payload

    def test_foreign_stdlib_record(self, stream: io.StringIO) -> None:
        JsonLoggerFactory.configure(logging.INFO, stream=stream)
        logging.getLogger("sqlalchemy.engine").warning("pool exhausted")
        (payload,) = self._lines(stream)
        assert payload["event"] == "pool exhausted"
        assert payload["logger"] == "sqlalchemy.engine"

    def test_foreign_record_carries_bound_policy_fields(self, stream: io.StringIO) -> None:
        JsonLoggerFactory.configure(logging.INFO, stream=stream)
        with structlog.contextvars.bound_contextvars(user_id="u1", resource="cases"):
            logging.getLogger("sqlalchemy.engine").warning("slow query")
        (payload,) = self._lines(stream)
        assert payload["user_id"] == "u1"
        assert payload["resource"] == "cases"

    def test_level_filters(self, stream: io.StringIO) -> None:
        JsonLoggerFactory.configure(logging.WARNING, stream=stream)
        structlog.get_logger("json-test").info("policy.noise")
        assert stream.getvalue() == ""
