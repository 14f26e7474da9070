"""Tests for ContextualLogger and the log formatters."""

import json
import logging

import pytest

from scrapegate.core.logging import (
    ContextualLogger,
    LoggerConfigurator,
    _JsonFormatter,
    _TextFormatter,
)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def captured():
    base = logging.getLogger("scrapegate.tests.logging")
    base.setLevel(logging.DEBUG)
    base.propagate = False
    handler = _ListHandler()
    base.addHandler(handler)
    yield base, handler
    base.removeHandler(handler)


class TestContextualLogger:
    def test_dimensions_attached_to_records(self, captured):
        base, handler = captured
        logger = ContextualLogger(base, {"component": "exporter"})

        logger.info("hello", extra={"ip": "10.1.2.3"})

        record = handler.records[0]
        assert record.component == "exporter"
        assert record.ip == "10.1.2.3"

    def test_with_context_does_not_mutate_parent(self, captured):
        base, handler = captured
        parent = ContextualLogger(base, {"component": "exporter"})

        child = parent.with_context(collector="meminfo")
        child.warning("child")
        parent.warning("parent")

        assert handler.records[0].collector == "meminfo"
        assert handler.records[0].component == "exporter"
        assert not hasattr(handler.records[1], "collector")
        assert parent.dimensions == {"component": "exporter"}


class TestFormatters:
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("scrapegate", logging.WARNING, __file__, 1, "Access denied", (), None)
        record.__dict__.update(extra)
        return record

    def test_text_appends_sorted_dimensions(self):
        line = _TextFormatter("%(levelname)s %(message)s").format(
            self._record(ip="8.8.8.8", collector="cpu")
        )
        assert line == "WARNING Access denied collector=cpu ip=8.8.8.8"

    def test_json_includes_dimensions(self):
        payload = json.loads(_JsonFormatter().format(self._record(ip="8.8.8.8")))

        assert payload["level"] == "WARNING"
        assert payload["message"] == "Access denied"
        assert payload["ip"] == "8.8.8.8"
        assert "timestamp" in payload


class TestLoggerConfigurator:
    def test_single_handler_per_logger(self):
        first = LoggerConfigurator.configure_logger("scrapegate.tests.configured")
        second = LoggerConfigurator.configure_logger(
            "scrapegate.tests.configured", {"component": "x"}
        )

        assert first.logger is second.logger
        assert len(second.logger.handlers) == 1
        assert second.dimensions == {"component": "x"}
