"""Logging setup for the exporter.

All modules log through a ``ContextualLogger``: a ``LoggerAdapter`` that
carries a dict of dimensions (``collector``, ``component``, ...) and
attaches them to every record. ``with_context()`` returns a child logger
with extra dimensions merged in, so request or collector scoped loggers
never mutate the shared one.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping, Optional

from scrapegate.core.config import settings

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes present on every LogRecord; anything else came in via ``extra``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def _record_dimensions(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


class _TextFormatter(logging.Formatter):
    """Human-readable lines with dimensions appended as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        dimensions = _record_dimensions(record)
        if dimensions:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(dimensions.items()))
        return line


class _JsonFormatter(logging.Formatter):
    """One JSON object per line for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_dimensions(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that attaches a fixed set of dimensions to every record."""

    def __init__(self, logger: logging.Logger, dimensions: Optional[dict[str, Any]] = None):
        super().__init__(logger, dict(dimensions or {}))
        self.dimensions: dict[str, Any] = dict(dimensions or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.dimensions, **(kwargs.get("extra") or {})}
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with ``dimensions`` merged over the current ones."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions})


class LoggerConfigurator:
    """Builds configured ``ContextualLogger`` instances."""

    @staticmethod
    def configure_logger(
        name: str, dimensions: Optional[dict[str, Any]] = None
    ) -> ContextualLogger:
        """Configure ``name`` with a single stream handler and wrap it.

        Args:
            name (str): The logger name.
            dimensions (dict[str, Any] | None): Dimensions attached to every record.

        Returns:
            ContextualLogger: The wrapped logger.
        """
        base = logging.getLogger(name)
        base.setLevel(settings.LOG_LEVEL)
        base.propagate = False

        if not base.handlers:
            handler = logging.StreamHandler(sys.stderr)
            if settings.LOG_FORMAT == "json":
                handler.setFormatter(_JsonFormatter())
            else:
                handler.setFormatter(_TextFormatter(_TEXT_FORMAT))
            base.addHandler(handler)

        return ContextualLogger(base, dimensions)


logger = LoggerConfigurator.configure_logger("scrapegate")
