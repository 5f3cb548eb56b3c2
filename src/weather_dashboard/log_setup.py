"""Logging setup for command-line execution."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_for_logging, sanitize_text


class JsonConsoleFormatter(logging.Formatter):
    """JSON formatter for structured console logs with credential redaction.

    Structured fields passed as ``extra={"context": {...}}`` are emitted under
    ``context`` with sensitive keys and request credentials redacted.
    """

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        context = getattr(record, "context", None)
        if context is not None:
            event["context"] = sanitize_for_logging(context)
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str)


def setup_logger(
    name: str = "weather_dashboard",
    level: int = logging.INFO,
    debug: bool = False,
) -> logging.Logger:
    """Create and configure a process-wide logger.

    ``debug`` forces DEBUG regardless of ``level``. Handlers are attached once;
    later calls only adjust the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
