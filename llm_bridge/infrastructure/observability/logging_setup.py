"""
Structured JSON logging for llm_bridge processes.

Each log entry is a single JSON line on stderr carrying the service name, so
logs from sandboxed runs can be correlated with the caller that issued them.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

# `_extra` keys promoted to top-level fields
CORRELATION_KEYS = ("model", "provider", "trace_id", "span_id")


class JSONFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Tracebacks are kept for ERROR and above; lower levels only name the
    exception type (cancellations and expected CLI failures stay one line).
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[1]:
            entry["error_type"] = type(record.exc_info[1]).__name__
            if record.levelno >= logging.ERROR:
                entry["exception"] = self.formatException(record.exc_info)

        extra = dict(getattr(record, "_extra", None) or {})
        for key in CORRELATION_KEYS:
            if key in extra:
                entry[key] = extra.pop(key)
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str)


def setup_logging(
    service_name: str, level_name: str = "INFO", stream: TextIO | None = None
) -> logging.Logger:
    """
    Configure the root logger with JSON output (stderr by default, stdout
    carries CLI answers).

    Call once at process startup (CLI entry point). Returns the service logger.
    """
    level_name = level_name.upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter(service_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Exporter retries are noisy when no collector is running
    logging.getLogger("opentelemetry").setLevel(logging.WARNING)

    logger = logging.getLogger(service_name)
    logger.debug("Logging initialized", extra={"_extra": {"level": level_name}})
    return logger
