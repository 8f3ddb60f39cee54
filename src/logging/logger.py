# src/logging/logger.py — v1
"""Logger factory with JSON and text formatters.

Records from ``smartrerank.*`` and from uvicorn's server loggers share the
same handlers, so one process emits one log format.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from smartrerank.logging.context import get_context

ROOT_LOGGER = "smartrerank"
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line; request context nested under ``context``."""

    def __init__(self, service: str | None = None) -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self._service:
            entry["service"] = self._service

        context = get_context().as_dict()
        if context:
            entry["context"] = context

        # Structured payload from logger.info(..., extra={"data": {...}})
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line human-readable format for development."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = f"{_timestamp(record):%Y-%m-%d %H:%M:%S} [{record.levelname:8s}] {record.name}"
        if ctx.request_id:
            line += f" [{ctx.request_id}]"
        if ctx.mode:
            line += f" ({ctx.mode})"
        line += f" — {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Configuration is applied by setup_logging()."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 30,
    service: str | None = None,
) -> None:
    """Configure the smartrerank logger and attach uvicorn's loggers to it.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: Output format ("json" or "text").
        log_file: Path to log file (None = stdout only).
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
        service: Service name stamped on JSON records.
    """
    formatter: logging.Formatter = (
        JsonFormatter(service=service) if log_format == "json" else TextFormatter()
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        from smartrerank.logging.handlers import create_rotating_handler

        handlers.append(
            create_rotating_handler(str(log_file), rotation=rotation, retention=retention)
        )
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Re-init replaces handlers instead of stacking them
    root_logger.handlers = list(handlers)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = list(handlers) if name != "uvicorn.error" else []
        server_logger.propagate = name == "uvicorn.error"
