# src/logging/handlers.py — v1
"""Size-rotated file output for the service log.

Sizes are written like ``10MB``, ``1.5 GB``, ``512k`` or a bare byte count.
"""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([KMG]?)B?$", re.IGNORECASE)
_SHIFT = {"": 0, "K": 10, "M": 20, "G": 30}


def parse_size(size_str: str) -> int:
    """Convert a human size into bytes (binary multiples).

    Raises:
        ValueError: On an unknown unit or a size that rounds to zero bytes.
    """
    match = _SIZE_PATTERN.match(size_str.strip())
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    number, prefix = match.groups()
    size = int(float(number) * (1 << _SHIFT[prefix.upper()]))
    if size <= 0:
        raise ValueError(f"Invalid size format: {size_str!r} is zero bytes.")
    return size


class ServiceLogHandler(RotatingFileHandler):
    """UTF-8 rotating handler that opens its file on the first record."""

    def __init__(self, path: Path, max_bytes: int, backups: int) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(
            str(path), maxBytes=max_bytes, backupCount=backups, encoding="utf-8", delay=True,
        )
        self.path = path


def create_rotating_handler(
    log_file: str,
    rotation: str = "10MB",
    retention: int = 30,
) -> ServiceLogHandler:
    """Build the service log handler; ``~`` in ``log_file`` is expanded."""
    if retention < 0:
        raise ValueError(f"retention must be >= 0, got {retention}")
    return ServiceLogHandler(Path(log_file).expanduser(), parse_size(rotation), retention)
