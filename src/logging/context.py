# src/logging/context.py — v1
"""Contextual logging support — attach request_id, mode, cache_key to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per HTTP request.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_mode: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "mode", default=None
)
_cache_key: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "cache_key", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    mode: str | None = None
    cache_key: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        mode=_mode.get(),
        cache_key=_cache_key.get(),
    )


def set_request_context(request_id: str) -> None:
    """Set request-level context (called once per request)."""
    _request_id.set(request_id)


def set_rerank_context(mode: str, cache_key: str | None = None) -> None:
    """Set rerank-level context once the mode and fingerprint are known."""
    _mode.set(mode)
    _cache_key.set(cache_key)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _mode.set(None)
    _cache_key.set(None)
