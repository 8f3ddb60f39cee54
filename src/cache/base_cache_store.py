# src/cache/base_cache_store.py — v1
"""Abstract key-value cache store with per-entry time-to-live."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CacheStoreError(Exception):
    """Raised by a store when the backend cannot be read or written."""


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends.

    Values are opaque strings; an entry older than its TTL reads as absent.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when missing or expired."""

    @abstractmethod
    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove an entry (no-op when missing)."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier (memory, json, sqlite, redis)."""

    async def close(self) -> None:
        """Release connections or file handles (no-op by default)."""
