# src/cache/memory_store.py — v1
"""Process-local in-memory cache store (default CACHE_BACKEND=memory).

Entries live in a dict with monotonic expiry times. Suitable for a single
process; use redis for multi-instance deployments.
"""

from __future__ import annotations

import time
from typing import Callable

from smartrerank.cache.base_cache_store import BaseCacheStore


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store with lazy expiry."""

    def __init__(
        self,
        max_entries: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: dict[str, tuple[str, float]] = {}
        self._max_entries = max_entries
        self._clock = clock

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        if key not in self._entries and len(self._entries) >= self._max_entries:
            self._evict()
        self._entries[key] = (value, self._clock() + ttl_seconds)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def _evict(self) -> None:
        """Drop expired entries, then the oldest insertion if still full."""
        now = self._clock()
        for key in [k for k, (_, exp) in self._entries.items() if now >= exp]:
            del self._entries[key]
        if len(self._entries) >= self._max_entries:
            self._entries.pop(next(iter(self._entries)))

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def backend_name(self) -> str:
        return "memory"
