# src/cache/json_store.py — v1
"""JSON file-based cache store (CACHE_BACKEND=json).

Stores each entry as an individual JSON file under CACHE_ROOT holding the
value and its absolute expiry timestamp.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Callable

from smartrerank.cache.base_cache_store import BaseCacheStore, CacheStoreError

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(
        self,
        cache_root: Path | str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._clock = clock

    async def get(self, key: str) -> str | None:
        path = self._entry_path(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            value, expires_at = data["value"], float(data["expires_at"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise CacheStoreError(f"Failed to read cache entry {key}: {e}") from e
        if self._clock() >= expires_at:
            path.unlink(missing_ok=True)
            return None
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        path = self._entry_path(key)
        payload = {"value": value, "expires_at": self._clock() + ttl_seconds}
        try:
            # Write-then-rename so readers never see a half-written file
            tmp = path.with_suffix(".tmp")
            tmp.write_text(json.dumps(payload), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise CacheStoreError(f"Failed to write cache entry {key}: {e}") from e

    async def delete(self, key: str) -> None:
        self._entry_path(key).unlink(missing_ok=True)

    def purge_expired(self) -> int:
        """Delete every expired or unreadable entry file; return the count."""
        removed = 0
        now = self._clock()
        for path in self._root.glob("*.json"):
            try:
                expires_at = float(json.loads(path.read_text(encoding="utf-8"))["expires_at"])
            except (OSError, ValueError, KeyError, TypeError):
                expires_at = 0.0
            if now >= expires_at:
                path.unlink(missing_ok=True)
                removed += 1
        return removed

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        safe_key = key.replace("/", "_").replace("\\", "_").replace(":", "_")
        return self._root / f"{safe_key}.json"

    @property
    def backend_name(self) -> str:
        return "json"
