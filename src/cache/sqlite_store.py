# src/cache/sqlite_store.py — v1
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency. Expired rows are ignored on
read and purged opportunistically on write.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from pathlib import Path
from typing import Callable

from smartrerank.cache.base_cache_store import BaseCacheStore, CacheStoreError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_entries (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    expires_at REAL NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_expires_at ON cache_entries(expires_at);
"""

_PURGE_EVERY = 100


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store for single-host persistence."""

    def __init__(
        self,
        db_path: Path | str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._lock = threading.Lock()
        self._writes = 0
        self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str) -> str | None:
        try:
            with self._lock:
                row = self._conn.execute(
                    "SELECT value FROM cache_entries WHERE key = ? AND expires_at > ?",
                    (key, self._clock()),
                ).fetchone()
        except sqlite3.Error as e:
            raise CacheStoreError(f"Failed to read cache entry {key}: {e}") from e
        return None if row is None else row[0]

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        now = self._clock()
        try:
            with self._lock:
                self._conn.execute(
                    "INSERT OR REPLACE INTO cache_entries (key, value, expires_at) "
                    "VALUES (?, ?, ?)",
                    (key, value, now + ttl_seconds),
                )
                self._writes += 1
                if self._writes % _PURGE_EVERY == 0:
                    self._conn.execute("DELETE FROM cache_entries WHERE expires_at <= ?", (now,))
                self._conn.commit()
        except sqlite3.Error as e:
            raise CacheStoreError(f"Failed to write cache entry {key}: {e}") from e

    async def delete(self, key: str) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
            self._conn.commit()

    async def close(self) -> None:
        self._conn.close()

    @property
    def backend_name(self) -> str:
        return "sqlite"
