# src/cache/fingerprint.py — v2
"""Deterministic cache key derivation for rerank requests.

The key is a namespaced hex prefix of the SHA-256 digest of::

    query:id1:content1|id2:content2|...:mode:factorA,factorB

Item order and exact content are significant; exclude-factor order is not
(factors are deduplicated and sorted before hashing).
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Sequence
from typing import Protocol

DEFAULT_PREFIX = "rerank:"
DEFAULT_KEY_LENGTH = 16


class _Keyed(Protocol):
    id: str
    content: str


def canonical_request(
    query: str,
    items: Sequence[_Keyed],
    mode: str,
    exclude_factors: Iterable[str] = (),
) -> str:
    """Build the string that is hashed into the cache key."""
    items_part = "|".join(f"{item.id}:{item.content}" for item in items)
    factors_part = ",".join(sorted(set(exclude_factors)))
    return f"{query}:{items_part}:{mode}:{factors_part}"


def derive_cache_key(
    query: str,
    items: Sequence[_Keyed],
    mode: str,
    exclude_factors: Iterable[str] = (),
    prefix: str = DEFAULT_PREFIX,
    length: int = DEFAULT_KEY_LENGTH,
) -> str:
    """Return ``prefix`` + the first ``length`` hex chars of the request digest."""
    digest = hashlib.sha256(
        canonical_request(query, items, mode, exclude_factors).encode("utf-8")
    ).hexdigest()
    return f"{prefix}{digest[:length]}"
