# src/scoring/heuristics.py — v1
"""Cheap per-item heuristics: query-term coverage, recency and length fit."""

from __future__ import annotations

import re

_YEAR = re.compile(r"\b(20[0-2][0-9])\b")

DEFAULT_RECENCY = 0.7


def query_term_match(query: str, content: str) -> float:
    """Fraction of query terms (longer than 2 chars) found as substrings of content."""
    terms = [t for t in query.lower().split() if len(t) > 2]
    if not terms:
        return 0.0
    content_lower = content.lower()
    return sum(1 for t in terms if t in content_lower) / len(terms)


def recency_score(content: str, current_year: int, default: float = DEFAULT_RECENCY) -> float:
    """Score the most recent 2000-2029 year mentioned in the content.

    Content without any year gets ``default``.
    """
    years = [int(y) for y in _YEAR.findall(content)]
    if not years:
        return default

    diff = current_year - max(years)
    if diff <= 1:
        return 1.0
    if diff <= 2:
        return 0.9
    if diff <= 5:
        return 0.8
    return max(0.5, 1 - diff / 10)


def length_score(query: str, content: str) -> float:
    """Penalise very short content, mildly cap very long content."""
    content_len = len(content)
    if content_len < 50:
        return 0.3
    if content_len < len(query) * 0.5:
        return 0.5
    if content_len > 1000:
        return 0.7
    return 0.8
