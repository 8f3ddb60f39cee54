# src/scoring/fuzzy.py — v1
"""Batched approximate matching of the query against every item content."""

from __future__ import annotations

import logging
from typing import Sequence

from rapidfuzz import fuzz, process, utils

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.6


def fuzzy_scores(
    query: str,
    contents: Sequence[str],
    threshold: float = DEFAULT_THRESHOLD,
) -> list[float]:
    """Best-substring match quality in [0, 1] per content, in input order.

    The query is the pattern: it is aligned inside each content. A content
    shorter than the query can cover only part of it, so its alignment
    score is scaled by ``len(content) / len(query)``; only a content that
    contains the whole query scores 1.

    ``threshold`` is the tolerated mismatch: a content whose score is below
    ``1 - threshold`` scores 0. Matching is case-insensitive and ignores
    punctuation.
    """
    if not contents:
        return []
    pattern = utils.default_process(query)
    texts = [utils.default_process(c) for c in contents]
    try:
        matrix = process.cdist([pattern], texts, scorer=fuzz.partial_ratio)
    except Exception:
        logger.exception("Fuzzy matching failed (scores set to 0)")
        return [0.0] * len(contents)

    floor = 1.0 - threshold
    scores: list[float] = []
    for text, raw in zip(texts, matrix[0]):
        score = float(raw) / 100.0
        if len(text) < len(pattern):
            score *= len(text) / len(pattern)
        scores.append(score if score >= floor else 0.0)
    return scores
