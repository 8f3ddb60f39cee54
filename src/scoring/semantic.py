# src/scoring/semantic.py — v1
"""Semantic-feature overlap between query and content."""

from __future__ import annotations

from typing import Iterable

from smartrerank.features.models import TextFeatures

# (feature, weight) pairs; weights of zero-scoring features are left out
# of both numerator and denominator.
FEATURE_WEIGHTS: tuple[tuple[str, float], ...] = (
    ("phrases", 0.4),
    ("concepts", 0.3),
    ("nouns", 0.2),
    ("topics", 0.1),
)


def overlap_ratio(query_values: Iterable[str], content_values: Iterable[str]) -> float:
    """|query ∩ content| / |query| over lowercased distinct values."""
    query_set = {v.lower() for v in query_values}
    if not query_set:
        return 0.0
    content_set = {v.lower() for v in content_values}
    return len(query_set & content_set) / len(query_set)


def semantic_score(query_features: TextFeatures, content_features: TextFeatures) -> float:
    """Weighted feature overlap renormalised over the non-zero features."""
    total = 0.0
    weights = 0.0
    for feature, weight in FEATURE_WEIGHTS:
        ratio = overlap_ratio(
            getattr(query_features, feature), getattr(content_features, feature)
        )
        if ratio > 0:
            total += ratio * weight
            weights += weight
    return total / weights if weights > 0 else 0.0
