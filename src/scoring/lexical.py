# src/scoring/lexical.py — v1
"""Surface string similarity: token overlap, bigram Dice and Jaro-Winkler."""

from __future__ import annotations

import re
from collections import Counter

from rapidfuzz.distance import JaroWinkler

_WHITESPACE = re.compile(r"\s+")

TOKEN_OVERLAP_WEIGHT = 0.5
DICE_WEIGHT = 0.3
JARO_WINKLER_WEIGHT = 0.2


def token_set_overlap(query: str, content: str) -> float:
    """Share of distinct whitespace-separated query tokens present in the content."""
    query_terms = set(query.lower().split())
    if not query_terms:
        return 0.0
    content_terms = set(content.lower().split())
    return len(query_terms & content_terms) / len(query_terms)


def dice_coefficient(first: str, second: str) -> float:
    """Sørensen-Dice similarity of character bigrams, whitespace ignored."""
    first = _WHITESPACE.sub("", first)
    second = _WHITESPACE.sub("", second)
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = Counter(first[i : i + 2] for i in range(len(first) - 1))
    second_bigrams = Counter(second[i : i + 2] for i in range(len(second) - 1))
    intersection = sum((first_bigrams & second_bigrams).values())
    return 2.0 * intersection / (len(first) + len(second) - 2)


def string_score(query: str, content: str) -> float:
    """Case-insensitive blend of token overlap, Dice and Jaro-Winkler similarity."""
    q = query.lower()
    c = content.lower()
    return (
        token_set_overlap(q, c) * TOKEN_OVERLAP_WEIGHT
        + dice_coefficient(q, c) * DICE_WEIGHT
        + JaroWinkler.similarity(q, c) * JARO_WINKLER_WEIGHT
    )
