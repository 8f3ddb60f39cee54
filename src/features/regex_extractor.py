# src/features/regex_extractor.py — v1
"""Baseline feature extractor built only from regular expressions.

Never raises for string input; used whenever the primary tagger is
unavailable or fails.
"""

from __future__ import annotations

from smartrerank.features.base_extractor import BaseFeatureExtractor
from smartrerank.features.models import TextFeatures
from smartrerank.features.phrases import (
    MIN_WORD_LENGTH,
    extract_concepts,
    extract_phrases,
    normalize_words,
)


class RegexFeatureExtractor(BaseFeatureExtractor):
    """Lowercase / strip / split tokenizer with length-based noun guessing."""

    def tokenize(self, text: str) -> list[str]:
        return [w for w in normalize_words(text) if len(w) >= MIN_WORD_LENGTH]

    def extract_features(self, text: str) -> TextFeatures:
        return TextFeatures(
            nouns=[w for w in text.lower().split() if len(w) > 3],
            phrases=extract_phrases(text),
            concepts=extract_concepts(text),
        )

    @property
    def name(self) -> str:
        return "regex"
