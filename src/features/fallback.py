# src/features/fallback.py — v1
"""Two-tier feature extraction: primary extractor with a baseline fallback.

This wrapper is the only place where extractor failures are caught. The
baseline must not raise, so callers never see an exception from
``tokenize`` or ``extract_features``.
"""

from __future__ import annotations

import logging

from smartrerank.features.base_extractor import BaseFeatureExtractor
from smartrerank.features.models import TextFeatures
from smartrerank.features.regex_extractor import RegexFeatureExtractor

logger = logging.getLogger(__name__)


class FallbackFeatureExtractor(BaseFeatureExtractor):
    """Delegate to ``primary``; on any failure answer from ``baseline``."""

    def __init__(
        self,
        primary: BaseFeatureExtractor,
        baseline: BaseFeatureExtractor | None = None,
    ) -> None:
        self._primary = primary
        self._baseline = baseline or RegexFeatureExtractor()
        self._degraded_logged = False

    def tokenize(self, text: str) -> list[str]:
        try:
            return self._primary.tokenize(text)
        except Exception as e:
            self._note_degradation("tokenize", e)
            return self._baseline.tokenize(text)

    def extract_features(self, text: str) -> TextFeatures:
        try:
            return self._primary.extract_features(text)
        except Exception as e:
            self._note_degradation("extract_features", e)
            return self._baseline.extract_features(text)

    def _note_degradation(self, operation: str, error: Exception) -> None:
        # Logged once per process; repeated failures are expected when a model is missing
        if not self._degraded_logged:
            self._degraded_logged = True
            logger.warning(
                "%s extractor failed in %s (%s); using %s baseline",
                self._primary.name, operation, error, self._baseline.name,
            )
        else:
            logger.debug("%s extractor failed in %s: %s", self._primary.name, operation, error)

    @property
    def name(self) -> str:
        return f"{self._primary.name}+{self._baseline.name}"


def create_feature_extractor(nlp_model: str = "en_core_web_sm") -> BaseFeatureExtractor:
    """Build the default spaCy → regex extractor chain."""
    from smartrerank.features.spacy_extractor import SpacyFeatureExtractor

    return FallbackFeatureExtractor(SpacyFeatureExtractor(model=nlp_model))
