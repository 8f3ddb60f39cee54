# src/features/base_extractor.py — v1
"""Abstract feature extractor interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartrerank.features.models import TextFeatures


class FeatureExtractionError(Exception):
    """Raised by an extractor that cannot process text (e.g. missing model)."""


class BaseFeatureExtractor(ABC):
    """Unified interface for tokenization and semantic tagging."""

    @abstractmethod
    def tokenize(self, text: str) -> list[str]:
        """Lowercased, stopword-free canonical stems of tokens longer than 2 chars."""

    @abstractmethod
    def extract_features(self, text: str) -> TextFeatures:
        """Nouns, verbs, adjectives, topics, phrases and concepts of a text."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Extractor identifier (spacy, regex, ...)."""
