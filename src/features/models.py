# src/features/models.py — v1
"""Text feature record produced by feature extractors."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TextFeatures:
    """Lexical and semantic features of one text."""

    nouns: list[str] = field(default_factory=list)
    verbs: list[str] = field(default_factory=list)
    adjectives: list[str] = field(default_factory=list)
    topics: list[str] = field(default_factory=list)
    phrases: list[str] = field(default_factory=list)
    concepts: list[str] = field(default_factory=list)
