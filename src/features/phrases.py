# src/features/phrases.py — v1
"""Tagger-independent phrase and concept extraction.

Both extractors are pure regex/string code and are shared by every
feature extractor implementation.
"""

from __future__ import annotations

import re

_NON_WORD = re.compile(r"[^\w\s]")
_ACRONYM = re.compile(r"[A-Z][A-Z]+")
_CAPITALIZED = re.compile(r"[A-Z][a-z]+")

MIN_WORD_LENGTH = 3


def normalize_words(text: str) -> list[str]:
    """Lowercase, replace punctuation with spaces and split on whitespace."""
    return _NON_WORD.sub(" ", text.lower()).split()


def extract_phrases(text: str) -> list[str]:
    """All contiguous 2-grams then 3-grams whose words are longer than 2 chars."""
    words = normalize_words(text)
    long_enough = [len(w) >= MIN_WORD_LENGTH for w in words]
    phrases: list[str] = []

    for i in range(len(words) - 1):
        if long_enough[i] and long_enough[i + 1]:
            phrases.append(f"{words[i]} {words[i + 1]}")

    for i in range(len(words) - 2):
        if long_enough[i] and long_enough[i + 1] and long_enough[i + 2]:
            phrases.append(f"{words[i]} {words[i + 1]} {words[i + 2]}")

    return phrases


def extract_concepts(text: str) -> list[str]:
    """Acronyms, capitalized words and long hyphenated words, lowercased.

    A word matching both rules (e.g. ``NIS-2-DIRECTIVE``) is reported once
    per rule it satisfies.
    """
    concepts: list[str] = []
    for word in text.split():
        if _ACRONYM.fullmatch(word) or _CAPITALIZED.fullmatch(word):
            concepts.append(word.lower())
        if "-" in word and len(word) > 5:
            concepts.append(word.lower())
    return concepts
