# src/features/spacy_extractor.py — v1
"""spaCy-backed feature extractor (primary tier).

Tokens are reduced to their lemma as canonical stem; nouns, verbs and
adjectives come from part-of-speech tags, topics from named entities.
Requires an installed spaCy pipeline (default ``en_core_web_sm``).
"""

from __future__ import annotations

import logging
import threading

from smartrerank.features.base_extractor import BaseFeatureExtractor, FeatureExtractionError
from smartrerank.features.models import TextFeatures
from smartrerank.features.phrases import MIN_WORD_LENGTH, extract_concepts, extract_phrases

logger = logging.getLogger(__name__)

_TOPIC_LABELS = frozenset(
    {"PERSON", "NORP", "FAC", "ORG", "GPE", "LOC", "PRODUCT", "EVENT", "WORK_OF_ART", "LAW"}
)


class SpacyFeatureExtractor(BaseFeatureExtractor):
    """Tagging and lemmatising extractor on top of a spaCy pipeline."""

    def __init__(self, model: str = "en_core_web_sm", nlp=None) -> None:
        self._model_name = model
        self._nlp = nlp
        self._load_error: Exception | None = None
        self._lock = threading.Lock()

    def _pipeline(self):
        if self._nlp is not None:
            return self._nlp
        # A failed load is remembered so the model is not re-read per call
        if self._load_error is not None:
            raise FeatureExtractionError(
                f"spaCy model {self._model_name!r} unavailable"
            ) from self._load_error
        with self._lock:
            if self._nlp is None:
                try:
                    import spacy

                    self._nlp = spacy.load(self._model_name)
                    logger.info("Loaded spaCy pipeline %s", self._model_name)
                except Exception as e:
                    self._load_error = e
                    raise FeatureExtractionError(
                        f"spaCy model {self._model_name!r} unavailable: {e}"
                    ) from e
        return self._nlp

    @property
    def _stop_words(self) -> frozenset[str] | set[str]:
        return self._pipeline().Defaults.stop_words

    def tokenize(self, text: str) -> list[str]:
        doc = self._pipeline()(text)
        stop_words = self._stop_words
        stems: list[str] = []
        for token in doc:
            if token.is_punct or token.is_space:
                continue
            lower = token.lower_
            if len(lower) < MIN_WORD_LENGTH or lower in stop_words:
                continue
            stems.append((token.lemma_ or lower).lower())
        return stems

    def extract_features(self, text: str) -> TextFeatures:
        doc = self._pipeline()(text)
        return TextFeatures(
            nouns=[t.text for t in doc if t.pos_ in ("NOUN", "PROPN")],
            verbs=[t.text for t in doc if t.pos_ == "VERB"],
            adjectives=[t.text for t in doc if t.pos_ == "ADJ"],
            topics=[ent.text for ent in doc.ents if ent.label_ in _TOPIC_LABELS],
            phrases=extract_phrases(text),
            concepts=extract_concepts(text),
        )

    @property
    def name(self) -> str:
        return "spacy"

    @property
    def model_name(self) -> str:
        return self._model_name
