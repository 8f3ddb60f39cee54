# src/neural/neural_factory.py — v1
"""Factory: instantiate the neural reranking provider from configuration."""

from __future__ import annotations

import importlib
import logging

from smartrerank.config.settings import Settings
from smartrerank.neural.base_reranker import BaseNeuralReranker

logger = logging.getLogger(__name__)

_PROVIDER_REGISTRY: dict[str, str] = {
    "workers_ai": "smartrerank.neural.workers_ai.WorkersAIReranker",
    "cross_encoder": "smartrerank.neural.cross_encoder.CrossEncoderReranker",
}


class UnsupportedNeuralProviderError(ValueError):
    """Raised when a neural provider is not registered."""


def create_neural_reranker(settings: Settings | None = None) -> BaseNeuralReranker | None:
    """Instantiate the configured neural provider.

    Args:
        settings: Application settings. Uses NEURAL_PROVIDER and its options.

    Returns:
        Configured BaseNeuralReranker, or None when the provider is "none"
        (AI mode then always falls back to math scoring).
    """
    if settings is None or settings.neural_provider == "none":
        return None

    provider = settings.neural_provider
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedNeuralProviderError(
            f"Unsupported neural provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    cls = _import_class(_PROVIDER_REGISTRY[provider])

    kwargs: dict = {}
    if provider == "workers_ai":
        kwargs = {
            "account_id": settings.cloudflare_account_id,
            "api_token": settings.cloudflare_api_token,
            "model": settings.neural_model,
            "gateway_id": settings.neural_gateway_id,
            "timeout_s": settings.neural_timeout_s,
        }
    elif provider == "cross_encoder":
        kwargs = {"model": settings.cross_encoder_model}

    logger.debug("Creating neural reranker: provider=%s", provider)
    return cls(**kwargs)


def register_neural_provider(name: str, class_path: str) -> None:
    """Register a custom neural provider implementing BaseNeuralReranker."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered neural provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
