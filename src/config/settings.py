# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from smartrerank.version import __version__


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Service ===
    service_name: str = "Reranker API"
    service_version: str = __version__
    host: str = "0.0.0.0"
    port: int = 8000
    cors_allow_origins: list[str] = ["*"]

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["none", "memory", "json", "sqlite", "redis"] = "memory"
    cache_root: Path = Path("~/.smartrerank/cache")
    cache_redis_url: str = ""
    cache_ttl_seconds: int = 3600
    cache_key_prefix: str = "rerank:"
    cache_key_length: int = 16

    # === Neural reranker ===
    neural_provider: str = "none"
    neural_model: str = "@cf/baai/bge-reranker-base"
    neural_gateway_id: str = "reranker"
    neural_timeout_s: float = 10.0
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""
    cross_encoder_model: str = "BAAI/bge-reranker-base"
    # Method reported when AI mode silently fell back to math scoring
    ai_fallback_method: Literal["ai", "math"] = "ai"

    # === Scoring ===
    nlp_model: str = "en_core_web_sm"
    recency_default: float = 0.7
    fuzzy_threshold: float = 0.6
    reference_year: int | None = None

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be > 0")
        return v

    @field_validator("fuzzy_threshold")
    @classmethod
    def validate_fuzzy_threshold(cls, v: float) -> float:  # noqa: N805
        if not 0.0 < v <= 1.0:
            raise ValueError("fuzzy_threshold must be in (0, 1]")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_enabled and self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if self.neural_provider == "workers_ai" and not (
            self.cloudflare_account_id and self.cloudflare_api_token
        ):
            errors.append(
                "NEURAL_PROVIDER=workers_ai requires CLOUDFLARE_ACCOUNT_ID "
                "and CLOUDFLARE_API_TOKEN"
            )

        if not 4 <= self.cache_key_length <= 64:
            errors.append("CACHE_KEY_LENGTH must be between 4 and 64")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def caching_active(self) -> bool:
        """Whether a cache store should be created at all."""
        return self.cache_enabled and self.cache_backend != "none"


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
