"""
Application configuration.

Loads settings from environment variables (prefix ``ARTICLELINGO_``) with
sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# USD per 1K tokens
DEFAULT_MODEL_PRICING: dict[str, dict[str, float]] = {
    "gpt-4o-mini": {"input": 0.00015, "output": 0.0006},
    "gpt-4o": {"input": 0.0025, "output": 0.01},
    "gpt-4-turbo-preview": {"input": 0.01, "output": 0.03},
    "gpt-3.5-turbo": {"input": 0.0005, "output": 0.0015},
}


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="ARTICLELINGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    log_level: str = "INFO"

    # ==========================================================================
    # AI / LLM
    # ==========================================================================

    openai_api_key: str = ""
    openai_base_url: str = ""
    translation_model: str = "gpt-4o-mini"
    translation_temperature: float = 0.3
    request_timeout: float = 60.0
    model_pricing: dict[str, dict[str, float]] = Field(
        default_factory=lambda: {k: dict(v) for k, v in DEFAULT_MODEL_PRICING.items()}
    )

    # ==========================================================================
    # Translation pipeline
    # ==========================================================================

    cache_ttl_seconds: int = 60 * 60 * 24 * 30  # 30 days
    long_text_threshold_words: int = 2000
    chunk_max_words: int = 1500

    # Pacing between backend calls (not a rate limiter)
    chunk_delay_seconds: float = 0.1
    language_delay_seconds: float = 0.2
    content_delay_seconds: float = 1.0

    # Batch-level retry on backend backpressure (HTTP 429)
    rate_limit_retries: int = 3
    rate_limit_backoff_seconds: float = 2.0

    # ==========================================================================
    # Publishing
    # ==========================================================================

    default_language: str = "fr"
    site_base_url: str = "https://example.com"

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def has_openai(self) -> bool:
        return bool(self.openai_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
