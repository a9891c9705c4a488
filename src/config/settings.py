# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings: embedding and
generation providers, matching defaults and blend weights, profile store
backend and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_WEIGHT_TOLERANCE = 1e-6


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Provider credentials ===
    google_api_key: str = ""
    openai_api_key: str = ""
    ollama_base_url: str = "http://localhost:11434"

    # === EMBEDDINGS ===
    embedding_provider: str = "google"
    embedding_model: str = "gemini-embedding-001"
    embedding_openai_model: str = "text-embedding-3-small"
    embedding_ollama_model: str = "nomic-embed-text"
    embedding_dimensions: int = 3072
    embedding_timeout_s: float = 30.0
    embedding_max_retries: int = 0

    # === Text generation (profile suggestion) ===
    llm_provider: str = "google"
    llm_model: str = "gemini-2.5-flash"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 2048
    llm_max_retries: int = 0

    # === Matching ===
    matching_top_n: int = 5
    matching_min_similarity: float = 0.5

    # === Scoring weights (hybrid blend) ===
    scoring_w_ai_similarity: float = 0.2
    scoring_w_blood_type: float = 0.5
    scoring_w_location: float = 0.1
    scoring_w_age: float = 0.2

    # === Profile store ===
    profile_store_backend: Literal["memory", "json"] = "memory"
    profile_store_root: Path = Path("~/.donormatch/profiles")

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("matching_top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("matching_top_n must be >= 1")
        return v

    @field_validator("embedding_max_retries", "llm_max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("max_retries must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        weights = self.scoring_weights
        if any(w < 0 for w in weights.values()):
            errors.append("SCORING_W_* weights must be >= 0")
        elif abs(sum(weights.values()) - 1.0) > _WEIGHT_TOLERANCE:
            errors.append(
                f"SCORING_W_* weights must sum to 1.0 (got {sum(weights.values()):.4f})"
            )

        if not 0.0 <= self.matching_min_similarity <= 1.0:
            errors.append("MATCHING_MIN_SIMILARITY must be within [0, 1]")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def scoring_weights(self) -> dict[str, float]:
        """Blend weights keyed by component."""
        return {
            "ai_similarity": self.scoring_w_ai_similarity,
            "blood_type": self.scoring_w_blood_type,
            "location": self.scoring_w_location,
            "age": self.scoring_w_age,
        }


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-request config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
