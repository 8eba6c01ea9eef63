"""
Environment-driven settings for the outfit engine (pydantic-settings).

Every field has a default, so scoring and generation work with no
environment at all.  Backends switch on as their variables appear:

    SUPABASE_URL + SUPABASE_SERVICE_KEY   wardrobe / saved-outfit store
    OPENWEATHER_API_KEY                   weather dimension
    SCORE_WEIGHTS='{"variety": 0.1}'      dimension weight overrides
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.constants import DEFAULT_SCORING_CONFIG, DEFAULT_WEIGHTS, ScoringConfig

PROJECT_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Settings read from the process environment and an optional ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Runtime
    # ==========================================================================
    environment: str = Field(default="development", description="development, staging or production")
    debug: bool = Field(default=False, description="Forces DEBUG logging")
    log_level: str = Field(default="INFO", description="Root log level name")
    json_logs: bool = Field(default=False, description="JSON log lines (always on in production)")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Supabase
    # ==========================================================================
    supabase_url: str = Field(default="")
    supabase_service_key: str = Field(default="", description="Service role key")

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    # ==========================================================================
    # Weather
    # ==========================================================================
    openweather_api_key: str = Field(default="", description="Empty disables the weather dimension")
    weather_cache_ttl_seconds: int = Field(default=600, ge=0)
    weather_request_timeout_seconds: float = Field(default=5.0, gt=0)

    # ==========================================================================
    # Generation
    # ==========================================================================
    generator_exhaustive_limit: int = Field(default=DEFAULT_SCORING_CONFIG.exhaustive_limit, ge=0)
    generator_sample_budget: int = Field(default=DEFAULT_SCORING_CONFIG.sample_budget, ge=1)
    generator_seed: Optional[int] = Field(default=None, description="Sampling seed; unset means random")

    # ==========================================================================
    # Weights
    # ==========================================================================
    score_weights: Dict[str, float] = Field(default_factory=dict)

    @field_validator("score_weights", mode="before")
    @classmethod
    def _decode_weights(cls, v):
        # SCORE_WEIGHTS arrives as a JSON string from the environment
        if isinstance(v, str):
            return json.loads(v) if v.strip() else {}
        return v

    @field_validator("score_weights")
    @classmethod
    def _known_non_negative_weights(cls, v: Dict[str, float]) -> Dict[str, float]:
        unknown = sorted(set(v) - set(DEFAULT_WEIGHTS))
        if unknown:
            raise ValueError(f"Unknown scoring dimensions: {unknown}")
        negative = sorted(k for k, w in v.items() if w < 0)
        if negative:
            raise ValueError(f"Weights must be non-negative: {negative}")
        return v

    def scoring_config(self) -> ScoringConfig:
        """``ScoringConfig`` with this environment's limits and weight overrides."""
        config = ScoringConfig(
            exhaustive_limit=self.generator_exhaustive_limit,
            sample_budget=self.generator_sample_budget,
        )
        return config.with_weights(**self.score_weights) if self.score_weights else config


@lru_cache
def get_settings() -> Settings:
    """Cached settings; reads ``<project>/.env`` when present."""
    return Settings(_env_file=PROJECT_ENV_FILE if PROJECT_ENV_FILE.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """Uncached settings that ignore ``.env``; keyword overrides win."""
    values = {"environment": "testing", "debug": True}
    values.update(overrides)
    return Settings(_env_file=None, **values)
