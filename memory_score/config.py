"""Configuration management using Pydantic Settings."""
from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine defaults loaded from environment variables (prefix ``MEMORY_SCORE_``)."""

    model_config = SettingsConfigDict(
        env_prefix="MEMORY_SCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Memory Score Diagnostic"
    stage_catalog: Literal["diagnostic", "framework"] = "diagnostic"

    # Decay projection
    decay_rate: float = Field(default=0.05, ge=0, lt=1, description="Decline per period")
    decay_horizon: List[int] = Field(default_factory=lambda: [0, 4, 8, 12, 16])
    breach_search_limit: int = Field(default=520, ge=1)  # 10 years of weeks

    # Status thresholds
    vulnerable_threshold: int = Field(default=40, ge=0, le=100)
    attention_threshold: int = Field(default=60, ge=0, le=100)

    # Comparison
    flat_benchmark: int = Field(default=60, ge=0, le=100)
    priority_limit: int = Field(default=3, ge=1)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
