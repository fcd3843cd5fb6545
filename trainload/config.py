"""
Trainload configuration.
Settings come from environment variables prefixed with TRAINLOAD_ or a .env file.
"""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRAINLOAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Trainload"
    app_env: str = "local"
    log_level: str = "INFO"

    # Readiness
    default_rest_hours: int = 48
    rest_window_strategy: Literal["flat", "guideline", "learned"] = "flat"
    default_window_days: int = 30

    # Balance
    deload_set_threshold: int = 100

    # Records
    top_performance_count: int = 3
    weight_unit: str = "kg"

    # Session timer
    rest_countdown_seconds: int = 90


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
