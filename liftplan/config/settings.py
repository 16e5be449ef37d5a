"""Application configuration settings."""
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LIFTPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "liftplan"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = True  # JSON lines; False renders console output

    # Storage - JSON documents, one file per key
    data_dir: Path = Path.home() / ".liftplan"

    # Generation tuning file (defaults to the packaged generation_config.yaml)
    generation_config_path: Path | None = None

    # Default session length when the plan does not recommend one
    default_duration_minutes: int = 45


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
