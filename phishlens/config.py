"""PhishLens configuration system using Pydantic Settings."""

from __future__ import annotations

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhishLensConfig(BaseSettings):
    """Main configuration class. Loads from .env file and environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "PhishLens"
    version: str = "0.3.0"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: str = "http://localhost:5173,http://localhost:3000"  # comma-separated

    # Database (learning state key-value records)
    database_url: str = "sqlite+aiosqlite:///./phishlens.db"

    # Logging
    log_dir: str = "logs"
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    # Threat-feed collaborator
    blacklist_provider: str = "reputation"  # reputation / urlhaus / chained / none
    blacklist_timeout_seconds: float = 3.0
    urlhaus_api_url: str = "https://urlhaus-api.abuse.ch/v1"
    urlhaus_auth_key: Optional[str] = None

    # Adaptive learning
    feedback_log_size: int = 100

    @field_validator("blacklist_provider")
    @classmethod
    def validate_blacklist_provider(cls, v: str) -> str:
        allowed = {"reputation", "urlhaus", "chained", "none"}
        if v not in allowed:
            raise ValueError(f"blacklist_provider must be one of {allowed}")
        return v

    @field_validator("blacklist_timeout_seconds")
    @classmethod
    def validate_blacklist_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("blacklist_timeout_seconds must be positive")
        return v

    @field_validator("feedback_log_size")
    @classmethod
    def validate_feedback_log_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("feedback_log_size must be at least 1")
        return v


def get_config() -> PhishLensConfig:
    """Factory function to create config instance."""
    return PhishLensConfig()
