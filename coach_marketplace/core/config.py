"""
Application configuration loaded from environment variables with sensible
defaults for local development.

All settings are validated at startup via Pydantic ``BaseSettings``.
Ranking weights and score tables are code constants (see
``coach_marketplace.algorithms.rankingTypes``), not settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the coach marketplace ranking service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Application --
    app_name: str = "Coach Marketplace Ranking API"
    app_version: str = "0.1.0"
    debug: bool = False

    # -- Logging --
    log_level: str = "INFO"
    log_format: str = "plain"  # "plain" or "json"

    # -- API --
    api_v1_prefix: str = "/api/v1"
    cors_allowed_origins: str = "*"

    # -- Marketplace result limits --
    default_max_results: int = 20
    max_results_limit: int = 100


settings = Settings()
