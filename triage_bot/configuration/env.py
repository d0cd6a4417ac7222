"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # HTTP server settings
    WEBHOOK_PATH: str = "/webhook"

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY: str | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_WEBHOOK_SECRET: str | None = None

    # Bot behaviour
    TRIGGER_PREFIX: str = "!bot"
    PRIVILEGED_USER_IDS: str = ""
    PATH_LABEL_RULES_FILE: Path | None = None
