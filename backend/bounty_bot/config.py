"""Configuration management for Status Bounty Bot."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # GitHub
    github_token: str = ""
    github_api_base: str = "https://api.github.com"

    # Slack
    slack_bot_token: str = ""

    # Webhook secret (for signature verification)
    github_webhook_secret: str = ""

    # Per-repository bot config
    bot_config_file: str = "github-bot.yml"
    default_bot_config_path: str = ""

    # Dry-run flags
    dry_run: bool = False
    dry_run_bounty_approval: bool = False

    # App
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    env: str = "development"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
