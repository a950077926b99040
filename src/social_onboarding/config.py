"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables
  - Fall back to a .env file at the project root
  - Validate types and constraints once, at startup

Only AppSettings is a BaseSettings; the sub-settings are plain BaseModel
classes populated through env_nested_delimiter="__", so SOCIAL__URL maps to
social.url, EMAIL__URL to email.url, DIRECTORY__SEED_FILE to
directory.seed_file, and so on.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from social_onboarding.pipeline import DEFAULT_MESSAGE

_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class SocialNetworkSettings(BaseModel):
    """Social network API the people are registered on."""

    url: str = Field(description="Base URL of the social network API")
    api_key: SecretStr = Field(description="Bearer key for account and session endpoints")


class EmailSettings(BaseModel):
    """Transactional mail API used for welcome emails."""

    url: str = Field(description="Welcome email endpoint URL")


class DirectorySettings(BaseModel):
    """Where the in-memory person directory is seeded from."""

    seed_file: Path | None = Field(
        default=None,
        description="JSON list of people; empty directory when unset",
    )

    @field_validator("seed_file")
    @classmethod
    def seed_file_exists(cls, value: Path | None) -> Path | None:
        if value is not None and not value.is_file():
            raise ValueError(f"Seed file does not exist: {value}")
        return value


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    social: SocialNetworkSettings
    email: EmailSettings | None = None
    directory: DirectorySettings = Field(default_factory=lambda: DirectorySettings())

    tweet_message: str = Field(default=DEFAULT_MESSAGE, min_length=1)
    http_timeout_seconds: float = Field(default=30, gt=0)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level
