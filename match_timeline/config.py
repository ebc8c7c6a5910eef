"""
Typed settings for the match timeline engine and highlight notifier.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. A local .env file at the repository root
is honoured for development.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env


class FeedConfig(BaseModel):
    base_url: str = Field(default="https://www.shl.se/api")
    season_uuid: str = "xs4m9qupsi"
    series_uuid: str = "qQ9-bb0bzEWUk"
    game_type_uuid: str = "qQ9-af37Ti40B"
    videos_page_size: int = 20
    request_timeout_seconds: int = 15
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )


class NotifierConfig(BaseModel):
    seen_games_file: str = "./seen_games.json"
    # Fixed polling interval between cycles
    interval_seconds: int = Field(default=300)  # 5 minutes
    # Games older than this (measured from start time) are given up on
    max_age_hours: int = Field(default=24)
    ntfy_url: str = "https://ntfy.sh"
    topic_prefix: str = "shl-highlights-"
    priority: int = 4
    request_timeout_seconds: int = 10


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Nested feed/notifier settings keep their defaults unless one of the
    flat override variables below is set.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    log_format: str = Field("json", alias="LOG_FORMAT")
    feed_config: FeedConfig = Field(default_factory=FeedConfig)
    notifier_config: NotifierConfig = Field(default_factory=NotifierConfig)

    feed_base_url_override: str | None = Field(None, alias="FEED_BASE_URL")
    seen_games_file_override: str | None = Field(None, alias="SEEN_GAMES_FILE")
    notifier_interval_override: int | None = Field(None, alias="NOTIFIER_INTERVAL_SECONDS")
    max_age_hours_override: int | None = Field(None, alias="HIGHLIGHT_MAX_AGE_HOURS")
    ntfy_url_override: str | None = Field(None, alias="NTFY_URL")

    @model_validator(mode="after")
    def _apply_overrides(self) -> Settings:
        """
        Allow top-level env vars to override the nested configs without
        requiring double-underscore syntax.
        """
        if self.feed_base_url_override:
            self.feed_config.base_url = self.feed_base_url_override.rstrip("/")
        if self.seen_games_file_override:
            self.notifier_config.seen_games_file = self.seen_games_file_override
        if self.notifier_interval_override is not None:
            self.notifier_config.interval_seconds = self.notifier_interval_override
        if self.max_age_hours_override is not None:
            self.notifier_config.max_age_hours = self.max_age_hours_override
        if self.ntfy_url_override:
            self.notifier_config.ntfy_url = self.ntfy_url_override.rstrip("/")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Settings are cached to avoid re-parsing environment variables
    on every access.
    """
    validate_env()
    return Settings()


# Global settings instance - import this in other modules
settings = get_settings()
