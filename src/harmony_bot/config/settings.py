"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import GuildConfigDefaults, LimitConstants
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.validators import validate_discord_snowflake, validate_prefix


class DatabaseSettings(BaseModel):
    """Database configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/harmony.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: int = Field(
        default=5000,
        ge=1000,
        le=30000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: int = Field(
        default=10,
        ge=1,
        le=60,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith("sqlite://"):
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    default_prefix: str = Field(
        default=GuildConfigDefaults.PREFIX,
        validation_alias=AliasChoices("default_prefix", "prefix", "command_prefix"),
    )
    owner_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("owner_ids", "owners")
    )
    # Falls back to "music | <prefix>help" when unset.
    activity_name: str | None = Field(
        default=None, validation_alias=AliasChoices("activity_name", "activity", "status")
    )

    @field_validator("default_prefix")
    @classmethod
    def validate_default_prefix(cls, v: str) -> str:
        return validate_prefix(v)

    @field_validator("owner_ids", mode="before")
    @classmethod
    def validate_snowflake_ids(cls, v: tuple[int, ...] | list[int]) -> tuple[int, ...]:
        """Validate Discord snowflake IDs and convert lists to tuples."""
        # Convert list to tuple if needed (from JSON array in env vars)
        if isinstance(v, list):
            v = tuple(v)
        for snowflake in v:
            validate_discord_snowflake(snowflake)
        return v


class LavalinkSettings(BaseModel):
    """Lavalink node connection."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    uri: str = Field(
        default="http://localhost:2333",
        validation_alias=AliasChoices("uri", "url", "lavalink_uri"),
    )
    password: SecretStr = Field(
        default=SecretStr("youshallnotpass"),
        validation_alias=AliasChoices("password", "lavalink_password"),
    )
    identifier: str = "main"
    retries: int | None = Field(default=None, ge=0)
    cache_capacity: int | None = Field(default=100, ge=1)
    search_source: str = Field(
        default="ytsearch",
        validation_alias=AliasChoices("search_source", "source"),
    )
    connect_timeout_s: float = Field(default=10.0, gt=0, le=120)

    @field_validator("uri")
    @classmethod
    def validate_uri(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(ErrorMessages.INVALID_LAVALINK_URI)
        return v.rstrip("/")

    @field_validator("search_source")
    @classmethod
    def validate_search_source(cls, v: str) -> str:
        if not v.isalnum():
            raise ValueError(ErrorMessages.INVALID_SEARCH_SOURCE)
        return v


class PlayerSettings(BaseModel):
    """Playback defaults and display limits."""

    model_config = SettingsConfigDict(frozen=True)

    default_volume: int = Field(
        default=GuildConfigDefaults.DEFAULT_VOLUME,
        ge=LimitConstants.MIN_VOLUME,
        le=LimitConstants.MAX_VOLUME,
    )
    seek_step_ms: int = Field(default=LimitConstants.SEEK_STEP_MS, ge=1000, le=60_000)
    queue_display_limit: int = Field(default=LimitConstants.QUEUE_DISPLAY_LIMIT, ge=1, le=25)
    progress_bar_length: int = Field(default=LimitConstants.PROGRESS_BAR_LENGTH, ge=5, le=30)


class LinkSettings(BaseModel):
    """Links shown by the invite and support commands."""

    model_config = SettingsConfigDict(frozen=True)

    invite_url: str = ""
    support_url: str = ""


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__DEFAULT_PREFIX, etc. (nested with prefix)
    - LAVALINK__URI, LAVALINK__PASSWORD
    - PLAYER__DEFAULT_VOLUME, LINKS__INVITE_URL
    - DATABASE__URL
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    lavalink: LavalinkSettings = Field(default_factory=LavalinkSettings)
    player: PlayerSettings = Field(default_factory=PlayerSettings)
    links: LinkSettings = Field(default_factory=LinkSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels))
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
