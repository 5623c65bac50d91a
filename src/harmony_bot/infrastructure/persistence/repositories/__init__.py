"""SQLite repository implementations."""

from harmony_bot.infrastructure.persistence.repositories.guild_config_repository import (
    SQLiteGuildConfigRepository,
)

__all__ = ["SQLiteGuildConfigRepository"]
