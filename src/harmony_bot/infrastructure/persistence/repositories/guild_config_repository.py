"""SQLite implementation of the guild configuration repository."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import aiosqlite
from pydantic import ValidationError as PydanticValidationError

from harmony_bot.domain.guild.entities import GuildConfig
from harmony_bot.domain.guild.repository import GuildConfigRepository
from harmony_bot.domain.shared.constants import GuildConfigDefaults
from harmony_bot.domain.shared.datetime_utils import to_iso, utcnow
from harmony_bot.domain.shared.exceptions import PersistenceError
from harmony_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteGuildConfigRepository(GuildConfigRepository):
    """Stores one row per guild, fronted by a write-through in-process cache.

    Records are immutable, so cached instances are shared safely between
    callers. Concurrent writers for the same guild are last-write-wins.
    """

    def __init__(
        self,
        database: Database,
        *,
        default_prefix: str = GuildConfigDefaults.PREFIX,
        default_volume: int = GuildConfigDefaults.DEFAULT_VOLUME,
    ) -> None:
        self._db = database
        self._default_prefix = default_prefix
        self._default_volume = default_volume
        self._cache: dict[int, GuildConfig] = {}

    async def get(self, guild_id: int) -> GuildConfig:
        cached = self._cache.get(guild_id)
        if cached is not None:
            return cached

        try:
            row = await self._fetch_row(guild_id)
            if row is None:
                await self._insert_defaults(guild_id)
                row = await self._fetch_row(guild_id)
        except aiosqlite.Error as e:
            logger.error(LogTemplates.GUILD_CONFIG_READ_FAILED, guild_id, e)
            raise PersistenceError("get", f"Could not read configuration for guild {guild_id}") from e

        if row is None:
            raise PersistenceError("get", f"Configuration for guild {guild_id} vanished after insert")

        config = self._row_to_config(row)
        self._cache[guild_id] = config
        return config

    async def save(self, config: GuildConfig) -> None:
        try:
            await self._db.execute(
                """
                INSERT INTO guild_configs (
                    guild_id, prefix, dj_role_ids, music_channel_id, default_volume, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(guild_id) DO UPDATE SET
                    prefix = excluded.prefix,
                    dj_role_ids = excluded.dj_role_ids,
                    music_channel_id = excluded.music_channel_id,
                    default_volume = excluded.default_volume,
                    updated_at = excluded.updated_at
                """,
                self._config_to_params(config),
            )
        except aiosqlite.Error as e:
            logger.error(LogTemplates.GUILD_CONFIG_WRITE_FAILED, config.guild_id, e)
            raise PersistenceError(
                "save", f"Could not write configuration for guild {config.guild_id}"
            ) from e

        self._cache[config.guild_id] = config
        logger.debug(LogTemplates.GUILD_CONFIG_SAVED, config.guild_id)

    async def _fetch_row(self, guild_id: int) -> dict[str, Any] | None:
        return await self._db.fetch_one(
            "SELECT * FROM guild_configs WHERE guild_id = ?",
            (guild_id,),
        )

    async def _insert_defaults(self, guild_id: int) -> None:
        defaults = GuildConfig.defaults(
            guild_id, prefix=self._default_prefix, default_volume=self._default_volume
        )
        inserted = await self._db.execute(
            """
            INSERT INTO guild_configs (
                guild_id, prefix, dj_role_ids, music_channel_id, default_volume, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(guild_id) DO NOTHING
            """,
            self._config_to_params(defaults),
        )
        if inserted:
            logger.info(LogTemplates.GUILD_CONFIG_CREATED, guild_id)

    @staticmethod
    def _config_to_params(config: GuildConfig) -> tuple[Any, ...]:
        return (
            config.guild_id,
            config.prefix,
            json.dumps(list(config.dj_role_ids)),
            config.music_channel_id,
            config.default_volume,
            to_iso(utcnow()),
        )

    @staticmethod
    def _row_to_config(row: dict[str, Any]) -> GuildConfig:
        try:
            return GuildConfig(
                guild_id=row["guild_id"],
                prefix=row["prefix"],
                dj_role_ids=json.loads(row["dj_role_ids"] or "[]"),
                music_channel_id=row["music_channel_id"],
                default_volume=row["default_volume"],
            )
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise PersistenceError(
                "decode", f"Stored configuration for guild {row['guild_id']} is corrupt"
            ) from e
