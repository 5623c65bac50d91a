"""SQLite store for guild configuration records.

Every call opens its own aiosqlite connection in WAL mode. In-memory
databases are named shared-cache URIs held open by a keepalive connection,
so tests can use several connections against one database.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiosqlite

from harmony_bot.domain.shared.constants import DatabaseTables, GuildConfigDefaults, SQLPragmas
from harmony_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...config.settings import DatabaseSettings

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

_SCHEMA = (
    f"""
    CREATE TABLE IF NOT EXISTS {DatabaseTables.GUILD_CONFIGS} (
        guild_id INTEGER PRIMARY KEY,
        prefix TEXT NOT NULL,
        dj_role_ids TEXT NOT NULL DEFAULT '[]',
        music_channel_id INTEGER,
        updated_at TEXT NOT NULL
    )
    """,
    f"CREATE INDEX IF NOT EXISTS idx_guild_configs_music_channel "
    f"ON {DatabaseTables.GUILD_CONFIGS}(music_channel_id)",
)

# Columns added after the first release; applied to older files in order.
_ADDED_COLUMNS: tuple[tuple[str, str, str], ...] = (
    (
        DatabaseTables.GUILD_CONFIGS,
        "default_volume",
        f"INTEGER NOT NULL DEFAULT {GuildConfigDefaults.DEFAULT_VOLUME}",
    ),
)

_memory_names = itertools.count(1)


def sqlite_path(url: str) -> str:
    """Strip the ``sqlite:///`` scheme, leaving a file path or ``:memory:``."""
    return url.removeprefix("sqlite:///")


class Database:
    def __init__(self, url: str, settings: DatabaseSettings | None = None) -> None:
        self._path = sqlite_path(url)
        self._busy_timeout_ms = settings.busy_timeout_ms if settings else 5000
        self._timeout_s = settings.connection_timeout_s if settings else 10
        self._memory_uri = f"file:harmony-{next(_memory_names)}?mode=memory&cache=shared"
        self._keepalive: aiosqlite.Connection | None = None
        self._ready = False

    @property
    def is_memory(self) -> bool:
        return self._path == MEMORY

    @property
    def is_initialized(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        """Create the schema and apply column migrations. Safe to call twice."""
        if self._ready:
            return

        if self.is_memory:
            if self._keepalive is None:
                self._keepalive = await self._open()
        else:
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)

        async with self.transaction() as conn:
            for statement in _SCHEMA:
                await conn.execute(statement)
            for table, column, ddl in _ADDED_COLUMNS:
                await self._add_column_if_missing(conn, table, column, ddl)

        self._ready = True
        logger.info(LogTemplates.DATABASE_INITIALIZED, self._path)

    @staticmethod
    async def _add_column_if_missing(
        conn: aiosqlite.Connection, table: str, column: str, ddl: str
    ) -> None:
        rows = await conn.execute_fetchall(SQLPragmas.TABLE_INFO.format(table=table))
        if column in {row[1] for row in rows}:
            return
        await conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}")
        logger.info(LogTemplates.TABLE_MIGRATED, table, column)

    async def _open(self) -> aiosqlite.Connection:
        target, uri = (self._memory_uri, True) if self.is_memory else (self._path, False)
        conn = await aiosqlite.connect(target, uri=uri, timeout=self._timeout_s)
        conn.row_factory = aiosqlite.Row
        for pragma in (
            SQLPragmas.JOURNAL_MODE_WAL,
            SQLPragmas.FOREIGN_KEYS_ON,
            SQLPragmas.BUSY_TIMEOUT.format(timeout=self._busy_timeout_ms),
        ):
            await conn.execute(pragma)
        return conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a fresh connection; commit on success, roll back on error."""
        conn = await self._open()
        try:
            yield conn
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
        finally:
            await conn.close()

    async def execute(self, sql: str, parameters: tuple[Any, ...] = ()) -> int:
        """Run one statement in its own transaction; returns the affected row count."""
        async with self.transaction() as conn:
            cursor = await conn.execute(sql, parameters)
            return cursor.rowcount

    async def fetch_one(self, sql: str, parameters: tuple[Any, ...] = ()) -> dict[str, Any] | None:
        async with self.transaction() as conn:
            cursor = await conn.execute(sql, parameters)
            row = await cursor.fetchone()
        return dict(row) if row is not None else None

    async def close(self) -> None:
        if self._keepalive is not None:
            try:
                await self._keepalive.close()
            finally:
                self._keepalive = None
        self._ready = False
        logger.info(LogTemplates.DATABASE_CLOSED)
