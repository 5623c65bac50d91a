from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio

from harmony_bot.application.interfaces.playback_session import (
    PlaybackSession,
    PlayOutcome,
    PlayRequest,
    TrackHandle,
)
from harmony_bot.domain.guild.authorization import MemberContext
from harmony_bot.domain.guild.entities import GuildConfig

GUILD_ID = 111111111111111111
USER_ID = 222222222222222222
DJ_ROLE_ID = 333333333333333333
TEXT_CHANNEL_ID = 444444444444444444

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from harmony_bot.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def guild_config_repository(in_memory_database):
    """Create a guild configuration repository with in-memory database."""
    from harmony_bot.infrastructure.persistence.repositories.guild_config_repository import (
        SQLiteGuildConfigRepository,
    )

    return SQLiteGuildConfigRepository(in_memory_database)


# ============================================================================
# Playback Fixtures
# ============================================================================


class FakeSession(PlaybackSession):
    """In-memory playback facade that records every operation it receives."""

    def __init__(self, active: TrackHandle | None = None, *, queue: list[TrackHandle] | None = None):
        self.guild_id = GUILD_ID
        self.active = active
        self.queue = list(queue or [])
        self.paused = False
        self.repeating = False
        self.current_volume = 50
        self.calls: list[tuple[str, Any]] = []
        self.play_outcome: PlayOutcome | None = None
        self.raise_on: dict[str, Exception] = {}

    def _record(self, name: str, arg: Any = None) -> None:
        self.calls.append((name, arg))
        if name in self.raise_on:
            raise self.raise_on[name]

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def get_active(self) -> TrackHandle | None:
        return self.active

    @property
    def is_connected(self) -> bool:
        return self.active is not None

    @property
    def is_paused(self) -> bool:
        return self.paused

    @property
    def is_repeating(self) -> bool:
        return self.repeating

    @property
    def volume(self) -> int:
        return self.current_volume

    @property
    def queue_length(self) -> int:
        return len(self.queue)

    @property
    def total_queue_time_ms(self) -> int:
        return sum(t.duration_ms for t in self.queue)

    def list_queue(self, limit: int) -> list[TrackHandle]:
        return self.queue[:limit]

    async def play(self, voice_channel: Any, query: str, request: PlayRequest) -> PlayOutcome | None:
        self._record("play", (query, request))
        return self.play_outcome

    async def skip(self) -> None:
        self._record("skip")

    async def set_paused(self, paused: bool) -> None:
        self._record("set_paused", paused)
        self.paused = paused

    async def stop(self) -> None:
        self._record("stop")

    async def set_repeat(self, enabled: bool) -> None:
        self._record("set_repeat", enabled)
        self.repeating = enabled

    async def shuffle(self) -> None:
        self._record("shuffle")

    async def seek_to(self, position_ms: int) -> None:
        self._record("seek_to", position_ms)

    async def seek_by(self, delta_ms: int, *, clamp_to_duration: bool = True) -> int:
        self._record("seek_by", delta_ms)
        return delta_ms

    async def set_volume(self, percent: int) -> None:
        self._record("set_volume", percent)
        self.current_volume = percent

    async def leave(self) -> None:
        self._record("leave")


@pytest.fixture
def sample_track() -> TrackHandle:
    return TrackHandle(
        title="Test Track",
        url="https://example.com/watch?v=test123",
        duration_ms=180_000,
        position_ms=30_000,
        thumbnail="https://example.com/thumb.jpg",
        requested_by="Tester",
    )


@pytest.fixture
def idle_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def playing_session(sample_track) -> FakeSession:
    return FakeSession(sample_track)


# ============================================================================
# Guild / Member Fixtures
# ============================================================================


@pytest.fixture
def default_config() -> GuildConfig:
    return GuildConfig.defaults(GUILD_ID)


@pytest.fixture
def dj_config() -> GuildConfig:
    return GuildConfig(guild_id=GUILD_ID, dj_role_ids=(DJ_ROLE_ID,))


@pytest.fixture
def plain_member() -> MemberContext:
    return MemberContext(user_id=USER_ID)


@pytest.fixture
def dj_member() -> MemberContext:
    return MemberContext(user_id=USER_ID, role_ids=frozenset({DJ_ROLE_ID}))


@pytest.fixture
def admin_member() -> MemberContext:
    return MemberContext(user_id=USER_ID, can_manage_guild=True)
