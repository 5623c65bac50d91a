"""wavelink-backed implementation of the playback facade.

The player lives on ``guild.voice_client`` and is looked up on every call, so
a session object never holds a stale player reference. Lavalink and voice
errors are re-raised as ``FacadeError``.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, TypeVar

import discord
import wavelink

from harmony_bot.application.interfaces.playback_session import (
    PlaybackGateway,
    PlaybackSession,
    PlayOutcome,
    PlayRequest,
    TrackHandle,
)
from harmony_bot.domain.shared.exceptions import FacadeError, NoActiveSessionError
from harmony_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ...config.settings import LavalinkSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PLAYER_ERRORS = (wavelink.WavelinkException, discord.ClientException, asyncio.TimeoutError)


class HarmonyPlayer(wavelink.Player):
    """wavelink player that remembers where to announce tracks."""

    text_channel_id: int | None = None


def track_handle(track: wavelink.Playable, position_ms: int = 0) -> TrackHandle:
    return TrackHandle(
        title=track.title,
        url=track.uri,
        duration_ms=track.length,
        position_ms=position_ms,
        thumbnail=track.artwork,
        requested_by=getattr(track.extras, "requester_name", None),
        is_seekable=track.is_seekable,
    )


class WavelinkPlaybackSession(PlaybackSession):
    def __init__(
        self,
        bot: Bot,
        guild_id: int,
        *,
        search_source: str = "ytsearch",
        connect_timeout: float = 10.0,
    ) -> None:
        self._bot = bot
        self.guild_id = guild_id
        self._search_source = search_source
        self._connect_timeout = connect_timeout

    def _player(self) -> HarmonyPlayer | None:
        guild = self._bot.get_guild(self.guild_id)
        if guild is None:
            return None
        voice_client = guild.voice_client
        if isinstance(voice_client, HarmonyPlayer):
            return voice_client
        return None

    def _require_player(self) -> HarmonyPlayer:
        player = self._player()
        if player is None:
            raise NoActiveSessionError(self.guild_id)
        return player

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except _PLAYER_ERRORS as e:
            logger.warning(LogTemplates.PLAYER_OPERATION_FAILED, operation, self.guild_id, e)
            raise FacadeError(operation, str(e) or None) from e

    # ── Reads ───────────────────────────────────────────────────────

    def get_active(self) -> TrackHandle | None:
        player = self._player()
        if player is None or player.current is None:
            return None
        return track_handle(player.current, player.position)

    @property
    def is_connected(self) -> bool:
        player = self._player()
        return player is not None and player.connected

    @property
    def is_paused(self) -> bool:
        player = self._player()
        return player is not None and player.paused

    @property
    def is_repeating(self) -> bool:
        player = self._player()
        return player is not None and player.queue.mode is wavelink.QueueMode.loop

    @property
    def volume(self) -> int:
        player = self._player()
        return player.volume if player is not None else 0

    @property
    def queue_length(self) -> int:
        player = self._player()
        return len(player.queue) if player is not None else 0

    @property
    def total_queue_time_ms(self) -> int:
        player = self._player()
        if player is None:
            return 0
        total = sum(track.length for track in player.queue)
        if player.current is not None:
            total += max(0, player.current.length - player.position)
        return total

    def list_queue(self, limit: int) -> list[TrackHandle]:
        player = self._player()
        if player is None:
            return []
        return [track_handle(track) for track in itertools.islice(player.queue, limit)]

    # ── Operations ──────────────────────────────────────────────────

    async def play(self, voice_channel: Any, query: str, request: PlayRequest) -> PlayOutcome | None:
        player = self._player()
        if player is None:
            player = await self._call(
                "connect",
                voice_channel.connect(
                    cls=HarmonyPlayer, self_deaf=True, timeout=self._connect_timeout
                ),
            )
            player.autoplay = wavelink.AutoPlayMode.partial
            logger.info(LogTemplates.PLAYER_CONNECTED, self.guild_id, voice_channel.id)
        player.text_channel_id = request.text_channel_id

        results = await self._call(
            "search", wavelink.Playable.search(query, source=self._search_source)
        )
        if not results:
            logger.info(LogTemplates.TRACK_SEARCH_EMPTY, query, self.guild_id)
            return None

        extras = {
            "requester_id": request.requester_id,
            "requester_name": request.requester_name,
            "text_channel_id": request.text_channel_id,
        }
        playlist_name: str | None = None
        if isinstance(results, wavelink.Playlist):
            tracks = list(results.tracks)
            playlist_name = results.name
        else:
            tracks = [results[0]]
        for track in tracks:
            track.extras = extras

        added = await self._call("enqueue", player.queue.put_wait(tracks))
        logger.info(LogTemplates.TRACK_QUEUED, added, self.guild_id, len(player.queue))

        started = not player.playing
        if started:
            next_track = player.queue.get()
            await self._call("play", player.play(next_track, volume=request.volume))

        return PlayOutcome(
            track=track_handle(tracks[0]),
            started=started,
            added_count=added,
            playlist_name=playlist_name,
        )

    async def skip(self) -> None:
        player = self._require_player()
        await self._call("skip", player.skip(force=True))

    async def set_paused(self, paused: bool) -> None:
        player = self._require_player()
        await self._call("pause", player.pause(paused))

    async def stop(self) -> None:
        player = self._require_player()
        player.queue.clear()
        player.queue.mode = wavelink.QueueMode.normal
        await self._call("stop", player.skip(force=True))

    async def set_repeat(self, enabled: bool) -> None:
        player = self._require_player()
        player.queue.mode = wavelink.QueueMode.loop if enabled else wavelink.QueueMode.normal

    async def shuffle(self) -> None:
        player = self._require_player()
        player.queue.shuffle()

    async def seek_to(self, position_ms: int) -> None:
        player = self._require_player()
        await self._call("seek", player.seek(max(0, position_ms)))

    async def seek_by(self, delta_ms: int, *, clamp_to_duration: bool = True) -> int:
        player = self._require_player()
        if player.current is None:
            raise NoActiveSessionError(self.guild_id)
        target = max(0, player.position + delta_ms)
        if clamp_to_duration:
            target = min(target, player.current.length)
        await self._call("seek", player.seek(target))
        return target

    async def set_volume(self, percent: int) -> None:
        player = self._require_player()
        await self._call("volume", player.set_volume(percent))

    async def leave(self) -> None:
        player = self._require_player()
        await self._call("disconnect", player.disconnect())
        logger.info(LogTemplates.PLAYER_DISCONNECTED, self.guild_id)


class WavelinkPlaybackGateway(PlaybackGateway):
    """Owns the Lavalink node pool and one facade object per guild."""

    def __init__(self, bot: Bot, settings: LavalinkSettings) -> None:
        self._bot = bot
        self._settings = settings
        self._sessions: dict[int, WavelinkPlaybackSession] = {}

    def session(self, guild_id: int) -> WavelinkPlaybackSession:
        session = self._sessions.get(guild_id)
        if session is None:
            session = WavelinkPlaybackSession(
                self._bot,
                guild_id,
                search_source=self._settings.search_source,
                connect_timeout=self._settings.connect_timeout_s,
            )
            self._sessions[guild_id] = session
        return session

    def forget(self, guild_id: int) -> None:
        self._sessions.pop(guild_id, None)

    async def connect_nodes(self) -> None:
        settings = self._settings
        node = wavelink.Node(
            uri=settings.uri,
            password=settings.password.get_secret_value(),
            identifier=settings.identifier,
            retries=settings.retries,
        )
        logger.info(LogTemplates.LAVALINK_CONNECTING, settings.identifier, settings.uri)
        try:
            await wavelink.Pool.connect(
                nodes=[node], client=self._bot, cache_capacity=settings.cache_capacity
            )
        except wavelink.WavelinkException as e:
            logger.error(LogTemplates.LAVALINK_CONNECT_FAILED, settings.identifier, e)
            raise
