"""Port interface for the per-guild audio player.

The application layer talks to the player engine only through this facade.
A guild with no player is a normal state: ``get_active`` simply returns None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TrackHandle:
    """Read-only snapshot of a track as exposed by the player."""

    title: str
    url: str | None
    duration_ms: int
    position_ms: int = 0
    thumbnail: str | None = None
    requested_by: str | None = None
    is_seekable: bool = True


@dataclass(frozen=True)
class PlayRequest:
    """Metadata attached to a play request."""

    text_channel_id: int
    requester_id: int
    requester_name: str
    volume: int


@dataclass(frozen=True)
class PlayOutcome:
    """Result of a play request that found something to play.

    ``started`` is True when the request began playback immediately rather
    than joining the queue behind the current track.
    """

    track: TrackHandle
    started: bool
    added_count: int = 1
    playlist_name: str | None = None


class PlaybackSession(ABC):
    """Interface for the audio player of a single guild."""

    guild_id: int

    # ── Reads ───────────────────────────────────────────────────────

    @abstractmethod
    def get_active(self) -> TrackHandle | None:
        """The currently playing track, or None when nothing is active."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool: ...

    @property
    @abstractmethod
    def is_paused(self) -> bool: ...

    @property
    @abstractmethod
    def is_repeating(self) -> bool: ...

    @property
    @abstractmethod
    def volume(self) -> int: ...

    @property
    @abstractmethod
    def queue_length(self) -> int: ...

    @property
    @abstractmethod
    def total_queue_time_ms(self) -> int:
        """Remaining time of the current track plus every queued track."""
        ...

    @abstractmethod
    def list_queue(self, limit: int) -> list[TrackHandle]:
        """Up to ``limit`` upcoming tracks, in play order."""
        ...

    # ── Operations ──────────────────────────────────────────────────

    @abstractmethod
    async def play(self, voice_channel: Any, query: str, request: PlayRequest) -> PlayOutcome | None:
        """Connect if needed, resolve ``query`` and start or enqueue the result.

        Returns None when the search produced nothing.
        """
        ...

    @abstractmethod
    async def skip(self) -> None: ...

    @abstractmethod
    async def set_paused(self, paused: bool) -> None: ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop the current track and clear the queue, staying connected."""
        ...

    @abstractmethod
    async def set_repeat(self, enabled: bool) -> None: ...

    @abstractmethod
    async def shuffle(self) -> None: ...

    @abstractmethod
    async def seek_to(self, position_ms: int) -> None: ...

    @abstractmethod
    async def seek_by(self, delta_ms: int, *, clamp_to_duration: bool = True) -> int:
        """Seek relative to the current position and return the new position.

        The result is clamped at 0 and, when ``clamp_to_duration`` is set, at
        the track length.
        """
        ...

    @abstractmethod
    async def set_volume(self, percent: int) -> None: ...

    @abstractmethod
    async def leave(self) -> None:
        """Disconnect from voice, discarding the queue."""
        ...


class PlaybackGateway(ABC):
    """Hands out the playback facade for a guild."""

    @abstractmethod
    def session(self, guild_id: int) -> PlaybackSession: ...
