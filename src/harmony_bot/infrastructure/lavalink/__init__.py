"""Lavalink playback adapter built on wavelink."""

from harmony_bot.infrastructure.lavalink.wavelink_session import (
    HarmonyPlayer,
    WavelinkPlaybackGateway,
    WavelinkPlaybackSession,
    track_handle,
)

__all__ = ["HarmonyPlayer", "WavelinkPlaybackGateway", "WavelinkPlaybackSession", "track_handle"]
