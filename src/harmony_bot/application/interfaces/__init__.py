"""Application interfaces (ports) implemented by the infrastructure layer."""

from harmony_bot.application.interfaces.playback_session import (
    PlaybackGateway,
    PlaybackSession,
    PlayOutcome,
    PlayRequest,
    TrackHandle,
)

__all__ = [
    "PlaybackGateway",
    "PlaybackSession",
    "PlayOutcome",
    "PlayRequest",
    "TrackHandle",
]
