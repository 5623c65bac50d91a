"""Playback actions: the closed set of things a member can ask the bot to do.

Every chat command, button press and select-menu choice is normalized into
exactly one of these values before authorization and dispatch. Each action
class carries its ``kind`` and the ``category`` that drives permission checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ActionCategory(Enum):
    CONFIGURATION = "configuration"
    PLAYBACK_CONTROL = "playback_control"
    INFORMATIONAL = "informational"
    REQUEST = "request"


class ActionKind(Enum):
    PLAY = "play"
    SKIP = "skip"
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE_PAUSE = "toggle_pause"
    STOP = "stop"
    TOGGLE_LOOP = "toggle_loop"
    SHUFFLE = "shuffle"
    SEEK_BY = "seek_by"
    SEEK_TO = "seek_to"
    SET_VOLUME = "set_volume"
    LEAVE = "leave"
    SET_PREFIX = "set_prefix"
    SET_MUSIC_CHANNEL = "set_music_channel"
    ADD_DJ_ROLE = "add_dj_role"
    REMOVE_DJ_ROLE = "remove_dj_role"
    SHOW_QUEUE = "show_queue"
    NOW_PLAYING = "now_playing"
    HELP = "help"
    HELP_TOPIC = "help_topic"
    INVITE = "invite"
    SUPPORT = "support"
    LYRICS = "lyrics"
    UNKNOWN_COMMAND = "unknown_command"
    BAD_TIME_FORMAT = "bad_time_format"
    BAD_VOLUME = "bad_volume"
    MISSING_QUERY = "missing_query"


class HelpTopic(Enum):
    MUSIC = "music"
    CONFIG = "config"
    INFO = "info"


@dataclass(frozen=True)
class _Action:
    kind: ClassVar[ActionKind]
    category: ClassVar[ActionCategory]


# ── Play requests ───────────────────────────────────────────────────


@dataclass(frozen=True)
class Play(_Action):
    kind = ActionKind.PLAY
    category = ActionCategory.REQUEST

    query: str
    from_music_channel: bool = False


@dataclass(frozen=True)
class MissingQuery(_Action):
    kind = ActionKind.MISSING_QUERY
    category = ActionCategory.REQUEST


# ── Playback control ────────────────────────────────────────────────


@dataclass(frozen=True)
class Skip(_Action):
    kind = ActionKind.SKIP
    category = ActionCategory.PLAYBACK_CONTROL


@dataclass(frozen=True)
class Pause(_Action):
    kind = ActionKind.PAUSE
    category = ActionCategory.PLAYBACK_CONTROL


@dataclass(frozen=True)
class Resume(_Action):
    kind = ActionKind.RESUME
    category = ActionCategory.PLAYBACK_CONTROL


@dataclass(frozen=True)
class TogglePause(_Action):
    kind = ActionKind.TOGGLE_PAUSE
    category = ActionCategory.PLAYBACK_CONTROL


@dataclass(frozen=True)
class Stop(_Action):
    kind = ActionKind.STOP
    category = ActionCategory.PLAYBACK_CONTROL


@dataclass(frozen=True)
class ToggleLoop(_Action):
    kind = ActionKind.TOGGLE_LOOP
    category = ActionCategory.PLAYBACK_CONTROL


@dataclass(frozen=True)
class Shuffle(_Action):
    kind = ActionKind.SHUFFLE
    category = ActionCategory.PLAYBACK_CONTROL


@dataclass(frozen=True)
class SeekBy(_Action):
    """Relative seek; negative deltas rewind."""

    kind = ActionKind.SEEK_BY
    category = ActionCategory.PLAYBACK_CONTROL

    delta_ms: int


@dataclass(frozen=True)
class SeekTo(_Action):
    kind = ActionKind.SEEK_TO
    category = ActionCategory.PLAYBACK_CONTROL

    position_ms: int


@dataclass(frozen=True)
class SetVolume(_Action):
    kind = ActionKind.SET_VOLUME
    category = ActionCategory.PLAYBACK_CONTROL

    percent: int


@dataclass(frozen=True)
class Leave(_Action):
    kind = ActionKind.LEAVE
    category = ActionCategory.PLAYBACK_CONTROL


@dataclass(frozen=True)
class BadTimeFormat(_Action):
    """A seek whose time argument was missing or unparseable."""

    kind = ActionKind.BAD_TIME_FORMAT
    category = ActionCategory.PLAYBACK_CONTROL

    raw: str


@dataclass(frozen=True)
class BadVolume(_Action):
    """A volume change whose argument was not an integer in range."""

    kind = ActionKind.BAD_VOLUME
    category = ActionCategory.PLAYBACK_CONTROL

    raw: str


# ── Configuration ───────────────────────────────────────────────────


@dataclass(frozen=True)
class SetPrefix(_Action):
    kind = ActionKind.SET_PREFIX
    category = ActionCategory.CONFIGURATION

    prefix: str | None


@dataclass(frozen=True)
class SetMusicChannel(_Action):
    """Set (or clear, when ``channel_id`` is None) the music channel."""

    kind = ActionKind.SET_MUSIC_CHANNEL
    category = ActionCategory.CONFIGURATION

    channel_id: int | None
    invalid_argument: str | None = None


@dataclass(frozen=True)
class AddDjRole(_Action):
    kind = ActionKind.ADD_DJ_ROLE
    category = ActionCategory.CONFIGURATION

    role_id: int | None


@dataclass(frozen=True)
class RemoveDjRole(_Action):
    kind = ActionKind.REMOVE_DJ_ROLE
    category = ActionCategory.CONFIGURATION

    role_id: int | None


# ── Informational ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ShowQueue(_Action):
    kind = ActionKind.SHOW_QUEUE
    category = ActionCategory.INFORMATIONAL


@dataclass(frozen=True)
class NowPlaying(_Action):
    kind = ActionKind.NOW_PLAYING
    category = ActionCategory.INFORMATIONAL


@dataclass(frozen=True)
class Help(_Action):
    kind = ActionKind.HELP
    category = ActionCategory.INFORMATIONAL


@dataclass(frozen=True)
class ShowHelpTopic(_Action):
    kind = ActionKind.HELP_TOPIC
    category = ActionCategory.INFORMATIONAL

    topic: HelpTopic


@dataclass(frozen=True)
class Invite(_Action):
    kind = ActionKind.INVITE
    category = ActionCategory.INFORMATIONAL


@dataclass(frozen=True)
class Support(_Action):
    kind = ActionKind.SUPPORT
    category = ActionCategory.INFORMATIONAL


@dataclass(frozen=True)
class Lyrics(_Action):
    kind = ActionKind.LYRICS
    category = ActionCategory.INFORMATIONAL


@dataclass(frozen=True)
class UnknownCommand(_Action):
    kind = ActionKind.UNKNOWN_COMMAND
    category = ActionCategory.INFORMATIONAL

    token: str


PlaybackAction = (
    Play
    | MissingQuery
    | Skip
    | Pause
    | Resume
    | TogglePause
    | Stop
    | ToggleLoop
    | Shuffle
    | SeekBy
    | SeekTo
    | SetVolume
    | Leave
    | BadTimeFormat
    | BadVolume
    | SetPrefix
    | SetMusicChannel
    | AddDjRole
    | RemoveDjRole
    | ShowQueue
    | NowPlaying
    | Help
    | ShowHelpTopic
    | Invite
    | Support
    | Lyrics
    | UnknownCommand
)
