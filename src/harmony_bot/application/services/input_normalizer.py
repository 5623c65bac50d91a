"""Turns raw chat messages and component interactions into playback actions.

Normalization is pure: it reads the guild configuration but never performs
I/O, so every mapping here is testable without Discord.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from harmony_bot.domain.guild.entities import GuildConfig
from harmony_bot.domain.playback.actions import (
    AddDjRole,
    BadTimeFormat,
    BadVolume,
    Help,
    HelpTopic,
    Invite,
    Leave,
    Lyrics,
    MissingQuery,
    NowPlaying,
    Pause,
    Play,
    PlaybackAction,
    RemoveDjRole,
    Resume,
    SeekBy,
    SeekTo,
    SetMusicChannel,
    SetPrefix,
    SetVolume,
    ShowHelpTopic,
    ShowQueue,
    Shuffle,
    Skip,
    Stop,
    Support,
    ToggleLoop,
    TogglePause,
    UnknownCommand,
)
from harmony_bot.domain.shared.constants import ComponentIds, LimitConstants
from harmony_bot.utils.reply import parse_timestamp, parse_volume

_ROLE_REF = re.compile(r"(?:<@&)?([0-9]+)>?")
_CHANNEL_REF = re.compile(r"(?:<#)?([0-9]+)>?")
_CLEAR_WORDS = frozenset({"off", "none", "disable", "clear"})


@dataclass(frozen=True)
class MessageInput:
    """The parts of a chat message the normalizer looks at."""

    content: str
    channel_id: int
    role_mention_ids: tuple[int, ...] = ()
    channel_mention_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class _CommandArgs:
    message: MessageInput
    args: tuple[str, ...]

    @property
    def rest(self) -> str:
        return " ".join(self.args)

    @property
    def first(self) -> str | None:
        return self.args[0] if self.args else None


_CommandParser = Callable[[_CommandArgs], PlaybackAction]


def _play(cmd: _CommandArgs) -> PlaybackAction:
    query = cmd.rest.strip()
    return Play(query=query) if query else MissingQuery()


def _volume(cmd: _CommandArgs) -> PlaybackAction:
    raw = cmd.first or ""
    volume = parse_volume(raw)
    return SetVolume(percent=volume) if volume is not None else BadVolume(raw=raw)


def _seek(cmd: _CommandArgs) -> PlaybackAction:
    raw = cmd.first or ""
    seconds = parse_timestamp(raw)
    if seconds is None:
        return BadTimeFormat(raw=raw)
    return SeekTo(position_ms=seconds * 1000)


def _role_arg(cmd: _CommandArgs) -> int | None:
    if cmd.message.role_mention_ids:
        return cmd.message.role_mention_ids[0]
    if cmd.first is None:
        return None
    match = _ROLE_REF.fullmatch(cmd.first)
    return int(match.group(1)) if match else None


def _set_music_channel(cmd: _CommandArgs) -> PlaybackAction:
    if cmd.message.channel_mention_ids:
        return SetMusicChannel(channel_id=cmd.message.channel_mention_ids[0])
    if cmd.first is None:
        return SetMusicChannel(channel_id=cmd.message.channel_id)
    if cmd.first.lower() in _CLEAR_WORDS:
        return SetMusicChannel(channel_id=None)
    match = _CHANNEL_REF.fullmatch(cmd.first)
    if match:
        return SetMusicChannel(channel_id=int(match.group(1)))
    return SetMusicChannel(channel_id=None, invalid_argument=cmd.first)


_COMMANDS: dict[str, _CommandParser] = {
    "play": _play,
    "skip": lambda _: Skip(),
    "stop": lambda _: Stop(),
    "pause": lambda _: Pause(),
    "resume": lambda _: Resume(),
    "loop": lambda _: ToggleLoop(),
    "shuffle": lambda _: Shuffle(),
    "volume": _volume,
    "seek": _seek,
    "queue": lambda _: ShowQueue(),
    "nowplaying": lambda _: NowPlaying(),
    "leave": lambda _: Leave(),
    "setprefix": lambda cmd: SetPrefix(prefix=cmd.first),
    "setmusicchannel": _set_music_channel,
    "adddj": lambda cmd: AddDjRole(role_id=_role_arg(cmd)),
    "removedj": lambda cmd: RemoveDjRole(role_id=_role_arg(cmd)),
    "help": lambda _: Help(),
    "invite": lambda _: Invite(),
    "support": lambda _: Support(),
    "lyrics": lambda _: Lyrics(),
}

_ALIASES: dict[str, str] = {
    "p": "play",
    "np": "nowplaying",
    "q": "queue",
    "vol": "volume",
    "dc": "leave",
    "disconnect": "leave",
}

_BUTTONS: dict[str, Callable[[], PlaybackAction]] = {
    ComponentIds.SKIP: Skip,
    ComponentIds.PAUSE: TogglePause,
    ComponentIds.STOP: Stop,
    ComponentIds.LOOP: ToggleLoop,
    ComponentIds.SHUFFLE: Shuffle,
    ComponentIds.LEAVE: Leave,
    ComponentIds.QUEUE: ShowQueue,
    ComponentIds.LYRICS: Lyrics,
}

_HELP_TOPICS: dict[str, HelpTopic] = {
    ComponentIds.HELP_MUSIC: HelpTopic.MUSIC,
    ComponentIds.HELP_CONFIG: HelpTopic.CONFIG,
    ComponentIds.HELP_INFO: HelpTopic.INFO,
}


class InputNormalizer:
    """Maps chat input to exactly one action, or None when it is not for us."""

    def __init__(self, seek_step_ms: int = LimitConstants.SEEK_STEP_MS) -> None:
        self._seek_step_ms = seek_step_ms

    def from_message(self, message: MessageInput, config: GuildConfig) -> PlaybackAction | None:
        content = message.content.strip()
        if not content:
            return None

        if content.startswith(config.prefix):
            return self._from_command(message, content[len(config.prefix) :])

        if config.music_channel_id is not None and message.channel_id == config.music_channel_id:
            return Play(query=content, from_music_channel=True)

        return None

    def _from_command(self, message: MessageInput, body: str) -> PlaybackAction | None:
        parts = body.split()
        if not parts:
            return None

        token = parts[0].lower()
        name = _ALIASES.get(token, token)
        parser = _COMMANDS.get(name)
        if parser is None:
            return UnknownCommand(token=token)
        return parser(_CommandArgs(message=message, args=tuple(parts[1:])))

    def from_component(self, custom_id: str, values: Sequence[str] = ()) -> PlaybackAction | None:
        if custom_id == ComponentIds.HELP_MENU:
            topic = _HELP_TOPICS.get(values[0]) if values else None
            return ShowHelpTopic(topic=topic) if topic is not None else None

        if custom_id == ComponentIds.REWIND:
            return SeekBy(delta_ms=-self._seek_step_ms)
        if custom_id == ComponentIds.FORWARD:
            return SeekBy(delta_ms=self._seek_step_ms)

        factory = _BUTTONS.get(custom_id)
        return factory() if factory is not None else None
