"""Builders for the embeds the bot posts: now playing, queue, help and links."""

from __future__ import annotations

from harmony_bot.application.interfaces.playback_session import TrackHandle
from harmony_bot.application.services.responses import EmbedField, EmbedPayload
from harmony_bot.domain.playback.actions import HelpTopic
from harmony_bot.domain.shared.constants import LimitConstants, UIConstants
from harmony_bot.domain.shared.messages import DiscordUIMessages
from harmony_bot.utils.reply import create_progress_bar, format_ms, truncate

_HELP_COMMANDS: dict[HelpTopic, tuple[tuple[str, str], ...]] = {
    HelpTopic.MUSIC: (
        ("play <song|url>", "Play a song or add it to the queue (alias: p)"),
        ("skip", "Skip the current track"),
        ("stop", "Stop playback and clear the queue"),
        ("pause / resume", "Pause or resume playback"),
        ("volume <0-200>", "Change the playback volume"),
        ("seek <time>", "Jump to a position (1:30, 2m30s or 90)"),
        ("loop", "Toggle looping of the current track"),
        ("shuffle", "Shuffle the queue"),
        ("queue", "Show the queue (alias: q)"),
        ("nowplaying", "Show the current track (alias: np)"),
        ("leave", "Disconnect from voice (aliases: dc, disconnect)"),
    ),
    HelpTopic.CONFIG: (
        ("setprefix <prefix>", "Change the command prefix (1-3 characters)"),
        ("setmusicchannel [#channel|off]", "Play anything typed in a channel"),
        ("adddj <@role|id>", "Restrict playback controls to a DJ role"),
        ("removedj <@role|id>", "Remove a DJ role"),
    ),
    HelpTopic.INFO: (
        ("help", "Show this menu"),
        ("invite", "Invite the bot to your server"),
        ("support", "Join the support server"),
    ),
}

_HELP_FIELD_NAMES: dict[HelpTopic, str] = {
    HelpTopic.MUSIC: DiscordUIMessages.FIELD_MUSIC,
    HelpTopic.CONFIG: DiscordUIMessages.FIELD_CONFIG,
    HelpTopic.INFO: DiscordUIMessages.FIELD_INFO,
}


def _track_link(track: TrackHandle, max_title: int = LimitConstants.EMBED_TITLE_MAX) -> str:
    title = truncate(track.title, max_title)
    return f"[{title}]({track.url})" if track.url else title


def now_playing_embed(
    track: TrackHandle,
    *,
    volume: int,
    bar_length: int = LimitConstants.PROGRESS_BAR_LENGTH,
) -> EmbedPayload:
    bar = create_progress_bar(track.position_ms, track.duration_ms, bar_length)
    progress = f"{bar}\n`{format_ms(track.position_ms)} / {format_ms(track.duration_ms)}`"
    return EmbedPayload(
        title=DiscordUIMessages.EMBED_NOW_PLAYING,
        description=_track_link(track),
        fields=(
            EmbedField(DiscordUIMessages.FIELD_PROGRESS, progress, inline=False),
            EmbedField(
                DiscordUIMessages.FIELD_REQUESTED_BY,
                track.requested_by or DiscordUIMessages.REQUESTER_AUTOPLAY,
            ),
            EmbedField(DiscordUIMessages.FIELD_VOLUME, f"{volume}%"),
        ),
        thumbnail_url=track.thumbnail,
    )


def track_start_embed(track: TrackHandle) -> EmbedPayload:
    """Posted when the player starts a new track, above the control buttons."""
    return EmbedPayload(
        title=DiscordUIMessages.EMBED_NOW_PLAYING,
        description=_track_link(track),
        fields=(
            EmbedField(DiscordUIMessages.FIELD_DURATION, format_ms(track.duration_ms)),
            EmbedField(
                DiscordUIMessages.FIELD_REQUESTED_BY,
                track.requested_by or DiscordUIMessages.REQUESTER_AUTOPLAY,
            ),
        ),
        thumbnail_url=track.thumbnail,
        footer=DiscordUIMessages.FOOTER_CONTROLS,
    )


def track_added_embed(track: TrackHandle) -> EmbedPayload:
    return EmbedPayload(
        description=DiscordUIMessages.PLAY_ADDED.format(link=_track_link(track)),
        footer=(
            DiscordUIMessages.FOOTER_REQUESTED_BY.format(name=track.requested_by)
            if track.requested_by
            else None
        ),
        color=UIConstants.SUCCESS_COLOR,
    )


def player_error_embed(title: str) -> EmbedPayload:
    return EmbedPayload(
        title=DiscordUIMessages.EMBED_PLAYER_ERROR,
        description=DiscordUIMessages.EMBED_PLAYER_ERROR_DESC.format(title=truncate(title)),
        color=UIConstants.ERROR_COLOR,
    )


def queue_embed(
    current: TrackHandle,
    upcoming: list[TrackHandle],
    *,
    total_tracks: int,
    total_ms: int,
) -> EmbedPayload:
    """The upcoming list goes in the description, which has room for a full page."""
    lines = [
        DiscordUIMessages.QUEUE_LINE.format(
            index=i,
            link=_track_link(track, LimitConstants.QUEUE_TITLE_MAX),
            duration=format_ms(track.duration_ms),
        )
        for i, track in enumerate(upcoming, start=1)
    ]
    if total_tracks > len(upcoming):
        lines.append(DiscordUIMessages.QUEUE_MORE.format(count=total_tracks - len(upcoming)))
    description = "\n".join(
        [DiscordUIMessages.QUEUE_UP_NEXT, *(lines or [DiscordUIMessages.QUEUE_EMPTY_UP_NEXT])]
    )

    return EmbedPayload(
        title=DiscordUIMessages.EMBED_QUEUE,
        description=truncate(description, LimitConstants.EMBED_DESCRIPTION_MAX),
        fields=(
            EmbedField(
                DiscordUIMessages.FIELD_NOW_PLAYING,
                truncate(_track_link(current), LimitConstants.EMBED_FIELD_VALUE_MAX),
                inline=False,
            ),
            EmbedField(DiscordUIMessages.FIELD_TOTAL_TRACKS, str(total_tracks)),
            EmbedField(DiscordUIMessages.FIELD_QUEUE_DURATION, format_ms(total_ms)),
        ),
        thumbnail_url=current.thumbnail,
    )


def help_embed(prefix: str) -> EmbedPayload:
    fields = tuple(
        EmbedField(
            _HELP_FIELD_NAMES[topic],
            " ".join(f"`{prefix}{usage.split()[0]}`" for usage, _ in commands),
            inline=False,
        )
        for topic, commands in _HELP_COMMANDS.items()
    )
    return EmbedPayload(
        title=DiscordUIMessages.EMBED_HELP_TITLE,
        description=DiscordUIMessages.EMBED_HELP_DESC.format(prefix=prefix),
        fields=fields,
    )


def help_topic_embed(topic: HelpTopic, prefix: str) -> EmbedPayload:
    lines = [f"`{prefix}{usage}` - {summary}" for usage, summary in _HELP_COMMANDS[topic]]
    return EmbedPayload(title=_HELP_FIELD_NAMES[topic], description="\n".join(lines))


def link_embed(title: str, url: str) -> EmbedPayload:
    description = (
        DiscordUIMessages.LINK_TEMPLATE.format(url=url)
        if url
        else DiscordUIMessages.LINK_NOT_CONFIGURED
    )
    return EmbedPayload(title=title, description=description)
