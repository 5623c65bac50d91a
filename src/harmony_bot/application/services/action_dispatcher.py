"""Action Dispatcher - executes an authorized playback action.

The dispatcher is the only code that calls the playback facade or writes
guild configuration. It never raises: every outcome, including facade and
storage failures, is returned as a ``Response``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, assert_never

from harmony_bot.application.interfaces.playback_session import PlayRequest
from harmony_bot.application.services import embeds
from harmony_bot.application.services.responses import Response
from harmony_bot.domain.playback.actions import (
    ActionCategory,
    AddDjRole,
    BadTimeFormat,
    BadVolume,
    Help,
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
from harmony_bot.domain.shared.constants import LimitConstants
from harmony_bot.domain.shared.exceptions import (
    AuthorizationDenied,
    FacadeError,
    NoActiveSessionError,
    PersistenceError,
    ValidationError,
)
from harmony_bot.domain.shared.messages import DiscordUIMessages, EmojiConstants, LogTemplates
from harmony_bot.utils.reply import format_ms

if TYPE_CHECKING:
    from ...config.settings import LinkSettings, PlayerSettings
    from ...domain.guild.authorization import AuthorizationResult, MemberContext
    from ...domain.guild.entities import GuildConfig
    from ...domain.guild.repository import GuildConfigRepository
    from ..interfaces.playback_session import PlaybackSession, TrackHandle

logger = logging.getLogger(__name__)


def _always(_: int) -> bool:
    return True


@dataclass(frozen=True)
class DispatchContext:
    """Where an action came from and who sent it."""

    guild_id: int
    config: GuildConfig
    member: MemberContext
    text_channel_id: int
    requester_name: str
    voice_channel: Any = None
    role_exists: Callable[[int], bool] = _always
    text_channel_exists: Callable[[int], bool] = _always


class ActionDispatcher:
    """Runs one action against the playback facade or the configuration store."""

    def __init__(
        self,
        *,
        guild_config_repository: GuildConfigRepository,
        player_settings: PlayerSettings | None = None,
        link_settings: LinkSettings | None = None,
    ) -> None:
        self._configs = guild_config_repository
        self._queue_limit = (
            player_settings.queue_display_limit
            if player_settings
            else LimitConstants.QUEUE_DISPLAY_LIMIT
        )
        self._bar_length = (
            player_settings.progress_bar_length
            if player_settings
            else LimitConstants.PROGRESS_BAR_LENGTH
        )
        self._invite_url = link_settings.invite_url if link_settings else ""
        self._support_url = link_settings.support_url if link_settings else ""

    async def dispatch(
        self,
        action: PlaybackAction,
        auth: AuthorizationResult,
        session: PlaybackSession,
        context: DispatchContext,
    ) -> Response:
        try:
            auth.raise_for_denial()
            return await self._execute(action, session, context)
        except AuthorizationDenied as e:
            logger.info(
                LogTemplates.ACTION_DENIED,
                action.kind.value,
                context.member.user_id,
                context.guild_id,
                e.reason,
            )
            return Response.denied(e.reason)
        except ValidationError as e:
            return Response.invalid(e.message)
        except NoActiveSessionError:
            logger.debug(LogTemplates.ACTION_NOTHING_PLAYING, action.kind.value, context.guild_id)
            return Response.nothing_playing()
        except PersistenceError as e:
            logger.error(
                LogTemplates.ACTION_PERSISTENCE_FAILED, action.kind.value, context.guild_id, e
            )
            return Response.failed(DiscordUIMessages.ERROR_CONFIG_SAVE_FAILED)
        except FacadeError as e:
            logger.error(
                LogTemplates.ACTION_FACADE_FAILED,
                action.kind.value,
                context.guild_id,
                e,
                exc_info=e,
            )
            return Response.failed(self._failure_message(action))
        except Exception:
            logger.exception(LogTemplates.ACTION_UNEXPECTED_ERROR, action.kind.value, context.guild_id)
            return Response.failed(self._failure_message(action))

    @staticmethod
    def _failure_message(action: PlaybackAction) -> str:
        if isinstance(action, Play):
            return DiscordUIMessages.ERROR_PLAY_FAILED
        if action.category is ActionCategory.PLAYBACK_CONTROL:
            return DiscordUIMessages.ERROR_PLAYBACK_FAILED
        return DiscordUIMessages.ERROR_GENERIC

    @staticmethod
    def _needs_active_track(action: PlaybackAction) -> bool:
        # Argument errors are reported whether or not anything is playing.
        return action.category is ActionCategory.PLAYBACK_CONTROL and not isinstance(
            action, (BadTimeFormat, BadVolume)
        )

    @staticmethod
    def _require_seekable(track: TrackHandle | None) -> None:
        if track is not None and not track.is_seekable:
            raise ValidationError(DiscordUIMessages.STATE_NOT_SEEKABLE, field="position")

    async def _execute(
        self, action: PlaybackAction, session: PlaybackSession, context: DispatchContext
    ) -> Response:
        track: TrackHandle | None = None
        if self._needs_active_track(action):
            track = session.get_active()
            if track is None:
                raise NoActiveSessionError(context.guild_id)

        match action:
            # Playback control
            case Skip():
                await session.skip()
                return Response.success(DiscordUIMessages.SKIPPED)
            case Pause():
                await session.set_paused(True)
                return Response.success(DiscordUIMessages.PAUSED)
            case Resume():
                await session.set_paused(False)
                return Response.success(DiscordUIMessages.RESUMED)
            case TogglePause():
                paused = not session.is_paused
                await session.set_paused(paused)
                return Response.success(
                    DiscordUIMessages.PAUSED if paused else DiscordUIMessages.RESUMED
                )
            case Stop():
                await session.stop()
                return Response.success(DiscordUIMessages.STOPPED)
            case ToggleLoop():
                enabled = not session.is_repeating
                await session.set_repeat(enabled)
                return Response.success(
                    DiscordUIMessages.LOOP_ENABLED if enabled else DiscordUIMessages.LOOP_DISABLED
                )
            case Shuffle():
                if session.queue_length < LimitConstants.MIN_TRACKS_TO_SHUFFLE:
                    raise ValidationError(DiscordUIMessages.STATE_NOT_ENOUGH_TO_SHUFFLE)
                await session.shuffle()
                return Response.success(DiscordUIMessages.SHUFFLED)
            case SeekBy(delta_ms=delta):
                self._require_seekable(track)
                await session.seek_by(delta, clamp_to_duration=True)
                template = DiscordUIMessages.FORWARDED if delta > 0 else DiscordUIMessages.REWOUND
                return Response.success(template.format(seconds=abs(delta) // 1000))
            case SeekTo(position_ms=position):
                self._require_seekable(track)
                assert track is not None
                if track.duration_ms and position > track.duration_ms:
                    raise ValidationError(DiscordUIMessages.STATE_SEEK_PAST_END, field="position")
                await session.seek_to(position)
                return Response.success(DiscordUIMessages.SEEKING.format(time=format_ms(position)))
            case SetVolume(percent=percent):
                if not LimitConstants.MIN_VOLUME <= percent <= LimitConstants.MAX_VOLUME:
                    raise ValidationError(
                        DiscordUIMessages.ARG_BAD_VOLUME.format(
                            min=LimitConstants.MIN_VOLUME, max=LimitConstants.MAX_VOLUME
                        ),
                        field="volume",
                    )
                await session.set_volume(percent)
                return Response.success(DiscordUIMessages.VOLUME_SET.format(volume=percent))
            case Leave():
                await session.leave()
                return Response.success(DiscordUIMessages.LEFT_VOICE)
            case BadTimeFormat(raw=raw):
                return Response.invalid(
                    DiscordUIMessages.ARG_BAD_TIME if raw else DiscordUIMessages.ARG_MISSING_TIME
                )
            case BadVolume():
                return Response.invalid(
                    DiscordUIMessages.ARG_BAD_VOLUME.format(
                        min=LimitConstants.MIN_VOLUME, max=LimitConstants.MAX_VOLUME
                    )
                )

            # Configuration
            case SetPrefix(prefix=prefix):
                return await self._set_prefix(prefix, context)
            case SetMusicChannel(channel_id=channel_id, invalid_argument=invalid):
                return await self._set_music_channel(channel_id, invalid, context)
            case AddDjRole(role_id=role_id):
                return await self._add_dj_role(role_id, context)
            case RemoveDjRole(role_id=role_id):
                return await self._remove_dj_role(role_id, context)

            # Requests
            case Play(query=query):
                return await self._play(query, session, context)
            case MissingQuery():
                return Response.invalid(DiscordUIMessages.ARG_MISSING_QUERY)

            # Informational
            case ShowQueue():
                return self._show_queue(session)
            case NowPlaying():
                current = session.get_active()
                if current is None:
                    return Response.nothing_playing()
                return Response.info(
                    embed=embeds.now_playing_embed(
                        current, volume=session.volume, bar_length=self._bar_length
                    )
                )
            case Help():
                return Response.info(
                    embed=embeds.help_embed(context.config.prefix), attach_help_menu=True
                )
            case ShowHelpTopic(topic=topic):
                return Response.info(
                    embed=embeds.help_topic_embed(topic, context.config.prefix), ephemeral=True
                )
            case Invite():
                return Response.info(
                    embed=embeds.link_embed(DiscordUIMessages.EMBED_INVITE_TITLE, self._invite_url)
                )
            case Support():
                return Response.info(
                    embed=embeds.link_embed(
                        DiscordUIMessages.EMBED_SUPPORT_TITLE, self._support_url
                    )
                )
            case Lyrics():
                return Response.info(DiscordUIMessages.LYRICS_COMING_SOON, ephemeral=True)
            case UnknownCommand():
                return Response.invalid(
                    DiscordUIMessages.ERROR_UNKNOWN_COMMAND.format(prefix=context.config.prefix)
                )
            case _:
                assert_never(action)

    # ── Configuration ───────────────────────────────────────────────

    async def _set_prefix(self, prefix: str | None, context: DispatchContext) -> Response:
        bad_prefix = DiscordUIMessages.ARG_BAD_PREFIX.format(
            min=LimitConstants.MIN_PREFIX_LENGTH, max=LimitConstants.MAX_PREFIX_LENGTH
        )
        if not prefix:
            raise ValidationError(bad_prefix, field="prefix")
        try:
            updated = context.config.with_prefix(prefix)
        except ValidationError as e:
            raise ValidationError(bad_prefix, field="prefix") from e
        await self._save(updated, "prefix", context)
        return Response.success(DiscordUIMessages.PREFIX_CHANGED.format(prefix=prefix))

    async def _set_music_channel(
        self, channel_id: int | None, invalid_argument: str | None, context: DispatchContext
    ) -> Response:
        if invalid_argument is not None:
            raise ValidationError(DiscordUIMessages.ARG_BAD_CHANNEL, field="music_channel_id")

        if channel_id is None:
            await self._save(context.config.with_music_channel(None), "music channel", context)
            return Response.success(DiscordUIMessages.MUSIC_CHANNEL_CLEARED)

        if not context.text_channel_exists(channel_id):
            raise ValidationError(DiscordUIMessages.ARG_BAD_CHANNEL, field="music_channel_id")
        await self._save(context.config.with_music_channel(channel_id), "music channel", context)
        return Response.success(DiscordUIMessages.MUSIC_CHANNEL_SET.format(channel_id=channel_id))

    async def _add_dj_role(self, role_id: int | None, context: DispatchContext) -> Response:
        if role_id is None or not context.role_exists(role_id):
            raise ValidationError(DiscordUIMessages.ARG_MISSING_ROLE, field="role")
        if context.config.has_dj_role(role_id):
            return Response.invalid(DiscordUIMessages.DJ_ALREADY)
        await self._save(context.config.with_dj_role(role_id), "DJ roles", context)
        return Response.success(DiscordUIMessages.DJ_ADDED.format(role_id=role_id))

    async def _remove_dj_role(self, role_id: int | None, context: DispatchContext) -> Response:
        # A deleted role can still be removed from the list.
        if role_id is None:
            raise ValidationError(DiscordUIMessages.ARG_MISSING_ROLE, field="role")
        if not context.config.has_dj_role(role_id):
            return Response.invalid(DiscordUIMessages.DJ_NOT_DJ)
        await self._save(context.config.without_dj_role(role_id), "DJ roles", context)
        return Response.success(DiscordUIMessages.DJ_REMOVED.format(role_id=role_id))

    async def _save(self, config: GuildConfig, what: str, context: DispatchContext) -> None:
        await self._configs.save(config)
        logger.info(LogTemplates.CONFIG_UPDATED, context.guild_id, what, context.member.user_id)

    # ── Requests and informational ──────────────────────────────────

    async def _play(self, query: str, session: PlaybackSession, context: DispatchContext) -> Response:
        if context.voice_channel is None:
            return Response.invalid(DiscordUIMessages.STATE_NEED_VOICE)

        request = PlayRequest(
            text_channel_id=context.text_channel_id,
            requester_id=context.member.user_id,
            requester_name=context.requester_name,
            volume=context.config.default_volume,
        )
        outcome = await session.play(context.voice_channel, query, request)
        if outcome is None:
            return Response.invalid(DiscordUIMessages.PLAY_NO_RESULTS.format(query=query))

        if outcome.started:
            return Response.react(EmojiConstants.SUCCESS)
        if outcome.playlist_name is not None:
            return Response.success(
                DiscordUIMessages.PLAY_ADDED_PLAYLIST.format(
                    count=outcome.added_count, name=outcome.playlist_name
                )
            )
        return Response.success(embed=embeds.track_added_embed(outcome.track))

    def _show_queue(self, session: PlaybackSession) -> Response:
        current = session.get_active()
        if current is None:
            return Response.nothing_playing(DiscordUIMessages.STATE_QUEUE_EMPTY)
        return Response.info(
            embed=embeds.queue_embed(
                current,
                session.list_queue(self._queue_limit),
                total_tracks=session.queue_length,
                total_ms=session.total_queue_time_ms,
            )
        )
