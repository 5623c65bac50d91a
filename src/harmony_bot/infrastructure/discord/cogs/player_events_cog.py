"""Lavalink player and guild lifecycle listeners."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
import wavelink
from discord.ext import commands

from harmony_bot.application.services import embeds
from harmony_bot.domain.shared.messages import ErrorMessages, LogTemplates
from harmony_bot.infrastructure.discord.rendering import render_embed
from harmony_bot.infrastructure.discord.views import PlayerControlsView
from harmony_bot.infrastructure.lavalink import HarmonyPlayer, track_handle

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class PlayerEventsCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    def _announce_channel(
        self, player: HarmonyPlayer, track: wavelink.Playable
    ) -> discord.abc.Messageable | None:
        channel_id = player.text_channel_id or getattr(track.extras, "text_channel_id", None)
        if channel_id is None:
            return None
        channel = self.bot.get_channel(channel_id)
        if isinstance(channel, discord.abc.Messageable):
            return channel
        return None

    def _controls(self, player: HarmonyPlayer) -> PlayerControlsView | None:
        music = self.bot.get_cog("MusicCog")
        if music is None:
            logger.warning(LogTemplates.CONTROLS_UNAVAILABLE)
            return None
        return PlayerControlsView(
            music.handle_component,  # type: ignore[attr-defined]
            paused=player.paused,
            looping=player.queue.mode is wavelink.QueueMode.loop,
        )

    # ─────────────────────────────────────────────────────────────────
    # wavelink events
    # ─────────────────────────────────────────────────────────────────

    @commands.Cog.listener()
    async def on_wavelink_node_ready(self, payload: wavelink.NodeReadyEventPayload) -> None:
        logger.info(
            LogTemplates.LAVALINK_NODE_READY,
            payload.node.identifier,
            payload.resumed,
            payload.session_id,
        )

    @commands.Cog.listener()
    async def on_wavelink_track_start(self, payload: wavelink.TrackStartEventPayload) -> None:
        player = payload.player
        if not isinstance(player, HarmonyPlayer):
            return
        guild_id = player.guild.id if player.guild else None
        logger.info(LogTemplates.TRACK_STARTED, payload.track.title, guild_id)

        channel = self._announce_channel(player, payload.track)
        if channel is None:
            logger.debug(LogTemplates.TRACK_CHANNEL_MISSING, guild_id)
            return

        embed = render_embed(embeds.track_start_embed(track_handle(payload.track)))
        view = self._controls(player)
        try:
            if view is None:
                await channel.send(embed=embed)
            else:
                await channel.send(embed=embed, view=view)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.TRACK_START_ANNOUNCE_FAILED, guild_id, e)

    @commands.Cog.listener()
    async def on_wavelink_track_exception(
        self, payload: wavelink.TrackExceptionEventPayload
    ) -> None:
        player = payload.player
        if not isinstance(player, HarmonyPlayer):
            return
        guild_id = player.guild.id if player.guild else None
        logger.error(LogTemplates.TRACK_EXCEPTION, payload.track.title, guild_id, payload.exception)

        channel = self._announce_channel(player, payload.track)
        if channel is None:
            return
        try:
            await channel.send(embed=render_embed(embeds.player_error_embed(payload.track.title)))
        except discord.HTTPException as e:
            logger.warning(LogTemplates.TRACK_START_ANNOUNCE_FAILED, guild_id, e)

    # ─────────────────────────────────────────────────────────────────
    # Guild events
    # ─────────────────────────────────────────────────────────────────

    @commands.Cog.listener()
    async def on_guild_join(self, guild: discord.Guild) -> None:
        logger.info(LogTemplates.GUILD_JOINED, guild.name, guild.id)

    @commands.Cog.listener()
    async def on_guild_remove(self, guild: discord.Guild) -> None:
        # Stored configuration is kept; only the in-memory facade is dropped.
        logger.info(LogTemplates.GUILD_REMOVED, guild.name, guild.id)
        self.container.playback_gateway.forget(guild.id)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(PlayerEventsCog(bot, container))
