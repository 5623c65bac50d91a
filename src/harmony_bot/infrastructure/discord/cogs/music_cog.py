"""Prefix-command and button pipeline: message → action → authorize → dispatch → reply.

There are no per-command handlers here. Every chat message and component
press goes through the same four steps, and any exception that escapes them
is logged and answered with a generic error instead of reaching discord.py.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from harmony_bot.application.services.action_dispatcher import DispatchContext
from harmony_bot.domain.playback.actions import PlaybackAction, ToggleLoop, TogglePause
from harmony_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from harmony_bot.infrastructure.discord.guards.member_guards import (
    member_context,
    message_input,
    role_exists,
    send_ephemeral,
    text_channel_exists,
    voice_channel_of,
)
from harmony_bot.infrastructure.discord.rendering import deliver_to_interaction, deliver_to_message
from harmony_bot.infrastructure.discord.views import HelpMenuView, PlayerControlsView

if TYPE_CHECKING:
    from ....application.services.responses import Response
    from ....config.container import Container
    from ....domain.guild.entities import GuildConfig

logger = logging.getLogger(__name__)


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def cog_load(self) -> None:
        # Buttons on messages sent before a restart keep routing here.
        self.bot.add_view(PlayerControlsView(self.handle_component))
        self.bot.add_view(HelpMenuView(self.handle_component))

    # ─────────────────────────────────────────────────────────────────
    # Chat messages
    # ─────────────────────────────────────────────────────────────────

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot or message.guild is None:
            return
        if not isinstance(message.author, discord.Member):
            return

        try:
            config = await self.container.guild_config_repository.get(message.guild.id)
            action = self.container.input_normalizer.from_message(message_input(message), config)
            if action is None:
                return

            response = await self._run(
                action, config, message.guild, message.author, message.channel.id
            )
            await deliver_to_message(message, response, self.handle_component)
        except Exception:
            logger.exception(LogTemplates.EVENT_HANDLER_FAILED, "message", message.guild.id)
            try:
                await message.channel.send(DiscordUIMessages.ERROR_GENERIC)
            except discord.HTTPException as e:
                logger.warning(LogTemplates.RESPONSE_DELIVERY_FAILED, message.channel.id, e)

    # ─────────────────────────────────────────────────────────────────
    # Buttons and select menus
    # ─────────────────────────────────────────────────────────────────

    async def handle_component(
        self, interaction: discord.Interaction, custom_id: str, values: Sequence[str]
    ) -> None:
        guild = interaction.guild
        member = interaction.user
        if guild is None or not isinstance(member, discord.Member):
            return

        try:
            action = self.container.input_normalizer.from_component(custom_id, values)
            if action is None:
                await interaction.response.defer()
                return

            config = await self.container.guild_config_repository.get(guild.id)
            response = await self._run(
                action, config, guild, member, interaction.channel_id or 0
            )
            await deliver_to_interaction(interaction, response, self.handle_component)

            if response.is_success and isinstance(action, (TogglePause, ToggleLoop)):
                await self._refresh_controls(interaction)
        except Exception:
            logger.exception(LogTemplates.EVENT_HANDLER_FAILED, custom_id, guild.id)
            try:
                await send_ephemeral(interaction, DiscordUIMessages.ERROR_GENERIC)
            except discord.HTTPException as e:
                logger.warning(LogTemplates.RESPONSE_DELIVERY_FAILED, interaction.channel_id, e)

    async def _refresh_controls(self, interaction: discord.Interaction) -> None:
        """Relabel the pause and loop buttons on the message that was pressed."""
        if interaction.message is None or interaction.guild_id is None:
            return
        session = self.container.playback_gateway.session(interaction.guild_id)
        view = PlayerControlsView(
            self.handle_component, paused=session.is_paused, looping=session.is_repeating
        )
        try:
            await interaction.message.edit(view=view)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.RESPONSE_DELIVERY_FAILED, interaction.channel_id, e)

    # ─────────────────────────────────────────────────────────────────
    # Shared pipeline
    # ─────────────────────────────────────────────────────────────────

    async def _run(
        self,
        action: PlaybackAction,
        config: GuildConfig,
        guild: discord.Guild,
        member: discord.Member,
        text_channel_id: int,
    ) -> Response:
        context = DispatchContext(
            guild_id=guild.id,
            config=config,
            member=member_context(member),
            text_channel_id=text_channel_id,
            requester_name=member.display_name,
            voice_channel=voice_channel_of(member),
            role_exists=lambda role_id: role_exists(guild, role_id),
            text_channel_exists=lambda channel_id: text_channel_exists(guild, channel_id),
        )
        auth = self.container.authorization_policy.authorize(action, context.member, config)
        session = self.container.playback_gateway.session(guild.id)
        return await self.container.action_dispatcher.dispatch(action, auth, session, context)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))
