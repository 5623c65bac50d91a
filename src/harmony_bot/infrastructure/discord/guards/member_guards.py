"""Helpers that turn discord.py objects into the plain values the core expects.

These are free functions that accept explicit dependencies rather than relying
on a specific cog instance, making them usable from any cog.
"""

from __future__ import annotations

import discord

from harmony_bot.application.services.input_normalizer import MessageInput
from harmony_bot.domain.guild.authorization import MemberContext


def member_context(member: discord.Member) -> MemberContext:
    return MemberContext.of(
        member.id,
        (role.id for role in member.roles),
        can_manage_guild=member.guild_permissions.manage_guild,
    )


def voice_channel_of(member: discord.Member) -> discord.VoiceChannel | discord.StageChannel | None:
    """The voice channel the member is connected to, if any."""
    if member.voice is None:
        return None
    return member.voice.channel


def message_input(message: discord.Message) -> MessageInput:
    return MessageInput(
        content=message.content,
        channel_id=message.channel.id,
        role_mention_ids=tuple(role.id for role in message.role_mentions),
        channel_mention_ids=tuple(channel.id for channel in message.channel_mentions),
    )


def role_exists(guild: discord.Guild, role_id: int) -> bool:
    return guild.get_role(role_id) is not None


def text_channel_exists(guild: discord.Guild, channel_id: int) -> bool:
    return isinstance(guild.get_channel(channel_id), discord.TextChannel)


async def send_ephemeral(interaction: discord.Interaction, message: str) -> None:
    """Send an ephemeral message, handling both fresh and already-responded interactions."""
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=True)
    else:
        await interaction.response.send_message(message, ephemeral=True)
