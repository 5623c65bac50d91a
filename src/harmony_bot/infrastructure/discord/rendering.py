"""Delivers dispatcher responses to Discord channels and interactions.

Delivery is fire-and-forget: a failed send is logged and never propagates
back into playback or configuration state.
"""

from __future__ import annotations

import logging
from typing import Any

import discord

from harmony_bot.application.services.responses import EmbedPayload, Response
from harmony_bot.domain.shared.messages import EmojiConstants, LogTemplates
from harmony_bot.infrastructure.discord.views.base_view import ComponentHandler
from harmony_bot.infrastructure.discord.views.help_menu_view import HelpMenuView

logger = logging.getLogger(__name__)


def render_embed(payload: EmbedPayload) -> discord.Embed:
    embed = discord.Embed(
        title=payload.title,
        description=payload.description,
        color=discord.Color(payload.color),
    )
    for field in payload.fields:
        embed.add_field(name=field.name, value=field.value, inline=field.inline)
    if payload.thumbnail_url:
        embed.set_thumbnail(url=payload.thumbnail_url)
    if payload.footer:
        embed.set_footer(text=payload.footer)
    return embed


def _send_kwargs(response: Response, handler: ComponentHandler) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if response.content:
        kwargs["content"] = response.content
    if response.embed is not None:
        kwargs["embed"] = render_embed(response.embed)
    if response.attach_help_menu:
        kwargs["view"] = HelpMenuView(handler)
    return kwargs


async def deliver_to_message(
    message: discord.Message, response: Response, handler: ComponentHandler
) -> None:
    """Reply to a chat message with a reaction and/or a channel message."""
    try:
        if response.reaction:
            await message.add_reaction(response.reaction)
        kwargs = _send_kwargs(response, handler)
        if kwargs:
            await message.channel.send(**kwargs)
    except discord.HTTPException as e:
        logger.warning(LogTemplates.RESPONSE_DELIVERY_FAILED, message.channel.id, e)


async def deliver_to_interaction(
    interaction: discord.Interaction, response: Response, handler: ComponentHandler
) -> None:
    """Answer a component interaction; reactions become a short text reply."""
    kwargs = _send_kwargs(response, handler)
    if not kwargs:
        kwargs["content"] = response.reaction or EmojiConstants.SUCCESS
    try:
        if interaction.response.is_done():
            await interaction.followup.send(ephemeral=response.ephemeral, **kwargs)
        else:
            await interaction.response.send_message(ephemeral=response.ephemeral, **kwargs)
    except discord.HTTPException as e:
        logger.warning(LogTemplates.RESPONSE_DELIVERY_FAILED, interaction.channel_id, e)
