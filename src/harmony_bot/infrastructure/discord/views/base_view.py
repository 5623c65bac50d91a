"""Base class for persistent component views.

Views here hold no state of their own: every press is forwarded, with its
``custom_id`` and selected values, to a handler supplied by the owning cog.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import discord

ComponentHandler = Callable[[discord.Interaction, str, list[str]], Awaitable[None]]


class BaseInteractiveView(discord.ui.View):
    """Persistent view (no timeout) that routes interactions by custom_id."""

    def __init__(self, handler: ComponentHandler, *, timeout: float | None = None) -> None:
        super().__init__(timeout=timeout)
        self._handler = handler

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return interaction.guild is not None

    def _route(self, custom_id: str) -> Callable[[discord.Interaction], Awaitable[None]]:
        async def callback(interaction: discord.Interaction) -> None:
            values = list((interaction.data or {}).get("values", []))
            await self._handler(interaction, custom_id, values)

        return callback
