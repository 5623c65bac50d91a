"""Select menu attached to the help embed."""

from __future__ import annotations

import discord

from harmony_bot.domain.shared.constants import ComponentIds
from harmony_bot.domain.shared.messages import EmojiConstants
from harmony_bot.infrastructure.discord.views.base_view import (
    BaseInteractiveView,
    ComponentHandler,
)


class HelpMenuView(BaseInteractiveView):
    def __init__(self, handler: ComponentHandler) -> None:
        super().__init__(handler)

        select: discord.ui.Select[HelpMenuView] = discord.ui.Select(
            custom_id=ComponentIds.HELP_MENU,
            placeholder="Select a category",
            options=[
                discord.SelectOption(
                    label="Music",
                    value=ComponentIds.HELP_MUSIC,
                    description="Playback and queue commands",
                    emoji=EmojiConstants.MUSIC,
                ),
                discord.SelectOption(
                    label="Configuration",
                    value=ComponentIds.HELP_CONFIG,
                    description="Prefix, music channel and DJ roles",
                    emoji=EmojiConstants.CONFIG,
                ),
                discord.SelectOption(
                    label="Information",
                    value=ComponentIds.HELP_INFO,
                    description="Help, invite and support",
                    emoji=EmojiConstants.INFO,
                ),
            ],
        )
        select.callback = self._route(ComponentIds.HELP_MENU)
        self.add_item(select)
