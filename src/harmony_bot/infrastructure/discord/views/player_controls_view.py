"""Now-playing control buttons: two rows of playback controls."""

from __future__ import annotations

import discord

from harmony_bot.domain.shared.constants import ComponentIds
from harmony_bot.domain.shared.messages import EmojiConstants
from harmony_bot.infrastructure.discord.views.base_view import (
    BaseInteractiveView,
    ComponentHandler,
)


class PlayerControlsView(BaseInteractiveView):
    """Buttons posted under the "Now Playing" embed.

    Labels reflect the player state at the time the message is sent; the
    custom_ids are fixed so the view keeps working after a restart.
    """

    def __init__(
        self,
        handler: ComponentHandler,
        *,
        paused: bool = False,
        looping: bool = False,
    ) -> None:
        super().__init__(handler)

        self._add(ComponentIds.SKIP, "Skip", EmojiConstants.SKIP, row=0)
        self._add(
            ComponentIds.PAUSE,
            "Resume" if paused else "Pause",
            EmojiConstants.PLAY if paused else EmojiConstants.PAUSE,
            row=0,
        )
        self._add(
            ComponentIds.STOP, "Stop", EmojiConstants.STOP, row=0, style=discord.ButtonStyle.danger
        )
        self._add(
            ComponentIds.LOOP,
            "Disable Loop" if looping else "Enable Loop",
            EmojiConstants.LOOP,
            row=0,
            style=discord.ButtonStyle.success if looping else discord.ButtonStyle.secondary,
        )
        self._add(ComponentIds.SHUFFLE, "Shuffle", EmojiConstants.SHUFFLE, row=0)

        self._add(ComponentIds.REWIND, "-5s", EmojiConstants.REWIND, row=1)
        self._add(ComponentIds.FORWARD, "+5s", EmojiConstants.FORWARD, row=1)
        self._add(
            ComponentIds.LEAVE,
            "Disconnect",
            EmojiConstants.LEAVE,
            row=1,
            style=discord.ButtonStyle.danger,
        )
        self._add(ComponentIds.QUEUE, "Queue", EmojiConstants.QUEUE, row=1)
        self._add(ComponentIds.LYRICS, "Lyrics", EmojiConstants.LYRICS, row=1)

    def _add(
        self,
        custom_id: str,
        label: str,
        emoji: str,
        *,
        row: int,
        style: discord.ButtonStyle = discord.ButtonStyle.secondary,
    ) -> None:
        button: discord.ui.Button[PlayerControlsView] = discord.ui.Button(
            custom_id=custom_id, label=label, emoji=emoji, style=style, row=row
        )
        button.callback = self._route(custom_id)
        self.add_item(button)
