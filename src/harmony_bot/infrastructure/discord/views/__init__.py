"""Discord UI views and components."""

from __future__ import annotations

from harmony_bot.infrastructure.discord.views.base_view import BaseInteractiveView
from harmony_bot.infrastructure.discord.views.help_menu_view import HelpMenuView
from harmony_bot.infrastructure.discord.views.player_controls_view import PlayerControlsView

__all__ = [
    "BaseInteractiveView",
    "HelpMenuView",
    "PlayerControlsView",
]
