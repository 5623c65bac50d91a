"""Discord cogs - the message pipeline and player event listeners."""

from harmony_bot.infrastructure.discord.cogs.music_cog import MusicCog
from harmony_bot.infrastructure.discord.cogs.player_events_cog import PlayerEventsCog

__all__ = [
    "MusicCog",
    "PlayerEventsCog",
]
