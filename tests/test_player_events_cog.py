"""
Unit Tests for PlayerEventsCog

Tests for:
- Track start announcements with playback controls
- Track exception reporting
- Ignoring events without a Harmony player or text channel
- Guild removal dropping the cached playback session
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
import wavelink

from harmony_bot.domain.shared.messages import DiscordUIMessages
from harmony_bot.infrastructure.discord.cogs.player_events_cog import PlayerEventsCog
from harmony_bot.infrastructure.discord.views import PlayerControlsView
from harmony_bot.infrastructure.lavalink import HarmonyPlayer

from conftest import GUILD_ID, TEXT_CHANNEL_ID


def make_track(title="Song"):
    track = MagicMock()
    track.title = title
    track.uri = "https://example.com/song"
    track.length = 200_000
    track.artwork = None
    track.is_seekable = True
    track.extras = SimpleNamespace(requester_name="Tester", text_channel_id=TEXT_CHANNEL_ID)
    return track


def make_player(text_channel_id=TEXT_CHANNEL_ID):
    player = MagicMock(spec=HarmonyPlayer)
    player.text_channel_id = text_channel_id
    player.guild = SimpleNamespace(id=GUILD_ID)
    player.paused = False
    player.queue = MagicMock()
    player.queue.mode = wavelink.QueueMode.loop
    return player


@pytest.fixture
def channel():
    channel = MagicMock(spec=discord.TextChannel)
    channel.send = AsyncMock()
    return channel


@pytest.fixture
def bot(channel):
    bot = MagicMock()
    bot.get_channel.return_value = channel
    bot.get_cog.return_value = SimpleNamespace(handle_component=AsyncMock())
    return bot


@pytest.fixture
def cog(bot):
    return PlayerEventsCog(bot, MagicMock())


class TestTrackStart:
    @pytest.mark.asyncio
    async def test_announces_with_controls(self, cog, bot, channel):
        payload = SimpleNamespace(player=make_player(), track=make_track("Intro"))

        await cog.on_wavelink_track_start(payload)

        bot.get_channel.assert_called_once_with(TEXT_CHANNEL_ID)
        kwargs = channel.send.await_args.kwargs
        assert kwargs["embed"].title == DiscordUIMessages.EMBED_NOW_PLAYING
        assert "Intro" in kwargs["embed"].description
        view = kwargs["view"]
        assert isinstance(view, PlayerControlsView)
        loop_button = next(b for b in view.children if b.custom_id == "loop")
        assert loop_button.label == "Disable Loop"

    @pytest.mark.asyncio
    async def test_falls_back_to_track_channel(self, cog, bot):
        payload = SimpleNamespace(player=make_player(text_channel_id=None), track=make_track())

        await cog.on_wavelink_track_start(payload)

        bot.get_channel.assert_called_once_with(TEXT_CHANNEL_ID)

    @pytest.mark.asyncio
    async def test_without_music_cog_sends_embed_only(self, cog, bot, channel):
        bot.get_cog.return_value = None
        payload = SimpleNamespace(player=make_player(), track=make_track())

        await cog.on_wavelink_track_start(payload)

        assert "view" not in channel.send.await_args.kwargs

    @pytest.mark.asyncio
    async def test_ignores_foreign_players(self, cog, channel):
        await cog.on_wavelink_track_start(SimpleNamespace(player=None, track=make_track()))

        channel.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_channel(self, cog, bot, channel):
        bot.get_channel.return_value = None

        await cog.on_wavelink_track_start(
            SimpleNamespace(player=make_player(), track=make_track())
        )

        channel.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_failure_is_swallowed(self, cog, channel):
        channel.send.side_effect = discord.HTTPException(
            MagicMock(status=403, reason="Forbidden"), "Missing Permissions"
        )

        await cog.on_wavelink_track_start(
            SimpleNamespace(player=make_player(), track=make_track())
        )


class TestTrackException:
    @pytest.mark.asyncio
    async def test_posts_player_error(self, cog, channel):
        payload = SimpleNamespace(
            player=make_player(),
            track=make_track("Broken"),
            exception={"message": "This video is unavailable", "severity": "common"},
        )

        await cog.on_wavelink_track_exception(payload)

        embed = channel.send.await_args.kwargs["embed"]
        assert embed.title == DiscordUIMessages.EMBED_PLAYER_ERROR
        assert "Broken" in embed.description


class TestGuildEvents:
    @pytest.mark.asyncio
    async def test_guild_remove_forgets_session(self, cog):
        guild = SimpleNamespace(id=GUILD_ID, name="Test Guild")

        await cog.on_guild_remove(guild)

        cog.container.playback_gateway.forget.assert_called_once_with(GUILD_ID)

    @pytest.mark.asyncio
    async def test_node_ready_is_logged(self, cog, caplog):
        payload = SimpleNamespace(
            node=SimpleNamespace(identifier="main"), resumed=False, session_id="abc"
        )

        with caplog.at_level("INFO"):
            await cog.on_wavelink_node_ready(payload)

        assert "main" in caplog.text
