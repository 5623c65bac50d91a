"""
Unit Tests for HarmonyBot Lifecycle

Tests for:
- Construction: intents, mention-only command prefix, container wiring
- setup_hook: container initialization, Lavalink nodes, cog loading
- Cog loading that survives individual failures
- Presence on ready
- Graceful close of voice clients and the container
- The create_bot factory
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import discord
import pytest
from discord.ext import commands

from harmony_bot.infrastructure.discord.bot import COGS, HarmonyBot, create_bot


@pytest.fixture
def mock_settings():
    """Create mock settings."""
    settings = MagicMock()
    settings.discord.default_prefix = "S-"
    settings.discord.owner_ids = ()
    settings.discord.activity_name = None
    return settings


@pytest.fixture
def mock_container():
    """Create mock container with the async lifecycle hooks."""
    container = MagicMock()
    container.initialize = AsyncMock()
    container.shutdown = AsyncMock()
    container.set_bot = MagicMock()
    container.playback_gateway.connect_nodes = AsyncMock()
    return container


# =============================================================================
# Bot Initialization Tests
# =============================================================================


class TestBotInitialization:
    """Tests for HarmonyBot initialization."""

    @pytest.mark.asyncio
    async def test_init_sets_intents(self, mock_container, mock_settings):
        """Should request the intents needed for prefix commands and voice."""
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        assert bot.intents.message_content is True
        assert bot.intents.voice_states is True
        assert bot.intents.guilds is True

    @pytest.mark.asyncio
    async def test_init_uses_mention_prefix(self, mock_container, mock_settings):
        """Guild prefixes are parsed by the music cog, not the commands extension."""
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        assert bot.command_prefix is commands.when_mentioned

    @pytest.mark.asyncio
    async def test_init_disables_default_help(self, mock_container, mock_settings):
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        assert bot.help_command is None

    @pytest.mark.asyncio
    async def test_init_sets_owner_ids(self, mock_container, mock_settings):
        mock_settings.discord.owner_ids = (111111111111111111,)

        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        assert bot.owner_ids == {111111111111111111}

    @pytest.mark.asyncio
    async def test_init_wires_container(self, mock_container, mock_settings):
        """Should store references and register itself with the container."""
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        assert bot.container is mock_container
        assert bot.settings is mock_settings
        assert isinstance(bot._shutdown_event, asyncio.Event)
        assert not bot._shutdown_event.is_set()
        mock_container.set_bot.assert_called_once_with(bot)


# =============================================================================
# Setup Hook Tests
# =============================================================================


class TestSetupHook:
    """Tests for HarmonyBot.setup_hook method."""

    @pytest.mark.asyncio
    async def test_setup_hook_order(self, mock_container, mock_settings):
        """Container first, then Lavalink nodes, then cogs."""
        bot = HarmonyBot(container=mock_container, settings=mock_settings)
        calls = []
        mock_container.initialize.side_effect = lambda: calls.append("initialize")
        mock_container.playback_gateway.connect_nodes.side_effect = lambda: calls.append(
            "connect_nodes"
        )

        with patch.object(
            bot, "_load_cogs", new_callable=AsyncMock, side_effect=lambda: calls.append("cogs")
        ):
            await bot.setup_hook()

        assert calls == ["initialize", "connect_nodes", "cogs"]

    @pytest.mark.asyncio
    async def test_setup_hook_propagates_init_failure(self, mock_container, mock_settings):
        """Should not continue startup when the container cannot initialize."""
        mock_container.initialize.side_effect = RuntimeError("disk full")
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        with patch.object(bot, "_load_cogs", new_callable=AsyncMock) as mock_load:
            with pytest.raises(RuntimeError):
                await bot.setup_hook()

        mock_container.playback_gateway.connect_nodes.assert_not_awaited()
        mock_load.assert_not_awaited()


# =============================================================================
# Cog Loading Tests
# =============================================================================


class TestLoadCogs:
    """Tests for HarmonyBot._load_cogs method."""

    @pytest.mark.asyncio
    async def test_load_cogs_loads_all_cogs(self, mock_container, mock_settings):
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        with patch.object(bot, "load_extension", new_callable=AsyncMock) as mock_load:
            await bot._load_cogs()

        assert [c.args[0] for c in mock_load.await_args_list] == list(COGS)
        assert "harmony_bot.infrastructure.discord.cogs.music_cog" in COGS
        assert "harmony_bot.infrastructure.discord.cogs.player_events_cog" in COGS

    @pytest.mark.asyncio
    async def test_load_cogs_handles_individual_failure(
        self, mock_container, mock_settings, caplog
    ):
        """Should continue loading other cogs when one fails."""
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        async def load_side_effect(cog_name):
            if "music_cog" in cog_name:
                raise commands.ExtensionFailed(cog_name, RuntimeError("broken"))

        with patch.object(
            bot, "load_extension", new_callable=AsyncMock, side_effect=load_side_effect
        ) as mock_load, caplog.at_level("INFO"):
            await bot._load_cogs()

        assert mock_load.await_count == len(COGS)
        assert "1 success, 1 failed" in caplog.text


# =============================================================================
# Event Handler Tests
# =============================================================================


class TestOnReady:
    """Tests for HarmonyBot.on_ready event handler."""

    async def _ready(self, bot):
        mock_user = MagicMock()
        mock_user.id = 123456789

        with (
            patch.object(type(bot), "user", PropertyMock(return_value=mock_user)),
            patch.object(type(bot), "guilds", PropertyMock(return_value=[MagicMock()])),
            patch.object(bot, "change_presence", new_callable=AsyncMock) as mock_change,
        ):
            await bot.on_ready()

        return mock_change.await_args.kwargs["activity"]

    @pytest.mark.asyncio
    async def test_default_presence_names_prefix(self, mock_container, mock_settings):
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        activity = await self._ready(bot)

        assert activity.type == discord.ActivityType.listening
        assert activity.name == "music | S-help"

    @pytest.mark.asyncio
    async def test_configured_presence(self, mock_container, mock_settings):
        mock_settings.discord.activity_name = "the radio"
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        activity = await self._ready(bot)

        assert activity.name == "the radio"


class TestOnMessage:
    @pytest.mark.asyncio
    async def test_does_not_process_commands(self, mock_container, mock_settings):
        """Chat input belongs to the music cog's listener."""
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        with patch.object(bot, "process_commands", new_callable=AsyncMock) as mock_process:
            await bot.on_message(MagicMock())

        mock_process.assert_not_awaited()


# =============================================================================
# Close/Shutdown Tests
# =============================================================================


class TestBotClose:
    """Tests for HarmonyBot.close method."""

    @pytest.mark.asyncio
    async def test_close_disconnects_voice_clients(self, mock_container, mock_settings):
        bot = HarmonyBot(container=mock_container, settings=mock_settings)
        vc1 = AsyncMock()
        vc2 = AsyncMock()

        with patch.object(type(bot), "voice_clients", PropertyMock(return_value=[vc1, vc2])):
            await bot.close()

        vc1.disconnect.assert_awaited_once_with(force=True)
        vc2.disconnect.assert_awaited_once_with(force=True)

    @pytest.mark.asyncio
    async def test_close_handles_voice_disconnect_error(
        self, mock_container, mock_settings, caplog
    ):
        """A failing voice client should not stop the shutdown."""
        bot = HarmonyBot(container=mock_container, settings=mock_settings)
        vc = AsyncMock()
        vc.guild.id = 42
        vc.disconnect.side_effect = discord.ClientException("already gone")

        with patch.object(type(bot), "voice_clients", PropertyMock(return_value=[vc])):
            await bot.close()

        mock_container.shutdown.assert_awaited_once()
        assert "42" in caplog.text

    @pytest.mark.asyncio
    async def test_close_handles_container_shutdown_error(self, mock_container, mock_settings):
        mock_container.shutdown.side_effect = RuntimeError("Shutdown failed")
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        with patch.object(type(bot), "voice_clients", PropertyMock(return_value=[])):
            await bot.close()

        assert bot._shutdown_event.is_set()

    @pytest.mark.asyncio
    async def test_close_sets_shutdown_event(self, mock_container, mock_settings):
        bot = HarmonyBot(container=mock_container, settings=mock_settings)

        with patch.object(type(bot), "voice_clients", PropertyMock(return_value=[])):
            await bot.close()

        mock_container.shutdown.assert_awaited_once()
        assert bot._shutdown_event.is_set()


# =============================================================================
# Factory Function Tests
# =============================================================================


class TestCreateBot:
    @pytest.mark.asyncio
    async def test_create_bot_returns_harmony_bot(self, mock_container, mock_settings):
        bot = create_bot(mock_container, mock_settings)

        assert isinstance(bot, HarmonyBot)
        assert bot.container is mock_container
        assert bot.settings is mock_settings
