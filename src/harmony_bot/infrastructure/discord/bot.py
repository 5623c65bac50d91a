"""The Discord client: wires the container, loads the cogs and connects Lavalink."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING, Any

import discord
from discord.ext import commands

from harmony_bot.domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ...config.container import Container
    from ...config.settings import Settings

logger = logging.getLogger(__name__)

COGS = (
    "harmony_bot.infrastructure.discord.cogs.music_cog",
    "harmony_bot.infrastructure.discord.cogs.player_events_cog",
)


def build_intents() -> discord.Intents:
    """Guild, voice-state and message-content intents; prefix commands read raw text."""
    intents = discord.Intents.default()
    intents.guilds = True
    intents.voice_states = True
    intents.message_content = True
    return intents


class HarmonyBot(commands.Bot):
    def __init__(self, container: Container, settings: Settings, **kwargs: Any) -> None:
        # Guild prefixes are resolved by MusicCog; the commands extension only
        # sees mentions and never dispatches chat input.
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=build_intents(),
            help_command=None,
            owner_ids=set(settings.discord.owner_ids) or None,
            **kwargs,
        )
        self.container = container
        self.settings = settings
        self._shutdown_event = asyncio.Event()
        container.set_bot(self)

    async def setup_hook(self) -> None:
        logger.info(LogTemplates.BOT_SETUP)
        try:
            await self.container.initialize()
        except Exception as e:
            logger.exception(LogTemplates.BOT_CONTAINER_INIT_FAILED, e)
            raise
        logger.info(LogTemplates.BOT_CONTAINER_INITIALIZED)

        await self.container.playback_gateway.connect_nodes()
        await self._load_cogs()
        logger.info(LogTemplates.BOT_SETUP_COMPLETE)

    async def _load_cogs(self) -> None:
        failed = 0
        for extension in COGS:
            try:
                await self.load_extension(extension)
            except commands.ExtensionError as e:
                failed += 1
                logger.exception(LogTemplates.BOT_COG_LOAD_FAILED, extension, e)
            else:
                logger.info(LogTemplates.BOT_COG_LOADED, extension)
        logger.info(LogTemplates.BOT_COGS_LOADED_SUMMARY, len(COGS) - failed, failed)

    async def on_message(self, message: discord.Message) -> None:
        # MusicCog's listener owns chat input.
        return

    async def on_error(self, event_method: str, /, *args: Any, **kwargs: Any) -> None:
        logger.exception(LogTemplates.LISTENER_ERROR, event_method)

    def presence_activity(self) -> discord.Activity:
        discord_settings = self.settings.discord
        name = discord_settings.activity_name or DiscordUIMessages.PRESENCE_ACTIVITY.format(
            prefix=discord_settings.default_prefix
        )
        return discord.Activity(type=discord.ActivityType.listening, name=name)

    async def on_ready(self) -> None:
        user = self.user
        logger.info(LogTemplates.BOT_READY, user, user.id if user else None)
        logger.info(LogTemplates.BOT_CONNECTED_GUILDS, len(self.guilds))
        await self.change_presence(activity=self.presence_activity())

    async def _disconnect_players(self) -> None:
        for voice_client in list(self.voice_clients):
            guild = getattr(voice_client, "guild", None)
            try:
                await voice_client.disconnect(force=True)
            except Exception as e:
                logger.warning(
                    LogTemplates.BOT_VOICE_DISCONNECT_FAILED, getattr(guild, "id", "?"), e
                )

    async def close(self) -> None:
        logger.info(LogTemplates.BOT_SHUTTING_DOWN)
        await self._disconnect_players()

        try:
            await self.container.shutdown()
        except Exception as e:
            logger.warning(LogTemplates.BOT_CONTAINER_SHUTDOWN_ERROR, e)
        else:
            logger.info(LogTemplates.BOT_CONTAINER_SHUTDOWN)

        await super().close()
        self._shutdown_event.set()
        logger.info(LogTemplates.BOT_SHUTDOWN_COMPLETE)

    def run_with_graceful_shutdown(self, token: str, *, shutdown_timeout: float = 30.0) -> None:
        """Run until closed; SIGINT and SIGTERM trigger a bounded :meth:`close`."""

        async def close_within_timeout() -> None:
            try:
                await asyncio.wait_for(self.close(), timeout=shutdown_timeout)
            except TimeoutError:
                logger.warning(LogTemplates.BOT_SHUTDOWN_TIMEOUT, shutdown_timeout)

        async def runner() -> None:
            async with self:
                loop = asyncio.get_running_loop()
                for sig in (signal.SIGINT, signal.SIGTERM):
                    loop.add_signal_handler(
                        sig, lambda: asyncio.ensure_future(close_within_timeout())
                    )
                await self.start(token)

        asyncio.run(runner())


def create_bot(container: Container, settings: Settings) -> HarmonyBot:
    return HarmonyBot(container=container, settings=settings)
