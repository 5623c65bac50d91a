"""Dependency Injection Container

Builds the object graph lazily: the database and repository, the Lavalink
gateway, and the pure pipeline services (normalizer, policy, dispatcher).
Components are created on first access and cached for the bot's lifetime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from harmony_bot.domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.services.action_dispatcher import ActionDispatcher
    from ..application.services.input_normalizer import InputNormalizer
    from ..domain.guild.authorization import AuthorizationPolicy
    from ..domain.guild.repository import GuildConfigRepository
    from ..infrastructure.lavalink.wavelink_session import WavelinkPlaybackGateway
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Persistence layer
    _database: Database | None = None
    _guild_config_repository: GuildConfigRepository | None = None

    # Playback
    _playback_gateway: WavelinkPlaybackGateway | None = None

    # Pipeline services
    _input_normalizer: InputNormalizer | None = None
    _authorization_policy: AuthorizationPolicy | None = None
    _action_dispatcher: ActionDispatcher | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Database ===

    @property
    def database(self) -> Database:
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    @property
    def guild_config_repository(self) -> GuildConfigRepository:
        if self._guild_config_repository is None:
            from ..infrastructure.persistence.repositories.guild_config_repository import (
                SQLiteGuildConfigRepository,
            )

            self._guild_config_repository = SQLiteGuildConfigRepository(
                self.database,
                default_prefix=self.settings.discord.default_prefix,
                default_volume=self.settings.player.default_volume,
            )
        return self._guild_config_repository

    # === Playback ===

    @property
    def playback_gateway(self) -> WavelinkPlaybackGateway:
        """Lavalink-backed facades, one per guild. Requires the bot."""
        if self._playback_gateway is None:
            from ..infrastructure.lavalink.wavelink_session import WavelinkPlaybackGateway

            self._playback_gateway = WavelinkPlaybackGateway(self.bot, self.settings.lavalink)
        return self._playback_gateway

    # === Pipeline ===

    @property
    def input_normalizer(self) -> InputNormalizer:
        if self._input_normalizer is None:
            from ..application.services.input_normalizer import InputNormalizer

            self._input_normalizer = InputNormalizer(seek_step_ms=self.settings.player.seek_step_ms)
        return self._input_normalizer

    @property
    def authorization_policy(self) -> AuthorizationPolicy:
        if self._authorization_policy is None:
            from ..domain.guild.authorization import AuthorizationPolicy

            self._authorization_policy = AuthorizationPolicy()
        return self._authorization_policy

    @property
    def action_dispatcher(self) -> ActionDispatcher:
        if self._action_dispatcher is None:
            from ..application.services.action_dispatcher import ActionDispatcher

            self._action_dispatcher = ActionDispatcher(
                guild_config_repository=self.guild_config_repository,
                player_settings=self.settings.player,
                link_settings=self.settings.links,
            )
        return self._action_dispatcher

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
