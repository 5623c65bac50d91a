"""
Guild Configuration Repository Interface

Abstract base class defining the contract for configuration persistence.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from harmony_bot.domain.guild.entities import GuildConfig


class GuildConfigRepository(ABC):
    """Abstract repository for per-guild configuration records.

    Absence of a record is never an error: ``get`` creates, persists and
    returns defaults the first time a guild is seen.
    """

    @abstractmethod
    async def get(self, guild_id: int) -> GuildConfig:
        """Return the guild's configuration, creating defaults if absent.

        Args:
            guild_id: The Discord guild ID.

        Raises:
            PersistenceError: If the underlying store cannot be read.
        """
        ...

    @abstractmethod
    async def save(self, config: GuildConfig) -> None:
        """Overwrite the full record for ``config.guild_id``.

        Raises:
            PersistenceError: If the write fails. No retry is attempted.
        """
        ...
