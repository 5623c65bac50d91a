"""Platform-neutral replies produced by the action dispatcher.

The Discord layer renders these into messages, embeds and reactions; nothing
here imports discord.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from harmony_bot.domain.shared.constants import UIConstants
from harmony_bot.domain.shared.messages import DiscordUIMessages


class ResponseStatus(Enum):
    """Status codes for dispatch results."""

    SUCCESS = "success"
    INFO = "info"
    DENIED = "denied"
    INVALID = "invalid"
    NOTHING_PLAYING = "nothing_playing"
    FAILED = "failed"


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = True


@dataclass(frozen=True)
class EmbedPayload:
    title: str | None = None
    description: str | None = None
    fields: tuple[EmbedField, ...] = ()
    thumbnail_url: str | None = None
    footer: str | None = None
    color: int = UIConstants.EMBED_COLOR


@dataclass(frozen=True)
class Response:
    """Result of dispatching one action."""

    status: ResponseStatus
    content: str | None = None
    embed: EmbedPayload | None = None
    ephemeral: bool = False
    reaction: str | None = None
    attach_help_menu: bool = False

    @property
    def is_success(self) -> bool:
        return self.status in (ResponseStatus.SUCCESS, ResponseStatus.INFO)

    @classmethod
    def success(cls, content: str | None = None, *, embed: EmbedPayload | None = None) -> Response:
        return cls(status=ResponseStatus.SUCCESS, content=content, embed=embed)

    @classmethod
    def react(cls, emoji: str) -> Response:
        """A success acknowledged with a reaction instead of a message."""
        return cls(status=ResponseStatus.SUCCESS, reaction=emoji)

    @classmethod
    def info(
        cls,
        content: str | None = None,
        *,
        embed: EmbedPayload | None = None,
        ephemeral: bool = False,
        attach_help_menu: bool = False,
    ) -> Response:
        return cls(
            status=ResponseStatus.INFO,
            content=content,
            embed=embed,
            ephemeral=ephemeral,
            attach_help_menu=attach_help_menu,
        )

    @classmethod
    def denied(cls, reason: str | None) -> Response:
        return cls(
            status=ResponseStatus.DENIED,
            content=reason or DiscordUIMessages.DENIED_REQUIRES_DJ,
            ephemeral=True,
        )

    @classmethod
    def invalid(cls, message: str) -> Response:
        return cls(status=ResponseStatus.INVALID, content=message, ephemeral=True)

    @classmethod
    def nothing_playing(cls, message: str = DiscordUIMessages.STATE_NOTHING_PLAYING) -> Response:
        return cls(status=ResponseStatus.NOTHING_PLAYING, content=message, ephemeral=True)

    @classmethod
    def failed(cls, message: str = DiscordUIMessages.ERROR_GENERIC) -> Response:
        return cls(status=ResponseStatus.FAILED, content=message, ephemeral=True)
