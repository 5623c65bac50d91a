"""Guard and conversion helpers for Discord events."""

from harmony_bot.infrastructure.discord.guards.member_guards import (
    member_context,
    message_input,
    send_ephemeral,
)

__all__ = ["member_context", "message_input", "send_ephemeral"]
