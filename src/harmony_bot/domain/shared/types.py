"""Reusable Pydantic Annotated types for domain-wide validation.

Constrained types used across the guild and playback contexts are defined
here once, so models can simply annotate their fields::

    from harmony_bot.domain.shared.types import DiscordSnowflake, PrefixStr

    class MyModel(BaseModel):
        guild_id: DiscordSnowflake
        prefix: PrefixStr
"""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, Field

from harmony_bot.domain.shared.validators import validate_prefix

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

VolumePercent = Annotated[int, Field(ge=0, le=200)]
"""Player volume as a percentage: 0 … 200."""


# ── String constraints ──────────────────────────────────────────────

PrefixStr = Annotated[str, AfterValidator(validate_prefix)]
"""Command prefix: 1-3 characters without whitespace."""
