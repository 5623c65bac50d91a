"""Shared validators for domain models and settings.

Discord identifies guilds, users, roles and channels with snowflake IDs;
these helpers keep their validation in one place.
"""

from __future__ import annotations

from harmony_bot.domain.shared.constants import LimitConstants
from harmony_bot.domain.shared.messages import ErrorMessages


def validate_discord_snowflake(value: int) -> int:
    """Validate a Discord snowflake ID.

    Args:
        value: The snowflake ID to validate.

    Returns:
        The validated snowflake ID.

    Raises:
        ValueError: If the snowflake ID is invalid.
    """
    if value <= 0:
        raise ValueError(ErrorMessages.INVALID_SNOWFLAKE)
    if value >= 2**64:
        raise ValueError(ErrorMessages.SNOWFLAKE_TOO_LARGE)
    return value


def validate_prefix(value: str) -> str:
    """Validate a command prefix: 1-3 characters, no whitespace."""
    if not LimitConstants.MIN_PREFIX_LENGTH <= len(value) <= LimitConstants.MAX_PREFIX_LENGTH:
        raise ValueError(
            ErrorMessages.INVALID_PREFIX_LENGTH.format(
                min=LimitConstants.MIN_PREFIX_LENGTH, max=LimitConstants.MAX_PREFIX_LENGTH
            )
        )
    if any(ch.isspace() for ch in value):
        raise ValueError(ErrorMessages.PREFIX_HAS_WHITESPACE)
    return value
