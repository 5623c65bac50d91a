"""Utility functions for formatting and parsing Discord message text."""

from __future__ import annotations

import re
from functools import cache

from harmony_bot.domain.shared.constants import LimitConstants
from harmony_bot.domain.shared.messages import EmojiConstants

_DIGITS = re.compile(r"[0-9]+")
_MINUTES_SECONDS = re.compile(r"(?:([0-9]+)m)?(?:([0-9]+)s)?")
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")


@cache
def format_duration(seconds: int | float | None) -> str:
    if seconds is None:
        return "–"

    total_seconds = int(seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_ms(milliseconds: int | None) -> str:
    if milliseconds is None:
        return format_duration(None)
    return format_duration(max(0, milliseconds) // 1000)


def parse_timestamp(value: str) -> int | None:
    """Parse a timestamp string into total seconds.

    Accepts "1:30" / "1:30:00" (colon-delimited), "2m30s" / "2m" / "45s"
    and a bare "90". Only ASCII digits are accepted. Returns None if the
    input is invalid.
    """
    value = value.strip().lower()
    if not value:
        return None

    if ":" in value:
        parts = value.split(":")
        if len(parts) > 3 or not all(_DIGITS.fullmatch(p) for p in parts):
            return None
        total = 0
        for part in parts:
            total = total * 60 + int(part)
        return total

    match = _MINUTES_SECONDS.fullmatch(value)
    if match and any(match.groups()):
        minutes = int(match.group(1) or 0)
        seconds = int(match.group(2) or 0)
        return minutes * 60 + seconds

    if _DIGITS.fullmatch(value):
        return int(value)

    return None


def parse_volume(value: str) -> int | None:
    """Parse a volume percentage; None unless it is an integer within range."""
    value = value.strip()
    if not _SIGNED_INT.fullmatch(value):
        return None
    volume = int(value)
    if not LimitConstants.MIN_VOLUME <= volume <= LimitConstants.MAX_VOLUME:
        return None
    return volume


def create_progress_bar(
    current_ms: int, total_ms: int, length: int = LimitConstants.PROGRESS_BAR_LENGTH
) -> str:
    if total_ms <= 0:
        filled = 0
    else:
        filled = round(length * current_ms / total_ms)
    filled = max(0, min(length, filled))
    return (
        EmojiConstants.PROGRESS_FILL * filled
        + EmojiConstants.PROGRESS_KNOB
        + EmojiConstants.PROGRESS_FILL * (length - filled)
    )


@cache
def truncate(text: str, max_length: int = LimitConstants.EMBED_TITLE_MAX) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"
