"""Date/time helpers.

All timestamps are timezone-aware UTC and stored as ISO 8601 strings.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


def to_iso(value: datetime) -> str:
    return value.astimezone(UTC).isoformat()
