# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, messages and exceptions
- guild/: Per-guild configuration and authorization rules
- playback/: The closed set of playback actions
"""

from harmony_bot.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
