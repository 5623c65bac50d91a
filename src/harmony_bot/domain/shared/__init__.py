"""
Shared Domain Kernel

Contains constrained types, messages and exceptions shared across the guild
and playback contexts.
"""

from harmony_bot.domain.shared.exceptions import (
    AuthorizationDenied,
    DomainError,
    FacadeError,
    NoActiveSessionError,
    PersistenceError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "AuthorizationDenied",
    "NoActiveSessionError",
    "FacadeError",
    "PersistenceError",
]
