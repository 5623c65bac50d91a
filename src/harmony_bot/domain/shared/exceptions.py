"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when an argument or record fails validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class AuthorizationDenied(DomainError):
    """Raised when a member is not allowed to perform an action."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason, code="AUTHORIZATION_DENIED")
        self.reason = reason


class NoActiveSessionError(DomainError):
    """Raised when a playback-control action targets a guild with nothing playing."""

    def __init__(self, guild_id: int, message: str | None = None) -> None:
        msg = message or f"No active track in guild {guild_id}"
        super().__init__(msg, code="NO_ACTIVE_SESSION")
        self.guild_id = guild_id


class FacadeError(DomainError):
    """Raised when the audio player rejects or fails an operation."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        msg = message or f"Playback operation '{operation}' failed"
        super().__init__(msg, code="FACADE_ERROR")
        self.operation = operation


class PersistenceError(DomainError):
    """Raised when the configuration store cannot read or write a record."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        msg = message or f"Storage operation '{operation}' failed"
        super().__init__(msg, code="PERSISTENCE_ERROR")
        self.operation = operation
