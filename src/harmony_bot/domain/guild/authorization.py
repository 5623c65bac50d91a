"""Permission rules deciding who may perform which playback action."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from harmony_bot.domain.guild.entities import GuildConfig
from harmony_bot.domain.playback.actions import ActionCategory, PlaybackAction
from harmony_bot.domain.shared.exceptions import AuthorizationDenied
from harmony_bot.domain.shared.messages import DiscordUIMessages


@dataclass(frozen=True)
class MemberContext:
    """The acting member as seen by the policy."""

    user_id: int
    role_ids: frozenset[int] = field(default_factory=frozenset)
    can_manage_guild: bool = False

    @classmethod
    def of(cls, user_id: int, role_ids: Iterable[int], *, can_manage_guild: bool) -> MemberContext:
        return cls(user_id=user_id, role_ids=frozenset(role_ids), can_manage_guild=can_manage_guild)


@dataclass(frozen=True)
class AuthorizationResult:
    permitted: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> AuthorizationResult:
        return cls(permitted=True)

    @classmethod
    def deny(cls, reason: str) -> AuthorizationResult:
        return cls(permitted=False, reason=reason)

    def raise_for_denial(self) -> None:
        if not self.permitted:
            raise AuthorizationDenied(self.reason or "")


class AuthorizationPolicy:
    """Pure function of (action, member, config); holds no state.

    Rules, in precedence order:
        1. Configuration actions require Manage Server, regardless of DJ roles.
        2. Playback-control actions are open when no DJ roles are configured,
           otherwise require a DJ role or Manage Server.
        3. Informational actions and play requests are always permitted.
    """

    def authorize(
        self, action: PlaybackAction, member: MemberContext, config: GuildConfig
    ) -> AuthorizationResult:
        match action.category:
            case ActionCategory.CONFIGURATION:
                if member.can_manage_guild:
                    return AuthorizationResult.allow()
                return AuthorizationResult.deny(DiscordUIMessages.DENIED_REQUIRES_MANAGE_GUILD)
            case ActionCategory.PLAYBACK_CONTROL:
                if self.is_dj(member, config):
                    return AuthorizationResult.allow()
                return AuthorizationResult.deny(DiscordUIMessages.DENIED_REQUIRES_DJ)
            case _:
                return AuthorizationResult.allow()

    @staticmethod
    def is_dj(member: MemberContext, config: GuildConfig) -> bool:
        if not config.has_dj_restriction:
            return True
        if member.can_manage_guild:
            return True
        return not member.role_ids.isdisjoint(config.dj_role_ids)
