"""Per-guild configuration record."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from harmony_bot.domain.shared.constants import GuildConfigDefaults
from harmony_bot.domain.shared.exceptions import ValidationError
from harmony_bot.domain.shared.types import DiscordSnowflake, PrefixStr, VolumePercent
from harmony_bot.domain.shared.validators import validate_discord_snowflake, validate_prefix


class GuildConfig(BaseModel):
    """Immutable configuration for a single guild.

    Every "mutation" returns a new record; callers persist it through the
    configuration repository. An empty ``dj_role_ids`` means playback control
    is unrestricted.
    """

    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    prefix: PrefixStr = GuildConfigDefaults.PREFIX
    dj_role_ids: tuple[DiscordSnowflake, ...] = Field(default_factory=tuple)
    music_channel_id: DiscordSnowflake | None = None
    default_volume: VolumePercent = GuildConfigDefaults.DEFAULT_VOLUME

    @field_validator("dj_role_ids", mode="before")
    @classmethod
    def _dedupe_roles(cls, v: object) -> object:
        if isinstance(v, (list, tuple)):
            return tuple(dict.fromkeys(v))
        return v

    @classmethod
    def defaults(
        cls,
        guild_id: int,
        *,
        prefix: str = GuildConfigDefaults.PREFIX,
        default_volume: int = GuildConfigDefaults.DEFAULT_VOLUME,
    ) -> GuildConfig:
        return cls(guild_id=guild_id, prefix=prefix, default_volume=default_volume)

    @property
    def has_dj_restriction(self) -> bool:
        return bool(self.dj_role_ids)

    def has_dj_role(self, role_id: int) -> bool:
        return role_id in self.dj_role_ids

    def with_prefix(self, prefix: str) -> GuildConfig:
        try:
            validate_prefix(prefix)
        except ValueError as e:
            raise ValidationError(str(e), field="prefix") from e
        return self.model_copy(update={"prefix": prefix})

    def with_music_channel(self, channel_id: int | None) -> GuildConfig:
        if channel_id is not None:
            try:
                validate_discord_snowflake(channel_id)
            except ValueError as e:
                raise ValidationError(str(e), field="music_channel_id") from e
        return self.model_copy(update={"music_channel_id": channel_id})

    def with_dj_role(self, role_id: int) -> GuildConfig:
        """Return a copy with ``role_id`` appended; unchanged if already present."""
        if self.has_dj_role(role_id):
            return self
        try:
            validate_discord_snowflake(role_id)
        except ValueError as e:
            raise ValidationError(str(e), field="dj_role_ids") from e
        return self.model_copy(update={"dj_role_ids": (*self.dj_role_ids, role_id)})

    def without_dj_role(self, role_id: int) -> GuildConfig:
        if not self.has_dj_role(role_id):
            return self
        remaining = tuple(r for r in self.dj_role_ids if r != role_id)
        return self.model_copy(update={"dj_role_ids": remaining})
