"""
Unit Tests for the GuildConfig record

Tests for:
- Defaults for a new guild
- Prefix, music channel and DJ role updates returning new records
- Field validation and DJ role de-duplication
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from harmony_bot.domain.guild.entities import GuildConfig
from harmony_bot.domain.shared.exceptions import ValidationError

GUILD_ID = 111111111111111111
ROLE_A = 500000000000000001
ROLE_B = 500000000000000002


class TestGuildConfigDefaults:
    def test_defaults(self):
        config = GuildConfig.defaults(GUILD_ID)

        assert config.guild_id == GUILD_ID
        assert config.prefix == "S-"
        assert config.dj_role_ids == ()
        assert config.music_channel_id is None
        assert config.default_volume == 50
        assert config.has_dj_restriction is False

    def test_defaults_accept_overrides(self):
        config = GuildConfig.defaults(GUILD_ID, prefix="!", default_volume=80)

        assert config.prefix == "!"
        assert config.default_volume == 80

    def test_is_frozen(self):
        config = GuildConfig.defaults(GUILD_ID)
        with pytest.raises(PydanticValidationError):
            config.prefix = "!"


class TestGuildConfigValidation:
    @pytest.mark.parametrize("prefix", ["", "abcd", " a", "a\tb"])
    def test_rejects_bad_prefix(self, prefix):
        with pytest.raises(PydanticValidationError):
            GuildConfig(guild_id=GUILD_ID, prefix=prefix)

    def test_rejects_non_positive_guild_id(self):
        with pytest.raises(PydanticValidationError):
            GuildConfig(guild_id=0)

    def test_rejects_volume_out_of_range(self):
        with pytest.raises(PydanticValidationError):
            GuildConfig(guild_id=GUILD_ID, default_volume=250)

    def test_duplicate_roles_are_collapsed_in_order(self):
        config = GuildConfig(guild_id=GUILD_ID, dj_role_ids=[ROLE_B, ROLE_A, ROLE_B])

        assert config.dj_role_ids == (ROLE_B, ROLE_A)


class TestGuildConfigUpdates:
    def test_with_prefix_returns_new_record(self):
        config = GuildConfig.defaults(GUILD_ID)
        updated = config.with_prefix("!!")

        assert updated.prefix == "!!"
        assert config.prefix == "S-"

    def test_with_prefix_raises_domain_validation_error(self):
        config = GuildConfig.defaults(GUILD_ID)

        with pytest.raises(ValidationError) as exc_info:
            config.with_prefix("four")
        assert exc_info.value.field == "prefix"

    def test_music_channel_set_and_clear(self):
        config = GuildConfig.defaults(GUILD_ID).with_music_channel(42)

        assert config.music_channel_id == 42
        assert config.with_music_channel(None).music_channel_id is None

    def test_with_dj_role_appends_once(self):
        config = GuildConfig.defaults(GUILD_ID).with_dj_role(ROLE_A)

        assert config.dj_role_ids == (ROLE_A,)
        assert config.has_dj_restriction is True
        assert config.with_dj_role(ROLE_A) is config

    def test_with_dj_role_rejects_invalid_id(self):
        with pytest.raises(ValidationError):
            GuildConfig.defaults(GUILD_ID).with_dj_role(-5)

    def test_without_dj_role(self):
        config = GuildConfig(guild_id=GUILD_ID, dj_role_ids=(ROLE_A, ROLE_B))

        assert config.without_dj_role(ROLE_A).dj_role_ids == (ROLE_B,)
        assert config.without_dj_role(999) is config
