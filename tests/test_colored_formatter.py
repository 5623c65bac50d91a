"""
Tests for the console log formatter

Tests for:
- Level colors and dimmed logger names on a TTY
- Plain output for redirected streams and NO_COLOR
- Shortening of harmony_bot logger names
"""

import logging
from io import StringIO
from unittest.mock import patch

import pytest

from harmony_bot.utils.logging import ColoredFormatter, colors_enabled


class TtyStream(StringIO):
    def isatty(self) -> bool:
        return True


def make_record(level=logging.INFO, name="harmony_bot.infrastructure.discord.bot", msg="ready"):
    return logging.LogRecord(
        name=name, level=level, pathname=__file__, lineno=1, msg=msg, args=(), exc_info=None
    )


@pytest.fixture(autouse=True)
def color_allowed(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)


class TestColorsEnabled:
    def test_tty(self):
        assert colors_enabled(TtyStream()) is True

    def test_redirected_stream(self):
        assert colors_enabled(StringIO()) is False

    def test_no_color_wins(self):
        with patch.dict("os.environ", {"NO_COLOR": ""}):
            assert colors_enabled(TtyStream()) is False


class TestColoredFormatter:
    @pytest.mark.parametrize("level", sorted(ColoredFormatter.COLORS))
    def test_level_color_on_tty(self, level):
        fmt = ColoredFormatter("%(levelname)s %(message)s", stream=TtyStream())

        output = fmt.format(make_record(level))

        color = ColoredFormatter.COLORS[level]
        name = logging.getLevelName(level)
        assert output == f"{color}{name}{ColoredFormatter.RESET} ready"

    def test_plain_when_redirected(self):
        fmt = ColoredFormatter("%(levelname)s | %(name)s | %(message)s", stream=StringIO())

        assert fmt.format(make_record(logging.WARNING)) == (
            "WARNING | infrastructure.discord.bot | ready"
        )

    def test_name_dimmed_on_tty(self):
        fmt = ColoredFormatter("%(name)s", stream=TtyStream())

        output = fmt.format(make_record())

        assert output == (
            f"{ColoredFormatter.DIM}infrastructure.discord.bot{ColoredFormatter.RESET}"
        )

    def test_third_party_names_kept(self):
        fmt = ColoredFormatter("%(name)s", stream=StringIO())

        assert fmt.format(make_record(name="wavelink.node")) == "wavelink.node"

    def test_short_names_can_be_disabled(self):
        fmt = ColoredFormatter("%(name)s", stream=StringIO(), short_names=False)

        assert fmt.format(make_record()) == "harmony_bot.infrastructure.discord.bot"

    def test_record_not_mutated(self):
        """Other handlers must still see the original record."""
        fmt = ColoredFormatter("%(levelname)s %(name)s", stream=TtyStream())
        record = make_record(logging.ERROR)

        fmt.format(record)

        assert record.levelname == "ERROR"
        assert record.name == "harmony_bot.infrastructure.discord.bot"
