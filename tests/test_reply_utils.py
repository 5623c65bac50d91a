"""
Unit Tests for reply formatting and argument parsing helpers

Tests for:
- Duration formatting in seconds and milliseconds
- Seek timestamp parsing (colon, NmNs and bare seconds forms)
- Volume parsing within 0-200
- Progress bar rendering and truncation
"""

import pytest

from harmony_bot.domain.shared.messages import EmojiConstants
from harmony_bot.utils.reply import (
    create_progress_bar,
    format_duration,
    format_ms,
    parse_timestamp,
    parse_volume,
    truncate,
)


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0:00"), (5, "0:05"), (65, "1:05"), (3600, "1:00:00"), (3725, "1:02:05")],
    )
    def test_formats(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_none_is_placeholder(self):
        assert format_duration(None) == "–"

    def test_format_ms_floors_and_clamps(self):
        assert format_ms(90_999) == "1:30"
        assert format_ms(-1000) == "0:00"


class TestParseTimestamp:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1:30", 90),
            ("01:02:03", 3723),
            ("2m30s", 150),
            ("2m", 120),
            ("45s", 45),
            ("90", 90),
            ("  1:00 ", 60),
            ("2M5S", 125),
        ],
    )
    def test_valid_forms(self, raw, expected):
        assert parse_timestamp(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "1:2:3:4", "1::30", "-5", "1m30", "١٢", "1.5", "m", "s"],
    )
    def test_invalid_forms(self, raw):
        assert parse_timestamp(raw) is None


class TestParseVolume:
    @pytest.mark.parametrize(("raw", "expected"), [("0", 0), ("50", 50), ("200", 200), ("+7", 7)])
    def test_valid(self, raw, expected):
        assert parse_volume(raw) == expected

    @pytest.mark.parametrize("raw", ["", "loud", "201", "-1", "5.5", "1e2"])
    def test_invalid(self, raw):
        assert parse_volume(raw) is None


class TestProgressBar:
    def test_start_of_track(self):
        bar = create_progress_bar(0, 100_000, length=10)

        assert bar == EmojiConstants.PROGRESS_KNOB + EmojiConstants.PROGRESS_FILL * 10

    def test_half_way(self):
        bar = create_progress_bar(50_000, 100_000, length=10)

        assert bar.index(EmojiConstants.PROGRESS_KNOB) == 5

    def test_clamped_past_end(self):
        bar = create_progress_bar(500_000, 100_000, length=10)

        assert bar.endswith(EmojiConstants.PROGRESS_KNOB)

    def test_unknown_length(self):
        assert create_progress_bar(10_000, 0, length=4).startswith(EmojiConstants.PROGRESS_KNOB)


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("hello", 10) == "hello"

    def test_long_text_gets_ellipsis(self):
        result = truncate("x" * 20, 10)

        assert len(result) == 10
        assert result.endswith("…")
