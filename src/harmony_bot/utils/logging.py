"""Console log formatting: level colors and short logger names."""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Literal

PACKAGE_PREFIX = "harmony_bot."

_RESET = "\033[0m"
_DIM = "\033[2m"
_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def colors_enabled(stream: IO[str]) -> bool:
    """ANSI output only for interactive streams, and never when ``NO_COLOR`` is set."""
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class ColoredFormatter(logging.Formatter):
    """Formatter for the console handler in ``logging_config.json``.

    Loggers under ``harmony_bot`` are shown without the package prefix
    (``infrastructure.discord.cogs.music_cog``) when ``short_names`` is on.
    On a TTY the level is colored and the logger name dimmed. The record
    handed to other handlers is never modified.
    """

    RESET = _RESET
    DIM = _DIM
    COLORS = _LEVEL_COLORS

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
        stream: IO[str] | None = None,
        short_names: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._stream = stream
        self._short_names = short_names

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if self._short_names and name.startswith(PACKAGE_PREFIX):
            name = name[len(PACKAGE_PREFIX) :]
        levelname = record.levelname

        if colors_enabled(self._stream or sys.stderr):
            levelname = f"{self.COLORS.get(record.levelno, '')}{levelname}{self.RESET}"
            name = f"{self.DIM}{name}{self.RESET}"

        if name == record.name and levelname == record.levelname:
            return super().format(record)

        display = logging.makeLogRecord(record.__dict__)
        display.name = name
        display.levelname = levelname
        return super().format(display)
