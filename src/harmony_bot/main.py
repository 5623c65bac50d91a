#!/usr/bin/env python3
"""Command-line entry point: ``harmony-bot``.

Exit codes: 0 after a clean or interrupted run, 1 when the token is missing
or the bot crashes, 2 when the environment holds invalid settings.
"""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from harmony_bot.domain.shared.messages import ErrorMessages, LogTemplates

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"
_FALLBACK_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_CONFIG = 2


def load_logging_config(config_path: Path) -> dict[str, Any]:
    with open(config_path) as f:
        return json.load(f)


def setup_logging(log_level: str = "INFO", config_path: Path = _LOGGING_CONFIG_PATH) -> None:
    """Configure logging from ``logging_config.json``; the settings' level wins."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    try:
        logging.config.dictConfig(load_logging_config(config_path))
    except (OSError, json.JSONDecodeError, ValueError) as e:
        logging.basicConfig(level=level, format=_FALLBACK_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        logging.warning(LogTemplates.LOGGING_CONFIG_FALLBACK, config_path, e)

    logging.getLogger().setLevel(level)


def main() -> int:
    from harmony_bot.config.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logging.getLogger(__name__).error(LogTemplates.SETTINGS_INVALID, e)
        return EXIT_BAD_CONFIG

    setup_logging("DEBUG" if settings.debug else settings.log_level)
    logger = logging.getLogger(__name__)

    token = settings.discord.token.get_secret_value()
    if not token:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return EXIT_FAILURE

    logger.info(
        LogTemplates.BOT_STARTING,
        settings.environment,
        settings.lavalink.identifier,
        settings.lavalink.uri,
    )

    from harmony_bot.config.container import create_container
    from harmony_bot.infrastructure.discord.bot import create_bot

    bot = create_bot(create_container(settings), settings)

    try:
        bot.run_with_graceful_shutdown(token)
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return EXIT_FAILURE
    else:
        logger.info(LogTemplates.BOT_STOPPED)
    return EXIT_OK


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
