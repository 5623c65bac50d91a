"""Centralized constants for database schema, limits, component ids and UI values.

This module provides reusable constants that reduce magic strings and improve maintainability.
"""

from __future__ import annotations


class DatabaseTables:
    """Database table names."""

    GUILD_CONFIGS = "guild_configs"


class SQLPragmas:
    """SQLite PRAGMA statements for database configuration."""

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"
    TABLE_INFO = "PRAGMA table_info({table})"


class GuildConfigDefaults:
    """Defaults applied when a guild has no stored configuration."""

    PREFIX = "S-"
    DEFAULT_VOLUME = 50


class LimitConstants:
    """Numeric limits shared by validation and parsing."""

    MIN_PREFIX_LENGTH = 1
    MAX_PREFIX_LENGTH = 3
    MIN_VOLUME = 0
    MAX_VOLUME = 200
    SEEK_STEP_MS = 5000
    QUEUE_DISPLAY_LIMIT = 10
    PROGRESS_BAR_LENGTH = 15
    MIN_TRACKS_TO_SHUFFLE = 2
    EMBED_TITLE_MAX = 90
    QUEUE_TITLE_MAX = 60
    EMBED_FIELD_VALUE_MAX = 1024
    EMBED_DESCRIPTION_MAX = 4096


class ComponentIds:
    """custom_id values for buttons and select menus.

    These are stable across restarts so persistent views keep working.
    """

    SKIP = "skip"
    PAUSE = "pause"
    STOP = "stop"
    LOOP = "loop"
    SHUFFLE = "shuffle"
    REWIND = "rewind"
    FORWARD = "forward"
    LEAVE = "leave"
    QUEUE = "queue"
    LYRICS = "lyrics"

    HELP_MENU = "help_menu"
    HELP_MUSIC = "help_music"
    HELP_CONFIG = "help_config"
    HELP_INFO = "help_info"


class UIConstants:
    """Presentation constants."""

    EMBED_COLOR = 0x3498DB
    ERROR_COLOR = 0xE74C3C
    SUCCESS_COLOR = 0x2ECC71
