"""Harmony: a Discord music bot driven by per-guild prefix commands and Lavalink."""

__version__ = "1.0.0"
