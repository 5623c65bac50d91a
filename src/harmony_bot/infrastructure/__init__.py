"""Infrastructure layer: Discord, Lavalink and SQLite adapters."""
