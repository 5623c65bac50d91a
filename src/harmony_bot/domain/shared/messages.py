"""Centralized message constants for error messages, log templates, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Guild Configuration Errors
    INVALID_PREFIX_LENGTH = "Prefix must be between {min} and {max} characters"
    PREFIX_HAS_WHITESPACE = "Prefix cannot contain whitespace"

    # Settings Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    INVALID_LAVALINK_URI = "Lavalink URI must start with http:// or https://"
    INVALID_SEARCH_SOURCE = "Search source must be a Lavalink search prefix such as ytsearch"

    # Startup Errors
    DISCORD_TOKEN_REQUIRED = (
        "DISCORD_TOKEN is required. Set DISCORD__TOKEN or DISCORD_TOKEN in the environment."
    )
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Bot has no container attached; create it with create_bot()"


class LogTemplates:
    """%-style templates for logger calls."""

    # Database
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"
    TABLE_MIGRATED = "Migrated table %s: added column %s"

    # Guild configuration store
    GUILD_CONFIG_CREATED = "Created default configuration for guild %s"
    GUILD_CONFIG_SAVED = "Saved configuration for guild %s"
    GUILD_CONFIG_READ_FAILED = "Failed to read configuration for guild %s: %s"
    GUILD_CONFIG_WRITE_FAILED = "Failed to write configuration for guild %s: %s"

    # Dispatch
    ACTION_DENIED = "Denied %s for user %s in guild %s: %s"
    ACTION_NOTHING_PLAYING = "Ignored %s in guild %s: nothing is playing"
    ACTION_FACADE_FAILED = "Playback operation failed for %s in guild %s: %s"
    ACTION_UNEXPECTED_ERROR = "Unexpected error while dispatching %s in guild %s"
    ACTION_PERSISTENCE_FAILED = "Configuration update failed for %s in guild %s: %s"
    CONFIG_UPDATED = "Guild %s %s updated by user %s"

    # Lavalink / playback adapter
    LAVALINK_CONNECTING = "Connecting to Lavalink node %s at %s"
    LAVALINK_CONNECT_FAILED = "Failed to connect to Lavalink node %s: %s"
    LAVALINK_NODE_READY = "Lavalink node %s ready (resumed=%s, session=%s)"
    PLAYER_CONNECTED = "Connected player in guild %s to channel %s"
    PLAYER_DISCONNECTED = "Disconnected player in guild %s"
    TRACK_SEARCH_EMPTY = "No results for query %r in guild %s"
    TRACK_QUEUED = "Queued %s track(s) in guild %s (queue length %s)"
    TRACK_STARTED = "Started track %r in guild %s"
    TRACK_EXCEPTION = "Track %r failed in guild %s: %s"
    TRACK_START_ANNOUNCE_FAILED = "Could not announce track start in guild %s: %s"
    TRACK_CHANNEL_MISSING = "No text channel to announce track in guild %s"
    CONTROLS_UNAVAILABLE = "Music cog not loaded; posting track start without controls"
    PLAYER_OPERATION_FAILED = "Player operation %s failed in guild %s: %s"

    # Discord event handling
    EVENT_HANDLER_FAILED = "Unhandled error while handling %s in guild %s"
    RESPONSE_DELIVERY_FAILED = "Failed to deliver response in channel %s: %s"
    LISTENER_ERROR = "Unhandled error in event listener %s"

    # Bot lifecycle
    BOT_STARTING = "Starting Harmony in %s mode (Lavalink node %s at %s)"
    SETTINGS_INVALID = "Invalid configuration:\n%s"
    LOGGING_CONFIG_FALLBACK = "Could not load %s (%s); using basic console logging"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized successfully"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"
    BOT_VOICE_DISCONNECT_FAILED = "Failed to disconnect voice client in guild %s: %s"
    GUILD_JOINED = "Joined guild %s (%s)"
    GUILD_REMOVED = "Removed from guild %s (%s)"


class DiscordUIMessages:
    """User-facing strings sent to Discord channels."""

    # Generic
    ERROR_GENERIC = "❌ An error occurred while executing that command. Please try again."
    ERROR_PLAYBACK_FAILED = "❌ Something went wrong while controlling playback. Please try again."
    ERROR_CONFIG_SAVE_FAILED = "❌ Could not save the server configuration. Please try again."
    ERROR_PLAY_FAILED = "❌ Failed to play the track. Please try again."
    ERROR_UNKNOWN_COMMAND = "❌ Unknown command. Use `{prefix}help` to see available commands."

    # Authorization
    DENIED_REQUIRES_DJ = "❌ This requires DJ permissions."
    DENIED_REQUIRES_MANAGE_GUILD = "❌ This requires the Manage Server permission."

    # State
    STATE_NOTHING_PLAYING = "❌ Nothing is playing right now!"
    STATE_QUEUE_EMPTY = "❌ No tracks in queue!"
    STATE_NEED_VOICE = "❌ You need to be in a voice channel to play music!"
    STATE_NOT_ENOUGH_TO_SHUFFLE = "❌ Not enough tracks in queue to shuffle"
    STATE_SEEK_PAST_END = "❌ That position is past the end of the track!"
    STATE_NOT_SEEKABLE = "❌ This track can't be seeked (live stream)!"

    # Argument validation
    ARG_MISSING_QUERY = "❌ Please provide a song name or URL!"
    ARG_MISSING_TIME = "❌ Please provide a time to seek to (e.g. 1:30 or 90s)!"
    ARG_BAD_TIME = "❌ Please provide a valid time format (e.g. 1:30, 2m30s or 90)!"
    ARG_BAD_VOLUME = "❌ Please provide a valid volume between {min} and {max}!"
    ARG_BAD_PREFIX = "❌ Please provide a valid prefix ({min}-{max} characters, no spaces)!"
    ARG_MISSING_ROLE = "❌ Please mention a role or provide a role ID!"
    ARG_BAD_CHANNEL = "❌ Please mention a text channel, or use `off` to disable the music channel!"

    # Playback results
    PLAY_NO_RESULTS = "❌ No results found for `{query}`"
    PLAY_ADDED = "✅ Added {link} to the queue"
    PLAY_ADDED_PLAYLIST = "✅ Added **{count}** tracks from **{name}** to the queue"
    SKIPPED = "⏭️ Skipped the current track"
    PAUSED = "⏸️ Playback paused"
    RESUMED = "▶️ Playback resumed"
    STOPPED = "⏹️ Stopped playback and cleared the queue"
    LOOP_ENABLED = "🔁 Loop enabled"
    LOOP_DISABLED = "🔁 Loop disabled"
    SHUFFLED = "🔀 Queue shuffled"
    REWOUND = "⏪ Rewound {seconds} seconds"
    FORWARDED = "⏩ Forwarded {seconds} seconds"
    SEEKING = "⏩ Seeking to {time}"
    VOLUME_SET = "🔊 Volume set to {volume}%"
    LEFT_VOICE = "👋 Disconnected from the voice channel"
    LYRICS_COMING_SOON = "🚧 Lyrics feature coming soon!"

    # Configuration results
    PREFIX_CHANGED = "✅ Prefix changed to `{prefix}`"
    MUSIC_CHANNEL_SET = "✅ Music channel set to <#{channel_id}>"
    MUSIC_CHANNEL_CLEARED = "✅ Music channel disabled"
    DJ_ADDED = "✅ Added <@&{role_id}> to DJ roles"
    DJ_ALREADY = "❌ This role is already a DJ role!"
    DJ_REMOVED = "✅ Removed <@&{role_id}> from DJ roles"
    DJ_NOT_DJ = "❌ This role is not a DJ role!"

    # Embeds
    EMBED_NOW_PLAYING = "🎶 Now Playing"
    EMBED_QUEUE = "🎵 Music Queue"
    EMBED_PLAYER_ERROR = "❌ Player Error"
    EMBED_PLAYER_ERROR_DESC = "Could not play **{title}**. Skipping to the next track."
    EMBED_HELP_TITLE = "Harmony - Help Menu"
    EMBED_HELP_DESC = "Prefix: `{prefix}`\nPick a category below for details."
    EMBED_INVITE_TITLE = "📨 Invite Harmony"
    EMBED_SUPPORT_TITLE = "🛟 Support Server"
    LINK_TEMPLATE = "[Click here]({url})"
    LINK_NOT_CONFIGURED = "This link has not been configured."
    FOOTER_CONTROLS = "Use the controls below to manage playback"
    FOOTER_REQUESTED_BY = "Requested by {name}"

    # Embed field names
    FIELD_DURATION = "Duration"
    FIELD_REQUESTED_BY = "Requested by"
    FIELD_PROGRESS = "Progress"
    FIELD_VOLUME = "Volume"
    FIELD_NOW_PLAYING = "Now Playing"
    FIELD_TOTAL_TRACKS = "Total Tracks"
    FIELD_QUEUE_DURATION = "Queue Duration"
    QUEUE_UP_NEXT = "**Up Next:**"
    FIELD_MUSIC = "🎵 Music"
    FIELD_CONFIG = "⚙️ Configuration"
    FIELD_INFO = "ℹ️ Information"
    REQUESTER_AUTOPLAY = "Autoplay"
    QUEUE_EMPTY_UP_NEXT = "Nothing queued"
    QUEUE_LINE = "**{index}.** {link} ({duration})"
    QUEUE_MORE = "...and {count} more"

    # Presence
    PRESENCE_ACTIVITY = "music | {prefix}help"


class EmojiConstants:
    """Emoji used in reactions and component labels."""

    SUCCESS = "✅"
    SKIP = "⏭️"
    PAUSE = "⏸️"
    PLAY = "▶️"
    STOP = "⏹️"
    LOOP = "🔁"
    SHUFFLE = "🔀"
    REWIND = "⏪"
    FORWARD = "⏩"
    LEAVE = "👋"
    QUEUE = "📜"
    LYRICS = "📝"
    MUSIC = "🎵"
    CONFIG = "⚙️"
    INFO = "ℹ️"
    PROGRESS_FILL = "▬"
    PROGRESS_KNOB = "🔘"
