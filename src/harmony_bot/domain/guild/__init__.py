"""Guild bounded context: per-guild configuration and permission rules."""
