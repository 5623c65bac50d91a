"""Playback bounded context: the actions members can request."""
