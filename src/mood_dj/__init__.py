"""Mood DJ - AI-curated playlists from your own uploads."""

__version__ = "0.1.0"
