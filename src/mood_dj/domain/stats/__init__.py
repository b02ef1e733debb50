"""Stats domain - track popularity leaderboard."""

from .leaderboard import get_top_tracks_cached

__all__ = ["get_top_tracks_cached"]
