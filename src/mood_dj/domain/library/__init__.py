"""Library domain - uploaded tracks and their metadata."""

from .filename import UNKNOWN_ARTIST, guess_artist_title
from .tracks import (
    AUDIO_MIME_TYPES,
    DEFAULT_ARTIST,
    build_track_document,
    create_track,
    get_catalog,
    get_mime_type,
    get_top_tracks,
    get_track,
    increment_selection_counts,
)

__all__ = [
    "UNKNOWN_ARTIST",
    "guess_artist_title",
    "AUDIO_MIME_TYPES",
    "DEFAULT_ARTIST",
    "build_track_document",
    "create_track",
    "get_catalog",
    "get_mime_type",
    "get_top_tracks",
    "get_track",
    "increment_selection_counts",
]
