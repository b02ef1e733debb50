"""Guess artist and title from an audio filename."""

from pathlib import PurePath

UNKNOWN_ARTIST = "Unknown Artist"


def guess_artist_title(filename: str) -> tuple[str, str]:
    """Pure function - split "Artist - Title.mp3" into (artist, title).

    Splits the extension-less name on the first hyphen. Without a hyphen the
    whole name is the title and the artist is "Unknown Artist".

    Args:
        filename: File name, with or without directories

    Returns:
        (artist, title) tuple
    """
    stem = PurePath(filename).stem.strip()
    artist, sep, title = stem.partition("-")
    if not sep:
        return UNKNOWN_ARTIST, stem

    artist = artist.strip() or UNKNOWN_ARTIST
    title = title.strip() or stem
    return artist, title
