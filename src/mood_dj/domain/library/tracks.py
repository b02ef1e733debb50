"""Track store operations.

Tracks hold the uploaded audio bytes alongside their metadata. Catalog and
leaderboard queries project away ``audioData`` so only streaming ever loads it.
"""

import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId
from loguru import logger
from pymongo import DESCENDING
from pymongo.database import Database

from mood_dj.core.database import TRACKS_COLLECTION, to_object_id

DEFAULT_ARTIST = "Unknown"
GENERIC_MIME_TYPE = "application/octet-stream"

AUDIO_MIME_TYPES: dict[str, str] = {
    ".opus": "audio/opus",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".wav": "audio/wav",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
}

CATALOG_PROJECTION = {"_id": 1, "title": 1, "artist": 1}
LEADERBOARD_PROJECTION = {"_id": 1, "title": 1, "artist": 1, "selectionCount": 1}


def get_mime_type(filename: str, content_type: Optional[str] = None) -> str:
    """Pure function - content type sent by the client, else guessed from the extension.

    A generic application/octet-stream from the client counts as no content type.
    """
    if content_type and content_type.strip() and content_type.strip() != GENERIC_MIME_TYPE:
        return content_type.strip()
    mime = AUDIO_MIME_TYPES.get(Path(filename).suffix.lower())
    if mime:
        return mime
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or GENERIC_MIME_TYPE


def build_track_document(
    filename: str,
    audio_data: bytes,
    content_type: Optional[str] = None,
    title: Optional[str] = None,
    artist: Optional[str] = None,
) -> Dict[str, Any]:
    """Pure function - build a new track document with defaults applied.

    Title falls back to the filename and artist to "Unknown" when missing or blank.
    """
    return {
        "filename": filename,
        "title": (title or "").strip() or filename,
        "artist": (artist or "").strip() or DEFAULT_ARTIST,
        "contentType": get_mime_type(filename, content_type),
        "audioData": audio_data,
        "selectionCount": 0,
        "createdAt": datetime.now(timezone.utc),
    }


def create_track(
    db: Database,
    filename: str,
    audio_data: bytes,
    content_type: Optional[str] = None,
    title: Optional[str] = None,
    artist: Optional[str] = None,
) -> ObjectId:
    """Persist an uploaded track and return its identifier."""
    document = build_track_document(filename, audio_data, content_type, title, artist)
    result = db[TRACKS_COLLECTION].insert_one(document)
    logger.info(
        f"Stored track {result.inserted_id}: {document['artist']} - {document['title']} "
        f"({len(audio_data)} bytes, {document['contentType']})"
    )
    return result.inserted_id


def get_track(db: Database, track_id: Any) -> Optional[Dict[str, Any]]:
    """Fetch a full track document (including audio), None for unknown or invalid ids."""
    object_id = to_object_id(track_id)
    if object_id is None:
        return None
    return db[TRACKS_COLLECTION].find_one({"_id": object_id})


def get_catalog(db: Database) -> List[Dict[str, Any]]:
    """Every track's id, title and artist, without audio payloads."""
    return list(db[TRACKS_COLLECTION].find({}, CATALOG_PROJECTION))


def increment_selection_counts(
    db: Database, track_ids: Sequence[ObjectId], session=None
) -> int:
    """Add one to selectionCount for each referenced track.

    Returns:
        Number of track documents modified
    """
    if not track_ids:
        return 0
    result = db[TRACKS_COLLECTION].update_many(
        {"_id": {"$in": list(track_ids)}},
        {"$inc": {"selectionCount": 1}},
        session=session,
    )
    return result.modified_count


def get_top_tracks(db: Database, limit: int = 10) -> List[Dict[str, Any]]:
    """Most selected tracks first, as JSON-ready dicts."""
    cursor = (
        db[TRACKS_COLLECTION]
        .find({}, LEADERBOARD_PROJECTION)
        .sort("selectionCount", DESCENDING)
        .limit(limit)
    )
    return [
        {
            "_id": str(track["_id"]),
            "title": track.get("title", ""),
            "artist": track.get("artist", DEFAULT_ARTIST),
            "selectionCount": track.get("selectionCount", 0),
        }
        for track in cursor
    ]
