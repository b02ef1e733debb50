"""
Mix management for Mood DJ
Functional approach with explicit database passing
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId
from loguru import logger
from pymongo.client_session import ClientSession
from pymongo.database import Database

from mood_dj.core.database import MIXES_COLLECTION, TRACKS_COLLECTION, to_object_id
from mood_dj.domain.library import increment_selection_counts

POPULATE_PROJECTION = {"_id": 1, "title": 1, "artist": 1}


def create_mix(
    db: Database,
    mood: str,
    track_ids: Sequence[ObjectId],
    session: Optional[ClientSession] = None,
) -> ObjectId:
    """Insert a mix referencing track_ids in the given order.

    Returns:
        Mix ID
    """
    result = db[MIXES_COLLECTION].insert_one(
        {
            "mood": mood,
            "tracks": list(track_ids),
            "createdAt": datetime.now(timezone.utc),
        },
        session=session,
    )
    return result.inserted_id


def record_mix(
    db: Database,
    mood: str,
    track_ids: Sequence[ObjectId],
    session: Optional[ClientSession] = None,
) -> ObjectId:
    """Count a selection for every track, then store the mix.

    Pass a session that has a transaction in progress to make both writes atomic.

    Returns:
        Mix ID
    """
    modified = increment_selection_counts(db, track_ids, session=session)
    mix_id = create_mix(db, mood, track_ids, session=session)
    logger.info(
        f"Recorded mix {mix_id} for mood {mood!r}: "
        f"{len(track_ids)} tracks, {modified} selection counts updated"
    )
    return mix_id


def record_mix_in_transaction(
    db: Database, mood: str, track_ids: Sequence[ObjectId]
) -> ObjectId:
    """Run record_mix inside a MongoDB transaction (replica sets only)."""
    with db.client.start_session() as session:
        return session.with_transaction(
            lambda s: record_mix(db, mood, track_ids, session=s)
        )


def get_populated_mix(db: Database, mix_id: Any) -> Optional[Dict[str, Any]]:
    """Fetch a mix with its track references expanded to id, title and artist.

    Track order follows the mix; references to tracks that no longer exist are skipped.

    Returns:
        JSON-ready mix dict, or None if the mix does not exist
    """
    object_id = to_object_id(mix_id)
    if object_id is None:
        return None

    mix = db[MIXES_COLLECTION].find_one({"_id": object_id})
    if not mix:
        return None

    track_ids = mix.get("tracks", [])
    cursor = db[TRACKS_COLLECTION].find({"_id": {"$in": track_ids}}, POPULATE_PROJECTION)
    tracks_by_id = {track["_id"]: track for track in cursor}

    tracks: List[Dict[str, Any]] = [
        {
            "_id": str(tracks_by_id[tid]["_id"]),
            "title": tracks_by_id[tid].get("title", ""),
            "artist": tracks_by_id[tid].get("artist", ""),
        }
        for tid in track_ids
        if tid in tracks_by_id
    ]

    created_at = mix["createdAt"]
    if created_at.tzinfo is None:
        # Stored as UTC; clients without tz_aware hand back naive datetimes
        created_at = created_at.replace(tzinfo=timezone.utc)

    return {
        "_id": str(mix["_id"]),
        "mood": mix["mood"],
        "tracks": tracks,
        "createdAt": created_at,
    }
