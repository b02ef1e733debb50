from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from loguru import logger

from mood_dj.domain.library import get_mime_type, get_track
from ..deps import get_db

router = APIRouter()


@router.get("/stream/{track_id}")
def stream_audio(track_id: str, db=Depends(get_db)):
    """Send the stored audio bytes in full. No range requests."""
    try:
        track = get_track(db, track_id)
    except Exception:
        logger.exception(f"Stream lookup failed for track {track_id}")
        raise HTTPException(500, "Internal Server Error")

    if not track or not track.get("audioData"):
        raise HTTPException(404, "Track not found")

    audio_data = bytes(track["audioData"])
    media_type = track.get("contentType") or get_mime_type(track.get("filename", ""))

    logger.info(f"Streaming track {track_id}: {len(audio_data)} bytes ({media_type})")
    return Response(
        content=audio_data,
        media_type=media_type,
        headers={"Content-Length": str(len(audio_data))},
    )
