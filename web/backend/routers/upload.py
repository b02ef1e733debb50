from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from loguru import logger

from mood_dj.core.config import Config
from mood_dj.domain.library import create_track
from ..deps import get_config, get_db
from ..schemas import UploadResponse

router = APIRouter()


@router.post("/upload", status_code=201, response_model=UploadResponse)
async def upload_track(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    artist: Optional[str] = Form(None),
    db=Depends(get_db),
    config: Config = Depends(get_config),
):
    """Store an uploaded audio file with its title and artist."""
    if file is None or not file.filename:
        raise HTTPException(400, "No file uploaded")

    try:
        # One byte past the limit is enough to reject the upload
        audio_data = await file.read(config.upload.max_file_size_bytes + 1)

        if not audio_data:
            raise HTTPException(400, "Uploaded file is empty")

        if len(audio_data) > config.upload.max_file_size_bytes:
            logger.warning(
                f"Rejected upload {file.filename}: larger than "
                f"{config.upload.max_file_size_mb} MB"
            )
            raise HTTPException(413, "File too large")

        track_id = await run_in_threadpool(
            create_track,
            db,
            filename=file.filename,
            audio_data=audio_data,
            content_type=file.content_type,
            title=title,
            artist=artist,
        )

        return UploadResponse(message="Upload successful", track_id=str(track_id))

    except HTTPException:
        raise
    except Exception:
        logger.exception(f"Upload failed for {file.filename}")
        raise HTTPException(500, "Internal Server Error")
    finally:
        await file.close()
