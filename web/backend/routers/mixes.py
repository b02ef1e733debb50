from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from loguru import logger

from mood_dj.core.config import Config
from mood_dj.domain.ai import AIError, select_tracks_for_mood
from mood_dj.domain.library import get_catalog
from mood_dj.domain.mixes import (
    get_populated_mix,
    record_mix,
    record_mix_in_transaction,
)
from ..deps import get_ai_client, get_config, get_db
from ..schemas import GenerateMixRequest, MixResponse

router = APIRouter()


@router.post("/generate-mix", response_model=MixResponse)
def generate_mix(
    payload: Optional[GenerateMixRequest] = Body(None),
    db=Depends(get_db),
    ai_client=Depends(get_ai_client),
    config: Config = Depends(get_config),
):
    """Have the AI pick and order tracks for a mood, then store the mix."""
    mood = payload.mood if payload else None
    if not mood or not mood.strip():
        raise HTTPException(400, "Mood is required")

    try:
        catalog = get_catalog(db)
        if not catalog:
            raise HTTPException(404, "No tracks available to mix")

        track_ids = select_tracks_for_mood(ai_client, catalog, mood, model=config.ai.model)

        if config.mongo.use_transactions:
            mix_id = record_mix_in_transaction(db, mood, track_ids)
        else:
            mix_id = record_mix(db, mood, track_ids)

        mix = get_populated_mix(db, mix_id)
        if mix is None:
            raise RuntimeError(f"Mix {mix_id} missing right after insert")
        return mix

    except HTTPException:
        raise
    except AIError as e:
        logger.error(f"AI mix error: {e}")
        raise HTTPException(500, "Failed to generate mix")
    except Exception:
        logger.exception(f"Failed to generate mix for mood {mood!r}")
        raise HTTPException(500, "Failed to generate mix")


@router.get("/mixes/{mix_id}", response_model=MixResponse)
def get_mix(mix_id: str, db=Depends(get_db)):
    """Return a previously generated mix with its tracks expanded."""
    try:
        mix = get_populated_mix(db, mix_id)
    except Exception:
        logger.exception(f"Failed to load mix {mix_id}")
        raise HTTPException(500, "Internal Server Error")

    if mix is None:
        raise HTTPException(404, "Mix not found")
    return mix
