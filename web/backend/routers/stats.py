from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from mood_dj.core.config import Config
from mood_dj.domain.stats import get_top_tracks_cached
from ..deps import get_cache, get_config, get_db
from ..schemas import LeaderboardEntry

router = APIRouter()


@router.get("/top-tracks", response_model=list[LeaderboardEntry])
@router.get(
    "/stats/top-tracks", response_model=list[LeaderboardEntry], include_in_schema=False
)
def top_tracks(
    db=Depends(get_db), cache=Depends(get_cache), config: Config = Depends(get_config)
):
    """Most selected tracks, served from cache when fresh."""
    try:
        return get_top_tracks_cached(db, cache, config.cache)
    except Exception:
        logger.exception("Failed to fetch top tracks")
        raise HTTPException(500, "Failed to fetch stats")
