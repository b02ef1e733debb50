"""Top tracks leaderboard with a cache-aside read through Redis."""

import json
from typing import Any, Dict, List

from loguru import logger
from pymongo.database import Database

from mood_dj.core.config import CacheConfig
from mood_dj.domain.library import get_top_tracks


def get_top_tracks_cached(
    db: Database, cache, cache_config: CacheConfig
) -> List[Dict[str, Any]]:
    """Leaderboard from the cache, falling back to the track store on a miss.

    A miss stores the fresh leaderboard with the configured expiry. Writes never
    invalidate the entry, so it can lag selection counts by up to the TTL.

    Args:
        db: Application database
        cache: Redis client (anything with get/set(ex=...))
        cache_config: Key, TTL and size of the leaderboard

    Returns:
        Up to top_tracks_limit track dicts with _id, title, artist, selectionCount
    """
    cached = cache.get(cache_config.top_tracks_key)
    if cached:
        logger.debug("Serving top tracks from cache")
        return json.loads(cached)

    logger.debug("Top tracks cache miss, querying track store")
    top_tracks = get_top_tracks(db, limit=cache_config.top_tracks_limit)
    cache.set(
        cache_config.top_tracks_key,
        json.dumps(top_tracks),
        ex=cache_config.top_tracks_ttl_seconds,
    )
    return top_tracks
