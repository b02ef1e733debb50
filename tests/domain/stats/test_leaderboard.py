"""Tests for the cache-aside leaderboard."""

import json
from unittest.mock import MagicMock

import mongomock
import pytest

from mood_dj.core.config import CacheConfig
from mood_dj.domain.library import create_track
from mood_dj.domain.stats.leaderboard import get_top_tracks_cached


@pytest.fixture
def db():
    db = mongomock.MongoClient().db
    for title, count in (("Low", 1), ("High", 9)):
        track_id = create_track(db, f"{title}.mp3", b"x", title=title)
        db.tracks.update_one({"_id": track_id}, {"$set": {"selectionCount": count}})
    return db


def test_miss_queries_store_and_sets_ttl(db):
    cache = MagicMock()
    cache.get.return_value = None
    cache_config = CacheConfig(top_tracks_key="lb", top_tracks_ttl_seconds=30)

    result = get_top_tracks_cached(db, cache, cache_config)

    assert [t["title"] for t in result] == ["High", "Low"]
    cache.set.assert_called_once_with("lb", json.dumps(result), ex=30)


def test_hit_returns_cached_value_without_store(db):
    cached = [{"_id": "x", "title": "Cached", "artist": "A", "selectionCount": 4}]
    cache = MagicMock()
    cache.get.return_value = json.dumps(cached)
    db = MagicMock()

    assert get_top_tracks_cached(db, cache, CacheConfig()) == cached
    db.__getitem__.assert_not_called()
    cache.set.assert_not_called()


def test_limit_respected(db):
    cache = MagicMock()
    cache.get.return_value = None

    result = get_top_tracks_cached(db, cache, CacheConfig(top_tracks_limit=1))

    assert [t["title"] for t in result] == ["High"]


def test_cache_config_validation():
    with pytest.raises(ValueError):
        CacheConfig(top_tracks_ttl_seconds=0).validate()
    with pytest.raises(ValueError):
        CacheConfig(top_tracks_limit=-1).validate()
