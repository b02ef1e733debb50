"""Pytest configuration for backend tests.

Swaps the app's MongoDB, Redis and OpenAI dependencies for in-memory doubles.
"""

import json
import sys
from pathlib import Path
from unittest.mock import Mock

import mongomock
import pytest
from fastapi.testclient import TestClient

# Add project root and src to path
project_dir = Path(__file__).parent.parent.parent.parent
for path in (project_dir, project_dir / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from mood_dj.core.config import Config
from web.backend.deps import get_ai_client, get_cache, get_config, get_db
from web.backend.main import app


class FakeCache:
    """Dict-backed stand-in for redis.Redis get/set with a controllable clock."""

    def __init__(self):
        self.now = 0.0
        self._entries = {}
        self.get_calls = 0
        self.set_calls = []

    def get(self, key):
        self.get_calls += 1
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.now >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key, value, ex=None):
        self.set_calls.append((key, value, ex))
        self._entries[key] = (value, self.now + ex if ex else None)
        return True

    def advance(self, seconds):
        self.now += seconds


def make_ai_response(output_text: str) -> Mock:
    """Mock OpenAI Responses API result."""
    response = Mock()
    response.output_text = output_text
    response.usage.input_tokens = 120
    response.usage.output_tokens = 20
    return response


@pytest.fixture
def db():
    return mongomock.MongoClient().db


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
def ai_client():
    client = Mock()
    client.responses.create.return_value = make_ai_response('{"trackIds": []}')
    return client


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def client(db, cache, ai_client, config):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    app.dependency_overrides[get_config] = lambda: config
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def add_track(db):
    """Insert a track document directly and return its id as a string."""

    def _add_track(title, artist="Unknown", selection_count=0, audio_data=b"ID3audio"):
        result = db.tracks.insert_one(
            {
                "filename": f"{title}.mp3",
                "title": title,
                "artist": artist,
                "contentType": "audio/mpeg",
                "audioData": audio_data,
                "selectionCount": selection_count,
            }
        )
        return str(result.inserted_id)

    return _add_track


@pytest.fixture
def ai_selects(ai_client):
    """Make the mocked model return the given track ids."""

    def _ai_selects(*track_ids, fenced=False):
        text = json.dumps({"trackIds": list(track_ids)})
        if fenced:
            text = f"```json\n{text}\n```"
        ai_client.responses.create.return_value = make_ai_response(text)

    return _ai_selects
