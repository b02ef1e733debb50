"""Tests for the audio streaming endpoint."""

from unittest.mock import patch

from bson import ObjectId


def test_stream_returns_stored_bytes(client, add_track):
    """Test the full audio payload is returned with its content type and length."""
    audio = b"ID3" + bytes(range(256)) * 4
    track_id = add_track("Intro", audio_data=audio)

    response = client.get(f"/api/stream/{track_id}")

    assert response.status_code == 200
    assert response.content == audio
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.headers["content-length"] == str(len(audio))


def test_stream_uploaded_track(client):
    """Test a track uploaded through the API streams back unchanged."""
    upload = client.post(
        "/api/upload", files={"file": ("loop.wav", b"RIFFwavdata", "audio/wav")}
    )
    track_id = upload.json()["trackId"]

    response = client.get(f"/api/stream/{track_id}")

    assert response.status_code == 200
    assert response.content == b"RIFFwavdata"
    assert response.headers["content-type"] == "audio/wav"


def test_stream_unknown_track_returns_404(client):
    response = client.get(f"/api/stream/{ObjectId()}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Track not found"


def test_stream_invalid_id_returns_404(client):
    response = client.get("/api/stream/not-an-object-id")
    assert response.status_code == 404


def test_stream_track_without_audio_returns_404(client, db):
    """Test a track document missing its audio is treated as not found."""
    result = db.tracks.insert_one({"title": "Ghost", "artist": "Nobody"})

    response = client.get(f"/api/stream/{result.inserted_id}")

    assert response.status_code == 404


def test_stream_lookup_failure_returns_500(client):
    with patch(
        "web.backend.routers.tracks.get_track", side_effect=RuntimeError("db down")
    ):
        response = client.get(f"/api/stream/{ObjectId()}")

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error"
