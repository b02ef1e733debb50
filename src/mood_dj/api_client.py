"""
HTTP client for a running Mood DJ API.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List

import requests
from loguru import logger

from mood_dj.domain.library import guess_artist_title

DEFAULT_API_URL = "http://localhost:8000"


class APIClientError(Exception):
    """Raised when the Mood DJ API returns an error."""

    pass


def _raise_for_error(response: requests.Response) -> None:
    if response.ok:
        return
    try:
        detail = response.json().get("detail", response.text)
    except ValueError:
        detail = response.text
    raise APIClientError(f"HTTP {response.status_code}: {detail}")


def collect_audio_files(paths: Iterable[Path], supported_formats: List[str]) -> List[Path]:
    """Expand directories into the audio files they contain, sorted by name.

    Files passed explicitly are kept regardless of extension.
    """
    formats = {fmt.lower() for fmt in supported_formats}
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in formats)
            )
        elif path.is_file():
            files.append(path)
        else:
            logger.warning(f"Skipping missing path: {path}")
    return files


def upload_file(api_url: str, path: Path) -> Dict[str, Any]:
    """Upload one audio file, guessing artist and title from its name."""
    artist, title = guess_artist_title(path.name)
    with open(path, "rb") as f:
        response = requests.post(
            f"{api_url}/api/upload",
            files={"file": (path.name, f)},
            data={"artist": artist, "title": title},
            timeout=120,
        )
    _raise_for_error(response)
    return response.json()


def generate_mix(api_url: str, mood: str) -> Dict[str, Any]:
    """Ask the API for a mix matching the mood."""
    response = requests.post(
        f"{api_url}/api/generate-mix", json={"mood": mood}, timeout=120
    )
    _raise_for_error(response)
    return response.json()


def get_top_tracks(api_url: str) -> List[Dict[str, Any]]:
    """Fetch the leaderboard."""
    response = requests.get(f"{api_url}/api/top-tracks", timeout=30)
    _raise_for_error(response)
    return response.json()
