"""
AI track selection for Mood DJ using OpenAI Responses API
"""

import json
import os
import re
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from mood_dj.core.config import get_config_dir

DEFAULT_MODEL = "gpt-4o-mini"

_CODE_FENCE_RE = re.compile(r"```json|```")


class AIError(Exception):
    """Custom exception for AI-related errors."""

    pass


def get_api_key(configured_key: Optional[str] = None) -> Optional[str]:
    """Get OpenAI API key from config, environment variable or .env file."""
    if configured_key:
        return configured_key

    api_key = os.getenv("OPENAI_API_KEY")
    if api_key:
        return api_key

    from dotenv import load_dotenv

    # Check project root .env file first, then the config directory
    for env_file in (Path.cwd() / ".env", get_config_dir() / ".env"):
        if env_file.exists():
            load_dotenv(env_file)
            api_key = os.getenv("OPENAI_API_KEY")
            if api_key:
                return api_key

    return None


def create_ai_client(api_key: Optional[str] = None):
    """Create an OpenAI client, or None when no API key is configured."""
    api_key = get_api_key(api_key)
    if not api_key:
        return None

    import openai

    return openai.OpenAI(api_key=api_key)


def build_mix_prompt(catalog: Sequence[Dict[str, Any]], mood: str) -> str:
    """Build the DJ prompt listing every available track and the user's mood."""
    track_list = "\n".join(
        f"ID: {track['_id']}, Title: {track.get('title', '')}, Artist: {track.get('artist', '')}"
        for track in catalog
    )

    return f"""Act as a professional DJ.
I have the following songs available:
{track_list}

The user's current mood is: "{mood}".

Task: Select 3 to 6 songs from the list that best match this mood.
Order them to create a good flow.

Strict Output Requirement:
Return ONLY a valid JSON object with this structure:
{{
  "trackIds": ["id_of_song_1", "id_of_song_2", ...]
}}
Do not add any markdown formatting (like ```json). Just the raw JSON string."""


def strip_code_fences(text: str) -> str:
    """Pure function - remove markdown code fences the model sometimes adds."""
    return _CODE_FENCE_RE.sub("", text).strip()


def parse_track_selection(output_text: str) -> List[str]:
    """Parse the model's reply into an ordered list of track ids.

    Raises:
        AIError: If the reply is not JSON, not an object, or has no trackIds
    """
    cleaned = strip_code_fences(output_text)

    try:
        selection = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AIError(f"AI returned invalid JSON: {e}\n\nResponse: {output_text}")

    if not isinstance(selection, dict):
        raise AIError(f"AI response is not an object: {type(selection)}")

    track_ids = selection.get("trackIds")
    if not isinstance(track_ids, list) or not track_ids:
        raise AIError("AI failed to select tracks")

    return [str(track_id) for track_id in track_ids]


def filter_to_catalog(
    track_ids: Sequence[str], catalog: Sequence[Dict[str, Any]]
) -> List[Any]:
    """Keep only ids present in the catalog, in model order and without repeats.

    Returns:
        Catalog identifiers (store types, not strings) for the surviving ids
    """
    known = {str(track["_id"]): track["_id"] for track in catalog}
    selected: List[Any] = []
    seen = set()
    for track_id in track_ids:
        if track_id not in known:
            logger.warning(f"AI selected unknown track id {track_id!r}, dropping it")
            continue
        if track_id in seen:
            continue
        seen.add(track_id)
        selected.append(known[track_id])
    return selected


def select_tracks_for_mood(
    client, catalog: Sequence[Dict[str, Any]], mood: str, model: str = DEFAULT_MODEL
) -> List[Any]:
    """Ask the model to pick and order tracks from the catalog for a mood.

    Args:
        client: OpenAI client (None when AI is not configured)
        catalog: Track dicts with _id, title and artist
        mood: Free text mood description
        model: OpenAI model name

    Returns:
        Ordered catalog identifiers chosen by the model

    Raises:
        AIError: If AI is not configured, the API call fails, or the reply is unusable
    """
    if client is None:
        raise AIError("No OpenAI API key found. Set OPENAI_API_KEY to enable mixing.")

    prompt = build_mix_prompt(catalog, mood)

    start_time = time.time()
    try:
        response = client.responses.create(model=model, input=prompt)
    except Exception as e:
        raise AIError(f"OpenAI API error: {e}")
    response_time_ms = int((time.time() - start_time) * 1000)

    usage = getattr(response, "usage", None)
    logger.info(
        f"AI selection for mood {mood!r} took {response_time_ms}ms "
        f"(model={model}, input_tokens={getattr(usage, 'input_tokens', '?')}, "
        f"output_tokens={getattr(usage, 'output_tokens', '?')})"
    )

    output_text = (response.output_text or "").strip()
    logger.debug(f"AI raw selection: {output_text}")

    selected = filter_to_catalog(parse_track_selection(output_text), catalog)
    if not selected:
        raise AIError("AI selected no tracks from the catalog")

    return selected
