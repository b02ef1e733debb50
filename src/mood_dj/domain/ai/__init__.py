"""AI domain - OpenAI integration for mood-based track selection.

This domain handles:
- OpenAI API key lookup and client creation
- Prompt construction from the track catalog
- Parsing and validating the model's track selection
"""

from .client import (
    DEFAULT_MODEL,
    AIError,
    get_api_key,
    create_ai_client,
    build_mix_prompt,
    strip_code_fences,
    parse_track_selection,
    filter_to_catalog,
    select_tracks_for_mood,
)

__all__ = [
    "DEFAULT_MODEL",
    "AIError",
    "get_api_key",
    "create_ai_client",
    "build_mix_prompt",
    "strip_code_fences",
    "parse_track_selection",
    "filter_to_catalog",
    "select_tracks_for_mood",
]
