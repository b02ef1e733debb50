"""Mixes domain - mood-driven playlists generated from the track catalog."""

from .crud import (
    create_mix,
    get_populated_mix,
    record_mix,
    record_mix_in_transaction,
)

__all__ = [
    "create_mix",
    "get_populated_mix",
    "record_mix",
    "record_mix_in_transaction",
]
