"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Document store and cache connections (MongoDB, Redis)
- Logging (Loguru)
"""

from .config import (
    Config,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
    ensure_directories,
)

from .database import (
    TRACKS_COLLECTION,
    MIXES_COLLECTION,
    create_mongo_client,
    create_redis_client,
    get_database,
    init_database,
    to_object_id,
)

from .output import setup_loguru, setup_logging_from_config

__all__ = [
    "Config",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    "ensure_directories",
    "TRACKS_COLLECTION",
    "MIXES_COLLECTION",
    "create_mongo_client",
    "create_redis_client",
    "get_database",
    "init_database",
    "to_object_id",
    "setup_loguru",
    "setup_logging_from_config",
]
