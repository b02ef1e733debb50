"""
MongoDB and Redis connections for Mood DJ
"""

from typing import Any, Optional

import redis
from bson import ObjectId
from bson.errors import InvalidId
from loguru import logger
from pymongo import DESCENDING, MongoClient
from pymongo.database import Database

from .config import MongoConfig, RedisConfig

TRACKS_COLLECTION = "tracks"
MIXES_COLLECTION = "mixes"


def create_mongo_client(mongo_config: MongoConfig) -> MongoClient:
    """Create a MongoDB client. Connection is established lazily on first use."""
    logger.debug(f"Creating MongoDB client for database '{mongo_config.database}'")
    return MongoClient(mongo_config.uri, tz_aware=True)


def get_database(client: MongoClient, mongo_config: MongoConfig) -> Database:
    """Get the application database from a client."""
    return client[mongo_config.database]


def init_database(db: Database) -> None:
    """Create the indexes the leaderboard and mix lookups rely on."""
    db[TRACKS_COLLECTION].create_index([("selectionCount", DESCENDING)])
    db[MIXES_COLLECTION].create_index([("createdAt", DESCENDING)])
    logger.info(f"Database '{db.name}' initialized")


def create_redis_client(redis_config: RedisConfig) -> redis.Redis:
    """Create a Redis client returning decoded strings."""
    logger.debug("Creating Redis client")
    return redis.Redis.from_url(redis_config.url, decode_responses=True)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Pure function - parse a document identifier, None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None
