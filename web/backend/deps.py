from fastapi import Request
from pymongo.database import Database

from mood_dj.core.config import Config, load_config


def get_db(request: Request) -> Database:
    """FastAPI dependency for the application database."""
    return request.app.state.db


def get_cache(request: Request):
    """FastAPI dependency for the Redis cache client."""
    return request.app.state.cache


def get_ai_client(request: Request):
    """FastAPI dependency for the OpenAI client (None when AI is not configured)."""
    return request.app.state.ai_client


def get_config() -> Config:
    """FastAPI dependency for configuration."""
    return load_config()
