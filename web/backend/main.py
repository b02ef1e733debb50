from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from loguru import logger

from mood_dj.core.config import load_config
from mood_dj.core.database import (
    create_mongo_client,
    create_redis_client,
    get_database,
    init_database,
)
from mood_dj.core.output import setup_logging_from_config
from mood_dj.domain.ai import create_ai_client

STATIC_DIR = Path(__file__).parent / "static"

config = load_config()


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    setup_logging_from_config(config.logging)

    mongo_client = create_mongo_client(config.mongo)
    app_instance.state.db = get_database(mongo_client, config.mongo)
    app_instance.state.cache = create_redis_client(config.redis)
    app_instance.state.ai_client = create_ai_client(config.ai.openai_api_key)

    try:
        init_database(app_instance.state.db)
    except Exception as e:
        logger.warning(f"Could not initialize database indexes: {e}")

    if app_instance.state.ai_client is not None:
        logger.info(f"OpenAI key found. Mixing with model {config.ai.model}.")
    else:
        logger.warning("No OPENAI_API_KEY set. Mix generation will fail until one is configured.")

    logger.info("Mood DJ API ready")

    yield

    app_instance.state.cache.close()
    mongo_client.close()
    logger.info("Mood DJ API stopped")


app = FastAPI(title="Mood DJ API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.web.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
from web.backend.routers import mixes, stats, tracks, upload

app.include_router(upload.router, prefix="/api", tags=["upload"])
app.include_router(mixes.router, prefix="/api", tags=["mixes"])
app.include_router(tracks.router, prefix="/api", tags=["tracks"])
app.include_router(stats.router, prefix="/api", tags=["stats"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/")
async def index():
    return FileResponse(STATIC_DIR / "index.html")
