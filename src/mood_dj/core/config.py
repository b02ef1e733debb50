"""
Configuration management for Mood DJ
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class MongoConfig:
    """Configuration for the MongoDB document store."""

    uri: str = "mongodb://localhost:27017"
    database: str = "mood_dj"
    # Requires a replica set; standalone servers reject transactions
    use_transactions: bool = False


@dataclass
class RedisConfig:
    """Configuration for the Redis cache."""

    url: str = "redis://localhost:6379/0"


@dataclass
class CacheConfig:
    """Configuration for the top tracks leaderboard cache."""

    top_tracks_key: str = "top-tracks"
    top_tracks_ttl_seconds: int = 60
    top_tracks_limit: int = 10

    def validate(self) -> None:
        """Validate cache configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.top_tracks_ttl_seconds <= 0:
            raise ValueError(
                f"top_tracks_ttl_seconds must be positive, got {self.top_tracks_ttl_seconds}"
            )
        if self.top_tracks_limit <= 0:
            raise ValueError(
                f"top_tracks_limit must be positive, got {self.top_tracks_limit}"
            )


@dataclass
class AIConfig:
    """Configuration for AI integration."""

    openai_api_key: Optional[str] = None
    model: str = "gpt-4o-mini"


@dataclass
class UploadConfig:
    """Configuration for audio uploads."""

    max_file_size_mb: int = 15  # MongoDB caps documents at 16 MB
    supported_formats: List[str] = field(
        default_factory=lambda: [".mp3", ".wav", ".m4a", ".flac", ".ogg", ".opus"]
    )

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


@dataclass
class WebConfig:
    """Configuration for the web server."""

    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:8000"]
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/mood-dj/mood-dj.log)
    )
    console_output: bool = True


@dataclass
class Config:
    """Main configuration object."""

    mongo: MongoConfig = field(default_factory=MongoConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "mood-dj"
    return Path.home() / ".config" / "mood-dj"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            # Found project root but no config.toml there
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/mood-dj (or ~/.config/mood-dj)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "mood-dj"
    return Path.home() / ".local" / "share" / "mood-dj"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Mood DJ Configuration

[mongo]
# MongoDB connection string (MONGODB_URI overrides)
uri = "mongodb://localhost:27017"

# Database holding the tracks and mixes collections (MONGODB_DATABASE overrides)
database = "mood_dj"

# Wrap selection count updates and mix creation in one transaction
# (replica set deployments only)
use_transactions = false

[redis]
# Redis connection URL (REDIS_URL overrides)
url = "redis://localhost:6379/0"

[cache]
# Cache key for the top tracks leaderboard
top_tracks_key = "top-tracks"

# Seconds before the cached leaderboard expires
top_tracks_ttl_seconds = 60

# Number of tracks on the leaderboard
top_tracks_limit = 10

[ai]
# OpenAI API key (OPENAI_API_KEY overrides)
# openai_api_key = "your-api-key-here"

# Model used to pick tracks for a mood
model = "gpt-4o-mini"

[upload]
# Largest accepted upload in MB (MongoDB documents are capped at 16 MB)
max_file_size_mb = 15

# Formats picked up by `mood-dj upload <folder>`
supported_formats = [".mp3", ".wav", ".m4a", ".flac", ".ogg", ".opus"]

[web]
host = "0.0.0.0"
port = 8000

# CORS origins (ALLOWED_ORIGINS overrides, comma separated)
allowed_origins = ["http://localhost:8000"]

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/mood-dj/mood-dj.log)
# log_file = "/path/to/custom/mood-dj.log"

# Also output logs to stderr
console_output = true
""".strip()


def _apply_env_overrides(config: Config) -> Config:
    """Override TOML values with environment variables when present."""
    mongo_uri = os.environ.get("MONGODB_URI")
    if mongo_uri:
        config.mongo.uri = mongo_uri

    mongo_database = os.environ.get("MONGODB_DATABASE")
    if mongo_database:
        config.mongo.database = mongo_database

    redis_url = os.environ.get("REDIS_URL")
    if redis_url:
        config.redis.url = redis_url

    api_key = os.environ.get("OPENAI_API_KEY")
    if api_key:
        config.ai.openai_api_key = api_key

    allowed_origins = os.environ.get("ALLOWED_ORIGINS")
    if allowed_origins:
        config.web.allowed_origins = [
            origin.strip() for origin in allowed_origins.split(",") if origin.strip()
        ]

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - MONGODB_URI
    - MONGODB_DATABASE
    - REDIS_URL
    - OPENAI_API_KEY
    - ALLOWED_ORIGINS
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        config = Config()

        if "mongo" in toml_data:
            mongo_data = toml_data["mongo"]
            config.mongo = MongoConfig(
                uri=mongo_data.get("uri", config.mongo.uri),
                database=mongo_data.get("database", config.mongo.database),
                use_transactions=mongo_data.get(
                    "use_transactions", config.mongo.use_transactions
                ),
            )

        if "redis" in toml_data:
            redis_data = toml_data["redis"]
            config.redis = RedisConfig(url=redis_data.get("url", config.redis.url))

        if "cache" in toml_data:
            cache_data = toml_data["cache"]
            config.cache = CacheConfig(
                top_tracks_key=cache_data.get(
                    "top_tracks_key", config.cache.top_tracks_key
                ),
                top_tracks_ttl_seconds=cache_data.get(
                    "top_tracks_ttl_seconds", config.cache.top_tracks_ttl_seconds
                ),
                top_tracks_limit=cache_data.get(
                    "top_tracks_limit", config.cache.top_tracks_limit
                ),
            )
            config.cache.validate()

        if "ai" in toml_data:
            ai_data = toml_data["ai"]
            config.ai = AIConfig(
                openai_api_key=ai_data.get("openai_api_key"),
                model=ai_data.get("model", config.ai.model),
            )

        if "upload" in toml_data:
            upload_data = toml_data["upload"]
            config.upload = UploadConfig(
                max_file_size_mb=upload_data.get(
                    "max_file_size_mb", config.upload.max_file_size_mb
                ),
                supported_formats=upload_data.get(
                    "supported_formats", config.upload.supported_formats
                ),
            )

        if "web" in toml_data:
            web_data = toml_data["web"]
            config.web = WebConfig(
                host=web_data.get("host", config.web.host),
                port=web_data.get("port", config.web.port),
                allowed_origins=web_data.get(
                    "allowed_origins", config.web.allowed_origins
                ),
            )

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level),
                log_file=logging_data.get("log_file"),
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )

        return _apply_env_overrides(config)

    except Exception as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return _apply_env_overrides(Config())


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
