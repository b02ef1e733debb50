"""Tests for configuration loading."""

import pytest

from mood_dj.core.config import Config, create_default_config, load_config

ENV_VARS = ("MONGODB_URI", "MONGODB_DATABASE", "REDIS_URL", "OPENAI_API_KEY", "ALLOWED_ORIGINS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's environment and config directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


def test_missing_file_returns_defaults(tmp_path):
    config = load_config(tmp_path / "nope.toml")

    assert config == Config()
    assert not (tmp_path / "nope.toml").exists()


def test_default_config_round_trips(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(create_default_config())

    config = load_config(path)

    assert config.mongo.database == "mood_dj"
    assert config.cache.top_tracks_ttl_seconds == 60
    assert config.cache.top_tracks_limit == 10
    assert config.upload.max_file_size_mb == 15
    assert config.ai.openai_api_key is None


def test_toml_values_loaded(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        """
[mongo]
uri = "mongodb://db:27017"
use_transactions = true

[cache]
top_tracks_ttl_seconds = 5

[web]
port = 9000
allowed_origins = ["https://dj.example.com"]

[logging]
level = "DEBUG"
console_output = false
"""
    )

    config = load_config(path)

    assert config.mongo.uri == "mongodb://db:27017"
    assert config.mongo.use_transactions is True
    assert config.mongo.database == "mood_dj"
    assert config.cache.top_tracks_ttl_seconds == 5
    assert config.cache.top_tracks_key == "top-tracks"
    assert config.web.port == 9000
    assert config.web.allowed_origins == ["https://dj.example.com"]
    assert config.logging.level == "DEBUG"
    assert config.logging.console_output is False


def test_env_overrides_toml(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text('[mongo]\nuri = "mongodb://from-file"\n')
    monkeypatch.setenv("MONGODB_URI", "mongodb://from-env")
    monkeypatch.setenv("MONGODB_DATABASE", "envdb")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test,")

    config = load_config(path)

    assert config.mongo.uri == "mongodb://from-env"
    assert config.mongo.database == "envdb"
    assert config.redis.url == "redis://cache:6379/1"
    assert config.ai.openai_api_key == "sk-test"
    assert config.web.allowed_origins == ["http://a.test", "http://b.test"]


def test_invalid_toml_falls_back_to_defaults(tmp_path, capsys):
    path = tmp_path / "config.toml"
    path.write_text("[mongo\nuri = ")

    config = load_config(path)

    assert config == Config()
    assert "Using default configuration" in capsys.readouterr().out


def test_invalid_cache_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[cache]\ntop_tracks_ttl_seconds = 0\n")

    config = load_config(path)

    assert config.cache.top_tracks_ttl_seconds == 60


def test_max_file_size_bytes():
    assert Config().upload.max_file_size_bytes == 15 * 1024 * 1024
