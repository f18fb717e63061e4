import os
from unittest import mock

from pooled_sql.config import AppConfig


def test_default_config():
    """Test that the default configuration loads correctly."""
    with mock.patch.dict(os.environ, {}, clear=True):
        config = AppConfig()

    # Check that all sections exist
    assert hasattr(config, "db")
    assert hasattr(config, "logging")

    # Check some default values
    assert config.db.path == "pooled_sql.db"
    assert config.db.pool_max_size == 5
    assert config.db.acquire_timeout_sec == 10.0
    assert config.db.enable_wal is True
    assert config.logging.level == "INFO"
    assert config.logging.use_color is True


def test_environment_variables():
    """Test that environment variables override default configuration."""
    with mock.patch.dict(os.environ, {
        "DB_PATH": "/data/app.db",
        "DB_POOL_MAX_SIZE": "12",
        "DB_ACQUIRE_TIMEOUT_SEC": "2.5",
        "LOG_LEVEL": "WARNING",
        "LOG_BACKUP_COUNT": "2",
    }):
        config = AppConfig()

        assert config.db.path == "/data/app.db"
        assert config.db.pool_max_size == 12
        assert config.db.acquire_timeout_sec == 2.5
        assert config.logging.level == "WARNING"
        assert config.logging.backup_count == 2


def test_invalid_numbers_fall_back_to_defaults():
    """Test that unparsable numbers keep the defaults."""
    with mock.patch.dict(os.environ, {
        "DB_POOL_MAX_SIZE": "many",
        "DB_ACQUIRE_TIMEOUT_SEC": "soon",
    }):
        config = AppConfig()

        assert config.db.pool_max_size == 5
        assert config.db.acquire_timeout_sec == 10.0


def test_boolean_parsing():
    """Test that boolean values are parsed correctly."""
    with mock.patch.dict(os.environ, {
        "DB_ENABLE_WAL": "false",
        "LOG_USE_COLOR": "0",
    }):
        config = AppConfig()

        assert config.db.enable_wal is False
        assert config.logging.use_color is False
