import os

from pydantic import BaseModel, Field


# Helper functions for parsing environment variables
def get_str_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)

def get_int_env(key: str, default: int) -> int:
    try:
        return int(os.environ.get(key, str(default)))
    except ValueError:
        return default

def get_float_env(key: str, default: float) -> float:
    try:
        return float(os.environ.get(key, str(default)))
    except ValueError:
        return default

def get_bool_env(key: str, default: bool) -> bool:
    value = os.environ.get(key, str(default)).lower()
    return value == "true"


# Default factory functions
def default_db_path() -> str:
    return get_str_env("DB_PATH", "pooled_sql.db")

def default_pool_max_size() -> int:
    return get_int_env("DB_POOL_MAX_SIZE", 5)

def default_acquire_timeout() -> float:
    return get_float_env("DB_ACQUIRE_TIMEOUT_SEC", 10.0)

def default_enable_wal() -> bool:
    return get_bool_env("DB_ENABLE_WAL", True)

def default_log_level() -> str:
    return get_str_env("LOG_LEVEL", "INFO")

def default_log_dir() -> str:
    return get_str_env("LOG_DIR", "logs")

def default_max_size_mb() -> int:
    return get_int_env("LOG_MAX_SIZE_MB", 10)

def default_backup_count() -> int:
    return get_int_env("LOG_BACKUP_COUNT", 5)

def default_use_color() -> bool:
    return get_bool_env("LOG_USE_COLOR", True)


class DbConfig(BaseModel):
    """SQLite connection pool configuration."""
    path: str = Field(default_factory=default_db_path)
    pool_max_size: int = Field(default_factory=default_pool_max_size)
    acquire_timeout_sec: float = Field(default_factory=default_acquire_timeout)
    enable_wal: bool = Field(default_factory=default_enable_wal)


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default_factory=default_log_level)
    log_dir: str = Field(default_factory=default_log_dir)
    max_size_mb: int = Field(default_factory=default_max_size_mb)
    backup_count: int = Field(default_factory=default_backup_count)
    use_color: bool = Field(default_factory=default_use_color)


class AppConfig(BaseModel):
    """Application configuration."""
    db: DbConfig = Field(default_factory=DbConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# Create a singleton config instance
config = AppConfig()
