import enum
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, enum.Enum):
    """Possible log levels."""

    NOTSET = "NOTSET"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"


class StorageBackend(str, enum.Enum):
    """Where the key-value records live."""

    MEMORY = "memory"
    SQL = "sql"


class Settings(BaseSettings):
    """
    Application settings.

    These parameters can be configured
    with environment variables.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    # quantity of workers for uvicorn
    workers_count: int = 1
    # Enable uvicorn reloading
    reload: bool = False

    # Current environment
    environment: str = "dev"

    log_level: LogLevel = LogLevel.INFO

    storage_backend: StorageBackend = StorageBackend.SQL
    # Variables for the key-value table
    db_url: str = "sqlite+aiosqlite:///./carbooking.db"
    db_echo: bool = False
    storage_key_prefix: str = "carbooking_"
    # Wipe every stored key on startup, so collections are re-seeded
    reset_storage: bool = False

    # Fixture used to initialize empty collections
    seed_path: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CARBOOKING_",
        env_file_encoding="utf-8",
    )


settings = Settings()
