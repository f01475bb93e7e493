"""
Configuration Management Module

Configures the cache via environment variables or .env file.
Supports SQLite (default) and PostgreSQL as the document table backend.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Cache Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    DEBUG: bool = False

    # Database Config
    # Supports "sqlite" or "postgresql"
    DATABASE_TYPE: Literal["sqlite", "postgresql"] = "sqlite"
    # SQLite default database path, PostgreSQL requires full connection string
    DATABASE_URL: str = "sqlite+aiosqlite:///./kvcache.db"

    # Cache Config
    # Collection that holds the key-value documents
    CACHE_COLLECTION_NAME: str = "jKeyValue"
    # Expiry applied when a record has no (or a past) expireAt (seconds)
    CACHE_DEFAULT_EXPIRE_SECONDS: int = 60

    # Sweep Config
    # Periodic removal of expired documents; off unless the host enables it
    CACHE_SWEEP_ENABLED: bool = False
    # Sweep interval (seconds)
    CACHE_SWEEP_INTERVAL_SECONDS: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def default_expire(self) -> timedelta:
        """Default record lifetime as a timedelta"""
        return timedelta(seconds=self.CACHE_DEFAULT_EXPIRE_SECONDS)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cache configuration (Singleton)

    Uses lru_cache so the environment is read once per process.

    Returns:
        Settings: Cache configuration instance
    """
    return Settings()
