"""
Database Session Management Module

Builds the async engine and session factory backing the document store.
Nothing is created at import time; the host passes settings in.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from kvcache.config import Settings, get_settings
from kvcache.db.models import Base


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """
    Create asynchronous database engine

    echo=True prints SQL statements in DEBUG mode. In-memory SQLite shares a
    single connection so every session sees the same database.

    Args:
        settings: Cache configuration, defaults to get_settings()

    Returns:
        AsyncEngine: Engine for DATABASE_URL
    """
    settings = settings or get_settings()

    kwargs = {"echo": settings.DEBUG}
    if settings.DATABASE_TYPE == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in settings.DATABASE_URL:
            kwargs["poolclass"] = StaticPool

    return create_async_engine(settings.DATABASE_URL, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create asynchronous session factory

    Args:
        engine: Async engine

    Returns:
        async_sessionmaker: Factory opening one session per store call
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Do not expire objects after commit, avoids extra queries
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize Database

    Creates the cache_documents table if missing. Called on host startup.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
