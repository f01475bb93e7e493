"""
Cache Factory Module

Wires settings, engine, document store and cache together for a host process.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from kvcache.config import Settings, get_settings
from kvcache.db.session import create_engine, create_session_factory, init_db
from kvcache.repositories.sqlalchemy.document_store import SQLAlchemyDocumentStore
from kvcache.services.cache_service import KeyValueCache


async def create_cache(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> KeyValueCache:
    """
    Build a ready-to-use cache

    Creates the document table when it does not exist yet. The caller owns
    the engine and disposes of it on shutdown.

    Args:
        settings: Cache configuration, defaults to get_settings()
        engine: Existing engine to reuse; created from settings when omitted

    Returns:
        KeyValueCache: Cache over the configured collection
    """
    settings = settings or get_settings()
    engine = engine or create_engine(settings)

    await init_db(engine)

    store = SQLAlchemyDocumentStore(
        create_session_factory(engine),
        collection_name=settings.CACHE_COLLECTION_NAME,
    )
    return KeyValueCache(store, default_expire=settings.default_expire)
