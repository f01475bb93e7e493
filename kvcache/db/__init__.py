"""
Database Module Initialization
"""

from kvcache.db.session import create_engine, create_session_factory, init_db
from kvcache.db.models import Base, CacheDocument

__all__ = [
    "create_engine",
    "create_session_factory",
    "init_db",
    "Base",
    "CacheDocument",
]
