"""
SQLAlchemy Repository Implementation Module Initialization
"""

from kvcache.repositories.sqlalchemy.document_store import (
    DEFAULT_COLLECTION_NAME,
    SQLAlchemyDocumentStore,
)

__all__ = [
    "DEFAULT_COLLECTION_NAME",
    "SQLAlchemyDocumentStore",
]
