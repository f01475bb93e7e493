"""
SQLAlchemy ORM Model Definitions

Documents of every cache collection live in one table:
- cache_documents: Key-value documents, scoped by collection name
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.dialects.sqlite import JSON as SQLiteJSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy ORM Base Class"""
    pass


class CacheDocument(Base):
    """
    Cache Documents Table

    Stores one key-value document per row. `key` is deliberately not unique:
    lookups resolve duplicates to the lowest `seq` (first inserted).
    """

    __tablename__ = "cache_documents"

    # Insertion order, used to pick the first match
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Opaque document ID exposed as `_id`
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    key: Mapped[str] = mapped_column(String(500), nullable=False)
    value: Mapped[Any] = mapped_column(SQLiteJSON, nullable=True)
    # Naive UTC
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    expire_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_cache_documents_collection_key", "collection", "key"),
        Index("idx_cache_documents_collection_expire_at", "collection", "expire_at"),
    )
