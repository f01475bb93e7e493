"""
Document Store Repository SQLAlchemy Implementation

Stores the documents of a named collection as rows of `cache_documents`
and evaluates a small MongoDB-style filter subset in SQL.
"""

import json
import logging
import operator
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator

from sqlalchemy import Text, and_, cast, delete, or_, select, true, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kvcache.common.errors import NotFoundError, StoreError
from kvcache.common.time import ensure_utc, to_storage
from kvcache.db.models import CacheDocument
from kvcache.repositories.document_store import Document, DocumentStore, Filter

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_NAME = "jKeyValue"

# Wire field -> column usable in filters
_FILTER_COLUMNS = {
    "_id": CacheDocument.id,
    "key": CacheDocument.key,
    "createdAt": CacheDocument.created_at,
    "expireAt": CacheDocument.expire_at,
    "value": CacheDocument.value,
}

# Wire field -> ORM attribute writable through a patch
_PATCH_ATTRIBUTES = {
    "key": "key",
    "value": "value",
    "createdAt": "created_at",
    "expireAt": "expire_at",
}

_DATETIME_FIELDS = {"createdAt", "expireAt"}

_COMPARISONS = {
    "$eq": operator.eq,
    "$lt": operator.lt,
    "$lte": operator.le,
    "$gt": operator.gt,
    "$gte": operator.ge,
}


def _is_operator_map(condition: Any) -> bool:
    """`{"$lte": ...}` style condition, as opposed to a literal (object) value"""
    return (
        isinstance(condition, dict)
        and bool(condition)
        and all(isinstance(k, str) and k.startswith("$") for k in condition)
    )


class SQLAlchemyDocumentStore(DocumentStore):
    """
    Document Store Repository SQLAlchemy Implementation

    Every primitive opens its own session from the factory and closes it on
    exit, so no connection outlives a single call.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        collection_name: str = DEFAULT_COLLECTION_NAME,
    ):
        """
        Initialize Repository

        Args:
            session_factory: Async session factory
            collection_name: Collection the documents belong to
        """
        self.session_factory = session_factory
        self.collection_name = collection_name

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Open a session for one call, translating driver errors"""
        async with self.session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                raise StoreError(
                    message=f"Collection {self.collection_name}: {e}",
                    details={"collection": self.collection_name, "cause": type(e).__name__},
                ) from e

    def _unsupported(self, message: str, code: str = "unsupported_filter") -> StoreError:
        return StoreError(
            message=message,
            code=code,
            details={"collection": self.collection_name},
        )

    def _bind(self, field: str, value: Any) -> Any:
        if field in _DATETIME_FIELDS:
            if value is not None and not isinstance(value, datetime):
                raise self._unsupported(
                    f"{field} requires a datetime, got {type(value).__name__}",
                    code="invalid_value",
                )
            return to_storage(value)
        return value

    def _serialize_value(self, value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise self._unsupported(
                f"value is not JSON serializable: {e}", code="invalid_value"
            ) from e

    def _compare_value(self, op: str, operand: Any):
        """
        Compare the JSON payload by its serialized text

        Only equality-style operators apply. Objects match when serialized
        with the same key order they were stored with.
        """
        column = CacheDocument.value
        as_text = cast(column, Text)

        if op == "$in":
            return as_text.in_([self._serialize_value(v) for v in operand])
        if op not in ("$eq", "$ne"):
            raise self._unsupported(f"Operator {op} is not supported on value")

        serialized = self._serialize_value(operand)
        if operand is None:
            # JSON null and SQL NULL both count as a null payload
            if op == "$eq":
                return or_(column.is_(None), as_text == serialized)
            return and_(column.is_not(None), as_text != serialized)
        if op == "$eq":
            return as_text == serialized
        return or_(as_text != serialized, column.is_(None))

    def _compare(self, field: str, op: str, operand: Any):
        if field == "value":
            return self._compare_value(op, operand)

        column = _FILTER_COLUMNS[field]

        if op == "$in":
            return column.in_([self._bind(field, v) for v in operand])

        operand = self._bind(field, operand)
        if op == "$ne":
            if operand is None:
                return column.is_not(None)
            # NULL never compares unequal in SQL; a missing value is still "not equal"
            return or_(column != operand, column.is_(None))
        if op not in _COMPARISONS:
            raise self._unsupported(f"Unsupported filter operator: {op}")
        if operand is None:
            if op == "$eq":
                return column.is_(None)
            raise self._unsupported(f"Operator {op} cannot compare against null")
        return _COMPARISONS[op](column, operand)

    def _conditions(self, filter: Filter) -> list:
        conditions = []
        for field, condition in filter.items():
            if field == "$or":
                if not condition:
                    raise self._unsupported("$or requires at least one filter")
                conditions.append(
                    or_(*(and_(true(), *self._conditions(sub)) for sub in condition))
                )
                continue

            if field not in _FILTER_COLUMNS:
                raise self._unsupported(f"Unsupported filter field: {field}")

            if _is_operator_map(condition):
                for op, operand in condition.items():
                    conditions.append(self._compare(field, op, operand))
            else:
                conditions.append(self._compare(field, "$eq", condition))
        return conditions

    def _where(self, filter: Filter) -> list:
        return [CacheDocument.collection == self.collection_name, *self._conditions(filter)]

    def _values(self, patch: Document) -> dict[str, Any]:
        values = {}
        for field, value in patch.items():
            if field not in _PATCH_ATTRIBUTES:
                raise self._unsupported(
                    f"Field cannot be set: {field}", code="unsupported_patch"
                )
            values[_PATCH_ATTRIBUTES[field]] = self._bind(field, value)
        return values

    def _to_document(self, entity: CacheDocument) -> Document:
        """Convert ORM entity to wire-shaped document"""
        return {
            "_id": entity.id,
            "key": entity.key,
            "value": entity.value,
            "createdAt": ensure_utc(entity.created_at),
            "expireAt": ensure_utc(entity.expire_at),
        }

    async def insert(self, document: Document) -> str:
        """Insert a document, assigning `_id` when missing"""
        if "key" not in document:
            raise self._unsupported("Document has no key", code="invalid_document")

        doc_id = document.get("_id") or uuid.uuid4().hex
        entity = CacheDocument(
            id=doc_id,
            collection=self.collection_name,
            key=document["key"],
            value=document.get("value"),
            created_at=self._bind("createdAt", document.get("createdAt")),
            expire_at=self._bind("expireAt", document.get("expireAt")),
        )

        async with self._session() as session:
            session.add(entity)
            await session.commit()

        return doc_id

    async def find_one(self, filter: Filter) -> Document:
        """Find the matching document with the lowest insertion sequence"""
        stmt = (
            select(CacheDocument)
            .where(*self._where(filter))
            .order_by(CacheDocument.seq)
            .limit(1)
        )

        async with self._session() as session:
            result = await session.execute(stmt)
            entity = result.scalar_one_or_none()

        if entity is None:
            raise NotFoundError(
                message=f"No document in {self.collection_name} matches {filter!r}",
                code="document_not_found",
                details={"collection": self.collection_name},
            )
        return self._to_document(entity)

    async def update(self, filter: Filter, patch: Document) -> int:
        """Set patch fields on all matching documents"""
        values = self._values(patch)
        if not values:
            return 0

        stmt = (
            update(CacheDocument)
            .where(*self._where(filter))
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        async with self._session() as session:
            result = await session.execute(stmt)
            await session.commit()

        return result.rowcount

    async def remove(self, filter: Filter) -> None:
        """Remove the first matching document"""
        first_match = (
            select(CacheDocument.seq)
            .where(*self._where(filter))
            .order_by(CacheDocument.seq)
            .limit(1)
            .correlate(None)
            .scalar_subquery()
        )
        stmt = (
            delete(CacheDocument)
            .where(CacheDocument.seq == first_match)
            .execution_options(synchronize_session=False)
        )

        async with self._session() as session:
            result = await session.execute(stmt)
            await session.commit()

        if result.rowcount == 0:
            raise NotFoundError(
                message=f"No document in {self.collection_name} matches {filter!r}",
                code="document_not_found",
                details={"collection": self.collection_name},
            )

    async def remove_all(self, filter: Filter) -> int:
        """Remove all matching documents"""
        stmt = (
            delete(CacheDocument)
            .where(*self._where(filter))
            .execution_options(synchronize_session=False)
        )

        async with self._session() as session:
            result = await session.execute(stmt)
            await session.commit()

        logger.debug(
            f"Removed {result.rowcount} documents from {self.collection_name}"
        )
        return result.rowcount
