"""
Key-Value Cache Service Module

TTL cache operations composed from document store primitives and the
expiration policy.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable

from kvcache.common.errors import NotFoundError
from kvcache.common.time import utc_now
from kvcache.domain.key_value import KeyValueModel
from kvcache.repositories.document_store import DocumentStore, Filter
from kvcache.services.expiration import (
    DEFAULT_EXPIRE_DURATION,
    apply_default_times,
    expired_filter,
    is_expired,
)

logger = logging.getLogger(__name__)


class KeyValueCache:
    """
    Key-Value Cache

    Holds no state of its own; every record lives in the store, so one
    instance can be shared by concurrent callers. Errors from the store are
    never retried.
    """

    def __init__(
        self,
        store: DocumentStore,
        default_expire: timedelta = DEFAULT_EXPIRE_DURATION,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize Service

        Args:
            store: Document store holding the records
            default_expire: Lifetime given to records without a usable expiry
            clock: Source of the current UTC time
        """
        self.store = store
        self.default_expire = default_expire
        self.clock = clock

    async def create_with_expiration(self, record: KeyValueModel) -> KeyValueModel:
        """
        Create a record, defaulting createdAt and expireAt

        Args:
            record: Record, possibly with key and value only

        Returns:
            KeyValueModel: Persisted record with its assigned ID

        Raises:
            StoreError: Insert failed
        """
        record = apply_default_times(
            record, now=self.clock(), default_expire=self.default_expire
        )
        return await self._insert(record)

    async def create(self, record: KeyValueModel) -> KeyValueModel:
        """
        Create a record as given

        Only createdAt is stamped; expireAt is stored exactly as supplied.
        A record without expireAt reads as expired.

        Raises:
            StoreError: Insert failed
        """
        record = record.model_copy(update={"created_at": self.clock()})
        return await self._insert(record)

    async def _insert(self, record: KeyValueModel) -> KeyValueModel:
        doc_id = await self.store.insert(record.to_document())
        return record.model_copy(update={"id": doc_id})

    async def get(self, key: str) -> KeyValueModel:
        """
        Get the first record stored under a key, live or not

        Raises:
            NotFoundError: No record has this key
            StoreError: Lookup failed
        """
        document = await self.store.find_one({"key": key})
        return KeyValueModel.model_validate(document)

    async def get_with_expire_check(self, key: str) -> KeyValueModel:
        """
        Get a live record by key

        An expired record is deleted by key and reported as a miss.

        Args:
            key: Lookup key

        Returns:
            KeyValueModel: The live record

        Raises:
            NotFoundError: Key absent or expired
            StoreError: Lookup failed, or the expired record could not be deleted
        """
        record = await self.get(key)

        if is_expired(record, self.clock()):
            try:
                await self.delete(key)
            except NotFoundError:
                # Another caller removed it first
                logger.debug(f"Expired key already removed: {key}")
            else:
                logger.debug(f"Removed expired key on read: {key}")
            raise NotFoundError(
                message=f"Key {key} not found",
                code="key_not_found",
                details={"key": key, "expired": True},
            )

        return record

    async def update(self, selector: Filter, patch: dict[str, Any]) -> None:
        """
        Set fields on every record matching the selector

        Patch keys use wire names (key, value, createdAt, expireAt).

        Raises:
            StoreError: Update failed or patch names an unknown field
        """
        await self.store.update(selector, patch)

    async def delete(self, key: str) -> None:
        """
        Delete the first record stored under a key

        Raises:
            NotFoundError: No record has this key
            StoreError: Delete failed
        """
        await self.store.remove({"key": key})

    async def delete_expired(self) -> None:
        """
        Remove every expired record in one bulk call

        Raises:
            StoreError: Delete failed
        """
        now = self.clock()
        deleted_count = await self.store.remove_all(expired_filter(now))
        logger.info(
            f"Swept {deleted_count} expired keys from {self.store.collection_name}"
        )
