"""
Expiration Policy

Pure functions deciding record timestamps and liveness. Nothing here talks
to the store or reads the clock unless `now` is omitted.

Expiry is passive: a record is found to be expired when it is read or when
a caller runs the sweep. No timer enforces the TTL.
"""

from datetime import datetime, timedelta
from typing import Optional

from kvcache.common.time import ensure_utc, utc_now
from kvcache.domain.key_value import KeyValueModel
from kvcache.repositories.document_store import Filter

DEFAULT_EXPIRE_DURATION = timedelta(seconds=60)


def apply_default_times(
    record: KeyValueModel,
    now: Optional[datetime] = None,
    default_expire: timedelta = DEFAULT_EXPIRE_DURATION,
) -> KeyValueModel:
    """
    Fill in missing timestamps

    - created_at unset: stamped with `now`.
    - expire_at unset or already in the past: created_at + default_expire.
    - A future expire_at supplied by the caller is kept as is.

    Args:
        record: Record as supplied by the caller
        now: Reference time, current UTC when omitted
        default_expire: Lifetime applied when expire_at is replaced

    Returns:
        KeyValueModel: A new record; the input is not modified
    """
    now = ensure_utc(now) if now is not None else utc_now()

    created_at = record.created_at or now
    expire_at = record.expire_at
    if expire_at is None or expire_at < now:
        expire_at = created_at + default_expire

    return record.model_copy(update={"created_at": created_at, "expire_at": expire_at})


def is_expired(record: KeyValueModel, now: datetime) -> bool:
    """Strictly-before check used on reads; an unset expiry counts as expired"""
    return record.expire_at is None or record.expire_at < ensure_utc(now)


def expired_filter(now: datetime) -> Filter:
    """Sweep predicate: expireAt at or before now, or never set"""
    return {
        "$or": [
            {"expireAt": {"$lte": ensure_utc(now)}},
            {"expireAt": None},
        ]
    }
