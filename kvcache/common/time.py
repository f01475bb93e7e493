"""
Time Utilities

Cache timestamps are UTC everywhere:
- Records carry UTC-aware datetimes (`createdAt`, `expireAt`).
- The document table stores naive UTC values, so conversions happen at the
  storage boundary only.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

UTC = timezone.utc


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to UTC-aware.

    Naive values are assumed to already be UTC; aware values in another zone
    are converted. `None` passes through, it stands for an unset timestamp.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_storage(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert a datetime to the naive UTC form written to the database."""
    aware = ensure_utc(dt)
    if aware is None:
        return None
    return aware.replace(tzinfo=None)
