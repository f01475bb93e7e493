"""
Service Layer Module Initialization
"""

from kvcache.services.cache_service import KeyValueCache
from kvcache.services.expiration import (
    DEFAULT_EXPIRE_DURATION,
    apply_default_times,
    expired_filter,
    is_expired,
)

__all__ = [
    "KeyValueCache",
    "DEFAULT_EXPIRE_DURATION",
    "apply_default_times",
    "expired_filter",
    "is_expired",
]
