"""
kvcache: TTL key-value cache over a document table.
"""

from kvcache.common.errors import AppError, NotFoundError, StoreError
from kvcache.domain.key_value import KeyValueModel
from kvcache.factory import create_cache
from kvcache.services.cache_service import KeyValueCache

__all__ = [
    "AppError",
    "NotFoundError",
    "StoreError",
    "KeyValueModel",
    "KeyValueCache",
    "create_cache",
]
