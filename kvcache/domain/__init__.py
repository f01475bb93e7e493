"""
Domain Model Module
"""

from kvcache.domain.key_value import KeyValueModel

__all__ = [
    "KeyValueModel",
]
