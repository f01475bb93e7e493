"""
Data Access Layer Module Initialization
"""

from kvcache.repositories.document_store import Document, DocumentStore, Filter

__all__ = [
    "Document",
    "DocumentStore",
    "Filter",
]
