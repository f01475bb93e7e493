"""
Document Store Repository Interface

Defines the data access contract the cache consumes: five primitives over a
named collection of key-value documents.
"""

from abc import ABC, abstractmethod
from typing import Any

# MongoDB-style filter / $set patch over wire field names
Filter = dict[str, Any]
Document = dict[str, Any]


class DocumentStore(ABC):
    """Document Store Repository Interface"""

    collection_name: str

    @abstractmethod
    async def insert(self, document: Document) -> str:
        """
        Insert a document

        Assigns `_id` when the document has none.

        Args:
            document: Document in wire shape

        Returns:
            str: ID of the inserted document

        Raises:
            StoreError: Insert failed (e.g. duplicate `_id`)
        """
        pass

    @abstractmethod
    async def find_one(self, filter: Filter) -> Document:
        """
        Find the first document matching the filter

        Args:
            filter: Query filter

        Returns:
            Document: The first match

        Raises:
            NotFoundError: Nothing matched
            StoreError: Query failed
        """
        pass

    @abstractmethod
    async def update(self, filter: Filter, patch: Document) -> int:
        """
        Set fields on every document matching the filter

        Fields present in `patch` overwrite; absent fields are untouched.

        Returns:
            int: Number of documents modified
        """
        pass

    @abstractmethod
    async def remove(self, filter: Filter) -> None:
        """
        Remove the first document matching the filter

        Raises:
            NotFoundError: Nothing matched
            StoreError: Delete failed
        """
        pass

    @abstractmethod
    async def remove_all(self, filter: Filter) -> int:
        """
        Remove every document matching the filter

        Returns:
            int: Number of documents removed
        """
        pass
