"""
Base document store interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple


class DocumentStore(ABC):
    """
    Base interface for the hosted document database.

    Documents are plain dictionaries grouped into named collections. The
    store assigns identifiers on create; callers may also write a document
    under a key they choose (used for the word cache).
    """

    @abstractmethod
    def create(self, collection: str, data: Dict[str, Any]) -> str:
        """
        Create a new document.

        Args:
            collection: Collection name
            data: Document body

        Returns:
            Identifier assigned by the store
        """
        pass

    @abstractmethod
    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        """
        Point-read a document.

        Args:
            collection: Collection name
            key: Document identifier

        Returns:
            Document body, or None if it does not exist
        """
        pass

    @abstractmethod
    def set(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        """Write a document under a caller-chosen key, replacing any existing one."""
        pass

    @abstractmethod
    def update(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        """
        Update an existing document.

        Raises:
            PersistenceError: If the document does not exist
        """
        pass

    @abstractmethod
    def list(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        """Return (identifier, document) pairs for every document in a collection."""
        pass

    def close(self) -> None:
        """Release any open connections."""
        pass
