"""
In-memory document store used for development and tests.
"""

import copy
import logging
import threading
import uuid
from typing import Any, Dict, List, Optional, Tuple

from fib_study.errors import PersistenceError
from fib_study.store.base import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """
    Document store backed by nested dictionaries.

    Thread-safe: batch submissions write from worker threads.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def create(self, collection: str, data: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        with self._lock:
            self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)
        self.logger.debug(f"Created {collection}/{doc_id}")
        return doc_id

    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            document = self._collections.get(collection, {}).get(key)
            return copy.deepcopy(document) if document is not None else None

    def set(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        with self._lock:
            self._collections.setdefault(collection, {})[key] = copy.deepcopy(data)

    def update(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        with self._lock:
            documents = self._collections.get(collection, {})
            if key not in documents:
                raise PersistenceError(
                    f"Document not found: {collection}/{key}",
                    suggested_actions=["Reload the question list and try again"]
                )
            documents[key].update(copy.deepcopy(data))

    def list(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        with self._lock:
            return [
                (doc_id, copy.deepcopy(document))
                for doc_id, document in self._collections.get(collection, {}).items()
            ]

    def count(self, collection: str) -> int:
        """Number of documents in a collection."""
        with self._lock:
            return len(self._collections.get(collection, {}))
