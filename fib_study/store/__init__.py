"""
Document store collaborators.
"""

from fib_study.config import Config
from fib_study.store.base import DocumentStore
from fib_study.store.memory_store import InMemoryDocumentStore


def create_store(backend: str = None) -> DocumentStore:
    """
    Create the document store selected by configuration.

    Args:
        backend: "memory" or "firestore" (defaults to Config.STORE_BACKEND)

    Returns:
        A DocumentStore instance owned by the caller
    """
    backend = (backend or Config.STORE_BACKEND).lower()
    if backend == "firestore":
        # Import here so the memory backend works without Google credentials
        from fib_study.store.firestore_store import FirestoreDocumentStore
        return FirestoreDocumentStore()
    if backend == "memory":
        return InMemoryDocumentStore()
    raise ValueError(f"Unknown store backend '{backend}'. Use 'memory' or 'firestore'.")


__all__ = [
    'DocumentStore',
    'InMemoryDocumentStore',
    'create_store'
]
