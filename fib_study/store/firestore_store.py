"""
Google Cloud Firestore document store.

Requires the google-cloud-firestore library and Application Default
Credentials (set GOOGLE_APPLICATION_CREDENTIALS to a service account key
file, or run inside Google Cloud).
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from fib_study.config import Config
from fib_study.errors import PersistenceError
from fib_study.store.base import DocumentStore


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by a Firestore database."""

    def __init__(self, client: Optional[firestore.Client] = None):
        """
        Initialize the Firestore store.

        Args:
            client: Optional pre-configured Firestore client. When omitted a
                client is created for Config.GOOGLE_CLOUD_PROJECT.
        """
        self.logger = logging.getLogger(__name__)
        if client is None:
            self.logger.info(
                f"Initializing Firestore client for project '{Config.GOOGLE_CLOUD_PROJECT}'..."
            )
            client = firestore.Client(
                project=Config.GOOGLE_CLOUD_PROJECT,
                database=Config.FIRESTORE_DATABASE
            )
            self.logger.info("Firestore client initialized successfully")
        self.client = client

    def create(self, collection: str, data: Dict[str, Any]) -> str:
        try:
            _, doc_ref = self.client.collection(collection).add(data)
        except google_exceptions.GoogleAPICallError as e:
            self.logger.error(f"Failed to create document in {collection}: {e}")
            raise PersistenceError(f"Failed to create document: {e}") from e
        return doc_ref.id

    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            snapshot = self.client.collection(collection).document(key).get()
        except google_exceptions.GoogleAPICallError as e:
            self.logger.error(f"Failed to read {collection}/{key}: {e}")
            raise PersistenceError(f"Failed to read document: {e}") from e
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def set(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        try:
            self.client.collection(collection).document(key).set(data)
        except google_exceptions.GoogleAPICallError as e:
            self.logger.error(f"Failed to write {collection}/{key}: {e}")
            raise PersistenceError(f"Failed to write document: {e}") from e

    def update(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        try:
            self.client.collection(collection).document(key).update(data)
        except google_exceptions.NotFound as e:
            raise PersistenceError(f"Document not found: {collection}/{key}") from e
        except google_exceptions.GoogleAPICallError as e:
            self.logger.error(f"Failed to update {collection}/{key}: {e}")
            raise PersistenceError(f"Failed to update document: {e}") from e

    def list(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        try:
            return [
                (snapshot.id, snapshot.to_dict() or {})
                for snapshot in self.client.collection(collection).stream()
            ]
        except google_exceptions.GoogleAPICallError as e:
            self.logger.error(f"Failed to list {collection}: {e}")
            raise PersistenceError(f"Failed to list documents: {e}") from e

    def close(self) -> None:
        self.client.close()
