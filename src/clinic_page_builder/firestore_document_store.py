from __future__ import annotations

import logging
from typing import Any

from google.cloud import firestore

logger = logging.getLogger(__name__)


class FirestoreDocumentStore:
    """Firestore-backed page-builder storage for production use."""

    COLLECTION_NAME = "page_builder"

    def __init__(self, project_id: str | None = None, *, client: firestore.Client | None = None) -> None:
        self._db = client or firestore.Client(project=project_id)
        self._collection = self._db.collection(self.COLLECTION_NAME)

    def get_document(self, site_id: str) -> dict[str, Any] | None:
        """Return the raw stored payload for ``site_id``, whatever its schema version."""
        snapshot = self._collection.document(site_id).get()
        if not snapshot.exists:
            return None
        data = snapshot.to_dict() or {}
        return data.get("document")

    def put_document(self, site_id: str, payload: dict[str, Any]) -> None:
        """Replace the stored payload for ``site_id``."""
        doc_ref = self._collection.document(site_id)
        doc_ref.set(
            {
                "document": payload,
                "version": payload.get("version"),
                "stored_at": firestore.SERVER_TIMESTAMP,
            }
        )
        logger.info(
            "Stored page-builder document",
            extra={
                "site_id": site_id,
                "version": payload.get("version"),
                "pages": len(payload.get("pages") or []),
            },
        )


__all__ = ["FirestoreDocumentStore"]
