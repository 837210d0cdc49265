from __future__ import annotations

import copy
import threading
from typing import Any, Dict, Protocol


class DocumentStore(Protocol):
    def get_document(self, site_id: str) -> dict[str, Any] | None:
        ...

    def put_document(self, site_id: str, payload: dict[str, Any]) -> None:
        ...


class InMemoryDocumentStore:
    """Keeps raw page-builder payloads per site; used in dev and tests.

    Payloads are stored as received, so older schema versions survive until
    they are next written.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get_document(self, site_id: str) -> dict[str, Any] | None:
        with self._lock:
            payload = self._documents.get(site_id)
            return copy.deepcopy(payload) if payload is not None else None

    def put_document(self, site_id: str, payload: dict[str, Any]) -> None:
        with self._lock:
            self._documents[site_id] = copy.deepcopy(payload)


__all__ = ["DocumentStore", "InMemoryDocumentStore"]
