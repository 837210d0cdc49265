from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import BuilderSettings
from .migrate import ensure_latest
from .models.document import SiteDocument

logger = logging.getLogger(__name__)


class SaveError(RuntimeError):
    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"Save failed: {status_code} {detail}".rstrip())
        self.status_code = status_code
        self.detail = detail


class PageBuilderClient:
    """Async client for the page-builder storage API.

    Implements the ``DocumentSaver`` protocol used by ``AutoSaver``.
    """

    def __init__(
        self,
        *,
        base_url: str,
        site_id: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._site_id = site_id
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: BuilderSettings, site_id: str) -> "PageBuilderClient":
        return cls(base_url=settings.api_url, site_id=site_id)

    @property
    def path(self) -> str:
        return f"/v1/sites/{self._site_id}/page-builder"

    async def load(self) -> SiteDocument | None:
        """Fetch the stored document, migrated to the current schema."""
        response = await self._client.get(self.path)
        response.raise_for_status()
        payload: dict[str, Any] = response.json()
        return ensure_latest(payload.get("pageBuilder"))

    async def save(self, document: SiteDocument) -> str:
        """PUT the whole document and return the server-assigned ``updatedAt``."""
        response = await self._client.put(self.path, json=document.to_wire())
        if response.is_error:
            detail = ""
            try:
                detail = str(response.json().get("detail", ""))
            except ValueError:
                detail = response.text
            raise SaveError(response.status_code, detail)
        body = response.json()
        logger.debug("Stored page-builder document", extra={"site_id": self._site_id})
        return body.get("updatedAt") or document.updated_at

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["PageBuilderClient", "SaveError"]
