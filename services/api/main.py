from __future__ import annotations

import logging
import os
import uuid
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from clinic_page_builder.document_store import DocumentStore, InMemoryDocumentStore
from clinic_page_builder.firestore_document_store import FirestoreDocumentStore
from clinic_page_builder.logging_config import set_trace_id, setup_logging
from clinic_page_builder.migrate import ensure_latest, utc_now_iso
from clinic_page_builder.models.document import CURRENT_VERSION, SiteDocument
from clinic_page_builder.validation import validate_document


class SaveResponse(BaseModel):
    success: bool = True
    updated_at: str = Field(serialization_alias="updatedAt")


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")

setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)


def build_store() -> DocumentStore:
    # Use Firestore in production, in-memory for dev
    if ENVIRONMENT == "dev":
        return InMemoryDocumentStore()
    return FirestoreDocumentStore(project_id=PROJECT_ID)


def create_app(store: DocumentStore | None = None) -> FastAPI:
    app = FastAPI(title="Clinic Page Builder API", version="0.1.0")
    app.state.store = store if store is not None else build_store()

    @app.middleware("http")
    async def trace_requests(request: Request, call_next):
        set_trace_id(request.headers.get("X-Cloud-Trace-Context") or str(uuid.uuid4()))
        try:
            return await call_next(request)
        finally:
            set_trace_id(None)

    @app.get("/v1/sites/{site_id}/page-builder")
    async def get_page_builder(site_id: str, request: Request) -> JSONResponse:
        raw = request.app.state.store.get_document(site_id)
        try:
            document = ensure_latest(raw)
        except ValidationError as exc:
            logger.exception("Stored page-builder document is unreadable", extra={"site_id": site_id})
            raise HTTPException(status_code=500, detail="Failed to fetch page builder config") from exc
        return JSONResponse(
            {
                "site_id": site_id,
                "pageBuilder": document.to_wire() if document is not None else None,
            }
        )

    @app.put("/v1/sites/{site_id}/page-builder")
    async def put_page_builder(
        site_id: str,
        request: Request,
        payload: dict[str, Any] = Body(...),
    ) -> JSONResponse:
        _check_shape(payload)
        try:
            document = SiteDocument.model_validate(payload)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid page builder config: {exc.error_count()} errors") from exc

        problems = validate_document(ensure_latest(document))
        if problems:
            raise HTTPException(status_code=400, detail=f"Invalid page builder config: {'; '.join(problems)}")

        # Server time is authoritative for updatedAt
        document = document.model_copy(update={"updated_at": utc_now_iso()})
        request.app.state.store.put_document(site_id, document.to_wire())
        logger.info("Saved page builder config", extra={"site_id": site_id, "pages": len(document.pages)})
        return JSONResponse(SaveResponse(updated_at=document.updated_at).model_dump(by_alias=True))

    @app.get("/health")
    async def healthcheck() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return app


def _check_shape(payload: dict[str, Any]) -> None:
    if payload.get("version") != CURRENT_VERSION:
        raise HTTPException(status_code=400, detail=f"Invalid page builder config: version must be {CURRENT_VERSION}")
    if not isinstance(payload.get("pages"), list):
        raise HTTPException(status_code=400, detail="Invalid page builder config: pages must be an array")
    navbar = payload.get("navbar")
    if not isinstance(navbar, dict) or not isinstance(navbar.get("links"), list):
        raise HTTPException(status_code=400, detail="Invalid page builder config: navbar.links must be an array")
    for page in payload["pages"]:
        if not isinstance(page, dict) or not isinstance(page.get("sections"), list):
            slug = page.get("slug") if isinstance(page, dict) else None
            raise HTTPException(
                status_code=400,
                detail=f'Invalid page builder config: page "{slug}" sections must be an array',
            )


app = create_app()
