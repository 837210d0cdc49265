from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from .catalog import default_variant
from .ids import generate_page_id
from .models.document import CURRENT_VERSION, HOME_SLUG, SiteDocument, SiteDocumentV1, SitePage
from .models.section import PhotoGallerySection, SectionBase
from .models.style import BASELINE_STYLE_PRESET, FooterConfig, NavbarConfig

logger = logging.getLogger(__name__)

GALLERY_DEFAULT_LAYOUT = "grid"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def default_footer() -> FooterConfig:
    return FooterConfig()


def default_navbar() -> NavbarConfig:
    return NavbarConfig()


def make_home_page(sections: Iterable[SectionBase] = ()) -> SitePage:
    return SitePage(
        id=generate_page_id(),
        slug=HOME_SLUG,
        title="Home",
        title_ne="गृहपृष्ठ",
        sections=list(sections),
        is_home_page=True,
        visible=True,
    )


def migrate_v1_to_v2(legacy: SiteDocumentV1) -> SiteDocument:
    """Wrap a legacy flat section list into a single home page."""
    return SiteDocument(
        version=CURRENT_VERSION,
        enabled=legacy.enabled,
        style_preset=BASELINE_STYLE_PRESET,
        navbar=legacy.navbar,
        footer=default_footer(),
        pages=[make_home_page(legacy.sections)],
        template_id=legacy.template_id,
        updated_at=legacy.updated_at,
    )


def backfill_sections(sections: Iterable[SectionBase]) -> None:
    """Fill fields that were introduced after a section was first stored.

    Mutates in place; only call this on documents that were just parsed.
    """
    for section in sections:
        data = section.data
        if isinstance(section, PhotoGallerySection):
            if not data.variant:
                data.variant = data.layout or GALLERY_DEFAULT_LAYOUT
            if not data.layout:
                data.layout = GALLERY_DEFAULT_LAYOUT
        elif not data.variant:
            data.variant = default_variant(section.type)


def _looks_like_legacy(raw: Mapping[str, Any]) -> bool:
    return isinstance(raw.get("sections"), list)


def ensure_latest(raw: SiteDocument | SiteDocumentV1 | Mapping[str, Any] | None) -> SiteDocument | None:
    """Bring a stored document of any vintage up to the current schema.

    A ``SiteDocument`` instance comes back as the very same object, so callers
    may compare by identity. Mappings are parsed; a version 1 payload, or an
    untagged payload that still carries a top-level ``sections`` list, is
    migrated into a single home page. Anything else yields ``None``.
    """
    if raw is None:
        return None

    if isinstance(raw, SiteDocument):
        document = raw
    elif isinstance(raw, SiteDocumentV1):
        document = migrate_v1_to_v2(raw)
    elif isinstance(raw, Mapping):
        document = _parse_mapping(raw)
        if document is None:
            return None
    else:
        logger.warning("Unrecognised page-builder payload", extra={"payload_type": type(raw).__name__})
        return None

    for page in document.pages:
        backfill_sections(page.sections)
    return document


def _parse_mapping(raw: Mapping[str, Any]) -> SiteDocument | None:
    version = raw.get("version")
    if version == CURRENT_VERSION:
        return SiteDocument.model_validate(raw)
    if version == 1:
        logger.info("Migrating page-builder document", extra={"from_version": 1, "to_version": CURRENT_VERSION})
        return migrate_v1_to_v2(SiteDocumentV1.model_validate(raw))
    if _looks_like_legacy(raw):
        logger.warning(
            "Untagged page-builder document treated as version 1",
            extra={"declared_version": version},
        )
        return migrate_v1_to_v2(SiteDocumentV1.model_validate({**raw, "version": 1}))
    logger.warning("Unrecognised page-builder document shape", extra={"declared_version": version})
    return None


def create_empty_document() -> SiteDocument:
    return SiteDocument(
        version=CURRENT_VERSION,
        enabled=False,
        style_preset=BASELINE_STYLE_PRESET,
        navbar=default_navbar(),
        footer=default_footer(),
        pages=[make_home_page()],
        template_id=None,
        updated_at=utc_now_iso(),
    )


__all__ = [
    "backfill_sections",
    "create_empty_document",
    "default_footer",
    "default_navbar",
    "ensure_latest",
    "make_home_page",
    "migrate_v1_to_v2",
    "utc_now_iso",
]
