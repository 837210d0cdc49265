from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator

from .section import Section
from .style import BASELINE_STYLE_PRESET, FooterConfig, NavbarConfig, StylePreset, WireModel

CURRENT_VERSION = 2
HOME_SLUG = "home"


class SitePage(WireModel):
    id: str
    slug: str
    title: str = ""
    title_ne: str = ""
    sections: list[Section] = Field(default_factory=list)
    is_home_page: bool = False
    visible: bool = True


class SiteDocument(WireModel):
    """Current (version 2) page-builder document: multi-page with footer and style preset."""

    version: Literal[2] = 2
    enabled: bool = False
    style_preset: StylePreset = BASELINE_STYLE_PRESET
    navbar: NavbarConfig = Field(default_factory=NavbarConfig)
    footer: FooterConfig = Field(default_factory=FooterConfig)
    pages: list[SitePage] = Field(default_factory=list)
    template_id: str | None = None
    updated_at: str = ""

    @property
    def home_page(self) -> SitePage | None:
        return next((page for page in self.pages if page.is_home_page), None)

    def get_page(self, page_id: str | None) -> SitePage | None:
        if page_id is None:
            return None
        return next((page for page in self.pages if page.id == page_id), None)


class SiteDocumentV1(WireModel):
    """Legacy single-page layout: a flat section list and no footer."""

    version: Literal[1] = 1
    enabled: bool = False
    navbar: NavbarConfig = Field(default_factory=NavbarConfig)
    sections: list[Section] = Field(default_factory=list)
    template_id: str | None = None
    updated_at: str = ""

    @field_validator("sections", mode="before")
    @classmethod
    def _null_sections(cls, value: Any) -> Any:
        # legacy payloads may carry ``sections: null``
        return [] if value is None else value


__all__ = ["CURRENT_VERSION", "HOME_SLUG", "SiteDocument", "SiteDocumentV1", "SitePage"]
