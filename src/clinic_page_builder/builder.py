from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Mapping, Sequence

from pydantic import ValidationError

from .config import BuilderSettings
from .ids import generate_page_id, generate_section_id
from .models.document import HOME_SLUG, SiteDocument, SitePage
from .models.section import SectionBase, SectionType
from .models.style import FooterConfig, NavbarConfig, StylePreset
from .section_defaults import create_section

logger = logging.getLogger(__name__)

MAX_UNDO_STACK = 50
DUPLICATE_ANCHOR_SUFFIX = "-copy"

DocumentUpdater = Callable[[SiteDocument], SiteDocument]
SectionsUpdater = Callable[[Sequence[SectionBase]], Sequence[SectionBase]]
Listener = Callable[["PageBuilder"], None]


class PageBuilder:
    """Owns the document being edited and every structural change made to it.

    Each mutation derives a new document from the previous one without
    touching it, so the undo and redo stacks simply hold whole-document
    snapshots. Requests that would break an invariant (removing the home
    page, moving from an index that does not exist, ...) leave the document
    as it was and record no history.

    Listeners registered with :meth:`subscribe` are called after every change
    to the document or to the dirty flag. Selection changes are not reported.
    """

    def __init__(self, document: SiteDocument | None = None, *, undo_limit: int = MAX_UNDO_STACK) -> None:
        self._document: SiteDocument | None = None
        self._current_page_id: str | None = None
        self._selected_section_id: str | None = None
        self._undo: deque[SiteDocument] = deque(maxlen=undo_limit)
        self._redo: list[SiteDocument] = []
        self._dirty = False
        self._listeners: list[Listener] = []
        if document is not None:
            self.load(document)

    @classmethod
    def from_settings(cls, settings: BuilderSettings, document: SiteDocument | None = None) -> "PageBuilder":
        return cls(document, undo_limit=settings.undo_limit)

    # --- state -----------------------------------------------------------

    @property
    def document(self) -> SiteDocument | None:
        return self._document

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def current_page_id(self) -> str | None:
        return self._current_page_id

    @property
    def current_page(self) -> SitePage | None:
        if self._document is None:
            return None
        return self._document.get_page(self._current_page_id)

    @property
    def selected_section_id(self) -> str | None:
        return self._selected_section_id

    @property
    def selected_section(self) -> SectionBase | None:
        page = self.current_page
        if page is None or self._selected_section_id is None:
            return None
        return next((section for section in page.sections if section.id == self._selected_section_id), None)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def load(self, document: SiteDocument) -> None:
        """Install ``document`` as a freshly loaded, clean session."""
        self._document = document
        self._undo.clear()
        self._redo.clear()
        self._dirty = False
        self._select_home_page()
        self._notify()

    def mark_clean(self) -> None:
        self._dirty = False
        self._notify()

    def mark_dirty(self) -> None:
        self._dirty = True
        self._notify()

    def acknowledge_save(self, snapshot: SiteDocument, updated_at: str) -> bool:
        """Record that ``snapshot`` was persisted with the server's ``updated_at``.

        The current document always takes the new ``updated_at``, without
        recording history. Returns False, leaving the session dirty, when the
        document has been edited since the snapshot was taken.
        """
        current = self._document
        if current is None:
            return False
        self._document = current.model_copy(update={"updated_at": updated_at})
        clean = current is snapshot
        if clean:
            self._dirty = False
        self._notify()
        return clean

    def set_current_page(self, page_id: str) -> None:
        if self._document is None or self._document.get_page(page_id) is None:
            return
        self._current_page_id = page_id
        self._selected_section_id = None

    def select_section(self, section_id: str | None) -> None:
        self._selected_section_id = section_id

    def _select_home_page(self) -> None:
        self._selected_section_id = None
        document = self._document
        if document is None or not document.pages:
            self._current_page_id = None
            return
        home = document.home_page or document.pages[0]
        self._current_page_id = home.id

    def _repair_selection(self) -> None:
        if self.current_page is None:
            self._select_home_page()
        elif self.selected_section is None:
            self._selected_section_id = None

    # --- apply pipeline --------------------------------------------------

    def _apply(self, updater: DocumentUpdater, *, on_applied: Callable[[], None] | None = None) -> bool:
        previous = self._document
        if previous is None:
            return False
        next_document = updater(previous)
        if next_document is previous:
            return False
        self._undo.append(previous)
        self._redo.clear()
        self._dirty = True
        self._document = next_document
        if on_applied is not None:
            on_applied()
        self._notify()
        return True

    @staticmethod
    def _replace_page(document: SiteDocument, page: SitePage) -> SiteDocument:
        pages = [page if existing.id == page.id else existing for existing in document.pages]
        return document.model_copy(update={"pages": pages})

    def _update_page(self, page_id: str, change: Callable[[SitePage], SitePage | None]) -> bool:
        def update(document: SiteDocument) -> SiteDocument:
            page = document.get_page(page_id)
            if page is None:
                return document
            changed = change(page)
            if changed is None:
                return document
            return self._replace_page(document, changed)

        return self._apply(update)

    def _update_current_sections(
        self,
        updater: SectionsUpdater,
        *,
        on_applied: Callable[[], None] | None = None,
    ) -> bool:
        page_id = self._current_page_id
        if page_id is None:
            return False

        def update(document: SiteDocument) -> SiteDocument:
            page = document.get_page(page_id)
            if page is None:
                return document
            sections = updater(page.sections)
            if sections is page.sections:
                return document
            return self._replace_page(document, page.model_copy(update={"sections": list(sections)}))

        return self._apply(update, on_applied=on_applied)

    def _slug_taken(self, slug: str, *, ignore_page_id: str | None = None) -> bool:
        assert self._document is not None
        return any(page.slug == slug and page.id != ignore_page_id for page in self._document.pages)

    # --- pages -----------------------------------------------------------

    def add_page(self, slug: str, title: str, title_ne: str = "") -> SitePage | None:
        if self._document is None:
            return None
        if slug == HOME_SLUG or self._slug_taken(slug):
            logger.debug("Ignored add_page with taken slug", extra={"slug": slug})
            return None
        page = SitePage(
            id=generate_page_id(),
            slug=slug,
            title=title,
            title_ne=title_ne,
            sections=[],
            is_home_page=False,
            visible=True,
        )

        def select_new_page() -> None:
            self._current_page_id = page.id
            self._selected_section_id = None

        applied = self._apply(
            lambda document: document.model_copy(update={"pages": [*document.pages, page]}),
            on_applied=select_new_page,
        )
        return page if applied else None

    def remove_page(self, page_id: str) -> None:
        def update(document: SiteDocument) -> SiteDocument:
            page = document.get_page(page_id)
            if page is None or page.is_home_page:
                return document
            return document.model_copy(update={"pages": [p for p in document.pages if p.id != page_id]})

        def fall_back_to_home() -> None:
            if self._current_page_id == page_id:
                self._select_home_page()

        if not self._apply(update, on_applied=fall_back_to_home):
            logger.debug("Ignored remove_page", extra={"page_id": page_id})

    def rename_page(self, page_id: str, title: str, title_ne: str) -> None:
        self._update_page(page_id, lambda page: page.model_copy(update={"title": title, "title_ne": title_ne}))

    def update_page_slug(self, page_id: str, slug: str) -> None:
        def change(page: SitePage) -> SitePage | None:
            if page.is_home_page or slug == HOME_SLUG or self._slug_taken(slug, ignore_page_id=page.id):
                return None
            return page.model_copy(update={"slug": slug})

        self._update_page(page_id, change)

    def toggle_page_visibility(self, page_id: str) -> None:
        self._update_page(page_id, lambda page: page.model_copy(update={"visible": not page.visible}))

    # --- sections (current page) -------------------------------------------

    def add_section(self, section_type: SectionType | str, index: int | None = None) -> SectionBase | None:
        page = self.current_page
        if page is None:
            return None
        section = create_section(section_type)
        existing_ids = {existing.id for existing in page.sections}
        while section.id in existing_ids:
            section = section.model_copy(update={"id": generate_section_id()})

        def insert(sections: Sequence[SectionBase]) -> list[SectionBase]:
            result = list(sections)
            if index is None:
                result.append(section)
            else:
                result.insert(max(0, min(index, len(result))), section)
            return result

        applied = self._update_current_sections(insert, on_applied=lambda: self.select_section(section.id))
        return section if applied else None

    def remove_section(self, section_id: str) -> None:
        def remove(sections: Sequence[SectionBase]) -> Sequence[SectionBase]:
            if all(section.id != section_id for section in sections):
                return sections
            return [section for section in sections if section.id != section_id]

        def clear_selection() -> None:
            if self._selected_section_id == section_id:
                self._selected_section_id = None

        self._update_current_sections(remove, on_applied=clear_selection)

    def duplicate_section(self, section_id: str) -> SectionBase | None:
        clones: list[SectionBase] = []

        def duplicate(sections: Sequence[SectionBase]) -> Sequence[SectionBase]:
            index = next((i for i, section in enumerate(sections) if section.id == section_id), None)
            if index is None:
                return sections
            original = sections[index]
            taken = {section.id for section in sections}
            clone_id = generate_section_id()
            while clone_id in taken:
                clone_id = generate_section_id()
            clone = original.model_copy(
                deep=True,
                update={"id": clone_id, "anchor_id": f"{original.anchor_id}{DUPLICATE_ANCHOR_SUFFIX}"},
            )
            clones.append(clone)
            result = list(sections)
            result.insert(index + 1, clone)
            return result

        self._update_current_sections(duplicate)
        return clones[0] if clones else None

    def move_section(self, from_index: int, to_index: int) -> None:
        if from_index == to_index:
            return

        def move(sections: Sequence[SectionBase]) -> Sequence[SectionBase]:
            count = len(sections)
            if not (0 <= from_index < count and 0 <= to_index < count):
                logger.debug(
                    "Ignored out-of-range move_section",
                    extra={"from_index": from_index, "to_index": to_index, "count": count},
                )
                return sections
            result = list(sections)
            moved = result.pop(from_index)
            result.insert(to_index, moved)
            return result

        self._update_current_sections(move)

    def _map_section(self, section_id: str, change: Callable[[SectionBase], SectionBase]) -> None:
        def update(sections: Sequence[SectionBase]) -> Sequence[SectionBase]:
            index = next((i for i, section in enumerate(sections) if section.id == section_id), None)
            if index is None:
                return sections
            changed = change(sections[index])
            if changed is sections[index]:
                return sections
            result = list(sections)
            result[index] = changed
            return result

        self._update_current_sections(update)

    @staticmethod
    def _merge_or_keep(section: SectionBase, merge: Callable[[], SectionBase]) -> SectionBase:
        try:
            merged = merge()
        except ValidationError as exc:
            logger.debug(
                "Ignored invalid section update",
                extra={"section_id": section.id, "errors": exc.error_count()},
            )
            return section
        if not merged.data.variant:
            logger.debug("Ignored section update clearing variant", extra={"section_id": section.id})
            return section
        return merged

    def update_section(self, section_id: str, updates: Mapping[str, Any]) -> None:
        if updates:
            self._map_section(
                section_id,
                lambda section: self._merge_or_keep(section, lambda: section.merged(updates)),
            )

    def update_section_data(self, section_id: str, data_updates: Mapping[str, Any]) -> None:
        if data_updates:
            self._map_section(
                section_id,
                lambda section: self._merge_or_keep(
                    section,
                    lambda: section.model_copy(update={"data": section.data.merged(data_updates)}),
                ),
            )

    def toggle_section_visibility(self, section_id: str) -> None:
        self._map_section(section_id, lambda section: section.model_copy(update={"visible": not section.visible}))

    # --- document-level settings -------------------------------------------

    def update_navbar(self, navbar: NavbarConfig) -> None:
        self._apply(lambda document: document.model_copy(update={"navbar": navbar}))

    def update_footer(self, footer: FooterConfig) -> None:
        self._apply(lambda document: document.model_copy(update={"footer": footer}))

    def _set_field(self, name: str, value: Any) -> None:
        def update(document: SiteDocument) -> SiteDocument:
            if getattr(document, name) == value:
                return document
            return document.model_copy(update={name: value})

        self._apply(update)

    def set_style_preset(self, preset: StylePreset | str) -> None:
        self._set_field("style_preset", StylePreset(preset).value)

    def set_enabled(self, enabled: bool) -> None:
        self._set_field("enabled", enabled)

    def toggle_enabled(self) -> None:
        self._apply(lambda document: document.model_copy(update={"enabled": not document.enabled}))

    def apply_template(self, document: SiteDocument) -> None:
        """Replace the whole document, keeping the previous one on the undo stack."""
        if self._document is not None:
            self._undo.append(self._document)
        self._redo.clear()
        self._dirty = True
        self._document = document
        self._select_home_page()
        logger.info("Applied template", extra={"template_id": document.template_id})
        self._notify()

    # --- history -----------------------------------------------------------

    def undo(self) -> None:
        if self._document is None or not self._undo:
            return
        self._redo.append(self._document)
        self._document = self._undo.pop()
        self._dirty = True
        self._repair_selection()
        self._notify()

    def redo(self) -> None:
        if self._document is None or not self._redo:
            return
        self._undo.append(self._document)
        self._document = self._redo.pop()
        self._dirty = True
        self._repair_selection()
        self._notify()


__all__ = ["DUPLICATE_ANCHOR_SUFFIX", "MAX_UNDO_STACK", "PageBuilder"]
