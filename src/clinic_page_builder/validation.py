from __future__ import annotations

from collections import Counter
from typing import Sequence

from .models.document import HOME_SLUG, SiteDocument


class DocumentValidationError(ValueError):
    def __init__(self, problems: Sequence[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = list(problems)


def _duplicates(values: Sequence[str]) -> list[str]:
    return sorted(value for value, count in Counter(values).items() if count > 1)


def validate_document(document: SiteDocument) -> list[str]:
    """Return the structural invariant violations of ``document`` (empty when valid)."""
    problems: list[str] = []

    home_pages = [page for page in document.pages if page.is_home_page]
    if len(home_pages) != 1:
        problems.append(f"expected exactly one home page, found {len(home_pages)}")
    for page in home_pages:
        if page.slug != HOME_SLUG:
            problems.append(f"home page {page.id} has slug {page.slug!r}, expected {HOME_SLUG!r}")

    for page_id in _duplicates([page.id for page in document.pages]):
        problems.append(f"duplicate page id {page_id}")
    for slug in _duplicates([page.slug for page in document.pages]):
        problems.append(f"duplicate page slug {slug!r}")

    for page in document.pages:
        for section_id in _duplicates([section.id for section in page.sections]):
            problems.append(f"page {page.slug!r}: duplicate section id {section_id}")
        for section in page.sections:
            if not section.data.variant:
                problems.append(f"page {page.slug!r}: section {section.id} has no variant")

    return problems


def ensure_valid(document: SiteDocument) -> SiteDocument:
    problems = validate_document(document)
    if problems:
        raise DocumentValidationError(problems)
    return document


__all__ = ["DocumentValidationError", "ensure_valid", "validate_document"]
