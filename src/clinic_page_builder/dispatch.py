from __future__ import annotations

from typing import Callable, Generic, TypeVar

from .catalog import default_variant, known_variants
from .models.section import PhotoGallerySection, SectionBase, SectionType

T = TypeVar("T")

Renderer = Callable[[SectionBase, str], T]

NEPALI_LOCALE = "ne"


class MissingRendererError(LookupError):
    pass


def localized(value: str, value_ne: str, locale: str) -> str:
    """Pick the Nepali copy for the ``ne`` locale, falling back to English when it is empty."""
    if locale == NEPALI_LOCALE:
        return value_ne or value
    return value


def resolve_variant(section: SectionBase) -> str:
    """Presentation strategy for ``section``; unknown variants fall back to the type default."""
    allowed = known_variants(section.type)
    variant = section.data.variant
    if variant in allowed:
        return variant
    if isinstance(section, PhotoGallerySection) and section.data.layout in allowed:
        return section.data.layout
    return default_variant(section.type)


class VariantDispatcher(Generic[T]):
    """Maps ``(section type, variant)`` to a rendering strategy.

    Lookup resolves the variant first, then falls back to the strategy
    registered for the type's default variant. A type with neither raises
    :class:`MissingRendererError` rather than rendering nothing.
    """

    def __init__(self) -> None:
        self._strategies: dict[tuple[str, str], Renderer[T]] = {}

    def register(
        self,
        section_type: SectionType | str,
        variant: str | None = None,
    ) -> Callable[[Renderer[T]], Renderer[T]]:
        key_type = SectionType(section_type).value
        key_variant = variant or default_variant(key_type)

        def decorator(renderer: Renderer[T]) -> Renderer[T]:
            self._strategies[(key_type, key_variant)] = renderer
            return renderer

        return decorator

    def strategy_for(self, section: SectionBase) -> Renderer[T]:
        section_type = SectionType(section.type).value
        strategy = self._strategies.get((section_type, resolve_variant(section)))
        if strategy is None:
            strategy = self._strategies.get((section_type, default_variant(section_type)))
        if strategy is None:
            raise MissingRendererError(f"no renderer registered for section type {section_type!r}")
        return strategy

    def render(self, section: SectionBase, locale: str) -> T | None:
        if not section.visible:
            return None
        return self.strategy_for(section)(section, locale)

    def missing_fallbacks(self) -> list[SectionType]:
        """Section types that have no strategy for their default variant."""
        return [
            section_type
            for section_type in SectionType
            if (section_type.value, default_variant(section_type.value)) not in self._strategies
        ]


__all__ = [
    "MissingRendererError",
    "Renderer",
    "VariantDispatcher",
    "localized",
    "resolve_variant",
]
