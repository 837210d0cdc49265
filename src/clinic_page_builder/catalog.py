from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .models.section import SectionType
from .models.style import StylePreset


@dataclass(frozen=True)
class VariantOption:
    value: str
    label: str
    label_ne: str
    description: str


@dataclass(frozen=True)
class SectionTypeInfo:
    type: SectionType
    label: str
    label_ne: str
    description: str
    icon: str


@dataclass(frozen=True)
class PagePreset:
    slug: str
    title: str
    title_ne: str


@dataclass(frozen=True)
class StylePresetInfo:
    value: StylePreset
    label: str
    label_ne: str
    description: str


def _options(*rows: tuple[str, str, str, str]) -> tuple[VariantOption, ...]:
    return tuple(VariantOption(*row) for row in rows)


# First entry of every tuple is the type's default variant.
SECTION_VARIANTS: Mapping[SectionType, Sequence[VariantOption]] = {
    SectionType.hero: _options(
        ("centered", "Centered", "केन्द्रित", "Centered text with image behind"),
        ("split", "Split", "विभाजित", "Text left, image right"),
        ("minimal", "Minimal", "न्यूनतम", "Text only, no image"),
    ),
    SectionType.text: _options(
        ("standard", "Standard", "मानक", "Single column text"),
    ),
    SectionType.services_grid: _options(
        ("cards", "Cards", "कार्डहरू", "Service cards in a grid"),
        ("list", "List", "सूची", "Single column rows"),
        ("icons", "Icons", "आइकन", "Icon-centered grid"),
    ),
    SectionType.doctor_showcase: _options(
        ("cards", "Cards", "कार्डहरू", "Doctor cards with details"),
        ("list", "List", "सूची", "Full-width rows"),
        ("compact", "Compact", "सम्पक्ट", "Small cards, photo + name only"),
    ),
    SectionType.photo_gallery: _options(
        ("grid", "Grid", "ग्रिड", "Standard photo grid"),
        ("carousel", "Carousel", "क्यारोसेल", "Sliding carousel"),
        ("masonry", "Masonry", "मेसन्री", "Staggered column layout"),
    ),
    SectionType.contact_info: _options(
        ("list", "List", "सूची", "Vertical list of info"),
        ("card", "Card", "कार्ड", "All info in a card"),
        ("two_column", "Two Column", "दुई स्तम्भ", "Contact left, hours right"),
    ),
    SectionType.testimonials: _options(
        ("cards", "Cards", "कार्डहरू", "Review cards"),
        ("carousel", "Carousel", "क्यारोसेल", "Sliding reviews"),
        ("simple", "Simple", "सरल", "Blockquote style"),
    ),
    SectionType.faq: _options(
        ("accordion", "Accordion", "एकोर्डियन", "Click to expand answers"),
        ("list", "List", "सूची", "All answers visible"),
        ("two_column", "Two Column", "दुई स्तम्भ", "Questions in two columns"),
    ),
    SectionType.booking: _options(
        ("standard", "Standard", "मानक", "Default booking widget"),
        ("compact", "Compact", "सम्पक्ट", "Small inline CTA"),
        ("prominent", "Prominent", "प्रमुख", "Full-width hero-like CTA"),
    ),
    SectionType.opd_schedule: _options(
        ("table", "Table", "तालिका", "Table layout"),
        ("cards", "Cards", "कार्डहरू", "Day cards"),
        ("timeline", "Timeline", "टाइमलाइन", "Visual timeline"),
    ),
    SectionType.map_embed: _options(
        ("standard", "Standard", "मानक", "Map in container"),
        ("with_info", "With Info", "जानकारीसहित", "Map + address side by side"),
        ("full_width", "Full Width", "पूर्ण चौडाइ", "Edge-to-edge map"),
    ),
    SectionType.divider: _options(
        ("line", "Line", "रेखा", "Horizontal line"),
        ("dots", "Dots", "बिन्दु", "Three centered dots"),
        ("space", "Space", "खाली", "Vertical spacing only"),
    ),
    SectionType.button: _options(
        ("row", "Row", "पङ्क्ति", "Buttons side by side"),
        ("stack", "Stack", "स्ट्याक", "Buttons stacked vertically"),
        ("spread", "Spread", "फैलाउ", "Buttons spread apart"),
    ),
    SectionType.image: _options(
        ("standard", "Standard", "मानक", "Standard image display"),
        ("rounded", "Rounded", "गोलाकार", "Rounded corners"),
        ("shadow", "Shadow", "छाया", "Drop shadow effect"),
    ),
}

DEFAULT_VARIANTS: Mapping[str, str] = {
    section_type.value: options[0].value for section_type, options in SECTION_VARIANTS.items()
}

FALLBACK_VARIANT = "standard"


def default_variant(section_type: str) -> str:
    return DEFAULT_VARIANTS.get(section_type, FALLBACK_VARIANT)


def known_variants(section_type: str) -> frozenset[str]:
    try:
        options = SECTION_VARIANTS[SectionType(section_type)]
    except ValueError:
        return frozenset()
    return frozenset(option.value for option in options)


SECTION_TYPE_INFO: Sequence[SectionTypeInfo] = (
    SectionTypeInfo(SectionType.hero, "Hero", "हिरो", "Large banner with heading and image", "🏔"),
    SectionTypeInfo(SectionType.text, "Text", "पाठ", "Rich text content with markdown", "📝"),
    SectionTypeInfo(SectionType.services_grid, "Services", "सेवा", "Grid of clinic services", "🏥"),
    SectionTypeInfo(SectionType.doctor_showcase, "Doctors", "डाक्टर", "Show affiliated doctors", "👨‍⚕"),
    SectionTypeInfo(SectionType.photo_gallery, "Gallery", "ग्यालेरी", "Photo gallery grid", "📸"),
    SectionTypeInfo(SectionType.contact_info, "Contact", "सम्पर्क", "Contact details and hours", "📞"),
    SectionTypeInfo(SectionType.testimonials, "Reviews", "समीक्षा", "Patient reviews and ratings", "⭐"),
    SectionTypeInfo(SectionType.faq, "FAQ", "FAQ", "Frequently asked questions", "❓"),
    SectionTypeInfo(SectionType.booking, "Booking", "बुकिंग", "Appointment booking widget", "📅"),
    SectionTypeInfo(SectionType.opd_schedule, "OPD", "OPD", "OPD schedule display", "🕐"),
    SectionTypeInfo(SectionType.map_embed, "Map", "नक्सा", "Embedded location map", "📍"),
    SectionTypeInfo(SectionType.divider, "Divider", "विभाजक", "Visual separator line", "➖"),
    SectionTypeInfo(SectionType.button, "Button", "बटन", "Standalone CTA button", "🔘"),
    SectionTypeInfo(SectionType.image, "Image", "तस्बिर", "Standalone image display", "🖼"),
)

PAGE_PRESETS: Sequence[PagePreset] = (
    PagePreset("about", "About", "बारेमा"),
    PagePreset("booking", "Booking", "बुकिंग"),
    PagePreset("gallery", "Gallery", "ग्यालेरी"),
    PagePreset("contact", "Contact", "सम्पर्क"),
    PagePreset("doctors", "Our Team", "हाम्रो टोली"),
    PagePreset("faq", "FAQ", "FAQ"),
)

STYLE_PRESET_INFO: Sequence[StylePresetInfo] = (
    StylePresetInfo(StylePreset.bauhaus, "Bauhaus", "बाउहाउस", "Bold borders, hard shadows, geometric"),
    StylePresetInfo(StylePreset.modern, "Modern", "आधुनिक", "Soft shadows, rounded corners, clean"),
    StylePresetInfo(StylePreset.minimal, "Minimal", "न्यूनतम", "No borders, no shadows, content-focused"),
    StylePresetInfo(StylePreset.warm, "Warm", "न्यानो", "Amber tones, medium shadows, inviting"),
)


__all__ = [
    "DEFAULT_VARIANTS",
    "FALLBACK_VARIANT",
    "PAGE_PRESETS",
    "PagePreset",
    "SECTION_TYPE_INFO",
    "SECTION_VARIANTS",
    "STYLE_PRESET_INFO",
    "SectionTypeInfo",
    "StylePresetInfo",
    "VariantOption",
    "default_variant",
    "known_variants",
]
