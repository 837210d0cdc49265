from __future__ import annotations

from typing import Any, Callable, Mapping

from .ids import generate_section_id
from .models.section import (
    BookingData,
    BookingSection,
    ButtonData,
    ButtonItem,
    ButtonSection,
    ContactInfoData,
    ContactInfoSection,
    DividerData,
    DividerSection,
    DoctorShowcaseData,
    DoctorShowcaseSection,
    FAQData,
    FAQItem,
    FAQSection,
    HeroData,
    HeroSection,
    ImageData,
    ImageSection,
    MapEmbedData,
    MapEmbedSection,
    OPDScheduleData,
    OPDScheduleSection,
    PhotoGalleryData,
    PhotoGallerySection,
    SectionBase,
    SectionData,
    SectionType,
    ServicesGridData,
    ServicesGridSection,
    TestimonialsData,
    TestimonialsSection,
    TextData,
    TextSection,
)
from .models.style import DesignToken, LayoutWidth, PaddingSize, SectionStyle

Overrides = Mapping[str, Any] | None


def default_style(**overrides: Any) -> SectionStyle:
    return SectionStyle(**overrides)


def _with_overrides(data: SectionData, overrides: Overrides) -> Any:
    return data.merged(overrides) if overrides else data


def _short_anchor(prefix: str, section_id: str) -> str:
    return f"{prefix}-{section_id[-4:]}"


def create_hero_section(overrides: Overrides = None) -> HeroSection:
    data = HeroData(
        variant="centered",
        heading="Welcome to Our Clinic",
        heading_ne="हाम्रो क्लिनिकमा स्वागत छ",
        subtitle="Quality healthcare you can trust",
        subtitle_ne="विश्वसनीय गुणस्तरीय स्वास्थ्य सेवा",
        image=None,
        show_logo=True,
    )
    return HeroSection(
        id=generate_section_id(),
        anchor_id="hero",
        style=default_style(
            padding=PaddingSize.lg,
            layout=LayoutWidth.full,
            bg_color=DesignToken.primary_blue,
            text_color=DesignToken.white,
        ),
        data=_with_overrides(data, overrides),
    )


def create_text_section(overrides: Overrides = None) -> TextSection:
    section_id = generate_section_id()
    data = TextData(
        variant="standard",
        heading="About Us",
        heading_ne="हाम्रो बारेमा",
        body="Tell your patients about your clinic, your mission, and what makes you different.",
        body_ne="आफ्नो क्लिनिक, आफ्नो मिशन, र तपाईंलाई फरक बनाउने कुराहरूको बारेमा बिरामीहरूलाई बताउनुहोस्।",
    )
    return TextSection(
        id=section_id,
        anchor_id=_short_anchor("text", section_id),
        style=default_style(),
        data=_with_overrides(data, overrides),
    )


def create_services_grid_section(overrides: Overrides = None) -> ServicesGridSection:
    data = ServicesGridData(
        variant="cards",
        heading="Our Services",
        heading_ne="हाम्रा सेवाहरू",
        source="auto",
        columns=3,
    )
    return ServicesGridSection(
        id=generate_section_id(),
        anchor_id="services",
        style=default_style(bg_color=DesignToken.background),
        data=_with_overrides(data, overrides),
    )


def create_doctor_showcase_section(overrides: Overrides = None) -> DoctorShowcaseSection:
    data = DoctorShowcaseData(
        variant="cards",
        heading="Our Medical Team",
        heading_ne="हाम्रो चिकित्सा टोली",
        source="auto",
        columns=3,
        show_specialty=True,
        show_degree=True,
        show_role=True,
    )
    return DoctorShowcaseSection(
        id=generate_section_id(),
        anchor_id="doctors",
        style=default_style(),
        data=_with_overrides(data, overrides),
    )


def create_photo_gallery_section(overrides: Overrides = None) -> PhotoGallerySection:
    data = PhotoGalleryData(
        variant="grid",
        heading="Photo Gallery",
        heading_ne="फोटो ग्यालेरी",
        source="auto",
        layout="grid",
        columns=3,
    )
    return PhotoGallerySection(
        id=generate_section_id(),
        anchor_id="gallery",
        style=default_style(bg_color=DesignToken.background),
        data=_with_overrides(data, overrides),
    )


def create_contact_info_section(overrides: Overrides = None) -> ContactInfoSection:
    data = ContactInfoData(
        variant="list",
        heading="Contact Us",
        heading_ne="सम्पर्क गर्नुहोस्",
        source="auto",
    )
    return ContactInfoSection(
        id=generate_section_id(),
        anchor_id="contact",
        style=default_style(),
        data=_with_overrides(data, overrides),
    )


def create_testimonials_section(overrides: Overrides = None) -> TestimonialsSection:
    data = TestimonialsData(
        variant="cards",
        heading="Patient Reviews",
        heading_ne="बिरामी समीक्षाहरू",
        source="auto",
        max_count=6,
    )
    return TestimonialsSection(
        id=generate_section_id(),
        anchor_id="reviews",
        style=default_style(bg_color=DesignToken.background),
        data=_with_overrides(data, overrides),
    )


def create_faq_section(overrides: Overrides = None) -> FAQSection:
    data = FAQData(
        variant="accordion",
        heading="Frequently Asked Questions",
        heading_ne="बारम्बार सोधिने प्रश्नहरू",
        items=[
            FAQItem(
                id=generate_section_id(),
                question="What are your opening hours?",
                question_ne="तपाईंको खुल्ने समय के हो?",
                answer="Please check our contact section for detailed operating hours.",
                answer_ne="कृपया विस्तृत खुल्ने समयको लागि हाम्रो सम्पर्क खण्ड हेर्नुहोस्।",
            )
        ],
    )
    return FAQSection(
        id=generate_section_id(),
        anchor_id="faq",
        style=default_style(),
        data=_with_overrides(data, overrides),
    )


def create_booking_section(overrides: Overrides = None) -> BookingSection:
    data = BookingData(
        variant="standard",
        heading="Book an Appointment",
        heading_ne="अपोइन्टमेन्ट बुक गर्नुहोस्",
    )
    return BookingSection(
        id=generate_section_id(),
        anchor_id="booking",
        style=default_style(),
        data=_with_overrides(data, overrides),
    )


def create_opd_schedule_section(overrides: Overrides = None) -> OPDScheduleSection:
    data = OPDScheduleData(
        variant="table",
        heading="OPD Schedule",
        heading_ne="OPD तालिका",
    )
    return OPDScheduleSection(
        id=generate_section_id(),
        anchor_id="opd-schedule",
        style=default_style(bg_color=DesignToken.background),
        data=_with_overrides(data, overrides),
    )


def create_map_embed_section(overrides: Overrides = None) -> MapEmbedSection:
    data = MapEmbedData(
        variant="standard",
        heading="Find Us",
        heading_ne="हामीलाई खोज्नुहोस्",
        source="auto",
        manual_lat=None,
        manual_lng=None,
        zoom=15,
        height=400,
    )
    return MapEmbedSection(
        id=generate_section_id(),
        anchor_id="map",
        style=default_style(),
        data=_with_overrides(data, overrides),
    )


def create_divider_section(overrides: Overrides = None) -> DividerSection:
    section_id = generate_section_id()
    data = DividerData(variant="line", thickness=2, color=DesignToken.foreground, width="full")
    return DividerSection(
        id=section_id,
        anchor_id=_short_anchor("divider", section_id),
        style=default_style(padding=PaddingSize.sm),
        data=_with_overrides(data, overrides),
    )


def create_button_section(overrides: Overrides = None) -> ButtonSection:
    section_id = generate_section_id()
    data = ButtonData(
        variant="row",
        size="md",
        alignment="center",
        gap="md",
        buttons=[
            ButtonItem(
                id=generate_section_id(),
                label="Click Here",
                label_ne="यहाँ क्लिक गर्नुहोस्",
                href="#",
                open_in_new_tab=False,
                color=DesignToken.primary_blue,
                style="solid",
            )
        ],
    )
    return ButtonSection(
        id=section_id,
        anchor_id=_short_anchor("button", section_id),
        style=default_style(padding=PaddingSize.sm),
        data=_with_overrides(data, overrides),
    )


def create_image_section(overrides: Overrides = None) -> ImageSection:
    section_id = generate_section_id()
    return ImageSection(
        id=section_id,
        anchor_id=_short_anchor("image", section_id),
        style=default_style(),
        data=_with_overrides(ImageData(variant="standard"), overrides),
    )


SECTION_FACTORIES: Mapping[SectionType, Callable[..., SectionBase]] = {
    SectionType.hero: create_hero_section,
    SectionType.text: create_text_section,
    SectionType.services_grid: create_services_grid_section,
    SectionType.doctor_showcase: create_doctor_showcase_section,
    SectionType.photo_gallery: create_photo_gallery_section,
    SectionType.contact_info: create_contact_info_section,
    SectionType.testimonials: create_testimonials_section,
    SectionType.faq: create_faq_section,
    SectionType.booking: create_booking_section,
    SectionType.opd_schedule: create_opd_schedule_section,
    SectionType.map_embed: create_map_embed_section,
    SectionType.divider: create_divider_section,
    SectionType.button: create_button_section,
    SectionType.image: create_image_section,
}


def create_section(section_type: SectionType | str) -> SectionBase:
    """Build a default section of the given type; new section types are wired in here."""
    return SECTION_FACTORIES[SectionType(section_type)]()


__all__ = [
    "SECTION_FACTORIES",
    "create_booking_section",
    "create_button_section",
    "create_contact_info_section",
    "create_divider_section",
    "create_doctor_showcase_section",
    "create_faq_section",
    "create_hero_section",
    "create_image_section",
    "create_map_embed_section",
    "create_opd_schedule_section",
    "create_photo_gallery_section",
    "create_section",
    "create_services_grid_section",
    "create_testimonials_section",
    "create_text_section",
    "default_style",
]
