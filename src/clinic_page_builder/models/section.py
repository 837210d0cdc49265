from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import ConfigDict, Field, TypeAdapter

from .style import DesignToken, SectionStyle, WireModel


class SectionType(str, Enum):
    hero = "hero"
    text = "text"
    services_grid = "services_grid"
    doctor_showcase = "doctor_showcase"
    photo_gallery = "photo_gallery"
    contact_info = "contact_info"
    testimonials = "testimonials"
    faq = "faq"
    booking = "booking"
    opd_schedule = "opd_schedule"
    map_embed = "map_embed"
    divider = "divider"
    button = "button"
    image = "image"


DataSource = Literal["auto", "manual"]


class SectionData(WireModel):
    """Payload of a section.

    ``variant`` selects the presentation strategy and stays an open string so
    that a variant written by a newer editor survives a round trip. Unknown
    keys are kept for the same reason.
    """

    model_config = ConfigDict(extra="allow")

    variant: str | None = None


class HeroData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    subtitle: str = ""
    subtitle_ne: str = ""
    image: str | None = None
    show_logo: bool = True


class TextData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    body: str = ""
    body_ne: str = ""


class ServiceItem(WireModel):
    id: str
    name: str = ""
    name_ne: str = ""
    description: str = ""
    description_ne: str = ""
    icon: str = ""


class ServicesGridData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    source: DataSource = "auto"
    columns: int = 3
    manual_services: list[ServiceItem] = Field(default_factory=list)


class DoctorShowcaseData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    source: DataSource = "auto"
    columns: int = 3
    show_specialty: bool = True
    show_degree: bool = True
    show_role: bool = True


class PhotoItem(WireModel):
    id: str
    url: str
    caption: str = ""
    caption_ne: str = ""


class PhotoGalleryData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    source: DataSource = "auto"
    # predates ``variant``; kept in step with it by the backfill
    layout: str | None = None
    columns: int = 3
    manual_photos: list[PhotoItem] = Field(default_factory=list)


class ContactInfoData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    source: DataSource = "auto"
    show_phone: bool = True
    show_email: bool = True
    show_address: bool = True
    show_website: bool = True
    show_hours: bool = True


class TestimonialsData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    source: DataSource = "auto"
    max_count: int = 6


class FAQItem(WireModel):
    id: str
    question: str = ""
    question_ne: str = ""
    answer: str = ""
    answer_ne: str = ""


class FAQData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    items: list[FAQItem] = Field(default_factory=list)


class BookingData(SectionData):
    heading: str = ""
    heading_ne: str = ""


class OPDScheduleData(SectionData):
    heading: str = ""
    heading_ne: str = ""


class MapEmbedData(SectionData):
    heading: str = ""
    heading_ne: str = ""
    source: DataSource = "auto"
    manual_lat: float | None = None
    manual_lng: float | None = None
    zoom: int = 15
    height: int = 400


class DividerData(SectionData):
    thickness: int = 2
    color: DesignToken = DesignToken.foreground
    width: Literal["full", "half", "third"] = "full"


class ButtonItem(WireModel):
    id: str
    label: str = ""
    label_ne: str = ""
    href: str = "#"
    open_in_new_tab: bool = False
    color: DesignToken = DesignToken.primary_blue
    style: Literal["solid", "outline", "pill"] = "solid"


class ButtonData(SectionData):
    size: Literal["sm", "md", "lg"] = "md"
    alignment: Literal["left", "center", "right"] = "center"
    gap: Literal["sm", "md", "lg"] = "md"
    buttons: list[ButtonItem] = Field(default_factory=list)


class ImageData(SectionData):
    src: str | None = None
    alt: str = ""
    alt_ne: str = ""
    caption: str = ""
    caption_ne: str = ""
    href: str = ""


class SectionBase(WireModel):
    id: str
    visible: bool = True
    anchor_id: str = ""
    style: SectionStyle = Field(default_factory=SectionStyle)


class HeroSection(SectionBase):
    type: Literal["hero"] = "hero"
    data: HeroData = Field(default_factory=HeroData)


class TextSection(SectionBase):
    type: Literal["text"] = "text"
    data: TextData = Field(default_factory=TextData)


class ServicesGridSection(SectionBase):
    type: Literal["services_grid"] = "services_grid"
    data: ServicesGridData = Field(default_factory=ServicesGridData)


class DoctorShowcaseSection(SectionBase):
    type: Literal["doctor_showcase"] = "doctor_showcase"
    data: DoctorShowcaseData = Field(default_factory=DoctorShowcaseData)


class PhotoGallerySection(SectionBase):
    type: Literal["photo_gallery"] = "photo_gallery"
    data: PhotoGalleryData = Field(default_factory=PhotoGalleryData)


class ContactInfoSection(SectionBase):
    type: Literal["contact_info"] = "contact_info"
    data: ContactInfoData = Field(default_factory=ContactInfoData)


class TestimonialsSection(SectionBase):
    type: Literal["testimonials"] = "testimonials"
    data: TestimonialsData = Field(default_factory=TestimonialsData)


class FAQSection(SectionBase):
    type: Literal["faq"] = "faq"
    data: FAQData = Field(default_factory=FAQData)


class BookingSection(SectionBase):
    type: Literal["booking"] = "booking"
    data: BookingData = Field(default_factory=BookingData)


class OPDScheduleSection(SectionBase):
    type: Literal["opd_schedule"] = "opd_schedule"
    data: OPDScheduleData = Field(default_factory=OPDScheduleData)


class MapEmbedSection(SectionBase):
    type: Literal["map_embed"] = "map_embed"
    data: MapEmbedData = Field(default_factory=MapEmbedData)


class DividerSection(SectionBase):
    type: Literal["divider"] = "divider"
    data: DividerData = Field(default_factory=DividerData)


class ButtonSection(SectionBase):
    type: Literal["button"] = "button"
    data: ButtonData = Field(default_factory=ButtonData)


class ImageSection(SectionBase):
    type: Literal["image"] = "image"
    data: ImageData = Field(default_factory=ImageData)


Section = Annotated[
    Union[
        HeroSection,
        TextSection,
        ServicesGridSection,
        DoctorShowcaseSection,
        PhotoGallerySection,
        ContactInfoSection,
        TestimonialsSection,
        FAQSection,
        BookingSection,
        OPDScheduleSection,
        MapEmbedSection,
        DividerSection,
        ButtonSection,
        ImageSection,
    ],
    Field(discriminator="type"),
]

SECTION_MODELS: Mapping[SectionType, type[SectionBase]] = {
    SectionType.hero: HeroSection,
    SectionType.text: TextSection,
    SectionType.services_grid: ServicesGridSection,
    SectionType.doctor_showcase: DoctorShowcaseSection,
    SectionType.photo_gallery: PhotoGallerySection,
    SectionType.contact_info: ContactInfoSection,
    SectionType.testimonials: TestimonialsSection,
    SectionType.faq: FAQSection,
    SectionType.booking: BookingSection,
    SectionType.opd_schedule: OPDScheduleSection,
    SectionType.map_embed: MapEmbedSection,
    SectionType.divider: DividerSection,
    SectionType.button: ButtonSection,
    SectionType.image: ImageSection,
}

_section_adapter: TypeAdapter[Section] = TypeAdapter(Section)


def parse_section(raw: Mapping[str, Any]) -> SectionBase:
    return _section_adapter.validate_python(raw)


__all__ = [
    "BookingData",
    "BookingSection",
    "ButtonData",
    "ButtonItem",
    "ButtonSection",
    "ContactInfoData",
    "ContactInfoSection",
    "DataSource",
    "DividerData",
    "DividerSection",
    "DoctorShowcaseData",
    "DoctorShowcaseSection",
    "FAQData",
    "FAQItem",
    "FAQSection",
    "HeroData",
    "HeroSection",
    "ImageData",
    "ImageSection",
    "MapEmbedData",
    "MapEmbedSection",
    "OPDScheduleData",
    "OPDScheduleSection",
    "PhotoGalleryData",
    "PhotoGallerySection",
    "PhotoItem",
    "SECTION_MODELS",
    "Section",
    "SectionBase",
    "SectionData",
    "SectionType",
    "ServiceItem",
    "ServicesGridData",
    "ServicesGridSection",
    "TestimonialsData",
    "TestimonialsSection",
    "TextData",
    "TextSection",
    "parse_section",
]
