from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from .ids import generate_page_id
from .migrate import default_footer, default_navbar, make_home_page, utc_now_iso
from .models.document import CURRENT_VERSION, SiteDocument, SitePage
from .models.style import NavLink, StylePreset
from .section_defaults import (
    create_booking_section,
    create_contact_info_section,
    create_doctor_showcase_section,
    create_faq_section,
    create_hero_section,
    create_map_embed_section,
    create_opd_schedule_section,
    create_photo_gallery_section,
    create_services_grid_section,
    create_testimonials_section,
    create_text_section,
)


@dataclass(frozen=True)
class Template:
    id: str
    name: str
    name_ne: str
    description: str
    description_ne: str
    preview: str
    create_config: Callable[[], SiteDocument]


def _links(*rows: tuple[str, str, str]) -> list[NavLink]:
    return [
        NavLink(id=f"nav-{index}", label=label, label_ne=label_ne, href=href, open_in_new_tab=False)
        for index, (label, label_ne, href) in enumerate(rows, start=1)
    ]


def _about_section():
    about = create_text_section({"heading": "About Us", "heading_ne": "हाम्रो बारेमा"})
    about.anchor_id = "about"
    return about


def _document(
    *,
    template_id: str,
    style_preset: StylePreset,
    links: list[NavLink],
    pages: list[SitePage],
) -> SiteDocument:
    navbar = default_navbar()
    navbar.links = links
    return SiteDocument(
        version=CURRENT_VERSION,
        enabled=False,
        style_preset=style_preset,
        navbar=navbar,
        footer=default_footer(),
        pages=pages,
        template_id=template_id,
        updated_at=utc_now_iso(),
    )


def create_classic_config() -> SiteDocument:
    home = make_home_page(
        [
            create_hero_section(),
            _about_section(),
            create_services_grid_section(),
            create_doctor_showcase_section(),
            create_booking_section(),
            create_contact_info_section(),
        ]
    )
    return _document(
        template_id="classic",
        style_preset=StylePreset.bauhaus,
        links=_links(
            ("About", "बारेमा", "#about"),
            ("Services", "सेवा", "#services"),
            ("Doctors", "डाक्टर", "#doctors"),
            ("Book", "बुक", "#booking"),
            ("Contact", "सम्पर्क", "#contact"),
        ),
        pages=[home],
    )


def create_minimal_config() -> SiteDocument:
    home = make_home_page(
        [
            create_hero_section(),
            create_contact_info_section(),
            create_booking_section(),
        ]
    )
    return _document(
        template_id="minimal",
        style_preset=StylePreset.minimal,
        links=_links(
            ("Contact", "सम्पर्क", "#contact"),
            ("Book", "बुक", "#booking"),
        ),
        pages=[home],
    )


def create_full_config() -> SiteDocument:
    home = make_home_page(
        [
            create_hero_section(),
            create_services_grid_section(),
            create_doctor_showcase_section(),
            create_booking_section(),
            create_opd_schedule_section(),
            create_testimonials_section(),
            create_map_embed_section(),
            create_contact_info_section(),
        ]
    )
    about = SitePage(
        id=generate_page_id(),
        slug="about",
        title="About",
        title_ne="बारेमा",
        sections=[_about_section(), create_faq_section()],
    )
    gallery = SitePage(
        id=generate_page_id(),
        slug="gallery",
        title="Gallery",
        title_ne="ग्यालेरी",
        sections=[create_photo_gallery_section()],
    )
    return _document(
        template_id="full",
        style_preset=StylePreset.modern,
        links=_links(
            ("Home", "गृह", "#"),
            ("About", "बारेमा", "about"),
            ("Gallery", "ग्यालेरी", "gallery"),
            ("Services", "सेवा", "#services"),
            ("Book", "बुक", "#booking"),
            ("Contact", "सम्पर्क", "#contact"),
        ),
        pages=[home, about, gallery],
    )


TEMPLATES: Sequence[Template] = (
    Template(
        id="classic",
        name="Classic Clinic",
        name_ne="क्लासिक क्लिनिक",
        description="Hero, About, Services, Doctors, Booking, Contact",
        description_ne="हिरो, बारेमा, सेवा, डाक्टर, बुकिंग, सम्पर्क",
        preview="classic",
        create_config=create_classic_config,
    ),
    Template(
        id="minimal",
        name="Minimal",
        name_ne="न्यूनतम",
        description="Hero, Contact, Booking - simple and clean",
        description_ne="हिरो, सम्पर्क, बुकिंग - सरल र सफा",
        preview="minimal",
        create_config=create_minimal_config,
    ),
    Template(
        id="full",
        name="Complete Showcase",
        name_ne="पूर्ण प्रदर्शनी",
        description="Multi-page - Home, About, Gallery, FAQ",
        description_ne="बहु-पृष्ठ - गृह, बारेमा, ग्यालेरी, FAQ",
        preview="full",
        create_config=create_full_config,
    ),
)


def get_template(template_id: str) -> Template | None:
    return next((template for template in TEMPLATES if template.id == template_id), None)


__all__ = [
    "TEMPLATES",
    "Template",
    "create_classic_config",
    "create_full_config",
    "create_minimal_config",
    "get_template",
]
