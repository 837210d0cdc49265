from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for everything persisted in the page-builder JSON document.

    Attributes are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def merged(self, updates: Mapping[str, Any]) -> "WireModel":
        """Return a validated copy with ``updates`` layered over the current fields.

        Keys may be given either as attribute names or as wire aliases.
        """
        payload = self.model_dump(by_alias=True)
        fields = type(self).model_fields
        for key, value in updates.items():
            field = fields.get(key)
            payload[field.alias or key if field else key] = value
        return type(self).model_validate(payload)


class DesignToken(str, Enum):
    white = "white"
    background = "background"
    primary_blue = "primary-blue"
    primary_red = "primary-red"
    primary_yellow = "primary-yellow"
    foreground = "foreground"
    muted = "muted"


class PaddingSize(str, Enum):
    none = "none"
    sm = "sm"
    md = "md"
    lg = "lg"


class LayoutWidth(str, Enum):
    full = "full"
    contained = "contained"
    narrow = "narrow"


class StylePreset(str, Enum):
    bauhaus = "bauhaus"
    modern = "modern"
    minimal = "minimal"
    warm = "warm"


BASELINE_STYLE_PRESET = StylePreset.bauhaus


class SectionStyle(WireModel):
    bg_color: DesignToken = DesignToken.white
    text_color: DesignToken = DesignToken.foreground
    padding: PaddingSize = PaddingSize.md
    layout: LayoutWidth = LayoutWidth.contained
    bg_image: str | None = None


class ColorScheme(WireModel):
    bg_color: DesignToken
    text_color: DesignToken


class NavLink(WireModel):
    id: str
    label: str
    label_ne: str = ""
    href: str
    open_in_new_tab: bool = False


class NavbarConfig(WireModel):
    logo: bool = True
    clinic_name: bool = True
    links: list[NavLink] = Field(default_factory=list)
    style: ColorScheme = Field(
        default_factory=lambda: ColorScheme(bg_color=DesignToken.white, text_color=DesignToken.foreground)
    )


class FooterConfig(WireModel):
    enabled: bool = True
    show_clinic_name: bool = True
    show_phone: bool = True
    show_email: bool = True
    show_address: bool = False
    copyright: str = ""
    copyright_ne: str = ""
    style: ColorScheme = Field(
        default_factory=lambda: ColorScheme(bg_color=DesignToken.foreground, text_color=DesignToken.white)
    )


__all__ = [
    "BASELINE_STYLE_PRESET",
    "ColorScheme",
    "DesignToken",
    "FooterConfig",
    "LayoutWidth",
    "NavLink",
    "NavbarConfig",
    "PaddingSize",
    "SectionStyle",
    "StylePreset",
    "WireModel",
]
