"""
Font properties: style, weight and stretch.

Much of the vocabulary here follows CSS Fonts Level 3
(https://drafts.csswg.org/css-fonts-3/). Stretch is expressed as a fraction of the
normal width (1.0 == 100%), weight on the usual 1-1000 scale.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Style(str, Enum):
    """Allows italic or oblique faces to be selected."""

    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"

    def __str__(self) -> str:
        return self.value


class Weight:
    """Named font weights (100 thinnest, 400 normal, 900 thickest)."""

    THIN = 100.0
    EXTRA_LIGHT = 200.0
    LIGHT = 300.0
    NORMAL = 400.0
    MEDIUM = 500.0
    SEMIBOLD = 600.0
    BOLD = 700.0
    EXTRA_BOLD = 800.0
    BLACK = 900.0


class Stretch:
    """Named font widths as fractions of the normal width."""

    ULTRA_CONDENSED = 0.5
    EXTRA_CONDENSED = 0.625
    CONDENSED = 0.75
    SEMI_CONDENSED = 0.875
    NORMAL = 1.0
    SEMI_EXPANDED = 1.125
    EXPANDED = 1.25
    EXTRA_EXPANDED = 1.5
    ULTRA_EXPANDED = 2.0


# OS/2 usWidthClass 1..9 -> stretch
STRETCH_MAPPING = (
    Stretch.ULTRA_CONDENSED,
    Stretch.EXTRA_CONDENSED,
    Stretch.CONDENSED,
    Stretch.SEMI_CONDENSED,
    Stretch.NORMAL,
    Stretch.SEMI_EXPANDED,
    Stretch.EXPANDED,
    Stretch.EXTRA_EXPANDED,
    Stretch.ULTRA_EXPANDED,
)

# Longer keywords first so "semibold" is not read as "bold"
_WEIGHT_KEYWORDS = (
    ("hairline", 100.0),
    ("thin", 100.0),
    ("extralight", 200.0),
    ("ultralight", 200.0),
    ("semilight", 350.0),
    ("demilight", 350.0),
    ("light", 300.0),
    ("medium", 500.0),
    ("semibold", 600.0),
    ("demibold", 600.0),
    ("extrabold", 800.0),
    ("ultrabold", 800.0),
    ("bold", 700.0),
    ("extrablack", 950.0),
    ("ultrablack", 950.0),
    ("black", 900.0),
    ("heavy", 900.0),
)

_STRETCH_KEYWORDS = (
    ("ultracondensed", Stretch.ULTRA_CONDENSED),
    ("extracondensed", Stretch.EXTRA_CONDENSED),
    ("semicondensed", Stretch.SEMI_CONDENSED),
    ("condensed", Stretch.CONDENSED),
    ("narrow", Stretch.CONDENSED),
    ("ultraexpanded", Stretch.ULTRA_EXPANDED),
    ("extraexpanded", Stretch.EXTRA_EXPANDED),
    ("semiexpanded", Stretch.SEMI_EXPANDED),
    ("expanded", Stretch.EXPANDED),
    ("extended", Stretch.EXPANDED),
    ("wide", Stretch.EXPANDED),
)


class Properties(BaseModel):
    """Properties that pick a face within a family: style, weight and stretch.

    Used both for the actual attributes of a face and for the desired attributes of a
    query. Instances are immutable; the ``with_*`` helpers return modified copies::

        Properties().with_style(Style.ITALIC).with_weight(Weight.BOLD)
    """

    model_config = ConfigDict(frozen=True)

    style: Style = Field(Style.NORMAL, description="Font style")
    weight: float = Field(Weight.NORMAL, gt=0.0, description="Font weight (1-1000)")
    stretch: float = Field(Stretch.NORMAL, gt=0.0, description="Width, 1.0 is normal")

    def with_style(self, style: Style | str) -> "Properties":
        return self._replace(style=Style(style))

    def with_weight(self, weight: float) -> "Properties":
        return self._replace(weight=weight)

    def with_stretch(self, stretch: float) -> "Properties":
        return self._replace(stretch=stretch)

    def _replace(self, **changes) -> "Properties":
        # Re-validate rather than model_copy(), which skips validators
        return Properties(**{**self.model_dump(), **changes})

    @classmethod
    def from_os2(
        cls,
        weight_class: int | None,
        width_class: int | None,
        italic: bool = False,
        oblique: bool = False,
    ) -> "Properties":
        """Build properties from OS/2 table values.

        Args:
            weight_class: ``usWeightClass``; legacy 1-9 values are scaled by 100
            width_class: ``usWidthClass`` (1-9); anything else maps to normal
            italic: fsSelection ITALIC bit
            oblique: fsSelection OBLIQUE bit (OS/2 version 4+)
        """
        if not weight_class:
            weight = Weight.NORMAL
        elif weight_class < 10:
            weight = float(weight_class * 100)
        else:
            weight = float(weight_class)

        if width_class and 1 <= width_class <= len(STRETCH_MAPPING):
            stretch = STRETCH_MAPPING[width_class - 1]
        else:
            stretch = Stretch.NORMAL

        if oblique:
            style = Style.OBLIQUE
        elif italic:
            style = Style.ITALIC
        else:
            style = Style.NORMAL

        return cls(style=style, weight=weight, stretch=stretch)

    @classmethod
    def from_style_name(cls, style_name: str | None) -> "Properties":
        """Guess properties from a subfamily name such as ``"Bold Condensed Italic"``."""
        if not style_name:
            return cls()

        compact = re.sub(r"[\s_\-]+", "", style_name.lower())

        weight = Weight.NORMAL
        for keyword, value in _WEIGHT_KEYWORDS:
            if keyword in compact:
                weight = value
                break

        stretch = Stretch.NORMAL
        for keyword, value in _STRETCH_KEYWORDS:
            if keyword in compact:
                stretch = value
                break

        if "oblique" in compact or "slanted" in compact:
            style = Style.OBLIQUE
        elif "italic" in compact or "kursiv" in compact:
            style = Style.ITALIC
        else:
            style = Style.NORMAL

        return cls(style=style, weight=weight, stretch=stretch)

    def __str__(self) -> str:
        return f"{self.style} {self.weight:g} {self.stretch * 100:g}%"
