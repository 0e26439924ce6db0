"""
Fontconfig Font Source
======================

Source for the fonts known to fontconfig, queried through ``fc-list``.
"""

import logging
import re
import shutil
import subprocess

from fontmatch.core.exceptions import FamilyNotFoundError, SourceAccessError
from fontmatch.fonts.family_name import is_generic_family, normalize_family_name
from fontmatch.fonts.handle import Handle, PathHandle
from fontmatch.fonts.models import FamilyEntry, FontMetadata
from fontmatch.fonts.properties import Properties, Style
from fontmatch.fonts.registry import FamilyRegistry

from .base import (
    FamilyNames,
    find_by_postscript_name,
    select_best_match,
    unique_faces,
    unique_handles,
)

logger = logging.getLogger(__name__)

FC_LIST_FIELDS = ("family[0]", "postscriptname", "file", "index", "slant", "weight", "width")
FC_LIST_FORMAT = "\t".join(f"%{{{field}}}" for field in FC_LIST_FIELDS) + "\n"

FC_SLANT_ROMAN = 0
FC_SLANT_ITALIC = 100
FC_SLANT_OBLIQUE = 110
FC_WEIGHT_REGULAR = 80
FC_WIDTH_NORMAL = 100

# (fontconfig weight, CSS weight); values in between are interpolated
FC_WEIGHT_MAP = (
    (0, 100),
    (40, 200),
    (50, 300),
    (55, 350),
    (75, 380),
    (80, 400),
    (100, 500),
    (180, 600),
    (200, 700),
    (205, 800),
    (210, 900),
    (215, 1000),
)

_RANGE_RE = re.compile(r"^\[\s*([-\d.]+)\s+([-\d.]+)\s*\]$")


def fc_weight_to_css(fc_weight: float) -> float:
    """Convert a fontconfig weight (0-215) to a CSS weight (100-1000)."""
    if fc_weight <= FC_WEIGHT_MAP[0][0]:
        return float(FC_WEIGHT_MAP[0][1])
    for (fc_lo, css_lo), (fc_hi, css_hi) in zip(FC_WEIGHT_MAP, FC_WEIGHT_MAP[1:]):
        if fc_weight <= fc_hi:
            return css_lo + (fc_weight - fc_lo) * (css_hi - css_lo) / (fc_hi - fc_lo)
    return float(FC_WEIGHT_MAP[-1][1])


def fc_slant_to_style(fc_slant: float) -> Style:
    if fc_slant >= FC_SLANT_OBLIQUE:
        return Style.OBLIQUE
    if fc_slant >= FC_SLANT_ITALIC:
        return Style.ITALIC
    return Style.NORMAL


def parse_fc_value(value: str, default: float) -> float:
    """
    Parse a numeric fc-list value.

    Variable faces report ranges such as ``[0 210]``; those resolve to ``default``
    clamped into the range.
    """
    value = value.strip()
    if not value:
        return float(default)

    match = _RANGE_RE.match(value)
    if match:
        low, high = float(match.group(1)), float(match.group(2))
        return min(max(float(default), low), high)

    return float(value)


def parse_fc_list_output(output: str) -> list[FontMetadata]:
    """Parse ``fc-list`` output produced with ``FC_LIST_FORMAT``."""
    fonts = []
    for line in output.splitlines():
        fields = line.split("\t")
        if len(fields) != len(FC_LIST_FIELDS):
            if line.strip():
                logger.debug(f"Skipping malformed fc-list line: {line!r}")
            continue

        family, postscript_name, path, index, slant, weight, width = fields
        if not family or not path:
            continue

        try:
            font_index = int(index or 0)
            if font_index >> 16:
                # Named instance of a variable font; the default face covers it
                continue

            properties = Properties(
                style=fc_slant_to_style(parse_fc_value(slant, FC_SLANT_ROMAN)),
                weight=fc_weight_to_css(parse_fc_value(weight, FC_WEIGHT_REGULAR)),
                stretch=parse_fc_value(width, FC_WIDTH_NORMAL) / 100.0,
            )
        except ValueError as e:
            logger.debug(f"Skipping fc-list entry with bad values {line!r}: {e}")
            continue

        fonts.append(
            FontMetadata(
                handle=PathHandle(path, font_index),
                family=family,
                properties=properties,
                postscript_name=postscript_name or None,
            )
        )

    # fc-list order is unspecified
    fonts.sort(key=lambda f: (f.family.casefold(), str(f.handle.path), f.font_index))
    return fonts


class FontconfigSource:
    """
    Source for the fontconfig font catalog.

    The catalog is listed once, on first use, with a single ``fc-list`` call.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        generic_families: dict[str, str] | None = None,
    ):
        self.timeout = timeout
        self.generic_families = generic_families
        self._registry = FamilyRegistry(self._list_fonts, name="FontconfigSource")

    @staticmethod
    def is_available() -> bool:
        return shutil.which("fc-list") is not None

    def _list_fonts(self) -> list[FontMetadata]:
        fc_list_path = shutil.which("fc-list")
        if not fc_list_path:
            raise SourceAccessError("fontconfig", "fc-list not found in PATH")

        try:
            result = subprocess.run(
                [fc_list_path, "--format", FC_LIST_FORMAT],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise SourceAccessError("fontconfig", str(e)) from e

        if result.returncode != 0:
            raise SourceAccessError(
                "fontconfig", f"fc-list exited with {result.returncode}: {result.stderr.strip()}"
            )

        return parse_fc_list_output(result.stdout)

    def _match_generic_family(self, generic_name: str) -> str | None:
        """Family fontconfig substitutes for a generic name such as ``"serif"``."""
        fc_match_path = shutil.which("fc-match")
        if not fc_match_path:
            return None

        try:
            result = subprocess.run(
                [fc_match_path, "--format", "%{family[0]}", generic_name],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise SourceAccessError("fontconfig", str(e)) from e

        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def all_fonts(self) -> list[Handle]:
        return unique_handles(self._registry.fonts)

    def all_faces(self) -> list[FontMetadata]:
        return unique_faces(self._registry.fonts)

    def all_families(self) -> list[str]:
        return self._registry.family_names()

    def select_family_by_name(self, family_name: str) -> FamilyEntry:
        entry = self._registry.get(family_name)
        if entry is None and is_generic_family(family_name):
            substitute = self._match_generic_family(normalize_family_name(family_name))
            if substitute:
                logger.debug(f"fontconfig substitutes {substitute!r} for {family_name!r}")
                entry = self._registry.get(substitute)
        if entry is None:
            raise FamilyNotFoundError(family_name)
        return entry

    def select_best_match(
        self, family_names: FamilyNames, properties: Properties | None = None
    ) -> Handle:
        return select_best_match(self, family_names, properties, self.generic_families)

    def select_by_postscript_name(self, postscript_name: str) -> Handle:
        return find_by_postscript_name(self._registry.families.values(), postscript_name)

    def __repr__(self) -> str:
        return "FontconfigSource()"
