"""
DirectWrite Font Source
=======================

Source for the Windows system font collection. Installed fonts are read from the
machine and per-user font registry keys; each registered file is then described with
fontTools.
"""

import logging
import os
from pathlib import Path

from fontmatch.core.exceptions import FontLoadError, SourceAccessError
from fontmatch.fonts.handle import Handle
from fontmatch.fonts.models import FamilyEntry, FontMetadata
from fontmatch.fonts.properties import Properties
from fontmatch.fonts.registry import FamilyRegistry
from fontmatch.fonts.utils import describe_font_file

from .base import (
    FamilyNames,
    find_by_postscript_name,
    select_best_match,
    unique_faces,
    unique_handles,
)

# Only present on Windows
try:
    import winreg
except ImportError:
    winreg = None

logger = logging.getLogger(__name__)

FONTS_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts"


def windows_fonts_dir() -> Path:
    return Path(os.environ.get("WINDIR", "C:\\Windows")) / "Fonts"


def registered_font_files() -> list[Path]:
    """Font files registered for the machine and for the current user."""
    if winreg is None:
        raise SourceAccessError("DirectWrite", "winreg is not available on this platform")

    paths: list[Path] = []
    seen: set[str] = set()

    for hive in (winreg.HKEY_LOCAL_MACHINE, winreg.HKEY_CURRENT_USER):
        try:
            font_key = winreg.OpenKey(hive, FONTS_KEY)
        except OSError:
            # HKCU has no Fonts key until a per-user font is installed
            continue

        with font_key:
            index = 0
            while True:
                try:
                    _, value_data, _ = winreg.EnumValue(font_key, index)
                except OSError:
                    break
                index += 1

                font_path = Path(str(value_data))
                if not font_path.is_absolute():
                    font_path = windows_fonts_dir() / font_path

                key = str(font_path).lower()
                if key not in seen:
                    seen.add(key)
                    paths.append(font_path)

    return paths


class DirectWriteSource:
    """Source for fonts installed on Windows."""

    def __init__(
        self,
        compute_checksums: bool = False,
        generic_families: dict[str, str] | None = None,
    ):
        self.compute_checksums = compute_checksums
        self.generic_families = generic_families
        self._registry = FamilyRegistry(self._list_fonts, name="DirectWriteSource")

    def _list_fonts(self) -> list[FontMetadata]:
        fonts = []
        for font_path in registered_font_files():
            if not font_path.exists():
                logger.debug(f"Registered font file is missing: {font_path}")
                continue
            try:
                fonts.extend(describe_font_file(font_path, compute_checksum=self.compute_checksums))
            except FontLoadError as e:
                logger.debug(f"Failed to process font {font_path}: {e}")
        return fonts

    def all_fonts(self) -> list[Handle]:
        return unique_handles(self._registry.fonts)

    def all_faces(self) -> list[FontMetadata]:
        return unique_faces(self._registry.fonts)

    def all_families(self) -> list[str]:
        return self._registry.family_names()

    def select_family_by_name(self, family_name: str) -> FamilyEntry:
        return self._registry.select(family_name)

    def select_best_match(
        self, family_names: FamilyNames, properties: Properties | None = None
    ) -> Handle:
        return select_best_match(self, family_names, properties, self.generic_families)

    def select_by_postscript_name(self, postscript_name: str) -> Handle:
        return find_by_postscript_name(self._registry.families.values(), postscript_name)

    def __repr__(self) -> str:
        return "DirectWriteSource()"
