"""
Core Text Font Source
=====================

Source for the macOS font catalog, read from ``system_profiler SPFontsDataType``.
"""

import json
import logging
import shutil
import subprocess
from typing import Any

from fontmatch.core.exceptions import SourceAccessError
from fontmatch.fonts.handle import Handle, PathHandle
from fontmatch.fonts.models import FamilyEntry, FontMetadata
from fontmatch.fonts.properties import Properties
from fontmatch.fonts.registry import FamilyRegistry

from .base import (
    FamilyNames,
    find_by_postscript_name,
    select_best_match,
    unique_faces,
    unique_handles,
)

logger = logging.getLogger(__name__)


def parse_system_profiler_fonts(report: dict[str, Any]) -> list[FontMetadata]:
    """
    Convert a ``system_profiler SPFontsDataType -json`` report into faces.

    Each font file lists its typefaces in collection order; a typeface's position is
    used as its face index.
    """
    fonts = []
    for item in report.get("SPFontsDataType", []):
        path = item.get("path")
        if not path:
            continue

        for index, typeface in enumerate(item.get("typefaces", [])):
            if typeface.get("enabled", "yes") == "no":
                continue

            family = typeface.get("family")
            if not family:
                continue

            fonts.append(
                FontMetadata(
                    handle=PathHandle(path, index),
                    family=family,
                    properties=Properties.from_style_name(typeface.get("style")),
                    postscript_name=typeface.get("_name"),
                    full_name=typeface.get("fullname"),
                )
            )

    fonts.sort(key=lambda f: (f.family.casefold(), str(f.handle.path), f.font_index))
    return fonts


class CoreTextSource:
    """Source for fonts installed on macOS."""

    def __init__(
        self,
        timeout: float = 30.0,
        generic_families: dict[str, str] | None = None,
    ):
        self.timeout = timeout
        self.generic_families = generic_families
        self._registry = FamilyRegistry(self._list_fonts, name="CoreTextSource")

    def _list_fonts(self) -> list[FontMetadata]:
        system_profiler_path = shutil.which("system_profiler")
        if not system_profiler_path:
            raise SourceAccessError("Core Text", "system_profiler not found in PATH")

        try:
            result = subprocess.run(
                [system_profiler_path, "SPFontsDataType", "-json"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise SourceAccessError("Core Text", str(e)) from e

        if result.returncode != 0:
            raise SourceAccessError(
                "Core Text", f"system_profiler exited with {result.returncode}"
            )

        try:
            report = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise SourceAccessError("Core Text", f"invalid system_profiler output: {e}") from e

        return parse_system_profiler_fonts(report)

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
        return "CoreTextSource()"
