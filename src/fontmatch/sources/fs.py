"""
Filesystem Font Source
======================

Source for fonts found by walking directories. Handles detection of font files in
standard system locations or caller-supplied directories.
"""

import logging
import os
import platform
from collections.abc import Iterable
from pathlib import Path

from fontmatch.core.config import DEFAULT_FONT_EXTENSIONS
from fontmatch.core.exceptions import FontLoadError
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

logger = logging.getLogger(__name__)


def default_font_directories(system: str | None = None) -> list[Path]:
    """Get system font directories based on operating system."""
    system = (system or platform.system()).lower()
    directories = []

    if system == "windows":
        directories.extend(
            [
                Path(os.environ.get("WINDIR", "C:\\Windows")) / "Fonts",
                Path(os.environ.get("LOCALAPPDATA", "")) / "Microsoft" / "Windows" / "Fonts",
            ]
        )

    elif system == "darwin":  # macOS
        directories.extend(
            [
                Path("/System/Library/Fonts"),
                Path("/Library/Fonts"),
                Path("/Network/Library/Fonts"),
                Path.home() / "Library" / "Fonts",
            ]
        )

    elif system == "android":
        directories.append(Path("/system/fonts"))

    else:  # Linux and other Unix-like systems
        directories.extend(
            [
                Path("/usr/share/fonts"),
                Path("/usr/local/share/fonts"),
                Path.home() / ".fonts",
                Path.home() / ".local" / "share" / "fonts",
            ]
        )

    # Filter to existing directories
    return [d for d in directories if d.exists() and d.is_dir()]


class FsSource:
    """
    Source for font files under a set of directories.

    Directories are walked recursively on first use; every face of every readable font
    file is registered. Unreadable files are skipped.
    """

    def __init__(
        self,
        directories: Iterable[str | Path] | None = None,
        font_extensions: Iterable[str] | None = None,
        compute_checksums: bool = False,
        generic_families: dict[str, str] | None = None,
    ):
        """
        Initialize filesystem font source.

        Args:
            directories: Directories to scan; defaults to the platform font directories
            font_extensions: File suffixes treated as fonts
            compute_checksums: Record sha256 checksums for each file
            generic_families: Generic family overrides for ``select_best_match``
        """
        if directories is None:
            self.directories = default_font_directories()
        else:
            self.directories = [Path(d).expanduser() for d in directories]
        self.font_extensions = {
            ext.lower() for ext in (font_extensions or DEFAULT_FONT_EXTENSIONS)
        }
        self.compute_checksums = compute_checksums
        self.generic_families = generic_families
        self._registry = FamilyRegistry(self._scan, name="FsSource")

        logger.debug(f"FsSource directories: {self.directories}")

    def _scan(self) -> list[FontMetadata]:
        fonts = []
        for font_dir in self.directories:
            fonts.extend(self._scan_font_directory(font_dir))
        return fonts

    def _scan_font_directory(self, font_dir: Path) -> list[FontMetadata]:
        """Scan a font directory for font files."""
        if not font_dir.is_dir():
            logger.debug(f"Skipping missing font directory {font_dir}")
            return []

        try:
            font_files = sorted(
                p
                for p in font_dir.rglob("*")
                if p.suffix.lower() in self.font_extensions and p.is_file()
            )
        except PermissionError:
            logger.debug(f"Permission denied accessing {font_dir}")
            return []
        except OSError as e:
            logger.warning(f"Error scanning {font_dir}: {e}")
            return []

        fonts = []
        for font_file in font_files:
            try:
                fonts.extend(describe_font_file(font_file, compute_checksum=self.compute_checksums))
            except FontLoadError as e:
                logger.debug(f"Failed to process font {font_file}: {e}")
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
        return f"FsSource({[str(d) for d in self.directories]})"
