"""
Memory Font Source
==================

Source holding a caller-supplied collection of fonts, either as handles to load or as
already described faces.
"""

import logging
from collections.abc import Iterable

from fontmatch.fonts.handle import Handle
from fontmatch.fonts.models import FamilyEntry, FontMetadata
from fontmatch.fonts.properties import Properties
from fontmatch.fonts.registry import FamilyRegistry
from fontmatch.fonts.utils import describe_font_data, describe_handle

from .base import (
    FamilyNames,
    find_by_postscript_name,
    select_best_match,
    unique_faces,
    unique_handles,
)

logger = logging.getLogger(__name__)


class MemSource:
    """
    Source backed by an in-memory list of faces.

    Adding fonts rebuilds the family registry; previously returned ``FamilyEntry``
    objects are left untouched.
    """

    def __init__(
        self,
        fonts: Iterable[FontMetadata] = (),
        generic_families: dict[str, str] | None = None,
    ):
        self._fonts: list[FontMetadata] = list(fonts)
        self.generic_families = generic_families
        self._registry = self._build_registry()

    @classmethod
    def empty(cls) -> "MemSource":
        return cls()

    @classmethod
    def from_metadata(cls, fonts: Iterable[FontMetadata], **kwargs) -> "MemSource":
        """Create a source from faces that are already described."""
        return cls(fonts, **kwargs)

    @classmethod
    def from_handles(cls, handles: Iterable[Handle], **kwargs) -> "MemSource":
        """
        Create a source from handles, reading each face's metadata.

        Raises:
            FontLoadError: If any handle cannot be parsed
        """
        return cls([describe_handle(handle) for handle in handles], **kwargs)

    @classmethod
    def from_bytes(cls, buffers: Iterable[bytes], **kwargs) -> "MemSource":
        """Create a source from raw font files; collections contribute every face."""
        fonts = []
        for data in buffers:
            fonts.extend(describe_font_data(data))
        return cls(fonts, **kwargs)

    def _build_registry(self) -> FamilyRegistry:
        snapshot = tuple(self._fonts)
        return FamilyRegistry(lambda: snapshot, name="MemSource")

    def add_font(self, handle: Handle) -> FontMetadata:
        """Describe and add a single face."""
        font = describe_handle(handle)
        self._fonts.append(font)
        self._registry = self._build_registry()
        logger.debug(f"Added font {font}")
        return font

    def add_fonts(self, handles: Iterable[Handle]) -> list[FontMetadata]:
        fonts = [describe_handle(handle) for handle in handles]
        self._fonts.extend(fonts)
        self._registry = self._build_registry()
        return fonts

    def add_bytes(self, data: bytes) -> list[FontMetadata]:
        """Add every face found in a raw font buffer."""
        fonts = describe_font_data(data)
        self._fonts.extend(fonts)
        self._registry = self._build_registry()
        return fonts

    @property
    def fonts(self) -> tuple[FontMetadata, ...]:
        return tuple(self._fonts)

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
        return f"MemSource({len(self._fonts)} fonts)"
