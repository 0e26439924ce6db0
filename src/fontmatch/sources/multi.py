"""
Multi Font Source
=================

Composes several sources in priority order. Lookups stop at the first source that has
the requested family or face; listings merge every source and drop duplicates.
"""

import logging
from collections.abc import Iterable

from fontmatch.core.exceptions import FamilyNotFoundError, PostscriptNameNotFoundError
from fontmatch.fonts.family_name import normalize_family_name
from fontmatch.fonts.handle import Handle
from fontmatch.fonts.models import FamilyEntry, FontMetadata
from fontmatch.fonts.properties import Properties

from .base import FamilyNames, Source, select_best_match, select_family_resolved, unique_faces

logger = logging.getLogger(__name__)


class MultiSource:
    """
    Source that fans queries out to child sources.

    The first child has the highest priority. A family found in a child is returned
    exactly as that child reported it; candidates are never merged across children.
    Only "not found" errors move a lookup on to the next child, anything else is
    raised immediately.

    Generic family names are resolved with ``generic_families`` when it is set;
    otherwise each child resolves them with its own overrides.
    """

    def __init__(
        self,
        sources: Iterable[Source],
        generic_families: dict[str, str] | None = None,
    ):
        self._sources = tuple(sources)
        self.generic_families = generic_families

    @classmethod
    def from_sources(cls, sources: Iterable[Source], **kwargs) -> "MultiSource":
        return cls(sources, **kwargs)

    @property
    def sources(self) -> tuple[Source, ...]:
        return self._sources

    def all_faces(self) -> list[FontMetadata]:
        """Faces from every child in priority order, each face listed once."""
        return unique_faces(face for source in self._sources for face in source.all_faces())

    def all_fonts(self) -> list[Handle]:
        return [face.handle for face in self.all_faces()]

    def all_families(self) -> list[str]:
        """Union of the children's families; the highest-priority spelling is kept."""
        families: dict[str, str] = {}
        for source in self._sources:
            for family_name in source.all_families():
                families.setdefault(normalize_family_name(family_name), family_name)
        return sorted(families.values(), key=str.casefold)

    def select_family_by_name(self, family_name: str) -> FamilyEntry:
        for source in self._sources:
            try:
                entry = source.select_family_by_name(family_name)
            except FamilyNotFoundError:
                continue
            logger.debug(f"Family {family_name!r} resolved by {source!r}")
            return entry
        raise FamilyNotFoundError(family_name)

    def _select_family_per_source(self, family_name: str) -> FamilyEntry:
        for source in self._sources:
            overrides = getattr(source, "generic_families", None)
            try:
                entry = select_family_resolved(source, family_name, overrides)
            except FamilyNotFoundError:
                continue
            logger.debug(f"Family {family_name!r} resolved by {source!r}")
            return entry
        raise FamilyNotFoundError(family_name)

    def select_best_match(
        self, family_names: FamilyNames, properties: Properties | None = None
    ) -> Handle:
        if self.generic_families is not None:
            return select_best_match(self, family_names, properties, self.generic_families)
        return select_best_match(
            self, family_names, properties, select_family=self._select_family_per_source
        )

    def select_by_postscript_name(self, postscript_name: str) -> Handle:
        for source in self._sources:
            try:
                return source.select_by_postscript_name(postscript_name)
            except PostscriptNameNotFoundError:
                continue
        raise PostscriptNameNotFoundError(postscript_name)

    def __repr__(self) -> str:
        return f"MultiSource({list(self._sources)!r})"
