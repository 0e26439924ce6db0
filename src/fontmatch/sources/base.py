"""
Source contract
===============

Every font catalog (platform APIs, directories, in-memory collections and the
composing ``MultiSource``) exposes the same operations. Backends are independent leaf
classes; the two operations defined in terms of the others live here as functions so
no backend needs a shared base class.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol, runtime_checkable

from fontmatch.core.exceptions import (
    FamilyNotFoundError,
    NoCandidatesError,
    PostscriptNameNotFoundError,
)
from fontmatch.fonts.family_name import resolve_family_name
from fontmatch.fonts.handle import Handle
from fontmatch.fonts.matching import best_match
from fontmatch.fonts.models import FamilyEntry, FontMetadata
from fontmatch.fonts.properties import Properties

logger = logging.getLogger(__name__)

FamilyNames = str | Sequence[str]


@runtime_checkable
class Source(Protocol):
    """A queryable catalog of font families."""

    def all_fonts(self) -> list[Handle]:
        """Handles of every face in the catalog."""
        ...

    def all_faces(self) -> list[FontMetadata]:
        """Metadata of every face in the catalog, each face listed once."""
        ...

    def all_families(self) -> list[str]:
        """Names of every family in the catalog, sorted and without duplicates."""
        ...

    def select_family_by_name(self, family_name: str) -> FamilyEntry:
        """Look up a family; raises ``FamilyNotFoundError``."""
        ...

    def select_best_match(
        self, family_names: FamilyNames, properties: Properties | None = None
    ) -> Handle:
        """Best face of the first listed family present in the catalog."""
        ...

    def select_by_postscript_name(self, postscript_name: str) -> Handle:
        """Face with an exact PostScript name; raises ``PostscriptNameNotFoundError``."""
        ...


def as_family_list(family_names: FamilyNames) -> list[str]:
    if isinstance(family_names, str):
        return [family_names]
    return list(family_names)


def select_family_resolved(
    source: Source, family_name: str, generic_families: dict[str, str] | None = None
) -> FamilyEntry:
    """Look up ``family_name`` in ``source`` after resolving generic names."""
    return source.select_family_by_name(resolve_family_name(family_name, generic_families))


def select_best_match(
    source: Source,
    family_names: FamilyNames,
    properties: Properties | None = None,
    generic_families: dict[str, str] | None = None,
    select_family: Callable[[str], FamilyEntry] | None = None,
) -> Handle:
    """
    Select the best face of the first family in ``family_names`` that ``source`` has.

    Only a missing family moves on to the next name; a family that exists but has no
    faces is a backend integrity failure and is raised as ``NoCandidatesError``.

    Args:
        source: Source queried through ``select_family_by_name``
        family_names: One family name or names in preference order; generic names
            (``"serif"``, ``"monospace"``, ...) are resolved first
        properties: Desired properties, defaults to normal/400/100%
        generic_families: Generic family overrides
        select_family: Lookup taking a requested name, used instead of resolving it
            with ``generic_families`` and calling ``source.select_family_by_name``

    Raises:
        FamilyNotFoundError: If none of the families exist
        NoCandidatesError: If the first family found has no faces
    """
    properties = properties or Properties()
    names = as_family_list(family_names)

    lookup = select_family or (
        lambda name: select_family_resolved(source, name, generic_families)
    )

    for name in names:
        try:
            entry = lookup(name)
        except FamilyNotFoundError:
            logger.debug(f"Family {name!r} not found, trying next")
            continue

        if entry.is_empty:
            raise NoCandidatesError(entry.family_name)
        return best_match(properties, entry.candidates)

    raise FamilyNotFoundError(", ".join(names))


def find_by_postscript_name(families: Iterable[FamilyEntry], postscript_name: str) -> Handle:
    """Linear, case-sensitive scan of every face for ``postscript_name``."""
    for entry in families:
        for font in entry.fonts:
            if font.postscript_name == postscript_name:
                return font.handle
    raise PostscriptNameNotFoundError(postscript_name)


def unique_faces(fonts: Iterable[FontMetadata]) -> list[FontMetadata]:
    """
    Faces of ``fonts`` in order, dropping repeats of the same face.

    A face is a repeat when it shares any identity (PostScript name, checksum or
    handle, each with the face index) with a face kept earlier, so a file copied into
    two directories or also loaded into memory is kept once.
    """
    seen = set()
    faces = []
    for font in fonts:
        keys = font.identity_keys
        if seen.intersection(keys):
            continue
        seen.update(keys)
        faces.append(font)
    return faces


def unique_handles(fonts: Iterable[FontMetadata]) -> list[Handle]:
    """Handles of ``fonts`` in order, dropping repeats of the same face."""
    return [font.handle for font in unique_faces(fonts)]
