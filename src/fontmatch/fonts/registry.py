"""
Family Registry
===============

Per-source cache mapping normalized family names to ``FamilyEntry`` objects. The
registry is populated on first use from the source's enumeration callable and then
served without locking; population itself runs under a single-writer lock.
"""

import logging
import threading
from collections.abc import Callable, Iterable

from fontmatch.core.exceptions import FamilyNotFoundError

from .family_name import normalize_family_name
from .models import FamilyEntry, FontMetadata

logger = logging.getLogger(__name__)


def group_by_family(fonts: Iterable[FontMetadata]) -> dict[str, FamilyEntry]:
    """Group faces into families, keeping enumeration order within each family.

    The first spelling seen for a family becomes its display name.
    """
    display_names: dict[str, str] = {}
    members: dict[str, list[FontMetadata]] = {}

    for font in fonts:
        key = normalize_family_name(font.family)
        if key not in members:
            display_names[key] = font.family
            members[key] = []
        members[key].append(font)

    return {
        key: FamilyEntry(family_name=display_names[key], fonts=tuple(faces))
        for key, faces in members.items()
    }


class FamilyRegistry:
    """
    Lazily populated family cache for one source.

    Args:
        loader: Returns every face the source knows about; called at most once
        name: Label used in log messages
    """

    def __init__(self, loader: Callable[[], Iterable[FontMetadata]], name: str = "source"):
        self._loader = loader
        self._name = name
        self._lock = threading.Lock()
        self._families: dict[str, FamilyEntry] | None = None
        self._fonts: tuple[FontMetadata, ...] = ()

    @property
    def is_populated(self) -> bool:
        return self._families is not None

    def _populate(self) -> dict[str, FamilyEntry]:
        families = self._families
        if families is not None:
            return families

        with self._lock:
            if self._families is None:
                fonts = tuple(self._loader())
                families = group_by_family(fonts)
                self._fonts = fonts
                # Publish last so lock-free readers never see a half-built registry
                self._families = families
                logger.info(
                    f"{self._name}: registered {len(fonts)} fonts in {len(families)} families"
                )
            return self._families

    @property
    def families(self) -> dict[str, FamilyEntry]:
        return self._populate()

    @property
    def fonts(self) -> tuple[FontMetadata, ...]:
        self._populate()
        return self._fonts

    def family_names(self) -> list[str]:
        """Display names of all families, sorted case-insensitively."""
        entries = self._populate().values()
        return sorted((entry.family_name for entry in entries), key=str.casefold)

    def get(self, family_name: str) -> FamilyEntry | None:
        return self._populate().get(normalize_family_name(family_name))

    def select(self, family_name: str) -> FamilyEntry:
        entry = self.get(family_name)
        if entry is None:
            raise FamilyNotFoundError(family_name)
        return entry

    def __contains__(self, family_name: str) -> bool:
        return self.get(family_name) is not None

    def __len__(self) -> int:
        return len(self._populate())
