"""Font Matching
=============

Font discovery across platform catalogs, font directories and in-memory fonts, with
CSS Fonts Level 3 matching to pick the best face of a family.
"""

__version__ = "1.0.0"
__author__ = "fontmatch developers"

from .core.config import FontMatchConfig
from .core.exceptions import (
    FamilyNotFoundError,
    FontLoadError,
    FontMatchError,
    NoCandidatesError,
    PostscriptNameNotFoundError,
    SelectionError,
)
from .fonts import (
    FamilyEntry,
    FontMetadata,
    Handle,
    MemoryHandle,
    PathHandle,
    Properties,
    Stretch,
    Style,
    Weight,
    find_best_match,
)
from .selection import FontSelector
from .sources import FsSource, MemSource, MultiSource, SystemSource

__all__ = [
    "FamilyEntry",
    "FamilyNotFoundError",
    "FontLoadError",
    "FontMatchConfig",
    "FontMatchError",
    "FontMetadata",
    "FontSelector",
    "FsSource",
    "Handle",
    "MemSource",
    "MemoryHandle",
    "MultiSource",
    "NoCandidatesError",
    "PathHandle",
    "PostscriptNameNotFoundError",
    "Properties",
    "SelectionError",
    "Stretch",
    "Style",
    "SystemSource",
    "Weight",
    "find_best_match",
]
