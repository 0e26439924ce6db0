"""Font Sources
============

Backends that enumerate font families: platform catalogs (Core Text, DirectWrite,
fontconfig), directories, in-memory collections, and the composing MultiSource.
"""

from .base import Source, find_by_postscript_name, select_best_match
from .core_text import CoreTextSource
from .directwrite import DirectWriteSource
from .fontconfig import FontconfigSource
from .fs import FsSource, default_font_directories
from .mem import MemSource
from .multi import MultiSource
from .system import SystemSource

__all__ = [
    "CoreTextSource",
    "DirectWriteSource",
    "FontconfigSource",
    "FsSource",
    "MemSource",
    "MultiSource",
    "Source",
    "SystemSource",
    "default_font_directories",
    "find_by_postscript_name",
    "select_best_match",
]
