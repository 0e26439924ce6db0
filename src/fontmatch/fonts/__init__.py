"""Font Data Model and Matching
===========================

Properties, handles, family entries and the CSS font matching procedure shared by
every font source.
"""

from .family_name import normalize_family_name, parse_family_list, resolve_family_name
from .handle import Handle, MemoryHandle, PathHandle
from .loader import load_font
from .matching import best_match, find_best_match
from .models import FamilyEntry, FontMetadata
from .properties import STRETCH_MAPPING, Properties, Stretch, Style, Weight
from .registry import FamilyRegistry
from .utils import describe_font_data, describe_font_file, describe_handle

__all__ = [
    "STRETCH_MAPPING",
    "FamilyEntry",
    "FamilyRegistry",
    "FontMetadata",
    "Handle",
    "MemoryHandle",
    "PathHandle",
    "Properties",
    "Stretch",
    "Style",
    "Weight",
    "best_match",
    "describe_font_data",
    "describe_font_file",
    "describe_handle",
    "find_best_match",
    "load_font",
    "normalize_family_name",
    "parse_family_list",
    "resolve_family_name",
]
