"""Core components for font selection."""

from .config import FontMatchConfig, load_config_from_yaml
from .exceptions import (
    ConfigurationError,
    EnumerationUnsupportedError,
    FamilyNotFoundError,
    FontLoadError,
    FontMatchError,
    NoCandidatesError,
    PostscriptNameNotFoundError,
    SelectionError,
    SourceAccessError,
)

__all__ = [
    "ConfigurationError",
    "EnumerationUnsupportedError",
    "FamilyNotFoundError",
    "FontLoadError",
    "FontMatchConfig",
    "FontMatchError",
    "NoCandidatesError",
    "PostscriptNameNotFoundError",
    "SelectionError",
    "SourceAccessError",
    "load_config_from_yaml",
]
