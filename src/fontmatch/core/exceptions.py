"""Custom exceptions for the font selection system."""

from typing import Any


class FontMatchError(Exception):
    """Base exception for all fontmatch errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SelectionError(FontMatchError):
    """Exception raised when a source cannot satisfy a lookup."""


class ConfigurationError(FontMatchError):
    """Exception raised for configuration errors."""


class FamilyNotFoundError(SelectionError):
    """Exception raised when no family matches the requested name."""

    def __init__(self, family_name: str):
        super().__init__(f"Font family not found: {family_name}")
        self.family_name = family_name


class PostscriptNameNotFoundError(SelectionError):
    """Exception raised when no face carries the requested PostScript name."""

    def __init__(self, postscript_name: str):
        super().__init__(f"No font with PostScript name: {postscript_name}")
        self.postscript_name = postscript_name


class NoCandidatesError(SelectionError):
    """Exception raised when matching is attempted on an empty candidate set."""

    def __init__(self, family_name: str | None = None):
        if family_name:
            message = f"Font family has no candidate fonts: {family_name}"
        else:
            message = "No candidate fonts to match against"
        super().__init__(message)
        self.family_name = family_name


class EnumerationUnsupportedError(SelectionError):
    """Exception raised by sources that cannot list their families."""

    def __init__(self, source_name: str):
        super().__init__(f"{source_name} does not support family enumeration")


class SourceAccessError(SelectionError):
    """Exception raised when a backing font catalog cannot be queried."""

    def __init__(self, source_name: str, reason: str):
        super().__init__(f"Failed to access {source_name}: {reason}", details=reason)
        self.source_name = source_name


class FontLoadError(FontMatchError):
    """Exception raised when the loader cannot open a font handle."""

    def __init__(self, handle: Any, reason: Any):
        super().__init__(f"Failed to load font {handle}: {reason}", details=reason)
        self.handle = handle


class InvalidFontIndexError(ValueError):
    """Exception raised for negative font indices."""

    def __init__(self, font_index: int):
        super().__init__(f"font_index must be >= 0, got {font_index}")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")
