"""
Font data models and types.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .family_name import normalize_family_name
from .handle import Handle, PathHandle
from .properties import Properties


@dataclass(frozen=True)
class FontMetadata:
    """One face as reported by a source backend."""

    handle: Handle
    family: str
    properties: Properties = field(default_factory=Properties)
    postscript_name: str | None = None
    full_name: str | None = None
    checksum: str | None = None

    @property
    def font_index(self) -> int:
        return self.handle.font_index

    @property
    def path(self) -> Path | None:
        return self.handle.path if isinstance(self.handle, PathHandle) else None

    @property
    def filename(self) -> str | None:
        """Get the font filename."""
        return self.path.name if self.path else None

    @property
    def identity(self) -> tuple:
        """Identity used to deduplicate the same face reported by several sources."""
        if self.postscript_name:
            return ("postscript", self.postscript_name, self.font_index)
        if self.checksum:
            return ("sha256", self.checksum, self.font_index)
        return self.handle.identity

    @property
    def identity_keys(self) -> tuple[tuple, ...]:
        """Every identity the face is known by; faces sharing any key are the same face."""
        keys = [self.handle.identity]
        if self.postscript_name:
            keys.append(("postscript", self.postscript_name, self.font_index))
        if self.checksum:
            # matches MemoryHandle.identity for the same bytes
            keys.append(("sha256", self.checksum, self.font_index))
        return tuple(keys)

    def __str__(self) -> str:
        name = self.full_name or self.postscript_name or self.family
        return f"{self.family} {self.properties} ({name})"


@dataclass(frozen=True)
class FamilyEntry:
    """A named family as reported by one source, with its faces in source order."""

    family_name: str
    fonts: tuple[FontMetadata, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "fonts", tuple(self.fonts))

    @property
    def normalized_name(self) -> str:
        return normalize_family_name(self.family_name)

    @property
    def candidates(self) -> list[tuple[Handle, Properties]]:
        """The ``(handle, properties)`` pairs fed to the matcher."""
        return [(font.handle, font.properties) for font in self.fonts]

    @property
    def handles(self) -> list[Handle]:
        return [font.handle for font in self.fonts]

    @property
    def is_empty(self) -> bool:
        return not self.fonts

    def __len__(self) -> int:
        return len(self.fonts)

    def __iter__(self):
        return iter(self.fonts)
