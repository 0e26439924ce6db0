"""
Font handles: unresolved references to a single face.

A handle is either a path plus an index into a font collection file, or an in-memory
byte buffer plus index. Handles are cheap values; opening one is the loader's job.
"""

import hashlib
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Union

from fontmatch.core.exceptions import InvalidFontIndexError

if TYPE_CHECKING:
    from fontTools.ttLib import TTFont


@dataclass(frozen=True)
class PathHandle:
    """A face stored in a file on disk."""

    path: Path
    font_index: int = 0

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))
        if self.font_index < 0:
            raise InvalidFontIndexError(self.font_index)

    @cached_property
    def identity(self) -> tuple[str, str, int]:
        """Identity used to recognise the same face reached through different sources."""
        try:
            resolved = self.path.resolve()
        except OSError:
            resolved = self.path.absolute()
        return ("path", str(resolved), self.font_index)

    def load(self) -> "TTFont":
        from .loader import load_font

        return load_font(self)

    def __str__(self) -> str:
        return f"{self.path}#{self.font_index}"


@dataclass(frozen=True)
class MemoryHandle:
    """A face held in an in-memory buffer.

    The buffer is copied into immutable ``bytes`` on construction, so the handle owns it
    exclusively and nothing downstream can mutate it.
    """

    data: bytes = field(repr=False)
    font_index: int = 0

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        if self.font_index < 0:
            raise InvalidFontIndexError(self.font_index)

    @cached_property
    def checksum(self) -> str:
        return hashlib.sha256(self.data).hexdigest()

    @property
    def identity(self) -> tuple[str, str, int]:
        return ("sha256", self.checksum, self.font_index)

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    def load(self) -> "TTFont":
        from .loader import load_font

        return load_font(self)

    def __str__(self) -> str:
        return f"<memory {self.size_bytes} bytes>#{self.font_index}"


Handle = Union[PathHandle, MemoryHandle]
