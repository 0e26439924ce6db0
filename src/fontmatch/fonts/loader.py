"""
Font loader: opens a handle with fontTools.

Parsing, hinting and rasterization live outside this package; the loader only turns a
handle into a ``TTFont`` and reports failures as ``FontLoadError`` without
interpreting them.
"""

import io
import logging

from fontTools.ttLib import TTFont

from fontmatch.core.exceptions import FontLoadError

from .handle import Handle, MemoryHandle, PathHandle
from .utils import is_font_collection

logger = logging.getLogger(__name__)


def load_font(handle: Handle, lazy: bool | None = None) -> TTFont:
    """
    Load the face referenced by ``handle``.

    Args:
        handle: Path or memory handle
        lazy: Passed through to ``TTFont``

    Returns:
        The opened font

    Raises:
        FontLoadError: If the data is unreadable, malformed or the index is out of range
    """
    if not isinstance(handle, PathHandle | MemoryHandle):
        raise TypeError(f"Unsupported handle type: {type(handle).__name__}")

    try:
        if isinstance(handle, PathHandle):
            with handle.path.open("rb") as f:
                header = f.read(4)
            stream = str(handle.path)
        else:
            # The loader reads from its own stream; the handle's bytes are never touched
            header = handle.data[:4]
            stream = io.BytesIO(handle.data)

        # TTFont ignores fontNumber for single-face files
        if handle.font_index > 0 and not is_font_collection(header):
            raise FontLoadError(handle, "no such font in the collection")

        font = TTFont(stream, fontNumber=handle.font_index, lazy=lazy)
    except FontLoadError:
        raise
    except Exception as e:
        logger.debug(f"Failed to load {handle}: {e}")
        raise FontLoadError(handle, e) from e

    logger.debug(f"Loaded font {handle}")
    return font
