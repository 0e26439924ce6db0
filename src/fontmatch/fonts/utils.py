"""
Font Utilities
==============

Raw metadata extraction for font files and buffers. fontTools is the primary reader;
freetype-py is used for formats fontTools cannot parse (Type 1, some legacy files).
"""

import hashlib
import io
import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from fontmatch.core.exceptions import FontLoadError

from .handle import Handle, MemoryHandle, PathHandle
from .models import FontMetadata
from .properties import Properties, Style, Weight

logger = logging.getLogger(__name__)

COLLECTION_TAG = b"ttcf"

# fsSelection bits
FS_SELECTION_ITALIC = 1 << 0
FS_SELECTION_OBLIQUE = 1 << 9

# FreeType style_flags bits
FT_STYLE_FLAG_ITALIC = 1 << 0
FT_STYLE_FLAG_BOLD = 1 << 1

# name table IDs
NAME_FAMILY = 1
NAME_SUBFAMILY = 2
NAME_FULL_NAME = 4
NAME_POSTSCRIPT = 6
NAME_TYPOGRAPHIC_FAMILY = 16
NAME_TYPOGRAPHIC_SUBFAMILY = 17


def calculate_checksum(data: bytes) -> str:
    """Calculate the sha256 checksum of a font file's bytes."""
    return hashlib.sha256(data).hexdigest()


def is_font_collection(data: bytes) -> bool:
    return data[:4] == COLLECTION_TAG


def describe_font_file(
    font_path: str | Path, compute_checksum: bool = False
) -> list[FontMetadata]:
    """
    Describe every face in a font file.

    Args:
        font_path: Path to a font or font collection file
        compute_checksum: Record the sha256 of the file on each face

    Returns:
        One FontMetadata per face, in collection order

    Raises:
        FontLoadError: If the file cannot be read or parsed
    """
    font_path = Path(font_path)
    try:
        data = font_path.read_bytes()
    except OSError as e:
        raise FontLoadError(font_path, e) from e

    checksum = calculate_checksum(data) if compute_checksum else None
    return read_font_faces(
        data,
        lambda index: PathHandle(font_path, index),
        checksum=checksum,
        label=str(font_path),
    )


def describe_font_data(data: bytes) -> list[FontMetadata]:
    """Describe every face in an in-memory font buffer, one MemoryHandle per face."""
    data = bytes(data)
    checksum = calculate_checksum(data)
    return read_font_faces(
        data,
        lambda index: MemoryHandle(data, index),
        checksum=checksum,
        label=f"<memory {len(data)} bytes>",
    )


def describe_handle(handle: Handle, compute_checksum: bool = False) -> FontMetadata:
    """Describe the single face a handle refers to."""
    if isinstance(handle, PathHandle):
        faces = describe_font_file(handle.path, compute_checksum=compute_checksum)
    else:
        faces = read_font_faces(
            handle.data,
            lambda index: MemoryHandle(handle.data, index),
            checksum=handle.checksum,
            label=str(handle),
        )

    for face in faces:
        if face.font_index == handle.font_index:
            return replace(face, handle=handle)
    raise FontLoadError(handle, "no such font in the collection")


def read_font_faces(
    data: bytes,
    make_handle: Callable[[int], Handle],
    checksum: str | None = None,
    label: str = "<font>",
) -> list[FontMetadata]:
    """
    Read face metadata from raw font bytes.

    Args:
        data: Complete font or collection file contents
        make_handle: Builds the handle for a face index
        checksum: Optional checksum recorded on each face
        label: Name used in log and error messages

    Raises:
        FontLoadError: If neither fontTools nor FreeType can parse the data
    """
    try:
        return _read_faces_fonttools(data, make_handle, checksum)
    except Exception as e:
        logger.debug(f"fonttools failed for {label}: {e}")

    try:
        return _read_faces_freetype(data, make_handle, checksum)
    except Exception as e:
        logger.debug(f"freetype failed for {label}: {e}")
        raise FontLoadError(label, "unknown or malformed font format") from e


def _read_faces_fonttools(
    data: bytes, make_handle: Callable[[int], Handle], checksum: str | None
) -> list[FontMetadata]:
    """Get face info using the fonttools library."""
    from fontTools.ttLib import TTCollection, TTFont

    if is_font_collection(data):
        fonts = TTCollection(io.BytesIO(data), lazy=True).fonts
    else:
        fonts = [TTFont(io.BytesIO(data), lazy=True)]

    faces = []
    for index, font in enumerate(fonts):
        metadata = _describe_ttfont(font, make_handle(index), checksum)
        if metadata is not None:
            faces.append(metadata)
    return faces


def _describe_ttfont(font, handle: Handle, checksum: str | None) -> FontMetadata | None:
    name_table = font["name"] if "name" in font else None

    family = _get_font_name(name_table, NAME_TYPOGRAPHIC_FAMILY) or _get_font_name(
        name_table, NAME_FAMILY
    )
    if not family:
        logger.debug(f"Skipping face without a family name: {handle}")
        return None

    subfamily = _get_font_name(name_table, NAME_TYPOGRAPHIC_SUBFAMILY) or _get_font_name(
        name_table, NAME_SUBFAMILY
    )

    if "OS/2" in font:
        os2 = font["OS/2"]
        fs_selection = os2.fsSelection
        properties = Properties.from_os2(
            os2.usWeightClass,
            os2.usWidthClass,
            italic=bool(fs_selection & FS_SELECTION_ITALIC),
            oblique=os2.version >= 4 and bool(fs_selection & FS_SELECTION_OBLIQUE),
        )
    else:
        # Old Mac fonts have no OS/2 table
        properties = Properties.from_style_name(subfamily)

    return FontMetadata(
        handle=handle,
        family=family,
        properties=properties,
        postscript_name=_get_font_name(name_table, NAME_POSTSCRIPT),
        full_name=(
            _get_font_name(name_table, NAME_FULL_NAME) or f"{family} {subfamily or ''}".strip()
        ),
        checksum=checksum,
    )


def _get_font_name(name_table, name_id: int) -> str | None:
    """Extract font name from name table."""
    if name_table is None:
        return None

    # Prefer English (language ID 1033 for US English, 0 for Mac Roman English)
    for record in name_table.names:
        if record.nameID == name_id and record.langID in (1033, 0):
            value = record.toUnicode(errors="replace").strip()
            if value:
                return value

    # Fallback to any available name
    for record in name_table.names:
        if record.nameID == name_id:
            value = record.toUnicode(errors="replace").strip()
            if value:
                return value

    return None


def _read_faces_freetype(
    data: bytes, make_handle: Callable[[int], Handle], checksum: str | None
) -> list[FontMetadata]:
    """Get face info using the freetype library."""
    import freetype

    first = freetype.Face(io.BytesIO(data), 0)
    faces = []
    for index in range(max(first.num_faces, 1)):
        face = first if index == 0 else freetype.Face(io.BytesIO(data), index)

        family = face.family_name.decode("utf-8", "replace") if face.family_name else None
        if not family:
            continue
        style_name = face.style_name.decode("utf-8", "replace") if face.style_name else None
        postscript = (
            face.postscript_name.decode("utf-8", "replace") if face.postscript_name else None
        )

        properties = Properties.from_style_name(style_name)
        if face.style_flags & FT_STYLE_FLAG_ITALIC and properties.style == Style.NORMAL:
            properties = properties.with_style(Style.ITALIC)
        if face.style_flags & FT_STYLE_FLAG_BOLD and properties.weight == Weight.NORMAL:
            properties = properties.with_weight(Weight.BOLD)

        faces.append(
            FontMetadata(
                handle=make_handle(index),
                family=family,
                properties=properties,
                postscript_name=postscript,
                full_name=f"{family} {style_name or ''}".strip(),
                checksum=checksum,
            )
        )
    return faces
