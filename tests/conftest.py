"""
Pytest configuration and fixtures for font selection tests.

Test fonts are generated with fontTools' FontBuilder so tests never depend on the fonts
installed on the machine.
"""

import io
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTCollection, TTFont

from fontmatch.fonts import FontMetadata, PathHandle, Properties, Style

FS_SELECTION_ITALIC = 1 << 0
FS_SELECTION_BOLD = 1 << 5
FS_SELECTION_REGULAR = 1 << 6
FS_SELECTION_OBLIQUE = 1 << 9


def build_font(
    family: str,
    style_name: str = "Regular",
    postscript_name: str | None = None,
    weight: int = 400,
    width_class: int = 5,
    italic: bool = False,
    oblique: bool = False,
) -> bytes:
    """Build a minimal TrueType font with the given names and OS/2 values."""
    postscript_name = postscript_name or f"{family}-{style_name}".replace(" ", "")

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A"])
    fb.setupCharacterMap({ord("A"): "A"})

    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((300, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    fb.setupGlyf({".notdef": TTGlyphPen(None).glyph(), "A": pen.glyph()})

    fb.setupHorizontalMetrics({".notdef": (500, 0), "A": (600, 100)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable(
        {
            "familyName": family,
            "styleName": style_name,
            "psName": postscript_name,
            "fullName": f"{family} {style_name}",
        }
    )

    fs_selection = 0
    if italic:
        fs_selection |= FS_SELECTION_ITALIC
    if oblique:
        fs_selection |= FS_SELECTION_OBLIQUE
    if weight >= 700:
        fs_selection |= FS_SELECTION_BOLD
    if not fs_selection:
        fs_selection = FS_SELECTION_REGULAR

    fb.setupOS2(
        version=4,
        usWeightClass=weight,
        usWidthClass=width_class,
        fsSelection=fs_selection,
        sTypoAscender=800,
        sTypoDescender=-200,
        usWinAscent=800,
        usWinDescent=200,
    )
    fb.setupPost()

    buffer = io.BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


def build_collection(*fonts: bytes) -> bytes:
    """Pack several font buffers into one TrueType collection."""
    collection = TTCollection()
    collection.fonts = [TTFont(io.BytesIO(data)) for data in fonts]
    buffer = io.BytesIO()
    collection.save(buffer)
    return buffer.getvalue()


def write_font(directory: Path, filename: str, data: bytes) -> Path:
    path = directory / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def make_font():
    """Factory building font bytes, see ``build_font``."""
    return build_font


@pytest.fixture
def make_collection():
    """Factory packing font bytes into a collection, see ``build_collection``."""
    return build_collection


@pytest.fixture
def regular_font_bytes():
    """A single regular face of "Test Sans"."""
    return build_font("Test Sans", "Regular", "TestSans-Regular")


@pytest.fixture
def font_dir(tmp_path):
    """
    Directory with two families.

    "Test Sans" has regular, bold, italic, bold italic and condensed faces; "Test Serif"
    has only a regular face and lives in a subdirectory.
    """
    fonts_dir = tmp_path / "fonts"
    write_font(fonts_dir, "TestSans-Regular.ttf", build_font("Test Sans", "Regular"))
    write_font(fonts_dir, "TestSans-Bold.ttf", build_font("Test Sans", "Bold", weight=700))
    write_font(
        fonts_dir, "TestSans-Italic.ttf", build_font("Test Sans", "Italic", italic=True)
    )
    write_font(
        fonts_dir,
        "TestSans-BoldItalic.ttf",
        build_font("Test Sans", "Bold Italic", weight=700, italic=True),
    )
    write_font(
        fonts_dir,
        "TestSans-Condensed.ttf",
        build_font("Test Sans", "Condensed", width_class=3),
    )
    write_font(fonts_dir / "serif", "TestSerif-Regular.ttf", build_font("Test Serif"))
    # Not a font; ignored by extension
    (fonts_dir / "README.txt").write_text("not a font")
    return fonts_dir


@pytest.fixture
def make_metadata():
    """Factory for FontMetadata on fake paths."""

    def _make(
        family: str,
        filename: str,
        style: Style = Style.NORMAL,
        weight: float = 400.0,
        stretch: float = 1.0,
        postscript_name: str | None = None,
        font_index: int = 0,
    ) -> FontMetadata:
        return FontMetadata(
            handle=PathHandle(Path("/fonts") / filename, font_index),
            family=family,
            properties=Properties(style=style, weight=weight, stretch=stretch),
            postscript_name=postscript_name,
        )

    return _make
