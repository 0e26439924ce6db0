"""Tests for font handles and family name handling."""

from pathlib import Path

import pytest

from fontmatch.fonts.family_name import (
    default_generic_families,
    is_generic_family,
    normalize_family_name,
    parse_family_list,
    resolve_family_name,
)
from fontmatch.fonts.handle import MemoryHandle, PathHandle


class TestPathHandle:
    """Test PathHandle."""

    def test_path_coerced(self):
        handle = PathHandle("/fonts/a.ttf", 2)

        assert handle.path == Path("/fonts/a.ttf")
        assert handle.font_index == 2
        assert str(handle) == f"{Path('/fonts/a.ttf')}#2"

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            PathHandle("/fonts/a.ttf", -1)

    def test_same_file_same_identity(self, tmp_path):
        """Relative and absolute spellings of one file are the same face."""
        font_file = tmp_path / "a.ttf"
        font_file.write_bytes(b"\x00")
        (tmp_path / "sub").mkdir()
        other = tmp_path / "sub" / ".." / "a.ttf"

        assert PathHandle(font_file).identity == PathHandle(other).identity
        assert PathHandle(font_file, 0).identity != PathHandle(font_file, 1).identity

    def test_hashable(self):
        handles = {PathHandle("/fonts/a.ttf"), PathHandle("/fonts/a.ttf"), PathHandle("/b.ttf")}

        assert len(handles) == 2


class TestMemoryHandle:
    """Test MemoryHandle."""

    def test_buffer_copied_to_bytes(self):
        buffer = bytearray(b"font data")
        handle = MemoryHandle(buffer)
        buffer[0:4] = b"XXXX"

        assert handle.data == b"font data"
        assert handle.size_bytes == 9

    def test_identity_by_checksum(self):
        first = MemoryHandle(b"same bytes")
        second = MemoryHandle(bytes(b"same bytes"))

        assert first.identity == second.identity
        assert first.identity[0] == "sha256"
        assert MemoryHandle(b"same bytes", 1).identity != first.identity

    def test_repr_hides_data(self):
        handle = MemoryHandle(b"x" * 1024)

        assert "xxxx" not in repr(handle)
        assert str(handle) == "<memory 1024 bytes>#0"

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            MemoryHandle(b"data", -3)


class TestFamilyNames:
    """Test family name normalization and generic resolution."""

    def test_normalize(self):
        assert normalize_family_name("  Times   New\tRoman ") == "times new roman"
        assert normalize_family_name("DejaVu Sans") == normalize_family_name("dejavu  SANS")

    def test_generic_detection(self):
        assert is_generic_family("Sans-Serif")
        assert is_generic_family("monospace")
        assert not is_generic_family("Arial")

    def test_resolve_non_generic_unchanged(self):
        assert resolve_family_name("Helvetica Neue") == "Helvetica Neue"

    def test_resolve_platform_defaults(self):
        assert resolve_family_name("serif", system="Windows") == "Times New Roman"
        assert resolve_family_name("fantasy", system="Windows") == "Impact"
        assert resolve_family_name("fantasy", system="Darwin") == "Papyrus"
        assert resolve_family_name("monospace", system="Linux") == "monospace"

    def test_resolve_overrides(self):
        overrides = {"sans-serif": "Inter"}

        assert resolve_family_name("Sans-Serif", overrides, system="Windows") == "Inter"
        assert resolve_family_name("serif", overrides, system="Windows") == "Times New Roman"

    def test_default_generic_families_complete(self):
        for system in ("Windows", "Darwin", "Linux"):
            mapping = default_generic_families(system)
            assert set(mapping) == {"serif", "sans-serif", "monospace", "cursive", "fantasy"}

    def test_parse_family_list(self):
        value = "'Helvetica Neue', \"Arial\" , sans-serif,,"

        assert parse_family_list(value) == ["Helvetica Neue", "Arial", "sans-serif"]
