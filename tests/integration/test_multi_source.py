"""
MultiSource Integration Tests
=============================

Tests priority ordering, deduplication and error propagation across composed sources.
"""

from unittest.mock import Mock

import pytest

from fontmatch.core.exceptions import (
    FamilyNotFoundError,
    NoCandidatesError,
    PostscriptNameNotFoundError,
    SourceAccessError,
)
from fontmatch.fonts import FamilyEntry, FontMetadata, MemoryHandle, PathHandle, Properties, Weight
from fontmatch.sources import FsSource, MemSource, MultiSource, Source


class TestMultiSource:
    """MultiSource integration tests."""

    @pytest.fixture
    def source_a(self, make_metadata):
        return MemSource.from_metadata(
            [
                make_metadata("Sans", "a/Sans-Regular.ttf", postscript_name="Sans-A"),
                make_metadata("Sans", "a/Sans-Bold.ttf", weight=700),
                make_metadata("A-Only", "a/AOnly.ttf", postscript_name="AOnly-Regular"),
            ]
        )

    @pytest.fixture
    def source_b(self, make_metadata):
        return MemSource.from_metadata(
            [
                make_metadata("sans", "b/Sans.ttf", postscript_name="Sans-B"),
                make_metadata("B-Only", "b/BOnly.ttf", postscript_name="BOnly-Regular"),
            ]
        )

    def test_is_source(self, source_a):
        assert isinstance(MultiSource([source_a]), Source)

    def test_first_child_wins(self, source_a, source_b):
        """Both children define "Sans"; the first child's entry is returned untouched."""
        multi = MultiSource([source_a, source_b])

        entry = multi.select_family_by_name("Sans")

        assert entry is source_a.select_family_by_name("Sans")
        assert len(entry) == 2

    def test_removing_first_child_falls_back(self, source_a, source_b):
        multi = MultiSource([source_a, source_b])
        without_a = MultiSource(child for child in multi.sources if child is not source_a)

        entry = without_a.select_family_by_name("Sans")

        assert entry is source_b.select_family_by_name("Sans")
        assert entry.family_name == "sans"

    def test_all_families_deduplicated(self, source_a, source_b):
        multi = MultiSource([source_a, source_b])

        assert multi.all_families() == ["A-Only", "B-Only", "Sans"]

    def test_all_fonts_deduplicated(self, source_a, make_metadata):
        duplicate = MemSource.from_metadata(
            [make_metadata("Sans", "a/Sans-Regular.ttf"), make_metadata("C", "c.ttf")]
        )
        multi = MultiSource([source_a, duplicate])

        handles = multi.all_fonts()

        assert len(handles) == 4
        assert handles[:3] == source_a.all_fonts()

    def test_all_fonts_same_file_through_two_sources(self, font_dir):
        """The same files found by two sources are listed once."""
        multi = MultiSource([FsSource([font_dir]), FsSource([font_dir / "serif", font_dir])])

        assert len(multi.all_fonts()) == 6

    def test_all_fonts_same_font_copied_into_two_directories(self, tmp_path, regular_font_bytes):
        """Byte-identical copies in different directories are one face."""
        for name in ("a", "b"):
            (tmp_path / name).mkdir()
            (tmp_path / name / "TestSans-Regular.ttf").write_bytes(regular_font_bytes)
        multi = MultiSource([FsSource([tmp_path / "a"]), FsSource([tmp_path / "b"])])

        handles = multi.all_fonts()

        assert handles == [PathHandle(tmp_path / "a" / "TestSans-Regular.ttf")]

    def test_all_fonts_file_also_loaded_into_memory(self, tmp_path, regular_font_bytes):
        (tmp_path / "TestSans-Regular.ttf").write_bytes(regular_font_bytes)
        multi = MultiSource(
            [
                FsSource([tmp_path], compute_checksums=True),
                MemSource.from_bytes([regular_font_bytes]),
            ]
        )

        handles = multi.all_fonts()

        assert handles == [PathHandle(tmp_path / "TestSans-Regular.ttf")]

    def test_all_fonts_matches_memory_font_by_checksum(self, regular_font_bytes):
        """Without PostScript names, a file checksum still identifies a memory copy."""
        on_disk = FontMetadata(
            handle=PathHandle("/fonts/Unnamed.ttf"),
            family="Unnamed",
            checksum=MemoryHandle(regular_font_bytes).checksum,
        )
        in_memory = FontMetadata(handle=MemoryHandle(regular_font_bytes), family="Unnamed")
        multi = MultiSource(
            [MemSource.from_metadata([on_disk]), MemSource.from_metadata([in_memory])]
        )

        assert multi.all_faces() == [on_disk]
        assert multi.all_fonts() == [on_disk.handle]

    def test_select_best_match_uses_first_family_found(self, source_a, source_b):
        multi = MultiSource([source_a, source_b])

        handle = multi.select_best_match(["Missing", "B-Only", "Sans"])

        assert handle.path.name == "BOnly.ttf"

    def test_select_best_match_weight(self, source_a, source_b):
        multi = MultiSource([source_b, source_a])

        handle = multi.select_best_match("Sans", Properties(weight=Weight.BOLD))

        # Source B has the family, so A's bold face is never considered
        assert handle.path.name == "Sans.ttf"

    def test_postscript_name_priority(self, source_a, source_b):
        multi = MultiSource([source_a, source_b])

        assert multi.select_by_postscript_name("BOnly-Regular").path.name == "BOnly.ttf"
        assert multi.select_by_postscript_name("Sans-A").path.name == "Sans-Regular.ttf"

        with pytest.raises(PostscriptNameNotFoundError):
            multi.select_by_postscript_name("Nowhere")

    def test_family_not_found(self, source_a, source_b):
        with pytest.raises(FamilyNotFoundError):
            MultiSource([source_a, source_b]).select_family_by_name("Nowhere")

    def test_empty_multi_source(self):
        multi = MultiSource([])

        assert multi.all_families() == []
        with pytest.raises(FamilyNotFoundError):
            multi.select_best_match("Sans")

    def test_no_candidates_is_not_skipped(self, source_b):
        """An empty family in a higher-priority child stops the lookup."""
        broken = Mock()
        broken.select_family_by_name.return_value = FamilyEntry("Sans")

        multi = MultiSource([broken, source_b])

        with pytest.raises(NoCandidatesError):
            multi.select_best_match("Sans")

    def test_backend_failure_propagates(self, source_b):
        """Errors other than "not found" are raised without trying later children."""
        failing = Mock()
        failing.select_family_by_name.side_effect = SourceAccessError("fontconfig", "boom")
        failing.select_by_postscript_name.side_effect = SourceAccessError("fontconfig", "boom")
        fallback = Mock(wraps=source_b)

        multi = MultiSource([failing, fallback])

        with pytest.raises(SourceAccessError):
            multi.select_family_by_name("B-Only")
        with pytest.raises(SourceAccessError):
            multi.select_by_postscript_name("BOnly-Regular")
        fallback.select_family_by_name.assert_not_called()
        fallback.select_by_postscript_name.assert_not_called()

    def test_generic_family_resolution(self, source_a):
        multi = MultiSource([source_a], generic_families={"sans-serif": "A-Only"})

        assert multi.select_best_match("sans-serif").path.name == "AOnly.ttf"

    def test_generic_family_resolved_by_each_child(self, source_a, make_metadata):
        """Without overrides of its own, each child resolves generic names its own way."""
        mono = MemSource.from_metadata(
            [make_metadata("Mono", "Mono.ttf")], generic_families={"monospace": "Mono"}
        )
        multi = MultiSource([source_a, mono])

        assert multi.select_best_match("monospace").path.name == "Mono.ttf"
        assert multi.select_best_match(["monospace", "A-Only"]).path.name == "Mono.ttf"

    def test_own_generic_families_take_precedence(self, source_a, make_metadata):
        mono = MemSource.from_metadata(
            [make_metadata("Mono", "Mono.ttf")], generic_families={"monospace": "Mono"}
        )
        multi = MultiSource([source_a, mono], generic_families={"monospace": "A-Only"})

        assert multi.select_best_match("monospace").path.name == "AOnly.ttf"

    def test_from_sources(self, source_a, source_b):
        multi = MultiSource.from_sources([source_a, source_b])

        assert multi.sources == (source_a, source_b)
