"""
Unit tests for data models.
"""

import dataclasses

import pytest
from dedupifyr.models import (
    ComparisonOptions,
    DedupeResult,
    DuplicateMatch,
    LoadFailure,
    LoadReport,
    LocalImage,
    SearchDepth,
    format_size,
)


class TestFormatSize:
    """Test the format_size utility function."""

    def test_bytes(self):
        assert format_size(500) == "500.0 B"

    def test_kilobytes(self):
        assert format_size(2048) == "2.0 KB"

    def test_megabytes(self):
        assert format_size(5242880) == "5.0 MB"

    def test_zero(self):
        assert format_size(0) == "0.0 B"


class TestComparisonOptions:
    """Test ComparisonOptions data class."""

    def test_defaults(self):
        options = ComparisonOptions()
        assert options.search_depth is SearchDepth.TOP_ONLY
        assert options.bias_percent == pytest.approx(0.125)

    def test_bias_factor_is_percentage(self):
        options = ComparisonOptions(bias_percent=0.9)
        assert options.bias_factor == pytest.approx(90.0)

    def test_immutable(self):
        options = ComparisonOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.bias_percent = 0.5

    def test_search_depth_recursive_flag(self):
        assert SearchDepth.RECURSIVE.recursive
        assert not SearchDepth.TOP_ONLY.recursive


class TestLocalImage:
    """Test LocalImage data class."""

    def test_identifier_is_full_path(self):
        image = LocalImage(name="a.png", full_path="/photos/2020/a.png", digest="abc")
        assert image.identifier == "/photos/2020/a.png"

    def test_same_name_different_directories(self):
        first = LocalImage(name="a.png", full_path="/photos/2020/a.png", digest="abc")
        second = LocalImage(name="a.png", full_path="/photos/2021/a.png", digest="abc")
        assert first.identifier != second.identifier

    def test_file_size_formatted(self):
        image = LocalImage(name="a.png", full_path="/photos/a.png", digest="abc", file_size=2048)
        assert image.file_size_formatted == "2.0 KB"


class TestDedupeResult:
    """Test DedupeResult data class."""

    def test_duplicates_default_empty(self):
        base = LocalImage(name="a.png", full_path="/a.png", digest="1")
        result = DedupeResult(base_image=base)
        assert result.duplicates == []
        assert result.duplicate_count == 0

    def test_duplicate_paths(self):
        base = LocalImage(name="a.png", full_path="/a.png", digest="1")
        dupes = [
            DuplicateMatch(LocalImage(name="b.png", full_path="/b.png", digest="2"), 1.0),
            DuplicateMatch(LocalImage(name="c.png", full_path="/c.png", digest="3"), 0.9),
        ]
        result = DedupeResult(base_image=base, duplicates=dupes)
        assert result.duplicate_paths == frozenset({"/b.png", "/c.png"})


class TestLoadReport:
    """Test LoadReport data class."""

    def test_total(self):
        report = LoadReport(
            images=[LocalImage(name="a.png", full_path="/a.png", digest="1")],
            failures=[LoadFailure(path="/b.png", error="broken")],
        )
        assert report.total == 2
