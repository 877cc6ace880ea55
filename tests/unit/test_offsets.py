"""Tests for converting between UTF-16 offsets and Python string indices."""

from __future__ import annotations

import pytest

from drafthtml.models import Utf16Index, utf16_units


class TestUtf16Units:
    @pytest.mark.parametrize(
        ("char", "units"),
        [("a", 1), ("é", 1), ("中", 1), ("😀", 2), ("𝄞", 2)],
    )
    def test_units(self, char: str, units: int) -> None:
        assert utf16_units(char) == units


class TestUtf16Index:
    """Prefix table over a mixed BMP and astral string."""

    def test_prefix_table(self) -> None:
        assert Utf16Index("a😀b").prefix == [0, 1, 3, 4]

    def test_length(self) -> None:
        assert Utf16Index("😀 bold").length == 7

    def test_empty_text(self) -> None:
        index = Utf16Index("")
        assert index.length == 0
        assert index.to_code_points(0, 5) == (0, 0)

    def test_to_code_points(self) -> None:
        assert Utf16Index("😀 bold").to_code_points(3, 4) == (2, 6)

    def test_to_code_points_clamps(self) -> None:
        index = Utf16Index("ab")
        assert index.to_code_points(-3, 4) == (0, 1)
        assert index.to_code_points(1, 50) == (1, 2)
        assert index.to_code_points(9, 1) == (2, 2)

    def test_split_surrogate_pair_widens(self) -> None:
        index = Utf16Index("😀ab")
        assert index.to_code_points(1, 1) == (0, 1)
        assert index.to_code_points(0, 1) == (0, 1)

    def test_empty_range_inside_surrogate_pair(self) -> None:
        assert Utf16Index("😀ab").to_code_points(1, 0) == (0, 0)

    def test_to_utf16(self) -> None:
        index = Utf16Index("😀 bold 🎉")
        assert index.to_utf16(2, 6) == (3, 4)
        assert index.to_utf16(7, 8) == (8, 2)

    def test_conversions_agree(self) -> None:
        index = Utf16Index("x🎉y😀z")
        for start in range(6):
            for end in range(start, 6):
                offset, length = index.to_utf16(start, end)
                assert index.to_code_points(offset, length) == (start, end)
