"""UTF-16 offsets into block text.

Block ranges count UTF-16 code units, the way the editor's JavaScript
strings are indexed.  Python strings index code points, so a character
outside the Basic Multilingual Plane (most emoji) is one Python character
but two units in a range.  ``Utf16Index`` converts between the two.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from itertools import accumulate


def utf16_units(char: str) -> int:
    """Number of UTF-16 code units used by one character (1 or 2)."""
    return len(char.encode("utf-16-le")) // 2


class Utf16Index:
    """Prefix table of UTF-16 offsets for every code point of *text*.

    ``prefix[i]`` is the UTF-16 offset at which code point ``i`` starts;
    ``prefix[len(text)]`` is the UTF-16 length of the text.
    """

    __slots__ = ("prefix",)

    def __init__(self, text: str) -> None:
        self.prefix = [0, *accumulate(utf16_units(char) for char in text)]

    @property
    def length(self) -> int:
        return self.prefix[-1]

    def clamp(self, offset: int, length: int) -> tuple[int, int]:
        """Clamp a UTF-16 range into the text; returns ``(start, end)`` units."""
        start = min(max(offset, 0), self.length)
        end = min(offset + max(length, 0), self.length)
        return start, max(start, end)

    def to_code_points(self, offset: int, length: int) -> tuple[int, int]:
        """Map a UTF-16 range to a ``(start, end)`` code point slice.

        The range is clamped first.  A boundary falling inside a surrogate
        pair widens the slice to cover the whole character.
        """
        start, end = self.clamp(offset, length)
        first = bisect_right(self.prefix, start) - 1
        if start == end:
            return first, first
        last = bisect_left(self.prefix, end)
        return first, max(first, last)

    def to_utf16(self, start: int, end: int) -> tuple[int, int]:
        """Map a code point slice to a UTF-16 ``(offset, length)``."""
        offset = self.prefix[start]
        return offset, self.prefix[end] - offset
