"""Inline style range reconstruction from scanned tags.

Each supported style is scanned from its source tags, recorded per character,
and then collapsed into the minimal set of ranges per style.
"""

from __future__ import annotations

from collections.abc import Iterable

from drafthtml.input_pipeline.tag_scanner import (
    AttrFilter,
    attribute_value,
    scan_tag,
    style_property,
)
from drafthtml.models import InlineStyle, StyleRange


def _font_size_is(size: str) -> AttrFilter:
    def _matches(attrs: str) -> bool:
        value = style_property(attribute_value(attrs, "style"), "font-size")
        return value is not None and value.lower() == size

    return _matches


# (style, tag, attribute filter) in scanning order
STYLE_SOURCES: tuple[tuple[str, str, AttrFilter | None], ...] = (
    (InlineStyle.BOLD, "strong", None),
    (InlineStyle.BOLD, "b", None),
    (InlineStyle.ITALIC, "em", None),
    (InlineStyle.ITALIC, "i", None),
    (InlineStyle.UNDERLINE, "u", None),
    (InlineStyle.FONT_SIZE_SMALL, "span", _font_size_is("small")),
    (InlineStyle.FONT_SIZE_NORMAL, "span", _font_size_is("medium")),
    (InlineStyle.FONT_SIZE_LARGE, "span", _font_size_is("large")),
    (InlineStyle.FONT_SIZE_HUGE, "span", _font_size_is("x-large")),
)


def collect_char_styles(markup: str, text: str, decode: bool = True) -> list[list[str]]:
    """Record, for every character of *text*, the styles whose tags cover it."""
    char_styles: list[list[str]] = [[] for _ in text]
    for style, tag, attr_filter in STYLE_SOURCES:
        for match in scan_tag(markup, tag, text, attr_filter, decode):
            for i in range(match.start, match.end):
                if style not in char_styles[i]:
                    char_styles[i].append(style)
    return char_styles


def merge_style_ranges(ranges: Iterable[StyleRange]) -> list[StyleRange]:
    """Merge overlapping or touching ranges of the same style.

    Styles keep the order in which they first appear; each style's ranges
    come out sorted by offset and non-overlapping.  Empty ranges are
    dropped.  Merging an already merged list returns an equal list.
    """
    by_style: dict[str, list[StyleRange]] = {}
    for style_range in ranges:
        if style_range.length <= 0:
            continue
        by_style.setdefault(style_range.style, []).append(style_range)

    merged: list[StyleRange] = []
    for style, style_ranges in by_style.items():
        current: StyleRange | None = None
        for style_range in sorted(style_ranges, key=lambda r: r.offset):
            if current is not None and style_range.offset <= current.end:
                current.length = max(current.end, style_range.end) - current.offset
                continue
            if current is not None:
                merged.append(current)
            current = StyleRange(style, style_range.offset, style_range.length)
        if current is not None:
            merged.append(current)
    return merged


def build_style_ranges(char_styles: list[list[str]]) -> list[StyleRange]:
    """Collapse per-character style lists into minimal style ranges."""
    return merge_style_ranges(
        StyleRange(style, i, 1)
        for i, styles in enumerate(char_styles)
        for style in styles
    )
