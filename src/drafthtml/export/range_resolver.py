"""Per-character resolution of style and entity ranges.

Flattens a block's (possibly overlapping) style ranges and its entity ranges
into two parallel arrays indexed by character position, which the tag
emitter then walks.

Range offsets count UTF-16 code units; the arrays are indexed by Python
character (code point), so every range goes through ``Utf16Index`` first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import NamedTuple

from drafthtml.models import (
    Entity,
    EntityKey,
    EntityRange,
    StyleRange,
    Utf16Index,
    normalise_entity_key,
    normalise_entity_map,
)

logger = logging.getLogger(__name__)


class ResolvedRanges(NamedTuple):
    """Active styles and active entity key for every character of a block.

    Attributes:
        styles: For each character, the styles covering it in order of first
            application (no duplicates).
        entities: For each character, the key of the covering entity, or
            ``None``.  Orphan keys never appear here.
    """

    styles: list[tuple[str, ...]]
    entities: list[EntityKey | None]


def resolve_ranges(
    text: str,
    style_ranges: Iterable[StyleRange],
    entity_ranges: Iterable[EntityRange],
    entity_map: Mapping[EntityKey, Entity],
) -> ResolvedRanges:
    """Resolve ranges into per-character style lists and entity keys.

    Out-of-bounds ranges are clamped to the text.  When entity ranges overlap,
    the range applied last wins for the shared characters.

    Args:
        text: The block text.
        style_ranges: Inline style ranges of the block, in UTF-16 units.
        entity_ranges: Entity ranges of the block, in UTF-16 units.
        entity_map: The document's entity table.

    Returns:
        Two parallel arrays of length ``len(text)``.
    """
    index = Utf16Index(text)
    size = len(text)
    char_styles: list[list[str]] = [[] for _ in range(size)]
    char_entities: list[EntityKey | None] = [None] * size

    for style_range in style_ranges:
        if index.clamp(style_range.offset, style_range.length) != (
            style_range.offset,
            style_range.end,
        ):
            logger.debug(
                "Style range %s@%d+%d clamped to text length %d",
                style_range.style,
                style_range.offset,
                style_range.length,
                index.length,
            )
        start, end = index.to_code_points(style_range.offset, style_range.length)
        for i in range(start, end):
            if style_range.style not in char_styles[i]:
                char_styles[i].append(style_range.style)

    known_keys = normalise_entity_map(entity_map).keys()
    for entity_range in entity_ranges:
        key = normalise_entity_key(entity_range.key)
        if key not in known_keys:
            logger.debug("Ignoring range for unknown entity key %r", key)
            continue
        start, end = index.to_code_points(entity_range.offset, entity_range.length)
        for i in range(start, end):
            char_entities[i] = key

    return ResolvedRanges([tuple(s) for s in char_styles], char_entities)
