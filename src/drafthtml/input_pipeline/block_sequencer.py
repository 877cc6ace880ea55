"""Block discovery and document-order reconstruction.

Ordered lists, unordered lists and the other block-level tags are each
scanned independently over the whole input, which loses document order.
Every discovered block therefore records the offset of its opening tag in
the input, and ``sequence_blocks`` restores order with a stable sort.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from drafthtml.input_pipeline.tag_scanner import (
    attribute_value,
    strip_tags,
    style_property,
)
from drafthtml.models import BlockType

logger = logging.getLogger(__name__)

_LIST_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        BlockType.ORDERED_LIST_ITEM,
        re.compile(r"<ol\b[^>]*>([\s\S]*?)</ol\s*>", re.IGNORECASE),
    ),
    (
        BlockType.UNORDERED_LIST_ITEM,
        re.compile(r"<ul\b[^>]*>([\s\S]*?)</ul\s*>", re.IGNORECASE),
    ),
)
_LIST_ITEM_PATTERN = re.compile(r"<li\b([^>]*)>([\s\S]*?)</li\s*>", re.IGNORECASE)

# Groups: (1) tag name, (2) attributes, (3) content
_BLOCK_PATTERN = re.compile(
    r"<(p|h[1-6]|div|blockquote|pre)\b([^>]*)>([\s\S]*?)</\1\s*>", re.IGNORECASE
)

TAG_BLOCK_TYPES: dict[str, str] = {
    "h1": BlockType.HEADER_ONE,
    "h2": BlockType.HEADER_TWO,
    "h3": BlockType.HEADER_THREE,
    "blockquote": BlockType.BLOCKQUOTE,
    "pre": BlockType.CODE_BLOCK,
}

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True, slots=True)
class ScannedBlock:
    """A block found in the input, before inline parsing.

    Attributes:
        position: Offset of the block's opening tag in the input.
        type: Block type derived from the tag.
        content: Inner markup.
        alignment: Lower-cased ``text-align`` of the opening tag, if any.
    """

    position: int
    type: str
    content: str
    alignment: str | None = None


class BlockKeyGenerator:
    """Monotonic, per-document block keys (``00000``, ``00001``, ...)."""

    __slots__ = ("_next", "length")

    def __init__(self, length: int = 5) -> None:
        self.length = length
        self._next = 0

    def __call__(self) -> str:
        value = self._next
        self._next += 1
        digits = ""
        while True:
            value, rem = divmod(value, 36)
            digits = _BASE36[rem] + digits
            if value == 0:
                break
        return digits.rjust(self.length, "0")


def block_type_for_tag(tag_name: str) -> str:
    """Block type for a block-level tag; ``unstyled`` when unrecognised."""
    return TAG_BLOCK_TYPES.get(tag_name.lower(), BlockType.UNSTYLED)


def _alignment(attrs: str) -> str | None:
    value = style_property(attribute_value(attrs, "style"), "text-align")
    return value.lower() if value else None


def _scan_lists(html: str) -> tuple[list[ScannedBlock], list[tuple[int, int]]]:
    """Return list-item blocks and the ``(start, end)`` span of every list."""
    blocks: list[ScannedBlock] = []
    spans: list[tuple[int, int]] = []
    for block_type, pattern in _LIST_PATTERNS:
        for list_match in pattern.finditer(html):
            spans.append((list_match.start(), list_match.end()))
            body_start = list_match.start(1)
            for item in _LIST_ITEM_PATTERN.finditer(list_match.group(1)):
                blocks.append(
                    ScannedBlock(
                        position=body_start + item.start(),
                        type=block_type,
                        content=item.group(2),
                        alignment=_alignment(item.group(1)),
                    )
                )
    return blocks, spans


def _remove_spans(
    content: str, offset: int, spans: list[tuple[int, int]]
) -> tuple[str, bool]:
    """Cut the given input spans out of *content* (which starts at *offset*)."""
    end = offset + len(content)
    inside = sorted(
        (start, stop) for start, stop in spans if offset <= start and stop <= end
    )
    if not inside:
        return content, False
    pieces: list[str] = []
    cursor = offset
    for start, stop in inside:
        if start < cursor:
            continue
        pieces.append(content[cursor - offset : start - offset])
        cursor = stop
    pieces.append(content[cursor - offset :])
    return "".join(pieces), True


def scan_blocks(html: str, skip_blocks_inside_lists: bool = True) -> list[ScannedBlock]:
    """Discover every block in *html*, in discovery (not document) order.

    With *skip_blocks_inside_lists*, block-level tags that start inside a
    list are not reported twice, and lists nested in a block-level tag are
    cut out of that block's content (dropping the block if nothing else is
    left).
    """
    blocks, list_spans = _scan_lists(html)

    for match in _BLOCK_PATTERN.finditer(html):
        content = match.group(3)
        if skip_blocks_inside_lists:
            if any(start <= match.start() < stop for start, stop in list_spans):
                continue
            content, had_lists = _remove_spans(content, match.start(3), list_spans)
            if had_lists and not strip_tags(content).strip():
                continue
        blocks.append(
            ScannedBlock(
                position=match.start(),
                type=block_type_for_tag(match.group(1)),
                content=content,
                alignment=_alignment(match.group(2)),
            )
        )

    return blocks


def sequence_blocks(blocks: Iterable[ScannedBlock]) -> list[ScannedBlock]:
    """Order blocks by input position; ties keep discovery order."""
    ordered = sorted(blocks, key=lambda b: b.position)
    logger.debug("Sequenced %d blocks", len(ordered))
    return ordered
