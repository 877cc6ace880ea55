"""HTML input pipeline: block discovery, inline parsing, entity extraction.

Pipeline per document:
    1. ``scan_blocks`` + ``sequence_blocks``: block-level elements in
       document order.
    2. ``parse_inline_content`` per block: plain text, merged style ranges
       and entity ranges, with entity keys drawn from one allocator.

``from_html`` never raises: on any internal failure it logs the error and
returns a single unstyled block holding the tag-stripped input.
"""

# Pattern: Functional Core (pure functions for content detection and transformation)

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from drafthtml.config import ParseConfig, Settings, get_settings
from drafthtml.input_pipeline.block_sequencer import (
    BlockKeyGenerator,
    scan_blocks,
    sequence_blocks,
)
from drafthtml.input_pipeline.entities import EntityAllocator, extract_entities
from drafthtml.input_pipeline.style_ranges import (
    build_style_ranges,
    collect_char_styles,
)
from drafthtml.input_pipeline.tag_scanner import plain_text, strip_tags
from drafthtml.models import (
    Block,
    BlockType,
    Document,
    EntityRange,
    StyleRange,
    Utf16Index,
)

logger = logging.getLogger(__name__)


@dataclass
class InlineContent:
    """Parsed inline content of one block."""

    text: str
    inline_style_ranges: list[StyleRange] = field(default_factory=list)
    entity_ranges: list[EntityRange] = field(default_factory=list)


def _decode_bytes(content: bytes) -> str:
    """Decode bytes input to a string."""
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        # Fall back to latin-1 which accepts all byte values
        return content.decode("latin-1")


def parse_inline_content(
    markup: str,
    allocator: EntityAllocator,
    decode: bool = True,
) -> InlineContent:
    """Parse one block's inner markup into text plus style and entity ranges.

    Args:
        markup: Inner markup of the block element.
        allocator: The parse call's entity allocator; mutated.
        decode: Decode character references (``&amp;`` -> ``&``).

    Returns:
        The block content; range offsets and lengths count UTF-16 code units.
    """
    text = plain_text(markup, decode)
    char_styles = collect_char_styles(markup, text, decode)
    entity_ranges = extract_entities(markup, text, allocator, decode)

    # Scanning works in code points; ranges are stored in UTF-16 units.
    index = Utf16Index(text)
    style_ranges = []
    for style_range in build_style_ranges(char_styles):
        offset, length = index.to_utf16(style_range.offset, style_range.end)
        style_ranges.append(StyleRange(style_range.style, offset, length))
    for entity_range in entity_ranges:
        entity_range.offset, entity_range.length = index.to_utf16(
            entity_range.offset, entity_range.end
        )
    return InlineContent(text, style_ranges, entity_ranges)


def parse_document(html: str, config: ParseConfig | None = None) -> Document:
    """Parse *html* into a Document.  Errors propagate to the caller."""
    config = config or ParseConfig()
    allocator = EntityAllocator()
    next_key = BlockKeyGenerator(config.block_key_length)

    scanned_blocks = scan_blocks(html, config.skip_blocks_inside_lists)

    blocks: list[Block] = []
    for scanned in sequence_blocks(scanned_blocks):
        inline = parse_inline_content(
            scanned.content, allocator, config.decode_entities
        )
        blocks.append(
            Block(
                text=inline.text,
                type=scanned.type,
                key=next_key(),
                depth=0,
                data={"textAlignment": scanned.alignment} if scanned.alignment else {},
                inline_style_ranges=inline.inline_style_ranges,
                entity_ranges=inline.entity_ranges,
            )
        )

    logger.debug(
        "Parsed %d blocks and %d entities", len(blocks), len(allocator.entity_map)
    )
    return Document(blocks=blocks, entity_map=allocator.entity_map)


def _fallback_document(html: Any, key_length: int) -> Document:
    """Single unstyled block holding the tag-stripped input."""
    text = strip_tags(str(html))
    key = BlockKeyGenerator(key_length)()
    return Document(blocks=[Block(text=text, type=BlockType.UNSTYLED, key=key)])


def from_html(html: str | bytes | None, settings: Settings | None = None) -> Document:
    """Convert HTML to rich text content.

    Args:
        html: HTML markup (bytes are decoded as UTF-8, falling back to
            latin-1), or None.
        settings: Optional settings; defaults to ``get_settings()``.

    Returns:
        The parsed Document.  Empty input yields an empty Document; if
        parsing fails, a single unstyled block with the tag-stripped input.
    """
    if html is None:
        return Document()
    if isinstance(html, bytes):
        html = _decode_bytes(html)
    if not html:
        return Document()

    config = settings.parse if settings is not None else None
    try:
        config = config or get_settings().parse
        return parse_document(html, config)
    except Exception:
        logger.exception("Error converting HTML to rich text content")
        key_length = (config or ParseConfig()).block_key_length
        return _fallback_document(html, key_length)
