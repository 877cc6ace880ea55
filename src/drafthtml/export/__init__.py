"""Rich text content to HTML rendering.

This package turns block-based content (text plus style and entity ranges)
into properly nested HTML.
"""

from drafthtml.export.html_renderer import render_block, render_document, to_html
from drafthtml.export.list_grouper import block_tag, group_blocks
from drafthtml.export.range_resolver import ResolvedRanges, resolve_ranges
from drafthtml.export.tag_emitter import STYLE_TAGS, emit_block_html, entity_tags

__all__ = [
    "STYLE_TAGS",
    "ResolvedRanges",
    "block_tag",
    "emit_block_html",
    "entity_tags",
    "group_blocks",
    "render_block",
    "render_document",
    "resolve_ranges",
    "to_html",
]
