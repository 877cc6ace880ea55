"""HTML input pipeline: HTML markup to block-based rich text content."""

from drafthtml.input_pipeline.block_sequencer import (
    BlockKeyGenerator,
    ScannedBlock,
    scan_blocks,
    sequence_blocks,
)
from drafthtml.input_pipeline.entities import EntityAllocator, extract_entities
from drafthtml.input_pipeline.html_input import (
    InlineContent,
    from_html,
    parse_document,
    parse_inline_content,
)
from drafthtml.input_pipeline.style_ranges import (
    build_style_ranges,
    merge_style_ranges,
)
from drafthtml.input_pipeline.tag_scanner import TagMatch, scan_tag, strip_tags

__all__ = [
    "BlockKeyGenerator",
    "EntityAllocator",
    "InlineContent",
    "ScannedBlock",
    "TagMatch",
    "build_style_ranges",
    "extract_entities",
    "from_html",
    "merge_style_ranges",
    "parse_document",
    "parse_inline_content",
    "scan_blocks",
    "scan_tag",
    "sequence_blocks",
    "strip_tags",
]
