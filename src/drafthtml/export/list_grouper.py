"""Block wrapping and list grouping.

Wraps each block's inline markup in its block-level element.  Runs of
consecutive list-item blocks of the same kind become ``<li>`` elements
inside a single ``<ul>`` or ``<ol>``.
"""

from __future__ import annotations

import html as html_module
from collections.abc import Iterable
from itertools import groupby

from drafthtml.models import Block, BlockType

BLOCK_TAGS: dict[str, str] = {
    BlockType.HEADER_ONE: "h1",
    BlockType.HEADER_TWO: "h2",
    BlockType.HEADER_THREE: "h3",
    BlockType.BLOCKQUOTE: "blockquote",
    BlockType.CODE_BLOCK: "pre",
}
DEFAULT_BLOCK_TAG = "p"

LIST_TAGS: dict[str, str] = {
    BlockType.UNORDERED_LIST_ITEM: "ul",
    BlockType.ORDERED_LIST_ITEM: "ol",
}


def block_tag(block_type: str) -> str:
    """Return the wrapper tag for *block_type*, ``p`` when unrecognised."""
    return BLOCK_TAGS.get(block_type, DEFAULT_BLOCK_TAG)


def _align_attr(block: Block, escape: bool) -> str:
    alignment = block.text_alignment
    if not alignment:
        return ""
    if escape:
        alignment = html_module.escape(alignment, quote=True)
    return f' style="text-align: {alignment}"'


def _wrap(tag: str, block: Block, content: str, escape: bool) -> str:
    return f"<{tag}{_align_attr(block, escape)}>{content}</{tag}>"


def group_blocks(rendered: Iterable[tuple[Block, str]], escape: bool = True) -> str:
    """Join rendered blocks into document HTML.

    Args:
        rendered: ``(block, inline_html)`` pairs in document order.
        escape: Attribute-escape alignment values.

    Returns:
        The concatenated block-level HTML.
    """
    parts: list[str] = []
    for block_type, run in groupby(rendered, key=lambda pair: pair[0].type):
        list_tag = LIST_TAGS.get(block_type)
        if list_tag is None:
            parts.extend(_wrap(block_tag(block_type), b, c, escape) for b, c in run)
            continue
        items = "".join(_wrap("li", b, c, escape) for b, c in run)
        parts.append(f"<{list_tag}>{items}</{list_tag}>")
    return "".join(parts)
