"""Content-to-HTML rendering entry point.

Pipeline per document:
    1. ``resolve_ranges``: per-character styles and entity keys per block.
    2. ``emit_block_html``: nested inline markup per block.
    3. ``group_blocks``: block wrappers and list grouping.

``to_html`` never raises: on any internal failure it logs the error and
returns the JSON serialisation of its input instead.
"""

# Pattern: Functional Core (pure functions; the only IO is logging)

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from drafthtml.config import RenderConfig, Settings, get_settings
from drafthtml.export.list_grouper import group_blocks
from drafthtml.export.range_resolver import resolve_ranges
from drafthtml.export.tag_emitter import emit_block_html
from drafthtml.models import Block, Document, Entity, EntityKey

logger = logging.getLogger(__name__)


def render_block(
    block: Block,
    entity_map: Mapping[EntityKey, Entity],
    config: RenderConfig | None = None,
) -> str:
    """Render the inline content of one block (no block wrapper)."""
    config = config or RenderConfig()
    resolved = resolve_ranges(
        block.text, block.inline_style_ranges, block.entity_ranges, entity_map
    )
    return emit_block_html(
        block.text,
        resolved,
        entity_map,
        escape=config.escape_html,
        missing_href=config.missing_href,
    )


def render_document(document: Document, config: RenderConfig | None = None) -> str:
    """Render every block of *document* and join them into HTML."""
    config = config or RenderConfig()
    rendered = (
        (block, render_block(block, document.entity_map, config))
        for block in document.blocks
    )
    return group_blocks(rendered, escape=config.escape_html)


def _coerce_document(content: Any) -> Document | None:
    """Turn the accepted input shapes into a Document.

    Returns None when there is nothing to render (no ``blocks``).
    """
    if isinstance(content, Document):
        return content
    if isinstance(content, (str, bytes)):
        content = json.loads(content)
    if not isinstance(content, Mapping) or not content.get("blocks"):
        return None
    return Document.from_dict(content)


def _json_fallback(content: Any) -> str:
    """Serialise *content* compactly for the degraded return path."""
    if isinstance(content, Document):
        content = content.to_dict()
    try:
        return json.dumps(
            content, separators=(",", ":"), ensure_ascii=False, default=str
        )
    except (TypeError, ValueError):
        return str(content)


def to_html(content: Any, settings: Settings | None = None) -> str:
    """Convert rich text content to HTML.

    Args:
        content: A ``Document``, a mapping in the raw camelCase content shape,
            a JSON string of that shape, or None.
        settings: Optional settings; defaults to ``get_settings()``.

    Returns:
        The HTML string.  ``""`` when *content* is absent or has no blocks.
        If conversion fails, the compact JSON serialisation of *content*.
    """
    if content is None:
        return ""

    try:
        settings = settings or get_settings()
        document = _coerce_document(content)
        if document is None or not document.blocks:
            return ""
        return render_document(document, settings.render)
    except Exception:
        logger.exception("Error converting rich text content to HTML")
        return _json_fallback(content)
