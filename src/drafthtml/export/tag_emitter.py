"""Tag emission: per-character styles and entities to nested markup.

Walks a block's characters together with the resolved per-character style
and entity arrays, opening and closing tags as coverage changes.  Open tags
live on an explicit ownership stack where each entry remembers the style or
entity it belongs to.

When coverage of some tag ends while tags opened after it are still active,
closing just that tag would produce crossed markup such as
``<strong>a<em>b</strong>c</em>``.  Instead every tag from the ending one up
to the top of the stack is closed, and the still-active ones are reopened in
their original order::

    BOLD 0..4, ITALIC 2..6 over "abcdef"
    -> <strong>ab<em>cd</em></strong><em>ef</em>

The entity wrapper (``<a>`` or colour ``<span>``) sits on the same stack, so
the same rule keeps it properly nested with the style tags.
"""

from __future__ import annotations

import html as html_module
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from drafthtml.export.range_resolver import ResolvedRanges
from drafthtml.models import Entity, EntityKey, InlineStyle, normalise_entity_map

logger = logging.getLogger(__name__)

# style -> (open tag, close tag)
STYLE_TAGS: dict[str, tuple[str, str]] = {
    InlineStyle.BOLD: ("<strong>", "</strong>"),
    InlineStyle.ITALIC: ("<em>", "</em>"),
    InlineStyle.UNDERLINE: ("<u>", "</u>"),
    InlineStyle.FONT_SIZE_SMALL: ('<span style="font-size: small">', "</span>"),
    InlineStyle.FONT_SIZE_NORMAL: ('<span style="font-size: medium">', "</span>"),
    InlineStyle.FONT_SIZE_LARGE: ('<span style="font-size: large">', "</span>"),
    InlineStyle.FONT_SIZE_HUGE: ('<span style="font-size: x-large">', "</span>"),
}


@dataclass(slots=True, frozen=True)
class _OpenTag:
    """One entry of the ownership stack."""

    owner: str | EntityKey
    is_entity: bool
    open_tag: str
    close_tag: str


class _TagStack:
    """Currently open tags, innermost last, writing markup to *out*."""

    __slots__ = ("entries", "out")

    def __init__(self, out: list[str]) -> None:
        self.entries: list[_OpenTag] = []
        self.out = out

    def push(self, entry: _OpenTag) -> None:
        self.out.append(entry.open_tag)
        self.entries.append(entry)

    def has_style(self, style: str) -> bool:
        return any(not e.is_entity and e.owner == style for e in self.entries)

    def has_entity(self, key: EntityKey) -> bool:
        return any(e.is_entity and e.owner == key for e in self.entries)

    def lowest_stale(
        self, styles: Sequence[str], entity_key: EntityKey | None
    ) -> int | None:
        """Index of the outermost entry no longer covered, or ``None``."""
        for index, entry in enumerate(self.entries):
            if not _is_live(entry, styles, entity_key):
                return index
        return None

    def unwind(self, index: int) -> list[_OpenTag]:
        """Close every entry from the top down to *index*.

        Returns the closed entries in their original open order.
        """
        closed = self.entries[index:]
        del self.entries[index:]
        for entry in reversed(closed):
            self.out.append(entry.close_tag)
        return closed


def _is_live(
    entry: _OpenTag, styles: Sequence[str], entity_key: EntityKey | None
) -> bool:
    if entry.is_entity:
        return entry.owner == entity_key
    return entry.owner in styles


def entity_tags(
    entity: Entity, missing_href: str = "#", escape: bool = True
) -> tuple[str, str] | None:
    """Return ``(open_tag, close_tag)`` wrapping *entity*, or ``None``.

    Link-like entities become ``<a href>``; colour entities become a
    ``<span>`` with an inline colour.  Anything else has no wrapper.
    """
    if entity.is_link:
        href = entity.url or missing_href
        if escape:
            href = html_module.escape(href, quote=True)
        return f'<a href="{href}">', "</a>"
    if entity.is_color:
        color = entity.color or ""
        if escape:
            color = html_module.escape(color, quote=True)
        return f'<span style="color: {color}">', "</span>"
    return None


def emit_block_html(
    text: str,
    resolved: ResolvedRanges,
    entity_map: Mapping[EntityKey, Entity],
    *,
    escape: bool = True,
    missing_href: str = "#",
) -> str:
    """Render one block's text with its resolved ranges as inline markup.

    Args:
        text: The block text.
        resolved: Output of ``resolve_ranges`` for *text*.
        entity_map: The document's entity table.
        escape: HTML-escape text characters and attribute values.
        missing_href: ``href`` used for links without a url.

    Returns:
        Properly nested inline HTML (no block wrapper).
    """
    entities = normalise_entity_map(entity_map)
    out: list[str] = []
    stack = _TagStack(out)
    size = len(text)

    # One extra iteration past the end acts as a sentinel with nothing active.
    for i in range(size + 1):
        if i < size:
            styles = resolved.styles[i]
            entity_key = resolved.entities[i]
        else:
            styles = ()
            entity_key = None

        # Close stale tags together with everything opened after them, then
        # reopen the ones that are still covered.
        stale = stack.lowest_stale(styles, entity_key)
        if stale is not None:
            for entry in stack.unwind(stale):
                if _is_live(entry, styles, entity_key):
                    stack.push(entry)

        for style in styles:
            tags = STYLE_TAGS.get(style)
            if tags is None or stack.has_style(style):
                continue
            stack.push(_OpenTag(style, False, *tags))

        if entity_key is not None and not stack.has_entity(entity_key):
            tags = entity_tags(entities[entity_key], missing_href, escape)
            if tags is not None:
                stack.push(_OpenTag(entity_key, True, *tags))

        if i < size:
            char = text[i]
            out.append(html_module.escape(char, quote=False) if escape else char)

    stack.unwind(0)
    return "".join(out)
