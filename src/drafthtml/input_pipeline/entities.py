"""Entity extraction: coloured spans and hyperlinks.

Every entity found in a document takes the next key from one
``EntityAllocator`` created per parse call, so keys never collide within a
document and nothing carries over between calls.
"""

from __future__ import annotations

import html as html_module
import logging
from dataclasses import dataclass, field

from drafthtml.input_pipeline.tag_scanner import (
    attribute_value,
    scan_tag,
    style_property,
)
from drafthtml.models import (
    Entity,
    EntityKey,
    EntityRange,
    EntityType,
    Mutability,
)

logger = logging.getLogger(__name__)


@dataclass
class EntityAllocator:
    """Sequential entity keys plus the entity table they index.

    Attributes:
        next_key: Key handed out by the next ``allocate`` call.
        entity_map: Entities allocated so far, by key.
    """

    next_key: int = 0
    entity_map: dict[EntityKey, Entity] = field(default_factory=dict)

    def allocate(self, entity: Entity) -> int:
        key = self.next_key
        self.entity_map[key] = entity
        self.next_key += 1
        return key


def _has_color(attrs: str) -> bool:
    return style_property(attribute_value(attrs, "style"), "color") is not None


def extract_entities(
    markup: str,
    text: str,
    allocator: EntityAllocator,
    decode: bool = True,
) -> list[EntityRange]:
    """Scan *markup* for colour spans, then links, allocating one entity each.

    Args:
        markup: Inline markup of one block.
        text: The block's plain text.
        allocator: The parse call's allocator; mutated.
        decode: Decode character references in attribute values.

    Returns:
        One entity range per recognised element, in code points of *text*.
    """
    ranges: list[EntityRange] = []

    for match in scan_tag(markup, "span", text, _has_color, decode):
        color = style_property(attribute_value(match.open_tag, "style"), "color")
        if color is None:
            continue
        key = allocator.allocate(
            Entity(EntityType.CUSTOM, Mutability.MUTABLE, {"color": color})
        )
        ranges.append(EntityRange(key, match.start, match.length))

    for match in scan_tag(markup, "a", text, None, decode):
        url = attribute_value(match.open_tag, "href")
        if url is None:
            logger.debug("Skipping anchor without href: %s", match.open_tag)
            continue
        if decode:
            url = html_module.unescape(url)
        key = allocator.allocate(
            Entity(EntityType.CUSTOM, Mutability.MUTABLE, {"url": url})
        )
        ranges.append(EntityRange(key, match.start, match.length))

    return ranges
