"""Data models for block-based rich text content.

These are plain dataclasses mirroring the editor's raw JSON content shape:
a list of blocks, each carrying its text plus style and entity ranges, and a
per-document entity map.  ``from_dict`` / ``to_dict`` convert between the
camelCase raw shape and these records.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

type EntityKey = int | str


class BlockType(StrEnum):
    """Block kinds with a dedicated HTML wrapper."""

    UNSTYLED = "unstyled"
    HEADER_ONE = "header-one"
    HEADER_TWO = "header-two"
    HEADER_THREE = "header-three"
    UNORDERED_LIST_ITEM = "unordered-list-item"
    ORDERED_LIST_ITEM = "ordered-list-item"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "code-block"


class InlineStyle(StrEnum):
    """Inline formatting styles that have an HTML rendering."""

    BOLD = "BOLD"
    ITALIC = "ITALIC"
    UNDERLINE = "UNDERLINE"
    FONT_SIZE_SMALL = "FONT_SIZE_SMALL"
    FONT_SIZE_NORMAL = "FONT_SIZE_NORMAL"
    FONT_SIZE_LARGE = "FONT_SIZE_LARGE"
    FONT_SIZE_HUGE = "FONT_SIZE_HUGE"


class EntityType(StrEnum):
    LINK = "LINK"
    CUSTOM = "CUSTOM"


class Mutability(StrEnum):
    MUTABLE = "MUTABLE"
    IMMUTABLE = "IMMUTABLE"
    SEGMENTED = "SEGMENTED"


def normalise_entity_key(value: Any) -> EntityKey:
    """Return *value* as an ``int`` key when it is integral, else as a string.

    JSON object keys are always strings, so ``"0"`` and ``0`` must address the
    same entity.
    """
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    return text


def normalise_entity_map(entity_map: Mapping[Any, Entity]) -> dict[EntityKey, Entity]:
    """Return *entity_map* with every key passed through ``normalise_entity_key``."""
    return {normalise_entity_key(key): entity for key, entity in entity_map.items()}


@dataclass(slots=True)
class StyleRange:
    """A contiguous character span carrying one inline style."""

    style: str
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> StyleRange:
        return cls(
            style=str(raw["style"]),
            offset=int(raw.get("offset", 0)),
            length=int(raw.get("length", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"style": self.style, "offset": self.offset, "length": self.length}


@dataclass(slots=True)
class EntityRange:
    """A contiguous character span referencing an entity by key."""

    key: EntityKey
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> EntityRange:
        return cls(
            key=normalise_entity_key(raw["key"]),
            offset=int(raw.get("offset", 0)),
            length=int(raw.get("length", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "offset": self.offset, "length": self.length}


@dataclass(slots=True)
class Entity:
    """An out-of-line annotation (hyperlink or coloured span).

    Attributes:
        type: ``LINK`` or ``CUSTOM``.
        mutability: Editor mutability; carried through unchanged.
        data: Either ``{"url": ...}`` or ``{"color": ...}``.
    """

    type: str
    mutability: str = Mutability.MUTABLE
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def url(self) -> str | None:
        value = self.data.get("url")
        return str(value) if value else None

    @property
    def color(self) -> str | None:
        value = self.data.get("color")
        return str(value) if value else None

    @property
    def is_link(self) -> bool:
        """Rendered as ``<a href>``: any ``LINK``, or ``CUSTOM`` with a url."""
        return self.type == EntityType.LINK or (
            self.type == EntityType.CUSTOM and self.url is not None
        )

    @property
    def is_color(self) -> bool:
        """Rendered as ``<span style="color: ...">``."""
        return (
            not self.is_link
            and self.type == EntityType.CUSTOM
            and self.color is not None
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Entity:
        data = raw.get("data") or {}
        return cls(
            type=str(raw.get("type", "")),
            mutability=str(raw.get("mutability", Mutability.MUTABLE)),
            data=dict(data) if isinstance(data, Mapping) else {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.type),
            "mutability": str(self.mutability),
            "data": dict(self.data),
        }


@dataclass(slots=True)
class Block:
    """One paragraph-equivalent unit of rich text.

    ``type`` stays a plain string so unknown block kinds survive a round
    trip through the model; they render with the default wrapper.
    """

    text: str = ""
    type: str = BlockType.UNSTYLED
    key: str = ""
    depth: int = 0
    data: dict[str, Any] = field(default_factory=dict)
    inline_style_ranges: list[StyleRange] = field(default_factory=list)
    entity_ranges: list[EntityRange] = field(default_factory=list)

    @property
    def text_alignment(self) -> str | None:
        value = self.data.get("textAlignment")
        return str(value) if value else None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Block:
        data = raw.get("data")
        # Editors serialise empty block data as [] rather than {}.
        if not isinstance(data, Mapping):
            data = {}
        text = raw.get("text")
        return cls(
            text="" if text is None else str(text),
            type=str(raw.get("type") or BlockType.UNSTYLED),
            key=str(raw.get("key", "")),
            depth=int(raw.get("depth") or 0),
            data=dict(data),
            inline_style_ranges=[
                StyleRange.from_dict(r) for r in raw.get("inlineStyleRanges") or []
            ],
            entity_ranges=[
                EntityRange.from_dict(r) for r in raw.get("entityRanges") or []
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "text": self.text,
            "type": str(self.type),
            "depth": self.depth,
            "inlineStyleRanges": [r.to_dict() for r in self.inline_style_ranges],
            "entityRanges": [r.to_dict() for r in self.entity_ranges],
            "data": dict(self.data),
        }


def _entity_map_from_raw(raw: Any) -> dict[EntityKey, Entity]:
    """Read an entity map given as a mapping or as a list indexed by key."""
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        items: Sequence[tuple[Any, Any]] = list(raw.items())
    elif isinstance(raw, Sequence) and not isinstance(raw, str):
        items = list(enumerate(raw))
    else:
        msg = f"entityMap must be a mapping or a list, got {type(raw).__name__}"
        raise TypeError(msg)

    entity_map: dict[EntityKey, Entity] = {}
    for key, value in items:
        if not isinstance(value, Mapping):
            logger.debug("Skipping malformed entity %r: %r", key, value)
            continue
        entity_map[normalise_entity_key(key)] = Entity.from_dict(value)
    return entity_map


@dataclass(slots=True)
class Document:
    """Ordered blocks plus the per-document entity map."""

    blocks: list[Block] = field(default_factory=list)
    entity_map: dict[EntityKey, Entity] = field(default_factory=dict)

    def entity(self, key: EntityKey) -> Entity | None:
        """Look up an entity, tolerating orphan references."""
        return self.entity_map.get(normalise_entity_key(key))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Document:
        """Build a document from the raw camelCase content shape.

        Raises:
            TypeError: If ``blocks`` or ``entityMap`` have the wrong shape.
            KeyError, ValueError: On malformed ranges.
        """
        blocks = raw.get("blocks") or []
        if not isinstance(blocks, Sequence) or isinstance(blocks, str):
            msg = f"blocks must be a list, got {type(blocks).__name__}"
            raise TypeError(msg)
        return cls(
            blocks=[Block.from_dict(b) for b in blocks],
            entity_map=_entity_map_from_raw(raw.get("entityMap")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "blocks": [b.to_dict() for b in self.blocks],
            "entityMap": {k: e.to_dict() for k, e in self.entity_map.items()},
        }
