"""Data models for block-based rich text content."""

from drafthtml.models.document import (
    Block,
    BlockType,
    Document,
    Entity,
    EntityKey,
    EntityRange,
    EntityType,
    InlineStyle,
    Mutability,
    StyleRange,
    normalise_entity_key,
    normalise_entity_map,
)
from drafthtml.models.offsets import Utf16Index, utf16_units

__all__ = [
    "Block",
    "BlockType",
    "Document",
    "Entity",
    "EntityKey",
    "EntityRange",
    "EntityType",
    "InlineStyle",
    "Mutability",
    "StyleRange",
    "Utf16Index",
    "normalise_entity_key",
    "normalise_entity_map",
    "utf16_units",
]
