"""Tests for the content data models and their raw-shape conversion."""

from __future__ import annotations

import pytest

from drafthtml.models import (
    Block,
    BlockType,
    Document,
    Entity,
    EntityRange,
    StyleRange,
    normalise_entity_key,
)
from tests.conftest import raw_block, raw_content


class TestNormaliseEntityKey:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(0, 0), ("0", 0), (" 12 ", 12), ("-1", -1), ("abc", "abc"), (True, "True")],
    )
    def test_normalise(self, raw: object, expected: object) -> None:
        assert normalise_entity_key(raw) == expected


class TestEntity:
    """Entity kind decides the rendered wrapper."""

    def test_link_type_is_link_without_url(self) -> None:
        assert Entity("LINK").is_link

    def test_custom_with_url_is_link(self) -> None:
        entity = Entity("CUSTOM", data={"url": "https://x.org"})
        assert entity.is_link
        assert not entity.is_color

    def test_custom_with_color(self) -> None:
        entity = Entity("CUSTOM", data={"color": "red"})
        assert entity.is_color
        assert not entity.is_link

    def test_url_wins_over_color(self) -> None:
        entity = Entity("CUSTOM", data={"url": "u", "color": "red"})
        assert entity.is_link
        assert not entity.is_color

    def test_empty_values_ignored(self) -> None:
        entity = Entity("CUSTOM", data={"url": "", "color": None})
        assert entity.url is None
        assert entity.color is None

    def test_from_dict_defaults(self) -> None:
        entity = Entity.from_dict({"type": "LINK", "data": None})
        assert entity == Entity("LINK", "MUTABLE", {})


class TestBlock:
    def test_from_dict(self) -> None:
        block = Block.from_dict(
            raw_block(
                "Hello",
                "header-one",
                styles=[("BOLD", 0, 5)],
                entities=[("3", 1, 2)],
                key="k1",
                textAlignment="center",
            )
        )
        assert block == Block(
            text="Hello",
            type=BlockType.HEADER_ONE,
            key="k1",
            data={"textAlignment": "center"},
            inline_style_ranges=[StyleRange("BOLD", 0, 5)],
            entity_ranges=[EntityRange(3, 1, 2)],
        )
        assert block.text_alignment == "center"

    def test_list_data_read_as_empty(self) -> None:
        raw = raw_block("x")
        raw["data"] = []
        assert Block.from_dict(raw).data == {}

    def test_missing_fields_default(self) -> None:
        block = Block.from_dict({})
        assert (block.text, block.type, block.depth) == ("", "unstyled", 0)

    def test_unknown_type_preserved(self) -> None:
        assert Block.from_dict({"type": "atomic"}).type == "atomic"

    def test_to_dict_uses_camel_case(self) -> None:
        raw = raw_block("Hi", styles=[("ITALIC", 0, 2)], key="k")
        assert Block.from_dict(raw).to_dict() == raw


class TestDocument:
    def test_from_dict_normalises_entity_keys(self) -> None:
        document = Document.from_dict(
            raw_content(raw_block("x"), entity_map={"0": {"type": "LINK"}})
        )
        assert list(document.entity_map) == [0]
        assert document.entity("0") is document.entity(0)

    def test_entity_map_as_list(self) -> None:
        document = Document.from_dict(
            {"blocks": [], "entityMap": [{"type": "LINK"}, {"type": "CUSTOM"}]}
        )
        assert [e.type for e in document.entity_map.values()] == ["LINK", "CUSTOM"]
        assert list(document.entity_map) == [0, 1]

    def test_malformed_entity_skipped(self) -> None:
        document = Document.from_dict({"blocks": [], "entityMap": {"0": "oops"}})
        assert document.entity_map == {}

    def test_orphan_lookup_returns_none(self) -> None:
        assert Document().entity(5) is None

    def test_blocks_must_be_a_list(self) -> None:
        with pytest.raises(TypeError, match="blocks must be a list"):
            Document.from_dict({"blocks": "text"})

    def test_entity_map_must_be_mapping_or_list(self) -> None:
        with pytest.raises(TypeError, match="entityMap must be a mapping or a list"):
            Document.from_dict({"blocks": [], "entityMap": 3})

    def test_to_dict(self) -> None:
        document = Document(
            blocks=[Block(text="a", key="k")],
            entity_map={0: Entity("CUSTOM", "MUTABLE", {"color": "red"})},
        )
        assert document.to_dict() == {
            "blocks": [
                {
                    "key": "k",
                    "text": "a",
                    "type": "unstyled",
                    "depth": 0,
                    "inlineStyleRanges": [],
                    "entityRanges": [],
                    "data": {},
                }
            ],
            "entityMap": {
                0: {"type": "CUSTOM", "mutability": "MUTABLE", "data": {"color": "red"}}
            },
        }
