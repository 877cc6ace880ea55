"""Shared pytest fixtures for drafthtml tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from drafthtml.config import Settings, get_settings


def raw_block(
    text: str,
    block_type: str = "unstyled",
    styles: list[tuple[str, int, int]] | None = None,
    entities: list[tuple[int, int, int]] | None = None,
    key: str = "blk",
    **data: Any,
) -> dict[str, Any]:
    """Build a block in the raw camelCase content shape.

    ``styles`` are ``(style, offset, length)`` and ``entities`` are
    ``(key, offset, length)`` tuples; keyword arguments become block data.
    """
    return {
        "key": key,
        "data": data,
        "text": text,
        "type": block_type,
        "depth": 0,
        "inlineStyleRanges": [
            {"style": s, "offset": o, "length": n} for s, o, n in styles or []
        ],
        "entityRanges": [
            {"key": k, "offset": o, "length": n} for k, o, n in entities or []
        ],
    }


def raw_content(
    *blocks: dict[str, Any], entity_map: dict[Any, Any] | None = None
) -> dict[str, Any]:
    """Wrap raw blocks into raw content with an entity map."""
    return {"blocks": list(blocks), "entityMap": entity_map or {}}


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Keep the cached Settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings that ignore any developer .env file."""
    return Settings(_env_file=None)  # type: ignore[call-arg]
