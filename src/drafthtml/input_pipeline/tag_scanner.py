"""Regex tag scanning for the supported inline tag subset.

Finds matched open/close pairs of one tag name inside a block's markup and
maps each pair to a character span of the block's plain text.

Uses regex rather than DOM parsing: only a small, known tag subset is
recognised, and character offsets must be computed against the tag-stripped
text exactly as ``strip_tags`` produces it.

Pairing rule: every qualifying opening tag pairs with the nearest unused
closing tag that follows it and precedes the next qualifying opening tag.
Tags of other names nested inside are skipped over; a tag nested inside
another of the same name is best-effort only.

Known limitation: the inner text of a pair is located in the block text by
first-occurrence search, so when the same text occurs twice in a block the
earlier occurrence is reported.
"""

from __future__ import annotations

import html as html_module
import re
from collections.abc import Callable
from dataclasses import dataclass

# Any tag, including closing tags and comments
TAG_PATTERN = re.compile(r"<[^>]*>")

type AttrFilter = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class TagMatch:
    """A matched tag pair mapped onto the block's plain text.

    Attributes:
        start: Offset of the inner text within the plain text.
        length: Length of the inner text.
        open_tag: The full opening tag markup, e.g. ``<a href="...">``.
        inner_html: Markup between the opening and closing tags.
    """

    start: int
    length: int
    open_tag: str
    inner_html: str

    @property
    def end(self) -> int:
        return self.start + self.length


def strip_tags(markup: str) -> str:
    """Remove every tag from *markup*, leaving the text between them."""
    return TAG_PATTERN.sub("", markup)


def plain_text(markup: str, decode: bool = True) -> str:
    """Tag-stripped text of *markup*, with character references decoded."""
    text = strip_tags(markup)
    return html_module.unescape(text) if decode else text


def attribute_value(tag_markup: str, name: str) -> str | None:
    """Return the quoted value of attribute *name* in an opening tag.

    Accepts double- or single-quoted values.  ``data-style`` does not match
    ``style``.
    """
    match = re.search(
        rf"(?<![\w-]){re.escape(name)}\s*=\s*(?:\"([^\"]*)\"|'([^']*)')",
        tag_markup,
        re.IGNORECASE,
    )
    if match is None:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


def style_property(style: str | None, prop: str) -> str | None:
    """Return the value of CSS property *prop* in an inline ``style`` string.

    ``color`` does not match ``background-color``.
    """
    if not style:
        return None
    match = re.search(
        rf"(?<![\w-]){re.escape(prop)}\s*:\s*([^;\"'\s]+)", style, re.IGNORECASE
    )
    return match.group(1) if match else None


def _open_pattern(tag: str) -> re.Pattern[str]:
    # Group 1 is the attribute string; "<b" must not match "<br" or "<blockquote".
    return re.compile(rf"<{re.escape(tag)}(\s[^>]*)?>", re.IGNORECASE)


def _close_pattern(tag: str) -> re.Pattern[str]:
    return re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE)


def scan_tag(
    markup: str,
    tag: str,
    text: str,
    attr_filter: AttrFilter | None = None,
    decode: bool = True,
) -> list[TagMatch]:
    """Find matched *tag* pairs in *markup* and locate them in *text*.

    Args:
        markup: Inline markup of one block.
        tag: Tag name to scan for, e.g. ``"strong"``.
        text: The block's plain text (``plain_text(markup, decode)``).
        attr_filter: Optional predicate over the opening tag's attribute
            string; opening tags failing it are ignored entirely.
        decode: Decode character references in inner text before locating it.

    Returns:
        Matches in opening-tag order.  Pairs whose inner text cannot be found
        in *text* are dropped.
    """
    opens = [
        m
        for m in _open_pattern(tag).finditer(markup)
        if attr_filter is None or attr_filter(m.group(1) or "")
    ]
    closes = list(_close_pattern(tag).finditer(markup))

    matches: list[TagMatch] = []
    for index, open_match in enumerate(opens):
        limit = opens[index + 1].start() if index + 1 < len(opens) else len(markup)

        close_match = None
        for j, candidate in enumerate(closes):
            if candidate.start() < open_match.end():
                continue
            if candidate.start() < limit:
                close_match = closes.pop(j)
            break

        if close_match is None:
            continue

        inner = markup[open_match.end() : close_match.start()]
        inner_text = plain_text(inner, decode)
        position = text.find(inner_text)
        if position == -1:
            continue
        matches.append(
            TagMatch(
                start=position,
                length=len(inner_text),
                open_tag=open_match.group(0),
                inner_html=inner,
            )
        )

    return matches
