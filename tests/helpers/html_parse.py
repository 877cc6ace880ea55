"""HTML parse helpers for test assertions.

``nesting_errors`` replays the markup through the standard library's
tokenising ``HTMLParser`` with a tag stack and reports every close tag that
does not match the innermost open element.  ``find_elements`` wraps
selectolax's lexbor parser for reading rendered markup back.
"""

from __future__ import annotations

from html.parser import HTMLParser

from selectolax.lexbor import LexborHTMLParser

_VOID_TAGS = frozenset(("br", "hr", "img", "input", "meta", "link", "wbr"))


class _NestingChecker(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.stack: list[str] = []
        self.errors: list[str] = []

    def handle_starttag(self, tag: str, attrs: list) -> None:  # noqa: ARG002
        if tag not in _VOID_TAGS:
            self.stack.append(tag)

    def handle_endtag(self, tag: str) -> None:
        if not self.stack:
            self.errors.append(f"</{tag}> with nothing open")
        elif self.stack[-1] != tag:
            self.errors.append(f"</{tag}> closes <{self.stack[-1]}>")
            if tag in self.stack:
                # Resynchronise so one crossing is reported once.
                del self.stack[self.stack.index(tag) :]
        else:
            self.stack.pop()


def nesting_errors(html: str) -> list[str]:
    """Return tag-mismatch errors in *html*; empty when properly nested."""
    checker = _NestingChecker()
    checker.feed(html)
    checker.close()
    return checker.errors + [f"<{tag}> never closed" for tag in checker.stack]


def find_elements(html: str, selector: str) -> list[dict[str, str]]:
    """Return attributes plus ``_text`` for every element matching *selector*."""
    tree = LexborHTMLParser(html)
    found = []
    for node in tree.css(selector):
        attrs = {k: v or "" for k, v in node.attributes.items()}
        attrs["_text"] = node.text() or ""
        found.append(attrs)
    return found
