"""drafthtml - Convert block-based rich text content to and from HTML.

Rich text editors that store content as blocks of plain text annotated with
style and entity ranges can exchange that content with HTML consumers
(renderers, email, search indexing) through ``to_html`` and ``from_html``.
"""

import logging

from drafthtml.export import to_html
from drafthtml.input_pipeline import from_html
from drafthtml.models import (
    Block,
    BlockType,
    Document,
    Entity,
    EntityRange,
    EntityType,
    InlineStyle,
    Mutability,
    StyleRange,
)

__version__ = "0.1.0"

# Library code never configures handlers; the CLI does.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Block",
    "BlockType",
    "Document",
    "Entity",
    "EntityRange",
    "EntityType",
    "InlineStyle",
    "Mutability",
    "StyleRange",
    "__version__",
    "from_html",
    "to_html",
]
