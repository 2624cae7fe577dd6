"""Message-content parsing and prompt attachment utilities.

Transforms raw model replies into structured, render-ready content blocks.

Responsibilities:
    - Fence and table scanning over reply text
    - Line classification into headings, list items, paragraphs and blanks
    - Inline bold/italic markup
    - Image attachment validation and data URI conversion

Parsing never raises: malformed regions degrade to plain text or are dropped.
"""

from src.parsing.content_parser import (
    SourcedBlock,
    parse,
    parse_sourced,
    render_to_plain_text,
)
from src.parsing.images import ImageAttachment, ImageAttachmentError

__all__ = [
    "ImageAttachment",
    "ImageAttachmentError",
    "SourcedBlock",
    "parse",
    "parse_sourced",
    "render_to_plain_text",
]
