"""Typed content blocks produced by the message-content parser.

Each block is one classified unit of a reply: a fenced code block, a
Markdown table, a heading, a list item, a paragraph or a blank spacer.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

DEFAULT_CODE_LANGUAGE = "javascript"


class Alignment(str, Enum):
    """Horizontal alignment of a table column."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class CodeBlock(BaseModel):
    """A fenced code block.

    Attributes:
        language: Language tag from the opening fence.
        code: Fence body with surrounding whitespace stripped.
    """

    kind: Literal["code"] = "code"
    language: str = DEFAULT_CODE_LANGUAGE
    code: str


class Table(BaseModel):
    """A Markdown table.

    Rows are kept as written. A row may have more or fewer cells than
    the header; renderers index cells by position.
    """

    kind: Literal["table"] = "table"
    header_cells: list[str]
    column_alignment: list[Alignment]
    rows: list[list[str]] = Field(default_factory=list)


class Heading(BaseModel):
    kind: Literal["heading"] = "heading"
    level: Literal[1, 2, 3]
    text: str


class ListItem(BaseModel):
    kind: Literal["list_item"] = "list_item"
    text: str


class Paragraph(BaseModel):
    """A line of prose with bold/italic markup already applied.

    ``html`` is trusted inline markup and must be rendered unescaped.
    """

    kind: Literal["paragraph"] = "paragraph"
    html: str


class Blank(BaseModel):
    kind: Literal["blank"] = "blank"


ContentBlock = Annotated[
    CodeBlock | Table | Heading | ListItem | Paragraph | Blank,
    Field(discriminator="kind"),
]
