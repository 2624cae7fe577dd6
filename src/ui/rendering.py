"""Render parsed content blocks for the chat view.

Code blocks are rendered as NiceGUI code elements so they get syntax
highlighting and a copy button; every other block becomes HTML.
"""

import html
from collections.abc import Iterable

from nicegui import ui

from src.models.content import (
    Alignment,
    Blank,
    CodeBlock,
    ContentBlock,
    Heading,
    ListItem,
    Paragraph,
    Table,
)
from src.parsing.content_parser import parse

_ALIGN_CLASSES = {
    Alignment.LEFT: "text-left",
    Alignment.CENTER: "text-center",
    Alignment.RIGHT: "text-right",
}

_HEADING_CLASSES = {
    1: "text-2xl font-bold mt-6 mb-4",
    2: "text-xl font-bold mt-5 mb-3",
    3: "text-lg font-bold mt-4 mb-2",
}


def _cell_class(alignment: list[Alignment], index: int) -> str:
    # Rows may be longer than the alignment row
    if index < len(alignment):
        return _ALIGN_CLASSES[alignment[index]]
    return _ALIGN_CLASSES[Alignment.LEFT]


def table_to_html(table: Table) -> str:
    """Render a table, indexing cells by position whatever the row length."""
    align = table.column_alignment
    head = "".join(
        f'<th class="px-4 py-2 {_cell_class(align, i)} text-sm font-medium">{html.escape(cell)}</th>'
        for i, cell in enumerate(table.header_cells)
    )
    body = []
    for r, row in enumerate(table.rows):
        stripe = "row-even" if r % 2 == 0 else "row-odd"
        cells = "".join(
            f'<td class="px-4 py-2 {_cell_class(align, i)} text-sm">{html.escape(cell)}</td>'
            for i, cell in enumerate(row)
        )
        body.append(f'<tr class="{stripe}">{cells}</tr>')
    return (
        '<div class="overflow-x-auto my-4"><table class="chat-table min-w-full">'
        f"<thead><tr>{head}</tr></thead><tbody>{''.join(body)}</tbody></table></div>"
    )


def block_to_html(block: ContentBlock) -> str:
    """Render one non-code block as HTML.

    Heading, list and table text is escaped. Paragraph HTML already carries
    bold/italic markup and is emitted as is.
    """
    if isinstance(block, Table):
        return table_to_html(block)
    if isinstance(block, Heading):
        return f'<h{block.level} class="{_HEADING_CLASSES[block.level]}">{html.escape(block.text)}</h{block.level}>'
    if isinstance(block, ListItem):
        return f'<li class="ml-4">{html.escape(block.text)}</li>'
    if isinstance(block, Paragraph):
        return f'<p class="mb-3 leading-relaxed whitespace-pre-wrap break-words">{block.html}</p>'
    if isinstance(block, Blank):
        return "<br>"
    if isinstance(block, CodeBlock):
        return (
            f'<pre class="code-block"><code class="language-{html.escape(block.language)}">'
            f"{html.escape(block.code)}</code></pre>"
        )
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def blocks_to_html(blocks: Iterable[ContentBlock]) -> str:
    return "".join(block_to_html(block) for block in blocks)


def group_blocks(blocks: Iterable[ContentBlock]) -> list[str | CodeBlock]:
    """Merge runs of non-code blocks into HTML chunks, keeping code blocks apart."""
    groups: list[str | CodeBlock] = []
    pending: list[ContentBlock] = []
    for block in blocks:
        if isinstance(block, CodeBlock):
            if pending:
                groups.append(blocks_to_html(pending))
                pending = []
            groups.append(block)
        else:
            pending.append(block)
    if pending:
        groups.append(blocks_to_html(pending))
    return groups


def render_code_block(block: CodeBlock) -> None:
    with ui.column().classes("w-full gap-0 my-4 rounded-md overflow-hidden"):
        with ui.row().classes("w-full code-header px-4 py-2 text-xs items-center"):
            ui.label(block.language)
        ui.code(block.code, language=block.language).classes("w-full")


def render_content(content: str) -> None:
    """Parse message text and render it into the current NiceGUI container."""
    for group in group_blocks(parse(content)):
        if isinstance(group, CodeBlock):
            render_code_block(group)
        else:
            ui.html(group, sanitize=False).classes("w-full text-sm")
