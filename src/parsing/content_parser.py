"""Message-content parser.

Turns a raw reply string into an ordered list of typed content blocks:
fenced code, Markdown tables, headings, list items, paragraphs and blank
spacers. Parsing never raises; malformed regions degrade to plain text or
are dropped.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from typing import NamedTuple

from src.models.content import (
    DEFAULT_CODE_LANGUAGE,
    Alignment,
    Blank,
    CodeBlock,
    ContentBlock,
    Heading,
    ListItem,
    Paragraph,
    Table,
)
from src.parsing.scanner import (
    SpanKind,
    scan_fences,
    scan_tables,
    split_cells,
    split_fence,
)

logger = logging.getLogger(__name__)

# Bold runs first so that ``**x**`` is not eaten by the italic rule
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")

_HEADING_PREFIXES = (("# ", 1), ("## ", 2), ("### ", 3))
_LIST_PREFIX = "- "


class SourcedBlock(NamedTuple):
    """A parsed block together with the exact input text it came from."""

    block: ContentBlock
    source: str


def format_inline(line: str) -> str:
    """Apply bold and italic markup to a line of prose."""
    line = _BOLD_RE.sub(r"<strong>\1</strong>", line)
    return _ITALIC_RE.sub(r"<em>\1</em>", line)


def classify_line(line: str) -> ContentBlock:
    """Classify a single line without looking at its neighbours."""
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, text=line[len(prefix) :])

    stripped = line.strip()
    if stripped.startswith(_LIST_PREFIX):
        return ListItem(text=line.lstrip()[len(_LIST_PREFIX) :])
    if not stripped:
        return Blank()
    return Paragraph(html=format_inline(line))


def _alignment(cell: str) -> Alignment:
    if cell.startswith(":") and cell.endswith(":") and len(cell) > 1:
        return Alignment.CENTER
    if cell.endswith(":"):
        return Alignment.RIGHT
    return Alignment.LEFT


def parse_table(source: str) -> Table:
    """Build a table block from a scanned table region."""
    lines = [line for line in source.split("\n") if line.strip()]
    return Table(
        header_cells=split_cells(lines[0]),
        column_alignment=[_alignment(cell) for cell in split_cells(lines[1])],
        rows=[split_cells(line) for line in lines[2:]],
    )


def parse_code_block(source: str) -> CodeBlock | None:
    """Build a code block from a closed fence, or None if it is malformed."""
    parts = split_fence(source)
    if parts is None:
        return None
    language, body = parts
    return CodeBlock(language=language or DEFAULT_CODE_LANGUAGE, code=body.strip())


def _parse_lines(fragment: str) -> Iterator[SourcedBlock]:
    lines = fragment.split("\n")
    last = len(lines) - 1
    for i, line in enumerate(lines):
        yield SourcedBlock(classify_line(line), line if i == last else line + "\n")


def _parse_text(text: str, start: int, end: int) -> Iterator[SourcedBlock]:
    for span in scan_tables(text, start, end):
        source = span.slice(text)
        if span.kind is SpanKind.TABLE:
            yield SourcedBlock(parse_table(source), source)
        else:
            yield from _parse_lines(source)


def parse_sourced(text: str) -> list[SourcedBlock]:
    """Parse text into blocks, each paired with its source substring.

    Joining the sources of the result reproduces ``text`` whenever every
    fence in it is well-formed.

    Args:
        text: Complete or partial reply text.

    Returns:
        Sourced blocks in document order.
    """
    result: list[SourcedBlock] = []

    for span in scan_fences(text):
        source = span.slice(text)
        if span.kind is SpanKind.TEXT:
            result.extend(_parse_text(text, span.start, span.end))
            continue

        block = parse_code_block(source) if span.kind is SpanKind.FENCE else None
        if block is None:
            logger.debug(f"Dropping malformed code fence at offset {span.start}")
            continue
        result.append(SourcedBlock(block, source))

    return result


def parse(text: str) -> list[ContentBlock]:
    """Parse reply text into content blocks in document order."""
    return [sourced.block for sourced in parse_sourced(text)]


def _unformat_inline(html: str) -> str:
    for tag, marker in (("strong", "**"), ("em", "*")):
        html = html.replace(f"<{tag}>", marker).replace(f"</{tag}>", marker)
    return html


def _table_lines(table: Table) -> list[str]:
    markers = {
        Alignment.LEFT: "---",
        Alignment.CENTER: ":---:",
        Alignment.RIGHT: "---:",
    }
    rows = [table.header_cells, [markers[a] for a in table.column_alignment], *table.rows]
    return ["| " + " | ".join(row) + " |" for row in rows]


def render_to_plain_text(blocks: Iterable[ContentBlock]) -> str:
    """Render blocks back to Markdown-style plain text.

    Parsing the result yields equivalent blocks. Copying a message uses its
    raw content instead, so this is the canonical form for comparisons.
    """
    lines: list[str] = []
    for block in blocks:
        if isinstance(block, CodeBlock):
            lines.append(f"```{block.language}\n{block.code}\n```")
        elif isinstance(block, Table):
            lines.extend(_table_lines(block))
        elif isinstance(block, Heading):
            lines.append("#" * block.level + " " + block.text)
        elif isinstance(block, ListItem):
            lines.append(_LIST_PREFIX + block.text)
        elif isinstance(block, Paragraph):
            lines.append(_unformat_inline(block.html))
        else:
            lines.append("")
    return "\n".join(lines)
