"""Single-pass scanner that splits reply text into typed spans.

Fenced code regions are located first; each remaining text region can then
be scanned line by line for Markdown tables. Spans carry offsets into the
scanned string so that callers can recover the exact source of every block.
"""

from dataclasses import dataclass
from enum import Enum

FENCE = "```"


class SpanKind(str, Enum):
    """Kind of region found by the scanner."""

    TEXT = "text"
    FENCE = "fence"
    UNTERMINATED_FENCE = "unterminated_fence"
    TABLE = "table"


@dataclass(frozen=True)
class Span:
    """A half-open ``[start, end)`` region of the scanned text."""

    kind: SpanKind
    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


@dataclass(frozen=True)
class _Line:
    start: int
    end: int  # excludes the newline
    next_start: int  # includes the newline, if any


def scan_fences(text: str) -> list[Span]:
    """Split text into fence and text spans.

    A fence opens at a triple backtick and closes at the next triple
    backtick after it. A fence that is never closed runs to the end of the
    text. It is reported as ``UNTERMINATED_FENCE`` only when it opens its
    text region (the start of the text or right after a closed fence);
    otherwise it stays part of the preceding text.

    Args:
        text: Raw reply text, complete or partial.

    Returns:
        Non-empty spans covering the whole text, in order.
    """
    spans: list[Span] = []
    text_start = 0
    pos = 0

    while True:
        open_at = text.find(FENCE, pos)
        if open_at == -1:
            break
        close_at = text.find(FENCE, open_at + len(FENCE))
        if close_at == -1:
            if open_at == text_start:
                spans.append(Span(SpanKind.UNTERMINATED_FENCE, open_at, len(text)))
                return spans
            break

        if open_at > text_start:
            spans.append(Span(SpanKind.TEXT, text_start, open_at))

        end = close_at + len(FENCE)
        spans.append(Span(SpanKind.FENCE, open_at, end))
        text_start = pos = end

    if text_start < len(text):
        spans.append(Span(SpanKind.TEXT, text_start, len(text)))
    return spans


def split_fence(source: str) -> tuple[str | None, str] | None:
    """Split a closed fence into its language tag and body.

    The opening line must be the backticks, an optional word-character
    language tag and a newline; anything else is not a code block.

    Returns:
        ``(language, body)`` with ``language`` None when omitted, or None
        when the fence is malformed.
    """
    if not (source.startswith(FENCE) and source.endswith(FENCE)):
        return None
    if len(source) < 2 * len(FENCE):
        return None

    inner = source[len(FENCE) : -len(FENCE)]
    newline = inner.find("\n")
    if newline == -1:
        return None

    tag = inner[:newline]
    if tag and not all(ch.isascii() and (ch.isalnum() or ch == "_") for ch in tag):
        return None
    return (tag or None), inner[newline + 1 :]


def _lines(text: str, start: int, end: int) -> list[_Line]:
    lines: list[_Line] = []
    pos = start
    while True:
        newline = text.find("\n", pos, end)
        if newline == -1:
            lines.append(_Line(pos, end, end))
            return lines
        lines.append(_Line(pos, newline, newline + 1))
        pos = newline + 1


def split_cells(line: str) -> list[str]:
    """Split a pipe-delimited row into trimmed cells.

    Only the empty fragments produced by the outer delimiters are dropped;
    empty interior cells are kept.
    """
    parts = line.strip().split("|")
    if parts and not parts[0].strip():
        parts = parts[1:]
    if parts and not parts[-1].strip():
        parts = parts[:-1]
    return [part.strip() for part in parts]


def is_pipe_row(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= 3 and stripped[0] == "|" and stripped[-1] == "|"


def is_alignment_row(line: str) -> bool:
    """Check for a table delimiter row such as ``|:--|:-:|--:|``."""
    if not is_pipe_row(line):
        return False
    cells = split_cells(line)
    if not cells:
        return False
    for cell in cells:
        core = cell.removeprefix(":").removesuffix(":")
        if not core or core.strip("-"):
            return False
    return True


def scan_tables(text: str, start: int = 0, end: int | None = None) -> list[Span]:
    """Split a text region into table and text spans.

    A table is a pipe-delimited header line, an alignment line and one or
    more pipe-delimited data lines. The table span includes the newline
    after its last row. Scanning resumes after the last consumed row, so
    adjacent tables are found one after another.

    Args:
        text: The string holding the region.
        start: Region start offset.
        end: Region end offset (defaults to the end of ``text``).

    Returns:
        Non-empty spans covering ``text[start:end]``, in order.
    """
    if end is None:
        end = len(text)
    if start >= end:
        return []

    lines = _lines(text, start, end)
    spans: list[Span] = []
    text_start = start
    i = 0

    while i < len(lines):
        if (
            i + 2 < len(lines)
            and is_pipe_row(_line_text(text, lines[i]))
            and is_alignment_row(_line_text(text, lines[i + 1]))
            and is_pipe_row(_line_text(text, lines[i + 2]))
        ):
            j = i + 3
            while j < len(lines) and is_pipe_row(_line_text(text, lines[j])):
                j += 1

            table_start = lines[i].start
            table_end = lines[j - 1].next_start
            if table_start > text_start:
                spans.append(Span(SpanKind.TEXT, text_start, table_start))
            spans.append(Span(SpanKind.TABLE, table_start, table_end))
            text_start = table_end
            i = j
        else:
            i += 1

    if text_start < end:
        spans.append(Span(SpanKind.TEXT, text_start, end))
    return spans


def _line_text(text: str, line: _Line) -> str:
    return text[line.start : line.end]
