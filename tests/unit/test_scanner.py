"""Unit tests for the fence and table scanner."""

import pytest

from src.parsing.scanner import (
    Span,
    SpanKind,
    is_alignment_row,
    scan_fences,
    scan_tables,
    split_cells,
    split_fence,
)


class TestScanFences:
    """Tests for fence span detection."""

    def test_plain_text_is_one_span(self) -> None:
        assert scan_fences("hello") == [Span(SpanKind.TEXT, 0, 5)]

    def test_empty_text_has_no_spans(self) -> None:
        assert scan_fences("") == []

    def test_closed_fence(self) -> None:
        text = "a```x\ny```b"

        assert scan_fences(text) == [
            Span(SpanKind.TEXT, 0, 1),
            Span(SpanKind.FENCE, 1, 10),
            Span(SpanKind.TEXT, 10, 11),
        ]

    def test_unterminated_fence_at_start_runs_to_end(self) -> None:
        text = "```py\nopen"

        assert scan_fences(text) == [Span(SpanKind.UNTERMINATED_FENCE, 0, len(text))]

    def test_unterminated_fence_after_closed_fence(self) -> None:
        text = "```a\n1``````py\nopen"

        assert scan_fences(text) == [
            Span(SpanKind.FENCE, 0, 9),
            Span(SpanKind.UNTERMINATED_FENCE, 9, len(text)),
        ]

    def test_unterminated_fence_after_text_stays_text(self) -> None:
        text = "ok ```py\nopen"

        assert scan_fences(text) == [Span(SpanKind.TEXT, 0, len(text))]

    def test_unterminated_fence_after_closed_fence_and_text(self) -> None:
        text = "x```a\n1```y```b"

        assert scan_fences(text) == [
            Span(SpanKind.TEXT, 0, 1),
            Span(SpanKind.FENCE, 1, 10),
            Span(SpanKind.TEXT, 10, len(text)),
        ]

    def test_spans_cover_text(self) -> None:
        text = "x```a\n1```y```b\n2```z"

        spans = scan_fences(text)

        assert "".join(span.slice(text) for span in spans) == text
        assert [span.kind for span in spans] == [
            SpanKind.TEXT,
            SpanKind.FENCE,
            SpanKind.TEXT,
            SpanKind.FENCE,
            SpanKind.TEXT,
        ]


class TestSplitFence:
    """Tests for fence language and body extraction."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("```py\nx\n```", ("py", "x\n")),
            ("```\nbody```", (None, "body")),
            ("```snake_case1\n```", ("snake_case1", "")),
            ("```inline```", None),
            ("```py x\nbody```", None),
            ("``````", None),
            ("```", None),
        ],
    )
    def test_split_fence(self, source: str, expected: tuple[str | None, str] | None) -> None:
        assert split_fence(source) == expected


class TestTableRows:
    """Tests for cell splitting and alignment rows."""

    def test_split_cells_trims(self) -> None:
        assert split_cells("|  a | b  |") == ["a", "b"]

    def test_split_cells_without_outer_pipes(self) -> None:
        assert split_cells("a | b") == ["a", "b"]

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("|---|", True),
            ("|:--|--:|", True),
            ("| :-: | --- |", True),
            ("|:|", False),
            ("| abc |", False),
            ("|-:-|", False),
            ("---", False),
        ],
    )
    def test_is_alignment_row(self, line: str, expected: bool) -> None:
        assert is_alignment_row(line) is expected


class TestScanTables:
    """Tests for table span detection."""

    def test_table_span_includes_trailing_newline(self) -> None:
        text = "| a |\n|---|\n| 1 |\nafter"

        assert scan_tables(text) == [
            Span(SpanKind.TABLE, 0, 18),
            Span(SpanKind.TEXT, 18, len(text)),
        ]

    def test_scans_inside_region(self) -> None:
        text = "```x\n```| a |\n|---|\n| 1 |"

        spans = scan_tables(text, 8, len(text))

        assert spans == [Span(SpanKind.TABLE, 8, len(text))]

    def test_empty_region(self) -> None:
        assert scan_tables("abc", 2, 2) == []

    def test_scanner_advances_past_each_table(self) -> None:
        text = "| a |\n|---|\n| 1 |\n\n| b |\n|---|\n| 2 |\n\n| c |\n|---|\n| 3 |\n"

        kinds = [span.kind for span in scan_tables(text)]

        assert kinds.count(SpanKind.TABLE) == 3
