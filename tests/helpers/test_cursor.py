"""Tests for cursor marker helper."""

from __future__ import annotations

import pytest
from lsprotocol.types import Position

from tests.helpers.cursor import extract_cursor, extract_cursor_offset


class TestExtractCursor:
    def test_single_line_end(self) -> None:
        text, pos = extract_cursor(text_with_cursor="picocom -b<CURSOR>")
        assert text == "picocom -b"
        assert pos == Position(line=0, character=10)

    def test_second_line(self) -> None:
        text, pos = extract_cursor(text_with_cursor="ls\npicocom <CURSOR>")
        assert text == "ls\npicocom "
        assert pos == Position(line=1, character=8)

    def test_custom_marker(self) -> None:
        text, pos = extract_cursor(text_with_cursor="picocom |-b", marker="|")
        assert text == "picocom -b"
        assert pos == Position(line=0, character=8)

    def test_missing_marker_raises(self) -> None:
        with pytest.raises(ValueError, match="not found"):
            extract_cursor(text_with_cursor="picocom")

    def test_multiple_markers_raise(self) -> None:
        with pytest.raises(ValueError, match="Multiple"):
            extract_cursor(text_with_cursor="<CURSOR>picocom<CURSOR>")


class TestExtractCursorOffset:
    def test_offset_spans_lines(self) -> None:
        text, offset = extract_cursor_offset(text_with_cursor="ab\ncd<CURSOR>")
        assert text == "ab\ncd"
        assert offset == 5
