"""Tests for cursor infrastructure.

Validates the immutable cursor pattern and cursor-located parse errors.
"""

from __future__ import annotations

import pytest

from epubcfi.syntax.cursor import Cursor, ParseError, ParseResult

# ============================================================================
# CURSOR BASIC TESTS
# ============================================================================


class TestCursorBasic:
    """Test basic cursor functionality."""

    def test_create_cursor(self) -> None:
        """Create cursor at position 0."""
        cursor = Cursor("/6/4", 0)

        assert cursor.source == "/6/4"
        assert cursor.pos == 0
        assert not cursor.is_eof

    def test_cursor_immutability(self) -> None:
        """Cursor is immutable (frozen dataclass)."""
        cursor = Cursor("/6/4", 0)

        with pytest.raises(AttributeError):
            cursor.pos = 2  # type: ignore[misc]

    def test_current_at_middle(self) -> None:
        cursor = Cursor("/6/4", 2)

        assert cursor.current == "/"

    def test_current_at_eof_raises(self) -> None:
        """current raises EOFError at end of input."""
        with pytest.raises(EOFError, match="Unexpected EOF"):
            _ = Cursor("/6", 2).current


# ============================================================================
# EOF DETECTION
# ============================================================================


class TestCursorEOF:
    """Test EOF detection."""

    def test_is_eof_true_at_end(self) -> None:
        assert Cursor("/6", 2).is_eof

    def test_is_eof_true_for_empty_source(self) -> None:
        assert Cursor("", 0).is_eof

    def test_describe_current_at_eof(self) -> None:
        """describe_current names EOF instead of a character."""
        assert Cursor("/6", 2).describe_current() == "EOF"
        assert Cursor("/6", 1).describe_current() == "6"


# ============================================================================
# NAVIGATION
# ============================================================================


class TestCursorNavigation:
    """Test advance, peek, slicing and expect."""

    def test_advance_returns_new_cursor(self) -> None:
        cursor = Cursor("/6/4", 0)
        advanced = cursor.advance(2)

        assert advanced.pos == 2
        assert cursor.pos == 0

    def test_advance_clamps_at_eof(self) -> None:
        """advance never moves past the end of source."""
        assert Cursor("/6", 1).advance(10).pos == 2

    def test_peek(self) -> None:
        cursor = Cursor("/6!", 0)

        assert cursor.peek() == "/"
        assert cursor.peek(2) == "!"
        assert cursor.peek(3) is None

    def test_slice_to(self) -> None:
        start = Cursor("123]", 0)

        assert start.slice_to(start.advance(3).pos) == "123"

    def test_slice_ahead_beyond_end(self) -> None:
        """slice_ahead returns what remains when n exceeds the input."""
        assert Cursor("epub", 0).slice_ahead(7) == "epub"

    def test_expect_match(self) -> None:
        result = Cursor("/6", 0).expect("/")

        assert result is not None
        assert result.pos == 1

    def test_expect_mismatch_and_eof(self) -> None:
        assert Cursor("/6", 0).expect("!") is None
        assert Cursor("/6", 2).expect("/") is None


# ============================================================================
# LINE AND COLUMN
# ============================================================================


class TestCursorLineColumn:
    """Test line:column computation."""

    def test_first_line(self) -> None:
        assert Cursor("epubcfi(/6)", 8).compute_line_col() == (1, 9)

    def test_after_newline(self) -> None:
        """Columns restart after each newline."""
        assert Cursor("epubcfi(\n/6)", 10).compute_line_col() == (2, 2)

    def test_start_of_source(self) -> None:
        assert Cursor("", 0).compute_line_col() == (1, 1)


# ============================================================================
# PARSE RESULT AND PARSE ERROR
# ============================================================================


class TestParseResult:
    """Test ParseResult container."""

    def test_holds_value_and_cursor(self) -> None:
        cursor = Cursor("/6", 1)
        result = ParseResult("/", cursor)

        assert result.value == "/"
        assert result.cursor is cursor


class TestParseError:
    """Test ParseError formatting."""

    def test_format_error_with_expected(self) -> None:
        error = ParseError("Unexpected EOF", Cursor("epubcfi(/6", 10), expected=(")",))

        assert error.format_error() == "1:11: Unexpected EOF (expected: ')')"

    def test_format_error_without_expected(self) -> None:
        error = ParseError("Empty assertion '[]'", Cursor("epubcfi(/6[])", 11))

        assert error.format_error() == "1:12: Empty assertion '[]'"

    def test_format_with_context_points_at_column(self) -> None:
        """The caret sits under the character at the error position."""
        source = "epubcfi(/6[])"
        error = ParseError("Empty assertion '[]'", Cursor(source, 11))

        lines = error.format_with_context().split("\n")

        assert lines[0] == "1:12: Empty assertion '[]'"
        assert lines[1] == ""
        assert lines[2] == f"   1 | {source}"
        assert lines[3].index("^") == lines[2].index(source) + 11

    def test_format_with_context_second_line(self) -> None:
        error = ParseError("bad", Cursor("epubcfi(\n/x)", 10))

        lines = error.format_with_context().split("\n")

        assert lines[0].startswith("2:2:")
        assert lines[2] == "   2 | /x)"
