"""Tests for lexical primitives.

Covers literal matching, bounded integers, floats, alphanumeric runs, digit
runs and the thread-local error context they record on failure.
"""

from __future__ import annotations

import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from epubcfi.diagnostics import DiagnosticCode, ErrorTemplate
from epubcfi.syntax.cursor import Cursor
from epubcfi.syntax.parser.primitives import (
    clear_parse_error,
    expect_literal,
    get_last_parse_error,
    is_ascii_alnum,
    parse_alphanumeric,
    parse_digits,
    parse_float,
    parse_unsigned_integer,
    set_parse_error,
)
from tests.strategies import ALPHANUMERIC_CHARS, cfi_numbers


def _last_code() -> DiagnosticCode:
    context = get_last_parse_error()
    assert context is not None
    return context.diagnostic.code


# ============================================================================
# ERROR CONTEXT
# ============================================================================


class TestParseErrorContext:
    """Thread-local failure context."""

    def test_clear_then_get_returns_none(self) -> None:
        clear_parse_error()

        assert get_last_parse_error() is None

    def test_context_is_per_thread(self) -> None:
        """A failure recorded in one thread is invisible in another."""
        clear_parse_error()
        seen: list[object] = []

        def worker() -> None:
            parse_digits(Cursor("x", 0))
            seen.append(get_last_parse_error())

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

        assert seen[0] is not None
        assert get_last_parse_error() is None

    def test_set_parse_error_records_position(self) -> None:
        set_parse_error(ErrorTemplate.assertion_empty(), 7)
        context = get_last_parse_error()

        assert context is not None
        assert context.position == 7
        assert context.diagnostic.code == DiagnosticCode.ASSERTION_EMPTY


# ============================================================================
# LITERALS
# ============================================================================


class TestExpectLiteral:
    """expect_literal for delimiters and the epubcfi prefix."""

    def test_match_advances(self) -> None:
        result = expect_literal(Cursor("epubcfi(/6)", 0), "epubcfi")

        assert result is not None
        assert result.value == "epubcfi"
        assert result.cursor.pos == 7

    def test_mismatch_reports_first_differing_character(self) -> None:
        """Failure position is where the input stops matching."""
        assert expect_literal(Cursor("epubcfx(", 0), "epubcfi") is None
        context = get_last_parse_error()

        assert context is not None
        assert context.position == 6
        assert context.diagnostic.code == DiagnosticCode.EXPECTED_TOKEN
        assert context.diagnostic.message == "Expected 'epubcfi' but found 'x'"

    def test_mismatch_at_eof_is_unexpected_eof(self) -> None:
        assert expect_literal(Cursor("/6", 2), ")") is None

        assert _last_code() == DiagnosticCode.UNEXPECTED_EOF
        context = get_last_parse_error()
        assert context is not None
        assert context.diagnostic.expected == (")",)

    def test_truncated_prefix_is_unexpected_eof(self) -> None:
        assert expect_literal(Cursor("epub", 0), "epubcfi") is None

        assert _last_code() == DiagnosticCode.UNEXPECTED_EOF


# ============================================================================
# DIGITS AND INTEGERS
# ============================================================================


class TestParseDigits:
    """parse_digits accepts ASCII digits only."""

    def test_leading_zeros_kept(self) -> None:
        result = parse_digits(Cursor("007]", 0))

        assert result is not None
        assert result.value == "007"
        assert result.cursor.pos == 3

    def test_unicode_digit_rejected(self) -> None:
        """Superscript two is a Unicode digit but not an ASCII one."""
        assert parse_digits(Cursor("²", 0)) is None
        assert _last_code() == DiagnosticCode.EXPECTED_INTEGER


class TestParseUnsignedInteger:
    """Bounded unsigned integers."""

    @pytest.mark.parametrize(("text", "value"), [("0", 0), ("255", 255), ("0042", 42)])
    def test_within_bound(self, text: str, value: int) -> None:
        result = parse_unsigned_integer(Cursor(text, 0), 255)

        assert result is not None
        assert result.value == value
        assert result.cursor.is_eof

    def test_above_bound_fails_without_partial_match(self) -> None:
        """256 fails rather than matching 25."""
        assert parse_unsigned_integer(Cursor("256", 0), 255) is None

        assert _last_code() == DiagnosticCode.INTEGER_OUT_OF_RANGE

    def test_32_bit_bound(self) -> None:
        assert parse_unsigned_integer(Cursor("4294967295", 0), 2**32 - 1) is not None
        assert parse_unsigned_integer(Cursor("4294967296", 0), 2**32 - 1) is None

    def test_very_long_digit_run_is_out_of_range(self) -> None:
        """Digit runs longer than int() accepts still fail as out of range."""
        assert parse_unsigned_integer(Cursor("9" * 10_000, 0), 255) is None

        assert _last_code() == DiagnosticCode.INTEGER_OUT_OF_RANGE

    def test_no_digits(self) -> None:
        assert parse_unsigned_integer(Cursor("-1", 0), 255) is None

        assert _last_code() == DiagnosticCode.EXPECTED_INTEGER

    @given(st.integers(min_value=0, max_value=255))
    def test_every_8_bit_value_parses(self, value: int) -> None:
        result = parse_unsigned_integer(Cursor(str(value), 0), 255)

        assert result is not None
        assert result.value == value


# ============================================================================
# FLOATS
# ============================================================================


class TestParseFloat:
    """Signed decimal numbers with optional fraction and exponent."""

    @pytest.mark.parametrize(
        ("text", "value", "consumed"),
        [
            ("2", 2.0, 1),
            ("2.5", 2.5, 3),
            ("-0.75", -0.75, 5),
            ("+3", 3.0, 2),
            (".5", 0.5, 2),
            ("2.", 2.0, 2),
            ("1e3", 1000.0, 3),
            ("1.5E-2", 0.015, 6),
        ],
    )
    def test_valid_numbers(self, text: str, value: float, consumed: int) -> None:
        result = parse_float(Cursor(text, 0))

        assert result is not None
        assert result.value == pytest.approx(value)
        assert result.cursor.pos == consumed

    def test_exponent_without_digits_left_unconsumed(self) -> None:
        """A trailing 'e' belongs to whatever follows the number."""
        result = parse_float(Cursor("2e]", 0))

        assert result is not None
        assert result.value == 2.0
        assert result.cursor.pos == 1

    @pytest.mark.parametrize("text", ["", "-", ".", "+.", "x", "e5"])
    def test_no_mantissa_digits(self, text: str) -> None:
        assert parse_float(Cursor(text, 0)) is None

    def test_failure_code(self) -> None:
        assert parse_float(Cursor("x", 0)) is None

        assert _last_code() == DiagnosticCode.EXPECTED_NUMBER

    @given(cfi_numbers())
    def test_generated_numbers(self, pair: tuple[str, float]) -> None:
        text, value = pair
        result = parse_float(Cursor(text, 0))

        assert result is not None
        assert result.value == value
        assert result.cursor.is_eof


# ============================================================================
# ALPHANUMERIC RUNS
# ============================================================================


class TestParseAlphanumeric:
    """ASCII letters and digits only."""

    def test_stops_at_delimiter(self) -> None:
        result = parse_alphanumeric(Cursor("note1=x", 0))

        assert result is not None
        assert result.value == "note1"
        assert result.cursor.pos == 5

    @pytest.mark.parametrize("text", ["", "=", "-a", "é"])
    def test_rejects_non_alphanumeric_start(self, text: str) -> None:
        assert parse_alphanumeric(Cursor(text, 0)) is None

    @given(st.text(alphabet=ALPHANUMERIC_CHARS, min_size=1, max_size=30))
    def test_consumes_entire_run(self, text: str) -> None:
        result = parse_alphanumeric(Cursor(text + "]", 0))

        assert result is not None
        assert result.value == text

    def test_is_ascii_alnum(self) -> None:
        assert is_ascii_alnum("a")
        assert is_ascii_alnum("Z")
        assert is_ascii_alnum("7")
        assert not is_ascii_alnum("_")
        assert not is_ascii_alnum("é")
