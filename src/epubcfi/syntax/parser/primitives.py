"""Primitive parsing utilities for the CFI parser.

This module provides the leaves of the grammar: literal delimiters,
bounded unsigned integers, floating point numbers, alphanumeric runs and
digit runs. Every primitive returns a ParseResult on success or None on
mismatch; since cursors are immutable, a mismatch never consumes input.

Error Context:
    Functions store error context on failure via set_parse_error().
    Retrieve with get_last_parse_error() for detailed diagnostics.
"""

from dataclasses import dataclass
from threading import local as thread_local

from epubcfi.diagnostics import Diagnostic, ErrorTemplate
from epubcfi.syntax.cursor import Cursor, ParseResult

__all__ = [
    "ParseErrorContext",
    "clear_parse_error",
    "expect_literal",
    "get_last_parse_error",
    "is_ascii_alnum",
    "parse_alphanumeric",
    "parse_digits",
    "parse_float",
    "parse_unsigned_integer",
    "set_parse_error",
]

# ASCII digits only. str.isdigit() accepts Unicode digits like ² which
# int() rejects.
_ASCII_DIGITS: str = "0123456789"

_ASCII_LETTERS: str = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

_SIGNS: str = "+-"

_EXPONENT_MARKERS: str = "eE"

# Thread-local storage for parse error context
_error_thread_local = thread_local()


@dataclass(frozen=True, slots=True)
class ParseErrorContext:
    """Context information for parse failures.

    Retrieve via get_last_parse_error() after a parser returns None.

    Attributes:
        diagnostic: Structured description of the failure (no span yet)
        position: Character position in source where error occurred
    """

    diagnostic: Diagnostic
    position: int


def set_parse_error(diagnostic: Diagnostic, position: int) -> None:
    """Store parse error context for later retrieval."""
    _error_thread_local.last_error = ParseErrorContext(
        diagnostic=diagnostic, position=position
    )


def get_last_parse_error() -> ParseErrorContext | None:
    """Get the last parse error context (if any).

    Example:
        >>> result = parse_digits(cursor)
        >>> if result is None:
        ...     error = get_last_parse_error()
        ...     print(f"Error at position {error.position}: {error.diagnostic}")
    """
    return getattr(_error_thread_local, "last_error", None)


def clear_parse_error() -> None:
    """Clear the last parse error context."""
    _error_thread_local.last_error = None


def is_ascii_alnum(ch: str) -> bool:
    """Check if character is an ASCII letter or digit."""
    return ch in _ASCII_LETTERS or ch in _ASCII_DIGITS


def _fail_at(cursor: Cursor, diagnostic: Diagnostic) -> None:
    if cursor.is_eof:
        diagnostic = ErrorTemplate.unexpected_eof(cursor.pos, diagnostic.expected)
    set_parse_error(diagnostic, cursor.pos)


def expect_literal(cursor: Cursor, literal: str) -> ParseResult[str] | None:
    """Match a fixed literal such as "/", "!" or "epubcfi".

    Args:
        cursor: Current position in source
        literal: Exact text to match

    Returns:
        ParseResult(literal, cursor after literal), or None on mismatch
    """
    if cursor.slice_ahead(len(literal)) == literal:
        return ParseResult(literal, cursor.advance(len(literal)))

    # Report at the first character that differs
    mismatch = cursor
    for ch in literal:
        if mismatch.is_eof or mismatch.current != ch:
            break
        mismatch = mismatch.advance()
    _fail_at(mismatch, ErrorTemplate.expected_token(literal, mismatch.describe_current()))
    return None


def parse_digits(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a run of one or more ASCII digits: [0-9]+

    Examples:
        42 → "42"
        007 → "007"
    """
    start_cursor = cursor
    while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        cursor = cursor.advance()

    if cursor.pos == start_cursor.pos:
        _fail_at(cursor, ErrorTemplate.expected_integer(cursor.describe_current()))
        return None

    return ParseResult(start_cursor.slice_to(cursor.pos), cursor)


def parse_unsigned_integer(cursor: Cursor, max_value: int) -> ParseResult[int] | None:
    """Parse unsigned integer no larger than max_value.

    The whole digit run is consumed before the bound is checked, so "256"
    against an 8-bit bound fails rather than matching "25".

    Args:
        cursor: Current position in source
        max_value: Largest accepted value (255 for steps, 2**32-1 for offsets)

    Returns:
        ParseResult(value, new_cursor), or None if no digits or out of range
    """
    result = parse_digits(cursor)
    if result is None:
        return None

    # Width check first: int() refuses digit strings past sys.get_int_max_str_digits()
    significant = result.value.lstrip("0") or "0"
    if len(significant) > len(str(max_value)) or int(significant) > max_value:
        set_parse_error(
            ErrorTemplate.integer_out_of_range(result.value, max_value), cursor.pos
        )
        return None

    return ParseResult(int(significant), result.cursor)


def parse_float(cursor: Cursor) -> ParseResult[float] | None:  # noqa: PLR0911
    """Parse number: [+-]?([0-9]+(.[0-9]*)?|.[0-9]+)([eE][+-]?[0-9]+)?

    At least one digit is required in the mantissa. An exponent marker
    that is not followed by digits is left unconsumed.

    Examples:
        2 → 2.0
        2.5 → 2.5
        -0.75 → -0.75
        .5 → 0.5
        1e3 → 1000.0

    Note: PLR0911 (too many returns) is acceptable for parser grammar methods.
    """
    start_cursor = cursor

    if not cursor.is_eof and cursor.current in _SIGNS:
        cursor = cursor.advance()

    digit_count = 0
    while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        cursor = cursor.advance()
        digit_count += 1

    if not cursor.is_eof and cursor.current == ".":
        cursor = cursor.advance()
        while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
            cursor = cursor.advance()
            digit_count += 1

    if digit_count == 0:
        _fail_at(start_cursor, ErrorTemplate.expected_number(start_cursor.describe_current()))
        return None

    if not cursor.is_eof and cursor.current in _EXPONENT_MARKERS:
        exponent = cursor.advance()
        if not exponent.is_eof and exponent.current in _SIGNS:
            exponent = exponent.advance()
        exponent_digits = parse_digits(exponent)
        if exponent_digits is not None:
            cursor = exponent_digits.cursor

    return ParseResult(float(start_cursor.slice_to(cursor.pos)), cursor)


def parse_alphanumeric(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a run of one or more ASCII letters or digits: [a-zA-Z0-9]+

    Used for assertion parameter keys, parameter values and bare values.

    Examples:
        lang → "lang"
        note1 → "note1"
        2 → "2"
    """
    start_cursor = cursor
    while not cursor.is_eof and is_ascii_alnum(cursor.current):
        cursor = cursor.advance()

    if cursor.pos == start_cursor.pos:
        _fail_at(cursor, ErrorTemplate.expected_token("a-zA-Z0-9", cursor.describe_current()))
        return None

    return ParseResult(start_cursor.slice_to(cursor.pos), cursor)
