"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Syntax errors (literals, numbers, structure)
        2000-2099: Assertion errors (bracketed assertion payloads)
        2100-2199: Input errors (caller-level contract violations)
        3000-3999: Limit errors (nesting and traversal depth)
        9000-9999: Grammar defects (never expected at runtime)
    """

    # Syntax errors (1000-1999)
    UNEXPECTED_EOF = 1001
    EXPECTED_TOKEN = 1002
    EXPECTED_INTEGER = 1003
    EXPECTED_NUMBER = 1004
    INTEGER_OUT_OF_RANGE = 1005
    EXPECTED_OFFSET = 1006
    EXPECTED_PATH_OR_OFFSET = 1007
    EMPTY_LOCAL_PATH = 1008

    # Assertion errors (2000-2099)
    ASSERTION_EMPTY = 2001
    ASSERTION_INVALID = 2002

    # Input errors (2100-2199)
    INCOMPLETE_INPUT = 2101

    # Limit errors (3000-3999)
    NESTING_DEPTH_EXCEEDED = 3001
    TRAVERSAL_DEPTH_EXCEEDED = 3002

    # Grammar defects (9000-9999)
    AMBIGUOUS_ALTERNATIVE = 9001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or
                line/column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for errors without a position)
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        expected: Tokens the parser would have accepted at span
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    help_url: str | None = None
    expected: tuple[str, ...] = ()
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[ASSERTION_EMPTY]: Empty assertion '[]'
              --> line 1, column 12
              = help: Put a value or key=value parameters between the brackets
              = note: see https://idpf.org/epub/linking/cfi/epub-cfi.html#sec-path-res

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
