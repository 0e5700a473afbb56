"""Core CFI parser implementation.

This module provides the CFIParser class that turns CFI text into the AST
defined in :mod:`epubcfi.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~epubcfi.syntax.cursor.Cursor`)
    to traverse source text. Each rule (in :mod:`~epubcfi.syntax.parser.rules`
    and :mod:`~epubcfi.syntax.parser.primitives`) returns either a
    :class:`~epubcfi.syntax.cursor.ParseResult` containing the parsed node and
    updated cursor position, or None on failure after recording why.

    CFIParser is the one place where a failed rule becomes an exception:
    a CFI either parses completely or raises; no partial AST escapes.

Security:
    Includes configurable input size and redirection depth limits.

See Also:
    - :mod:`epubcfi.syntax.ast` - All AST node type definitions
    - :mod:`epubcfi.syntax.cursor` - Cursor and ParseResult types
    - :mod:`epubcfi.syntax.parser.rules` - Grammar rules
"""

import logging
from dataclasses import replace

from epubcfi.constants import MAX_DEPTH, MAX_SOURCE_SIZE, MAX_STEP_INDEX
from epubcfi.core.depth_guard import DepthLimitExceededError, depth_clamp
from epubcfi.diagnostics import (
    CFIAssertionError,
    CFIError,
    CFIIncompleteInputError,
    CFISyntaxError,
    Diagnostic,
    DiagnosticCode,
    ErrorTemplate,
    SourceSpan,
)
from epubcfi.syntax.ast import Fragment
from epubcfi.syntax.cursor import Cursor, ParseError
from epubcfi.syntax.parser.primitives import clear_parse_error, get_last_parse_error
from epubcfi.syntax.parser.rules import ParseContext, parse_fragment

__all__ = ["CFIParser"]

logger = logging.getLogger(__name__)

# parse_redirected_path -> parse_path -> parse_local_path per nesting level
_FRAMES_PER_REDIRECTION: int = 3

# Stack left for the caller and for leaf rules below the deepest redirection
_RESERVED_FRAMES: int = 200

_ERROR_CLASSES: dict[DiagnosticCode, type[CFIError]] = {
    DiagnosticCode.ASSERTION_EMPTY: CFIAssertionError,
    DiagnosticCode.ASSERTION_INVALID: CFIAssertionError,
    DiagnosticCode.INCOMPLETE_INPUT: CFIIncompleteInputError,
    DiagnosticCode.NESTING_DEPTH_EXCEEDED: DepthLimitExceededError,
}


class CFIParser:
    """EPUB CFI parser using immutable cursor pattern.

    Design:
    - Immutable cursor: failed alternatives never consume input
    - Rules return ParseResult | None; only parse() raises
    - Error messages include line:column with source context

    Security:
    - Configurable max_source_size rejects oversized input before parsing
    - Configurable max_nesting_depth bounds '!' redirection recursion

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 64 KB)
        max_nesting_depth: Maximum nested redirections (default: 100)
        max_step_index: Largest accepted step index (default: 255)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size", "_max_step_index")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
        max_step_index: int | None = None,
    ) -> None:
        """Initialize parser with optional limits.

        Args:
            max_source_size: Maximum source size in characters (default: 64 KB).
                            Set to 0 to disable size limit (not recommended).
            max_nesting_depth: Maximum nested redirections (default: 100).
                              Clamped so the recursion fits the interpreter stack.
            max_step_index: Largest step index accepted (default: 255).
                           Widen for documents with more than 255 children per level.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        requested_depth = max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        self._max_nesting_depth = (
            depth_clamp(requested_depth * _FRAMES_PER_REDIRECTION, _RESERVED_FRAMES)
            // _FRAMES_PER_REDIRECTION
        )
        self._max_step_index = max_step_index if max_step_index is not None else MAX_STEP_INDEX
        if self._max_step_index < 0:
            msg = f"max_step_index must be >= 0, got {self._max_step_index}"
            raise ValueError(msg)

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed number of nested redirections."""
        return self._max_nesting_depth

    @property
    def max_step_index(self) -> int:
        """Largest accepted step index."""
        return self._max_step_index

    def parse(self, source: str) -> Fragment:
        """Parse CFI text into a Fragment.

        The whole input must be consumed: "epubcfi(" through the matching ")".

        Args:
            source: CFI text, e.g. "epubcfi(/6/4[chap01ref]!/4/2:10)"

        Returns:
            :class:`~epubcfi.syntax.ast.Fragment` root node

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            CFISyntaxError: Missing or malformed literal, integer or number
            CFIAssertionError: Empty or malformed assertion
            CFIIncompleteInputError: Characters left after the closing ")"
            DepthLimitExceededError: Too many nested redirections

        Example:
            >>> fragment = CFIParser().parse("epubcfi(/6/2!/4/1:5)")
            >>> fragment.path.step.size
            6
            >>> fragment.path.local_path.redirected_path.path.local_path.offset
            CharacterOffset(start_at_point=5, assertion=None)
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in CFIParser constructor to increase limit."
            )
            raise ValueError(msg)

        clear_parse_error()
        cursor = Cursor(source, 0)
        context = ParseContext(
            max_nesting_depth=self._max_nesting_depth,
            max_step_index=self._max_step_index,
        )

        result = parse_fragment(cursor, context)
        if result is None:
            raise self._build_error(source)

        if not result.cursor.is_eof:
            remaining = source[result.cursor.pos :]
            raise self._error_at(
                ErrorTemplate.incomplete_input(remaining), result.cursor
            )

        return result.value

    def _build_error(self, source: str) -> CFIError:
        """Convert the last recorded rule failure into an exception."""
        context = get_last_parse_error()
        if context is None:
            # Unreachable while every failing rule records its reason
            diagnostic = ErrorTemplate.unexpected_eof(len(source))
            return self._error_at(diagnostic, Cursor(source, len(source)))
        return self._error_at(context.diagnostic, Cursor(source, context.position))

    def _error_at(self, diagnostic: Diagnostic, cursor: Cursor) -> CFIError:
        """Attach the cursor's span to diagnostic and build the matching exception."""
        line, column = cursor.compute_line_col()
        end = cursor.pos if cursor.is_eof else cursor.pos + 1
        located = replace(
            diagnostic,
            span=SourceSpan(start=cursor.pos, end=end, line=line, column=column),
        )
        parse_error = ParseError(located.message, cursor, expected=located.expected)
        logger.debug("CFI parse failed: %s", parse_error.format_error())

        error_class = _ERROR_CLASSES.get(located.code, CFISyntaxError)
        return error_class(located, parse_error=parse_error)
