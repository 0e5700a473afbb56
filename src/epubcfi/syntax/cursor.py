"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - A failed rule leaves the caller's cursor untouched, so every
      alternative backtracks for free
    - Line:column computed on-demand (only for errors)

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
"""

from dataclasses import dataclass, field

from epubcfi.diagnostics import ErrorTemplate

__all__ = ["Cursor", "ParseError", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("/6/4", 0)
        >>> cursor.current
        '/'
        >>> new_cursor = cursor.advance()
        >>> new_cursor.current
        '6'
        >>> cursor.current  # Original unchanged (immutability)
        '/'
        >>> Cursor("/6", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input. Check is_eof first.
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Example:
            >>> cursor = Cursor("/6", 0)
            >>> cursor.advance().pos
            1
            >>> cursor.pos  # Original unchanged
            0
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos.

        Store the start cursor before consuming, then slice:

            >>> start = Cursor("123]", 0)
            >>> end = start.advance(3)
            >>> start.slice_to(end.pos)
            '123'
        """
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing cursor.

        Example:
            >>> Cursor("epubcfi(", 0).slice_ahead(7)
            'epubcfi'
        """
        return self.source[self.pos : self.pos + n]

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise.

        Example:
            >>> Cursor("/6", 0).expect("/").pos
            1
            >>> Cursor("/6", 0).expect("!") is None
            True
        """
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def describe_current(self) -> str:
        """Current character for error messages, or 'EOF'."""
        return "EOF" if self.is_eof else self.current

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Example:
            >>> Cursor("epubcfi(/6)", 8).compute_line_col()
            (1, 9)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Pattern:
        Every rule has signature:
            def parse_foo(cursor: Cursor, ...) -> ParseResult[Foo] | None

    Example:
        >>> cursor = Cursor("/6", 0)
        >>> result = ParseResult("/", cursor.advance())
        >>> result.value
        '/'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseError:
    """Parse error with location and context.

    Example:
        >>> cursor = Cursor("epubcfi(/6", 10)
        >>> error = ParseError("Unexpected EOF", cursor, expected=(')',))
        >>> error.format_error()
        "1:11: Unexpected EOF (expected: ')')"
    """

    message: str
    cursor: Cursor
    expected: tuple[str, ...] = field(default_factory=tuple)

    def format_error(self) -> str:
        """Format error with line:column."""
        line, col = self.cursor.compute_line_col()
        error_msg = f"{line}:{col}: {self.message}"

        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(self) -> str:
        """Format error with the source line and a caret under the error.

        Example:
            >>> error = ParseError("Empty assertion '[]'", Cursor("epubcfi(/6[])", 11))
            >>> print(error.format_with_context())
            1:12: Empty assertion '[]'
            <BLANKLINE>
               1 | epubcfi(/6[])
                 |            ^
        """
        line, col = self.cursor.compute_line_col()
        source_line = self.cursor.source.split("\n")[line - 1]

        line_num_str = f"{line:4} | "
        pointer = " " * (len(line_num_str) - 2) + "|" + " " * col + "^"
        return "\n".join(
            [self.format_error(), "", line_num_str + source_line, pointer]
        )
