"""CFI exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Parse failures additionally carry the cursor-located ParseError so callers
can render the offending input with a caret.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from epubcfi.syntax.cursor import ParseError

__all__ = [
    "CFIAmbiguousAlternativeError",
    "CFIAssertionError",
    "CFIError",
    "CFIIncompleteInputError",
    "CFISyntaxError",
]


class CFIError(Exception):
    """Base exception for all CFI errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
        parse_error: Location of a parse failure (optional)
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        parse_error: "ParseError | None" = None,
    ) -> None:
        """Initialize CFIError.

        Args:
            message: Error message string OR Diagnostic object
            parse_error: Cursor-located error for parse failures
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)
        self.parse_error = parse_error


class CFISyntaxError(CFIError):
    """A required literal, integer or number failed to match.

    Examples:
        epubcfi(6/2)      - missing '/' before the step
        epubcfi(/6/2@x:1) - malformed spatial coordinate
        epubcfi(/300)     - step index wider than 8 bits
    """


class CFIAssertionError(CFISyntaxError):
    """Bracketed assertion is empty or matches neither alternative.

    Examples:
        /4[]          - empty brackets
        /4[id=]       - parameter without a value
    """


class CFIIncompleteInputError(CFISyntaxError):
    """The fragment parsed but input remains after the closing ')'."""


class CFIAmbiguousAlternativeError(CFIError):
    """Two alternatives of one grammar rule share a leading character.

    This is a defect in the grammar tables, raised when the tables are
    built. It never depends on the input being parsed.
    """
