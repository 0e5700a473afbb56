"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages:
        - Testable
        - Consistently formatted
        - Documented in one place

    Templates never carry a span: the parser attaches the SourceSpan once it
    knows which failure is reported.
    """

    # Base documentation URL
    _DOCS_BASE = "https://idpf.org/epub/linking/cfi/epub-cfi.html"

    # =========================================================================
    # SYNTAX ERRORS (1000-1999)
    # =========================================================================

    @staticmethod
    def unexpected_eof(position: int, expected: tuple[str, ...] = ()) -> Diagnostic:
        """Input ended where more syntax was required.

        Args:
            position: The position where EOF was encountered
            expected: Tokens that would have been accepted

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            hint="Check for a missing ')' or an incomplete step, offset or assertion",
            expected=expected,
        )

    @staticmethod
    def expected_token(token: str, found: str) -> Diagnostic:
        """A required literal delimiter was not found.

        Args:
            token: The literal the grammar requires
            found: The character actually present

        Returns:
            Diagnostic for EXPECTED_TOKEN
        """
        msg = f"Expected '{token}' but found '{found}'"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_TOKEN,
            message=msg,
            expected=(token,),
        )

    @staticmethod
    def expected_integer(found: str) -> Diagnostic:
        """A step index or character offset has no digits.

        Args:
            found: The character actually present

        Returns:
            Diagnostic for EXPECTED_INTEGER
        """
        msg = f"Expected integer but found '{found}'"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_INTEGER,
            message=msg,
            hint="Step indices and character offsets are unsigned decimal integers",
            expected=("0-9",),
        )

    @staticmethod
    def expected_number(found: str) -> Diagnostic:
        """A spatial or temporal coordinate is not a number.

        Args:
            found: The character actually present

        Returns:
            Diagnostic for EXPECTED_NUMBER
        """
        msg = f"Expected number but found '{found}'"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_NUMBER,
            message=msg,
            hint="Spatial and temporal offsets use decimal numbers such as 2.5",
            expected=("0-9",),
        )

    @staticmethod
    def integer_out_of_range(text: str, max_value: int) -> Diagnostic:
        """An integer exceeds the width allowed at its position.

        Args:
            text: The digits as written
            max_value: Largest accepted value

        Returns:
            Diagnostic for INTEGER_OUT_OF_RANGE
        """
        msg = f"Integer {text} exceeds maximum {max_value}"
        return Diagnostic(
            code=DiagnosticCode.INTEGER_OUT_OF_RANGE,
            message=msg,
            hint="Configure max_step_index in CFIParser for documents with wider steps",
        )

    @staticmethod
    def expected_offset(found: str) -> Diagnostic:
        """No offset discriminator where an offset was required.

        Args:
            found: The character actually present

        Returns:
            Diagnostic for EXPECTED_OFFSET
        """
        msg = f"Expected offset but found '{found}'"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_OFFSET,
            message=msg,
            expected=("~", "@", ":"),
        )

    @staticmethod
    def expected_path_or_offset(found: str) -> Diagnostic:
        """A redirection is not followed by a path or an offset.

        Args:
            found: The character actually present

        Returns:
            Diagnostic for EXPECTED_PATH_OR_OFFSET
        """
        msg = f"Expected path or offset after '!' but found '{found}'"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_PATH_OR_OFFSET,
            message=msg,
            help_url=f"{ErrorTemplate._DOCS_BASE}#epubcfi.ebnf.redirected_path",
            expected=("/", "~", "@", ":"),
        )

    @staticmethod
    def empty_local_path() -> Diagnostic:
        """A range endpoint has neither steps nor an offset.

        Returns:
            Diagnostic for EMPTY_LOCAL_PATH
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_LOCAL_PATH,
            message="Range endpoint is empty",
            hint="Each range endpoint needs at least one step or an offset",
            help_url=f"{ErrorTemplate._DOCS_BASE}#epubcfi.ebnf.local_path",
            expected=("/", "!", "~", "@", ":"),
        )

    # =========================================================================
    # ASSERTION ERRORS (2000-2099)
    # =========================================================================

    @staticmethod
    def assertion_empty() -> Diagnostic:
        """Assertion brackets with nothing inside.

        Returns:
            Diagnostic for ASSERTION_EMPTY
        """
        return Diagnostic(
            code=DiagnosticCode.ASSERTION_EMPTY,
            message="Empty assertion '[]'",
            hint="Put a value or key=value parameters between the brackets",
        )

    @staticmethod
    def assertion_invalid(content: str) -> Diagnostic:
        """Assertion content is neither a parameter list nor a bare value.

        Args:
            content: Bracket content up to the failure point

        Returns:
            Diagnostic for ASSERTION_INVALID
        """
        msg = f"Invalid assertion '[{content}'"
        return Diagnostic(
            code=DiagnosticCode.ASSERTION_INVALID,
            message=msg,
            hint="Use [value] or [key=value;key=value] with alphanumeric keys and values",
            expected=("]",),
        )

    # =========================================================================
    # INPUT ERRORS (2100-2199)
    # =========================================================================

    @staticmethod
    def incomplete_input(remaining: str) -> Diagnostic:
        """Fragment parsed but characters remain.

        Args:
            remaining: The unconsumed tail of the input

        Returns:
            Diagnostic for INCOMPLETE_INPUT
        """
        msg = f"Unexpected trailing input '{remaining}'"
        return Diagnostic(
            code=DiagnosticCode.INCOMPLETE_INPUT,
            message=msg,
            hint="A CFI ends at the ')' that closes 'epubcfi('",
        )

    # =========================================================================
    # LIMIT ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def nesting_depth_exceeded(max_depth: int) -> Diagnostic:
        """Too many nested redirections.

        Args:
            max_depth: The maximum allowed depth

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum redirection depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            hint="Configure max_nesting_depth in CFIParser if this input is legitimate",
        )

    @staticmethod
    def traversal_depth_exceeded(max_depth: int) -> Diagnostic:
        """AST traversal went deeper than allowed.

        Args:
            max_depth: The maximum allowed depth

        Returns:
            Diagnostic for TRAVERSAL_DEPTH_EXCEEDED
        """
        msg = f"Maximum traversal depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.TRAVERSAL_DEPTH_EXCEEDED,
            message=msg,
            hint="The AST is nested deeper than any parser-produced tree",
        )

    # =========================================================================
    # GRAMMAR DEFECTS (9000-9999)
    # =========================================================================

    @staticmethod
    def ambiguous_alternative(rule: str, discriminator: str) -> Diagnostic:
        """Two alternatives of one rule start with the same character.

        Args:
            rule: Name of the dispatching rule
            discriminator: The shared leading character

        Returns:
            Diagnostic for AMBIGUOUS_ALTERNATIVE
        """
        msg = f"Rule '{rule}' has more than one alternative starting with '{discriminator}'"
        return Diagnostic(
            code=DiagnosticCode.AMBIGUOUS_ALTERNATIVE,
            message=msg,
            hint="This is a bug in the grammar tables, not in the input",
        )
