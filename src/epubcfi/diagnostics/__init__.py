"""Diagnostic system for CFI errors.

Provides structured error diagnostics with codes, spans, hints, and help URLs.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    CFIAmbiguousAlternativeError,
    CFIAssertionError,
    CFIError,
    CFIIncompleteInputError,
    CFISyntaxError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CFIAmbiguousAlternativeError",
    "CFIAssertionError",
    "CFIError",
    "CFIIncompleteInputError",
    "CFISyntaxError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "OutputFormat",
    "SourceSpan",
]
