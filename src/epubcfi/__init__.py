"""epubcfi - EPUB Canonical Fragment Identifier parser.

Parses CFI text such as epubcfi(/6/4[chap01ref]!/4/2:10) into an immutable,
typed AST of steps, offsets, assertions, redirections and ranges. Resolving
the AST against a real EPUB document is left to the caller.

Public API:
    parse_fragment - Parse CFI text to a Fragment AST
    CFIParser - Parser with configurable size, depth and step limits

Exceptions:
    CFIError - Base exception class
    CFISyntaxError - Missing or malformed syntax
    CFIAssertionError - Empty or malformed [assertion]
    CFIIncompleteInputError - Input left after the closing ')'
    DepthLimitExceededError - Redirection or traversal nested too deeply

Submodules:
    epubcfi.syntax.ast - AST node types (Fragment, Path, LocalPath, Step, etc.)
    epubcfi.syntax.visitor - ASTVisitor for read-only traversal
    epubcfi.diagnostics - Diagnostic codes, templates and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .core.depth_guard import DepthLimitExceededError
from .diagnostics import (
    CFIAssertionError,
    CFIError,
    CFIIncompleteInputError,
    CFISyntaxError,
)
from .syntax import CFIParser
from .syntax import parse as parse_fragment

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("epubcfi")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# EPUB CFI specification conformance
__cfi_spec_version__ = "1.1"  # EPUB Canonical Fragment Identifiers 1.1
__spec_url__ = "https://idpf.org/epub/linking/cfi/epub-cfi.html"

__all__ = [
    "CFIAssertionError",
    "CFIError",
    "CFIIncompleteInputError",
    "CFIParser",
    "CFISyntaxError",
    "DepthLimitExceededError",
    "__cfi_spec_version__",
    "__spec_url__",
    "__version__",
    "parse_fragment",
]
