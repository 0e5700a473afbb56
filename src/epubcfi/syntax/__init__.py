"""EPUB CFI syntax parsing package.

Provides parser, AST definitions and visitor pattern.
Separate from document resolution so tooling (validators, highlighters,
reading-position stores) can work on CFI text alone.

Python 3.13+.
"""

from .ast import (
    ASTNode,
    Assertion,
    CharacterOffset,
    Fragment,
    LocalPath,
    Offset,
    Parameter,
    ParameterAssertion,
    Path,
    Range,
    RedirectedPath,
    SpatialOffset,
    Step,
    TemporalOffset,
    ValueAssertion,
    is_assertion,
    is_offset,
)
from .cursor import Cursor, ParseError, ParseResult
from .parser import CFIParser
from .visitor import ASTVisitor

__all__ = [
    "ASTNode",
    "ASTVisitor",
    "Assertion",
    "CFIParser",
    "CharacterOffset",
    "Cursor",
    "Fragment",
    "LocalPath",
    "Offset",
    "Parameter",
    "ParameterAssertion",
    "ParseError",
    "ParseResult",
    "Path",
    "Range",
    "RedirectedPath",
    "SpatialOffset",
    "Step",
    "TemporalOffset",
    "ValueAssertion",
    "is_assertion",
    "is_offset",
    "parse",
]


def parse(source: str) -> Fragment:
    """Parse CFI text into AST.

    Convenience function for CFIParser.parse() with default limits.

    Args:
        source: CFI text

    Returns:
        Fragment root node

    Example:
        >>> from epubcfi.syntax import parse
        >>> fragment = parse("epubcfi(/6/4[chap01ref]!/4/2:10)")
        >>> fragment.path.local_path.steps[0].assertion.value
        'chap01ref'
    """
    parser = CFIParser()
    return parser.parse(source)
