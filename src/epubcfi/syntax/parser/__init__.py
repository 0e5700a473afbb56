"""EPUB CFI parser module.

This module provides the main CFIParser class and related parsing
utilities organized into focused submodules.

Module Organization:
- core.py: Main CFIParser class and parse() entry point
- primitives.py: Lexical parsers (literals, integers, floats, alphanumeric runs)
- rules.py: All grammar rules (assertions, offsets, steps, paths, ranges, fragment)

Public API:
    CFIParser: Main parser class
    ParseContext: Parse context for depth and width limits (advanced usage)
"""

from epubcfi.syntax.parser.core import CFIParser
from epubcfi.syntax.parser.rules import ParseContext

__all__ = ["CFIParser", "ParseContext"]
