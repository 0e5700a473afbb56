"""Shared constants for epubcfi.

This module provides centralized configuration constants used across
syntax and core packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing and traversal
- Width limits: Integer ceilings fixed by the grammar
- Input limits: DoS prevention via size constraints

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "MAX_TRAVERSAL_DEPTH",
    # Width limits
    "MAX_STEP_INDEX",
    "MAX_CHARACTER_OFFSET",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Grammar literals
    "CFI_PREFIX",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# MAX_DEPTH bounds redirection nesting in the parser (e.g. /6/4!/4!/2!...).
# Real CFIs redirect once or twice; past 100 levels the input is malformed.
#
# Each redirection costs three parser frames
# (redirected_path -> path -> local_path), well inside the default
# recursion limit of 1000.
#
# ============================================================================

MAX_DEPTH: int = 100

# AST depth reached by MAX_DEPTH redirections: Fragment -> Path -> LocalPath,
# then RedirectedPath -> Path -> LocalPath per redirection, then
# Step -> Assertion -> Parameter at the leaves.
MAX_TRAVERSAL_DEPTH: int = 4 * MAX_DEPTH

# ============================================================================
# WIDTH LIMITS
# ============================================================================

# Step indices are 8-bit unsigned. Larger documents need a wider ceiling,
# configured through CFIParser(max_step_index=...).
MAX_STEP_INDEX: int = 255

# Character offsets are 32-bit unsigned.
MAX_CHARACTER_OFFSET: int = 2**32 - 1

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (64 KB).
# A CFI is a short identifier; anything this large is not a reading position.
MAX_SOURCE_SIZE: int = 64 * 1024

# ============================================================================
# GRAMMAR LITERALS
# ============================================================================

CFI_PREFIX: str = "epubcfi"
