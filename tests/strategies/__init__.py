"""Hypothesis strategies for epubcfi property-based testing.

Usage:
    from tests.strategies import cfi_fragments, cfi_steps
    from tests.strategies.cfi import cfi_chaos_source

Text strategies return (text, expected_node) pairs.

Event-Emitting Strategies (HypoFuzz-Optimized):
    - cfi_assertions, cfi_offsets, cfi_fragments, cfi_chaos_source
"""

from .cfi import (
    ALPHANUMERIC_CHARS,
    CFI_ALPHABET,
    alphanumeric_tokens,
    cfi_assertions,
    cfi_chaos_source,
    cfi_character_offsets,
    cfi_fragments,
    cfi_local_paths,
    cfi_numbers,
    cfi_offsets,
    cfi_parameters,
    cfi_paths,
    cfi_redirected_paths,
    cfi_spatial_offsets,
    cfi_steps,
    cfi_temporal_offsets,
    optional_assertions,
)

__all__ = [
    "ALPHANUMERIC_CHARS",
    "CFI_ALPHABET",
    "alphanumeric_tokens",
    "cfi_assertions",
    "cfi_chaos_source",
    "cfi_character_offsets",
    "cfi_fragments",
    "cfi_local_paths",
    "cfi_numbers",
    "cfi_offsets",
    "cfi_parameters",
    "cfi_paths",
    "cfi_redirected_paths",
    "cfi_spatial_offsets",
    "cfi_steps",
    "cfi_temporal_offsets",
    "optional_assertions",
]
