"""Hypothesis strategies for descentkit property-based testing.

Strategies are organized by domain:

- text: Source text and literal lists for the cursor
- diagnostics: SourceRange, Diagnostic trees, and formatter configurations

Usage:
    from tests.strategies import diagnostic_trees, source_text
    from tests.strategies.diagnostics import SampleKind
"""

from .diagnostics import (
    SampleKind,
    diagnostic_formatters,
    diagnostic_leaves,
    diagnostic_trees,
    source_names,
    source_ranges,
)
from .text import (
    SCAN_ALPHABET,
    literal_lists,
    literals,
    shaped_source,
    source_text,
    unicode_text,
)

__all__ = [
    "SCAN_ALPHABET",
    "SampleKind",
    "diagnostic_formatters",
    "diagnostic_leaves",
    "diagnostic_trees",
    "literal_lists",
    "literals",
    "shaped_source",
    "source_names",
    "source_ranges",
    "source_text",
    "unicode_text",
]
