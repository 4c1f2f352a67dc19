"""Shared constants for descentkit.

Centralized here so the syntax and diagnostics packages can both import
them without circular imports.

Python 3.13+. Zero external dependencies.
"""

import sys

__all__ = [
    "CONTEXT_LINES_BEFORE",
    "DEFAULT_SOURCE_NAME",
    "ELLIPSIS",
    "LINE_NUMBER_WIDTH",
    "UNKNOWN",
]

# ============================================================================
# POSITIONS
# ============================================================================

# Sentinel for an unknown (or "rest of line") range end.
# Either end of a line or column range may carry it independently.
UNKNOWN: int = sys.maxsize

# Display label used when a Cursor is created without a name.
DEFAULT_SOURCE_NAME: str = "<input>"

# ============================================================================
# RENDERING
# ============================================================================

# Line numbers in the boxed report are left-aligned in a 5-column gutter.
LINE_NUMBER_WIDTH: int = 5

# Lines of leading context shown above the first offending line.
CONTEXT_LINES_BEFORE: int = 1

# Marker prepended to shown lines when indentation was stripped.
ELLIPSIS: str = "… "
