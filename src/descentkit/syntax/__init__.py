"""Scanning package.

Provides the backtracking Cursor, its Checkpoint transactions, and
position helpers.

Python 3.13+.
"""

from .checkpoint import Checkpoint, CheckpointState
from .cursor import Cursor
from .position import LineOffsetCache, column_number, line_number, utf8_offset

__all__ = [
    "Checkpoint",
    "CheckpointState",
    "Cursor",
    "LineOffsetCache",
    "column_number",
    "line_number",
    "utf8_offset",
]
