"""descentkit - building blocks for hand-written recursive-descent parsers.

A backtracking cursor over source text, scoped checkpoints for undoing
failed rule attempts, and tree-shaped diagnostics that render as boxed,
source-anchored error reports.

Public API:
    Cursor - Scanner with literal tests, consumes, and range scans
    Checkpoint - Scoped transaction returned by Cursor.checkpoint()
    Diagnostic - Immutable failure description with "Or" alternatives
    SourceRange - Closed-open line/column range
    ErrorKind - Protocol for caller-supplied error kinds
    ScanErrorKind - Built-in error kind (end of input only)
    DiagnosticFormatter - Boxed / simple / JSON rendering
    render_diagnostic - Render the boxed report for a Diagnostic

Exceptions:
    DescentError - Base exception class
    ScanError - A matching primitive failed
    UnexpectedEndOfInputError - Tested or consumed past the end
    CheckpointError - Checkpoint stack discipline violated

Example:
    >>> cursor = Cursor("key = value", "app.cfg")
    >>> with cursor.checkpoint() as checkpoint:
    ...     if checkpoint.consume_if("key"):
    ...         checkpoint.commit()
    >>> cursor.remaining
    ' = value'
"""

from .diagnostics import (
    CheckpointDepthError,
    CheckpointError,
    CheckpointOrderError,
    CheckpointStateError,
    DescentError,
    Diagnostic,
    DiagnosticFormatter,
    ErrorKind,
    OutputFormat,
    ScanError,
    ScanErrorKind,
    SourceRange,
    UnexpectedEndOfInputError,
    render_diagnostic,
)
from .syntax import Checkpoint, CheckpointState, Cursor, LineOffsetCache

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("descentkit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Checkpoint",
    "CheckpointDepthError",
    "CheckpointError",
    "CheckpointOrderError",
    "CheckpointState",
    "CheckpointStateError",
    "Cursor",
    "DescentError",
    "Diagnostic",
    "DiagnosticFormatter",
    "ErrorKind",
    "LineOffsetCache",
    "OutputFormat",
    "ScanError",
    "ScanErrorKind",
    "SourceRange",
    "UnexpectedEndOfInputError",
    "__version__",
    "render_diagnostic",
]
