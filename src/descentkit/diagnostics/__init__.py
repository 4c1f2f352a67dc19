"""Diagnostic system for scan failures.

Provides the tree-shaped Diagnostic node, the error-kind extension point,
the exception hierarchy, and the boxed source-context renderer.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, ErrorKind, ScanErrorKind, SourceRange
from .errors import (
    CheckpointDepthError,
    CheckpointError,
    CheckpointOrderError,
    CheckpointStateError,
    DescentError,
    ScanError,
    UnexpectedEndOfInputError,
)
from .formatter import DiagnosticFormatter, OutputFormat, render_diagnostic
from .templates import ErrorTemplate

__all__ = [
    "CheckpointDepthError",
    "CheckpointError",
    "CheckpointOrderError",
    "CheckpointStateError",
    "DescentError",
    "Diagnostic",
    "DiagnosticFormatter",
    "ErrorKind",
    "ErrorTemplate",
    "OutputFormat",
    "ScanError",
    "ScanErrorKind",
    "SourceRange",
    "UnexpectedEndOfInputError",
    "render_diagnostic",
]
