"""descentkit exception hierarchy.

Scan failures carry a structured Diagnostic; checkpoint misuse is a
programming error and carries a plain message.

Python 3.13+. Zero external dependencies.
"""

from typing import Any

from .codes import Diagnostic

__all__ = [
    "CheckpointDepthError",
    "CheckpointError",
    "CheckpointOrderError",
    "CheckpointStateError",
    "DescentError",
    "ScanError",
    "UnexpectedEndOfInputError",
]


class DescentError(Exception):
    """Base exception for all descentkit errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic[Any]) -> None:
        """Initialize DescentError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic[Any] | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ScanError(DescentError):
    """A matching primitive failed.

    The caller decides whether to propagate it (ending the current rule
    attempt) or to swallow it and try something else.
    """

    diagnostic: Diagnostic[Any]

    def __init__(self, diagnostic: Diagnostic[Any]) -> None:
        super().__init__(diagnostic)


class UnexpectedEndOfInputError(ScanError, EOFError):
    """A primitive was asked to test or consume past the end of the source.

    Also an ``EOFError`` so generic EOF handlers catch it.
    """


class CheckpointError(DescentError):
    """Checkpoint used against its stack discipline."""


class CheckpointOrderError(CheckpointError):
    """Checkpoint resolved before a checkpoint nested inside it."""


class CheckpointStateError(CheckpointError):
    """Checkpoint committed, abandoned, or accessed after it was resolved."""


class CheckpointDepthError(CheckpointError):
    """Cursor's configured maximum checkpoint depth exceeded."""
