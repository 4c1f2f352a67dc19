"""Diagnostic kinds and the diagnostic node.

Defines the error-kind extension point, source ranges, and the
tree-shaped Diagnostic value.
Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import IO, Protocol, Self, runtime_checkable

from descentkit.constants import UNKNOWN

__all__ = [
    "Diagnostic",
    "ErrorKind",
    "ScanErrorKind",
    "SourceRange",
]


@runtime_checkable
class ErrorKind(Protocol):
    """Caller-supplied reason embedded in a Diagnostic.

    Any printable type works as long as it can manufacture its own
    "unexpected end of input" member. The usual shape is a ``StrEnum``:

        >>> class JsonError(StrEnum):
        ...     UNEXPECTED_EOF = "Unexpected end of JSON input"
        ...     EXPECTED_VALUE = "Expected a JSON value"
        ...
        ...     @classmethod
        ...     def end_of_input(cls) -> JsonError:
        ...         return cls.UNEXPECTED_EOF
    """

    @classmethod
    def end_of_input(cls) -> Self: ...

    def __str__(self) -> str: ...


class ScanErrorKind(StrEnum):
    """Built-in error kind used when the caller does not supply one.

    Only carries the single structural error the scanner itself can raise.
    """

    UNEXPECTED_EOF = "Unexpected EOF"

    @classmethod
    def end_of_input(cls) -> ScanErrorKind:
        """Return the end-of-input member."""
        return cls.UNEXPECTED_EOF


@dataclass(frozen=True, slots=True)
class SourceRange:
    """Closed-open ``[start, end)`` range of lines or columns.

    Either end may be ``UNKNOWN`` (``sys.maxsize``), meaning "unknown" for
    a start and "rest of the line" for an end.

    Attributes:
        start: First position covered
        end: One past the last position covered
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate SourceRange invariants.

        Raises:
            ValueError: If either end is negative, or if both ends are known
                and end precedes start.
        """
        if self.start < 0:
            msg = f"SourceRange.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < 0:
            msg = f"SourceRange.end must be >= 0, got {self.end}"
            raise ValueError(msg)
        if self.start_known and self.end_known and self.end < self.start:
            msg = f"SourceRange.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    @classmethod
    def point(cls, position: int) -> SourceRange:
        """Range covering exactly one position."""
        return cls(position, position + 1)

    @classmethod
    def unknown(cls) -> SourceRange:
        """Range with both ends unknown."""
        return cls(UNKNOWN, UNKNOWN)

    @property
    def start_known(self) -> bool:
        return self.start != UNKNOWN

    @property
    def end_known(self) -> bool:
        return self.end != UNKNOWN

    def __len__(self) -> int:
        if not (self.start_known and self.end_known):
            return 0
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Diagnostic[K: ErrorKind = ScanErrorKind]:
    """Structured description of a parse failure.

    A node records where something failed and why. Its ``alternatives``
    are sibling failures that were tried at the same decision point
    ("this OR that OR the other rule failed"), kept in attempt order.
    Nodes are immutable; building a richer error means building a new
    node around the old ones.

    Attributes:
        line_range: 1-based lines covered
        column_range: 0-based columns covered
        kind: Domain-specific reason
        source_name: Display label of the scanned source (e.g. a file name)
        alternatives: Mutually exclusive failure causes, first attempt first
        important: Whether this node survives important-only filtering

    Example:
        >>> node = Diagnostic(SourceRange(3, 4), SourceRange(5, 6),
        ...                   ScanErrorKind.UNEXPECTED_EOF, "main.cfg")
        >>> str(node)
        'main.cfg:3:6: Unexpected EOF'
    """

    line_range: SourceRange
    column_range: SourceRange
    kind: K
    source_name: str
    alternatives: tuple[Diagnostic[K], ...] = field(default_factory=tuple)
    important: bool = False

    def __post_init__(self) -> None:
        # Accept any iterable (lists from callers collecting attempts).
        if not isinstance(self.alternatives, tuple):
            object.__setattr__(self, "alternatives", tuple(self.alternatives))

    @property
    def line(self) -> int:
        """First offending line (1-based)."""
        return self.line_range.start

    @property
    def column(self) -> int:
        """First offending column (0-based)."""
        return self.column_range.start

    def with_alternatives(self, alternatives: Iterable[Diagnostic[K]]) -> Diagnostic[K]:
        """Return a copy whose alternatives are followed by ``alternatives``."""
        return dataclasses.replace(self, alternatives=(*self.alternatives, *alternatives))

    def with_importance(self, important: bool = True) -> Diagnostic[K]:
        """Return a copy with the ``important`` flag set to ``important``."""
        return dataclasses.replace(self, important=important)

    def visible_alternatives(self, filter_important: bool = False) -> tuple[Diagnostic[K], ...]:
        """Alternatives that a report shows, in their original order.

        Args:
            filter_important: Keep only alternatives marked important

        Returns:
            All alternatives, or only the important ones when filtering
        """
        if filter_important:
            return tuple(alt for alt in self.alternatives if alt.important)
        return self.alternatives

    def __str__(self) -> str:
        """Return ``name:line:column: kind`` with a 1-based column."""
        line = self.line if self.line_range.start_known else "?"
        column = self.column + 1 if self.column_range.start_known else "?"
        return f"{self.source_name}:{line}:{column}: {self.kind}"

    def format_error(self) -> str:
        """Format as a single line (see ``OutputFormat.SIMPLE``)."""
        from .formatter import DiagnosticFormatter, OutputFormat  # noqa: PLC0415 - circular

        return DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(self)

    def render(self, source: str, filter_important: bool = False) -> str:
        """Render the boxed, line-numbered report against ``source``.

        Args:
            source: The text this diagnostic was produced from
            filter_important: Show only alternatives marked important

        Returns:
            Multi-line report without a trailing newline
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter(filter_important=filter_important).format(self, source)

    def print_with_context(
        self,
        source: str,
        filter_important: bool = False,
        file: IO[str] | None = None,
    ) -> None:
        """Print the boxed report to ``file`` (stdout by default)."""
        print(self.render(source, filter_important), file=file)
