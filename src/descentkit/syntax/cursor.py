"""Backtracking cursor for hand-written recursive-descent parsers.

The cursor owns a read-only view of the source text and a position in it.
Rules advance it with literal-matching primitives and undo partial work
with checkpoints (see ``descentkit.syntax.checkpoint``).
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Offsets count code points, so every offset is a character boundary
    - Tests and consumes raise at end of input; range scans never raise
    - Line:column computed on-demand (O(n), meant for error reporting)
    - The error kind is bound once, when the cursor is created

Usage:
    >>> cursor = Cursor("name = value", "settings.cfg")
    >>> cursor.scan_while_any("abcdefghijklmnopqrstuvwxyz")
    'name'
    >>> cursor.skip_all([" "]).consume_if("=")
    True
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterable

from descentkit.constants import DEFAULT_SOURCE_NAME
from descentkit.diagnostics.codes import Diagnostic, ErrorKind, ScanErrorKind, SourceRange
from descentkit.diagnostics.errors import (
    CheckpointDepthError,
    CheckpointOrderError,
    UnexpectedEndOfInputError,
)
from descentkit.diagnostics.templates import ErrorTemplate

from .checkpoint import Checkpoint
from .position import column_number, line_number, utf8_offset

__all__ = ["Cursor"]

logger = logging.getLogger(__name__)


def _literals(literals: Iterable[str]) -> tuple[str, ...]:
    """Materialize a literal list, dropping empty strings.

    An empty literal always matches without advancing, which would make
    every repeating scan loop forever.
    """
    return tuple(literal for literal in literals if literal)


class Cursor[K: ErrorKind = ScanErrorKind]:
    """Mutable position over immutable source text.

    Attributes:
        source: The text being scanned
        name: Display label for diagnostics (e.g. a file name)
        kind: Error-kind class used to build end-of-input diagnostics
        offset: Current position (0 <= offset <= len(source))
        depth: Number of active checkpoints
        max_depth: Maximum checkpoint nesting (None = unlimited)

    Example:
        >>> cursor = Cursor("a,b,c")
        >>> cursor.scan_delimited_list(["a", "b", "c"], [","])
        'a,b,c'
        >>> cursor.is_at_end
        True
    """

    __slots__ = ("_checkpoints", "_kind", "_max_depth", "_name", "_offset", "_source")

    def __init__(
        self,
        source: str,
        name: str = DEFAULT_SOURCE_NAME,
        kind: type[K] = ScanErrorKind,  # type: ignore[assignment]
        *,
        max_depth: int | None = None,
    ) -> None:
        """Create a cursor at the start of ``source``.

        Args:
            source: Text to scan
            name: Display label copied into every diagnostic
            kind: Error-kind class providing ``end_of_input()``
            max_depth: Maximum number of simultaneously active checkpoints
        """
        self._source = source
        self._name = name
        self._kind = kind
        self._max_depth = max_depth
        self._offset = 0
        self._checkpoints: list[int] = []
        logger.debug("Cursor created for %s (%d characters)", name, len(source))

    # ------------------------------------------------------------------
    # STATE
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        return self._source

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> type[K]:
        return self._kind

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def byte_offset(self) -> int:
        """UTF-8 byte offset of the current position."""
        return utf8_offset(self._source, self._offset)

    @property
    def depth(self) -> int:
        return len(self._checkpoints)

    @property
    def max_depth(self) -> int | None:
        return self._max_depth

    @property
    def is_at_end(self) -> bool:
        """True if no characters remain."""
        return self._offset >= len(self._source)

    @property
    def remaining(self) -> str:
        """Text from the current position to the end."""
        return self._source[self._offset :]

    def current_line(self) -> int:
        """1-based line of the current position.

        Performance:
            O(offset). Build a ``LineOffsetCache`` for repeated lookups.
        """
        return line_number(self._source, self._offset)

    def current_column(self) -> int:
        """0-based column (characters since the last newline).

        Performance:
            O(offset). Build a ``LineOffsetCache`` for repeated lookups.
        """
        return column_number(self._source, self._offset)

    # ------------------------------------------------------------------
    # LITERAL TESTS
    # ------------------------------------------------------------------

    def test(self, literal: str) -> bool:
        """Check whether the remaining text starts with ``literal``.

        Does not consume.

        Raises:
            UnexpectedEndOfInputError: If already at end of input
        """
        if self.is_at_end:
            raise UnexpectedEndOfInputError(self.end_of_input_error())
        return self._source.startswith(literal, self._offset)

    def test_any(self, literals: Iterable[str]) -> bool:
        """``test`` each literal in order, stopping at the first match.

        Raises:
            UnexpectedEndOfInputError: If already at end of input
        """
        return any(self.test(literal) for literal in literals)

    def consume_if(self, literal: str) -> bool:
        """Consume ``literal`` if the remaining text starts with it.

        Returns:
            True if consumed

        Raises:
            UnexpectedEndOfInputError: If already at end of input
        """
        if self.test(literal):
            self._offset += len(literal)
            return True
        return False

    def consume_any_if(self, literals: Iterable[str]) -> bool:
        """Consume the first literal in ``literals`` that matches.

        Raises:
            UnexpectedEndOfInputError: If already at end of input
        """
        return any(self.consume_if(literal) for literal in literals)

    def _consume_any_or_stop(self, literals: tuple[str, ...]) -> bool:
        """``consume_any_if`` treating end of input as no match."""
        if self.is_at_end:
            return False
        return self.consume_any_if(literals)

    # ------------------------------------------------------------------
    # ADVANCING
    # ------------------------------------------------------------------

    def skip_all(self, literals: Iterable[str]) -> Cursor[K]:
        """Repeatedly consume any of ``literals`` (whitespace, comments).

        End of input just stops the skip.

        Returns:
            This cursor, for chaining
        """
        options = _literals(literals)
        with contextlib.suppress(UnexpectedEndOfInputError):
            while self.consume_any_if(options):
                pass
        return self

    def advance_one_char(self) -> None:
        """Move forward by one character. Does nothing at end of input."""
        if not self.is_at_end:
            self._offset += 1

    def take(self, count: int) -> str:
        """Consume exactly ``count`` characters and return them.

        Raises:
            ValueError: If count is negative
            UnexpectedEndOfInputError: If fewer than ``count`` characters
                remain (nothing is consumed)
        """
        if count < 0:
            raise ValueError(ErrorTemplate.negative_count(count))
        end = self._offset + count
        if end > len(self._source):
            raise UnexpectedEndOfInputError(self.end_of_input_error())
        start, self._offset = self._offset, end
        return self._source[start:end]

    # ------------------------------------------------------------------
    # RANGE SCANS (never raise)
    # ------------------------------------------------------------------

    def scan_until(self, ending: str) -> str:
        """Advance until the remaining text starts with ``ending``.

        ``ending`` itself is not consumed. Without a match the scan runs
        to the end of input.

        Returns:
            The consumed text

        Example:
            >>> cursor = Cursor("abcXdef")
            >>> cursor.scan_until("X")
            'abc'
            >>> cursor.remaining
            'Xdef'
        """
        return self.scan_until_any((ending,))

    def scan_until_any(self, endings: Iterable[str]) -> str:
        """Advance until the remaining text starts with any of ``endings``.

        Returns:
            The consumed text (no ending included)
        """
        start = self._offset
        if self.is_at_end:
            return ""
        found = [pos for ending in endings if (pos := self._source.find(ending, start)) >= 0]
        self._offset = min(found, default=len(self._source))
        return self._source[start : self._offset]

    def scan_until_including(self, endings: Iterable[str], exceptions: Iterable[str]) -> str:
        """Advance to an ending, stepping over ``exceptions`` as a whole.

        At each step every exception literal is tried first; one that
        matches is consumed and the step restarts, so escaped endings
        (``\\"`` inside a string) never stop the scan.

        Returns:
            The consumed text, up to but excluding the ending

        Example:
            >>> cursor = Cursor('ab\\\\"cd"ef')
            >>> cursor.scan_until_including(['"'], ['\\\\"'])
            'ab\\\\"cd'
        """
        start = self._offset
        terminators = tuple(endings)
        skipped = _literals(exceptions)
        while not self.is_at_end:
            if self.consume_any_if(skipped):
                continue
            if self.test_any(terminators):
                break
            self.advance_one_char()
        return self._source[start : self._offset]

    def scan_while_any(self, literals: Iterable[str]) -> str:
        """Consume any of ``literals`` (first match wins) until none match.

        Returns:
            The consumed text
        """
        start = self._offset
        options = _literals(literals)
        while self._consume_any_or_stop(options):
            pass
        return self._source[start : self._offset]

    def scan_delimited_list(
        self,
        items: Iterable[str],
        delimiters: Iterable[str],
        max_delimiters: int | None = None,
    ) -> str:
        """Scan ``item (delimiter item)*`` honoring at most ``max_delimiters``.

        Each step consumes one item, then one delimiter. A delimiter
        followed by something that is not an item is given back; one
        followed by the end of input is kept. Once ``max_delimiters``
        delimiters have been consumed the scan stops right after the next
        item attempt.

        Args:
            items: Literals that form one item
            delimiters: Literals that separate items
            max_delimiters: Maximum delimiters to honor (None = unlimited)

        Returns:
            The consumed text

        Example:
            >>> cursor = Cursor("a,a,a,a")
            >>> cursor.scan_delimited_list(["a"], [","], max_delimiters=2)
            'a,a,a'
        """
        if max_delimiters is not None and max_delimiters < 0:
            raise ValueError(ErrorTemplate.negative_count(max_delimiters))
        item_options = _literals(items)
        delimiter_options = _literals(delimiters)
        start = self._offset
        last_item_end = start
        count = 0
        while True:
            if self.is_at_end and item_options:
                break
            matched = self._consume_any_or_stop(item_options)
            if max_delimiters is not None and count >= max_delimiters:
                break
            if not matched:
                self._offset = last_item_end
                break
            last_item_end = self._offset
            if not self._consume_any_or_stop(delimiter_options):
                break
            count += 1
        return self._source[start : self._offset]

    # ------------------------------------------------------------------
    # CHECKPOINTS
    # ------------------------------------------------------------------

    def checkpoint(self) -> Checkpoint[K]:
        """Open a transactional sub-scan at the current position.

        Use as a context manager; leaving the block without ``commit()``
        rolls back.
        """
        return Checkpoint(self)

    def attempt[T](self, rule: Callable[[Cursor[K]], T]) -> T:
        """Run ``rule(self)`` inside a checkpoint.

        Commits when ``rule`` returns; rolls back and re-raises when it raises.
        """
        with self.checkpoint() as checkpoint:
            result = rule(self)
            checkpoint.commit()
        return result

    def _push_checkpoint(self) -> int:
        """Save the offset for a new checkpoint; return its depth."""
        if self._max_depth is not None and len(self._checkpoints) >= self._max_depth:
            raise CheckpointDepthError(ErrorTemplate.checkpoint_depth_exceeded(self._max_depth))
        self._checkpoints.append(self._offset)
        return len(self._checkpoints)

    def _pop_checkpoint(self, depth: int, *, restore: bool) -> None:
        """Drop the checkpoint at ``depth``, restoring its offset if asked."""
        if len(self._checkpoints) != depth:
            logger.error(
                "Out-of-order checkpoint resolution on %s: depth %d, stack %d",
                self._name,
                depth,
                len(self._checkpoints),
            )
            raise CheckpointOrderError(
                ErrorTemplate.checkpoint_out_of_order(depth, len(self._checkpoints))
            )
        saved = self._checkpoints.pop()
        if restore:
            self._offset = saved

    def _discard_checkpoints_above(self, depth: int) -> None:
        """Drop stack entries of nested checkpoints that were never resolved."""
        stale = len(self._checkpoints) - depth
        if stale > 0:
            logger.warning(
                "Discarding %d unresolved checkpoint(s) above depth %d on %s",
                stale,
                depth,
                self._name,
            )
            del self._checkpoints[depth:]

    # ------------------------------------------------------------------
    # DIAGNOSTICS
    # ------------------------------------------------------------------

    def make_error(self, kind: K, important: bool = False) -> Diagnostic[K]:
        """Build a Diagnostic anchored at the current character."""
        return self.make_error_with_alternatives(kind, important, ())

    def make_error_with_alternatives(
        self,
        kind: K,
        important: bool,
        alternatives: Iterable[Diagnostic[K]],
    ) -> Diagnostic[K]:
        """Build a Diagnostic anchored here, wrapping the failed alternatives.

        Args:
            kind: Why the rule failed
            important: Keep this node when filtering for important ones
            alternatives: Failures of the alternatives tried, in attempt order
        """
        return Diagnostic(
            line_range=SourceRange.point(self.current_line()),
            column_range=SourceRange.point(self.current_column()),
            kind=kind,
            source_name=self._name,
            alternatives=tuple(alternatives),
            important=important,
        )

    def end_of_input_error(self) -> Diagnostic[K]:
        """Important Diagnostic with the kind's end-of-input member."""
        return self.make_error(self._kind.end_of_input(), important=True)

    def __repr__(self) -> str:
        return f"Cursor(name={self._name!r}, offset={self._offset}, depth={self.depth})"
