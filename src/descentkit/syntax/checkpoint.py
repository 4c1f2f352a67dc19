"""Transactional sub-scans over a Cursor.

A Checkpoint records the cursor's offset on the cursor's checkpoint stack.
Committing keeps whatever was consumed since; abandoning (explicitly, or by
leaving the ``with`` block without committing) restores the saved offset.

Usage:
    with cursor.checkpoint() as checkpoint:
        if not checkpoint.consume_if("let"):
            return None                 # rolled back on exit
        name = checkpoint.scan_while_any(IDENTIFIER_CHARS)
        checkpoint.commit()             # keep "let" and the name
        return name

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from types import TracebackType
from typing import TYPE_CHECKING, Any

from descentkit.diagnostics.codes import ErrorKind, ScanErrorKind
from descentkit.diagnostics.errors import CheckpointStateError
from descentkit.diagnostics.templates import ErrorTemplate

if TYPE_CHECKING:
    from .cursor import Cursor

__all__ = ["Checkpoint", "CheckpointState"]

logger = logging.getLogger(__name__)


class CheckpointState(StrEnum):
    """Lifecycle of a Checkpoint. Both resolved states are final."""

    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled back"


class Checkpoint[K: ErrorKind = ScanErrorKind]:
    """Scoped transaction on a Cursor's position.

    Create with ``Cursor.checkpoint()``. While active, attribute access is
    passed through to the cursor, so rules can call primitives directly on
    the checkpoint. Checkpoints must be resolved innermost first.

    Always open checkpoints with ``with``. An explicit ``commit()`` or
    ``abandon()`` while a nested checkpoint is still active raises
    ``CheckpointOrderError``; leaving a ``with`` block instead discards any
    nested checkpoints left unresolved (logged at WARNING) and rolls back.

    Attributes:
        cursor: The cursor this checkpoint guards
        saved_offset: Cursor offset when the checkpoint was opened
        depth: Position of this checkpoint on the cursor's stack (1 = outermost)
        state: Current lifecycle state
    """

    __slots__ = ("_cursor", "_depth", "_saved_offset", "_state")

    def __init__(self, cursor: Cursor[K]) -> None:
        """Open a checkpoint. Prefer ``Cursor.checkpoint()``.

        Raises:
            CheckpointDepthError: If the cursor's max_depth would be exceeded
        """
        self._depth = cursor._push_checkpoint()  # noqa: SLF001 - cursor stack protocol
        self._cursor = cursor
        self._saved_offset = cursor.offset
        self._state = CheckpointState.ACTIVE

    @property
    def cursor(self) -> Cursor[K]:
        return self._cursor

    @property
    def saved_offset(self) -> int:
        return self._saved_offset

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def state(self) -> CheckpointState:
        return self._state

    @property
    def is_active(self) -> bool:
        """True until committed or rolled back (a rollback is still pending)."""
        return self._state is CheckpointState.ACTIVE

    @property
    def consumed(self) -> str:
        """Text consumed since the checkpoint was opened.

        Empty if the cursor is at or before the saved offset.
        """
        return self._cursor.source[self._saved_offset : self._cursor.offset]

    def commit(self) -> None:
        """Keep the current offset and discard the saved one.

        Raises:
            CheckpointStateError: If already committed or rolled back
            CheckpointOrderError: If a checkpoint opened after this one is still active
        """
        self._resolve(CheckpointState.COMMITTED)

    def abandon(self) -> None:
        """Restore the cursor to the saved offset.

        Raises:
            CheckpointStateError: If already committed or rolled back
            CheckpointOrderError: If a checkpoint opened after this one is still active
        """
        self._resolve(CheckpointState.ROLLED_BACK)

    def _resolve(self, state: CheckpointState) -> None:
        if self._state is not CheckpointState.ACTIVE:
            raise CheckpointStateError(ErrorTemplate.checkpoint_already_resolved(self._state))
        restore = state is CheckpointState.ROLLED_BACK
        self._cursor._pop_checkpoint(self._depth, restore=restore)  # noqa: SLF001
        self._state = state
        if restore:
            logger.debug(
                "Checkpoint at depth %d rolled back %s to offset %d",
                self._depth,
                self._cursor.name,
                self._saved_offset,
            )

    def __enter__(self) -> Checkpoint[K]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Roll back unless committed, on every exit path.

        Nested checkpoints still unresolved at this point are discarded
        first, so the rollback always happens and never masks an exception
        already propagating out of the block.
        """
        if self._state is CheckpointState.ACTIVE:
            self._cursor._discard_checkpoints_above(self._depth)  # noqa: SLF001
            self.abandon()

    def __getattr__(self, name: str) -> Any:
        # Only reached for names the checkpoint itself does not define.
        if name.startswith("_"):
            raise AttributeError(name)
        if self._state is not CheckpointState.ACTIVE:
            raise CheckpointStateError(ErrorTemplate.checkpoint_already_resolved(self._state))
        return getattr(self._cursor, name)

    def __repr__(self) -> str:
        return (
            f"Checkpoint(depth={self._depth}, saved_offset={self._saved_offset}, "
            f"state={self._state.value!r})"
        )
