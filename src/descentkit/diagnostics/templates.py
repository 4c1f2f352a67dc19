"""Error message templates.

Centralized messages for the exceptions raised on checkpoint misuse, so
that exception constructors never build f-strings inline.
Python 3.13+. Zero external dependencies.
"""

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All checkpoint error messages are created here. Scan failures do not
    need templates: they carry a Diagnostic whose kind is the message.
    """

    @staticmethod
    def checkpoint_out_of_order(expected_depth: int, actual_depth: int) -> str:
        """Checkpoint resolved while a checkpoint opened after it is still active.

        Args:
            expected_depth: Stack depth the checkpoint was created at
            actual_depth: Current stack depth of the cursor

        Returns:
            Message for CheckpointOrderError
        """
        return (
            f"Checkpoint at depth {expected_depth} resolved out of order "
            f"(cursor stack depth is {actual_depth}); "
            "resolve nested checkpoints before their parents"
        )

    @staticmethod
    def checkpoint_already_resolved(state: str) -> str:
        """Checkpoint committed, abandoned, or used after it was resolved.

        Args:
            state: Terminal state the checkpoint is in

        Returns:
            Message for CheckpointStateError
        """
        return f"Checkpoint is already {state}"

    @staticmethod
    def checkpoint_depth_exceeded(max_depth: int) -> str:
        """Too many nested checkpoints on one cursor.

        Args:
            max_depth: Configured maximum nesting depth

        Returns:
            Message for CheckpointDepthError
        """
        return f"Maximum checkpoint depth ({max_depth}) exceeded"

    @staticmethod
    def negative_count(count: int) -> str:
        """Negative count passed to a Cursor operation (take, scan_delimited_list).

        Args:
            count: The rejected count

        Returns:
            Message for ValueError
        """
        return f"Count must be >= 0, got {count}"
