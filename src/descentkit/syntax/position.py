"""Position utilities for scanned source text.

Converts character offsets to line/column positions for diagnostics.
Lines are 1-based and columns 0-based, matching Diagnostic ranges.

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Supported (\\n is the line delimiter; the \\r
      counts as a column on its line)
    - CR-only (Classic Mac, \\r): NOT supported
"""

__all__ = [
    "LineOffsetCache",
    "column_number",
    "line_number",
    "utf8_offset",
]


def _check_position(pos: int) -> None:
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)


def line_number(source: str, pos: int) -> int:
    """Get 1-based line number from character offset.

    Args:
        source: Complete source text
        pos: Character offset in source (clamped to the source length)

    Returns:
        1-based line number

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> line_number(source, 0)
        1
        >>> line_number(source, 6)   # Start of line2
        2
    """
    _check_position(pos)
    pos = min(pos, len(source))
    return source.count("\n", 0, pos) + 1


def column_number(source: str, pos: int) -> int:
    """Get 0-based column from character offset.

    Args:
        source: Complete source text
        pos: Character offset in source (clamped to the source length)

    Returns:
        Characters between the most recent newline and ``pos``

    Example:
        >>> source = "hello\\nworld"
        >>> column_number(source, 2)   # 'l' in "hello"
        2
        >>> column_number(source, 6)   # 'w' in "world"
        0
    """
    _check_position(pos)
    pos = min(pos, len(source))
    # rfind returns -1 without a newline, which makes this pos itself
    return pos - source.rfind("\n", 0, pos) - 1


def utf8_offset(source: str, pos: int) -> int:
    """Get the UTF-8 byte offset of a character offset.

    Example:
        >>> utf8_offset("héllo", 2)
        3
    """
    _check_position(pos)
    return len(source[:pos].encode("utf-8"))


class LineOffsetCache:
    """Cached line offset computation for repeated position lookups.

    ``line_number()`` and ``column_number()`` are O(n) per call. Callers
    that need positions for many offsets in the same source build this
    once in O(n) and then look up in O(log n).

    Example:
        >>> cache = LineOffsetCache("abc\\ndef\\nghi")
        >>> cache.get_line_col(0)
        (1, 0)
        >>> cache.get_line_col(5)   # 'e' in "def"
        (2, 1)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        # Line 1 starts at offset 0
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    @property
    def line_count(self) -> int:
        return len(self._offsets)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get (1-based line, 0-based column) for position using binary search."""
        pos = min(max(pos, 0), self._source_len)

        # Line index = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left])
