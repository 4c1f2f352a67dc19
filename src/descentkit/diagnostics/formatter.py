"""Diagnostic formatting service.

Renders Diagnostic trees as boxed, line-numbered reports anchored in the
original source text, or as single-line / JSON output for tooling.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from descentkit.constants import (
    CONTEXT_LINES_BEFORE,
    ELLIPSIS,
    LINE_NUMBER_WIDTH,
    UNKNOWN,
)

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
    "render_diagnostic",
]

_GUTTER = " " * LINE_NUMBER_WIDTH
_NESTED_PREFIX = "│ "

_RED = "\033[1;31m"
_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    BOXED = "boxed"  # Boxed source-context report (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


def _source_lines(source: str) -> list[str]:
    """Split on LF, dropping the CR of CRLF endings.

    Line numbering matches the cursor, which counts ``\\n`` only.
    """
    return [line.removesuffix("\r") for line in source.split("\n")]


def _leading_whitespace(line: str) -> int:
    return len(line) - len(line.lstrip())


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (boxed, simple, json)
        filter_important: Show only alternatives marked important
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> source = "key = 1\\nother value"
        >>> node = Diagnostic(SourceRange(2, 3), SourceRange(6, 11),
        ...                   ScanErrorKind.UNEXPECTED_EOF, "app.cfg")
        >>> print(DiagnosticFormatter().format(node, source))
        Error: Unexpected EOF
             ╭╴app.cfg:2:7
             │
        1    │ key = 1
        2    │ other value
             ╰───────┴┴┴┴┴╯
    """

    output_format: OutputFormat = OutputFormat.BOXED
    filter_important: bool = False
    color: bool = False

    def format(self, diagnostic: Diagnostic[Any], source: str = "") -> str:
        """Format a single diagnostic tree.

        Args:
            diagnostic: Root of the diagnostic tree
            source: Text the diagnostic was produced from (boxed output only)

        Returns:
            Formatted diagnostic string without a trailing newline
        """
        match self.output_format:
            case OutputFormat.BOXED:
                return self._format_boxed(diagnostic, source)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic[Any]], source: str = "") -> str:
        """Format multiple diagnostics against the same source.

        Returns:
            Formatted string with all diagnostics separated by blank lines
        """
        return "\n\n".join(self.format(d, source) for d in diagnostics)

    # ------------------------------------------------------------------
    # BOXED
    # ------------------------------------------------------------------

    def _format_boxed(self, diagnostic: Diagnostic[Any], source: str) -> str:
        """Render the tree with an explicit work stack.

        Items on the stack are either finished lines or ``(node, prefix)``
        pairs still to be expanded, so depth is not limited by recursion.
        """
        lines = _source_lines(source)
        output: list[str] = []
        pending: list[str | tuple[Diagnostic[Any], str]] = [(diagnostic, "")]

        while pending:
            item = pending.pop()
            if isinstance(item, str):
                output.append(item)
                continue

            node, prefix = item
            alternatives = node.visible_alternatives(self.filter_important)
            output.extend(self._format_node(node, lines, prefix, bool(alternatives)))
            if not alternatives:
                continue

            output.append(f"{prefix}╭╴Or╶╯")
            nested = prefix + _NESTED_PREFIX
            pending.append(f"{prefix}╰────╴")
            for index in range(len(alternatives) - 1, -1, -1):
                pending.append((alternatives[index], nested))
                if index > 0:
                    pending.append(f"{prefix}├╴Or")

        return "\n".join(output)

    def _format_node(
        self,
        node: Diagnostic[Any],
        lines: list[str],
        prefix: str,
        has_alternatives: bool,
    ) -> list[str]:
        """Header, source context, and underline footer for one node."""
        line_range = node.line_range
        column_range = node.column_range

        # Shown lines: the offending ones plus leading context, clamped.
        last_index = len(lines) - 1
        first_error = min(max(line_range.start - 1, 0), last_index)
        end_line = line_range.end if line_range.end > line_range.start else line_range.start + 1
        last_error = min(max(end_line - 2, first_error), last_index)
        first_shown = max(first_error - CONTEXT_LINES_BEFORE, 0)

        column_start = column_range.start if column_range.start_known else 0
        display_line = line_range.start if line_range.start_known else first_error + 1

        header = "Error:"
        if self.color:
            header = f"{_RED}{header}{_RESET}"
        result = [
            f"{prefix}{header} {node.kind}",
            f"{prefix}{_GUTTER}╭╴{node.source_name}:{display_line}:{column_start + 1}",
            f"{prefix}{_GUTTER}│",
        ]

        # Indentation strip is fixed by the first shown line.
        first_line = lines[first_shown]
        stripped = min(_leading_whitespace(first_line), column_start)
        marker = ELLIPSIS if stripped > 0 else ""
        printed_length = 0
        for index in range(first_shown, last_error + 1):
            number = f"{index + 1:<{LINE_NUMBER_WIDTH}}"
            text = lines[index][stripped:]
            printed_length = len(text)
            result.append(f"{prefix}{number}│ {marker}{text}")

        # Open-ended column: up to the last printed character of the last line.
        column_end = column_range.end if column_range.end_known else max(printed_length - 1, 0)
        rule = "─" * (column_start - stripped + len(marker))
        underline = "┴" * max(column_end - column_start, 0)
        if self.color:
            underline = f"{_RED}{underline}{_RESET}"
        corner = "├─" if has_alternatives else "╰─"
        result.append(f"{prefix}{_GUTTER}{corner}{rule}{underline}╯")
        return result

    # ------------------------------------------------------------------
    # SIMPLE / JSON
    # ------------------------------------------------------------------

    def _format_simple(self, diagnostic: Diagnostic[Any]) -> str:
        """Format diagnostic in single-line format.

        Example output:
            app.cfg:2:7: Expected a value (2 alternatives)
        """
        count = len(diagnostic.visible_alternatives(self.filter_important))
        if count == 0:
            return str(diagnostic)
        noun = "alternative" if count == 1 else "alternatives"
        return f"{diagnostic} ({count} {noun})"

    def _format_json(self, diagnostic: Diagnostic[Any]) -> str:
        """Format the diagnostic tree as JSON.

        Unknown range ends are emitted as ``null``.
        """

        def bound(value: int) -> int | None:
            return None if value == UNKNOWN else value

        def to_dict(node: Diagnostic[Any]) -> dict[str, Any]:
            return {
                "kind": str(node.kind),
                "source_name": node.source_name,
                "line": [bound(node.line_range.start), bound(node.line_range.end)],
                "column": [bound(node.column_range.start), bound(node.column_range.end)],
                "important": node.important,
                "alternatives": [
                    to_dict(alt) for alt in node.visible_alternatives(self.filter_important)
                ],
            }

        return json.dumps(to_dict(diagnostic), ensure_ascii=False)


def render_diagnostic(
    diagnostic: Diagnostic[Any],
    source: str,
    *,
    filter_important: bool = False,
) -> str:
    """Render the boxed report for ``diagnostic`` against ``source``.

    Convenience function for ``DiagnosticFormatter(...).format()``.
    """
    return DiagnosticFormatter(filter_important=filter_important).format(diagnostic, source)
