"""Tests for diagnostics.codes: SourceRange, ErrorKind, and Diagnostic."""

from __future__ import annotations

import dataclasses
import io
import sys

import pytest

from descentkit.constants import UNKNOWN
from descentkit.diagnostics import Diagnostic, ErrorKind, ScanErrorKind, SourceRange

from tests.strategies import SampleKind


def _node(
    kind: SampleKind = SampleKind.EXPECTED_VALUE,
    *,
    line: int = 1,
    column: int = 0,
    important: bool = False,
    alternatives: tuple[Diagnostic[SampleKind], ...] = (),
) -> Diagnostic[SampleKind]:
    return Diagnostic(
        SourceRange.point(line),
        SourceRange.point(column),
        kind,
        "app.cfg",
        alternatives,
        important,
    )


# ============================================================================
# SOURCE RANGE
# ============================================================================


class TestSourceRange:
    """Test SourceRange construction and validation."""

    def test_point(self) -> None:
        assert SourceRange.point(4) == SourceRange(4, 5)

    def test_unknown(self) -> None:
        unknown = SourceRange.unknown()

        assert unknown.start == UNKNOWN == sys.maxsize
        assert not unknown.start_known
        assert not unknown.end_known
        assert len(unknown) == 0

    def test_open_end(self) -> None:
        """An unknown end is allowed after any known start."""
        open_end = SourceRange(7, UNKNOWN)

        assert open_end.start_known
        assert not open_end.end_known

    def test_len(self) -> None:
        assert len(SourceRange(2, 6)) == 4
        assert len(SourceRange(3, 3)) == 0

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(ValueError, match="start must be >= 0"):
            SourceRange(-1, 2)

    def test_negative_end_rejected(self) -> None:
        with pytest.raises(ValueError, match="end must be >= 0"):
            SourceRange(0, -2)

    def test_reversed_rejected(self) -> None:
        with pytest.raises(ValueError, match=r"end \(2\) must be >= start \(5\)"):
            SourceRange(5, 2)

    def test_frozen(self) -> None:
        source_range = SourceRange(1, 2)

        with pytest.raises(dataclasses.FrozenInstanceError):
            source_range.start = 3  # type: ignore[misc]


# ============================================================================
# ERROR KIND
# ============================================================================


class TestErrorKind:
    """Test the ErrorKind protocol and the built-in kind."""

    def test_scan_error_kind_end_of_input(self) -> None:
        assert ScanErrorKind.end_of_input() is ScanErrorKind.UNEXPECTED_EOF
        assert str(ScanErrorKind.UNEXPECTED_EOF) == "Unexpected EOF"

    def test_scan_error_kind_satisfies_protocol(self) -> None:
        assert isinstance(ScanErrorKind.UNEXPECTED_EOF, ErrorKind)

    def test_caller_kind_satisfies_protocol(self) -> None:
        assert isinstance(SampleKind.EXPECTED_KEY, ErrorKind)

    def test_plain_string_is_not_a_kind(self) -> None:
        assert not isinstance("Expected a key", ErrorKind)


# ============================================================================
# DIAGNOSTIC
# ============================================================================


class TestDiagnostic:
    """Test Diagnostic construction and derived copies."""

    def test_fields(self) -> None:
        node = _node(line=3, column=5, important=True)

        assert node.line == 3
        assert node.column == 5
        assert node.kind is SampleKind.EXPECTED_VALUE
        assert node.source_name == "app.cfg"
        assert node.important is True
        assert node.alternatives == ()

    def test_alternatives_list_becomes_tuple(self) -> None:
        child = _node(SampleKind.EXPECTED_KEY)
        node = Diagnostic(
            SourceRange.point(1),
            SourceRange.point(0),
            SampleKind.EXPECTED_VALUE,
            "app.cfg",
            [child],  # type: ignore[arg-type]
        )

        assert node.alternatives == (child,)

    def test_with_alternatives_appends_in_order(self) -> None:
        first = _node(SampleKind.EXPECTED_KEY)
        second = _node(SampleKind.UNCLOSED_STRING)
        third = _node(SampleKind.UNEXPECTED_EOF)
        node = _node(alternatives=(first,))

        extended = node.with_alternatives([second, third])

        assert extended.alternatives == (first, second, third)
        assert node.alternatives == (first,)

    def test_with_importance(self) -> None:
        node = _node()

        assert node.with_importance().important is True
        assert node.with_importance().with_importance(False).important is False
        assert node.important is False

    def test_visible_alternatives_filtering(self) -> None:
        """Filtering keeps important alternatives in their original order."""
        alternatives = (
            _node(SampleKind.EXPECTED_KEY, important=True),
            _node(SampleKind.UNCLOSED_STRING),
            _node(SampleKind.UNEXPECTED_EOF, important=True),
        )
        node = _node(alternatives=alternatives)

        assert node.visible_alternatives() == alternatives
        assert node.visible_alternatives(filter_important=True) == (
            alternatives[0],
            alternatives[2],
        )

    def test_equality_and_hash(self) -> None:
        """Diagnostics are values."""
        assert _node(line=2) == _node(line=2)
        assert hash(_node(line=2)) == hash(_node(line=2))
        assert _node(line=2) != _node(line=3)

    def test_frozen(self) -> None:
        node = _node()

        with pytest.raises(dataclasses.FrozenInstanceError):
            node.important = True  # type: ignore[misc]

    def test_str(self) -> None:
        """str() shows name:line:column with a 1-based column."""
        assert str(_node(line=3, column=5)) == "app.cfg:3:6: Expected a value"

    def test_str_unknown_position(self) -> None:
        node = Diagnostic(
            SourceRange.unknown(),
            SourceRange.unknown(),
            ScanErrorKind.UNEXPECTED_EOF,
            "f",
        )

        assert str(node) == "f:?:?: Unexpected EOF"

    def test_format_error(self) -> None:
        node = _node(alternatives=(_node(), _node()))

        assert node.format_error() == "app.cfg:1:1: Expected a value (2 alternatives)"

    def test_render_delegates_to_formatter(self) -> None:
        node = _node(column=2)

        assert node.render("ab cd").splitlines()[-1] == "     ╰───┴╯"

    def test_print_with_context(self) -> None:
        """print_with_context writes the rendered report and a newline."""
        node = _node(column=2)
        buffer = io.StringIO()

        node.print_with_context("ab cd", file=buffer)

        assert buffer.getvalue() == node.render("ab cd") + "\n"
