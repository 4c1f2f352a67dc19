"""Quickstart example for descentkit.

This example builds a tiny settings-file parser on top of the Cursor:
literal scans, checkpoints for backtracking, and boxed error reports
with "Or" branches when every alternative fails.
"""

from __future__ import annotations

from enum import StrEnum
from typing import NoReturn

from descentkit import (
    Cursor,
    Diagnostic,
    DiagnosticFormatter,
    OutputFormat,
    ScanError,
)

IDENTIFIER_CHARS = "abcdefghijklmnopqrstuvwxyz_"
DIGITS = "0123456789"
BLANKS = [" ", "\t"]


class SettingsError(StrEnum):
    """Why a settings line failed to parse."""

    UNEXPECTED_EOF = "Unexpected end of settings"
    EXPECTED_KEY = "Expected a setting name"
    EXPECTED_EQUALS = "Expected '='"
    EXPECTED_VALUE = "Expected a value"
    EXPECTED_NUMBER = "Expected a number"
    EXPECTED_STRING = "Expected a quoted string"
    UNCLOSED_STRING = "Unclosed string"

    @classmethod
    def end_of_input(cls) -> SettingsError:
        return cls.UNEXPECTED_EOF


class SettingsParseError(ScanError):
    """A settings line could not be parsed."""


def fail(cursor: Cursor[SettingsError], kind: SettingsError, *causes: Diagnostic) -> NoReturn:
    raise SettingsParseError(cursor.make_error_with_alternatives(kind, True, causes))


def parse_number(cursor: Cursor[SettingsError]) -> int:
    with cursor.checkpoint() as checkpoint:
        digits = checkpoint.scan_while_any(DIGITS)
        if not digits:
            fail(cursor, SettingsError.EXPECTED_NUMBER)
        checkpoint.commit()
    return int(digits)


def parse_string(cursor: Cursor[SettingsError]) -> str:
    with cursor.checkpoint() as checkpoint:
        if cursor.is_at_end or not checkpoint.consume_if('"'):
            fail(cursor, SettingsError.EXPECTED_STRING)
        text = checkpoint.scan_until_including(['"'], ['\\"'])
        if cursor.is_at_end:
            fail(cursor, SettingsError.UNCLOSED_STRING)
        checkpoint.consume_if('"')
        checkpoint.commit()
    return text.replace('\\"', '"')


def parse_value(cursor: Cursor[SettingsError]) -> int | str:
    """Try each value rule in turn; report all of them if none match."""
    failures: list[Diagnostic] = []
    for rule in (parse_number, parse_string):
        try:
            return cursor.attempt(rule)
        except ScanError as error:
            failures.append(error.diagnostic)
    fail(cursor, SettingsError.EXPECTED_VALUE, *failures)


def parse_setting(cursor: Cursor[SettingsError]) -> tuple[str, int | str]:
    key = cursor.scan_while_any(IDENTIFIER_CHARS)
    if not key:
        fail(cursor, SettingsError.EXPECTED_KEY)
    cursor.skip_all(BLANKS)
    if cursor.is_at_end or not cursor.consume_if("="):
        fail(cursor, SettingsError.EXPECTED_EQUALS)
    cursor.skip_all(BLANKS)
    return key, parse_value(cursor)


def parse_settings(source: str, name: str) -> dict[str, int | str]:
    cursor = Cursor(source, name, SettingsError)
    settings: dict[str, int | str] = {}
    while not cursor.skip_all(["\n", *BLANKS]).is_at_end:
        key, value = cursor.attempt(parse_setting)
        settings[key] = value
    return settings


# Example 1: Parsing valid input
print("=" * 50)
print("Example 1: Parsing Valid Settings")
print("=" * 50)

print(parse_settings('port = 8080\ngreeting = "say \\"hi\\""\n', "server.cfg"))
# Output: {'port': 8080, 'greeting': 'say "hi"'}

# Example 2: Checkpoints
print("\n" + "=" * 50)
print("Example 2: Checkpoints Roll Back Unless Committed")
print("=" * 50)

cursor = Cursor("let x = 1")
with cursor.checkpoint() as checkpoint:
    checkpoint.consume_if("let ")
    print(f"inside: offset={cursor.offset}, consumed={checkpoint.consumed!r}")
print(f"after rollback: offset={cursor.offset}")
# Output: after rollback: offset=0

# Example 3: Boxed error report with alternatives
print("\n" + "=" * 50)
print("Example 3: Boxed Error Report")
print("=" * 50)

broken = "port = 8080\ntimeout = ?\n"
try:
    parse_settings(broken, "server.cfg")
except ScanError as error:
    error.diagnostic.print_with_context(broken)

# Example 4: Single-line and JSON output for tooling
print("\n" + "=" * 50)
print("Example 4: Simple and JSON Output")
print("=" * 50)

try:
    parse_settings(broken, "server.cfg")
except ScanError as error:
    print(DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(error.diagnostic))
    print(DiagnosticFormatter(output_format=OutputFormat.JSON).format(error.diagnostic))
