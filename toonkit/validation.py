"""Strict-mode checks applied while decoding arrays."""

from __future__ import annotations

from collections.abc import Sequence

from toonkit.parser import COLON, ArrayHeaderInfo, find_unquoted_char
from toonkit.scanner import BlankLineInfo, ParsedLine, ToonError

LIST_ITEM_PREFIX = "- "


def assert_expected_count(
    actual: int, expected: int, item_type: str, strict: bool
) -> None:
    """Raise in strict mode when a count differs from the declared one."""
    if strict and actual != expected:
        raise ToonError(f"Expected {expected} {item_type}, but got {actual}")


def validate_no_extra_list_items(
    next_line: ParsedLine | None, item_depth: int, expected_count: int, strict: bool
) -> None:
    """Raise in strict mode when another list item follows a complete list."""
    if (
        strict
        and next_line is not None
        and next_line.depth == item_depth
        and next_line.content.startswith(LIST_ITEM_PREFIX)
    ):
        raise ToonError(
            f"Expected {expected_count} list array items, but found more"
        )


def validate_no_extra_tabular_rows(
    next_line: ParsedLine | None,
    row_depth: int,
    header: ArrayHeaderInfo,
    strict: bool,
) -> None:
    """Raise in strict mode when another data row follows a complete table."""
    if (
        strict
        and next_line is not None
        and next_line.depth == row_depth
        and not next_line.content.startswith(LIST_ITEM_PREFIX)
        and _is_data_row(next_line.content, header.delimiter)
    ):
        raise ToonError(f"Expected {header.length} tabular rows, but found more")


def validate_no_blank_lines_in_range(
    start_line: int,
    end_line: int,
    blank_lines: Sequence[BlankLineInfo],
    strict: bool,
    context: str,
) -> None:
    """Raise in strict mode when a blank line lies strictly between two lines."""
    if not strict:
        return
    first_blank = next(
        (b for b in blank_lines if start_line < b.line_number < end_line), None
    )
    if first_blank is not None:
        raise ToonError(
            f"Line {first_blank.line_number}: Blank lines inside {context} "
            "are not allowed in strict mode"
        )


def _is_data_row(content: str, delimiter: str) -> bool:
    colon_pos = find_unquoted_char(content, COLON, 0)
    if colon_pos is None:
        return True
    delimiter_pos = find_unquoted_char(content, delimiter, 0)
    return delimiter_pos is not None and delimiter_pos < colon_pos