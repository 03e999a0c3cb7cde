import pytest

from toonkit.parser import parse_array_header_line
from toonkit.scanner import ScanState, ToonError, parse_line, parse_lines
from toonkit.validation import (
    assert_expected_count,
    validate_no_blank_lines_in_range,
    validate_no_extra_list_items,
    validate_no_extra_tabular_rows,
)


def _line(text, indent_size=2):
    return parse_line(text, ScanState(), indent_size, True)


def _header(text="rows[2]{a,b}:"):
    return parse_array_header_line(text, ",").header


def test_expected_count_strict_mismatch():
    with pytest.raises(ToonError, match="Expected 3 tabular rows, but got 2"):
        assert_expected_count(2, 3, "tabular rows", True)


def test_expected_count_passes_when_equal_or_lenient():
    assert assert_expected_count(3, 3, "items", True) is None
    assert assert_expected_count(1, 3, "items", False) is None


def test_extra_list_item_detected():
    line = _line("  - extra")
    with pytest.raises(ToonError, match="Expected 2 list array items, but found more"):
        validate_no_extra_list_items(line, line.depth, 2, True)


def test_extra_list_item_ignored_cases():
    line = _line("  - extra")
    assert validate_no_extra_list_items(line, line.depth, 2, False) is None
    assert validate_no_extra_list_items(line, line.depth + 1, 2, True) is None
    assert validate_no_extra_list_items(None, 0, 2, True) is None


def test_extra_tabular_row_detected():
    header = _header()
    line = _line("  5,6")
    with pytest.raises(ToonError, match="Expected 2 tabular rows, but found more"):
        validate_no_extra_tabular_rows(line, line.depth, header, True)


def test_delimiter_before_colon_is_data_row():
    header = _header()
    line = _line('  x,"y:z"')
    with pytest.raises(ToonError):
        validate_no_extra_tabular_rows(line, line.depth, header, True)


def test_key_value_line_is_not_data_row():
    header = _header()
    line = _line("  next: value")
    assert validate_no_extra_tabular_rows(line, line.depth, header, True) is None
    row = _line("  5,6")
    assert validate_no_extra_tabular_rows(row, row.depth, header, False) is None


def test_blank_line_in_range_detected():
    state = ScanState()
    parse_lines(["- a", "", "- b"], 2, True, state)
    blank = state.blank_lines[0]
    with pytest.raises(ToonError, match=f"Line {blank.line_number}: Blank lines inside list array"):
        validate_no_blank_lines_in_range(
            blank.line_number - 1, blank.line_number + 1, state.blank_lines, True, "list array"
        )


def test_blank_line_outside_range_allowed():
    state = ScanState()
    parse_lines(["- a", "- b", ""], 2, True, state)
    blank = state.blank_lines[0]
    assert validate_no_blank_lines_in_range(
        1, blank.line_number, state.blank_lines, True, "list array"
    ) is None
    assert validate_no_blank_lines_in_range(
        0, blank.line_number + 1, state.blank_lines, False, "list array"
    ) is None