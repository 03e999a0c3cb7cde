"""Decode scanned TOON lines into a stream of JSON events."""

from __future__ import annotations

from itertools import chain, repeat
from typing import Iterable, Sequence

from toonkit.events import (
    EndArray,
    EndObject,
    JsonStreamEvent,
    Key,
    Primitive,
    StartArray,
    StartObject,
)
from toonkit.parser import (
    COLON,
    DOUBLE_QUOTE,
    ArrayHeaderInfo,
    ArrayHeaderParseResult,
    FieldName,
    JsonPrimitive,
    find_closing_quote,
    is_array_header_content,
    is_key_value_content,
    map_row_values_to_primitives,
    parse_array_header_line,
    parse_delimited_values,
    parse_key_token,
    parse_primitive_token,
)
from toonkit.scanner import LineCursor, ParsedLine, ScanState, ToonError, parse_lines
from toonkit.validation import (
    LIST_ITEM_PREFIX,
    assert_expected_count,
    validate_no_blank_lines_in_range,
    validate_no_extra_list_items,
    validate_no_extra_tabular_rows,
)

DEFAULT_DELIMITER = ","
LIST_ITEM_MARKER = "-"


def decode_events(
    lines: Iterable[str], indent: int = 2, strict: bool = True
) -> list[JsonStreamEvent]:
    """Decode TOON lines into a list of JSON stream events."""
    state = ScanState()
    parsed = parse_lines(lines, indent, strict, state)
    return _Decoder(LineCursor(parsed, state.blank_lines), strict).decode_document()


def _is_key_value_line(line: ParsedLine) -> bool:
    content = line.content
    if content.startswith(DOUBLE_QUOTE):
        closing = find_closing_quote(content, 0)
        return closing is not None and COLON in content[closing + 1 :]
    return COLON in content


class _Decoder:
    def __init__(self, cursor: LineCursor, strict: bool) -> None:
        self.cursor = cursor
        self.strict = strict
        self.events: list[JsonStreamEvent] = []

    def emit(self, *events: JsonStreamEvent) -> None:
        self.events.extend(events)

    def decode_document(self) -> list[JsonStreamEvent]:
        cursor = self.cursor
        first = cursor.peek()
        if first is None:
            self.emit(StartObject(), EndObject())
            return self.events

        if is_array_header_content(first.content):
            header_info = parse_array_header_line(first.content, DEFAULT_DELIMITER)
            if header_info is not None:
                cursor.advance()
                self.array_from_header(header_info, 0)
                return self.events

        cursor.advance()
        if cursor.at_end() and not _is_key_value_line(first):
            self.emit(Primitive(parse_primitive_token(first.content.strip())))
            return self.events

        self.emit(StartObject())
        self.key_value(first.content, 0)
        while not cursor.at_end():
            line = cursor.peek()
            if line is None or line.depth != 0:
                break
            cursor.advance()
            self.key_value(line.content, 0)
        self.emit(EndObject())
        return self.events

    def key_value(self, content: str, base_depth: int) -> None:
        header_info = parse_array_header_line(content, DEFAULT_DELIMITER)
        if header_info is not None and header_info.header.key is not None:
            header = header_info.header
            self.emit(Key(header.key, header.key_was_quoted))
            self.array_from_header(header_info, base_depth)
            return

        key, end, is_quoted = parse_key_token(content, 0)
        rest = content[end:].strip()
        self.emit(Key(key, is_quoted))

        if not rest:
            nxt = self.cursor.peek()
            self.emit(StartObject())
            if nxt is not None and nxt.depth > base_depth:
                self.object_fields(base_depth + 1)
            self.emit(EndObject())
            return

        self.emit(Primitive(parse_primitive_token(rest)))

    def object_fields(self, base_depth: int) -> None:
        cursor = self.cursor
        computed_depth: int | None = None
        while not cursor.at_end():
            line = cursor.peek()
            if line is None or line.depth < base_depth:
                break
            if computed_depth is None:
                computed_depth = line.depth
            if line.depth != computed_depth:
                break
            cursor.advance()
            self.key_value(line.content, line.depth)

    def array_from_header(
        self, header_info: ArrayHeaderParseResult, base_depth: int
    ) -> None:
        header = header_info.header
        self.emit(StartArray(header.length))
        if header_info.inline_values is not None:
            self.inline_array(header, header_info.inline_values)
        elif header.fields:
            self.tabular_array(header, base_depth)
        else:
            self.list_array(header, base_depth)
        self.emit(EndArray())

    def inline_array(self, header: ArrayHeaderInfo, inline_values: str) -> None:
        if not inline_values.strip():
            assert_expected_count(0, header.length, "inline array items", self.strict)
            return
        values = parse_delimited_values(inline_values, header.delimiter)
        primitives = map_row_values_to_primitives(values)
        assert_expected_count(
            len(primitives), header.length, "inline array items", self.strict
        )
        self.emit(*(Primitive(value) for value in primitives))

    def tabular_array(self, header: ArrayHeaderInfo, base_depth: int) -> None:
        cursor = self.cursor
        fields = header.fields
        if fields is None:
            raise ToonError("Tabular array is missing header fields")
        row_depth = base_depth + 1
        row_count = 0
        start_line: int | None = None
        end_line: int | None = None

        while not cursor.at_end() and row_count < header.length:
            line = cursor.peek()
            if line is None or line.depth != row_depth:
                break
            if start_line is None:
                start_line = line.line_number
            end_line = line.line_number
            cursor.advance()
            values = parse_delimited_values(line.content, header.delimiter)
            assert_expected_count(
                len(values), len(fields), "tabular row values", self.strict
            )
            self.object_from_fields(fields, map_row_values_to_primitives(values))
            row_count += 1

        assert_expected_count(row_count, header.length, "tabular rows", self.strict)
        if self.strict and start_line is not None and end_line is not None:
            validate_no_blank_lines_in_range(
                start_line, end_line, cursor.blank_lines, self.strict, "tabular array"
            )
        validate_no_extra_tabular_rows(cursor.peek(), row_depth, header, self.strict)

    def list_array(self, header: ArrayHeaderInfo, base_depth: int) -> None:
        cursor = self.cursor
        item_depth = base_depth + 1
        item_count = 0
        start_line: int | None = None
        end_line: int | None = None

        while not cursor.at_end() and item_count < header.length:
            line = cursor.peek()
            if line is None or line.depth < item_depth:
                break
            is_list_item = (
                line.content.startswith(LIST_ITEM_PREFIX)
                or line.content == LIST_ITEM_MARKER
            )
            if line.depth != item_depth or not is_list_item:
                break
            if start_line is None:
                start_line = line.line_number
            end_line = line.line_number
            self.list_item(item_depth)
            current = cursor.current()
            if current is not None:
                end_line = current.line_number
            item_count += 1

        assert_expected_count(
            item_count, header.length, "list array items", self.strict
        )
        if self.strict and start_line is not None and end_line is not None:
            validate_no_blank_lines_in_range(
                start_line, end_line, cursor.blank_lines, self.strict, "list array"
            )
        validate_no_extra_list_items(
            cursor.peek(), item_depth, header.length, self.strict
        )

    def list_item(self, base_depth: int) -> None:
        line = self.cursor.next_line()
        if line is None:
            raise ToonError("Expected list item")
        if line.content == LIST_ITEM_MARKER:
            self.emit(StartObject(), EndObject())
            return
        if not line.content.startswith(LIST_ITEM_PREFIX):
            raise ToonError(f'Expected list item to start with "{LIST_ITEM_PREFIX}"')

        after_hyphen = line.content[len(LIST_ITEM_PREFIX) :]
        if not after_hyphen.strip():
            self.emit(StartObject(), EndObject())
            return

        if is_array_header_content(after_hyphen):
            header_info = parse_array_header_line(after_hyphen, DEFAULT_DELIMITER)
            if header_info is not None:
                self.array_from_header(header_info, base_depth)
                return

        header_info = parse_array_header_line(after_hyphen, DEFAULT_DELIMITER)
        if (
            header_info is not None
            and header_info.header.key is not None
            and header_info.header.fields is not None
        ):
            header = header_info.header
            self.emit(StartObject(), Key(header.key, header.key_was_quoted))
            self.array_from_header(header_info, base_depth + 1)
            self.follow_fields(base_depth + 1)
            self.emit(EndObject())
            return

        if is_key_value_content(after_hyphen):
            self.emit(StartObject())
            self.key_value(after_hyphen, base_depth + 1)
            self.follow_fields(base_depth + 1)
            self.emit(EndObject())
            return

        self.emit(Primitive(parse_primitive_token(after_hyphen)))

    def follow_fields(self, follow_depth: int) -> None:
        cursor = self.cursor
        while not cursor.at_end():
            line = cursor.peek()
            if line is None or line.depth < follow_depth:
                break
            if line.depth != follow_depth or line.content.startswith(LIST_ITEM_PREFIX):
                break
            cursor.advance()
            self.key_value(line.content, follow_depth)

    def object_from_fields(
        self, fields: Sequence[FieldName], primitives: Sequence[JsonPrimitive]
    ) -> None:
        self.emit(StartObject())
        for name, value in zip(fields, chain(primitives, repeat(None))):
            self.emit(Key(name.name, name.was_quoted), Primitive(value))
        self.emit(EndObject())