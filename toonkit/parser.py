"""Token-level parsing of TOON lines: keys, primitives and array headers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from toonkit.scanner import ToonError

JsonPrimitive = Union[str, float, bool, None]

BACKSLASH = "\\"
DOUBLE_QUOTE = '"'
COLON = ":"
OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"
TAB = "\t"
PIPE = "|"

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"'}
_NUMBER = re.compile(r"-?[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_LEADING_ZERO = re.compile(r"-?0[0-9]")
_LENGTH = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class FieldName:
    """A tabular field name and whether it was written quoted."""

    name: str
    was_quoted: bool


@dataclass(frozen=True)
class ArrayHeaderInfo:
    """Metadata from an array header such as ``key[3|]{a|b}:``."""

    key: str | None
    key_was_quoted: bool
    length: int
    delimiter: str
    fields: tuple[FieldName, ...] | None


@dataclass(frozen=True)
class ArrayHeaderParseResult:
    """A parsed array header and any values written after its colon."""

    header: ArrayHeaderInfo
    inline_values: str | None


def find_closing_quote(content: str, start: int) -> int | None:
    """Return the index of the quote closing the one at ``start``."""
    i = start + 1
    while i < len(content):
        ch = content[i]
        if ch == BACKSLASH:
            i += 2
            continue
        if ch == DOUBLE_QUOTE:
            return i
        i += 1
    return None


def find_unquoted_char(content: str, char: str, start: int) -> int | None:
    """Return the index of the first ``char`` at or after ``start`` outside quotes."""
    in_quotes = False
    i = start
    while i < len(content):
        ch = content[i]
        if ch == BACKSLASH and in_quotes:
            i += 2
            continue
        if ch == DOUBLE_QUOTE:
            in_quotes = not in_quotes
        elif ch == char and not in_quotes:
            return i
        i += 1
    return None


def unescape_string(value: str) -> str:
    """Resolve backslash escapes inside a quoted string body."""
    out: list[str] = []
    chars = iter(value)
    for ch in chars:
        if ch != BACKSLASH:
            out.append(ch)
            continue
        nxt = next(chars, None)
        if nxt is None:
            raise ToonError("Invalid escape sequence: backslash at end of string")
        try:
            out.append(_ESCAPES[nxt])
        except KeyError:
            raise ToonError(f"Invalid escape sequence: \\{nxt}") from None
    return "".join(out)


def _is_boolean_or_null_literal(token: str) -> bool:
    return token in ("true", "false", "null")


def _is_numeric_literal(token: str) -> bool:
    return _NUMBER.fullmatch(token) is not None and not _LEADING_ZERO.match(token)


def parse_array_header_line(
    content: str, default_delimiter: str
) -> ArrayHeaderParseResult | None:
    """Parse an array header line; return None when the line is not a header."""
    trimmed = content.lstrip()

    if trimmed.startswith(DOUBLE_QUOTE):
        closing = find_closing_quote(trimmed, 0)
        if closing is None:
            raise ToonError("Unterminated string: missing closing quote")
        if not trimmed[closing + 1 :].startswith(OPEN_BRACKET):
            return None
        key_end = (len(content) - len(trimmed)) + closing + 1
        bracket_start = content.find(OPEN_BRACKET, key_end)
    else:
        bracket_start = content.find(OPEN_BRACKET)
    if bracket_start < 0:
        return None

    bracket_end = content.find(CLOSE_BRACKET, bracket_start)
    if bracket_end < 0:
        return None

    brace_end = bracket_end + 1
    brace_start = content.find(OPEN_BRACE, bracket_end + 1)
    colon_after_bracket = content.find(COLON, bracket_end + 1)
    if 0 <= brace_start < colon_after_bracket:
        found_end = content.find(CLOSE_BRACE, brace_start)
        if found_end >= 0:
            brace_end = found_end + 1

    colon_index = content.find(COLON, brace_end)
    if colon_index < 0:
        return None

    key: str | None = None
    key_was_quoted = False
    if bracket_start > 0:
        raw_key = content[:bracket_start].strip()
        if raw_key.startswith(DOUBLE_QUOTE):
            key = parse_string_literal(raw_key)
            key_was_quoted = True
        elif raw_key:
            key = raw_key

    after_colon = content[colon_index + 1 :].strip()
    bracket_content = content[bracket_start + 1 : bracket_end]

    try:
        length, delimiter = parse_bracket_segment(bracket_content, default_delimiter)
    except ToonError:
        return None

    fields: tuple[FieldName, ...] | None = None
    if 0 <= brace_start < colon_index:
        found_end = content.find(CLOSE_BRACE, brace_start)
        if 0 <= found_end < colon_index:
            fields_content = content[brace_start + 1 : found_end]
            fields = tuple(
                FieldName(
                    name=parse_string_literal(raw.strip()),
                    was_quoted=raw.strip().startswith(DOUBLE_QUOTE),
                )
                for raw in parse_delimited_values(fields_content, delimiter)
            )

    return ArrayHeaderParseResult(
        header=ArrayHeaderInfo(
            key=key,
            key_was_quoted=key_was_quoted,
            length=length,
            delimiter=delimiter,
            fields=fields,
        ),
        inline_values=after_colon or None,
    )


def parse_bracket_segment(seg: str, default_delimiter: str) -> tuple[int, str]:
    """Split a bracket segment such as ``3|`` into its length and delimiter."""
    content = seg
    delimiter = default_delimiter
    if content.endswith(TAB):
        delimiter = TAB
        content = content[:-1]
    elif content.endswith(PIPE):
        delimiter = PIPE
        content = content[:-1]

    if _LENGTH.fullmatch(content) is None:
        raise ToonError(f"Invalid array length: {seg}")
    return int(content), delimiter


def parse_delimited_values(text: str, delimiter: str) -> list[str]:
    """Split on the delimiter outside quotes, trimming each value."""
    values: list[str] = []
    buffer: list[str] = []
    in_quotes = False
    chars = iter(text)

    for ch in chars:
        if ch == BACKSLASH and in_quotes:
            buffer.append(ch)
            nxt = next(chars, None)
            if nxt is not None:
                buffer.append(nxt)
            continue
        if ch == DOUBLE_QUOTE:
            in_quotes = not in_quotes
            buffer.append(ch)
            continue
        if ch == delimiter and not in_quotes:
            values.append("".join(buffer).strip())
            buffer.clear()
            continue
        buffer.append(ch)

    if buffer or values:
        values.append("".join(buffer).strip())
    return values


def map_row_values_to_primitives(values: list[str]) -> list[JsonPrimitive]:
    """Parse each delimited value into a primitive."""
    return [parse_primitive_token(value) for value in values]


def parse_primitive_token(token: str) -> JsonPrimitive:
    """Parse a token into a string, number, boolean or None."""
    trimmed = token.strip()
    if not trimmed:
        return ""
    if trimmed.startswith(DOUBLE_QUOTE):
        return parse_string_literal(trimmed)
    if _is_boolean_or_null_literal(trimmed):
        return {"true": True, "false": False}.get(trimmed)
    if _is_numeric_literal(trimmed):
        number = float(trimmed)
        return 0.0 if number == 0.0 else number
    return trimmed


def parse_string_literal(token: str) -> str:
    """Return a quoted literal's unescaped content, or an unquoted token as is."""
    trimmed = token.strip()
    if trimmed.startswith(DOUBLE_QUOTE):
        closing = find_closing_quote(trimmed, 0)
        if closing is None:
            raise ToonError("Unterminated string: missing closing quote")
        if closing != len(trimmed) - 1:
            raise ToonError("Unexpected characters after closing quote")
        return unescape_string(trimmed[1:closing])
    return trimmed


def parse_unquoted_key(content: str, start: int) -> tuple[str, int]:
    """Parse an unquoted key; return it and the index just past its colon."""
    pos = content.find(COLON, start)
    if pos < 0:
        raise ToonError("Missing colon after key")
    return content[start:pos].strip(), pos + 1


def parse_quoted_key(content: str, start: int) -> tuple[str, int]:
    """Parse a quoted key; return it and the index just past its colon."""
    closing = find_closing_quote(content, start)
    if closing is None:
        raise ToonError("Unterminated quoted key")
    key = unescape_string(content[start + 1 : closing])
    pos = closing + 1
    if pos >= len(content) or content[pos] != COLON:
        raise ToonError("Missing colon after key")
    return key, pos + 1


def parse_key_token(content: str, start: int) -> tuple[str, int, bool]:
    """Parse a quoted or unquoted key; return key, end index and quoted flag."""
    is_quoted = content[start : start + 1] == DOUBLE_QUOTE
    if is_quoted:
        key, end = parse_quoted_key(content, start)
    else:
        key, end = parse_unquoted_key(content, start)
    return key, end, is_quoted


def is_array_header_content(content: str) -> bool:
    """True when the line starts with ``[`` and has an unquoted colon."""
    return (
        content.lstrip().startswith(OPEN_BRACKET)
        and find_unquoted_char(content, COLON, 0) is not None
    )


def is_key_value_content(content: str) -> bool:
    """True when the line has a colon outside quotes."""
    return find_unquoted_char(content, COLON, 0) is not None