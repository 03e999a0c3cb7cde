"""Serialise decoded values as JSON text with configurable indentation."""

from __future__ import annotations

import math
import unicodedata
from typing import Any

_SIMPLE_ESCAPES = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def json_stringify_lines(value: Any, indent: int) -> list[str]:
    """Return the JSON text for ``value`` as a single-element list.

    With ``indent`` > 0 each element sits on its own line; with 0 the output
    is compact.
    """
    parts: list[str] = []
    _write_value(value, 0, indent, parts)
    return ["".join(parts)]


def _write_value(value: Any, depth: int, indent: int, parts: list[str]) -> None:
    if isinstance(value, dict):
        _write_object(value, depth, indent, parts)
    elif isinstance(value, (list, tuple)):
        _write_array(value, depth, indent, parts)
    else:
        parts.append(_format_primitive(value))


def _write_array(values: Any, depth: int, indent: int, parts: list[str]) -> None:
    if not values:
        parts.append("[]")
        return
    parts.append("[")
    for idx, item in enumerate(values):
        if idx:
            parts.append(",")
        if indent > 0:
            parts.append("\n" + " " * ((depth + 1) * indent))
        _write_value(item, depth + 1, indent, parts)
    if indent > 0:
        parts.append("\n" + " " * (depth * indent))
    parts.append("]")


def _write_object(entries: dict, depth: int, indent: int, parts: list[str]) -> None:
    if not entries:
        parts.append("{}")
        return
    parts.append("{")
    separator = ": " if indent > 0 else ":"
    for idx, (key, item) in enumerate(entries.items()):
        if idx:
            parts.append(",")
        if indent > 0:
            parts.append("\n" + " " * ((depth + 1) * indent))
        parts.append(_quote(str(key)))
        parts.append(separator)
        _write_value(item, depth + 1, indent, parts)
    if indent > 0:
        parts.append("\n" + " " * (depth * indent))
    parts.append("}")


def _format_primitive(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return _quote(str(value))


def _format_float(number: float) -> str:
    if not math.isfinite(number):
        return "null"
    text = repr(number)
    if "e" in text:
        mantissa, exponent = text.split("e")
        return f"{mantissa}e{int(exponent)}"
    return text


def _quote(text: str) -> str:
    out = ['"']
    for ch in text:
        escaped = _SIMPLE_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif unicodedata.category(ch) == "Cc":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)