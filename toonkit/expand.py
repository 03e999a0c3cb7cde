"""Safe expansion of dotted keys into nested objects."""

from __future__ import annotations

import re
from typing import Any

from toonkit.events import NodeValue, ObjectNode
from toonkit.scanner import ToonError

DOT = "."

_IDENTIFIER_SEGMENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _is_identifier_segment(segment: str) -> bool:
    return _IDENTIFIER_SEGMENT.fullmatch(segment) is not None


def _node_type_name(value: Any) -> str:
    if isinstance(value, ObjectNode):
        return "object"
    if isinstance(value, list):
        return "array"
    return "primitive"


def _find_index(entries: list[tuple[str, Any]], key: str) -> int | None:
    return next((i for i, (k, _) in enumerate(entries) if k == key), None)


def expand_paths_safe(value: NodeValue, strict: bool) -> NodeValue:
    """Expand unquoted dotted keys made of identifier segments into nested objects.

    In strict mode a conflict between a path and an existing non-object value
    raises :class:`ToonError`; otherwise the later value wins.
    """
    if isinstance(value, list):
        return [expand_paths_safe(item, strict) for item in value]
    if isinstance(value, ObjectNode):
        return _expand_object(value, strict)
    return value


def _expand_object(obj: ObjectNode, strict: bool) -> ObjectNode:
    expanded = ObjectNode()
    for key, raw_value in obj.entries:
        value = expand_paths_safe(raw_value, strict)
        if DOT in key and key not in obj.quoted_keys:
            segments = key.split(DOT)
            if all(_is_identifier_segment(segment) for segment in segments):
                _insert_path(expanded.entries, segments, value, strict)
                continue
        _insert_literal(expanded.entries, key, value, strict)
    return expanded


def _insert_path(
    entries: list[tuple[str, Any]], segments: list[str], value: Any, strict: bool
) -> None:
    if not segments:
        return
    head, *rest = segments
    if not rest:
        _insert_literal(entries, head, value, strict)
        return

    index = _find_index(entries, head)
    if index is None:
        child = ObjectNode()
        entries.append((head, child))
    else:
        child = entries[index][1]
        if not isinstance(child, ObjectNode):
            if strict:
                raise ToonError(
                    f'Path expansion conflict at segment "{head}": '
                    f"expected object but found {_node_type_name(child)}"
                )
            child = ObjectNode()
            entries[index] = (head, child)
    _insert_path(child.entries, rest, value, strict)


def _insert_literal(
    entries: list[tuple[str, Any]], key: str, value: Any, strict: bool
) -> None:
    index = _find_index(entries, key)
    if index is None:
        entries.append((key, value))
        return

    existing = entries[index][1]
    if isinstance(existing, ObjectNode) and isinstance(value, ObjectNode):
        for source_key, source_value in value.entries:
            _insert_literal(existing.entries, source_key, source_value, strict)
    elif strict:
        raise ToonError(
            f'Path expansion conflict at key "{key}": cannot merge '
            f"{_node_type_name(existing)} with {_node_type_name(value)}"
        )
    else:
        entries[index] = (key, value)