"""High-level decoding of TOON text into JSON-compatible Python values."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from toonkit.decoders import decode_events
from toonkit.events import JsonStreamEvent, build_node_from_events, node_to_json
from toonkit.expand import expand_paths_safe


class ExpandPathsMode(Enum):
    """Whether dotted keys are expanded into nested objects after decoding."""

    OFF = "off"
    SAFE = "safe"


def decode(
    text: str,
    indent: int = 2,
    strict: bool = True,
    expand_paths: ExpandPathsMode | str = ExpandPathsMode.OFF,
) -> Any:
    """Decode a TOON document into dicts, lists and primitives."""
    return decode_lines(text.split("\n"), indent, strict, expand_paths)


def decode_lines(
    lines: Iterable[str],
    indent: int = 2,
    strict: bool = True,
    expand_paths: ExpandPathsMode | str = ExpandPathsMode.OFF,
) -> Any:
    """Decode TOON lines into dicts, lists and primitives."""
    mode = ExpandPathsMode(expand_paths)
    node = build_node_from_events(decode_events(lines, indent, strict))
    if mode is ExpandPathsMode.SAFE:
        node = expand_paths_safe(node, strict)
    return node_to_json(node)


def decode_stream(
    lines: Iterable[str], indent: int = 2, strict: bool = True
) -> list[JsonStreamEvent]:
    """Decode TOON lines into the list of JSON stream events they describe."""
    return decode_events(lines, indent, strict)