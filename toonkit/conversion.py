"""Conversion of TOON text into JSON text chunks."""

from __future__ import annotations

from toonkit.decoders import decode_events
from toonkit.decoding import ExpandPathsMode, decode
from toonkit.json_stream import json_stream_from_events
from toonkit.json_stringify import json_stringify_lines


def decode_to_json_chunks(
    text: str,
    indent: int = 2,
    strict: bool = True,
    expand_paths: ExpandPathsMode | str = ExpandPathsMode.OFF,
) -> list[str]:
    """Decode a TOON document and return its JSON text as chunks.

    Path expansion needs the whole value, so with it enabled the document is
    decoded first and then serialised; otherwise the event stream is rendered
    directly.
    """
    mode = ExpandPathsMode(expand_paths)
    if mode is ExpandPathsMode.SAFE:
        value = decode(text, indent, strict, mode)
        return json_stringify_lines(value, indent)
    events = decode_events(text.split("\n"), indent, strict)
    return json_stream_from_events(events, indent)


def json_stringify_null(indent: int) -> list[str]:
    """Return the JSON chunks for a null value."""
    return json_stringify_lines(None, indent)