"""Render a stream of JSON events as JSON text chunks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from toonkit.events import (
    EndArray,
    EndObject,
    JsonStreamEvent,
    Key,
    Primitive,
    StartArray,
    StartObject,
)
from toonkit.json_stringify import json_stringify_lines
from toonkit.scanner import ToonError


@dataclass
class _ObjectFrame:
    needs_comma: bool = False
    expect_value: bool = False


@dataclass
class _ArrayFrame:
    needs_comma: bool = False


_Frame = Union[_ObjectFrame, _ArrayFrame]


def _compact(value: object) -> str:
    return json_stringify_lines(value, 0)[0]


class _Writer:
    def __init__(self, indent: int) -> None:
        self.indent = indent
        self.stack: list[_Frame] = []
        self.depth = 0
        self.out: list[str] = []

    def newline(self) -> None:
        if self.indent > 0:
            self.out.append("\n")
            self.out.append(" " * (self.depth * self.indent))

    def before_array_item(self) -> None:
        parent = self.stack[-1] if self.stack else None
        if isinstance(parent, _ArrayFrame):
            if parent.needs_comma:
                self.out.append(",")
            self.newline()

    def value_done(self) -> None:
        if not self.stack:
            return
        parent = self.stack[-1]
        if isinstance(parent, _ObjectFrame):
            parent.expect_value = False
            parent.needs_comma = True
        else:
            parent.needs_comma = True

    def open(self, frame: _Frame, bracket: str) -> None:
        self.before_array_item()
        self.out.append(bracket)
        self.stack.append(frame)
        self.depth += 1

    def close(self, kind: type, bracket: str, name: str) -> None:
        if not self.stack or not isinstance(self.stack[-1], kind):
            raise ToonError(f"Mismatched {name} event")
        frame = self.stack.pop()
        self.depth = max(self.depth - 1, 0)
        if frame.needs_comma:
            self.newline()
        self.out.append(bracket)
        self.value_done()

    def key(self, event: Key) -> None:
        top = self.stack[-1] if self.stack else None
        if not isinstance(top, _ObjectFrame):
            raise ToonError("Key event outside of object context")
        if top.needs_comma:
            self.out.append(",")
        self.newline()
        self.out.append(_compact(event.key))
        self.out.append(": " if self.indent > 0 else ":")
        top.expect_value = True
        top.needs_comma = True

    def primitive(self, event: Primitive) -> None:
        top = self.stack[-1] if self.stack else None
        if isinstance(top, _ObjectFrame) and not top.expect_value:
            raise ToonError("Primitive event in object without preceding key")
        self.before_array_item()
        self.out.append(_compact(event.value))
        if isinstance(top, _ObjectFrame):
            top.expect_value = False
        elif isinstance(top, _ArrayFrame):
            top.needs_comma = True

    def apply(self, event: JsonStreamEvent) -> None:
        if isinstance(event, StartObject):
            self.open(_ObjectFrame(), "{")
        elif isinstance(event, EndObject):
            self.close(_ObjectFrame, "}", "endObject")
        elif isinstance(event, StartArray):
            self.open(_ArrayFrame(), "[")
        elif isinstance(event, EndArray):
            self.close(_ArrayFrame, "]", "endArray")
        elif isinstance(event, Key):
            self.key(event)
        elif isinstance(event, Primitive):
            self.primitive(event)
        else:
            raise ToonError(f"Unknown event: {event!r}")


def json_stream_from_events(
    events: Iterable[JsonStreamEvent], indent: int
) -> list[str]:
    """Convert JSON stream events into JSON text chunks.

    Raises :class:`ToonError` when the stream is malformed: mismatched start
    and end events, keys outside objects, values without keys, or unclosed
    containers.
    """
    writer = _Writer(indent)
    for event in events:
        writer.apply(event)
    if writer.stack:
        raise ToonError("Incomplete event stream: unclosed objects or arrays")
    return writer.out