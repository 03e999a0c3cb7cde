"""Incremental and asynchronous decoding of TOON lines into JSON events."""

from __future__ import annotations

import asyncio
from collections import deque
from enum import Enum, auto
from typing import Any, Iterable

from toonkit.decoders import DEFAULT_DELIMITER, decode_events
from toonkit.decoding import ExpandPathsMode
from toonkit.events import (
    EndObject,
    JsonStreamEvent,
    Key,
    Primitive,
    StartObject,
    build_node_from_events,
    node_to_json,
)
from toonkit.expand import expand_paths_safe
from toonkit.parser import (
    COLON,
    DOUBLE_QUOTE,
    find_closing_quote,
    is_array_header_content,
    is_key_value_content,
    parse_array_header_line,
    parse_key_token,
    parse_primitive_token,
)
from toonkit.scanner import ParsedLine, ScanState, parse_line
from toonkit.validation import LIST_ITEM_PREFIX


class _State(Enum):
    INITIAL = auto()
    SIMPLE_OBJECT = auto()
    ARRAY_MODE = auto()
    FINISHED = auto()


def _is_key_value_line(line: ParsedLine) -> bool:
    content = line.content
    if content.startswith(LIST_ITEM_PREFIX):
        return False
    if content.startswith(DOUBLE_QUOTE):
        closing = find_closing_quote(content, 0)
        return closing is not None and COLON in content[closing + 1 :]
    return COLON in content and is_key_value_content(content)


class AsyncDecodeStream:
    """Yield JSON stream events from TOON lines as the lines are read.

    Flat key/value objects are emitted line by line. As soon as an array,
    a list item or a nested block is seen, the remaining input is buffered
    and decoded in one batch. Works both as an iterator and as an async
    iterator.
    """

    def __init__(
        self, lines: Iterable[str], indent: int = 2, strict: bool = True
    ) -> None:
        self._lines = iter(lines)
        self.indent = indent
        self.strict = strict
        self._scan_state = ScanState()
        self._queue: deque[JsonStreamEvent] = deque()
        self._state = _State.INITIAL
        self._base_depth = 0
        self._context_stack: list[int] = []
        self._buffer: list[ParsedLine] = []
        self._lines_exhausted = False
        self._last_depth: int | None = None

    def __iter__(self) -> AsyncDecodeStream:
        return self

    def __next__(self) -> JsonStreamEvent:
        while True:
            event = self._process_next()
            if event is not None:
                return event
            if self._state is _State.FINISHED and not self._queue:
                raise StopIteration

    def __aiter__(self) -> AsyncDecodeStream:
        return self

    async def __anext__(self) -> JsonStreamEvent:
        while True:
            await asyncio.sleep(0)
            event = self._process_next()
            if event is not None:
                return event
            if self._state is _State.FINISHED and not self._queue:
                raise StopAsyncIteration

    def _pop(self) -> JsonStreamEvent | None:
        return self._queue.popleft() if self._queue else None

    def _process_next(self) -> JsonStreamEvent | None:
        if self._queue:
            return self._queue.popleft()
        if self._state is _State.FINISHED:
            return None
        if self._lines_exhausted:
            return self._finalize()

        raw = next(self._lines, None)
        if raw is None:
            self._lines_exhausted = True
            return self._finalize()

        line = parse_line(raw, self._scan_state, self.indent, self.strict)
        if line is None:
            return None

        if self._state is _State.INITIAL:
            return self._process_initial_line(line)
        if self._state is _State.SIMPLE_OBJECT:
            return self._process_simple_object_line(line)
        if self._state is _State.ARRAY_MODE:
            self._buffer.append(line)
        return None

    def _process_initial_line(self, line: ParsedLine) -> JsonStreamEvent | None:
        if is_array_header_content(line.content) and (
            parse_array_header_line(line.content, DEFAULT_DELIMITER) is not None
        ):
            self._state = _State.ARRAY_MODE
            self._buffer.append(line)
            return None

        if _is_key_value_line(line):
            self._state = _State.SIMPLE_OBJECT
            self._base_depth = 0
            self._context_stack.append(0)
            self._queue.append(StartObject())
            self._process_key_value_line(line)
            self._last_depth = line.depth
            return self._pop()

        self._state = _State.FINISHED
        return Primitive(parse_primitive_token(line.content.strip()))

    def _process_simple_object_line(self, line: ParsedLine) -> JsonStreamEvent | None:
        current_depth = line.depth
        if self._last_depth is not None and current_depth < self._last_depth:
            while self._context_stack:
                obj_depth = self._context_stack[-1]
                if obj_depth >= current_depth and obj_depth > self._base_depth:
                    self._context_stack.pop()
                    self._queue.append(EndObject())
                else:
                    break

        if is_array_header_content(line.content) and (
            parse_array_header_line(line.content, DEFAULT_DELIMITER) is not None
        ):
            self._state = _State.ARRAY_MODE
            self._buffer.append(line)
            return self._pop()

        self._process_key_value_line(line)
        self._last_depth = current_depth
        return self._pop()

    def _process_key_value_line(self, line: ParsedLine) -> None:
        content = line.content
        if content.startswith(LIST_ITEM_PREFIX):
            self._state = _State.ARRAY_MODE
            self._buffer.append(line)
            return

        key, end, is_quoted = parse_key_token(content, 0)
        rest = content[end:].strip()
        if not rest:
            self._state = _State.ARRAY_MODE
            self._buffer.append(line)
            return

        self._queue.append(Key(key, is_quoted))
        self._queue.append(Primitive(parse_primitive_token(rest)))

    def _finalize(self) -> JsonStreamEvent | None:
        if self._buffer or self._state is _State.ARRAY_MODE:
            return self._batch_decode_remaining()

        while self._context_stack:
            self._context_stack.pop()
            self._queue.append(EndObject())

        if self._state is _State.INITIAL:
            self._queue.extend((StartObject(), EndObject()))
        self._state = _State.FINISHED
        return self._pop()

    def _batch_decode_remaining(self) -> JsonStreamEvent | None:
        for raw in self._lines:
            line = parse_line(raw, self._scan_state, self.indent, self.strict)
            if line is not None:
                self._buffer.append(line)

        raw_lines = [line.raw for line in self._buffer]
        self._queue.extend(decode_events(raw_lines, self.indent, self.strict))
        self._buffer.clear()
        self._context_stack.clear()
        self._state = _State.FINISHED
        return self._pop()


async def try_decode_stream_async(
    lines: Iterable[str], indent: int = 2, strict: bool = True
) -> list[JsonStreamEvent]:
    """Decode TOON lines into JSON stream events, yielding to the event loop first."""
    collected = list(lines)
    await asyncio.sleep(0)
    return decode_events(collected, indent, strict)


async def try_decode_async(
    text: str,
    indent: int = 2,
    strict: bool = True,
    expand_paths: ExpandPathsMode | str = ExpandPathsMode.OFF,
) -> Any:
    """Decode a TOON document into dicts, lists and primitives asynchronously."""
    mode = ExpandPathsMode(expand_paths)
    events = await try_decode_stream_async(text.split("\n"), indent, strict)
    node = build_node_from_events(events)
    if mode is ExpandPathsMode.SAFE:
        node = expand_paths_safe(node, strict)
    return node_to_json(node)