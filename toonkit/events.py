"""JSON stream events and the node tree built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from toonkit.parser import JsonPrimitive
from toonkit.scanner import ToonError


@dataclass(frozen=True)
class StartObject:
    """Start of an object."""


@dataclass(frozen=True)
class EndObject:
    """End of an object."""


@dataclass(frozen=True)
class StartArray:
    """Start of an array with its declared length."""

    length: int


@dataclass(frozen=True)
class EndArray:
    """End of an array."""


@dataclass(frozen=True)
class Key:
    """An object key, remembering whether it was written quoted."""

    key: str
    was_quoted: bool = False


@dataclass(frozen=True)
class Primitive:
    """A string, number, boolean or null value."""

    value: JsonPrimitive


JsonStreamEvent = Union[StartObject, EndObject, StartArray, EndArray, Key, Primitive]


@dataclass
class ObjectNode:
    """An object in decoded order, with the keys that were written quoted."""

    entries: list[tuple[str, Any]] = field(default_factory=list)
    quoted_keys: set[str] = field(default_factory=set)


NodeValue = Union[JsonPrimitive, list, ObjectNode]


@dataclass
class _ObjectContext:
    node: ObjectNode = field(default_factory=ObjectNode)
    current_key: str | None = None


@dataclass
class _ArrayContext:
    items: list = field(default_factory=list)


_MISSING = object()


class _Builder:
    def __init__(self) -> None:
        self.stack: list[_ObjectContext | _ArrayContext] = []
        self.root: Any = _MISSING

    def attach(self, node: Any, missing_key_message: str) -> None:
        if not self.stack:
            self.root = node
            return
        parent = self.stack[-1]
        if isinstance(parent, _ObjectContext):
            if parent.current_key is None:
                raise ToonError(missing_key_message)
            parent.node.entries.append((parent.current_key, node))
            parent.current_key = None
        else:
            parent.items.append(node)

    def apply(self, event: JsonStreamEvent) -> None:
        if isinstance(event, StartObject):
            self.stack.append(_ObjectContext())
        elif isinstance(event, EndObject):
            if not self.stack:
                raise ToonError("Unexpected endObject event with empty stack")
            context = self.stack.pop()
            if not isinstance(context, _ObjectContext):
                raise ToonError("Mismatched end event: expected Object but found Array")
            self.attach(context.node, "Object endObject event without preceding key")
        elif isinstance(event, StartArray):
            self.stack.append(_ArrayContext())
        elif isinstance(event, EndArray):
            if not self.stack:
                raise ToonError("Unexpected endArray event with empty stack")
            context = self.stack.pop()
            if not isinstance(context, _ArrayContext):
                raise ToonError("Mismatched end event: expected Array but found Object")
            self.attach(context.items, "Array endArray event without preceding key")
        elif isinstance(event, Key):
            top = self.stack[-1] if self.stack else None
            if not isinstance(top, _ObjectContext):
                raise ToonError("Unexpected Key event outside of object context")
            top.current_key = event.key
            if event.was_quoted:
                top.node.quoted_keys.add(event.key)
        elif isinstance(event, Primitive):
            self.attach(event.value, "Primitive event without preceding key in object")
        else:
            raise ToonError(f"Unknown event: {event!r}")

    def finish(self) -> NodeValue:
        if self.stack:
            raise ToonError("Incomplete event stream: stack not empty at end")
        if self.root is _MISSING:
            raise ToonError("No root value built from events")
        return self.root


def build_node_from_events(events: Iterable[JsonStreamEvent]) -> NodeValue:
    """Build a node tree from a stream of events."""
    builder = _Builder()
    for event in events:
        builder.apply(event)
    return builder.finish()


def node_to_json(value: NodeValue) -> Any:
    """Convert a node tree into plain dicts, lists and primitives."""
    if isinstance(value, ObjectNode):
        return {key: node_to_json(item) for key, item in value.entries}
    if isinstance(value, list):
        return [node_to_json(item) for item in value]
    return value