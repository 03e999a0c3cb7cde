import json

import pytest

from toonkit.decoding import decode, decode_stream
from toonkit.events import (
    EndArray,
    EndObject,
    Key,
    Primitive,
    StartArray,
    StartObject,
)
from toonkit.json_stream import json_stream_from_events
from toonkit.json_stringify import json_stringify_lines
from toonkit.scanner import ToonError

DOC = "\n".join(
    [
        "user:",
        "  id: 1",
        "  tags[2]: a,b",
        "items[2]{x,y}:",
        "  1,2",
        "  3,4",
        "empty:",
        "list[2]:",
        "  - 5",
        "  - k: v",
    ]
)


@pytest.mark.parametrize("indent", [0, 2, 4])
def test_matches_whole_value_stringify(indent):
    events = decode_stream(DOC.split("\n"))
    streamed = "".join(json_stream_from_events(events, indent))
    assert streamed == json_stringify_lines(decode(DOC), indent)[0]


def test_round_trips_through_json():
    events = decode_stream(DOC.split("\n"))
    text = "".join(json_stream_from_events(events, 2))
    assert json.loads(text) == decode(DOC)


def test_compact_matches_stdlib_json():
    events = decode_stream(DOC.split("\n"))
    text = "".join(json_stream_from_events(events, 0))
    assert text == json.dumps(decode(DOC), separators=(",", ":"), ensure_ascii=False)


def test_empty_object():
    assert "".join(json_stream_from_events([StartObject(), EndObject()], 2)) == "{}"


def test_root_primitive_string():
    chunks = json_stream_from_events([Primitive("hello")], 2)
    assert json.loads("".join(chunks)) == "hello"


def test_quoted_key_is_escaped():
    events = [StartObject(), Key('a"b', True), Primitive(None), EndObject()]
    text = "".join(json_stream_from_events(events, 0))
    assert json.loads(text) == {'a"b': None}


def test_nested_arrays():
    events = [
        StartArray(2),
        StartArray(1),
        Primitive(True),
        EndArray(),
        StartArray(0),
        EndArray(),
        EndArray(),
    ]
    text = "".join(json_stream_from_events(events, 2))
    assert json.loads(text) == [[True], []]
    assert text == json_stringify_lines([[True], []], 2)[0]


@pytest.mark.parametrize(
    "events, message",
    [
        ([EndObject()], "Mismatched endObject"),
        ([StartArray(0), EndObject()], "Mismatched endObject"),
        ([EndArray()], "Mismatched endArray"),
        ([StartObject(), EndArray()], "Mismatched endArray"),
        ([Key("a")], "Key event outside of object context"),
        ([StartArray(1), Key("a")], "Key event outside of object context"),
        ([StartObject(), Primitive(1.0)], "without preceding key"),
        ([StartObject()], "Incomplete event stream"),
        ([StartArray(1), Primitive(1.0)], "Incomplete event stream"),
    ],
)
def test_malformed_streams_raise(events, message):
    with pytest.raises(ToonError, match=message):
        json_stream_from_events(events, 2)