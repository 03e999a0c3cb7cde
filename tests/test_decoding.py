import pytest

from toonkit.decoding import ExpandPathsMode, decode, decode_lines, decode_stream
from toonkit.events import EndObject, Key, Primitive, StartObject
from toonkit.scanner import ToonError


def test_simple_object():
    assert decode("name: Alice\nage: 30") == {"name": "Alice", "age": 30.0}


def test_empty_document_is_empty_object():
    assert decode("") == {}


def test_single_primitive():
    assert decode("hello") == "hello"


def test_root_inline_array():
    assert decode("[3]: 1,2,3") == [1.0, 2.0, 3.0]


def test_nested_object():
    assert decode("a:\n  b: 1") == {"a": {"b": 1.0}}


def test_tabular_array():
    text = "items[2]{id,name}:\n  1,a\n  2,b"
    assert decode(text) == {
        "items": [{"id": 1.0, "name": "a"}, {"id": 2.0, "name": "b"}]
    }


def test_list_array():
    assert decode("items[2]:\n  - x\n  - y") == {"items": ["x", "y"]}


def test_expand_paths_safe_and_off():
    assert decode("a.b: 1", expand_paths=ExpandPathsMode.SAFE) == {"a": {"b": 1.0}}
    assert decode("a.b: 1", expand_paths="safe") == {"a": {"b": 1.0}}
    assert decode("a.b: 1") == {"a.b": 1.0}


def test_unknown_expand_mode_rejected():
    with pytest.raises(ValueError):
        decode("a: 1", expand_paths="always")


def test_strict_count_mismatch_raises():
    with pytest.raises(ToonError, match="Expected 2 inline array items"):
        decode("[2]: 1")


def test_lenient_count_mismatch_allowed():
    assert decode("[2]: 1", strict=False) == [1.0]


def test_tab_indentation_rejected_in_strict_mode():
    with pytest.raises(ToonError):
        decode("a:\n\tb: 1")


def test_decode_lines_matches_decode():
    text = "user:\n  id: 7\n  tags[2]: a,b"
    assert decode_lines(text.split("\n")) == decode(text)


def test_custom_indent():
    assert decode("a:\n    b: true", indent=4) == {"a": {"b": True}}


def test_decode_stream_events():
    assert decode_stream(["a: 1"]) == [
        StartObject(),
        Key("a", False),
        Primitive(1.0),
        EndObject(),
    ]