import pytest

from toonkit.events import ObjectNode, node_to_json
from toonkit.expand import expand_paths_safe
from toonkit.scanner import ToonError


def obj(*entries, quoted=()):
    return ObjectNode(entries=list(entries), quoted_keys=set(quoted))


def expand(value, strict=True):
    return node_to_json(expand_paths_safe(value, strict))


def test_dotted_key_becomes_nested_object():
    assert expand(obj(("a.b.c", 1.0))) == {"a": {"b": {"c": 1.0}}}


def test_quoted_key_is_left_alone():
    assert expand(obj(("a.b", 1.0), quoted=["a.b"])) == {"a.b": 1.0}


def test_non_identifier_segment_is_left_alone():
    assert expand(obj(("a.1", 1.0), ("a-b.c", 2.0))) == {"a.1": 1.0, "a-b.c": 2.0}


def test_paths_sharing_prefix_merge():
    result = expand(obj(("a.b", 1.0), ("a.c", 2.0)))
    assert result == {"a": {"b": 1.0, "c": 2.0}}
    assert list(result["a"]) == ["b", "c"]


def test_literal_object_merges_with_expanded_path():
    result = expand(obj(("a.b", 1.0), ("a", obj(("c", 2.0)))))
    assert result == {"a": {"b": 1.0, "c": 2.0}}


def test_segment_conflict_strict_raises():
    with pytest.raises(ToonError, match="Path expansion conflict at segment"):
        expand(obj(("a", 1.0), ("a.b", 2.0)))


def test_segment_conflict_lenient_replaces():
    assert expand(obj(("a", 1.0), ("a.b", 2.0)), strict=False) == {"a": {"b": 2.0}}


def test_key_conflict_strict_raises():
    with pytest.raises(ToonError, match="cannot merge object with primitive"):
        expand(obj(("a.b", 1.0), ("a", 3.0)))


def test_key_conflict_lenient_last_wins():
    assert expand(obj(("a.b", 1.0), ("a", 3.0)), strict=False) == {"a": 3.0}


def test_arrays_are_expanded_recursively():
    value = [obj(("x.y", True)), "plain"]
    assert expand(value) == [{"x": {"y": True}}, "plain"]


def test_primitives_pass_through():
    assert expand_paths_safe("a.b", True) == "a.b"
    assert expand_paths_safe(None, True) is None