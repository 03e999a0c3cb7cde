import json

import pytest

from toonkit.conversion import decode_to_json_chunks, json_stringify_null
from toonkit.decoding import ExpandPathsMode, decode
from toonkit.json_stringify import json_stringify_lines
from toonkit.scanner import ToonError

DOC = "name: Alice\nage: 30\ntags[2]: x,y"


def test_chunks_round_trip_to_decoded_value():
    text = "".join(decode_to_json_chunks(DOC))
    assert json.loads(text) == decode(DOC)


@pytest.mark.parametrize("indent", [0, 2])
def test_chunks_match_stringified_value(indent):
    text = "".join(decode_to_json_chunks(DOC, indent=indent))
    assert text == json_stringify_lines(decode(DOC, indent=2), indent)[0]


def test_empty_input_is_empty_object():
    assert "".join(decode_to_json_chunks("")) == "{}"


def test_expand_paths_safe_nests_keys():
    chunks = decode_to_json_chunks("a.b: 1\na.c: 2", expand_paths=ExpandPathsMode.SAFE)
    assert json.loads("".join(chunks)) == decode(
        "a:\n  b: 1\n  c: 2"
    )


def test_expand_paths_accepts_string_mode():
    chunks = decode_to_json_chunks("a.b: 1", expand_paths="safe")
    assert json.loads("".join(chunks)) == {"a": {"b": 1.0}}


def test_expand_paths_off_keeps_dotted_key():
    chunks = decode_to_json_chunks("a.b: 1")
    assert list(json.loads("".join(chunks))) == ["a.b"]


def test_expand_paths_conflict_in_strict_mode():
    with pytest.raises(ToonError, match="Path expansion conflict"):
        decode_to_json_chunks("a: 1\na.b: 2", expand_paths=ExpandPathsMode.SAFE)


def test_expand_paths_conflict_lenient_last_wins():
    chunks = decode_to_json_chunks(
        "a: 1\na.b: 2", strict=False, expand_paths=ExpandPathsMode.SAFE
    )
    assert json.loads("".join(chunks)) == {"a": {"b": 2.0}}


def test_strict_count_mismatch_raises():
    with pytest.raises(ToonError, match="inline array items"):
        decode_to_json_chunks("items[2]: 1")


def test_lenient_count_mismatch_decodes():
    chunks = decode_to_json_chunks("items[2]: 1", strict=False)
    assert json.loads("".join(chunks)) == {"items": [1.0]}


def test_invalid_mode_rejected():
    with pytest.raises(ValueError):
        decode_to_json_chunks("a: 1", expand_paths="sometimes")


@pytest.mark.parametrize("indent", [0, 2])
def test_json_stringify_null(indent):
    assert json_stringify_null(indent) == ["null"]