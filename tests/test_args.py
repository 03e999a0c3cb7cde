from pathlib import Path

import pytest

from toonkit.args import Args, Mode, parse_args, parse_delimiter
from toonkit.decoding import ExpandPathsMode


def test_parse_delimiter():
    assert parse_delimiter(",") == ","
    assert parse_delimiter("|") == "|"
    assert parse_delimiter("\\t") == "\t"
    assert parse_delimiter("tab") == "\t"
    with pytest.raises(ValueError, match="Invalid delimiter"):
        parse_delimiter("invalid")


@pytest.mark.parametrize(
    "text, expected",
    [("comma", ","), ("pipe", "|"), ("\t", "\t")],
)
def test_parse_delimiter_names(text, expected):
    assert parse_delimiter(text) == expected


def test_detect_mode_explicit_flags():
    args = Args(input=None, encode=True)
    assert args.detect_mode() is Mode.ENCODE


def test_detect_mode_explicit_decode_overrides_extension():
    args = Args(input=Path("data.json"), decode=True)
    assert args.detect_mode() is Mode.DECODE


def test_detect_mode_by_extension():
    args = Args(input=Path("data.toon"))
    assert args.detect_mode() is Mode.DECODE


@pytest.mark.parametrize(
    "name, mode",
    [
        ("data.json", Mode.ENCODE),
        ("DATA.TOON", Mode.DECODE),
        ("data.txt", Mode.ENCODE),
        ("noext", Mode.ENCODE),
    ],
)
def test_detect_mode_extensions(name, mode):
    assert Args(input=Path(name)).detect_mode() is mode


def test_detect_mode_default_is_encode():
    assert Args().detect_mode() is Mode.ENCODE


def test_is_stdin():
    assert Args().is_stdin() is True
    assert Args(input=Path("-")).is_stdin() is True
    assert Args(input=Path("data.json")).is_stdin() is False


def test_parse_args_defaults():
    args = parse_args([])
    assert args == Args()


def test_parse_args_full():
    args = parse_args(
        [
            "in.toon",
            "-o",
            "out.json",
            "--delimiter",
            "pipe",
            "--indent",
            "4",
            "--no-strict",
            "--key-folding",
            "safe",
            "--flatten-depth",
            "3",
            "--expand-paths",
            "safe",
            "--stats",
        ]
    )
    assert args.input == Path("in.toon")
    assert args.output == Path("out.json")
    assert args.delimiter == "|"
    assert args.indent == 4
    assert args.no_strict is True
    assert args.key_folding == "safe"
    assert args.flatten_depth == 3
    assert args.expand_paths is ExpandPathsMode.SAFE
    assert args.stats is True
    assert args.detect_mode() is Mode.DECODE


def test_parse_args_encode_decode_conflict():
    with pytest.raises(SystemExit):
        parse_args(["-e", "-d"])


@pytest.mark.parametrize("value", ["17", "-1", "two"])
def test_parse_args_indent_out_of_range(value):
    with pytest.raises(SystemExit):
        parse_args(["--indent", value])


def test_parse_args_bad_delimiter():
    with pytest.raises(SystemExit):
        parse_args(["--delimiter", ";"])


def test_parse_args_bad_key_folding():
    with pytest.raises(SystemExit):
        parse_args(["--key-folding", "always"])