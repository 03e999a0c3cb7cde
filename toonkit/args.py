"""Command-line arguments for converting between JSON and TOON."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence

from toonkit.decoding import ExpandPathsMode

_VERSION = "0.1.1"

_EPILOG = """EXAMPLES:
    tru input.json                  # Encode JSON to TOON (stdout)
    tru input.toon                  # Decode TOON to JSON (stdout)
    tru input.json -o output.toon   # Encode to file
    cat data.json | tru --encode    # Encode from stdin
    cat data.toon | tru --decode    # Decode from stdin
    tru input.json --stats          # Show token statistics
"""


class Mode(Enum):
    """Direction of conversion."""

    ENCODE = "encode"
    DECODE = "decode"


@dataclass
class Args:
    """Parsed command-line options."""

    input: Path | None = None
    output: Path | None = None
    encode: bool = False
    decode: bool = False
    delimiter: str = ","
    indent: int = 2
    no_strict: bool = False
    key_folding: str = "off"
    flatten_depth: int | None = None
    expand_paths: ExpandPathsMode = ExpandPathsMode.OFF
    stats: bool = False

    def detect_mode(self) -> Mode:
        """Choose the mode from explicit flags, then the input's extension."""
        if self.encode:
            return Mode.ENCODE
        if self.decode:
            return Mode.DECODE
        if self.input is not None:
            extension = self.input.suffix[1:].lower()
            if extension == "json":
                return Mode.ENCODE
            if extension == "toon":
                return Mode.DECODE
        return Mode.ENCODE

    def is_stdin(self) -> bool:
        """True when input is read from standard input."""
        return self.input is None or str(self.input) == "-"


def parse_delimiter(text: str) -> str:
    """Map a delimiter name or symbol to its character."""
    if text in (",", "comma"):
        return ","
    if text in ("|", "pipe"):
        return "|"
    if text in ("\\t", "\t", "tab"):
        return "\t"
    raise ValueError(
        f'Invalid delimiter "{text}". '
        "Valid delimiters are: comma (,), tab (\\t), pipe (|)"
    )


def _delimiter_type(text: str) -> str:
    try:
        return parse_delimiter(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _indent_type(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid indent: {text!r}") from None
    if not 0 <= value <= 16:
        raise argparse.ArgumentTypeError(f"{value} is not in 0..=16")
    return value


def _count_type(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"{value} must not be negative")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tru",
        description="Convert between JSON and TOON formats",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_VERSION}")
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        metavar="INPUT",
        help='Input file path (omit or use "-" to read from stdin)',
    )
    parser.add_argument(
        "-o", "--output", type=Path, metavar="FILE",
        help="Output file path (stdout if omitted)",
    )
    direction = parser.add_mutually_exclusive_group()
    direction.add_argument(
        "-e", "--encode", action="store_true",
        help="Encode JSON to TOON (auto-detected by default)",
    )
    direction.add_argument(
        "-d", "--decode", action="store_true",
        help="Decode TOON to JSON (auto-detected by default)",
    )
    parser.add_argument(
        "--delimiter", type=_delimiter_type, default=",",
        help="Delimiter for arrays: comma (,), tab (\\t), or pipe (|)",
    )
    parser.add_argument(
        "--indent", type=_indent_type, default=2,
        help="Indentation size (spaces)",
    )
    parser.add_argument(
        "--no-strict", action="store_true",
        help="Disable strict mode for decoding (allows lenient parsing)",
    )
    parser.add_argument(
        "--key-folding", choices=("off", "safe"), default="off",
        help="Key folding mode: off or safe",
    )
    parser.add_argument(
        "--flatten-depth", type=_count_type, metavar="N",
        help="Maximum folded segment count when key folding is enabled",
    )
    parser.add_argument(
        "--expand-paths", choices=("off", "safe"), default="off",
        help="Path expansion mode: off or safe (decode only)",
    )
    parser.add_argument(
        "--stats", action="store_true",
        help="Show token statistics (encode only)",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Args:
    """Parse command-line arguments; exits with usage on invalid input."""
    ns = _build_parser().parse_args(argv)
    return Args(
        input=ns.input,
        output=ns.output,
        encode=ns.encode,
        decode=ns.decode,
        delimiter=ns.delimiter,
        indent=ns.indent,
        no_strict=ns.no_strict,
        key_folding=ns.key_folding,
        flatten_depth=ns.flatten_depth,
        expand_paths=ExpandPathsMode(ns.expand_paths),
        stats=ns.stats,
    )