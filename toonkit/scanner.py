"""Line scanning for TOON input: indentation, depth and blank-line tracking."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

SPACE = " "
TAB = "\t"


class ToonError(ValueError):
    """Raised when TOON input cannot be scanned, parsed or validated."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


@dataclass(frozen=True)
class ParsedLine:
    """A non-blank input line with its indentation resolved."""

    raw: str
    indent: int
    content: str
    depth: int
    line_number: int


@dataclass(frozen=True)
class BlankLineInfo:
    """Position of a blank line, kept for strict-mode validation."""

    line_number: int
    indent: int
    depth: int


@dataclass
class ScanState:
    """Running state shared by successive calls to :func:`parse_line`."""

    line_number: int = 0
    blank_lines: list[BlankLineInfo] = field(default_factory=list)


def compute_depth_from_indent(indent_spaces: int, indent_size: int) -> int:
    """Return the nesting depth for a number of leading spaces."""
    if indent_size == 0:
        return 0
    return indent_spaces // indent_size


def parse_line(
    raw: str, state: ScanState, indent_size: int, strict: bool
) -> ParsedLine | None:
    """Scan one raw line; return None for blank lines, which are recorded in state."""
    state.line_number += 1
    line_number = state.line_number

    indent = len(raw) - len(raw.lstrip(SPACE))
    content = raw[indent:]
    depth = compute_depth_from_indent(indent, indent_size)

    if not content.strip():
        state.blank_lines.append(BlankLineInfo(line_number, indent, depth))
        return None

    if strict:
        leading = raw[: len(raw) - len(raw.lstrip(SPACE + TAB))]
        if TAB in leading:
            raise ToonError(
                "Tabs are not allowed in indentation in strict mode", line_number
            )
        if indent_size == 0:
            if indent > 0:
                raise ToonError(
                    "Indentation not allowed when indent size is 0, "
                    f"but found {indent} spaces",
                    line_number,
                )
        elif indent % indent_size != 0:
            raise ToonError(
                f"Indentation must be exact multiple of {indent_size}, "
                f"but found {indent} spaces",
                line_number,
            )

    return ParsedLine(
        raw=raw,
        indent=indent,
        content=content,
        depth=depth,
        line_number=line_number,
    )


def parse_lines(
    source: Iterable[str], indent_size: int, strict: bool, state: ScanState
) -> list[ParsedLine]:
    """Scan every line of the source, skipping (but recording) blank lines."""
    parsed = (parse_line(raw, state, indent_size, strict) for raw in source)
    return [line for line in parsed if line is not None]


class LineCursor:
    """Forward cursor over scanned lines with one line of lookahead."""

    def __init__(
        self, lines: list[ParsedLine], blank_lines: list[BlankLineInfo]
    ) -> None:
        self._lines = list(lines)
        self._index = 0
        self._last: ParsedLine | None = None
        self.blank_lines = list(blank_lines)

    def peek(self) -> ParsedLine | None:
        """Return the next line without consuming it."""
        if self._index < len(self._lines):
            return self._lines[self._index]
        return None

    def advance(self) -> None:
        """Consume the next line, if any."""
        self.next_line()

    def next_line(self) -> ParsedLine | None:
        """Consume and return the next line, or None at the end."""
        line = self.peek()
        if line is not None:
            self._last = line
            self._index += 1
        return line

    def current(self) -> ParsedLine | None:
        """Return the most recently consumed line."""
        return self._last

    def at_end(self) -> bool:
        """Return True when every line has been consumed."""
        return self._index >= len(self._lines)