# toonkit

`toonkit` reads TOON — Token-Oriented Object Notation, a compact,
indentation-based text format for JSON data — and turns it into plain
Python values, a sequence of structural events, or JSON text.

It depends on nothing beyond the standard library.

## What TOON looks like

```
name: Alice
tags[3]: red,green,blue
users[2]{id,name}:
  1,Ada
  2,Grace
items[2]:
  - kind: book
    pages: 320
  - kind: pen
```

Objects are `key: value` lines nested by indentation. Arrays carry their
length in brackets and come in three shapes: inline primitives
(`tags[3]: red,green,blue`), tabular rows under a field list
(`users[2]{id,name}:`), and list items introduced by `- `. The delimiter
is a comma unless the brackets declare a tab or a pipe (`[3|]`, `[3\t]`).
Keys and values may be double-quoted, with `\n`, `\t`, `\r`, `\\` and
`\"` escapes.

## Decoding to Python values

```python
from toonkit.decoding import decode

doc = decode("name: Alice\ntags[3]: red,green,blue")
assert doc["name"] == "Alice"
assert doc["tags"] == ["red", "green", "blue"]
```

`decode(text, indent=2, strict=True, expand_paths=ExpandPathsMode.OFF)`
returns dicts, lists, strings, floats, booleans and `None`; key order is
kept, and every number is decoded as a `float`. An empty document gives
`{}`, and a single non-key line gives a primitive.

- `indent` — spaces per nesting level.
- `strict` — rejects tabs in indentation, indentation that is not a
  multiple of `indent`, array and row counts that differ from the
  declared ones, extra rows or list items, and blank lines inside an
  array.
- `expand_paths` — an `ExpandPathsMode` (or `"off"` / `"safe"`). With
  `SAFE`, unquoted dotted keys whose segments are identifiers, such as
  `a.b.c: 1`, become nested objects, and objects under the same key are
  merged. Quoted keys are left alone. In strict mode a conflict with an
  existing non-object value raises; otherwise the later value wins.

`decode_lines(lines, indent, strict, expand_paths)` does the same for an
iterable of lines that are already split.

Malformed input raises `toonkit.scanner.ToonError`, a `ValueError`
subclass:

```python
from toonkit.decoding import decode
from toonkit.scanner import ToonError

try:
    decode("items[3]: a,b")
except ToonError as err:
    print(err)  # Expected 3 inline array items, but got 2
```

## Events

`toonkit.decoding.decode_stream(lines, indent, strict)` returns the
document as a list of events from `toonkit.events`: `StartObject`,
`EndObject`, `StartArray` (with the declared `length`), `EndArray`,
`Key` (with `was_quoted`) and `Primitive`. `build_node_from_events`
assembles events into a tree (objects as `ObjectNode`, which remembers
quoted keys), and `node_to_json` turns that tree into Python values.

```python
from toonkit.decoding import decode_stream
from toonkit.events import build_node_from_events, node_to_json

events = decode_stream(["a: 1", "b: two"])
value = node_to_json(build_node_from_events(events))
assert value == {"a": 1.0, "b": "two"}
```

## Producing JSON text

```python
from toonkit.conversion import decode_to_json_chunks

print("".join(decode_to_json_chunks("name: Alice\nok: true")))
```

`decode_to_json_chunks(text, indent, strict, expand_paths)` returns JSON
text as a list of chunks; `indent` is used both for reading the TOON and
for the JSON output, and `0` gives compact JSON.
`toonkit.json_stringify.json_stringify_lines(value, indent)` renders an
already decoded value, `toonkit.json_stream.json_stream_from_events(events, indent)`
renders an event sequence (raising `ToonError` if it is malformed), and
`toonkit.conversion.json_stringify_null(indent)` gives the chunks for
`null`.

## Incremental and asynchronous decoding

`toonkit.async_decode.AsyncDecodeStream(lines, indent, strict)` reads
lines one at a time. A flat object's keys and values are emitted as their
lines arrive; once an array, a list item or a nested block appears, the
rest of the input is collected and decoded together. It is both an
iterator and an async iterator:

```python
import asyncio
from toonkit.async_decode import AsyncDecodeStream, try_decode_async

async def main():
    async for event in AsyncDecodeStream(["name: Alice", "age: 30"]):
        print(event)
    print(await try_decode_async("name: Alice"))

asyncio.run(main())
```

`try_decode_stream_async(lines, indent, strict)` returns the full event
list, and `try_decode_async(text, indent, strict, expand_paths)` the
decoded value.

## Command-line options

`toonkit.args.parse_args(argv)` parses a converter's options — `INPUT`,
`-o/--output`, `-e/--encode` or `-d/--decode`, `--delimiter`
(`,`/`comma`, `|`/`pipe`, `\t`/`tab`), `--indent` (0–16),
`--no-strict`, `--key-folding`, `--flatten-depth`, `--expand-paths`
and `--stats` — into an `Args` value. `Args.detect_mode()` returns
`Mode.ENCODE` or `Mode.DECODE` from the flags, else from the input's
extension (`.toon` decodes; anything else encodes), and
`Args.is_stdin()` tells whether the input is standard input.
`parse_delimiter(text)` maps a delimiter name to its character.

## What it does not do

- It only decodes. There is no encoder from JSON or Python values to
  TOON, so the encode mode, `--stats`, `--key-folding` and
  `--flatten-depth` are parsed but nothing in the package acts on them.
- It installs no command. The argument parser is there for a program
  that wants it; reading files and writing output is left to the caller.