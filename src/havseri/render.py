# topmark:header:start
#
#   project      : HavSeri
#   file         : render.py
#   file_relpath : src/havseri/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pretty-printer for decoded HavSeri values.

Rendering walks containers through the reader's iteration protocol and never
buffers decoded structure, so rendering a container consumes its records.
Rendering the same container again requires ``reset=True``, which rewinds the
reader to byte 0 and decodes everything from the start.

The object ``{"a": 1, "b": [2, 3]}`` renders as:

```text
{
    "a": 1,
    "b": [
        2,
        3
    ]
}
```
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Final

from havseri.config.logging import get_logger
from havseri.config.model import RenderOptions
from havseri.model import (
    Array,
    Boolean,
    Close,
    Double,
    Int32,
    Int64,
    Null,
    Object,
    String,
    UInt32,
    UInt64,
)

if TYPE_CHECKING:
    from typing import TextIO

    from havseri.config.logging import HavseriLogger
    from havseri.model import Value
    from havseri.reader import Reader

logger: HavseriLogger = get_logger(__name__)

_ESCAPES: Final[dict[str, str]] = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def escape_string(data: bytes) -> str:
    r"""Return ``data`` as a double-quoted, escaped string literal.

    Quotes and backslashes are backslash-escaped, the usual control
    characters get their two-character escapes, and any other byte below
    ``0x20`` becomes ``\u00XX``. Invalid UTF-8 is kept visible as ``\xNN``.
    """
    text: str = data.decode("utf-8", errors="surrogateescape")
    out: list[str] = ['"']
    for char in text:
        escaped = _ESCAPES.get(char)
        if escaped is not None:
            out.append(escaped)
        elif "\udc80" <= char <= "\udcff":
            # undecodable byte smuggled through by surrogateescape
            out.append(f"\\x{ord(char) - 0xDC00:02x}")
        elif char < " ":
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)


def format_scalar(value: Value, options: RenderOptions | None = None) -> str:
    """Render a non-container value as text.

    `Close` has no text form; it renders as an empty string and is logged.
    """
    opts: RenderOptions = options or RenderOptions()
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    if isinstance(value, (Int32, UInt32, Int64, UInt64)):
        return str(value.value)
    if isinstance(value, Double):
        return f"{value.value:.{opts.float_precision}f}"
    if isinstance(value, String):
        return escape_string(value.value)
    if isinstance(value, Null):
        return "null"
    if isinstance(value, Close):
        logger.warning("Close marker has no text representation")
        return ""
    raise TypeError(f"not a scalar value: {value!r}")


class _Renderer:
    """Writes the text form of values to a stream, driving a reader."""

    def __init__(self, reader: Reader, out: TextIO, options: RenderOptions) -> None:
        self.reader = reader
        self.out = out
        self.options = options

    def value(self, value: Value, depth_level: int) -> None:
        if isinstance(value, Array):
            self.array(value, depth_level)
        elif isinstance(value, Object):
            self.object(value, depth_level)
        else:
            self.out.write(format_scalar(value, self.options))

    def array(self, array: Array, depth_level: int) -> None:
        child_indent: str = self.options.indent(depth_level + 1)
        self.out.write("[\n")
        for count, item in enumerate(self.reader.iter_array(array)):
            if count:
                self.out.write(",\n")
            self.out.write(child_indent)
            self.value(item, depth_level + 1)
        self.out.write("\n")
        self.out.write(self.options.indent(depth_level))
        self.out.write("]")

    def object(self, obj: Object, depth_level: int) -> None:
        child_indent: str = self.options.indent(depth_level + 1)
        self.out.write("{\n")
        for count, (key, item) in enumerate(self.reader.iter_object(obj)):
            if count:
                self.out.write(",\n")
            self.out.write(child_indent)
            self.value(key, depth_level + 1)
            self.out.write(": ")
            self.value(item, depth_level + 1)
        self.out.write("\n")
        self.out.write(self.options.indent(depth_level))
        self.out.write("}")


def write_value(
    reader: Reader,
    value: Value,
    out: TextIO,
    depth_level: int = 0,
    *,
    reset: bool = False,
    options: RenderOptions | None = None,
) -> None:
    """Render ``value`` to ``out``.

    Args:
        reader (Reader): The reader ``value`` was decoded from; containers are
            rendered by iterating it.
        value (Value): The value to render.
        out (TextIO): Destination text stream.
        depth_level (int): Indentation level of ``value`` itself.
        reset (bool): Rewind the reader to the start of the stream first.
        options (RenderOptions | None): Formatting options; defaults if None.
    """
    if reset:
        reader.rewind()
    _Renderer(reader, out, options or RenderOptions()).value(value, depth_level)


def render_value(
    reader: Reader,
    value: Value,
    depth_level: int = 0,
    *,
    reset: bool = False,
    options: RenderOptions | None = None,
) -> str:
    """Render ``value`` and return the text. See [`write_value`][havseri.render.write_value]."""
    buffer = io.StringIO()
    write_value(reader, value, buffer, depth_level, reset=reset, options=options)
    return buffer.getvalue()
