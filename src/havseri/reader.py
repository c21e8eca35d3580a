# topmark:header:start
#
#   project      : HavSeri
#   file         : reader.py
#   file_relpath : src/havseri/reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decode engine and iteration protocol for HavSeri streams.

The [`Reader`][havseri.reader.Reader] owns the complete byte buffer, a cursor
that only moves forward, and a depth counter. There is no tree and no
back-pointer between a container's open and its close: decoding `Array` or
`Object` increments the counter, decoding `Close` decrements it, and an open
record is stamped with the depth of its children.

Iteration relies on that stamp. Before every step the reader decodes and
discards records until the counter equals the container's depth again
("depth matching"), so a child container the caller never looked into is
skipped without any bookkeeping on the caller's side:

```python
reader = Reader(data)
root = reader.read_value()
for child in reader.iter_array(root):
    ...  # nested children may be ignored; the next step resynchronizes
```

Decoding never raises. A short read, an unknown tag, or the end of the buffer
produce a [`DecodeFailure`][havseri.reader.DecodeFailure] result, and
iteration treats a failure exactly like a clean `Close`. A truncated stream
can therefore look like a well-formed end of container;
[`Reader.last_failure`][havseri.reader.Reader.last_failure] tells the two
apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Union

from havseri.config.logging import get_logger
from havseri.errors import SourceUnavailableError
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
    ValueType,
)
from havseri.wire import LENGTH, SCALAR_FORMATS

if TYPE_CHECKING:
    from collections.abc import Iterator
    from os import PathLike

    from havseri.config.logging import HavseriLogger
    from havseri.model import Container, Value

logger: HavseriLogger = get_logger(__name__)

_SCALAR_CLASSES: dict[ValueType, type] = {
    ValueType.BOOLEAN: Boolean,
    ValueType.INT32: Int32,
    ValueType.UINT32: UInt32,
    ValueType.INT64: Int64,
    ValueType.UINT64: UInt64,
    ValueType.DOUBLE: Double,
}


class DecodeFailureKind(str, Enum):
    """Why a record could not be decoded.

    Members:
        END_OF_STREAM: No bytes left for a tag.
        TRUNCATED: The tag was read but its payload runs past the end of the buffer.
        UNKNOWN_TAG: The tag byte is not a known `ValueType`.
    """

    END_OF_STREAM = "end-of-stream"
    TRUNCATED = "truncated"
    UNKNOWN_TAG = "unknown-tag"


@dataclass(frozen=True)
class DecodeFailure:
    """Result of a decode attempt that did not produce a value.

    Attributes:
        kind (DecodeFailureKind): The failure category.
        offset (int): Buffer offset of the record that failed.
        tag (int | None): The tag byte, when one could be read.
    """

    kind: DecodeFailureKind
    offset: int
    tag: int | None = None

    def __str__(self) -> str:
        if self.tag is None:
            return f"{self.kind.value} at offset {self.offset}"
        return f"{self.kind.value} at offset {self.offset} (tag 0x{self.tag:02x})"


ReadResult = Union["Value", DecodeFailure]


def is_failure(result: ReadResult) -> bool:
    """Return True if ``result`` is a [`DecodeFailure`][havseri.reader.DecodeFailure]."""
    return isinstance(result, DecodeFailure)


class Reader:
    """Forward-only decoder over an in-memory byte buffer.

    Args:
        data (bytes): The complete encoded stream. It is copied into an immutable
            ``bytes`` object and never modified.

    Notes:
        A reader is not safe for concurrent use: nearly every method moves the
        cursor or the depth counter.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data: bytes = bytes(data)
        self._position: int = 0
        self._depth_level: int = 0
        self._last_failure: DecodeFailure | None = None

    @classmethod
    def from_path(cls, path: str | PathLike[str]) -> Reader:
        """Load the whole file at ``path`` and return a reader over it.

        Raises:
            SourceUnavailableError: If the file cannot be opened or read.
        """
        source = Path(path)
        try:
            data: bytes = source.read_bytes()
        except OSError as exc:
            logger.error("Unable to read file: %s (%s)", source, exc)
            raise SourceUnavailableError(source, exc) from exc
        logger.debug("Loaded %d bytes from %s", len(data), source)
        return cls(data)

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def position(self) -> int:
        """Cursor offset of the next byte to decode."""
        return self._position

    @property
    def depth_level(self) -> int:
        """Number of containers opened and not yet closed (may go negative on spurious closes)."""
        return self._depth_level

    @property
    def last_failure(self) -> DecodeFailure | None:
        """The most recent decode failure, or None if every decode so far succeeded."""
        return self._last_failure

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._data)

    def rewind(self) -> None:
        """Move the cursor back to byte 0 and reset the depth counter."""
        self._position = 0
        self._depth_level = 0
        self._last_failure = None

    def consume(self, size: int) -> bytes | None:
        """Take ``size`` bytes at the cursor.

        Returns None without moving the cursor if ``size`` is zero or the
        buffer holds fewer than ``size`` bytes past the cursor.
        """
        if size <= 0:
            return None
        end: int = self._position + size
        if end > len(self._data):
            return None
        chunk: bytes = self._data[self._position : end]
        self._position = end
        return chunk

    def _fail(self, kind: DecodeFailureKind, offset: int, tag: int | None = None) -> DecodeFailure:
        # never leave the cursor inside a record: the next attempt fails the same way
        self._position = offset
        failure = DecodeFailure(kind, offset, tag)
        self._last_failure = failure
        if kind is DecodeFailureKind.END_OF_STREAM:
            logger.trace("decode stopped: %s", failure)
        else:
            logger.debug("decode failed: %s", failure)
        return failure

    def read_value(self) -> ReadResult:
        """Decode exactly one record at the cursor.

        Returns:
            ReadResult: The decoded value, or a
            [`DecodeFailure`][havseri.reader.DecodeFailure] when the buffer is
            exhausted, the payload is truncated, or the tag is unknown.
        """
        offset: int = self._position
        raw_tag = self.consume(1)
        if raw_tag is None:
            return self._fail(DecodeFailureKind.END_OF_STREAM, offset)

        tag: int = raw_tag[0]
        try:
            value_type = ValueType(tag)
        except ValueError:
            return self._fail(DecodeFailureKind.UNKNOWN_TAG, offset, tag)

        result: Value
        if value_type is ValueType.CLOSE:
            self._depth_level -= 1
            result = Close()
        elif value_type is ValueType.NULL:
            result = Null()
        elif value_type is ValueType.ARRAY:
            self._depth_level += 1
            result = Array(depth_level=self._depth_level)
        elif value_type is ValueType.OBJECT:
            self._depth_level += 1
            result = Object(depth_level=self._depth_level)
        elif value_type is ValueType.STRING:
            raw_length = self.consume(LENGTH.size)
            if raw_length is None:
                return self._fail(DecodeFailureKind.TRUNCATED, offset, tag)
            (length,) = LENGTH.unpack(raw_length)
            if length == 0:
                result = String(b"")
            else:
                payload = self.consume(length)
                if payload is None:
                    return self._fail(DecodeFailureKind.TRUNCATED, offset, tag)
                result = String(payload)
        else:
            layout = SCALAR_FORMATS[value_type]
            payload = self.consume(layout.size)
            if payload is None:
                return self._fail(DecodeFailureKind.TRUNCATED, offset, tag)
            (scalar,) = layout.unpack(payload)
            result = _SCALAR_CLASSES[value_type](scalar)

        logger.trace("@%d depth=%d %r", offset, self._depth_level, result)
        return result

    def records(self) -> Iterator[tuple[int, ReadResult]]:
        """Yield ``(offset, value)`` for each record from the cursor onward.

        Stops after the first failure; the failure itself is yielded unless
        it is a plain end of stream.
        """
        while True:
            offset: int = self._position
            result = self.read_value()
            if isinstance(result, DecodeFailure):
                if result.kind is not DecodeFailureKind.END_OF_STREAM:
                    yield offset, result
                return
            yield offset, result

    def match_depth(self, depth_level: int) -> None:
        """Decode and discard records until the depth counter equals ``depth_level``.

        Stops early on a decode failure. A no-op when the counter already
        matches.
        """
        skipped: int = 0
        while self._depth_level != depth_level:
            if isinstance(self.read_value(), DecodeFailure):
                break
            skipped += 1
        if skipped:
            logger.trace("skipped %d record(s) to reach depth %d", skipped, depth_level)

    def next_array_item(self, array: Container) -> Value | None:
        """Advance to the next child of ``array``.

        Returns:
            Value | None: The child, or None once the array's `Close` has been
            consumed or decoding failed.
        """
        _require_container(array)
        self.match_depth(array.depth_level)
        item = self.read_value()
        if isinstance(item, (Close, DecodeFailure)):
            return None
        return item

    def next_object_item(self, obj: Container) -> tuple[Value, Value] | None:
        """Advance to the next ``(key, value)`` entry of ``obj``.

        Keys may be of any type. Returns None once the object's `Close` has
        been consumed or decoding failed.
        """
        _require_container(obj)
        self.match_depth(obj.depth_level)
        key = self.read_value()
        if isinstance(key, (Close, DecodeFailure)):
            return None
        item = self.read_value()
        if isinstance(item, DecodeFailure):
            return None
        return key, item

    def iter_array(self, array: Container) -> Iterator[Value]:
        """Yield the children of ``array`` until its close (or a decode failure)."""
        while True:
            item = self.next_array_item(array)
            if item is None:
                return
            yield item

    def iter_object(self, obj: Container) -> Iterator[tuple[Value, Value]]:
        """Yield the ``(key, value)`` entries of ``obj`` until its close."""
        while True:
            entry = self.next_object_item(obj)
            if entry is None:
                return
            yield entry


def _require_container(value: Value) -> None:
    if not isinstance(value, (Array, Object)):
        raise TypeError(f"expected an Array or Object value, got {type(value).__name__}")
