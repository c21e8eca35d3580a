# topmark:header:start
#
#   project      : HavSeri
#   file         : writer.py
#   file_relpath : src/havseri/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Append-only encoder for HavSeri streams.

A [`Writer`][havseri.writer.Writer] appends one record per call, in the order
the caller chooses. It does not check nesting: an unmatched open or a
spurious close is written as-is, and keeping containers balanced is the
caller's job.

Example:
    ```python
    with Writer.open("out.hsl") as writer:
        writer.write_object()
        writer.write_string("a")
        writer.write_int32(1)
        writer.write_close()
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from havseri.config.logging import get_logger
from havseri.errors import SinkUnavailableError
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
from havseri.wire import encode_value

if TYPE_CHECKING:
    from os import PathLike
    from types import TracebackType

    from havseri.config.logging import HavseriLogger
    from havseri.model import Value

logger: HavseriLogger = get_logger(__name__)


class Writer:
    """Serializes values to a binary sink.

    Args:
        sink (BinaryIO): Any object with a ``write(bytes)`` method. The writer
            does not close sinks it was given.

    Attributes:
        bytes_written (int): Number of bytes appended so far.
    """

    bytes_written: int

    def __init__(self, sink: BinaryIO) -> None:
        self._sink: BinaryIO | None = sink
        self._owns_sink: bool = False
        self.bytes_written = 0

    @classmethod
    def open(cls, path: str | PathLike[str]) -> Writer:
        """Create (or truncate) ``path`` and return a writer that owns the file.

        Args:
            path (str | PathLike[str]): Output file path.

        Returns:
            Writer: A writer bound to the new file.

        Raises:
            SinkUnavailableError: If the file cannot be created.
        """
        target = Path(path)
        try:
            sink: BinaryIO = target.open("wb")
        except OSError as exc:
            logger.error("Unable to write file: %s (%s)", target, exc)
            raise SinkUnavailableError(target, exc) from exc
        logger.debug("Opened %s for writing", target)
        writer = cls(sink)
        writer._owns_sink = True
        return writer

    @property
    def closed(self) -> bool:
        """Whether the writer has released its sink."""
        return self._sink is None

    def write_value(self, value: Value) -> None:
        """Append one record for ``value``."""
        if self._sink is None:
            raise ValueError("write to a closed Writer")
        record: bytes = encode_value(value)
        self._sink.write(record)
        self.bytes_written += len(record)
        logger.trace("wrote %s (%d bytes)", value.value_type.name, len(record))

    def write_null(self) -> None:
        self.write_value(Null())

    def write_bool(self, value: bool) -> None:
        self.write_value(Boolean(value))

    def write_int32(self, value: int) -> None:
        self.write_value(Int32(value))

    def write_uint32(self, value: int) -> None:
        self.write_value(UInt32(value))

    def write_int64(self, value: int) -> None:
        self.write_value(Int64(value))

    def write_uint64(self, value: int) -> None:
        self.write_value(UInt64(value))

    def write_double(self, value: float) -> None:
        self.write_value(Double(value))

    def write_string(self, value: str | bytes) -> None:
        """Append a string; ``str`` values are encoded as UTF-8."""
        data: bytes = value.encode("utf-8") if isinstance(value, str) else bytes(value)
        self.write_value(String(data))

    def write_array(self) -> None:
        """Open an array. Must eventually be followed by a matching close."""
        self.write_value(Array())

    def write_object(self) -> None:
        """Open an object. Entries are written as alternating key and value records."""
        self.write_value(Object())

    def write_close(self) -> None:
        """Mark the end of the current object or array."""
        self.write_value(Close())

    def write_close_array(self) -> None:
        self.write_close()

    def write_close_object(self) -> None:
        self.write_close()

    def flush(self) -> None:
        if self._sink is not None and hasattr(self._sink, "flush"):
            self._sink.flush()

    def close(self) -> None:
        """Release the sink. Files opened via `Writer.open` are closed."""
        if self._sink is None:
            return
        if self._owns_sink:
            self._sink.close()
            logger.debug("Closed output after %d bytes", self.bytes_written)
        else:
            self.flush()
        self._sink = None

    def __enter__(self) -> Writer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
