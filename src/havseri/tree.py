# topmark:header:start
#
#   project      : HavSeri
#   file         : tree.py
#   file_relpath : src/havseri/tree.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Conversion between plain Python structures and HavSeri streams.

`dumps_tree` walks ``None``/``bool``/``int``/``float``/``str``/``bytes``/
``list``/``tuple``/``dict`` values and emits them through a
[`Writer`][havseri.writer.Writer]; `loads_tree` rebuilds them with the
reader's iteration protocol. Integers use the narrowest of Int32, Int64 and
UInt64 that holds them.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

from havseri.model import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    SCALAR_TYPES,
    UINT64_MAX,
    Array,
    Null,
    Object,
    String,
)
from havseri.reader import DecodeFailure, Reader
from havseri.writer import Writer

if TYPE_CHECKING:
    from havseri.model import Value


def write_tree(writer: Writer, obj: Any) -> None:
    """Write ``obj`` and everything nested in it.

    Raises:
        TypeError: For values with no HavSeri representation.
        ValueError: For integers outside the 64-bit ranges.
    """
    if obj is None:
        writer.write_null()
    elif isinstance(obj, bool):
        writer.write_bool(obj)
    elif isinstance(obj, int):
        if INT32_MIN <= obj <= INT32_MAX:
            writer.write_int32(obj)
        elif INT64_MIN <= obj <= INT64_MAX:
            writer.write_int64(obj)
        elif 0 <= obj <= UINT64_MAX:
            writer.write_uint64(obj)
        else:
            raise ValueError(f"integer {obj} does not fit in 64 bits")
    elif isinstance(obj, float):
        writer.write_double(obj)
    elif isinstance(obj, (str, bytes, bytearray)):
        writer.write_string(bytes(obj) if isinstance(obj, bytearray) else obj)
    elif isinstance(obj, (list, tuple)):
        writer.write_array()
        for item in obj:
            write_tree(writer, item)
        writer.write_close()
    elif isinstance(obj, dict):
        writer.write_object()
        for key, item in obj.items():
            if isinstance(key, (list, tuple, dict)):
                # a container key would be indistinguishable from its entry value
                raise TypeError(f"object keys must be scalars, got {type(key).__name__}")
            write_tree(writer, key)
            write_tree(writer, item)
        writer.write_close()
    else:
        raise TypeError(f"cannot serialize {type(obj).__name__}")


def dumps_tree(obj: Any) -> bytes:
    """Encode ``obj`` and return the stream bytes."""
    buffer = io.BytesIO()
    write_tree(Writer(buffer), obj)
    return buffer.getvalue()


def read_tree(reader: Reader, value: Value) -> Any:
    """Materialize ``value`` (and, for containers, its contents) as Python objects.

    Strings come back as ``str``.
    """
    if isinstance(value, Array):
        return [read_tree(reader, item) for item in reader.iter_array(value)]
    if isinstance(value, Object):
        return {
            read_tree(reader, key): read_tree(reader, item)
            for key, item in reader.iter_object(value)
        }
    if isinstance(value, String):
        return value.text
    if isinstance(value, SCALAR_TYPES):
        return value.value
    if isinstance(value, Null):
        return None
    raise ValueError(f"unexpected {type(value).__name__} record")


def loads_tree(data: bytes) -> Any:
    """Decode the first root value of ``data``.

    Raises:
        ValueError: If ``data`` does not start with a decodable value.
    """
    reader = Reader(data)
    root = reader.read_value()
    if isinstance(root, DecodeFailure):
        raise ValueError(f"no value to decode: {root}")
    return read_tree(reader, root)
