# topmark:header:start
#
#   project      : HavSeri
#   file         : wire.py
#   file_relpath : src/havseri/wire.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Byte layout of HavSeri records.

Every record is a one-byte tag followed by a type-specific payload. All
multi-byte numbers are little-endian, so a stream written on one platform
decodes identically on any other.

| Tag     | Payload                          |
|---------|----------------------------------|
| Boolean | 1 byte (non-zero means true)     |
| Int32   | 4 bytes, signed                  |
| UInt32  | 4 bytes, unsigned                |
| Int64   | 8 bytes, signed                  |
| UInt64  | 8 bytes, unsigned                |
| Double  | 8 bytes, IEEE-754                |
| String  | 4-byte unsigned length + bytes   |
| Null, Close, Array, Object | none    |
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING, Final

from havseri.model import SCALAR_TYPES, String, ValueType

if TYPE_CHECKING:
    from havseri.model import Value

TAG: Final[struct.Struct] = struct.Struct("<B")
LENGTH: Final[struct.Struct] = struct.Struct("<I")

# Fixed-width payload layouts, keyed by tag.
SCALAR_FORMATS: Final[dict[ValueType, struct.Struct]] = {
    ValueType.BOOLEAN: struct.Struct("<?"),
    ValueType.INT32: struct.Struct("<i"),
    ValueType.UINT32: struct.Struct("<I"),
    ValueType.INT64: struct.Struct("<q"),
    ValueType.UINT64: struct.Struct("<Q"),
    ValueType.DOUBLE: struct.Struct("<d"),
}


def payload_size(value_type: ValueType) -> int | None:
    """Return the fixed payload width of ``value_type``.

    Args:
        value_type (ValueType): The record tag.

    Returns:
        int | None: The width in bytes for fixed-width scalars; None for `String`
        (length-prefixed) and for the payload-less tags.
    """
    layout = SCALAR_FORMATS.get(value_type)
    return layout.size if layout is not None else None


def encode_value(value: Value) -> bytes:
    """Encode one value as a complete tagged record.

    Args:
        value (Value): The value to encode. Its ``depth_level`` is not written;
            depth is a property of the position in the stream.

    Returns:
        bytes: Tag byte followed by the payload.
    """
    tag: bytes = TAG.pack(int(value.value_type))
    if isinstance(value, String):
        return tag + LENGTH.pack(len(value.value)) + value.value
    if isinstance(value, SCALAR_TYPES):
        return tag + SCALAR_FORMATS[value.value_type].pack(value.value)
    return tag
