# topmark:header:start
#
#   project      : HavSeri
#   file         : model.py
#   file_relpath : src/havseri/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value model for HavSeri streams.

A stream is a flat sequence of tagged records. Each record decodes into one
variant of the [`Value`][havseri.model.Value] sum type. Scalars carry a
payload; `Array` and `Object` carry the depth level of their children, which
the reader uses to find the container's matching `Close` again.

Example:
    ```python
    from havseri.model import Int32, String, try_read_int32

    assert try_read_int32(Int32(7)) == 7
    assert try_read_int32(String("7")) is None
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Final, TypeVar, Union

INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1
UINT32_MAX: Final[int] = 2**32 - 1
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1
UINT64_MAX: Final[int] = 2**64 - 1


class ValueType(IntEnum):
    """Closed set of record tags. The member value is the tag byte on the wire."""

    NULL = 0
    CLOSE = 1
    BOOLEAN = 2
    INT32 = 3
    UINT32 = 4
    INT64 = 5
    UINT64 = 6
    DOUBLE = 7
    STRING = 8
    ARRAY = 9
    OBJECT = 10

    @property
    def is_container(self) -> bool:
        """Whether records of this type open a nested structure."""
        return self in (ValueType.ARRAY, ValueType.OBJECT)


def _check_range(kind: str, value: int, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind} payload must be an int, got {type(value).__name__}")
    if not low <= value <= high:
        raise ValueError(f"{kind} payload {value} out of range [{low}, {high}]")


@dataclass(frozen=True)
class Null:
    """A legitimately absent value (tag ``0``)."""

    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.NULL


@dataclass(frozen=True)
class Close:
    """Marks the end of the innermost open array or object."""

    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.CLOSE


@dataclass(frozen=True)
class Boolean:
    """Boolean scalar."""

    value: bool
    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.BOOLEAN

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Boolean payload must be a bool, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Int32:
    """Signed 32-bit integer."""

    value: int
    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.INT32

    def __post_init__(self) -> None:
        _check_range("Int32", self.value, INT32_MIN, INT32_MAX)


@dataclass(frozen=True)
class UInt32:
    """Unsigned 32-bit integer."""

    value: int
    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.UINT32

    def __post_init__(self) -> None:
        _check_range("UInt32", self.value, 0, UINT32_MAX)


@dataclass(frozen=True)
class Int64:
    """Signed 64-bit integer."""

    value: int
    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.INT64

    def __post_init__(self) -> None:
        _check_range("Int64", self.value, INT64_MIN, INT64_MAX)


@dataclass(frozen=True)
class UInt64:
    """Unsigned 64-bit integer."""

    value: int
    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.UINT64

    def __post_init__(self) -> None:
        _check_range("UInt64", self.value, 0, UINT64_MAX)


@dataclass(frozen=True)
class Double:
    """IEEE-754 double precision float."""

    value: float
    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.DOUBLE

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"Double payload must be a float, got {type(self.value).__name__}")
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class String:
    """Length-prefixed UTF-8 byte sequence.

    A ``str`` payload is encoded to UTF-8 on construction; ``value`` always
    holds bytes. The bytes are not validated, so a decoded string may contain
    invalid UTF-8.
    """

    value: bytes
    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.STRING

    def __post_init__(self) -> None:
        raw: object = self.value
        if isinstance(raw, str):
            object.__setattr__(self, "value", raw.encode("utf-8"))
        elif isinstance(raw, (bytearray, memoryview)):
            object.__setattr__(self, "value", bytes(raw))
        elif not isinstance(raw, bytes):
            raise TypeError(f"String payload must be str or bytes, got {type(raw).__name__}")
        if len(self.value) > UINT32_MAX:
            raise ValueError("String payload longer than 4 GiB cannot be length-prefixed")

    @property
    def text(self) -> str:
        """The payload decoded as UTF-8 (invalid sequences replaced)."""
        return self.value.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Array:
    """Opens an array. ``depth_level`` is the nesting level of its children."""

    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.ARRAY


@dataclass(frozen=True)
class Object:
    """Opens an object of key/value pairs. ``depth_level`` is the level of its entries."""

    depth_level: int = 0
    value_type: ClassVar[ValueType] = ValueType.OBJECT


Value = Union[Null, Close, Boolean, Int32, UInt32, Int64, UInt64, Double, String, Array, Object]
"""One decoded record."""

Container = Union[Array, Object]

SCALAR_TYPES: Final[tuple[type, ...]] = (Boolean, Int32, UInt32, Int64, UInt64, Double, String)

_T = TypeVar("_T")


def is_container(value: Value) -> bool:
    """Return True if ``value`` opens an array or an object."""
    return isinstance(value, (Array, Object))


def _payload(value: Value, expected: type, result_type: type[_T]) -> _T | None:
    if type(value) is expected:
        payload = getattr(value, "value")
        if isinstance(payload, result_type):
            return payload
    return None


def try_read_bool(value: Value) -> bool | None:
    """Return the payload of a `Boolean`, or None for any other variant."""
    return _payload(value, Boolean, bool)


def try_read_int32(value: Value) -> int | None:
    """Return the payload of an `Int32`, or None for any other variant."""
    return _payload(value, Int32, int)


def try_read_uint32(value: Value) -> int | None:
    """Return the payload of a `UInt32`, or None for any other variant."""
    return _payload(value, UInt32, int)


def try_read_int64(value: Value) -> int | None:
    """Return the payload of an `Int64`, or None for any other variant."""
    return _payload(value, Int64, int)


def try_read_uint64(value: Value) -> int | None:
    """Return the payload of a `UInt64`, or None for any other variant."""
    return _payload(value, UInt64, int)


def try_read_double(value: Value) -> float | None:
    """Return the payload of a `Double`, or None for any other variant."""
    return _payload(value, Double, float)


def try_read_string(value: Value) -> str | None:
    """Return the payload of a `String` decoded as UTF-8, or None for any other variant."""
    if isinstance(value, String):
        return value.text
    return None
