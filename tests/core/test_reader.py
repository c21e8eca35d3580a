# topmark:header:start
#
#   project      : HavSeri
#   file         : test_reader.py
#   file_relpath : tests/core/test_reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the bounds-checked decode engine."""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

import pytest

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
)
from havseri.reader import DecodeFailure, DecodeFailureKind, Reader, is_failure
from tests.streams import encode, write_nested_arrays

if TYPE_CHECKING:
    from pathlib import Path


def test_consume_advances_only_on_success() -> None:
    reader = Reader(b"abc")
    assert reader.consume(0) is None
    assert reader.position == 0
    assert reader.consume(4) is None
    assert reader.position == 0
    assert reader.consume(2) == b"ab"
    assert reader.position == 2
    assert reader.consume(2) is None
    assert reader.position == 2
    assert reader.consume(1) == b"c"
    assert reader.at_end


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"\x02\x01", Boolean(True)),
        (b"\x02\x00", Boolean(False)),
        (b"\x02\x07", Boolean(True)),
        (b"\x03" + struct.pack("<i", -42), Int32(-42)),
        (b"\x04" + struct.pack("<I", 2**32 - 1), UInt32(2**32 - 1)),
        (b"\x05" + struct.pack("<q", -(2**63)), Int64(-(2**63))),
        (b"\x06" + struct.pack("<Q", 2**64 - 1), UInt64(2**64 - 1)),
        (b"\x07" + struct.pack("<d", -2.5), Double(-2.5)),
        (b"\x08\x03\x00\x00\x00abc", String(b"abc")),
        (b"\x08\x00\x00\x00\x00", String(b"")),
        (b"\x00", Null()),
    ],
)
def test_read_scalar_records(data: bytes, expected: object) -> None:
    reader = Reader(data)
    assert reader.read_value() == expected
    assert reader.at_end
    assert reader.depth_level == 0
    assert reader.last_failure is None


def test_container_open_stamps_post_increment_depth() -> None:
    reader = Reader(encode(write_nested_arrays))
    outer = reader.read_value()
    inner = reader.read_value()
    assert outer == Array(depth_level=1)
    assert inner == Array(depth_level=2)
    assert reader.depth_level == 2


def test_object_open_increments_depth() -> None:
    reader = Reader(b"\x0a\x0a")
    assert reader.read_value() == Object(depth_level=1)
    assert reader.read_value() == Object(depth_level=2)


def test_close_decrements_depth() -> None:
    reader = Reader(b"\x09\x01\x01")
    reader.read_value()
    assert reader.read_value() == Close()
    assert reader.depth_level == 0
    # a spurious close is decoded too and drives the counter negative
    assert reader.read_value() == Close()
    assert reader.depth_level == -1


def test_end_of_stream_is_a_failure_result() -> None:
    reader = Reader(b"")
    result = reader.read_value()
    assert isinstance(result, DecodeFailure)
    assert result.kind is DecodeFailureKind.END_OF_STREAM
    assert result.offset == 0
    assert is_failure(result)
    assert reader.last_failure == result


def test_unknown_tag_leaves_depth_untouched() -> None:
    reader = Reader(b"\x09\x2a")
    reader.read_value()
    result = reader.read_value()
    assert result == DecodeFailure(DecodeFailureKind.UNKNOWN_TAG, 1, 0x2A)
    assert reader.depth_level == 1
    assert "0x2a" in str(result)


def test_failed_record_does_not_move_the_cursor() -> None:
    # Int32 tag followed by a two-byte payload that would decode as Close, Null
    reader = Reader(b"\x03\x01\x00")
    first = reader.read_value()
    assert isinstance(first, DecodeFailure)
    assert first.kind is DecodeFailureKind.TRUNCATED
    assert reader.position == 0
    assert reader.read_value() == first
    assert reader.depth_level == 0


@pytest.mark.parametrize(
    "data",
    [
        b"\x02",
        b"\x03\x01\x00",
        b"\x05\x01\x00\x00\x00",
        b"\x07\x00\x00",
        b"\x08\x05\x00",
        b"\x08\x05\x00\x00\x00ab",
    ],
)
def test_short_payload_is_truncated(data: bytes) -> None:
    reader = Reader(data)
    result = reader.read_value()
    assert isinstance(result, DecodeFailure)
    assert result.kind is DecodeFailureKind.TRUNCATED
    assert result.tag == data[0]


def test_is_failure_distinguishes_null_from_errors() -> None:
    """A written Null is a value; running out of bytes is not."""
    reader = Reader(b"\x00")
    assert not is_failure(reader.read_value())
    assert is_failure(reader.read_value())


def test_rewind_resets_cursor_and_depth() -> None:
    reader = Reader(b"\x09\x09")
    reader.read_value()
    reader.read_value()
    reader.read_value()
    assert reader.last_failure is not None
    reader.rewind()
    assert reader.position == 0
    assert reader.depth_level == 0
    assert reader.last_failure is None
    assert reader.read_value() == Array(depth_level=1)


def test_records_lists_flat_sequence() -> None:
    reader = Reader(encode(write_nested_arrays))
    records = list(reader.records())
    assert [offset for offset, _ in records] == [0, 1, 2, 7, 8]
    assert [type(value) for _, value in records] == [Array, Array, Int32, Close, Close]


def test_records_yields_trailing_corruption() -> None:
    reader = Reader(b"\x03\x01\x00\x00\x00\x03\x01")
    records = list(reader.records())
    assert records[0] == (0, Int32(1))
    offset, failure = records[1]
    assert offset == 5
    assert isinstance(failure, DecodeFailure)
    assert failure.kind is DecodeFailureKind.TRUNCATED


def test_buffer_is_copied() -> None:
    source = bytearray(b"\x03\x01\x00\x00\x00")
    reader = Reader(source)
    source[1] = 9
    assert reader.read_value() == Int32(1)


def test_from_path_loads_file(tmp_path: Path) -> None:
    path = tmp_path / "data.hsl"
    path.write_bytes(b"\x02\x01")
    reader = Reader.from_path(path)
    assert reader.data == b"\x02\x01"
    assert reader.read_value() == Boolean(True)


def test_from_path_missing_file_fails_at_construction(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailableError) as excinfo:
        Reader.from_path(tmp_path / "missing.hsl")
    assert isinstance(excinfo.value.reason, FileNotFoundError)
