# topmark:header:start
#
#   project      : HavSeri
#   file         : test_tree.py
#   file_relpath : tests/core/test_tree.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the plain-Python convenience layer."""

from __future__ import annotations

import pytest

from havseri.model import Int32, Int64, UInt64
from havseri.reader import Reader
from havseri.tree import dumps_tree, loads_tree
from tests.streams import encode, write_scenario


def test_dumps_matches_handwritten_stream() -> None:
    assert dumps_tree({"a": 1, "b": [2, 3]}) == encode(write_scenario)


def test_loads_scenario() -> None:
    assert loads_tree(encode(write_scenario)) == {"a": 1, "b": [2, 3]}


@pytest.mark.parametrize(
    ("number", "expected"),
    [
        (2**31 - 1, Int32(2**31 - 1)),
        (2**31, Int64(2**31)),
        (-(2**63), Int64(-(2**63))),
        (2**63, UInt64(2**63)),
    ],
)
def test_integers_use_narrowest_type(number: int, expected: object) -> None:
    assert Reader(dumps_tree(number)).read_value() == expected


def test_integer_too_large() -> None:
    with pytest.raises(ValueError):
        dumps_tree(2**64)


def test_container_keys_are_rejected() -> None:
    with pytest.raises(TypeError):
        dumps_tree({(1, 2): "x"})


def test_unsupported_type() -> None:
    with pytest.raises(TypeError):
        dumps_tree({1, 2})


def test_tuples_and_bytes() -> None:
    assert loads_tree(dumps_tree((b"ab", None, True, 1.25))) == ["ab", None, True, 1.25]


def test_loads_empty_stream() -> None:
    with pytest.raises(ValueError):
        loads_tree(b"")
