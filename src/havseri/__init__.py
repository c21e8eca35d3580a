# topmark:header:start
#
#   project      : HavSeri
#   file         : __init__.py
#   file_relpath : src/havseri/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""HavSeri package.

HavSeri is a self-describing, schema-less binary serialization format. A
[`Writer`][havseri.writer.Writer] appends tagged records; a
[`Reader`][havseri.reader.Reader] decodes them one at a time and rebuilds the
nesting of arrays and objects from a single depth counter. The
[`render_value`][havseri.render.render_value] pretty-printer turns decoded
values into indented text.
"""

from __future__ import annotations

from havseri.config.model import RenderOptions
from havseri.errors import (
    ConfigError,
    HavseriError,
    SinkUnavailableError,
    SourceUnavailableError,
)
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
    Value,
    ValueType,
    is_container,
    try_read_bool,
    try_read_double,
    try_read_int32,
    try_read_int64,
    try_read_string,
    try_read_uint32,
    try_read_uint64,
)
from havseri.reader import DecodeFailure, DecodeFailureKind, Reader, is_failure
from havseri.render import escape_string, render_value, write_value
from havseri.tree import dumps_tree, loads_tree
from havseri.wire import encode_value
from havseri.writer import Writer

__all__ = [
    "Array",
    "Boolean",
    "Close",
    "ConfigError",
    "DecodeFailure",
    "DecodeFailureKind",
    "Double",
    "HavseriError",
    "Int32",
    "Int64",
    "Null",
    "Object",
    "Reader",
    "RenderOptions",
    "SinkUnavailableError",
    "SourceUnavailableError",
    "String",
    "UInt32",
    "UInt64",
    "Value",
    "ValueType",
    "Writer",
    "dumps_tree",
    "encode_value",
    "escape_string",
    "is_container",
    "is_failure",
    "loads_tree",
    "render_value",
    "try_read_bool",
    "try_read_double",
    "try_read_int32",
    "try_read_int64",
    "try_read_string",
    "try_read_uint32",
    "try_read_uint64",
    "write_value",
]
