# topmark:header:start
#
#   project      : HavSeri
#   file         : errors.py
#   file_relpath : src/havseri/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the HavSeri library.

Only construction-time failures are exceptions: a sink that cannot be created
or a source that cannot be read. Problems inside a stream (truncation, unknown
tags) are reported as [`DecodeFailure`][havseri.reader.DecodeFailure] results
and never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class HavseriError(Exception):
    """Base class for all HavSeri library errors."""


class SinkUnavailableError(HavseriError):
    """The output file for a writer could not be opened or created."""

    def __init__(self, path: Path, reason: OSError) -> None:
        super().__init__(f"Unable to write file: {path} ({reason.strerror or reason})")
        self.path: Path = path
        self.reason: OSError = reason


class SourceUnavailableError(HavseriError):
    """The input file for a reader could not be opened or read."""

    def __init__(self, path: Path, reason: OSError) -> None:
        super().__init__(f"Unable to read file: {path} ({reason.strerror or reason})")
        self.path: Path = path
        self.reason: OSError = reason


class ConfigError(HavseriError):
    """A configuration file is malformed or holds values of the wrong type."""
