# topmark:header:start
#
#   project      : HavSeri
#   file         : cmd_common.py
#   file_relpath : src/havseri/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

These helpers translate library exceptions into CLI errors with the right
exit codes, so command bodies do not repeat the same ``try``/``except``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from havseri.cli.console import ClickConsole
from havseri.cli.errors import (
    HavseriConfigError,
    HavseriFileNotFoundError,
    HavseriIOError,
)
from havseri.config.loaders import discover_render_options, load_render_options
from havseri.config.logging import get_logger
from havseri.errors import ConfigError, SinkUnavailableError, SourceUnavailableError
from havseri.reader import Reader
from havseri.writer import Writer

if TYPE_CHECKING:
    from havseri.cli.console import ConsoleLike
    from havseri.config.logging import HavseriLogger
    from havseri.config.model import RenderOptions

logger: HavseriLogger = get_logger(__name__)


def get_console(ctx: click.Context | None = None) -> ConsoleLike:
    """Return the console stored on the Click context, or a plain one."""
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "console" in ctx.obj:
        console: ConsoleLike = ctx.obj["console"]
        return console
    return ClickConsole(enable_color=False)


def open_reader(path: str) -> Reader:
    """Load ``path`` into a reader, mapping failures to CLI errors."""
    try:
        return Reader.from_path(path)
    except SourceUnavailableError as exc:
        if isinstance(exc.reason, (FileNotFoundError, IsADirectoryError)):
            raise HavseriFileNotFoundError(str(exc)) from exc
        raise HavseriIOError(str(exc)) from exc


def open_writer(path: str) -> Writer:
    """Create a writer for ``path``, mapping failures to CLI errors."""
    try:
        return Writer.open(path)
    except SinkUnavailableError as exc:
        raise HavseriIOError(str(exc)) from exc


def resolve_render_options(config_path: str | None) -> RenderOptions:
    """Load render options from ``config_path`` or discover them in the CWD."""
    try:
        if config_path is not None:
            path = Path(config_path)
            if not path.is_file():
                raise HavseriConfigError(f"Config file not found: {path}")
            return load_render_options(path)
        return discover_render_options()
    except ConfigError as exc:
        raise HavseriConfigError(str(exc)) from exc
