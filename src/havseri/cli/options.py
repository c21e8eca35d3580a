# topmark:header:start
#
#   project      : HavSeri
#   file         : options.py
#   file_relpath : src/havseri/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI options (verbosity, color) and their resolution logic."""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import Callable, TypeVar

import click

from havseri.cli.errors import HavseriUsageError
from havseri.config.logging import TRACE_LEVEL

F = TypeVar("F", bound=Callable[..., object])


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the log level from the number of ``-v`` and ``-q`` flags.

    Three or more ``-v`` select TRACE, two DEBUG, one INFO; any ``-q`` selects
    ERROR. The default is WARNING.

    Raises:
        HavseriUsageError: If both verbose and quiet flags are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise HavseriUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count >= 3:
        return TRACE_LEVEL
    if verbose_count == 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    if quiet_count >= 1:
        return logging.ERROR
    return logging.WARNING


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Honors ``--color``, then the ``FORCE_COLOR`` and ``NO_COLOR`` environment
    variables, and finally falls back to whether stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_verbose_options(f: F) -> F:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity (-v INFO, -vv DEBUG, -vvv TRACE).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only log errors.",
    )(f)
    return f


def common_color_options(f: F) -> F:
    """Add ``--color`` and ``--no-color`` options."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def config_option(f: F) -> F:
    """Add a ``--config`` option pointing at a TOML file."""
    return click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=str),
        default=None,
        help="Read render options from this TOML file instead of discovering one.",
    )(f)
