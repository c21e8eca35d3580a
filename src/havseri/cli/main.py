# topmark:header:start
#
#   project      : HavSeri
#   file         : main.py
#   file_relpath : src/havseri/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for the ``havseri`` command.

Group-level options (verbosity, color) are resolved once and stored in
``ctx.obj`` together with the console; subcommands only read them.
"""

from __future__ import annotations

import click

from havseri.cli.commands.dump import dump_command
from havseri.cli.commands.from_json import from_json_command
from havseri.cli.commands.records import records_command
from havseri.cli.commands.version import version_command
from havseri.cli.console import ClickConsole
from havseri.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from havseri.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (logging & color) on the Click context.

    ``HAVSERI_LOG_LEVEL`` takes precedence over ``-v``/``-q`` so that a
    developer can force TRACE output without editing command lines.
    """
    ctx.obj = ctx.obj or {}

    level = resolve_env_log_level()
    if level is None:
        level = resolve_verbosity(verbose, quiet)
    effective_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_mode)

    ctx.obj["log_level"] = level
    setup_logging(level=level, color=enable_color)

    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="HavSeri binary serialization tools.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the HavSeri CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
    )
    if ctx.invoked_subcommand is None:
        ctx.obj["console"].print(ctx.get_help())


cli.add_command(dump_command)

cli.add_command(records_command)

cli.add_command(from_json_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
