# topmark:header:start
#
#   project      : HavSeri
#   file         : dump.py
#   file_relpath : src/havseri/cli/commands/dump.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""HavSeri `dump` command.

Pretty-prints every root value of a stream. A stream normally holds one root
value; additional roots are printed one after another.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from havseri.cli.cmd_common import get_console, open_reader, resolve_render_options
from havseri.cli.errors import HavseriDataError
from havseri.cli.options import config_option
from havseri.config.logging import get_logger
from havseri.model import Close, is_container
from havseri.reader import DecodeFailure, DecodeFailureKind
from havseri.render import render_value

if TYPE_CHECKING:
    from havseri.config.logging import HavseriLogger

logger: HavseriLogger = get_logger(__name__)


@click.command(
    name="dump",
    help="Pretty-print the contents of a HavSeri stream.",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=str))
@click.option(
    "--twice",
    is_flag=True,
    default=False,
    help="Render the first root value a second time (containers are re-read from the start).",
)
@config_option
def dump_command(*, path: str, twice: bool, config_path: str | None) -> None:
    """Pretty-print every root value in PATH.

    Args:
        path (str): Stream file to decode.
        twice (bool): Re-render the first root after rewinding (checks replay).
        config_path (str | None): Optional TOML file with render options.
    """
    console = get_console()
    options = resolve_render_options(config_path)
    reader = open_reader(path)

    roots: int = 0
    while True:
        value = reader.read_value()
        if isinstance(value, DecodeFailure):
            break
        if isinstance(value, Close):
            console.warn(f"Ignoring unmatched close marker before offset {reader.position}")
            continue
        console.print(render_value(reader, value, options=options))
        roots += 1
        if twice and roots == 1:
            # a scalar is already fully decoded; rewinding would replay it from byte 0
            console.print(
                render_value(reader, value, reset=is_container(value), options=options)
            )
        if reader.last_failure is not None:
            break

    logger.info("Rendered %d root value(s) from %s", roots, path)

    failure = reader.last_failure
    if failure is not None and failure.kind is not DecodeFailureKind.END_OF_STREAM:
        raise HavseriDataError(f"{path}: stream is corrupt ({failure})")
    if reader.depth_level > 0:
        console.warn(
            f"Stream ended inside {reader.depth_level} open container(s); it may be truncated."
        )
