# topmark:header:start
#
#   project      : HavSeri
#   file         : from_json.py
#   file_relpath : src/havseri/cli/commands/from_json.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""HavSeri `from-json` command.

Encodes a JSON document as a HavSeri stream. Reads from a file or, when no
input is given (or the input is ``-``), from STDIN. Without ``--output`` a
file input is written next to itself with the ``.hsl`` suffix.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from havseri.cli.cmd_common import get_console, open_writer
from havseri.cli.errors import (
    HavseriDataError,
    HavseriFileNotFoundError,
    HavseriIOError,
    HavseriUsageError,
)
from havseri.config.logging import get_logger
from havseri.constants import HAVSERI_FILE_SUFFIX
from havseri.tree import write_tree

if TYPE_CHECKING:
    from havseri.config.logging import HavseriLogger

logger: HavseriLogger = get_logger(__name__)


def _read_json_text(source: str) -> str:
    if source == "-":
        return click.get_text_stream("stdin").read()
    try:
        with open(source, encoding="utf-8") as fh:
            return fh.read()
    except FileNotFoundError as exc:
        raise HavseriFileNotFoundError(f"Input file not found: {source}") from exc
    except OSError as exc:
        raise HavseriIOError(f"Unable to read {source}: {exc}") from exc


@click.command(
    name="from-json",
    help="Encode a JSON document (file or STDIN) as a HavSeri stream.",
)
@click.argument("source", default="-", type=str)
@click.option(
    "-o",
    "--output",
    "output",
    default=None,
    type=click.Path(dir_okay=False, path_type=str),
    help=f"Destination stream file (default: SOURCE with the {HAVSERI_FILE_SUFFIX} suffix).",
)
def from_json_command(*, source: str, output: str | None) -> None:
    """Encode SOURCE (a JSON file, or '-' for STDIN) into OUTPUT.

    Args:
        source (str): JSON input path or ``-``.
        output (str | None): Output stream path; required when reading STDIN.
    """
    console = get_console()
    if output is None:
        if source == "-":
            raise HavseriUsageError("--output is required when reading JSON from STDIN.")
        output = str(Path(source).with_suffix(HAVSERI_FILE_SUFFIX))
        if output == source:
            raise HavseriUsageError(f"Refusing to overwrite {source}; pass --output.")
    text = _read_json_text(source)
    try:
        document: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise HavseriDataError(f"Invalid JSON in {source}: {exc}") from exc

    with open_writer(output) as writer:
        try:
            write_tree(writer, document)
        except (TypeError, ValueError) as exc:
            raise HavseriDataError(f"Cannot encode {source}: {exc}") from exc
        written: int = writer.bytes_written

    logger.info("Encoded %s into %s (%d bytes)", source, output, written)
    console.print(f"Wrote {written} bytes to {output}")
