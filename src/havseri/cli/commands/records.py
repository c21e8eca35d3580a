# topmark:header:start
#
#   project      : HavSeri
#   file         : records.py
#   file_relpath : src/havseri/cli/commands/records.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""HavSeri `records` command.

Lists the flat record sequence of a stream, one line per record:

```text
0       1  OBJECT
1       1  STRING   "a"
```

Columns are the byte offset, the depth counter after the record was decoded,
the record type, and the payload.
"""

from __future__ import annotations

import click

from havseri.cli.cmd_common import get_console, open_reader
from havseri.cli.errors import HavseriDataError
from havseri.model import Array, Close, Object
from havseri.reader import DecodeFailure
from havseri.render import format_scalar


@click.command(
    name="records",
    help="List the raw records of a HavSeri stream with offsets and depths.",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=str))
def records_command(*, path: str) -> None:
    """List every record in PATH.

    Args:
        path (str): Stream file to decode.
    """
    console = get_console()
    reader = open_reader(path)

    for offset, result in reader.records():
        if isinstance(result, DecodeFailure):
            raise HavseriDataError(f"{path}: {result}")
        payload: str = (
            "" if isinstance(result, (Array, Object, Close)) else format_scalar(result)
        )
        line = f"{offset:<7d} {reader.depth_level:>2d}  {result.value_type.name:<8s} {payload}"
        console.print(line.rstrip())
