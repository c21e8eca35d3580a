# topmark:header:start
#
#   project      : HavSeri
#   file         : version.py
#   file_relpath : src/havseri/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""HavSeri `version` command.

Prints the current HavSeri version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from havseri.cli.cmd_common import get_console
from havseri.constants import HAVSERI_VERSION


@click.command(
    name="version",
    help="Show the current version of HavSeri.",
)
def version_command() -> None:
    """Show the current version of HavSeri."""
    console = get_console()
    console.print(console.styled(HAVSERI_VERSION, bold=True))
