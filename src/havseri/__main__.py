# topmark:header:start
#
#   project      : HavSeri
#   file         : __main__.py
#   file_relpath : src/havseri/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running HavSeri via ``python -m havseri``.

Examples:
    Pretty-print a stream::

        python -m havseri dump data.hsl
"""

from __future__ import annotations

from havseri.cli.main import cli

if __name__ == "__main__":
    cli()
