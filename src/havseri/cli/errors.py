# topmark:header:start
#
#   project      : HavSeri
#   file         : errors.py
#   file_relpath : src/havseri/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the HavSeri CLI.

Commands translate library errors into these exceptions so that Click prints
a one-line message and exits with the matching [`ExitCode`][havseri.cli.exit_codes.ExitCode].
"""

from __future__ import annotations

from typing import IO, Any

import click

from havseri.cli.exit_codes import ExitCode


class HavseriCliError(click.ClickException):
    """Base class for all HavSeri CLI errors."""

    exit_code = ExitCode.FAILURE

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class HavseriUsageError(HavseriCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class HavseriConfigError(HavseriCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class HavseriFileNotFoundError(HavseriCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class HavseriIOError(HavseriCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class HavseriDataError(HavseriCliError):
    """Error for malformed input data (corrupt stream, invalid JSON)."""

    exit_code = ExitCode.DATA_ERROR
