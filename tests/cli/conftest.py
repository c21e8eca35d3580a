# topmark:header:start
#
#   project      : HavSeri
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running HavSeri in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so that relative stream paths and config
discovery (``havseri.toml``, ``pyproject.toml``) are evaluated against the
temporary test directory instead of the repository root.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from havseri.cli.exit_codes import ExitCode
from havseri.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for the
            command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. `["dump", "data.hsl"]`.
        input_text (str | bytes | IO[Any] | None): Optional standard input to pass to the command.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        res = run_cli_in(tmp_path, ["--no-color", "dump", "data.hsl"])
        assert res.exit_code == ExitCode.SUCCESS
        ```
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not touch the filesystem (e.g. ``--help``
    or ``version``) or when every path passed is absolute and no config
    discovery is involved.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["version"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input to pass
            to the command.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    # Click's own UsageError uses exit code 2; ours are raised by option resolution.
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited with DATA_ERROR (code 65)."""
    assert result.exit_code == ExitCode.DATA_ERROR, result.output


def assert_FILE_NOT_FOUND(result: Result) -> None:
    """Assert that the command exited with FILE_NOT_FOUND (code 66)."""
    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78)."""
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
