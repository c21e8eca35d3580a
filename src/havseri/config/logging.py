# topmark:header:start
#
#   project      : HavSeri
#   file         : logging.py
#   file_relpath : src/havseri/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""HavSeri logging with a TRACE level below DEBUG.

Levels are used as follows:

- TRACE: one line per decoded record (offset, depth after the record, value)
  and one per depth-matching skip. A `TRACE` run of the CLI is a complete walk
  over the stream, in the same order as `havseri records`.
- DEBUG: decode failures other than a plain end of stream, file loads and
  the config source in use.
- INFO: per-command summaries (roots rendered, bytes written).
- WARNING and above: problems the user should see, such as unknown config keys.

Diagnostics always go to stderr; stdout is reserved for rendered documents.
Records are colored by severity with `yachalk` unless color is disabled.

Example:
    ```bash
    HAVSERI_LOG_LEVEL=TRACE havseri dump data.hsl 2>trace.log
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "HAVSERI_LOG_LEVEL"


class HavseriLogger(logging.Logger):
    """Logger class with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(HavseriLogger)


LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = (
    "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"
)
# decode walks: module and line only
TRACE_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(module)s:%(lineno)d] %(message)s"


class ChalkFormatter(logging.Formatter):
    """Formatter that colors log records according to their severity.

    TRACE records (the per-record decode walk) are blue so that the DEBUG
    lines announcing a decode failure stand out between them. With
    ``color=False`` records are passed through unstyled, which is what
    ``--no-color`` and redirected output want.

    Args:
        fmt (str): The `logging` format string.
        color (bool): Whether to apply ANSI styles.
    """

    def __init__(self, fmt: str, *, color: bool = True) -> None:
        super().__init__(fmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record, colored by level when enabled.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The formatted log message.
        """
        message = super().format(record)
        if not self.color:
            return message

        level = record.levelno
        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        if level >= TRACE_LEVEL:
            return chalk.blue(message)
        return chalk.dim.red(message)


def format_for_level(level: int) -> str:
    """Return the record format used at ``level``."""
    if level >= logging.INFO:
        return LOG_FORMAT
    if level >= logging.DEBUG:
        return DEBUG_LOG_FORMAT
    return TRACE_LOG_FORMAT


def resolve_env_log_level() -> int | None:
    """Return a logging level from the environment or None if unset.

    Honors ``HAVSERI_LOG_LEVEL`` (e.g. "TRACE", "DEBUG", "INFO", numeric "10").
    """
    val = os.environ.get(LOG_LEVEL_ENV_VAR)
    if not val:
        return None
    v = val.strip().upper()
    if v.isdigit():
        return int(v)
    name_to_level = {
        "TRACE": TRACE_LEVEL,
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
        "FATAL": logging.CRITICAL,
        "NOTSET": logging.NOTSET,
    }
    return name_to_level.get(v)


def setup_logging(level: int | None = None, *, color: bool = True) -> None:
    """Configure the root logger with a single handler on stderr.

    If ``level`` is None, the environment is consulted via
    [`resolve_env_log_level`][havseri.config.logging.resolve_env_log_level].
    Default is CRITICAL when unspecified. Calling it again replaces the
    previous handler, so the CLI can reconfigure logging per invocation.

    Args:
        level (int | None): The root log level.
        color (bool): Whether records are colored with `yachalk`.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stdout carries rendered documents
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(format_for_level(level), color=color))
    root_logger.addHandler(handler)

    root_logger.propagate = False


def get_logger(name: str) -> HavseriLogger:
    """Retrieve a HavseriLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        HavseriLogger: A HavseriLogger instance.
    """
    logger = logging.getLogger(name)
    return cast("HavseriLogger", logger)
