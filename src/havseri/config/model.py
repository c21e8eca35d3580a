# topmark:header:start
#
#   project      : HavSeri
#   file         : model.py
#   file_relpath : src/havseri/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering options for the HavSeri pretty-printer.

The defaults reproduce the canonical text form (four spaces per level and
fifteen fractional digits for doubles). Options can be overridden from a
TOML file, see [`havseri.config.loaders`][havseri.config.loaders].
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any, Final

from havseri.config.logging import get_logger
from havseri.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from havseri.config.logging import HavseriLogger

logger: HavseriLogger = get_logger(__name__)

DEFAULT_INDENT_WIDTH: Final[int] = 4
DEFAULT_FLOAT_PRECISION: Final[int] = 15


@dataclass(frozen=True)
class RenderOptions:
    """Immutable formatting options.

    Attributes:
        indent_width (int): Spaces per nesting level.
        float_precision (int): Fractional digits printed for doubles.
    """

    indent_width: int = DEFAULT_INDENT_WIDTH
    float_precision: int = DEFAULT_FLOAT_PRECISION

    def __post_init__(self) -> None:
        for f in fields(self):
            value: Any = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"render.{f.name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigError(f"render.{f.name} must not be negative, got {value}")

    def indent(self, depth_level: int) -> str:
        """Return the indentation string for ``depth_level``."""
        return " " * (self.indent_width * max(depth_level, 0))

    @classmethod
    def from_mapping(cls, table: Mapping[str, object]) -> RenderOptions:
        """Build options from a ``[render]`` table, ignoring unknown keys.

        Raises:
            ConfigError: If a known key holds a value of the wrong type.
        """
        known: set[str] = {f.name for f in fields(cls)}
        updates: dict[str, Any] = {}
        for key, value in table.items():
            if key not in known:
                logger.warning("Ignoring unknown render option: %s", key)
                continue
            updates[key] = value
        return replace(cls(), **updates)
