# topmark:header:start
#
#   project      : HavSeri
#   file         : loaders.py
#   file_relpath : src/havseri/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load rendering options from TOML.

Two sources are recognized:
- ``havseri.toml`` with a top-level ``[render]`` table, and
- ``pyproject.toml`` with a ``[tool.havseri.render]`` table.

Parsing is done with `tomlkit`; the parsed document is unwrapped into plain
Python values before it reaches [`RenderOptions`][havseri.config.model.RenderOptions].
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from havseri.config.logging import get_logger
from havseri.config.model import RenderOptions
from havseri.errors import ConfigError

if TYPE_CHECKING:
    from havseri.config.logging import HavseriLogger

logger: HavseriLogger = get_logger(__name__)

HAVSERI_TOML: Final[str] = "havseri.toml"
PYPROJECT_TOML: Final[str] = "pyproject.toml"


def load_toml_dict(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file into a plain ``dict``.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    try:
        doc = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    return doc.unwrap()


def extract_render_table(path: Path, data: dict[str, Any]) -> dict[str, Any] | None:
    """Return the render table for ``path``, or None if the file has none.

    Raises:
        ConfigError: If a table on the way to ``render`` holds another type.
    """
    keys: tuple[str, ...] = (
        ("tool", "havseri", "render") if path.name == PYPROJECT_TOML else ("render",)
    )
    node: Any = data
    for depth, key in enumerate(keys, start=1):
        node = node.get(key)
        if node is None:
            return None
        if not isinstance(node, dict):
            raise ConfigError(f"[{'.'.join(keys[:depth])}] in {path} must be a table")
    return node


def load_render_options(path: Path) -> RenderOptions:
    """Load options from an explicit config file; missing tables mean defaults."""
    table = extract_render_table(path, load_toml_dict(path))
    if table is None:
        logger.debug("No render table in %s, using defaults", path)
        return RenderOptions()
    logger.debug("Loaded render options from %s: %s", path, table)
    return RenderOptions.from_mapping(table)


def discover_render_options(start: Path | None = None) -> RenderOptions:
    """Find a config file in ``start`` (default: the current directory).

    ``havseri.toml`` wins over ``pyproject.toml``; a ``pyproject.toml``
    without a ``[tool.havseri]`` table is skipped.
    """
    base: Path = start or Path.cwd()
    candidate = base / HAVSERI_TOML
    if candidate.is_file():
        return load_render_options(candidate)
    candidate = base / PYPROJECT_TOML
    if candidate.is_file():
        table = extract_render_table(candidate, load_toml_dict(candidate))
        if table is not None:
            logger.debug("Using [tool.havseri.render] from %s", candidate)
            return RenderOptions.from_mapping(table)
    return RenderOptions()
