# topmark:header:start
#
#   project      : HavSeri
#   file         : __init__.py
#   file_relpath : src/havseri/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for HavSeri: logging setup and rendering options."""

from __future__ import annotations

from havseri.config.loaders import discover_render_options, load_render_options
from havseri.config.model import RenderOptions

__all__ = [
    "RenderOptions",
    "discover_render_options",
    "load_render_options",
]
