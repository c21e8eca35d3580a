# topmark:header:start
#
#   project      : HavSeri
#   file         : constants.py
#   file_relpath : src/havseri/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""HavSeri Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

HAVSERI_VERSION: str = get_version("havseri")

# Conventional file suffix for HavSeri streams (not enforced).
HAVSERI_FILE_SUFFIX: str = ".hsl"
