# topmark:header:start
#
#   project      : HavSeri
#   file         : test_loaders.py
#   file_relpath : tests/config/test_loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for loading and discovering render options from TOML files."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import pytest

from havseri.config.loaders import (
    discover_render_options,
    extract_render_table,
    load_render_options,
    load_toml_dict,
)
from havseri.config.model import RenderOptions
from havseri.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path


def test_load_havseri_toml(tmp_path: Path) -> None:
    path = tmp_path / "havseri.toml"
    path.write_text("[render]\nindent_width = 2\nfloat_precision = 3\n", encoding="utf-8")

    assert load_render_options(path) == RenderOptions(indent_width=2, float_precision=3)


def test_load_pyproject_table(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text("[tool.havseri.render]\nfloat_precision = 6\n", encoding="utf-8")

    assert load_render_options(path) == RenderOptions(float_precision=6)


def test_missing_table_means_defaults(tmp_path: Path) -> None:
    path = tmp_path / "havseri.toml"
    path.write_text("[other]\nkey = 1\n", encoding="utf-8")

    assert load_render_options(path) == RenderOptions()


def test_invalid_toml_raises(tmp_path: Path) -> None:
    path = tmp_path / "havseri.toml"
    path.write_text("[render\nindent_width = 2\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_render_options(path)


def test_unreadable_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Cannot read"):
        load_toml_dict(tmp_path / "absent.toml")


def test_render_must_be_a_table(tmp_path: Path) -> None:
    path = tmp_path / "havseri.toml"
    with pytest.raises(ConfigError, match="must be a table"):
        extract_render_table(path, {"render": 4})


@pytest.mark.parametrize(
    "body",
    [
        'indent_width = "4"\n',
        "indent_width = true\n",
        "float_precision = 1.5\n",
        "float_precision = -1\n",
    ],
)
def test_bad_values_raise(tmp_path: Path, body: str) -> None:
    path = tmp_path / "havseri.toml"
    path.write_text("[render]\n" + body, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_render_options(path)


def test_unknown_keys_are_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "havseri.toml"
    path.write_text("[render]\nindent_width = 3\ncolour = 'red'\n", encoding="utf-8")

    assert load_render_options(path) == RenderOptions(indent_width=3)
    assert "colour" in caplog.text


def test_discovery_prefers_havseri_toml(tmp_path: Path) -> None:
    (tmp_path / "havseri.toml").write_text("[render]\nindent_width = 1\n", encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text(
        "[tool.havseri.render]\nindent_width = 8\n", encoding="utf-8"
    )

    assert discover_render_options(tmp_path) == RenderOptions(indent_width=1)


def test_discovery_falls_back_to_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "[tool.havseri.render]\nindent_width = 8\n", encoding="utf-8"
    )

    assert discover_render_options(tmp_path) == RenderOptions(indent_width=8)


def test_discovery_skips_unrelated_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")

    assert discover_render_options(tmp_path) == RenderOptions()


def test_discovery_without_files(tmp_path: Path) -> None:
    assert discover_render_options(tmp_path) == RenderOptions()


@pytest.mark.parametrize(
    ("body", "table"),
    [
        ('tool = "x"\n', "[tool]"),
        ("[tool]\nhavseri = 1\n", "[tool.havseri]"),
        ("[tool.havseri]\nrender = [1, 2]\n", "[tool.havseri.render]"),
    ],
)
def test_discovery_rejects_non_table_steps(tmp_path: Path, body: str, table: str) -> None:
    (tmp_path / "pyproject.toml").write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError, match=re.escape(table)):
        discover_render_options(tmp_path)
