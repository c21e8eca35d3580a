# topmark:header:start
#
#   project      : HavSeri
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the HavSeri test suite.

Sets TRACE logging for the whole run and provides fixtures that build
streams with a real [`Writer`][havseri.writer.Writer].
"""

from __future__ import annotations

import logging as std_logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from havseri.config import logging
from tests.streams import StreamBuilder, encode, write_scenario

if TYPE_CHECKING:
    from collections.abc import Iterator

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_havseri_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep ``HAVSERI_LOG_LEVEL`` from leaking into tests and restore logging afterwards.

    CLI tests reconfigure the root logger onto Click's captured streams; the
    previous handlers and level are put back once the test finishes.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)
    root = std_logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE for the whole run so failures show the decode walk."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def build_stream() -> StreamBuilder:
    """Return a helper that runs a writer script against a fresh buffer.

    Example:
        ```python
        data = build_stream(lambda w: (w.write_array(), w.write_close()))
        ```
    """

    return encode


@pytest.fixture
def scenario_bytes(build_stream: StreamBuilder) -> bytes:
    """The encoded ``{"a": 1, "b": [2, 3]}`` object."""
    return build_stream(write_scenario)
