# topmark:header:start
#
#   project      : CodeServer
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the CodeServer test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Resolvers never read ``os.environ`` themselves. Tests build an
    `codeserver.config.environment.Environment` snapshot pointing every
    directory into ``tmp_path`` (see the `env` fixture and `make_env()`), so no
    test touches the developer's real config or data directories.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import pytest

from codeserver.config import logging
from codeserver.config.environment import Environment
from codeserver.config.keys import Env

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

# Variables that would otherwise leak from the developer's shell into a run.
_CLEARED_ENV_VARS: tuple[str, ...] = (
    Env.PASSWORD,
    Env.LOG_LEVEL,
    Env.PORT,
    Env.CONFIG,
    Env.IPC_HOOK_CLI,
    Env.BETA,
)


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.fixture`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.fixture`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove the environment variables CodeServer reads from the process environment.

    This keeps a developer's exported ``$PORT`` or ``$PASSWORD`` from changing
    test outcomes. Tests that need a variable set it explicitly.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    for name in _CLEARED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure pytest settings and customize logging for the test suite.

    This function sets the logging level to TRACE for all tests,
    ensuring detailed output is captured during test execution.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_env(root: Path, **overrides: Any) -> Environment:
    """Return an `Environment` whose home and temp directories live under ``root``.

    Args:
        root (Path): Directory that stands in for the user's home.
        **overrides (Any): Field overrides applied on top of the defaults.

    Returns:
        Environment: The snapshot.
    """
    home: Path = root / "home"
    tmpdir: Path = root / "tmp"
    home.mkdir(parents=True, exist_ok=True)
    tmpdir.mkdir(parents=True, exist_ok=True)
    fields: dict[str, Any] = {"platform": "linux", "home": home, "tmpdir": tmpdir}
    fields.update(overrides)
    return Environment(**fields)


@pytest.fixture
def env(tmp_path: Path) -> Environment:
    """Linux `Environment` rooted in ``tmp_path``.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.

    Returns:
        Environment: The snapshot.
    """
    return make_env(tmp_path)


def write_config(env: Environment, text: str) -> Path:
    """Write ``text`` to the default config file location for ``env``.

    Args:
        env (Environment): Snapshot whose default config path is used.
        text (str): YAML document to write.

    Returns:
        Path: The written file.
    """
    path: Path = env.home / ".config" / "code-server" / "config.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
