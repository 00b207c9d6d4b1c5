# topmark:header:start
#
#   project      : CodeServer
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running ``code-server`` against an isolated home directory.

The CLI builds its `Environment` from ``os.environ``, so these helpers point
``$HOME``, ``$TMPDIR`` and the XDG variables into ``tmp_path`` before invoking
the Click command. Nothing the CLI reads or writes escapes the test directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner, Result

from codeserver.cli.exit_codes import ExitCode
from codeserver.cli.main import cli
from codeserver.config.logging import TRACE_LEVEL, setup_logging

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


@pytest.fixture
def cli_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every directory the CLI consults into ``tmp_path``.

    A config file is pre-written so runs do not log the "wrote default config"
    notice into the captured output.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture used to set environment variables.

    Returns:
        Path: The home directory used by the CLI.
    """
    home: Path = tmp_path / "home"
    scratch: Path = tmp_path / "tmp"
    home.mkdir()
    scratch.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("TMPDIR", str(scratch))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.delenv("XDG_RUNTIME_DIR", raising=False)

    config: Path = home / ".config" / "code-server" / "config.yaml"
    config.parent.mkdir(parents=True)
    config.write_text("bind-addr: 127.0.0.1:8080\nauth: none\n", encoding="utf-8")
    return home


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Reattach the root handler after the CLI pointed it at CliRunner's streams."""
    yield
    setup_logging(level=TRACE_LEVEL)


def run_cli(argv: Sequence[str]) -> Result:
    """Invoke the CLI with ``argv``.

    Args:
        argv (Sequence[str]): CLI argument vector, e.g. ``["--help"]``.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, list(argv))


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output
