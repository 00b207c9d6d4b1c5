# topmark:header:start
#
#   project      : CodeServer
#   file         : test_paths.py
#   file_relpath : tests/config/test_paths.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for platform directory helpers and the environment snapshot."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from codeserver.config.environment import Environment
from codeserver.config.paths import (
    default_config_path,
    get_env_paths,
    humanize_path,
    ipc_socket_reference_path,
    legacy_macos_data_dir,
)


def test_env_paths_linux_defaults(env: Environment) -> None:
    """XDG defaults live under the home directory."""
    paths = get_env_paths(env)
    assert paths.data == env.home / ".local" / "share" / "code-server"
    assert paths.config == env.home / ".config" / "code-server"
    assert paths.runtime == env.tmpdir / "code-server"
    assert default_config_path(env) == paths.config / "config.yaml"


def test_env_paths_xdg_overrides(env: Environment) -> None:
    """XDG variables move each directory."""
    paths = get_env_paths(
        replace(env, xdg_data_home="/xd", xdg_config_home="/xc", xdg_runtime_dir="/xr")
    )
    assert paths.data == Path("/xd/code-server")
    assert paths.config == Path("/xc/code-server")
    assert paths.runtime == Path("/xr/code-server")


def test_env_paths_windows(env: Environment) -> None:
    """Windows uses the local and roaming application data folders."""
    win = replace(env, platform="win32", local_appdata="/local", appdata="/roaming")
    paths = get_env_paths(win)
    assert paths.data == Path("/local/code-server/Data")
    assert paths.config == Path("/roaming/code-server/Config")


def test_fixed_locations(env: Environment) -> None:
    """The socket reference and legacy macOS directory have fixed locations."""
    assert ipc_socket_reference_path(env) == env.tmpdir / "vscode-ipc"
    assert legacy_macos_data_dir(env) == (
        env.home / "Library" / "Application Support" / "code-server"
    )


def test_humanize_path(env: Environment) -> None:
    """The home directory is shown as ``~``."""
    assert humanize_path(env.home, env) == "~"
    assert humanize_path(env.home / "a" / "b", env) == "~/a/b"
    assert humanize_path("/elsewhere/x", env) == "/elsewhere/x"


def test_environment_from_environ() -> None:
    """Variables are read once; empty values count as unset."""
    snapshot = Environment.from_environ(
        {
            "PASSWORD": "pw",
            "LOG_LEVEL": "debug",
            "PORT": "",
            "CS_BETA": "1",
            "HOME": "/home/user",
            "TMPDIR": "/scratch",
            "VSCODE_IPC_HOOK_CLI": "/run/ipc.sock",
        },
        platform="darwin",
    )
    assert snapshot.password == "pw"
    assert snapshot.log_level == "debug"
    assert snapshot.port is None
    assert snapshot.beta is True
    assert snapshot.platform == "darwin"
    assert snapshot.home == Path("/home/user")
    assert snapshot.tmpdir == Path("/scratch")
    assert snapshot.ipc_hook_cli == "/run/ipc.sock"
    assert "pw" not in repr(snapshot)


def test_environment_from_empty_environ() -> None:
    """Without variables every optional input is unset."""
    snapshot = Environment.from_environ({})
    assert snapshot.password is None
    assert snapshot.config_path is None
    assert snapshot.beta is False
