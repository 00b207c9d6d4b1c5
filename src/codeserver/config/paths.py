# topmark:header:start
#
#   project      : CodeServer
#   file         : paths.py
#   file_relpath : src/codeserver/config/paths.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure helpers for platform directory conventions.

These utilities compute the few on-disk locations the resolvers need. They do
**no I/O** and read nothing from ``os.environ``: every input comes from the
[`Environment`][codeserver.config.environment.Environment] snapshot.

Key behaviors:
    - ``get_env_paths(env)``: data/config/runtime directories. XDG base
      directories on Linux and macOS, ``%LOCALAPPDATA%``/``%APPDATA%`` on Windows.
    - ``legacy_macos_data_dir(env)``: the pre-XDG macOS data directory that
      is migrated once into the new location.
    - ``humanize_path(path, env)``: replace the home directory with ``~``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from codeserver.constants import APP_NAME, DEFAULT_CONFIG_FILE_NAME, IPC_SOCKET_REFERENCE_NAME

if TYPE_CHECKING:
    from os import PathLike

    from codeserver.config.environment import Environment


@dataclass(frozen=True)
class EnvPaths:
    """Application directories for the current platform.

    Attributes:
        data (Path): User data directory.
        config (Path): Directory holding ``config.yaml``.
        runtime (Path): Directory for sockets and other runtime files.
    """

    data: Path
    config: Path
    runtime: Path


def get_env_paths(env: Environment) -> EnvPaths:
    """Return the application directories for ``env.platform``."""
    if env.platform == "win32":
        local: Path = (
            Path(env.local_appdata) if env.local_appdata else env.home / "AppData" / "Local"
        )
        roaming: Path = Path(env.appdata) if env.appdata else env.home / "AppData" / "Roaming"
        return EnvPaths(
            data=local / APP_NAME / "Data",
            config=roaming / APP_NAME / "Config",
            runtime=env.tmpdir / APP_NAME,
        )

    data_home: Path = (
        Path(env.xdg_data_home) if env.xdg_data_home else env.home / ".local" / "share"
    )
    config_home: Path = (
        Path(env.xdg_config_home) if env.xdg_config_home else env.home / ".config"
    )
    runtime: Path = (
        Path(env.xdg_runtime_dir) / APP_NAME if env.xdg_runtime_dir else env.tmpdir / APP_NAME
    )
    return EnvPaths(data=data_home / APP_NAME, config=config_home / APP_NAME, runtime=runtime)


def default_config_path(env: Environment) -> Path:
    """Return the platform default location of ``config.yaml``."""
    return get_env_paths(env).config / DEFAULT_CONFIG_FILE_NAME


def legacy_macos_data_dir(env: Environment) -> Path:
    """Return the data directory used on macOS before the XDG layout."""
    return env.home / "Library" / "Application Support" / APP_NAME


def ipc_socket_reference_path(env: Environment) -> Path:
    """Return the file a running instance writes its control socket path to."""
    return env.tmpdir / IPC_SOCKET_REFERENCE_NAME


def humanize_path(path: str | PathLike[str], env: Environment) -> str:
    """Return ``path`` with the home directory replaced by ``~``."""
    p = Path(path)
    try:
        rel: Path = p.relative_to(env.home)
    except ValueError:
        return str(p)
    return "~" if rel == Path(".") else str(Path("~") / rel)
