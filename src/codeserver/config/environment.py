# topmark:header:start
#
#   project      : CodeServer
#   file         : environment.py
#   file_relpath : src/codeserver/config/environment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable snapshot of the environment inputs used during resolution.

Every resolver receives an `Environment` explicitly instead of consulting
``os.environ``. The CLI shell builds one with `Environment.from_environ()` at the
edge; tests build them directly.
"""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from codeserver.config.keys import Env
from codeserver.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from codeserver.config.logging import CodeServerLogger

logger: CodeServerLogger = get_logger(__name__)


@dataclass(frozen=True)
class Environment:
    """Environment variables and platform facts consulted by the resolvers.

    Attributes:
        password (str | None): ``$PASSWORD``.
        log_level (str | None): ``$LOG_LEVEL`` (raw; validated by the consumer).
        port (str | None): ``$PORT`` (raw; parsed by the bind address resolver).
        config_path (str | None): ``$CODE_SERVER_CONFIG``.
        ipc_hook_cli (str | None): ``$VSCODE_IPC_HOOK_CLI``.
        beta (bool): Whether ``$CS_BETA`` is set to a non-empty value.
        platform (str): ``sys.platform`` style platform identifier.
        home (Path): The user's home directory.
        tmpdir (Path): The temp directory.
        xdg_data_home (str | None): ``$XDG_DATA_HOME``.
        xdg_config_home (str | None): ``$XDG_CONFIG_HOME``.
        xdg_runtime_dir (str | None): ``$XDG_RUNTIME_DIR``.
        appdata (str | None): ``%APPDATA%`` (Windows).
        local_appdata (str | None): ``%LOCALAPPDATA%`` (Windows).
    """

    password: str | None = field(default=None, repr=False)
    log_level: str | None = None
    port: str | None = None
    config_path: str | None = None
    ipc_hook_cli: str | None = None
    beta: bool = False
    platform: str = sys.platform
    home: Path = Path("~").expanduser()
    tmpdir: Path = Path(tempfile.gettempdir())
    xdg_data_home: str | None = None
    xdg_config_home: str | None = None
    xdg_runtime_dir: str | None = None
    appdata: str | None = None
    local_appdata: str | None = None

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        platform: str | None = None,
    ) -> Environment:
        """Build a snapshot from a process environment mapping.

        Empty values are treated as unset.

        Args:
            environ (Mapping[str, str] | None): Environment mapping (defaults to ``os.environ``).
            platform (str | None): Platform override (defaults to ``sys.platform``).

        Returns:
            Environment: The snapshot.
        """
        env: Mapping[str, str] = os.environ if environ is None else environ

        def _get(key: str) -> str | None:
            return env.get(key) or None

        home: str | None = _get(Env.HOME)
        tmpdir: str | None = _get(Env.TMPDIR)
        snapshot = cls(
            password=_get(Env.PASSWORD),
            log_level=_get(Env.LOG_LEVEL),
            port=_get(Env.PORT),
            config_path=_get(Env.CONFIG),
            ipc_hook_cli=_get(Env.IPC_HOOK_CLI),
            beta=bool(_get(Env.BETA)),
            platform=platform or sys.platform,
            home=Path(home) if home else Path("~").expanduser(),
            tmpdir=Path(tmpdir) if tmpdir else Path(tempfile.gettempdir()),
            xdg_data_home=_get(Env.XDG_DATA_HOME),
            xdg_config_home=_get(Env.XDG_CONFIG_HOME),
            xdg_runtime_dir=_get(Env.XDG_RUNTIME_DIR),
            appdata=_get(Env.APPDATA),
            local_appdata=_get(Env.LOCALAPPDATA),
        )
        logger.trace("Environment snapshot: %r", snapshot)
        return snapshot
