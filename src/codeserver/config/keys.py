# topmark:header:start
#
#   project      : CodeServer
#   file         : keys.py
#   file_relpath : src/codeserver/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical option names and environment variable names.

Option names are the *external configuration API*: the same spelling is used
for ``--long`` flags on the command line and for keys in ``config.yaml``.
Renaming or removing one is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Opt:
    """Option names shared by the command line and the YAML config file."""

    AUTH: Final[str] = "auth"
    PASSWORD: Final[str] = "password"
    CERT: Final[str] = "cert"
    CERT_HOST: Final[str] = "cert-host"
    CERT_KEY: Final[str] = "cert-key"
    DISABLE_TELEMETRY: Final[str] = "disable-telemetry"
    HELP: Final[str] = "help"
    JSON: Final[str] = "json"
    OPEN: Final[str] = "open"
    BIND_ADDR: Final[str] = "bind-addr"
    CONFIG: Final[str] = "config"

    # Deprecated in favor of BIND_ADDR.
    HOST: Final[str] = "host"
    PORT: Final[str] = "port"

    SOCKET: Final[str] = "socket"
    VERSION: Final[str] = "version"

    USER_DATA_DIR: Final[str] = "user-data-dir"
    EXTENSIONS_DIR: Final[str] = "extensions-dir"
    BUILTIN_EXTENSIONS_DIR: Final[str] = "builtin-extensions-dir"
    EXTRA_EXTENSIONS_DIR: Final[str] = "extra-extensions-dir"
    EXTRA_BUILTIN_EXTENSIONS_DIR: Final[str] = "extra-builtin-extensions-dir"
    LIST_EXTENSIONS: Final[str] = "list-extensions"
    FORCE: Final[str] = "force"
    INSTALL_EXTENSION: Final[str] = "install-extension"
    ENABLE_PROPOSED_API: Final[str] = "enable-proposed-api"
    UNINSTALL_EXTENSION: Final[str] = "uninstall-extension"
    SHOW_VERSIONS: Final[str] = "show-versions"
    PROXY_DOMAIN: Final[str] = "proxy-domain"

    NEW_WINDOW: Final[str] = "new-window"
    REUSE_WINDOW: Final[str] = "reuse-window"

    LOCALE: Final[str] = "locale"
    LOG: Final[str] = "log"
    VERBOSE: Final[str] = "verbose"

    LINK: Final[str] = "link"


class Env:
    """Environment variables consulted during resolution."""

    PASSWORD: Final[str] = "PASSWORD"
    LOG_LEVEL: Final[str] = "LOG_LEVEL"
    PORT: Final[str] = "PORT"
    CONFIG: Final[str] = "CODE_SERVER_CONFIG"
    IPC_HOOK_CLI: Final[str] = "VSCODE_IPC_HOOK_CLI"
    BETA: Final[str] = "CS_BETA"

    # Platform path inputs
    HOME: Final[str] = "HOME"
    TMPDIR: Final[str] = "TMPDIR"
    XDG_DATA_HOME: Final[str] = "XDG_DATA_HOME"
    XDG_CONFIG_HOME: Final[str] = "XDG_CONFIG_HOME"
    XDG_RUNTIME_DIR: Final[str] = "XDG_RUNTIME_DIR"
    APPDATA: Final[str] = "APPDATA"
    LOCALAPPDATA: Final[str] = "LOCALAPPDATA"
