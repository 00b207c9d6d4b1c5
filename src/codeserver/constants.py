# topmark:header:start
#
#   project      : CodeServer
#   file         : constants.py
#   file_relpath : src/codeserver/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CodeServer Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

CODE_SERVER_VERSION: str = get_version("codeserver")

# Directory name used under the platform data/config roots.
APP_NAME: Final[str] = "code-server"

# Name of the YAML config file inside the platform config directory.
DEFAULT_CONFIG_FILE_NAME: Final[str] = "config.yaml"

# Fallback listener address when no source sets one.
DEFAULT_HOST: Final[str] = "localhost"
DEFAULT_PORT: Final[int] = 8080

# Highest valid TCP port.
MAX_PORT: Final[int] = 65535

# Port assumed when ``--bind-addr`` carries a host without a port.
BIND_ADDR_IMPLICIT_PORT: Final[int] = 80

# Address written into a freshly generated config file.
DEFAULT_CONFIG_BIND_ADDR: Final[str] = "127.0.0.1:8080"

# File (inside the temp directory) holding the running instance's socket path.
IPC_SOCKET_REFERENCE_NAME: Final[str] = "vscode-ipc"

# Seconds to wait for a control socket to accept a connection.
SOCKET_PROBE_TIMEOUT: Final[float] = 1.0

# Sub-directory of the user data directory holding extensions.
EXTENSIONS_DIR_NAME: Final[str] = "extensions"

VALUE_NOT_SET: Final[str] = "<not set>"
