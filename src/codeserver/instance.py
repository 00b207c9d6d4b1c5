# topmark:header:start
#
#   project      : CodeServer
#   file         : instance.py
#   file_relpath : src/codeserver/instance.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detect and reach an already-running instance.

A running instance writes the path of its control socket to
``<tmpdir>/vscode-ipc``. `should_open_in_existing_instance()` decides, from the
arguments the user *explicitly* passed, whether this invocation should be
forwarded there. `open_in_existing_instance()` then sends the open request.

Only the client side lives here; the listener belongs to the running server.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiohttp

from codeserver.config.errors import OpenRequestError
from codeserver.config.keys import Opt
from codeserver.config.logging import get_logger
from codeserver.config.paths import ipc_socket_reference_path
from codeserver.constants import SOCKET_PROBE_TIMEOUT

if TYPE_CHECKING:
    from codeserver.config.args import Args
    from codeserver.config.environment import Environment
    from codeserver.config.logging import CodeServerLogger

logger: CodeServerLogger = get_logger(__name__)

# Flags that only make sense when talking to a running instance.
OPEN_IN_FLAGS: tuple[str, ...] = (Opt.REUSE_WINDOW, Opt.NEW_WINDOW)


async def can_connect(socket_path: str, timeout: float = SOCKET_PROBE_TIMEOUT) -> bool:
    """Return True if something accepts connections on ``socket_path``.

    A missing socket, a refused connection, a timeout and any other ``OSError``
    all mean "not reachable".

    Args:
        socket_path (str): Path of the Unix domain socket.
        timeout (float): Seconds to wait for the connection.

    Returns:
        bool: Whether the connection succeeded.
    """
    try:
        _reader, writer = await asyncio.wait_for(
            asyncio.open_unix_connection(socket_path), timeout=timeout
        )
    except (asyncio.TimeoutError, OSError) as exc:
        logger.debug("Socket %s not reachable: %s", socket_path, exc)
        return False

    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass
    return True


def _read_text(path: Path) -> str:
    # Undecodable bytes become U+FFFD; such a path never names a live socket.
    return path.read_text(encoding="utf-8", errors="replace")


async def read_socket_path(env: Environment) -> str | None:
    """Read the control socket reference left by a running instance.

    Returns:
        str | None: The socket path, or None if no reference file exists.

    Raises:
        OSError: Any read failure other than the file not existing.
    """
    reference: Path = ipc_socket_reference_path(env)
    try:
        text: str = await asyncio.to_thread(_read_text, reference)
    except FileNotFoundError:
        return None
    return text.strip() or None


async def should_open_in_existing_instance(
    args: Args,
    *,
    env: Environment,
    timeout: float = SOCKET_PROBE_TIMEOUT,
) -> str | None:
    """Decide whether to forward this invocation to a running instance.

    ``args`` must be the record the user passed explicitly on the command
    line, not one with defaults or config file values merged in.

    Args:
        args (Args): The explicit command line record.
        env (Environment): Environment snapshot.
        timeout (float): Seconds allowed for the socket liveness probe.

    Returns:
        str | None: The socket to forward to, or None to start fresh.
    """
    # Always use the existing instance when running from the editor's terminal.
    if env.ipc_hook_cli:
        return env.ipc_hook_cli

    socket_path: str | None = await read_socket_path(env)

    # These flags have no effect otherwise, so trust the reference even if stale.
    if any(args.get(flag) for flag in OPEN_IN_FLAGS):
        return socket_path

    # Only paths were given: reuse the instance if it is actually alive.
    if len(args) == 0 and args.positional:
        if socket_path and await can_connect(socket_path, timeout):
            return socket_path

    return None


def should_run_editor_cli(args: Args) -> bool:
    """Return True if the invocation is an extension management command."""
    return bool(
        args.get(Opt.LIST_EXTENSIONS)
        or args.get(Opt.INSTALL_EXTENSION)
        or args.get(Opt.UNINSTALL_EXTENSION)
    )


@dataclass(frozen=True)
class OpenRequest:
    """Payload sent to a running instance to open files and folders.

    Attributes:
        type (str): Always ``"open"``.
        folderURIs (list[str]): Absolute folder paths.
        fileURIs (list[str]): Absolute file paths.
        forceReuseWindow (bool): ``--reuse-window`` was given.
        forceNewWindow (bool): ``--new-window`` was given.
    """

    folderURIs: list[str] = field(default_factory=list)  # noqa: N815 - wire name
    fileURIs: list[str] = field(default_factory=list)  # noqa: N815 - wire name
    forceReuseWindow: bool = False  # noqa: N815 - wire name
    forceNewWindow: bool = False  # noqa: N815 - wire name
    type: str = "open"

    def to_json(self) -> str:
        """Serialize to the JSON body understood by the running instance."""
        return json.dumps(asdict(self))


def _classify(paths: tuple[str, ...]) -> tuple[list[str], list[str]]:
    files: list[str] = []
    folders: list[str] = []
    for raw in paths:
        p: Path = Path(raw).resolve()
        (files if p.is_file() else folders).append(str(p))
    return files, folders


async def build_open_request(args: Args) -> OpenRequest:
    """Build the open request for the positional paths in ``args``.

    Raises:
        OpenRequestError: If ``--new-window`` is combined with file paths, or
            no path was given.
    """
    files, folders = await asyncio.to_thread(_classify, args.positional)
    request = OpenRequest(
        folderURIs=folders,
        fileURIs=files,
        forceReuseWindow=bool(args.get(Opt.REUSE_WINDOW)),
        forceNewWindow=bool(args.get(Opt.NEW_WINDOW)),
    )
    if request.forceNewWindow and request.fileURIs:
        raise OpenRequestError("--new-window can only be used with folder paths")
    if not request.folderURIs and not request.fileURIs:
        raise OpenRequestError("Please specify at least one file or folder")
    return request


async def open_in_existing_instance(args: Args, socket_path: str) -> OpenRequest:
    """Ask the instance listening on ``socket_path`` to open the given paths.

    The request is a JSON ``POST /`` sent over the Unix domain socket.

    Args:
        args (Args): The merged record (positional paths and window flags).
        socket_path (str): Control socket of the running instance.

    Returns:
        OpenRequest: The request that was sent.

    Raises:
        OpenRequestError: If the paths cannot be opened (see `build_open_request`).
        aiohttp.ClientError: If the running instance could not be reached or
            answered with an error status.
    """
    request: OpenRequest = await build_open_request(args)
    logger.debug("Sending open request to %s: %s", socket_path, request)

    connector = aiohttp.UnixConnector(path=socket_path)
    async with aiohttp.ClientSession(connector=connector) as session:
        async with session.post(
            "http://localhost/",
            data=request.to_json(),
            headers={"Content-Type": "application/json"},
        ) as response:
            body: Any = await response.text()
            logger.debug("Got message from running instance (%d): %s", response.status, body)
            response.raise_for_status()
    return request
