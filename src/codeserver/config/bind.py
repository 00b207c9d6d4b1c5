# topmark:header:start
#
#   project      : CodeServer
#   file         : bind.py
#   file_relpath : src/codeserver/config/bind.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the listener address from every configuration source.

Resolution order (lowest → highest precedence):
  1. Built-in default ``localhost:8080``.
  2. Config file record: ``bind-addr``, then legacy ``host``, then legacy ``port``.
  3. Command line record: same order.
  4. ``$PORT`` (port only; never overrides a host).

All functions here are pure: no I/O and no ``os.environ`` access.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING
from urllib.parse import SplitResult, urlsplit

from codeserver.config.errors import InvalidBindAddressError, InvalidNumberError
from codeserver.config.keys import Env, Opt
from codeserver.config.logging import get_logger
from codeserver.config.types import Addr
from codeserver.constants import BIND_ADDR_IMPLICIT_PORT, DEFAULT_HOST, DEFAULT_PORT, MAX_PORT

if TYPE_CHECKING:
    from codeserver.config.args import Args
    from codeserver.config.environment import Environment
    from codeserver.config.logging import CodeServerLogger

logger: CodeServerLogger = get_logger(__name__)


def parse_bind_addr(bind_addr: str) -> tuple[str, int]:
    """Split a ``host[:port]`` string.

    The string is read as the authority part of an ``http://`` URL, so IPv6
    literals must be bracketed (``[::1]:8080``). When no port is given the
    HTTP default of 80 is assumed, not the application's default port.

    Args:
        bind_addr (str): The address to split.

    Returns:
        tuple[str, int]: Host (lowercased, brackets removed) and port.

    Raises:
        InvalidBindAddressError: If the host is missing or the port is invalid.
    """
    try:
        parts: SplitResult = urlsplit(f"http://{bind_addr}")
        port: int | None = parts.port
    except ValueError as exc:
        raise InvalidBindAddressError(f"invalid bind address {bind_addr!r}: {exc}") from exc
    host: str | None = parts.hostname
    if not host or parts.path or parts.query or parts.fragment:
        raise InvalidBindAddressError(f"invalid bind address {bind_addr!r}")
    return host, BIND_ADDR_IMPLICIT_PORT if port is None else port


def bind_addr_from_args(addr: Addr, args: Args) -> Addr:
    """Return ``addr`` updated with the address options found in ``args``.

    Raises:
        InvalidBindAddressError: If ``bind-addr`` cannot be split or ``port``
            is outside 0-65535.
    """
    bind_addr: str | None = args.get(Opt.BIND_ADDR)
    if bind_addr:
        host, port = parse_bind_addr(bind_addr)
        addr = Addr(host=host, port=port)
    host_override: str | None = args.get(Opt.HOST)
    if host_override:
        addr = replace(addr, host=host_override)
    port_override: int | None = args.get(Opt.PORT)
    if port_override is not None:
        if not 0 <= port_override <= MAX_PORT:
            raise InvalidBindAddressError(
                f"invalid port {port_override}: must be between 0 and {MAX_PORT}"
            )
        addr = replace(addr, port=port_override)
    return addr


def port_from_env(env: Environment) -> int | None:
    """Return ``$PORT`` as an int, or None when unset.

    Raises:
        InvalidNumberError: If ``$PORT`` is not a base-10 integer in 0-65535.
    """
    if env.port is None:
        return None
    try:
        port: int = int(env.port, 10)
    except ValueError:
        raise InvalidNumberError(f"${Env.PORT} must be a number", option=Env.PORT) from None
    if not 0 <= port <= MAX_PORT:
        raise InvalidNumberError(
            f"${Env.PORT} must be between 0 and {MAX_PORT}", option=Env.PORT
        )
    return port


def bind_addr_from_all_sources(
    cli_args: Args,
    config_args: Args,
    *,
    env: Environment,
) -> tuple[str, int]:
    """Merge every source into the effective ``(host, port)`` pair.

    Args:
        cli_args (Args): Record parsed from the process arguments.
        config_args (Args): Record parsed from the config file.
        env (Environment): Environment snapshot (provides ``$PORT``).

    Returns:
        tuple[str, int]: The resolved host and port.
    """
    addr = Addr(host=DEFAULT_HOST, port=DEFAULT_PORT)
    addr = bind_addr_from_args(addr, config_args)
    addr = bind_addr_from_args(addr, cli_args)

    env_port: int | None = port_from_env(env)
    if env_port is not None:
        addr = replace(addr, port=env_port)

    logger.debug("Resolved bind address %s:%d", addr.host, addr.port)
    return addr.as_tuple()
