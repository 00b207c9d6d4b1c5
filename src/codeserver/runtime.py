# topmark:header:start
#
#   project      : CodeServer
#   file         : runtime.py
#   file_relpath : src/codeserver/runtime.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end resolution pipeline.

`resolve_runtime()` runs every stage in order, each one completing before the
next starts:

  1. Parse the process arguments (the *explicit* command line record).
  2. Read (or create) the YAML config file, honoring ``--config``.
  3. Merge: command line values override config file values.
  4. Fill in defaults (directories, log level).
  5. Resolve the bind address from both records and ``$PORT``.
  6. Resolve the password (``$PASSWORD`` > config file).
  7. Decide whether to forward to a running instance.

The result is an immutable [`Runtime`][codeserver.runtime.Runtime] consumed by
the CLI shell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from codeserver.config.args import merge_args
from codeserver.config.bind import bind_addr_from_all_sources
from codeserver.config.defaults import set_defaults
from codeserver.config.keys import Opt
from codeserver.config.loaders import read_config_file
from codeserver.config.logging import get_logger
from codeserver.config.parser import parse
from codeserver.config.types import AuthType, OptionalString
from codeserver.constants import VALUE_NOT_SET
from codeserver.instance import should_open_in_existing_instance, should_run_editor_cli

if TYPE_CHECKING:
    from collections.abc import Sequence

    from codeserver.config.args import Args
    from codeserver.config.environment import Environment
    from codeserver.config.logging import CodeServerLogger

logger: CodeServerLogger = get_logger(__name__)


def resolve_password(args: Args, env: Environment) -> str | None:
    """Return the password to use for password authentication.

    ``$PASSWORD`` wins over the config file. Returns None when authentication
    is not password based.
    """
    if args.get(Opt.AUTH) != AuthType.PASSWORD.value:
        return None
    return env.password or args.get(Opt.PASSWORD)


@dataclass(frozen=True)
class Runtime:
    """Outcome of a full resolution.

    Attributes:
        cli_args (Args): Record parsed from the process arguments only.
        config_args (Args): Record parsed from the config file.
        args (Args): Merged record with defaults applied.
        bind_addr (tuple[str, int]): Effective listener host and port.
        password (str | None): Effective password (None unless password auth).
        socket_path (str | None): Running instance to forward to, if any.
        run_editor_cli (bool): Whether this is an extension management command.
    """

    cli_args: Args
    config_args: Args
    args: Args
    bind_addr: tuple[str, int]
    password: str | None = field(default=None, repr=False)
    socket_path: str | None = None
    run_editor_cli: bool = False

    def summary(self) -> dict[str, Any]:
        """Return a JSON-friendly description (the password is never included)."""
        host, port = self.bind_addr
        cert: OptionalString | None = self.args.get(Opt.CERT)
        return {
            "config": self.args.get(Opt.CONFIG),
            "bind-addr": f"{host}:{port}",
            "socket": self.args.get(Opt.SOCKET),
            "auth": self.args.get(Opt.AUTH, AuthType.NONE.value),
            "password": VALUE_NOT_SET if self.password is None else "<redacted>",
            "cert": None if cert is None else (cert.value or "<generated>"),
            "user-data-dir": self.args.get(Opt.USER_DATA_DIR),
            "extensions-dir": self.args.get(Opt.EXTENSIONS_DIR),
            "log": self.args.get(Opt.LOG),
            "paths": list(self.args.positional),
            "existing-instance": self.socket_path,
            "editor-cli": self.run_editor_cli,
        }


async def resolve_runtime(argv: Sequence[str], *, env: Environment) -> Runtime:
    """Resolve the process arguments, config file and environment.

    Args:
        argv (Sequence[str]): Process arguments without the program name.
        env (Environment): Environment snapshot.

    Returns:
        Runtime: The resolved runtime description.
    """
    cli_args: Args = parse(argv)
    config_args: Args = await read_config_file(cli_args.get(Opt.CONFIG), env=env)

    args: Args = await set_defaults(merge_args(config_args, cli_args), env=env)

    bind_addr: tuple[str, int] = bind_addr_from_all_sources(cli_args, config_args, env=env)
    run_editor_cli: bool = should_run_editor_cli(args)

    socket_path: str | None = None
    if not (args.get(Opt.HELP) or args.get(Opt.VERSION) or run_editor_cli):
        socket_path = await should_open_in_existing_instance(cli_args, env=env)

    runtime = Runtime(
        cli_args=cli_args,
        config_args=config_args,
        args=args,
        bind_addr=bind_addr,
        password=resolve_password(args, env),
        socket_path=socket_path,
        run_editor_cli=run_editor_cli,
    )
    logger.trace("Runtime: %r", runtime)
    return runtime
