# topmark:header:start
#
#   project      : CodeServer
#   file         : main.py
#   file_relpath : src/codeserver/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for ``code-server``.

Click only provides the process shell here (context, console, error display
and exit codes). Argument parsing itself is owned by the schema parser in
[`codeserver.config.parser`][codeserver.config.parser]: `RawArgsCommand` hands
the untouched token list over, so ``--`` and unknown flags are interpreted by
the same rules as the config file.
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from typing import TYPE_CHECKING, Any, Final

import aiohttp
import click

from codeserver.cli.console import ClickConsole
from codeserver.cli.errors import to_cli_error
from codeserver.config.defaults import export_log_level, log_level_for
from codeserver.config.environment import Environment
from codeserver.config.errors import ConfigResolutionError
from codeserver.config.keys import Opt
from codeserver.config.logging import get_logger, level_from_name, setup_logging
from codeserver.config.schema import option_descriptions
from codeserver.constants import CODE_SERVER_VERSION
from codeserver.instance import open_in_existing_instance
from codeserver.runtime import Runtime, resolve_runtime

if TYPE_CHECKING:
    from codeserver.cli.console import ConsoleLike
    from codeserver.instance import OpenRequest

logger = get_logger(__name__)

RAW_ARGV_META_KEY: Final[str] = "codeserver.raw_argv"

# Extension management options reported when delegating to the editor CLI.
EDITOR_CLI_OPTIONS: Final[tuple[str, ...]] = (
    Opt.LIST_EXTENSIONS,
    Opt.INSTALL_EXTENSION,
    Opt.UNINSTALL_EXTENSION,
    Opt.SHOW_VERSIONS,
    Opt.FORCE,
)


class RawArgsCommand(click.Command):
    """Click command that keeps the raw argument list for the schema parser."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Stash ``args`` in ``ctx.meta`` and let Click parse nothing."""
        ctx.meta[RAW_ARGV_META_KEY] = list(args)
        return super().parse_args(ctx, [])


def _run(coro: Any) -> Any:
    """Run a coroutine, converting core errors into CLI errors."""
    try:
        return asyncio.run(coro)
    except (ConfigResolutionError, aiohttp.ClientError, OSError) as exc:
        raise to_cli_error(exc) from exc


def print_help(console: ConsoleLike, env: Environment) -> None:
    """Print the version line, usage and option descriptions."""
    console.print(f"code-server {CODE_SERVER_VERSION}")
    console.print()
    console.print("Usage: code-server [options] [path]")
    console.print()
    console.print("Options")
    for description in option_descriptions(env):
        console.print(f" {description}")


def print_version(console: ConsoleLike, *, as_json: bool) -> None:
    """Print the version, optionally as a JSON object."""
    if as_json:
        console.print(json.dumps({"codeServer": CODE_SERVER_VERSION}))
    else:
        console.print(CODE_SERVER_VERSION)


def print_editor_cli(console: ConsoleLike, runtime: Runtime) -> None:
    """Report the extension management request handed to the editor runtime."""
    requested: dict[str, Any] = {
        name: (list(value) if isinstance(value, tuple) else value)
        for name in EDITOR_CLI_OPTIONS
        if (value := runtime.args.get(name)) is not None
    }
    requested[Opt.EXTENSIONS_DIR] = runtime.args.get(Opt.EXTENSIONS_DIR)
    if runtime.args.get(Opt.JSON):
        console.print(json.dumps({"editor-cli": requested}))
        return
    console.print(console.styled("Extension management request:", bold=True))
    for name, value in requested.items():
        console.print(f"  {name}: {value}")


def print_summary(console: ConsoleLike, runtime: Runtime) -> None:
    """Print the resolved runtime configuration."""
    summary: dict[str, Any] = runtime.summary()
    if runtime.args.get(Opt.JSON):
        console.print(json.dumps(summary))
        return
    width: int = max(len(k) for k in summary)
    for key, value in summary.items():
        console.print(f"{console.styled(key.ljust(width), bold=True)} : {value}")


@click.command(
    cls=RawArgsCommand,
    name="code-server",
    add_help_option=False,
    context_settings={"help_option_names": []},
    help="Resolve code-server arguments, config file and environment.",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Entry point for the ``code-server`` command."""
    ctx.ensure_object(dict)
    console = ClickConsole(enable_color=sys.stdout.isatty())
    ctx.obj["console"] = console

    env: Environment = Environment.from_environ()
    # Until the arguments are resolved, only $LOG_LEVEL can raise verbosity.
    setup_logging(level_from_name(env.log_level))

    argv: list[str] = ctx.meta.get(RAW_ARGV_META_KEY, [])
    runtime: Runtime = _run(resolve_runtime(argv, env=env))

    export_log_level(runtime.args, os.environ)
    setup_logging(log_level_for(runtime.args))

    if runtime.args.get(Opt.HELP):
        print_help(console, env)
        return
    if runtime.args.get(Opt.VERSION):
        print_version(console, as_json=bool(runtime.args.get(Opt.JSON)))
        return
    if runtime.run_editor_cli:
        print_editor_cli(console, runtime)
        return
    if runtime.socket_path:
        request: OpenRequest = _run(open_in_existing_instance(runtime.args, runtime.socket_path))
        logger.info("Opened %d path(s) in existing instance", len(request.fileURIs + request.folderURIs))
        console.print(f"Opened in existing instance at {runtime.socket_path}")
        return

    print_summary(console, runtime)


if __name__ == "__main__":
    cli()
