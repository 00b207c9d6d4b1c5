# topmark:header:start
#
#   project      : CodeServer
#   file         : defaults.py
#   file_relpath : src/codeserver/config/defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fill in defaults on a parsed record.

`set_defaults()` returns a **new** record layering resolved values over the
input (the input is never mutated):

1. ``user-data-dir`` (after a one-time macOS legacy data directory migration).
2. ``extensions-dir`` under the user data directory.
3. The effective log level, by strict precedence:
   ``--verbose`` > ``--log`` > ``$LOG_LEVEL`` > unset.

Deciding the level is pure. Applying it is left to the caller:
`export_log_level()` writes it back into the process environment and
`log_level_for()` maps it to a stdlib logging level for
[`setup_logging()`][codeserver.config.logging.setup_logging].
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

from codeserver.config.keys import Env, Opt
from codeserver.config.logging import get_logger, level_from_name
from codeserver.config.paths import get_env_paths, humanize_path, legacy_macos_data_dir
from codeserver.config.types import LogLevel
from codeserver.constants import EXTENSIONS_DIR_NAME

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from codeserver.config.args import Args
    from codeserver.config.environment import Environment
    from codeserver.config.logging import CodeServerLogger

logger: CodeServerLogger = get_logger(__name__)


def _copy_legacy_data_dir(old: Path, new: Path) -> bool:
    """Copy ``old`` to ``new`` if ``new`` is missing and ``old`` exists."""
    if new.exists() or not old.exists():
        return False
    shutil.copytree(old, new)
    return True


async def copy_old_macos_data_dir(env: Environment) -> bool:
    """Migrate the pre-XDG macOS data directory into the current default.

    Only runs on macOS, and only when the new data directory does not exist yet
    while the old one does. Copy errors propagate.

    Args:
        env (Environment): Environment snapshot.

    Returns:
        bool: True if a copy was made.
    """
    if env.platform != "darwin":
        return False

    old: Path = legacy_macos_data_dir(env)
    new: Path = get_env_paths(env).data
    copied: bool = await asyncio.to_thread(_copy_legacy_data_dir, old, new)
    if copied:
        logger.info(
            "Copied data directory %s to %s", humanize_path(old, env), humanize_path(new, env)
        )
    return copied


def resolve_log_level(args: Args, env: Environment) -> LogLevel | None:
    """Decide the effective log level.

    Precedence: ``--verbose`` > ``--log`` > ``$LOG_LEVEL`` (recognized values
    only) > unset.

    Args:
        args (Args): The record to inspect.
        env (Environment): Environment snapshot.

    Returns:
        LogLevel | None: The level, or None when no source sets one.
    """
    if args.get(Opt.VERBOSE):
        return LogLevel.TRACE
    explicit: LogLevel | None = LogLevel.from_value(args.get(Opt.LOG))
    if explicit is not None:
        return explicit
    return LogLevel.from_value(env.log_level)


async def set_defaults(args: Args, *, env: Environment) -> Args:
    """Return a copy of ``args`` with directories and verbosity resolved.

    Args:
        args (Args): Typically the merged config-file and command-line record.
        env (Environment): Environment snapshot.

    Returns:
        Args: The new record.
    """
    changes: dict[str, Any] = {}

    user_data_dir: str | None = args.get(Opt.USER_DATA_DIR)
    if not user_data_dir:
        await copy_old_macos_data_dir(env)
        user_data_dir = str(get_env_paths(env).data)
        changes[Opt.USER_DATA_DIR] = user_data_dir

    if not args.get(Opt.EXTENSIONS_DIR):
        changes[Opt.EXTENSIONS_DIR] = str(Path(user_data_dir) / EXTENSIONS_DIR_NAME)

    level: LogLevel | None = resolve_log_level(args, env)
    if level is not None:
        changes[Opt.LOG] = level.value

    resolved: Args = args.with_values(changes)
    # Verbose is the most detailed level; any other level clears it.
    if level is LogLevel.TRACE:
        resolved = resolved.with_values({Opt.VERBOSE: True})
    elif level is not None:
        resolved = resolved.without(Opt.VERBOSE)
    logger.debug("Resolved defaults: %r", resolved)
    return resolved


def export_log_level(args: Args, environ: MutableMapping[str, str]) -> None:
    """Write the resolved level into ``environ`` (usually ``os.environ``).

    Downstream processes then observe the same level as this one.
    """
    level: str | None = args.get(Opt.LOG)
    if level:
        environ[Env.LOG_LEVEL] = level


def log_level_for(args: Args) -> int | None:
    """Return the stdlib logging level for the record's resolved ``log`` value."""
    return level_from_name(args.get(Opt.LOG))
