# topmark:header:start
#
#   project      : CodeServer
#   file         : loaders.py
#   file_relpath : src/codeserver/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load the YAML configuration file.

The config file is a flat mapping of option name to scalar value. It is turned
into ``--key=value`` tokens and validated by the same
[`parse()`][codeserver.config.parser.parse] used for the command line, so both
sources share one set of type and enum checks.

Parsing is done with PyYAML (``yaml.safe_load``). Blocking file access runs in
a worker thread via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import secrets
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from codeserver.config.errors import InvalidConfigError
from codeserver.config.keys import Opt
from codeserver.config.logging import get_logger
from codeserver.config.parser import parse
from codeserver.config.paths import default_config_path, humanize_path
from codeserver.constants import DEFAULT_CONFIG_BIND_ADDR

if TYPE_CHECKING:
    from collections.abc import Mapping

    from codeserver.config.args import Args
    from codeserver.config.environment import Environment
    from codeserver.config.logging import CodeServerLogger

logger: CodeServerLogger = get_logger(__name__)


def generate_password(length: int = 24) -> str:
    """Return a random hex password of ``length`` characters."""
    return secrets.token_hex(length // 2)


def default_config_text(password: str | None = None) -> str:
    """Render the document written when no config file exists yet.

    Args:
        password (str | None): Password to embed; a random one is generated if None.

    Returns:
        str: YAML document text.
    """
    return (
        f"{Opt.BIND_ADDR}: {DEFAULT_CONFIG_BIND_ADDR}\n"
        f"{Opt.AUTH}: password\n"
        f"{Opt.PASSWORD}: {password or generate_password()}\n"
        f"{Opt.CERT}: false\n"
    )


def resolve_config_path(config_path: str | None, env: Environment) -> Path:
    """Return the effective config path.

    Precedence: explicit argument > ``$CODE_SERVER_CONFIG`` > platform default.
    """
    if config_path:
        return Path(config_path)
    if env.config_path:
        return Path(env.config_path)
    return default_config_path(env)


def _format_value(value: Any) -> str:
    """Render a YAML scalar the way it would be typed on the command line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def config_to_argv(config: Mapping[str, Any]) -> list[str]:
    """Convert a config mapping into flag tokens.

    ``True`` becomes a bare ``--key``; a null value (``key:`` with nothing after
    it) also becomes a bare ``--key`` so value-carrying options report a missing
    value. Everything else becomes ``--key=value``.

    Args:
        config (Mapping[str, Any]): Top-level mapping loaded from YAML.

    Returns:
        list[str]: Tokens for [`parse()`][codeserver.config.parser.parse].
    """
    argv: list[str] = []
    for name, value in config.items():
        if value is True or value is None:
            argv.append(f"--{name}")
        else:
            argv.append(f"--{name}={_format_value(value)}")
    return argv


def _write_default_config(path: Path) -> bool:
    """Write the default document to ``path`` unless it already exists.

    Returns:
        bool: True if the file was written.
    """
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(default_config_text(), encoding="utf-8")
    return True


def _load_yaml(path: Path) -> Any:
    """Read and parse ``path`` with ``yaml.safe_load``."""
    with path.open("rb") as f:
        return yaml.safe_load(f)


async def read_config_file(config_path: str | None = None, *, env: Environment) -> Args:
    """Read the YAML config file and return it as a parsed record.

    A default config file is written first if none exists at the resolved path.

    Args:
        config_path (str | None): Read from this path instead of
            ``$CODE_SERVER_CONFIG`` or the platform default.
        env (Environment): Environment snapshot.

    Returns:
        Args: The parsed record with ``config`` set to the resolved path.

    Raises:
        InvalidConfigError: The document is empty, a bare scalar or list, or
            not valid YAML.
        ArgumentError: A key or value was rejected by the parser.
    """
    path: Path = resolve_config_path(config_path, env)

    if await asyncio.to_thread(_write_default_config, path):
        logger.info("Wrote default config file to %s", humanize_path(path, env))

    try:
        config: Any = await asyncio.to_thread(_load_yaml, path)
    except yaml.YAMLError as exc:
        raise InvalidConfigError(f"error reading {path}: {exc}") from exc

    if config is None or not isinstance(config, dict):
        raise InvalidConfigError(f"invalid config: {config}")

    argv: list[str] = config_to_argv(config)
    logger.trace("Config file %s sets: %s", path, ", ".join(map(str, config)))

    args: Args = parse(argv, config_file=str(path))
    return args.with_values({Opt.CONFIG: str(path)})
