# topmark:header:start
#
#   project      : CodeServer
#   file         : test_loaders.py
#   file_relpath : tests/config/test_loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for reading (and creating) the YAML config file."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import TYPE_CHECKING

import pytest
import yaml

from codeserver.config.errors import InvalidConfigError, MissingValueError, UnknownOptionError
from codeserver.config.keys import Opt
from codeserver.config.loaders import (
    config_to_argv,
    default_config_text,
    generate_password,
    read_config_file,
    resolve_config_path,
)
from codeserver.config.types import OptionalString
from tests.conftest import parametrize, write_config

if TYPE_CHECKING:
    from pathlib import Path

    from codeserver.config.environment import Environment


def test_generate_password() -> None:
    """Passwords are random lowercase hex of the requested length."""
    pw = generate_password()
    assert re.fullmatch(r"[0-9a-f]{24}", pw)
    assert generate_password() != pw


def test_default_config_text_is_valid_yaml() -> None:
    """The default document parses to the expected mapping."""
    assert yaml.safe_load(default_config_text("secret")) == {
        "bind-addr": "127.0.0.1:8080",
        "auth": "password",
        "password": "secret",
        "cert": False,
    }


def test_config_to_argv() -> None:
    """YAML scalars are rendered as command line tokens."""
    assert config_to_argv(
        {"verbose": True, "open": False, "cert": None, "port": 9000, "auth": "none"}
    ) == ["--verbose", "--open=false", "--cert", "--port=9000", "--auth=none"]


def test_resolve_config_path_precedence(env: Environment, tmp_path: Path) -> None:
    """Explicit path > ``$CODE_SERVER_CONFIG`` > platform default."""
    default = env.home / ".config" / "code-server" / "config.yaml"
    assert resolve_config_path(None, env) == default

    from_env = replace(env, config_path=str(tmp_path / "env.yaml"))
    assert resolve_config_path(None, from_env) == tmp_path / "env.yaml"
    assert resolve_config_path(str(tmp_path / "cli.yaml"), from_env) == tmp_path / "cli.yaml"


@pytest.mark.asyncio
async def test_read_config_file_writes_default(
    env: Environment, caplog: pytest.LogCaptureFixture
) -> None:
    """A missing config file is created with a random password."""
    caplog.set_level(logging.INFO)
    args = await read_config_file(env=env)

    path = env.home / ".config" / "code-server" / "config.yaml"
    assert path.is_file()
    assert args[Opt.CONFIG] == str(path)
    assert args[Opt.BIND_ADDR] == "127.0.0.1:8080"
    assert args[Opt.AUTH] == "password"
    assert re.fullmatch(r"[0-9a-f]{24}", args[Opt.PASSWORD])
    assert not args.is_set(Opt.CERT)
    assert "Wrote default config file to ~/.config/code-server/config.yaml" in caplog.text


@pytest.mark.asyncio
async def test_read_config_file_never_overwrites(env: Environment) -> None:
    """An existing file is read as is."""
    path = write_config(env, "auth: none\n")
    args = await read_config_file(env=env)
    assert path.read_text(encoding="utf-8") == "auth: none\n"
    assert dict(args) == {Opt.AUTH: "none", Opt.CONFIG: str(path)}


@pytest.mark.asyncio
async def test_read_config_file_value_kinds(env: Environment) -> None:
    """Every YAML scalar shape maps onto the matching value kind."""
    write_config(
        env,
        "bind-addr: 0.0.0.0:9000\n"
        "verbose: true\n"
        "open: false\n"
        "port: 9001\n"
        "link:\n"
        "proxy-domain: example.com\n",
    )
    args = await read_config_file(env=env)
    assert args[Opt.BIND_ADDR] == "0.0.0.0:9000"
    assert args[Opt.VERBOSE] is True
    assert not args.is_set(Opt.OPEN)
    assert args[Opt.PORT] == 9001
    assert args[Opt.LINK] == OptionalString()
    assert args[Opt.PROXY_DOMAIN] == ("example.com",)


@pytest.mark.asyncio
async def test_read_config_file_explicit_path(env: Environment, tmp_path: Path) -> None:
    """An explicit path is created and read instead of the default location."""
    path = tmp_path / "nested" / "custom.yaml"
    args = await read_config_file(str(path), env=env)
    assert path.is_file()
    assert args[Opt.CONFIG] == str(path)
    assert not (env.home / ".config" / "code-server" / "config.yaml").exists()


@parametrize("text", ["", "- a\n- b\n", "just a string\n", "auth: [\n"])
@pytest.mark.asyncio
async def test_read_config_file_invalid_documents(env: Environment, text: str) -> None:
    """Empty, list, scalar and malformed documents are rejected."""
    write_config(env, text)
    with pytest.raises(InvalidConfigError):
        await read_config_file(env=env)


@pytest.mark.asyncio
async def test_read_config_file_unknown_key_names_file(env: Environment) -> None:
    """Parse errors carry the config file path."""
    path = write_config(env, "colour: blue\n")
    with pytest.raises(UnknownOptionError) as excinfo:
        await read_config_file(env=env)
    assert str(excinfo.value) == f"error reading {path}: Unknown option --colour=blue"


@pytest.mark.asyncio
async def test_read_config_file_invalid_encoding(env: Environment) -> None:
    """Bytes that are not valid UTF-8 are a config error, not a decode crash."""
    path = write_config(env, "")
    path.write_bytes(b"auth: \xff\xfe\n")
    with pytest.raises(InvalidConfigError, match=re.escape(f"error reading {path}")):
        await read_config_file(env=env)


@pytest.mark.asyncio
async def test_read_config_file_empty_path_value(env: Environment) -> None:
    """An empty string for a path option is a missing value, not the working directory."""
    path = write_config(env, 'user-data-dir: ""\n')
    with pytest.raises(MissingValueError) as excinfo:
        await read_config_file(env=env)
    assert str(excinfo.value) == f"error reading {path}: --user-data-dir requires a value"
