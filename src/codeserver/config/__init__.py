# topmark:header:start
#
#   project      : CodeServer
#   file         : __init__.py
#   file_relpath : src/codeserver/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Argument, config file and environment resolution for CodeServer.

Public surface:
    - `Args`: the immutable parsed record, and `merge_args()`.
    - `parse()`: the schema-driven token parser.
    - `read_config_file()`: load (or create) the YAML config file.
    - `set_defaults()`: fill in directories and the log level.
    - `bind_addr_from_all_sources()`: resolve the listener address.
    - `Environment`: the environment snapshot threaded through every resolver.
"""

from __future__ import annotations

from codeserver.config.args import Args, merge_args
from codeserver.config.bind import bind_addr_from_all_sources, parse_bind_addr
from codeserver.config.defaults import set_defaults
from codeserver.config.environment import Environment
from codeserver.config.loaders import read_config_file
from codeserver.config.parser import parse

__all__ = [
    "Args",
    "Environment",
    "bind_addr_from_all_sources",
    "merge_args",
    "parse",
    "parse_bind_addr",
    "read_config_file",
    "set_defaults",
]
