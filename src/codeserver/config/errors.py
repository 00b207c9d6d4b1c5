# topmark:header:start
#
#   project      : CodeServer
#   file         : errors.py
#   file_relpath : src/codeserver/config/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised while resolving arguments and configuration.

These are framework-agnostic: the CLI shell ([`codeserver.cli.errors`][codeserver.cli.errors])
maps them to Click exceptions with exit codes.

Parse errors raised while reading a config file carry the file's path and
prefix it into the message so the user knows which source is at fault.
"""

from __future__ import annotations


class ConfigResolutionError(Exception):
    """Base class for all resolution errors."""


class ArgumentError(ConfigResolutionError):
    """A token sequence could not be parsed against the option schema.

    Attributes:
        option (str | None): The offending option name (or raw token), if known.
        config_file (str | None): Path of the config file the tokens came from.
    """

    def __init__(
        self,
        message: str,
        *,
        option: str | None = None,
        config_file: str | None = None,
    ) -> None:
        self.option = option
        self.config_file = config_file
        if config_file:
            message = f"error reading {config_file}: {message}"
        super().__init__(message)


class UnknownOptionError(ArgumentError):
    """The flag name or short flag is not in the schema."""


class RestrictedOptionError(ArgumentError):
    """A config-file-only option was used on the command line."""


class MissingValueError(ArgumentError):
    """A value-carrying option was given without a value."""


class InvalidNumberError(ArgumentError):
    """A numeric option was given non-numeric text."""


class InvalidEnumValueError(ArgumentError):
    """An enum option was given a value outside its accepted set."""


class InvalidConfigError(ConfigResolutionError):
    """The config file is empty, a bare scalar, or not valid YAML."""


class InvalidBindAddressError(ConfigResolutionError):
    """A ``host[:port]`` string could not be interpreted."""


class OpenRequestError(ConfigResolutionError):
    """The paths given cannot be opened in an existing instance."""
