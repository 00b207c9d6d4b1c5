# topmark:header:start
#
#   project      : CodeServer
#   file         : types.py
#   file_relpath : src/codeserver/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight config types and aliases.

This module hosts stable, import-friendly definitions that other config modules
can depend on without risk of circular imports.

Exports:
    - `ValueKind`: the closed set of value kinds an option can carry.
    - `OptionalString`: three-state string value (absent / present without
      payload / present with payload).
    - `LogLevel`, `AuthType`: enum-typed option values.
    - `Addr`: a resolved host/port pair.

Design notes:
    - Keep side effects out of this module; it stays stdlib-only so it is safe
      for low-level imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValueKind(str, Enum):
    """Tag describing how an option's value is captured and coerced."""

    BOOLEAN = "boolean"
    STRING = "string"
    STRING_LIST = "string[]"
    OPTIONAL_STRING = "optional string"
    ENUM = "enum"
    NUMBER = "number"


@dataclass(frozen=True)
class OptionalString:
    """A string option that is meaningful even without a value.

    ``OptionalString()`` means the flag was given without a payload (e.g. a bare
    ``--cert``), which is distinct from ``OptionalString("")`` (``--cert=``) and
    from the option being absent from the record altogether.

    Attributes:
        value (str | None): The payload, or None when the flag had no value.
    """

    value: str | None = None


class LogLevel(str, Enum):
    """Accepted values for ``--log`` and ``$LOG_LEVEL``."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def from_value(cls, value: str | None) -> LogLevel | None:
        """Return the member whose value is ``value``, or None when unmatched."""
        if value is None:
            return None
        for member in cls:
            if member.value == value:
                return member
        return None


class AuthType(str, Enum):
    """Accepted values for ``--auth``."""

    PASSWORD = "password"
    NONE = "none"


@dataclass(frozen=True)
class Addr:
    """A listener address.

    Attributes:
        host (str): Hostname or IP literal (IPv6 without brackets).
        port (int): TCP port in the range 0-65535.
    """

    host: str
    port: int

    def as_tuple(self) -> tuple[str, int]:
        """Return the address as a ``(host, port)`` pair."""
        return self.host, self.port
