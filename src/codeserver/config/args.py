# topmark:header:start
#
#   project      : CodeServer
#   file         : args.py
#   file_relpath : src/codeserver/config/args.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The parsed configuration record.

[`Args`][codeserver.config.args.Args] is the typed result of interpreting one
token sequence against the option schema. It is an immutable mapping from
option name to value plus an ordered tuple of positional arguments.

Value representation per [`ValueKind`][codeserver.config.types.ValueKind]:

| Kind              | Python value                        |
| ----------------- | ----------------------------------- |
| ``BOOLEAN``       | ``True``                            |
| ``STRING``        | ``str``                             |
| ``STRING_LIST``   | ``tuple[str, ...]`` (order, dupes)  |
| ``OPTIONAL_STRING`` | ``OptionalString``                |
| ``ENUM``          | ``str`` (the raw accepted value)    |
| ``NUMBER``        | ``int``                             |

A key that is absent means "unset", which is distinct from a falsy value.
Records are never mutated; helpers such as `with_values()` return new records.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from codeserver.config.schema import get_option
from codeserver.config.types import OptionalString

if TYPE_CHECKING:
    from collections.abc import Iterable


class Args(Mapping[str, Any]):
    """Immutable configuration record.

    Args:
        values (Mapping[str, Any] | None): Option values keyed by option name.
        positional (Iterable[str]): Non-flag arguments, in order.

    Raises:
        KeyError: If a key is not a known option name.
    """

    __slots__ = ("_positional", "_values")

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        positional: Iterable[str] = (),
    ) -> None:
        data: dict[str, Any] = {}
        for key, value in (values or {}).items():
            if get_option(key) is None:
                raise KeyError(f"Not an option: {key}")
            data[key] = tuple(value) if isinstance(value, list) else value
        self._values: dict[str, Any] = data
        self._positional: tuple[str, ...] = tuple(positional)

    # --- Mapping protocol ---

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Args):
            return NotImplemented
        return self._values == other._values and self._positional == other._positional

    def __hash__(self) -> int:
        return hash((frozenset(self._values.items()), self._positional))

    def __repr__(self) -> str:
        shown: dict[str, Any] = {
            k: ("<redacted>" if k == "password" else v) for k, v in self._values.items()
        }
        return f"Args({shown!r}, positional={list(self._positional)!r})"

    # --- Accessors ---

    @property
    def positional(self) -> tuple[str, ...]:
        """Positional (non-flag) arguments in the order given."""
        return self._positional

    def is_set(self, key: str) -> bool:
        """Return True if ``key`` is present in the record (whatever its value)."""
        return key in self._values

    # --- Derivation (always returns a new record) ---

    def with_values(self, changes: Mapping[str, Any]) -> Args:
        """Return a copy with ``changes`` layered over the current values."""
        merged: dict[str, Any] = dict(self._values)
        merged.update(changes)
        return Args(merged, self._positional)

    def without(self, *keys: str) -> Args:
        """Return a copy with ``keys`` removed (missing keys are ignored)."""
        return Args(
            {k: v for k, v in self._values.items() if k not in keys},
            self._positional,
        )

    def to_argv(self) -> list[str]:
        """Re-serialize the record as ``--key=value`` tokens.

        Booleans become a bare ``--key``; list values repeat the flag per item;
        an `OptionalString` without payload becomes a bare ``--key``. Positional
        arguments follow a ``--`` separator so they are never read as flags.

        Returns:
            list[str]: Tokens that parse back into an equal record.
        """
        argv: list[str] = []
        for key, value in self._values.items():
            if value is True:
                argv.append(f"--{key}")
            elif isinstance(value, tuple):
                argv.extend(f"--{key}={item}" for item in value)
            elif isinstance(value, OptionalString):
                argv.append(f"--{key}" if value.value is None else f"--{key}={value.value}")
            else:
                argv.append(f"--{key}={value}")
        if self._positional:
            argv.append("--")
            argv.extend(self._positional)
        return argv


def merge_args(config_args: Args, cli_args: Args) -> Args:
    """Layer ``cli_args`` over ``config_args``.

    Command line values win key by key. Positional arguments only come from the
    command line record.

    Args:
        config_args (Args): Record derived from the config file.
        cli_args (Args): Record derived from the process arguments.

    Returns:
        Args: The merged record.
    """
    merged: dict[str, Any] = dict(config_args)
    merged.update(cli_args)
    return Args(merged, cli_args.positional)
