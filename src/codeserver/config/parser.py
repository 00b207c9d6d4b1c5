# topmark:header:start
#
#   project      : CodeServer
#   file         : parser.py
#   file_relpath : src/codeserver/config/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Schema-driven token parser.

`parse()` consumes a flat sequence of string tokens (the process arguments, or
tokens synthesized from a config file) in a single left-to-right pass and
returns an [`Args`][codeserver.config.args.Args] record.

Token rules:
    - ``--`` ends option parsing; every later token (a second ``--`` included)
      is positional.
    - ``--key=value`` / ``--key value`` for long options, ``-x`` for short flags.
    - Boolean options never consume the next token.
    - Other options consume the next token only if it does not start with ``-``.

Coercion is dispatched on the option's [`ValueKind`][codeserver.config.types.ValueKind]
through one function per kind (see ``_COERCERS``).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Callable, Final

from codeserver.config.args import Args
from codeserver.config.errors import (
    InvalidEnumValueError,
    InvalidNumberError,
    MissingValueError,
    RestrictedOptionError,
    UnknownOptionError,
)
from codeserver.config.logging import get_logger
from codeserver.config.schema import find_short, get_option
from codeserver.config.types import OptionalString, ValueKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from codeserver.config.logging import CodeServerLogger
    from codeserver.config.schema import OptionSpec

logger: CodeServerLogger = get_logger(__name__)

END_OF_OPTIONS: Final[str] = "--"

# Literal value that leaves an optional-string or boolean option unset, so a
# config file can switch a feature off (e.g. ``cert: false``).
DISABLED_VALUE: Final[str] = "false"


# --- Coercion, one function per value kind ---

_Coercer = Callable[["OptionSpec", str, dict[str, Any], "str | None"], None]


def _coerce_string(spec: OptionSpec, value: str, out: dict[str, Any], _cfg: str | None) -> None:
    out[spec.name] = value


def _coerce_string_list(
    spec: OptionSpec, value: str, out: dict[str, Any], _cfg: str | None
) -> None:
    current: list[str] = out.setdefault(spec.name, [])
    current.append(value)


def _coerce_number(spec: OptionSpec, value: str, out: dict[str, Any], cfg: str | None) -> None:
    try:
        out[spec.name] = int(value, 10)
    except ValueError:
        raise InvalidNumberError(
            f"--{spec.name} must be a number", option=spec.name, config_file=cfg
        ) from None


def _coerce_optional_string(
    spec: OptionSpec, value: str, out: dict[str, Any], _cfg: str | None
) -> None:
    out[spec.name] = OptionalString(value)


def _coerce_enum(spec: OptionSpec, value: str, out: dict[str, Any], cfg: str | None) -> None:
    accepted: tuple[str, ...] = spec.choice_values
    if value not in accepted:
        raise InvalidEnumValueError(
            f"--{spec.name} valid values: [{', '.join(accepted)}]",
            option=spec.name,
            config_file=cfg,
        )
    out[spec.name] = value


_COERCERS: Final[dict[ValueKind, _Coercer]] = {
    ValueKind.STRING: _coerce_string,
    ValueKind.STRING_LIST: _coerce_string_list,
    ValueKind.NUMBER: _coerce_number,
    ValueKind.OPTIONAL_STRING: _coerce_optional_string,
    ValueKind.ENUM: _coerce_enum,
}


def _lookup(token: str, config_file: str | None) -> tuple[OptionSpec, str | None]:
    """Resolve a flag token to its spec and inline value (if any).

    Raises:
        UnknownOptionError: If the flag is not in the schema.
    """
    spec: OptionSpec | None
    value: str | None = None
    if token.startswith("--"):
        key, sep, inline = token[2:].partition("=")
        if sep:
            value = inline
        spec = get_option(key)
    else:
        spec = find_short(token[1:])

    if spec is None:
        raise UnknownOptionError(f"Unknown option {token}", option=token, config_file=config_file)
    return spec, value


def parse(argv: Sequence[str], *, config_file: str | None = None) -> Args:
    """Parse ``argv`` against the option schema.

    Args:
        argv (Sequence[str]): Tokens to parse, without the program name.
        config_file (str | None): Path of the config file the tokens were
            synthesized from. Unlocks config-only options and prefixes error
            messages with the path.

    Returns:
        Args: The parsed record.

    Raises:
        UnknownOptionError: Unrecognized long or short flag.
        RestrictedOptionError: Config-only option outside config-file context.
        MissingValueError: Value-carrying option without a value.
        InvalidNumberError: Numeric option with non-numeric text.
        InvalidEnumValueError: Enum option with a value outside its set.
    """
    values: dict[str, Any] = {}
    positional: list[str] = []
    ended: bool = False

    i: int = 0
    while i < len(argv):
        token: str = argv[i]
        i += 1

        if not ended and token == END_OF_OPTIONS:
            ended = True
            continue

        if ended or not token.startswith("-"):
            positional.append(token)
            continue

        spec, value = _lookup(token, config_file)

        if spec.config_only and not config_file:
            raise RestrictedOptionError(
                f"--{spec.name} can only be set in the config file "
                f"or passed in via ${spec.name.upper()}",
                option=spec.name,
            )

        if spec.kind is ValueKind.BOOLEAN:
            if value != DISABLED_VALUE:
                values[spec.name] = True
            continue

        # Might already have a value from the --long=value form. Otherwise a
        # value is only taken if it does not look like an option.
        if value is None and i < len(argv) and not argv[i].startswith("-"):
            value = argv[i]
            i += 1

        # An empty inline value (``--key=``) counts as no value, except that an
        # optional string keeps it as an empty payload.
        if not value:
            if spec.kind is ValueKind.OPTIONAL_STRING:
                values[spec.name] = OptionalString(value)
                continue
            raise MissingValueError(
                f"--{spec.name} requires a value", option=spec.name, config_file=config_file
            )

        if spec.kind is ValueKind.OPTIONAL_STRING and value == DISABLED_VALUE:
            continue

        if spec.path:
            value = os.path.abspath(value)

        _COERCERS[spec.kind](spec, value, values, config_file)

    args = Args(values, positional)
    logger.debug("parsed command line: %r", args)
    return args

