# topmark:header:start
#
#   project      : CodeServer
#   file         : schema.py
#   file_relpath : src/codeserver/config/schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The option schema: one catalog for both the command line and ``config.yaml``.

Every recognized option is described by an [`OptionSpec`][codeserver.config.schema.OptionSpec]
carrying its [`ValueKind`][codeserver.config.types.ValueKind], an optional short flag,
whether the value is a filesystem path, a help description, and visibility flags.

The catalog is immutable and built at import time. Options without a description
are accepted but hidden from help output; ``beta`` options are only listed when
``$CS_BETA`` is set in the environment snapshot passed to the help helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from codeserver.config.keys import Opt
from codeserver.config.logging import get_logger
from codeserver.config.types import AuthType, LogLevel, ValueKind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from enum import Enum

    from codeserver.config.environment import Environment
    from codeserver.config.logging import CodeServerLogger

logger: CodeServerLogger = get_logger(__name__)


@dataclass(frozen=True)
class OptionSpec:
    """Description of a single option.

    Attributes:
        name (str): Long option name (also the config file key).
        kind (ValueKind): How the value is captured and coerced.
        choices (type[Enum] | None): Accepted values for ``ValueKind.ENUM`` options.
        short (str | None): Short flag without the leading dash.
        path (bool): Whether the value is resolved to an absolute path.
        description (str | None): Help text; options without one are hidden.
        beta (bool): Only listed in help output when ``$CS_BETA`` is set.
        config_only (bool): Only accepted from the config file.
    """

    name: str
    kind: ValueKind
    choices: type[Enum] | None = None
    short: str | None = None
    path: bool = False
    description: str | None = None
    beta: bool = False
    config_only: bool = False

    @property
    def choice_values(self) -> tuple[str, ...]:
        """Accepted raw values for enum options (empty for other kinds)."""
        if self.choices is None:
            return ()
        return tuple(str(member.value) for member in self.choices)


_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec(
        Opt.AUTH,
        ValueKind.ENUM,
        choices=AuthType,
        description="The type of authentication to use.",
    ),
    OptionSpec(
        Opt.PASSWORD,
        ValueKind.STRING,
        description=(
            "The password for password authentication "
            "(can only be passed in via $PASSWORD or the config file)."
        ),
        config_only=True,
    ),
    OptionSpec(
        Opt.CERT,
        ValueKind.OPTIONAL_STRING,
        path=True,
        description="Path to certificate. A self signed certificate is generated if none is provided.",
    ),
    OptionSpec(
        Opt.CERT_HOST,
        ValueKind.STRING,
        description="Hostname to use when generating a self signed certificate.",
    ),
    OptionSpec(
        Opt.CERT_KEY,
        ValueKind.STRING,
        path=True,
        description="Path to certificate key when using non-generated cert.",
    ),
    OptionSpec(Opt.DISABLE_TELEMETRY, ValueKind.BOOLEAN, description="Disable telemetry."),
    OptionSpec(Opt.HELP, ValueKind.BOOLEAN, short="h", description="Show this output."),
    OptionSpec(Opt.JSON, ValueKind.BOOLEAN),
    OptionSpec(
        Opt.OPEN,
        ValueKind.BOOLEAN,
        description="Open in browser on startup. Does not work remotely.",
    ),
    OptionSpec(
        Opt.BIND_ADDR,
        ValueKind.STRING,
        description="Address to bind to in host:port. You can also use $PORT to override the port.",
    ),
    OptionSpec(
        Opt.CONFIG,
        ValueKind.STRING,
        description="Path to yaml config file. Every flag maps directly to a key in the config file.",
    ),
    # Deprecated by bind-addr; still accepted but hidden.
    OptionSpec(Opt.HOST, ValueKind.STRING),
    OptionSpec(Opt.PORT, ValueKind.NUMBER),
    OptionSpec(
        Opt.SOCKET,
        ValueKind.STRING,
        path=True,
        description="Path to a socket (bind-addr will be ignored).",
    ),
    OptionSpec(
        Opt.VERSION,
        ValueKind.BOOLEAN,
        short="v",
        description="Display version information.",
    ),
    OptionSpec(
        Opt.USER_DATA_DIR,
        ValueKind.STRING,
        path=True,
        description="Path to the user data directory.",
    ),
    OptionSpec(
        Opt.EXTENSIONS_DIR,
        ValueKind.STRING,
        path=True,
        description="Path to the extensions directory.",
    ),
    OptionSpec(Opt.BUILTIN_EXTENSIONS_DIR, ValueKind.STRING, path=True),
    OptionSpec(Opt.EXTRA_EXTENSIONS_DIR, ValueKind.STRING_LIST, path=True),
    OptionSpec(Opt.EXTRA_BUILTIN_EXTENSIONS_DIR, ValueKind.STRING_LIST, path=True),
    OptionSpec(
        Opt.LIST_EXTENSIONS,
        ValueKind.BOOLEAN,
        description="List installed VS Code extensions.",
    ),
    OptionSpec(
        Opt.FORCE,
        ValueKind.BOOLEAN,
        description="Avoid prompts when installing VS Code extensions.",
    ),
    OptionSpec(
        Opt.INSTALL_EXTENSION,
        ValueKind.STRING_LIST,
        description=(
            "Install or update a VS Code extension by id or vsix. "
            "The identifier of an extension is `${publisher}.${name}`.\n"
            "To install a specific version provide `@${version}`. "
            "For example: 'vscode.csharp@1.2.3'."
        ),
    ),
    OptionSpec(
        Opt.ENABLE_PROPOSED_API,
        ValueKind.STRING_LIST,
        description=(
            "Enable proposed API features for extensions. "
            "Can receive one or more extension IDs to enable individually."
        ),
    ),
    OptionSpec(
        Opt.UNINSTALL_EXTENSION,
        ValueKind.STRING_LIST,
        description="Uninstall a VS Code extension by id.",
    ),
    OptionSpec(
        Opt.SHOW_VERSIONS,
        ValueKind.BOOLEAN,
        description="Show VS Code extension versions.",
    ),
    OptionSpec(
        Opt.PROXY_DOMAIN,
        ValueKind.STRING_LIST,
        description="Domain used for proxying ports.",
    ),
    OptionSpec(
        Opt.NEW_WINDOW,
        ValueKind.BOOLEAN,
        short="n",
        description="Force to open a new window.",
    ),
    OptionSpec(
        Opt.REUSE_WINDOW,
        ValueKind.BOOLEAN,
        short="r",
        description="Force to open a file or folder in an already opened window.",
    ),
    OptionSpec(Opt.LOCALE, ValueKind.STRING),
    OptionSpec(Opt.LOG, ValueKind.ENUM, choices=LogLevel),
    OptionSpec(
        Opt.VERBOSE,
        ValueKind.BOOLEAN,
        short="vvv",
        description="Enable verbose logging.",
    ),
    OptionSpec(
        Opt.LINK,
        ValueKind.OPTIONAL_STRING,
        description="""
            Securely bind code-server via Coder Cloud with the passed name. You'll get a URL like
            https://myname.coder-cloud.com at which you can easily access your code-server instance.
            Authorization is done via GitHub.
            This is presently beta and requires being accepted for testing.
            See https://github.com/cdr/code-server/discussions/2137
        """,
        beta=True,
    ),
)


def _build_catalog(specs: tuple[OptionSpec, ...]) -> Mapping[str, OptionSpec]:
    """Index ``specs`` by name, rejecting duplicate names and short flags."""
    by_name: dict[str, OptionSpec] = {}
    shorts: set[str] = set()
    for spec in specs:
        if spec.name in by_name:
            raise ValueError(f"Duplicate option name: {spec.name}")
        if spec.short is not None:
            if spec.short in shorts:
                raise ValueError(f"Duplicate short flag -{spec.short} for --{spec.name}")
            shorts.add(spec.short)
        if (spec.kind is ValueKind.ENUM) != (spec.choices is not None):
            raise ValueError(f"Option --{spec.name}: choices are required for (and only for) enums")
        by_name[spec.name] = spec
    return MappingProxyType(by_name)


OPTIONS: Mapping[str, OptionSpec] = _build_catalog(_OPTIONS)


def get_option(name: str) -> OptionSpec | None:
    """Return the spec for the long option ``name``, or None if unknown."""
    return OPTIONS.get(name)


def find_short(short: str) -> OptionSpec | None:
    """Return the spec whose short flag is ``short`` (without dash), or None."""
    for spec in OPTIONS.values():
        if spec.short == short:
            return spec
    return None


def visible_options(env: Environment) -> list[OptionSpec]:
    """Return the options listed in help output, in catalog order.

    Options without a description are always hidden. Beta options are hidden
    unless ``env.beta`` is set.

    Args:
        env (Environment): The environment snapshot providing the beta toggle.

    Returns:
        list[OptionSpec]: The visible option specs.
    """
    return [spec for spec in OPTIONS.values() if spec.description and (env.beta or not spec.beta)]


def option_descriptions(env: Environment) -> list[str]:
    """Render one help entry per visible option.

    Each entry holds the right-aligned short flag, the long flag and the
    description aligned in a column. Continuation lines of multi-line
    descriptions are indented under the description column. Enum options list
    their accepted values in brackets.

    Column widths are computed over every described option (beta ones
    included) so the layout does not shift when ``$CS_BETA`` is toggled.

    Args:
        env (Environment): The environment snapshot providing the beta toggle.

    Returns:
        list[str]: Rendered entries; an entry may span several lines.
    """
    described: list[OptionSpec] = [spec for spec in OPTIONS.values() if spec.description]
    long_width: int = max((len(spec.name) for spec in described), default=0)
    short_width: int = max((len(spec.short) for spec in described if spec.short), default=0)

    entries: list[str] = []
    for spec in visible_options(env):
        short: str = spec.short or ""
        head: str = " " * (short_width - len(short))
        head += f"-{short}" if short else " "
        head += f" --{spec.name} "

        lines: list[str] = []
        for i, line in enumerate((spec.description or "").strip().split("\n")):
            line = line.strip()
            if i == 0:
                lines.append(" " * (long_width - len(spec.name)) + line)
            else:
                lines.append(" " * (long_width + short_width + 6) + line)

        entry: str = head + "\n".join(lines)
        if spec.kind is ValueKind.ENUM:
            entry += f" [{', '.join(spec.choice_values)}]"
        entries.append(entry)
    return entries
