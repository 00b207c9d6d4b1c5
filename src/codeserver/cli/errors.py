# topmark:header:start
#
#   project      : CodeServer
#   file         : errors.py
#   file_relpath : src/codeserver/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the CodeServer CLI.

Usage:
    Core resolution errors ([`codeserver.config.errors`][codeserver.config.errors])
    are converted with `to_cli_error()` so Click prints a standardized message
    and exits with the matching code.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import aiohttp
import click

from codeserver.cli.exit_codes import ExitCode
from codeserver.config.errors import (
    ArgumentError,
    ConfigResolutionError,
    OpenRequestError,
)


class CodeServerError(click.ClickException):
    """Base class for all CodeServer CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (no color)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class CodeServerUsageError(CodeServerError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class CodeServerConfigError(CodeServerError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class CodeServerIOError(CodeServerError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class CodeServerUnavailableError(CodeServerError):
    """Error when a running instance could not be reached."""

    exit_code = ExitCode.UNAVAILABLE


def to_cli_error(exc: Exception) -> CodeServerError:
    """Map a core exception to the CLI error carrying the right exit code.

    Args:
        exc (Exception): The exception raised during resolution.

    Returns:
        CodeServerError: The Click exception to raise instead.
    """
    if isinstance(exc, (ArgumentError, OpenRequestError)):
        return CodeServerUsageError(str(exc))
    if isinstance(exc, ConfigResolutionError):
        return CodeServerConfigError(str(exc))
    if isinstance(exc, aiohttp.ClientError):
        return CodeServerUnavailableError(f"Cannot reach the running instance: {exc}")
    if isinstance(exc, OSError):
        return CodeServerIOError(str(exc))
    return CodeServerError(str(exc))
