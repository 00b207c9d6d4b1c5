# topmark:header:start
#
#   project      : CodeServer
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CodeServer project automation via Nox.

Sessions:
  - `qa`: Per-Python session that runs pytest.
  - `integration`: Socket and filesystem end-to-end tests only.
  - `lint`: Ruff lint.
  - `format_check`: Verify formatting (ruff).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
"""

from __future__ import annotations

import nox

PYTHONS: list[str] = ["3.10", "3.11", "3.12", "3.13"]

nox.options.sessions = ["lint", "qa"]


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run the test suite against the installed package."""
    session.install("-e", ".[test]")
    session.run("pytest", "-q", "tests", *session.posargs)


@nox.session
def integration(session: nox.Session) -> None:
    """Run only the tests that open real Unix sockets."""
    session.install("-e", ".[test]")
    session.run("pytest", "-vv", "-m", "integration", "tests", *session.posargs)


@nox.session
def lint(session: nox.Session) -> None:
    """Lint sources and tests with Ruff."""
    session.install("ruff")
    session.run("ruff", "check", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting with Ruff."""
    session.install("ruff")
    session.run("ruff", "format", "--check", ".")
