# topmark:header:start
#
#   project      : CodeServer
#   file         : __main__.py
#   file_relpath : src/codeserver/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running CodeServer via ``python -m codeserver``.

It delegates directly to :func:`codeserver.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how it is launched.
"""

from __future__ import annotations

from codeserver.cli.main import cli

if __name__ == "__main__":
    cli()
