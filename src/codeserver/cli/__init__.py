# topmark:header:start
#
#   project      : CodeServer
#   file         : __init__.py
#   file_relpath : src/codeserver/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command line shell for CodeServer."""

from __future__ import annotations
