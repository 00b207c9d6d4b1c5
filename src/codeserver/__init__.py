# topmark:header:start
#
#   project      : CodeServer
#   file         : __init__.py
#   file_relpath : src/codeserver/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CodeServer package.

Resolves code-server's command line arguments, YAML config file and
environment into one runtime configuration, and decides whether an invocation
should be forwarded to an already-running instance.
"""

from __future__ import annotations
