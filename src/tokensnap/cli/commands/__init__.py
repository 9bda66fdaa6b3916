# topmark:header:start
#
#   project      : TokenSnap
#   file         : __init__.py
#   file_relpath : src/tokensnap/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap CLI subcommands."""

from __future__ import annotations
