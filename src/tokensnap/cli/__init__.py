# topmark:header:start
#
#   project      : TokenSnap
#   file         : __init__.py
#   file_relpath : src/tokensnap/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command-line interface for TokenSnap (built on Click)."""

from __future__ import annotations
