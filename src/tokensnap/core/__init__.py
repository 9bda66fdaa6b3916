# topmark:header:start
#
#   project      : TokenSnap
#   file         : __init__.py
#   file_relpath : src/tokensnap/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, dependency-free building blocks shared across TokenSnap."""

from __future__ import annotations
