# topmark:header:start
#
#   project      : TokenSnap
#   file         : __init__.py
#   file_relpath : src/tokensnap/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap package.

TokenSnap reconciles token-tree snapshots for Rust sources. It compares
freshly produced token trees against recorded values (inline literals or
snapshot files) semantically, pretty-prints them, and rewrites inline
placeholders in place when asked to accept changes.
"""

from __future__ import annotations

from tokensnap.config.settings import Settings, current_settings, settings_scope
from tokensnap.lang.lexer import tokenize
from tokensnap.lang.tokens import TokenTree
from tokensnap.snapshot.normalize import tokens_equal
from tokensnap.snapshot.render import render, render_for_literal
from tokensnap.snapshot.session import CallSite, SnapshotMode, SnapshotSession

__all__ = [
    "CallSite",
    "Settings",
    "SnapshotMode",
    "SnapshotSession",
    "TokenTree",
    "current_settings",
    "render",
    "render_for_literal",
    "settings_scope",
    "tokenize",
    "tokens_equal",
]
