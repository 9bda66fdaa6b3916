# topmark:header:start
#
#   project      : TokenSnap
#   file         : __init__.py
#   file_relpath : src/tokensnap/lang/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rust language support: lexer, token trees, syntax trees, printer.

* `tokensnap.lang.tokens`: the token tree model and its raw rendering;
* `tokensnap.lang.lexer`: text to token trees (doc comments become ``doc`` attributes);
* `tokensnap.lang.syntax`: tree-sitter syntax trees and the complete-unit /
  expression parse tiers;
* `tokensnap.lang.strip`: doc-attribute removal;
* `tokensnap.lang.layout` / `tokensnap.lang.printer`: canonical formatting.
"""

from __future__ import annotations
