# topmark:header:start
#
#   project      : TokenSnap
#   file         : strip.py
#   file_relpath : src/tokensnap/lang/strip.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Doc-attribute removal for syntax trees.

`strip_docs` returns a copy of a tree without any ``#[doc = ...]`` attribute
(the form doc comments are lexed into), at every depth: items, fields,
variants, statements, match arms and inner attributes alike. Other attributes,
``#[doc(hidden)]`` included, are kept. Macro token trees are opaque and left
untouched.

Unchanged subtrees are shared with the input, so stripping a tree without
docs returns the tree itself.
"""

from __future__ import annotations

from tokensnap.lang.syntax import SyntaxNode, is_doc_attribute, prune


def strip_docs(node: SyntaxNode) -> SyntaxNode:
    """Return ``node`` without doc attributes.

    Args:
        node (SyntaxNode): A ``source_file`` tree or an expression tree.

    Returns:
        SyntaxNode: A structurally identical tree with all doc attributes removed.
    """
    return prune(node, is_doc_attribute)
