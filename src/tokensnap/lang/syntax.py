# topmark:header:start
#
#   project      : TokenSnap
#   file         : syntax.py
#   file_relpath : src/tokensnap/lang/syntax.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rust syntax trees, parsed with tree-sitter.

Token trees are parsed from their raw rendering with the ``tree-sitter-rust``
grammar and frozen into [`SyntaxNode`][tokensnap.lang.syntax.SyntaxNode]
trees:

* comments are dropped;
* literals, lifetimes and labels become single leaves holding their text;
* trailing commas before a closing delimiter are dropped, except inside
  macro token trees and in one-element tuples.

Two frozen trees compare equal when they have the same shape, kinds and leaf
texts. Byte offsets and field names do not take part in equality, so trees
parsed from differently formatted sources compare equal.

Two entry points mirror the parse tiers used for normalization:

* [`try_parse_file`][tokensnap.lang.syntax.try_parse_file]: a complete unit
  (inner attributes, items and item macros);
* [`try_parse_expr`][tokensnap.lang.syntax.try_parse_expr]: exactly one
  expression.

Both require a clean parse (no error or missing node) and return ``None``
otherwise. All walks over frozen trees use explicit stacks, so deeply nested
input never hits the interpreter recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final

import tree_sitter_rust
from tree_sitter import Language, Parser

from tokensnap.config.logging import TokensnapLogger, get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from tree_sitter import Node

    from tokensnap.lang.tokens import TokenTree

logger: TokensnapLogger = get_logger(__name__)

RUST: Final[Language] = Language(tree_sitter_rust.language())

KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else",
        "enum", "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop",
        "match", "mod", "move", "mut", "pub", "ref", "return", "self", "Self",
        "static", "struct", "super", "trait", "true", "type", "unsafe", "use",
        "where", "while", "abstract", "become", "box", "do", "final", "macro",
        "override", "priv", "typeof", "unsized", "virtual", "yield", "try",
    }
)  # fmt: skip

# Kinds frozen as one leaf holding their full source text.
ATOMIC_KINDS: Final[frozenset[str]] = frozenset(
    {
        "string_literal", "raw_string_literal", "char_literal", "boolean_literal",
        "integer_literal", "float_literal", "lifetime", "label", "metavariable",
    }
)  # fmt: skip

COMMENT_KINDS: Final[frozenset[str]] = frozenset({"line_comment", "block_comment"})

# Macro bodies: every token counts, trailing commas included.
OPAQUE_KINDS: Final[frozenset[str]] = frozenset(
    {"token_tree", "token_tree_pattern", "token_repetition", "token_repetition_pattern"}
)

TUPLE_KINDS: Final[frozenset[str]] = frozenset({"tuple_expression", "tuple_type", "tuple_pattern"})

ATTRIBUTE_KINDS: Final[frozenset[str]] = frozenset({"attribute_item", "inner_attribute_item"})

ITEM_KINDS: Final[frozenset[str]] = frozenset(
    {
        "const_item", "macro_invocation", "macro_definition", "mod_item", "foreign_mod_item",
        "struct_item", "union_item", "enum_item", "type_item", "function_item",
        "function_signature_item", "impl_item", "trait_item", "use_declaration",
        "extern_crate_declaration", "static_item", "attribute_item", "inner_attribute_item",
    }
)  # fmt: skip

CLOSERS: Final[frozenset[str]] = frozenset({")", "]", "}", ">", "|"})

_EXPR_PREFIX: Final[bytes] = b"const _: () = "

_PARSER: Final[Parser] = Parser(RUST)


class ParseError(Exception):
    """Text is not a clean parse at the requested tier."""


@dataclass(frozen=True, eq=False, slots=True)
class SyntaxNode:
    """Frozen syntax tree node.

    Attributes:
        kind (str): Grammar kind (``struct_item``) or token text for anonymous leaves (``{``).
        text (str): Source text of a leaf; empty for inner nodes.
        children (tuple[SyntaxNode, ...]): Child nodes in source order.
        field_name (str | None): Grammar field of this node in its parent.
        named (bool): False for anonymous tokens (keywords, punctuation).
        start (int): Start byte offset in the parsed text.
        end (int): End byte offset in the parsed text.
    """

    kind: str
    text: str = ""
    children: tuple[SyntaxNode, ...] = ()
    field_name: str | None = None
    named: bool = True
    start: int = 0
    end: int = 0

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def signature(self) -> tuple[tuple[str, str, int], ...]:
        """Preorder ``(kind, text, child count)`` triples; the basis of equality."""
        out: list[tuple[str, str, int]] = []
        stack: list[SyntaxNode] = [self]
        while stack:
            node = stack.pop()
            out.append((node.kind, node.text, len(node.children)))
            stack.extend(reversed(node.children))
        return tuple(out)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self is other or self.signature() == other.signature()

    def __hash__(self) -> int:
        return hash(self.signature())

    def leaves(self) -> Iterator[SyntaxNode]:
        """Yield the leaves below this node in source order."""
        stack: list[SyntaxNode] = [self]
        while stack:
            node = stack.pop()
            if node.children:
                stack.extend(reversed(node.children))
            else:
                yield node

    def first_leaf(self) -> SyntaxNode:
        node = self
        while node.children:
            node = node.children[0]
        return node

    def last_leaf(self) -> SyntaxNode:
        node = self
        while node.children:
            node = node.children[-1]
        return node

    def child(self, field_name: str) -> SyntaxNode | None:
        """Return the first child bound to grammar field ``field_name``."""
        for node in self.children:
            if node.field_name == field_name:
                return node
        return None

    def is_token(self, text: str) -> bool:
        """True for an anonymous leaf with this text."""
        return not self.named and not self.children and self.text == text


def _trim(kind: str, children: list[SyntaxNode]) -> tuple[SyntaxNode, ...]:
    if kind in OPAQUE_KINDS:
        return tuple(children)
    if kind in TUPLE_KINDS:
        elements = [c for c in children if c.named and c.kind not in ATTRIBUTE_KINDS]
        if len(elements) == 1:
            return tuple(children)
    kept: list[SyntaxNode] = []
    for i, node in enumerate(children):
        if node.is_token(","):
            following = children[i + 1] if i + 1 < len(children) else None
            if following is None or (following.is_leaf and following.text in CLOSERS):
                continue
        kept.append(node)
    return tuple(kept)


def freeze(root: Node, field_name: str | None = None) -> SyntaxNode:
    """Convert a tree-sitter node into a frozen `SyntaxNode` tree."""
    results: list[list[SyntaxNode]] = [[]]
    stack: list[tuple[Node, str | None, bool]] = [(root, field_name, False)]
    while stack:
        node, name, done = stack.pop()
        if done:
            children = results.pop()
            results[-1].append(
                SyntaxNode(
                    node.type,
                    "",
                    _trim(node.type, children),
                    name,
                    node.is_named,
                    node.start_byte,
                    node.end_byte,
                )
            )
            continue
        if node.child_count == 0 or node.type in ATOMIC_KINDS:
            raw = node.text
            results[-1].append(
                SyntaxNode(
                    node.type,
                    raw.decode("utf-8") if raw is not None else "",
                    (),
                    name,
                    node.is_named,
                    node.start_byte,
                    node.end_byte,
                )
            )
            continue
        stack.append((node, name, True))
        results.append([])
        pending = [
            (child, node.field_name_for_child(i), False)
            for i, child in enumerate(node.children)
            if child.type not in COMMENT_KINDS
        ]
        stack.extend(reversed(pending))
    return results[0][0]


def is_doc_attribute(node: SyntaxNode) -> bool:
    """True for a ``#[doc = ...]`` (or ``#![doc = ...]``) attribute.

    Doc comments are lexed into this name-value form. List forms such as
    ``#[doc(hidden)]`` change item visibility and are not documentation.
    """
    if node.kind not in ATTRIBUTE_KINDS:
        return False
    attr = next((c for c in node.children if c.kind == "attribute"), None)
    if attr is None or len(attr.children) < 2:
        return False
    path, eq = attr.children[0], attr.children[1]
    return path.kind == "identifier" and path.text == "doc" and eq.is_token("=")


def prune(root: SyntaxNode, drop: Callable[[SyntaxNode], bool]) -> SyntaxNode:
    """Return ``root`` without the subtrees matching ``drop``.

    Unchanged subtrees are shared with the input; when nothing is dropped the
    input itself is returned.
    """
    results: list[list[SyntaxNode]] = [[]]
    stack: list[tuple[SyntaxNode, bool]] = [(root, False)]
    while stack:
        node, done = stack.pop()
        if done:
            children = results.pop()
            same = len(children) == len(node.children) and all(
                a is b for a, b in zip(children, node.children)
            )
            results[-1].append(node if same else replace(node, children=tuple(children)))
            continue
        if not node.children:
            results[-1].append(node)
            continue
        stack.append((node, True))
        results.append([])
        stack.extend((c, False) for c in reversed(node.children) if not drop(c))
    return results[0][0]


def _parse(source: bytes) -> Node | None:
    root = _PARSER.parse(source).root_node
    return None if root.has_error else root


def _significant(nodes: list[Node]) -> list[Node]:
    return [n for n in nodes if n.type not in COMMENT_KINDS]


def _needs_semicolon(macro: Node) -> bool:
    body = macro.children[-1] if macro.children else None
    return body is None or body.child_count == 0 or body.children[0].type != "{"


def _check_items(root: Node) -> str | None:
    """Return why ``root`` is not a complete unit, or ``None`` when it is."""
    children = _significant(root.children)
    pending_semicolon = False
    for node in children:
        if node.type in (";", "empty_statement"):
            if not pending_semicolon:
                return "stray `;`"
            pending_semicolon = False
            continue
        if pending_semicolon:
            return "item macro without `;`"
        if node.type == "expression_statement":
            inner = _significant(node.named_children)
            if len(inner) != 1 or inner[0].type != "macro_invocation":
                return f"statement `{node.type}` at item level"
            terminated = node.children[-1].type == ";"
            pending_semicolon = not terminated and _needs_semicolon(inner[0])
        elif node.type == "macro_invocation":
            pending_semicolon = _needs_semicolon(node)
        elif node.type not in ITEM_KINDS:
            return f"`{node.type}` at item level"
    if pending_semicolon:
        return "item macro without `;`"
    if children and children[-1].type == "attribute_item":
        return "attribute without an item"
    return None


def parse_file(tokens: TokenTree) -> SyntaxNode:
    """Parse ``tokens`` as a complete unit.

    Args:
        tokens (TokenTree): The token tree.

    Returns:
        SyntaxNode: The ``source_file`` tree.

    Raises:
        ParseError: When the raw rendering is not a clean file of items.
    """
    root = _parse(str(tokens).encode("utf-8"))
    if root is None:
        raise ParseError("syntax error")
    reason = _check_items(root)
    if reason is not None:
        raise ParseError(reason)
    return freeze(root)


def parse_expr(tokens: TokenTree) -> SyntaxNode:
    """Parse ``tokens`` as exactly one expression.

    The expression is parsed as the value of ``const _: () = ...;`` and must
    span the inserted text exactly.

    Raises:
        ParseError: When the raw rendering is not a single clean expression.
    """
    body = str(tokens).encode("utf-8")
    if not body.strip():
        raise ParseError("empty input")
    root = _parse(_EXPR_PREFIX + body + b";")
    if root is None:
        raise ParseError("syntax error")
    items = _significant(root.named_children)
    if len(items) != 1 or items[0].type != "const_item":
        raise ParseError("trailing input after expression")
    value = items[0].child_by_field_name("value")
    start = len(_EXPR_PREFIX)
    if value is None or value.start_byte != start or value.end_byte != start + len(body):
        raise ParseError("input is not a single expression")
    return freeze(value)


def try_parse_file(tokens: TokenTree) -> SyntaxNode | None:
    """Return the complete-unit parse of ``tokens`` or ``None``."""
    try:
        return parse_file(tokens)
    except ParseError as exc:
        logger.trace("not a complete unit: %s", exc)
        return None


def try_parse_expr(tokens: TokenTree) -> SyntaxNode | None:
    """Return the expression parse of ``tokens`` or ``None``."""
    try:
        return parse_expr(tokens)
    except ParseError as exc:
        logger.trace("not an expression: %s", exc)
        return None
