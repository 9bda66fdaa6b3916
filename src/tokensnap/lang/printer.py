# topmark:header:start
#
#   project      : TokenSnap
#   file         : printer.py
#   file_relpath : src/tokensnap/lang/printer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pretty printer from syntax trees to canonical Rust source text.

The printer builds a [layout document][tokensnap.lang.layout] for a tree and
renders it at 100 columns with 4-space indentation. Output re-parses to an
equal tree:

* items and statements are separated by single newlines;
* block bodies always open on a new line (``fn f() {\\n    x\\n}``), empty
  blocks print as ``{}``;
* named fields and enum variants always print one per line, with a trailing
  comma; argument and parameter lists break one element per line only when
  they do not fit;
* where clauses print one predicate per line;
* simple doc attributes on their own line print as ``///`` / ``//!`` comments;
* macro bodies and attribute arguments are token streams and go through
  `tokens_to_str`, which only removes spaces where re-lexing yields the same
  tokens.

Between two adjacent nodes the printer writes one space unless the pair is
glued (``a.b``, ``f(x)``, ``&mut x``, ``x?``), see `_tight`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Final

from tokensnap.lang.layout import (
    HARDLINE,
    LINE,
    NIL,
    Doc,
    IfBreak,
    concat,
    delimited,
    group,
    join,
    nest,
    render,
    text,
)
from tokensnap.lang.lexer import escape_string, tokenize, unescape_string
from tokensnap.lang.syntax import ATTRIBUTE_KINDS, CLOSERS, TUPLE_KINDS, is_doc_attribute
from tokensnap.lang.tokens import Delimiter, Group, Ident, Punct, TokenNode, TokenTree

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokensnap.lang.syntax import SyntaxNode


# --- token streams ----------------------------------------------------------------------


def _glued(
    prev: TokenNode, cur: TokenNode, before: TokenNode | None, after: TokenNode | None
) -> bool:
    """True when no space is needed between ``prev`` and ``cur``."""
    if isinstance(prev, Punct):
        if prev.joint or (prev.char == "$" and not isinstance(cur, Punct)):
            return True
        if prev.char in "#!" and isinstance(cur, Group) and cur.delimiter is Delimiter.BRACKET:
            return True
        if prev.char == "!" and isinstance(before, Ident) and isinstance(cur, Group):
            return True
        if prev.char == "." and isinstance(before, Ident) and isinstance(cur, Ident):
            return True
        return False
    if isinstance(cur, Punct):
        if cur.char in ",;":
            return True
        if cur.char == "!" and isinstance(prev, Ident) and isinstance(after, Group):
            return True
        if cur.char != "." or cur.joint:
            return False
        return isinstance(prev, Ident) and isinstance(after, Ident)
    return (
        isinstance(prev, Ident)
        and isinstance(cur, Group)
        and cur.delimiter in (Delimiter.PARENTHESIS, Delimiter.BRACKET)
    )


def tokens_to_str(stream: TokenTree) -> str:
    """Render a token stream compactly on one line.

    Spaces are dropped only where re-lexing the result yields the same tokens
    with the same spacing, e.g. ``a.len(), 3`` instead of ``a . len () , 3``.

    Args:
        stream (TokenTree): Tokens to render.

    Returns:
        str: Single-line rendering.
    """
    trees = stream.trees
    parts: list[str] = []
    for i, tree in enumerate(trees):
        if i:
            before = trees[i - 2] if i >= 2 else None
            after = trees[i + 1] if i + 1 < len(trees) else None
            if not _glued(trees[i - 1], tree, before, after):
                parts.append(" ")
        parts.append(_tree_str(tree))
    return "".join(parts)


def _tree_str(tree: TokenNode) -> str:
    if isinstance(tree, Group):
        inner = tokens_to_str(tree.stream)
        if tree.delimiter is Delimiter.BRACE:
            return "{ " + inner + " }" if inner else "{}"
        return tree.delimiter.open + inner + tree.delimiter.close
    return str(tree)


def _source(nodes: Sequence[SyntaxNode]) -> str:
    """Leaf texts of ``nodes``, spaced where the parsed text had a gap."""
    parts: list[str] = []
    end: int | None = None
    for node in nodes:
        for leaf in node.leaves():
            if end is not None and leaf.start != end:
                parts.append(" ")
            parts.append(leaf.text)
            end = leaf.end
    return "".join(parts)


def _token_body(tree: SyntaxNode, *, item: bool) -> Doc:
    tokens = tokenize(_source([tree]))
    first = tokens.trees[0] if tokens.trees else None
    if not isinstance(first, Group):
        return text(tokens_to_str(tokens))
    body = tokens_to_str(first.stream)
    if first.delimiter is Delimiter.BRACE:
        if not body:
            return text(" {}")
        if item:
            return concat(text(" {"), nest(HARDLINE, text(body)), HARDLINE, text("}"))
        return text(" { " + body + " }")
    return text(first.delimiter.open + body + first.delimiter.close)


# --- spacing ----------------------------------------------------------------------------

_RANGE_OPS: Final[frozenset[str]] = frozenset({"..", "..=", "..."})
_RANGE_PARENTS: Final[frozenset[str]] = frozenset({"range_expression", "range_pattern"})
_PATH_KEYWORDS: Final[frozenset[str]] = frozenset({"self", "Self", "super", "crate"})
_UNARY_OPS: Final[frozenset[str]] = frozenset({"&", "*", "-", "!", "?"})
_UNARY_PARENTS: Final[frozenset[str]] = frozenset(
    {
        "unary_expression", "reference_expression", "reference_type", "pointer_type",
        "reference_pattern", "self_parameter", "negative_literal", "impl_item",
        "removed_trait_bound",
    }
)  # fmt: skip
# Nodes written directly after what precedes them: ``f(x)``, ``Vec<u8>``, ``B(u8)``.
_TIGHT_BEFORE: Final[frozenset[str]] = frozenset(
    {
        "arguments", "parameters", "type_arguments", "type_parameters",
        "ordered_field_declaration_list",
    }
)  # fmt: skip


def _tight(parent: SyntaxNode, left: SyntaxNode, right: SyntaxNode) -> bool:
    """True when ``left`` and ``right`` print without a space between them."""
    lt, rt = left.last_leaf(), right.first_leaf()
    lhs = lt.text if not lt.named else None
    rhs = rt.text if not rt.named else None
    kind = parent.kind
    if rhs in (",", ";", ":") or (rhs == "?" and kind == "try_expression"):
        return True
    if lhs == "::":
        return True
    if rhs == "::":
        return not (lhs is not None and lhs.isidentifier() and lhs not in _PATH_KEYWORDS)
    if "." in (lhs, rhs):
        return True
    if kind in _RANGE_PARENTS or kind == "base_field_initializer":
        if lhs in _RANGE_OPS:
            return True
    if kind in _RANGE_PARENTS and rhs in _RANGE_OPS:
        return True
    if right.kind in _TIGHT_BEFORE:
        return True
    if rhs in ("(", "["):
        if lt.named and lt.kind not in ("lifetime", "mutable_specifier"):
            return True
        if lhs in (")", "]") or (lhs == ">" and kind != "binary_expression"):
            return True
    if lhs in ("(", "[") or rhs in (")", "]"):
        return True
    if kind in ("bracketed_type", "for_lifetimes") and (lhs == "<" or rhs in ("<", ">")):
        return True
    if kind in _UNARY_PARENTS and left.is_leaf and lhs in _UNARY_OPS:
        return not (lhs == "&" and rhs == "&")
    if kind == "visibility_modifier":
        return lhs != "in"
    return False


def _inline(parent: SyntaxNode, nodes: Sequence[SyntaxNode]) -> Doc:
    """Print ``nodes`` (children of ``parent``) on one logical line."""
    parts: list[Doc] = []
    prev: SyntaxNode | None = None
    for i, node in enumerate(nodes):
        if node.kind == "where_clause":
            following = nodes[i + 1] if i + 1 < len(nodes) else None
            terminated = following is not None and following.is_token(";")
            parts.append(_where(node, terminated=terminated))
        else:
            if prev is not None and prev.kind == "where_clause":
                parts.append(NIL if node.is_token(";") else HARDLINE)
            elif prev is not None:
                parts.append(NIL if _tight(parent, prev, node) else text(" "))
            parts.append(_node(node, parent))
        prev = node
    return concat(*parts)


def _index(nodes: Sequence[SyntaxNode], token: str) -> int:
    for i, node in enumerate(nodes):
        if node.is_token(token):
            return i
    return -1


def _elements(nodes: Sequence[SyntaxNode]) -> list[list[SyntaxNode]]:
    """Split a comma-separated run of nodes; attributes stay with their element."""
    out: list[list[SyntaxNode]] = []
    current: list[SyntaxNode] = []
    for node in nodes:
        if node.is_token(","):
            out.append(current)
            current = []
        else:
            current.append(node)
    if current:
        out.append(current)
    return [element for element in out if element]


# --- attributes -------------------------------------------------------------------------


def _doc_comment(node: SyntaxNode) -> str | None:
    """Value of a doc attribute that prints as a line comment, else ``None``."""
    if not is_doc_attribute(node):
        return None
    attr = next(c for c in node.children if c.kind == "attribute")
    if len(attr.children) != 3 or attr.children[2].kind != "string_literal":
        return None
    literal = attr.children[2].text
    value = unescape_string(literal)
    if value is None or "\n" in value or "\r" in value or value.startswith("/"):
        return None
    if escape_string(value) != literal:
        return None
    return value


def _attribute(node: SyntaxNode, *, own_line: bool = False) -> Doc:
    inner = node.kind == "inner_attribute_item"
    if own_line:
        value = _doc_comment(node)
        if value is not None:
            return text(("//!" if inner else "///") + value)
    attr = [c for c in node.children if c.kind == "attribute"]
    body = tokens_to_str(tokenize(_source(attr)))
    return text(("#![" if inner else "#[") + body + "]")


def _own_line(node: SyntaxNode, parent: SyntaxNode) -> Doc:
    if node.kind in ATTRIBUTE_KINDS:
        return _attribute(node, own_line=True)
    return _node(node, parent)


# --- bodies -----------------------------------------------------------------------------


def _statements(parent: SyntaxNode, nodes: Sequence[SyntaxNode]) -> list[Doc]:
    out: list[Doc] = []
    for node in nodes:
        if out and (node.is_token(";") or node.kind == "empty_statement"):
            out[-1] = concat(out[-1], text(";"))
        else:
            out.append(_own_line(node, parent))
    return out


def _body(node: SyntaxNode, parent: SyntaxNode | None) -> Doc:
    """Items, statements or match arms, one per line."""
    kids = node.children
    if node.kind == "source_file":
        return join(HARDLINE, _statements(node, kids))
    start = _index(kids, "{")
    if start < 0 or not kids[-1].is_token("}"):
        return _inline(node, kids)
    prefix = concat(_inline(node, kids[:start]), text(" ")) if start else NIL
    lines = _statements(node, kids[start + 1 : -1])
    if not lines:
        return concat(prefix, text("{}"))
    return concat(prefix, text("{"), nest(HARDLINE, join(HARDLINE, lines)), HARDLINE, text("}"))


def _match_arm(node: SyntaxNode, parent: SyntaxNode | None) -> Doc:
    kids = node.children
    arrow = _index(kids, "=>")
    if arrow < 0:
        return _inline(node, kids)
    attrs = [c for c in kids[:arrow] if c.kind in ATTRIBUTE_KINDS]
    pattern = [c for c in kids[:arrow] if c.kind not in ATTRIBUTE_KINDS]
    value = [c for c in kids[arrow + 1 :] if not c.is_token(",")]
    comma = NIL if len(value) == 1 and value[0].kind == "block" else text(",")
    return concat(
        *(concat(_attribute(a, own_line=True), HARDLINE) for a in attrs),
        _inline(node, pattern),
        text(" => "),
        _inline(node, value),
        comma,
    )


def _where(node: SyntaxNode, *, terminated: bool) -> Doc:
    """``where`` on its own line, then one predicate per nested line."""
    predicates = [_inline(node, e) for e in _elements(node.children[1:])]
    lines = [
        p if terminated and i == len(predicates) - 1 else concat(p, text(","))
        for i, p in enumerate(predicates)
    ]
    return concat(HARDLINE, text("where"), nest(HARDLINE, join(HARDLINE, lines)))


# --- lists ------------------------------------------------------------------------------

_OPENERS: Final[frozenset[str]] = frozenset({"(", "[", "{", "<", "|"})

PAREN_LISTS: Final[frozenset[str]] = frozenset(
    {
        "arguments", "parameters", "tuple_expression", "tuple_type", "tuple_pattern",
        "tuple_struct_pattern", "array_expression", "slice_pattern",
        "ordered_field_declaration_list", "use_list",
    }
)  # fmt: skip
FLAT_LISTS: Final[frozenset[str]] = frozenset(
    {"type_arguments", "type_parameters", "closure_parameters"}
)
BRACE_LISTS: Final[frozenset[str]] = frozenset({"field_initializer_list", "struct_pattern"})
VERTICAL_LISTS: Final[frozenset[str]] = frozenset({"field_declaration_list", "enum_variant_list"})

_NO_TRAILING_COMMA: Final[frozenset[str]] = frozenset(
    {"base_field_initializer", "remaining_field_pattern"}
)


def _list(node: SyntaxNode, parent: SyntaxNode | None) -> Doc:
    """Comma-separated elements between the first opener and the final closer."""
    kids = node.children
    start = next(
        (i for i, c in enumerate(kids) if not c.named and c.is_leaf and c.text in _OPENERS), -1
    )
    closer = kids[-1]
    if start < 0 or start == len(kids) - 1 or not closer.is_leaf or closer.text not in CLOSERS:
        return _inline(node, kids)
    if node.kind == "array_expression" and _index(kids, ";") >= 0:
        return _inline(node, kids)
    head = kids[:start]
    opener = kids[start]
    head_doc = NIL
    if head:
        gap = NIL if _tight(node, head[-1], opener) else text(" ")
        head_doc = concat(_inline(node, head), gap)
    elements = _elements(kids[start + 1 : -1])
    kind = node.kind
    if kind == "field_declaration_list" and parent is not None and parent.kind == "enum_variant":
        kind = "struct_pattern"
    if kind in VERTICAL_LISTS:
        if not elements:
            return concat(head_doc, text("{}"))
        lines: list[Doc] = []
        for element in elements:
            attrs = [concat(_own_line(n, node), HARDLINE) for n in element[:-1]]
            lines.append(concat(*attrs, _node(element[-1], node), text(",")))
        body = join(HARDLINE, lines)
        return concat(head_doc, text("{"), nest(HARDLINE, body), HARDLINE, text("}"))
    docs = [_inline(node, e) for e in elements]
    if kind in BRACE_LISTS:
        if not docs:
            return concat(head_doc, text("{}"))
        trailing = elements[-1][-1].kind not in _NO_TRAILING_COMMA
        return concat(
            head_doc,
            group(
                text("{"),
                nest(
                    LINE,
                    join(concat(text(","), LINE), docs),
                    IfBreak(text(",")) if trailing else NIL,
                ),
                LINE,
                text("}"),
            ),
        )
    if kind in FLAT_LISTS:
        return concat(head_doc, text(opener.text), join(text(", "), docs), text(closer.text))
    if kind in TUPLE_KINDS and len(docs) == 1 and _index(kids, ",") >= 0:
        return concat(head_doc, text(opener.text), docs[0], text("," + closer.text))
    return concat(head_doc, delimited(opener.text, docs, closer.text))


# --- expressions and macros -------------------------------------------------------------

_ITEM_PARENTS: Final[frozenset[str]] = frozenset(
    {"source_file", "declaration_list", "expression_statement"}
)


def _binary(node: SyntaxNode, parent: SyntaxNode | None) -> Doc:
    if len(node.children) != 3:
        return _inline(node, node.children)
    left, op, right = node.children
    return group(_node(left, node), text(" " + op.text), nest(LINE, _node(right, node)))


def _macro(node: SyntaxNode, parent: SyntaxNode | None) -> Doc:
    kids = node.children
    bang = _index(kids, "!")
    if bang < 0 or kids[-1].kind != "token_tree":
        return _inline(node, kids)
    item = parent is not None and parent.kind in _ITEM_PARENTS
    return concat(_inline(node, kids[:bang]), text("!"), _token_body(kids[-1], item=item))


def _macro_rules(node: SyntaxNode, parent: SyntaxNode | None) -> Doc:
    kids = node.children
    name = node.child("name")
    if name is None:
        return _inline(node, kids)
    rules = tokenize(_source(kids[kids.index(name) + 1 :]))
    parts: list[Doc] = [text("macro_rules! " + name.text)]
    for tree in rules.trees:
        if isinstance(tree, Group) and tree.delimiter is Delimiter.BRACE:
            body = tokens_to_str(tree.stream)
            if body:
                parts.append(concat(text(" {"), nest(HARDLINE, text(body)), HARDLINE, text("}")))
            else:
                parts.append(text(" {}"))
        else:
            parts.append(text(_tree_str(tree)))
    return concat(*parts)


_Handler = Callable[["SyntaxNode", "SyntaxNode | None"], Doc]  # (node, parent)

_HANDLERS: Final[dict[str, _Handler]] = {
    "source_file": _body,
    "declaration_list": _body,
    "block": _body,
    "match_block": _body,
    "match_arm": _match_arm,
    "binary_expression": _binary,
    "macro_invocation": _macro,
    "macro_definition": _macro_rules,
    "attribute_item": lambda node, parent: _attribute(node),
    "inner_attribute_item": lambda node, parent: _attribute(node),
    "where_clause": lambda node, parent: _where(node, terminated=False),
    **dict.fromkeys(PAREN_LISTS | FLAT_LISTS | BRACE_LISTS | VERTICAL_LISTS, _list),
}


def _node(node: SyntaxNode, parent: SyntaxNode | None) -> Doc:
    handler = _HANDLERS.get(node.kind)
    if handler is not None and (node.children or node.kind == "source_file"):
        return handler(node, parent)
    if node.is_leaf:
        return text(node.text)
    return _inline(node, node.children)


# --- entry points -----------------------------------------------------------------------


def unparse_file(node: SyntaxNode) -> str:
    """Print a ``source_file`` tree; non-empty output ends with a newline."""
    rendered = render(_node(node, None))
    return rendered + "\n" if rendered else ""


def unparse_expr(node: SyntaxNode) -> str:
    """Print a single expression tree."""
    return render(_node(node, None))
