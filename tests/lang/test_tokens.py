# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_tokens.py
#   file_relpath : tests/lang/test_tokens.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the token tree model and its raw rendering."""

from __future__ import annotations

from tokensnap.lang.tokens import (
    Delimiter,
    Group,
    Ident,
    Literal,
    Punct,
    Spacing,
    Span,
    TokenTree,
)


def test_empty_tree() -> None:
    tree = TokenTree()
    assert tree.is_empty
    assert not tree
    assert str(tree) == ""


def test_of_builds_sequence() -> None:
    tree = TokenTree.of(Ident("a"), Punct("+"), Literal("1"))
    assert len(tree) == 3
    assert str(tree) == "a + 1"


def test_joint_punct_glues_next_token() -> None:
    tree = TokenTree.of(Punct(":", Spacing.JOINT), Punct(":"), Ident("x"))
    assert str(tree) == ":: x"


def test_group_rendering() -> None:
    inner = TokenTree.of(Ident("x"))
    assert str(Group(Delimiter.PARENTHESIS, inner)) == "(x)"
    assert str(Group(Delimiter.BRACKET, inner)) == "[x]"
    assert str(Group(Delimiter.BRACE, inner)) == "{ x }"
    assert str(Group(Delimiter.BRACE, TokenTree())) == "{}"


def test_spans_are_ignored_by_equality() -> None:
    assert Ident("a", Span(0, 1)) == Ident("a", Span(5, 6))
    assert Punct("+", Spacing.ALONE, Span(0, 1)) != Punct("+", Spacing.JOINT, Span(0, 1))


def test_delimiter_lookup() -> None:
    assert Delimiter.for_open("{") is Delimiter.BRACE
    assert Delimiter.for_close(")") is Delimiter.PARENTHESIS
    assert Delimiter.for_open("<") is None
    assert Delimiter.for_close("") is None


def test_nested_group_rendering() -> None:
    tree = TokenTree.of(
        Ident("f"),
        Group(
            Delimiter.PARENTHESIS,
            TokenTree.of(Group(Delimiter.BRACE, TokenTree.of(Group(Delimiter.BRACE, TokenTree())))),
        ),
        Punct(";"),
    )
    assert str(tree) == "f ({ {} }) ;"


def test_deeply_nested_groups_render_without_recursion() -> None:
    tree = TokenTree.of(Literal("1"))
    for _ in range(5000):
        tree = TokenTree.of(Group(Delimiter.PARENTHESIS, tree))
    assert str(tree) == "(" * 5000 + "1" + ")" * 5000
    assert str(tree[0]) == str(tree)
