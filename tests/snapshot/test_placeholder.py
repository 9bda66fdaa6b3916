# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_placeholder.py
#   file_relpath : tests/snapshot/test_placeholder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for locating inline literals inside assertion calls."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.conftest import parametrize
from tokensnap.core.errors import PlaceholderNotFoundError, TokenizeError
from tokensnap.snapshot.literal import PlaceholderForm, ValueKind
from tokensnap.snapshot.placeholder import locate_placeholder

INLINE_TEST = (
    "\n"
    "use proc_macro2::TokenStream;\n"
    "use quote::quote;\n"
    "\n"
    "#[test]\n"
    "fn test_token_inline() {\n"
    "    let tokens = quote! { struct Foo; };\n"
    "    insta::assert_token_snapshot!(tokens, @{});\n"
    "}\n"
)


def test_empty_token_literal() -> None:
    ph = locate_placeholder(INLINE_TEST, 8)
    assert ph.form is PlaceholderForm.EMPTY
    assert ph.kind is ValueKind.TOKENS
    assert ph.literal == "@{}"
    assert INLINE_TEST[ph.start : ph.end] == "@{}"
    assert ph.line == 8
    assert ph.indent == "    "
    assert ph.content == ""
    assert ph.path is None


def test_compact_literal_with_nested_braces() -> None:
    text = "assert_snapshot!(tokens, @{ fn f() { 1 } });\n"
    ph = locate_placeholder(text, 1)
    assert ph.form is PlaceholderForm.COMPACT_BRACE
    assert ph.content == " fn f() { 1 } "
    assert ph.literal == "@{ fn f() { 1 } }"
    assert ph.indent == ""


def test_expanded_literal() -> None:
    text = (
        "fn t() {\n"
        "    assert_snapshot!(tokens, @{\n"
        "        struct Foo;\n"
        "        struct Bar;\n"
        "    });\n"
        "}\n"
    )
    ph = locate_placeholder(text, 2)
    assert ph.form is PlaceholderForm.EXPANDED_BRACE
    assert ph.content == "\n        struct Foo;\n        struct Bar;\n    "
    assert ph.indent == "    "
    assert ph.line == 2
    assert text[ph.end :] == ");\n}\n"


def test_call_spanning_lines_before_literal() -> None:
    text = "assert_snapshot!(\n    value,\n    @{ x },\n);\n"
    ph = locate_placeholder(text, 1)
    assert ph.literal == "@{ x }"
    assert ph.line == 3
    assert ph.indent == "    "


def test_literal_inside_argument_groups_is_ignored() -> None:
    text = "assert_snapshot!(f(@{ a }), @{ b });\n"
    assert locate_placeholder(text, 1).content == " b "


def test_comments_do_not_confuse_the_scan() -> None:
    text = "assert_snapshot!(x /* @{ c } ) */, @{ a });\n"
    assert locate_placeholder(text, 1).content == " a "


@parametrize(
    "literal, form, content",
    [
        ('@"hello"', PlaceholderForm.STRING_LITERAL, "hello"),
        ('@""', PlaceholderForm.EMPTY, ""),
        ('@"a\\nb"', PlaceholderForm.STRING_LITERAL, "a\nb"),
        ('@r#"say "hi""#', PlaceholderForm.STRING_LITERAL, 'say "hi"'),
        ('@r"\n    line\n    "', PlaceholderForm.STRING_LITERAL, "\n    line\n    "),
    ],
)
def test_string_literals(literal: str, form: PlaceholderForm, content: str) -> None:
    text = f"assert_snapshot!(value, {literal});\n"
    ph = locate_placeholder(text, 1)
    assert ph.kind is ValueKind.STRING
    assert ph.form is form
    assert ph.content == content
    assert ph.literal == literal


def test_custom_directives() -> None:
    text = "check!(v, @{ x });\n"
    assert locate_placeholder(text, 1, directives=("check",)).content == " x "
    with pytest.raises(PlaceholderNotFoundError):
        locate_placeholder(text, 1)


def test_path_is_recorded_and_reported() -> None:
    path = Path("tests/lib.rs")
    assert locate_placeholder(INLINE_TEST, 8, path=path).path == path
    with pytest.raises(PlaceholderNotFoundError, match="no assertion directive at tests/lib.rs:2"):
        locate_placeholder(INLINE_TEST, 2, path=path)


@parametrize(
    "text, line, message",
    [
        (INLINE_TEST, 7, "no assertion directive at line 7"),
        ("x\n", 5, "line 5 is past the end of the file"),
        ("x\n", 0, "invalid line number: 0"),
        ("assert_snapshot!(x);\n", 1, "no inline snapshot literal in the assertion at line 1"),
        ("assert_snapshot!(x, @ 1);\n", 1, "malformed inline snapshot literal at line 1"),
        ("let a = 1;\nassert_snapshot!(x, @{});\n", 1, "no assertion directive at line 1"),
    ],
)
def test_placeholder_not_found(text: str, line: int, message: str) -> None:
    with pytest.raises(PlaceholderNotFoundError, match=message):
        locate_placeholder(text, line)


def test_unterminated_string_in_literal() -> None:
    text = 'fn f() {\n    assert_snapshot!(x, @{ "abc });\n}\n'
    with pytest.raises(TokenizeError) as excinfo:
        locate_placeholder(text, 2)
    assert excinfo.value.message == "unterminated double quote string"
    assert excinfo.value.line == 2
    assert excinfo.value.column == 28


def test_mismatched_delimiter_in_literal() -> None:
    with pytest.raises(TokenizeError, match="mismatched closing delimiter"):
        locate_placeholder("assert_snapshot!(x, @{ ( });\n", 1)
