# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_strip.py
#   file_relpath : tests/lang/test_strip.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for doc-attribute stripping."""

from __future__ import annotations

from tokensnap.lang.lexer import tokenize
from tokensnap.lang.printer import unparse_file
from tokensnap.lang.strip import strip_docs
from tokensnap.lang.syntax import parse_expr, parse_file


def test_strip_item_docs() -> None:
    documented = parse_file(tokenize("/// The answer.\nconst A: u8 = 42;"))
    plain = parse_file(tokenize("const A: u8 = 42;"))
    assert documented != plain
    assert strip_docs(documented) == plain


def test_strip_nested_docs() -> None:
    source = """
    //! Crate docs.
    /// A struct.
    struct S {
        /// A field.
        x: u8,
    }
    impl S {
        /** A method. */
        fn f(&self) {}
    }
    """
    stripped = strip_docs(parse_file(tokenize(source)))
    assert unparse_file(stripped) == (
        "struct S {\n    x: u8,\n}\nimpl S {\n    fn f(&self) {}\n}\n"
    )


def test_strip_keeps_other_attributes() -> None:
    file = parse_file(tokenize("/// Docs.\n#[derive(Debug)]\nstruct A;"))
    assert unparse_file(strip_docs(file)) == "#[derive(Debug)]\nstruct A;\n"


def test_strip_explicit_doc_attribute() -> None:
    file = parse_file(tokenize('#[doc = "hidden"] fn f() {}'))
    assert unparse_file(strip_docs(file)) == "fn f() {}\n"


def test_strip_keeps_doc_list_attributes() -> None:
    file = parse_file(tokenize("/// Docs.\n#[doc(hidden)]\npub fn f() {}"))
    assert unparse_file(strip_docs(file)) == "#[doc(hidden)]\npub fn f() {}\n"


def test_strip_docs_on_enum_variants_and_match_arms() -> None:
    documented = parse_file(
        tokenize(
            "enum E { /// A.\n A, B }\n"
            "fn f(e: E) -> u8 { match e { /// One.\n E::A => 1, _ => 2 } }"
        )
    )
    plain = parse_file(
        tokenize("enum E { A, B }\nfn f(e: E) -> u8 { match e { E::A => 1, _ => 2 } }")
    )
    assert strip_docs(documented) == plain


def test_strip_without_docs_returns_same_object() -> None:
    file = parse_file(tokenize("struct A { x: u8 }"))
    assert strip_docs(file) is file


def test_strip_expression_docs() -> None:
    expr = parse_expr(tokenize("{ /// inner item docs\n fn g() {} g() }"))
    plain = parse_expr(tokenize("{ fn g() {} g() }"))
    assert strip_docs(expr) == plain
