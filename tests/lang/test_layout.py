# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_layout.py
#   file_relpath : tests/lang/test_layout.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the width-aware document layout."""

from __future__ import annotations

from tokensnap.lang.layout import (
    HARDLINE,
    LINE,
    SOFTLINE,
    delimited,
    group,
    join,
    nest,
    render,
    text,
)


def test_group_fits_flat() -> None:
    assert render(group(text("a"), LINE, text("b"))) == "a b"


def test_group_breaks_when_too_wide() -> None:
    assert render(group(text("aaaa"), LINE, text("bbbb")), width=5) == "aaaa\nbbbb"


def test_softline_is_empty_when_flat() -> None:
    assert render(group(text("("), SOFTLINE, text(")"))) == "()"


def test_nest_indents_broken_lines() -> None:
    doc = group(text("f("), nest(SOFTLINE, text("x")), SOFTLINE, text(")"))
    assert render(doc, width=3) == "f(\n    x\n)"


def test_hardline_forces_enclosing_group_to_break() -> None:
    assert render(group(text("a"), LINE, text("b"), HARDLINE, text("c"))) == "a\nb\nc"


def test_blank_lines_carry_no_indentation() -> None:
    assert render(nest(text("a"), HARDLINE, HARDLINE, text("b"))) == "a\n\n    b"


def test_join() -> None:
    assert render(join(text(", "), [text("x"), text("y"), text("z")])) == "x, y, z"


def test_delimited_flat_and_broken() -> None:
    items = [text("one"), text("two")]
    assert render(delimited("[", items, "]")) == "[one, two]"
    assert render(delimited("[", items, "]"), width=6) == "[\n    one,\n    two,\n]"
    assert render(delimited("[", [], "]")) == "[]"


def test_inner_group_stays_flat_inside_broken_outer_group() -> None:
    inner = group(text("x"), LINE, text("y"))
    outer = group(text("start"), nest(LINE, inner), LINE, text("end"))
    assert render(outer, width=8) == "start\n    x y\nend"
