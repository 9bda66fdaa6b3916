# topmark:header:start
#
#   project      : TokenSnap
#   file         : strategies_tokensnap.py
#   file_relpath : tests/strategies_tokensnap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating small Rust sources.

Sources are built as lists of *chunks* (keywords, identifiers, punctuation,
one chunk per multi-character operator) and then joined with random
whitespace. The grammar stays deliberately small: structs and functions,
one level of generic arguments and no macros, so every sample parses as a
complete unit.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hypothesis import strategies as st

from tokensnap.lang.lexer import PUNCT_CHARS
from tokensnap.lang.syntax import KEYWORDS

Draw = Callable[[st.SearchStrategy[Any]], Any]
Chunks = list[str]

# Contextual keywords the item parser looks at.
RESERVED: frozenset[str] = KEYWORDS | {"union", "auto", "default", "macro_rules", "raw", "safe"}

SEPARATORS: tuple[str, ...] = ("", " ", "  ", "\n", "\n    ", "\t", " \n\n ")

TYPES: tuple[Chunks, ...] = (
    ["u8"],
    ["i32"],
    ["bool"],
    ["String"],
    ["Option", "<", "u8", ">"],
    ["Vec", "<", "String", ">"],
)


def _is_word(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _glues(left: str, right: str) -> bool:
    """Return whether ``left`` and ``right`` would lex differently without a separator."""
    a, b = left[-1], right[0]
    return (_is_word(a) and _is_word(b)) or (a in PUNCT_CHARS and b in PUNCT_CHARS)


def s_value_ident() -> st.SearchStrategy[str]:
    """Lower-case identifiers that are not keywords."""
    return st.from_regex(r"[a-z][a-z0-9_]{0,6}", fullmatch=True).filter(lambda s: s not in RESERVED)


def s_type_ident() -> st.SearchStrategy[str]:
    """Camel-case type names."""
    names = st.from_regex(r"[A-Z][A-Za-z0-9]{0,6}", fullmatch=True)
    return names.filter(lambda s: s not in RESERVED)


def s_type() -> st.SearchStrategy[Chunks]:
    return st.sampled_from(TYPES).map(list)


def _comma_separated(parts: list[Chunks], trailing: bool) -> Chunks:
    out: Chunks = []
    for i, part in enumerate(parts):
        if i:
            out.append(",")
        out.extend(part)
    if parts and trailing:
        out.append(",")
    return out


@st.composite
def s_struct(draw: Draw) -> Chunks:
    """A unit, tuple or named-field struct."""
    chunks: Chunks = ["pub"] if draw(st.booleans()) else []
    chunks += ["struct", draw(s_type_ident())]
    shape: str = draw(st.sampled_from(["unit", "tuple", "named"]))
    if shape == "unit":
        return chunks + [";"]
    if shape == "tuple":
        types: list[Chunks] = draw(st.lists(s_type(), min_size=1, max_size=3))
        return chunks + ["(", *_comma_separated(types, draw(st.booleans())), ")", ";"]
    names: list[str] = draw(st.lists(s_value_ident(), min_size=0, max_size=4, unique=True))
    fields = [[name, ":", *draw(s_type())] for name in names]
    return chunks + ["{", *_comma_separated(fields, draw(st.booleans())), "}"]


@st.composite
def s_expr(draw: Draw, names: list[str]) -> Chunks:
    """A literal, a name in scope, or a sum of both."""
    literal = str(draw(st.integers(min_value=0, max_value=999)))
    if not names:
        return [literal]
    name: str = draw(st.sampled_from(names))
    return draw(st.sampled_from([[literal], [name], [name, "+", literal]]))


@st.composite
def s_fn(draw: Draw) -> Chunks:
    """A function with typed parameters, ``let`` statements and a tail expression."""
    chunks: Chunks = ["pub"] if draw(st.booleans()) else []
    chunks += ["fn", draw(s_value_ident())]
    params: list[str] = draw(st.lists(s_value_ident(), max_size=3, unique=True))
    chunks += ["(", *_comma_separated([[p, ":", *draw(s_type())] for p in params], False), ")"]
    if draw(st.booleans()):
        chunks += ["->", *draw(s_type())]
    chunks.append("{")
    scope = list(params)
    for local in draw(st.lists(s_value_ident(), max_size=3)):
        chunks += ["let", local, "=", *draw(s_expr(scope)), ";"]
        scope.append(local)
    if draw(st.booleans()):
        chunks += draw(s_expr(scope))
    chunks.append("}")
    return chunks


@st.composite
def s_doc_comment(draw: Draw) -> Chunks:
    text: str = draw(st.from_regex(r"[A-Za-z ]{0,12}", fullmatch=True))
    return ["/// " + text + "\n"]


@st.composite
def s_source_chunks(draw: Draw, docs: bool = False) -> Chunks:
    """One to three items, optionally preceded by doc comments."""
    chunks: Chunks = []
    for item in draw(st.lists(st.one_of(s_struct(), s_fn()), min_size=1, max_size=3)):
        if docs and draw(st.booleans()):
            chunks += draw(s_doc_comment())
        chunks += item
    return chunks


@st.composite
def s_layout(draw: Draw, chunks: Chunks) -> str:
    """Join ``chunks`` with random whitespace, never gluing two tokens together."""
    out: list[str] = [chunks[0]]
    for left, right in zip(chunks, chunks[1:]):
        sep: str = draw(st.sampled_from(SEPARATORS))
        if not sep and _glues(left, right):
            sep = " "
        out += [sep, right]
    return "".join(out)


@st.composite
def s_source(draw: Draw, docs: bool = False) -> str:
    """A small Rust source laid out with random whitespace."""
    return draw(s_layout(draw(s_source_chunks(docs))))


@st.composite
def s_source_pair(draw: Draw) -> tuple[str, str]:
    """The same chunks laid out twice with independent whitespace."""
    chunks: Chunks = draw(s_source_chunks())
    return draw(s_layout(chunks)), draw(s_layout(chunks))
