# topmark:header:start
#
#   project      : TokenSnap
#   file         : lexer.py
#   file_relpath : src/tokensnap/lang/lexer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tokenizer for Rust source text.

The lexer works in two layers:

* [`Lexer`][tokensnap.lang.lexer.Lexer] yields flat
  [`Lexeme`][tokensnap.lang.lexer.Lexeme]s with character offsets. The
  placeholder locator walks these directly, because it needs exact spans.
* [`tokenize`][tokensnap.lang.lexer.tokenize] folds lexemes into a nested
  [`TokenTree`][tokensnap.lang.tokens.TokenTree].

Comments are dropped, except doc comments (``///``, ``//!``, ``/** */``,
``/*! */``) which become ``#[doc = "..."]`` attribute tokens, so
documentation is part of the token tree like any other attribute.

Text that cannot be tokenized raises
[`TokenizeError`][tokensnap.core.errors.TokenizeError] with a compiler-style
message; nothing is skipped or repaired.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.core.errors import TokenizeError
from tokensnap.lang.tokens import (
    Delimiter,
    Group,
    Ident,
    Literal,
    Punct,
    Spacing,
    Span,
    TokenNode,
    TokenTree,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

logger: TokensnapLogger = get_logger(__name__)

PUNCT_CHARS: frozenset[str] = frozenset("~!@#$%^&*-=+|;:,<.>/?'")

_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "0": "\0",
    "'": "'",
    '"': '"',
}


class LexemeKind(Enum):
    """Flat lexeme categories."""

    IDENT = "ident"
    PUNCT = "punct"
    LITERAL = "literal"
    OPEN = "open"
    CLOSE = "close"
    DOC_OUTER = "doc-outer"
    DOC_INNER = "doc-inner"


@dataclass(frozen=True, slots=True)
class Lexeme:
    """One flat lexeme.

    For doc comments ``text`` holds the documentation content (without the
    comment markers); for every other kind it is the verbatim source text.
    """

    kind: LexemeKind
    text: str
    start: int
    end: int
    spacing: Spacing = Spacing.ALONE


def line_col(text: str, offset: int) -> tuple[int, int]:
    """Return the 1-based ``(line, column)`` of ``offset`` in ``text``."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_continue(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


class Lexer:
    """Iterate the lexemes of ``text`` starting at ``start``.

    Args:
        text (str): Source text.
        start (int): Offset to start lexing from; positions stay relative to ``text``.
    """

    def __init__(self, text: str, start: int = 0) -> None:
        self.text = text
        self.pos = start

    def error(self, message: str, offset: int) -> TokenizeError:
        """Build a positioned `TokenizeError`."""
        line, column = line_col(self.text, offset)
        return TokenizeError(message, offset=offset, line=line, column=column)

    def _peek(self, ahead: int = 0) -> str:
        i = self.pos + ahead
        return self.text[i] if i < len(self.text) else ""

    def __iter__(self) -> Iterator[Lexeme]:
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
                continue
            if text.startswith("//", self.pos):
                doc = self._line_comment()
                if doc is not None:
                    yield doc
                continue
            if text.startswith("/*", self.pos):
                doc = self._block_comment()
                if doc is not None:
                    yield doc
                continue
            yield from self._token()

    # --- comments ---------------------------------------------------------------------

    def _line_comment(self) -> Lexeme | None:
        start = self.pos
        end = self.text.find("\n", start)
        if end < 0:
            end = len(self.text)
        self.pos = end
        body = self.text[start:end].rstrip("\r")
        if body.startswith("///") and not body.startswith("////"):
            return Lexeme(LexemeKind.DOC_OUTER, body[3:], start, end)
        if body.startswith("//!"):
            return Lexeme(LexemeKind.DOC_INNER, body[3:], start, end)
        return None

    def _block_comment(self) -> Lexeme | None:
        start = self.pos
        depth = 0
        i = start
        text = self.text
        while i < len(text):
            if text.startswith("/*", i):
                depth += 1
                i += 2
            elif text.startswith("*/", i):
                depth -= 1
                i += 2
                if depth == 0:
                    break
            else:
                i += 1
        if depth:
            raise self.error("unterminated block comment", start)
        self.pos = i
        body = text[start:i]
        if body.startswith("/**") and not body.startswith("/***") and body != "/**/":
            return Lexeme(LexemeKind.DOC_OUTER, body[3:-2], start, i)
        if body.startswith("/*!"):
            return Lexeme(LexemeKind.DOC_INNER, body[3:-2], start, i)
        return None

    # --- tokens -----------------------------------------------------------------------

    def _token(self) -> Iterator[Lexeme]:
        text = self.text
        start = self.pos
        ch = text[start]

        if Delimiter.for_open(ch) is not None:
            self.pos += 1
            yield Lexeme(LexemeKind.OPEN, ch, start, start + 1)
            return
        if Delimiter.for_close(ch) is not None:
            self.pos += 1
            yield Lexeme(LexemeKind.CLOSE, ch, start, start + 1)
            return

        literal = self._prefixed_literal()
        if literal is not None:
            yield literal
            return

        if _is_ident_start(ch):
            yield self._ident()
            return
        if ch.isdigit():
            yield self._number()
            return
        if ch == '"':
            yield self._quoted(start, start, "unterminated double quote string")
            return
        if ch == "'":
            yield from self._quote_or_lifetime()
            return
        if ch in PUNCT_CHARS:
            self.pos += 1
            spacing = Spacing.JOINT if self._peek() in PUNCT_CHARS else Spacing.ALONE
            yield Lexeme(LexemeKind.PUNCT, ch, start, start + 1, spacing)
            return
        raise self.error(f"unknown start of token: {ch}", start)

    def _prefixed_literal(self) -> Lexeme | None:
        """Lex ``r"…"``, ``r#"…"#``, ``b"…"``, ``b'…'``, ``br"…"``, ``c"…"``, ``cr"…"``."""
        text = self.text
        start = self.pos
        for prefix in ("br", "cr", "r"):
            if text.startswith(prefix, start):
                j = start + len(prefix)
                hashes = 0
                while j < len(text) and text[j] == "#":
                    hashes += 1
                    j += 1
                if j < len(text) and text[j] == '"':
                    return self._raw(start, j, hashes)
        if text.startswith(('b"', 'c"'), start):
            return self._quoted(start, start + 1, "unterminated double quote byte string")
        if text.startswith("b'", start):
            self.pos = start + 1
            return self._char(start, "unterminated byte constant")
        return None

    def _ident(self) -> Lexeme:
        text = self.text
        start = self.pos
        j = start + 1
        raw_ident = start + 2 < len(text) and _is_ident_start(text[start + 2])
        if text.startswith("r#", start) and raw_ident:
            j = start + 3
        while j < len(text) and _is_ident_continue(text[j]):
            j += 1
        self.pos = j
        return Lexeme(LexemeKind.IDENT, text[start:j], start, j)

    def _suffix(self) -> None:
        text = self.text
        if self.pos < len(text) and _is_ident_start(text[self.pos]):
            while self.pos < len(text) and _is_ident_continue(text[self.pos]):
                self.pos += 1

    def _number(self) -> Lexeme:
        text = self.text
        start = self.pos
        j = start
        if text.startswith(("0x", "0o", "0b"), start):
            j += 2
            while j < len(text) and (text[j] in "0123456789abcdefABCDEF_"):
                j += 1
        else:
            while j < len(text) and (text[j].isdigit() or text[j] == "_"):
                j += 1
            nxt = text[j + 1] if j + 1 < len(text) else ""
            if j < len(text) and text[j] == "." and nxt != "." and not _is_ident_start(nxt):
                j += 1
                while j < len(text) and (text[j].isdigit() or text[j] == "_"):
                    j += 1
            if j < len(text) and text[j] in "eE":
                k = j + 1
                if k < len(text) and text[k] in "+-":
                    k += 1
                if k < len(text) and text[k].isdigit():
                    j = k
                    while j < len(text) and (text[j].isdigit() or text[j] == "_"):
                        j += 1
        self.pos = j
        self._suffix()
        return Lexeme(LexemeKind.LITERAL, text[start : self.pos], start, self.pos)

    def _quoted(self, start: int, quote: int, message: str) -> Lexeme:
        text = self.text
        j = quote + 1
        while j < len(text):
            if text[j] == "\\":
                j += 2
                continue
            if text[j] == '"':
                self.pos = j + 1
                self._suffix()
                return Lexeme(LexemeKind.LITERAL, text[start : self.pos], start, self.pos)
            j += 1
        raise self.error(message, start)

    def _raw(self, start: int, quote: int, hashes: int) -> Lexeme:
        closing = '"' + "#" * hashes
        end = self.text.find(closing, quote + 1)
        if end < 0:
            raise self.error("unterminated raw string", start)
        self.pos = end + len(closing)
        self._suffix()
        return Lexeme(LexemeKind.LITERAL, self.text[start : self.pos], start, self.pos)

    def _char(self, start: int, message: str) -> Lexeme:
        # self.pos sits on the opening quote
        text = self.text
        j = self.pos + 1
        if j < len(text) and text[j] == "\\":
            j += 2
            while j < len(text) and text[j] not in "'\n":
                j += 1
        elif j < len(text):
            j += 1
        if j >= len(text) or text[j] != "'":
            raise self.error(message, start)
        self.pos = j + 1
        self._suffix()
        return Lexeme(LexemeKind.LITERAL, text[start : self.pos], start, self.pos)

    def _quote_or_lifetime(self) -> Iterator[Lexeme]:
        start = self.pos
        nxt = self._peek(1)
        if nxt == "\\" or (nxt and nxt != "'" and self._peek(2) == "'"):
            yield self._char(start, "unterminated character literal")
            return
        if _is_ident_start(nxt):
            # Lifetime or label: a joint quote followed by an identifier.
            self.pos += 1
            yield Lexeme(LexemeKind.PUNCT, "'", start, start + 1, Spacing.JOINT)
            yield self._ident()
            return
        raise self.error("unterminated character literal", start)


def escape_string(value: str) -> str:
    """Return ``value`` as the body of a double-quoted string literal."""
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\0":
            out.append("\\0")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def unescape_string(literal: str) -> str | None:
    """Decode a (raw) string literal to its value.

    Args:
        literal (str): Literal text such as ``"a\\nb"``, ``r#"x"#`` or ``b"x"``.

    Returns:
        str | None: The decoded value, or ``None`` when ``literal`` is not a string literal.
    """
    body = literal
    if body[:1] in ("b", "c"):
        body = body[1:]
    if body.startswith("r"):
        hashes = len(body) - len(body[1:].lstrip("#")) - 1
        inner = body[1 + hashes :]
        closing = '"' + "#" * hashes
        well_formed = inner.startswith('"') and inner.endswith(closing)
        if not (well_formed and len(inner) >= 1 + len(closing)):
            return None
        return inner[1 : len(inner) - len(closing)]
    if not (body.startswith('"') and body.endswith('"') and len(body) >= 2):
        return None
    inner = body[1:-1]
    out: list[str] = []
    i = 0
    while i < len(inner):
        ch = inner[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        esc = inner[i + 1 : i + 2]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
        elif esc == "x":
            out.append(chr(int(inner[i + 2 : i + 4], 16)))
            i += 4
        elif esc == "u":
            close = inner.index("}", i)
            out.append(chr(int(inner[i + 3 : close].replace("_", ""), 16)))
            i = close + 1
        elif esc == "\n":
            # Line continuation swallows the newline and leading whitespace.
            i += 2
            while i < len(inner) and inner[i] in " \t\r\n":
                i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _doc_tokens(lexeme: Lexeme) -> list[TokenNode]:
    span = Span(lexeme.start, lexeme.end)
    trees: list[TokenNode] = [Punct("#", Spacing.ALONE, span)]
    if lexeme.kind is LexemeKind.DOC_INNER:
        trees.append(Punct("!", Spacing.ALONE, span))
    body = TokenTree.of(
        Ident("doc", span),
        Punct("=", Spacing.ALONE, span),
        Literal(escape_string(lexeme.text), span),
    )
    trees.append(Group(Delimiter.BRACKET, body, span))
    return trees


def tokenize(text: str) -> TokenTree:
    """Tokenize ``text`` into a nested token tree.

    Args:
        text (str): Rust source text (a whole file or any fragment).

    Returns:
        TokenTree: The token tree; spans are offsets into ``text``.

    Raises:
        TokenizeError: When ``text`` contains an unterminated literal or comment,
            an unknown character, or unbalanced delimiters.
    """
    lexer = Lexer(text)
    stack: list[tuple[Lexeme, list[TokenNode]]] = []
    current: list[TokenNode] = []
    for lexeme in lexer:
        kind = lexeme.kind
        span = Span(lexeme.start, lexeme.end)
        if kind is LexemeKind.OPEN:
            stack.append((lexeme, current))
            current = []
        elif kind is LexemeKind.CLOSE:
            if not stack:
                raise lexer.error(f"unexpected closing delimiter: `{lexeme.text}`", lexeme.start)
            opener, parent = stack.pop()
            delimiter = Delimiter.for_open(opener.text)
            if delimiter is None or delimiter.close != lexeme.text:
                raise lexer.error(f"mismatched closing delimiter: `{lexeme.text}`", opener.start)
            parent.append(
                Group(delimiter, TokenTree(tuple(current)), Span(opener.start, lexeme.end))
            )
            current = parent
        elif kind is LexemeKind.IDENT:
            current.append(Ident(lexeme.text, span))
        elif kind is LexemeKind.PUNCT:
            current.append(Punct(lexeme.text, lexeme.spacing, span))
        elif kind is LexemeKind.LITERAL:
            current.append(Literal(lexeme.text, span))
        else:
            current.extend(_doc_tokens(lexeme))
    if stack:
        opener, _parent = stack[-1]
        raise lexer.error("this file contains an unclosed delimiter", opener.start)
    tree = TokenTree(tuple(current))
    logger.trace("tokenized %d characters into %d top-level trees", len(text), len(tree))
    return tree
