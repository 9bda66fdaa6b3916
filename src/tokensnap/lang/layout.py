# topmark:header:start
#
#   project      : TokenSnap
#   file         : layout.py
#   file_relpath : src/tokensnap/lang/layout.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Width-aware document layout (Wadler-style pretty printing).

A document is a tree of:

* `Text`: literal text;
* `Line`: a space (or nothing, for soft lines) when its group fits on the
  current line, a newline otherwise;
* `HardLine`: always a newline; a group containing one never fits flat;
* `Nest`: increases the indentation of newlines inside it;
* `Group`: laid out flat when it fits in the remaining width, broken otherwise;
* `IfBreak`: picks one of two documents depending on the enclosing group;
* `Concat`: a sequence of documents.

Indentation is written lazily, when the first text of a line is emitted, so
blank lines never carry trailing whitespace.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from tokensnap.constants import INDENT_WIDTH, MAX_WIDTH

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class Text:
    text: str


@dataclass(frozen=True, slots=True)
class Line:
    flat: str = " "


@dataclass(frozen=True, slots=True)
class HardLine:
    pass


@dataclass(frozen=True, slots=True)
class Nest:
    doc: Doc
    indent: int = INDENT_WIDTH


@dataclass(frozen=True, slots=True)
class Group:
    doc: Doc


@dataclass(frozen=True, slots=True)
class IfBreak:
    broken: Doc
    flat: Doc = Text("")


@dataclass(frozen=True, slots=True)
class Concat:
    parts: tuple[Doc, ...]


Doc = Union[Text, Line, HardLine, Nest, Group, IfBreak, Concat]

NIL: Doc = Text("")
LINE: Doc = Line(" ")
SOFTLINE: Doc = Line("")
HARDLINE: Doc = HardLine()


def text(value: str) -> Doc:
    return Text(value)


def concat(*docs: Doc) -> Doc:
    return Concat(tuple(docs))


def nest(*docs: Doc) -> Doc:
    return Nest(concat(*docs))


def group(*docs: Doc) -> Doc:
    return Group(concat(*docs))


def join(separator: Doc, docs: Iterable[Doc]) -> Doc:
    """Interleave ``separator`` between ``docs``."""
    parts: list[Doc] = []
    for i, doc in enumerate(docs):
        if i:
            parts.append(separator)
        parts.append(doc)
    return Concat(tuple(parts))


def delimited(open_: str, docs: list[Doc], close: str, *, trailing_comma: bool = True) -> Doc:
    """Comma-separated list that breaks one element per line.

    Flat: ``(a, b)``. Broken: each element on its own nested line, followed by a
    trailing comma when ``trailing_comma`` is set.
    """
    if not docs:
        return text(open_ + close)
    return group(
        text(open_),
        nest(
            SOFTLINE,
            join(concat(text(","), LINE), docs),
            IfBreak(text(",")) if trailing_comma else NIL,
        ),
        SOFTLINE,
        text(close),
    )


class Mode(Enum):
    FLAT = "flat"
    BREAK = "break"


_Item = tuple[int, Mode, Doc]


def _fits(remaining: int, pending: list[_Item], rest: list[_Item]) -> bool:
    stack = list(pending)
    rest_index = len(rest)
    while remaining >= 0:
        if not stack:
            if rest_index == 0:
                return True
            rest_index -= 1
            stack.append(rest[rest_index])
            continue
        indent, mode, doc = stack.pop()
        if isinstance(doc, Text):
            if "\n" in doc.text:
                return mode is Mode.BREAK
            remaining -= len(doc.text)
        elif isinstance(doc, Concat):
            stack.extend((indent, mode, part) for part in reversed(doc.parts))
        elif isinstance(doc, Nest):
            stack.append((indent + doc.indent, mode, doc.doc))
        elif isinstance(doc, Group):
            stack.append((indent, mode, doc.doc))
        elif isinstance(doc, IfBreak):
            stack.append((indent, mode, doc.broken if mode is Mode.BREAK else doc.flat))
        elif isinstance(doc, Line):
            if mode is Mode.BREAK:
                return True
            remaining -= len(doc.flat)
        else:
            return mode is Mode.BREAK
    return False


def render(doc: Doc, width: int = MAX_WIDTH) -> str:
    """Lay out ``doc`` within ``width`` columns.

    Args:
        doc (Doc): The document to render.
        width (int): Maximum line width.

    Returns:
        str: The rendered text (no trailing newline is added).
    """
    out: list[str] = []
    column = 0
    pending_indent: int | None = None
    stack: list[_Item] = [(0, Mode.BREAK, doc)]
    while stack:
        indent, mode, current = stack.pop()
        if isinstance(current, Text):
            if not current.text:
                continue
            if pending_indent is not None:
                out.append(" " * pending_indent)
                column = pending_indent
                pending_indent = None
            out.append(current.text)
            if "\n" in current.text:
                column = len(current.text) - current.text.rfind("\n") - 1
            else:
                column += len(current.text)
        elif isinstance(current, Concat):
            stack.extend((indent, mode, part) for part in reversed(current.parts))
        elif isinstance(current, Nest):
            stack.append((indent + current.indent, mode, current.doc))
        elif isinstance(current, Group):
            if mode is Mode.FLAT:
                stack.append((indent, Mode.FLAT, current.doc))
            else:
                start = pending_indent if pending_indent is not None else column
                flat = (indent, Mode.FLAT, current.doc)
                fits = _fits(width - start, [flat], stack)
                stack.append(flat if fits else (indent, Mode.BREAK, current.doc))
        elif isinstance(current, IfBreak):
            stack.append((indent, mode, current.broken if mode is Mode.BREAK else current.flat))
        elif isinstance(current, Line) and mode is Mode.FLAT:
            stack.append((indent, mode, Text(current.flat)))
        else:
            out.append("\n")
            column = 0
            pending_indent = indent
    return "".join(out)
