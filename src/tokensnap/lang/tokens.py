# topmark:header:start
#
#   project      : TokenSnap
#   file         : tokens.py
#   file_relpath : src/tokensnap/lang/tokens.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Token tree model for Rust source fragments.

A [`TokenTree`][tokensnap.lang.tokens.TokenTree] is an immutable sequence of
token nodes:

* [`Ident`][tokensnap.lang.tokens.Ident]: identifiers and keywords;
* [`Punct`][tokensnap.lang.tokens.Punct]: a single punctuation character plus
  its [`Spacing`][tokensnap.lang.tokens.Spacing] (``JOINT`` when the next
  character is also punctuation, as in ``->`` or ``::``);
* [`Literal`][tokensnap.lang.tokens.Literal]: verbatim literal text;
* [`Group`][tokensnap.lang.tokens.Group]: a delimited, nested tree.

Nodes may carry a [`Span`][tokensnap.lang.tokens.Span] pointing back into the
lexed text. Spans never take part in equality, so two trees lexed from
differently formatted sources compare equal when their tokens do.

``str(tree)`` is the canonical raw rendering: nodes separated by one space,
no space after a joint punct, braces padded (``{ x }``), other delimiters not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterator


class Delimiter(Enum):
    """Group delimiters as ``(open, close)`` pairs."""

    PARENTHESIS = ("(", ")")
    BRACE = ("{", "}")
    BRACKET = ("[", "]")
    NONE = ("", "")

    @property
    def open(self) -> str:
        """Opening delimiter text."""
        return self.value[0]

    @property
    def close(self) -> str:
        """Closing delimiter text."""
        return self.value[1]

    @classmethod
    def for_open(cls, char: str) -> Delimiter | None:
        """Return the delimiter opened by ``char`` (or ``None``)."""
        for member in cls:
            if member is not cls.NONE and member.open == char:
                return member
        return None

    @classmethod
    def for_close(cls, char: str) -> Delimiter | None:
        """Return the delimiter closed by ``char`` (or ``None``)."""
        for member in cls:
            if member is not cls.NONE and member.close == char:
                return member
        return None


class Spacing(Enum):
    """Whether a punct is immediately followed by another punct character."""

    ALONE = "alone"
    JOINT = "joint"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` in the lexed text."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Ident:
    """Identifier or keyword (raw identifiers keep their ``r#`` prefix)."""

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Punct:
    """Single punctuation character."""

    char: str
    spacing: Spacing = Spacing.ALONE
    span: Span | None = field(default=None, compare=False, repr=False)

    @property
    def joint(self) -> bool:
        """True when the next token is glued to this one."""
        return self.spacing is Spacing.JOINT

    def __str__(self) -> str:
        return self.char


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal token kept verbatim (numbers, strings, chars, bytes)."""

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Group:
    """Delimited token group."""

    delimiter: Delimiter
    stream: TokenTree
    span: Span | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return _render((self,))


TokenNode = Union[Ident, Punct, Literal, Group]


@dataclass(frozen=True, slots=True)
class TokenTree:
    """Immutable sequence of token nodes."""

    trees: tuple[TokenNode, ...] = ()

    def __iter__(self) -> Iterator[TokenNode]:
        return iter(self.trees)

    def __len__(self) -> int:
        return len(self.trees)

    def __bool__(self) -> bool:
        return bool(self.trees)

    def __getitem__(self, index: int) -> TokenNode:
        return self.trees[index]

    def __str__(self) -> str:
        return _render(self.trees)

    @property
    def is_empty(self) -> bool:
        """True when the tree holds no tokens."""
        return not self.trees

    @classmethod
    def of(cls, *trees: TokenNode) -> TokenTree:
        """Build a tree from nodes."""
        return cls(tuple(trees))


class _Frame:
    """One token sequence being rendered."""

    __slots__ = ("close", "index", "joint", "start", "trees")

    def __init__(self, trees: tuple[TokenNode, ...], close: str = "", start: int = -1) -> None:
        self.trees = trees
        self.index = 0
        self.joint = False
        self.close = close
        # Position of a brace opener in the output, rewritten to ``{}`` when nothing follows it.
        self.start = start


def _render(trees: tuple[TokenNode, ...]) -> str:
    """Raw rendering of a node sequence, walking groups with an explicit stack."""
    parts: list[str] = []
    stack: list[_Frame] = [_Frame(trees)]
    while stack:
        frame = stack[-1]
        if frame.index == len(frame.trees):
            stack.pop()
            if frame.start >= 0 and all(not p for p in parts[frame.start + 1 :]):
                parts[frame.start] = "{}"
            else:
                parts.append(frame.close)
            continue
        tree = frame.trees[frame.index]
        if frame.index and not frame.joint:
            parts.append(" ")
        frame.index += 1
        frame.joint = isinstance(tree, Punct) and tree.joint
        if not isinstance(tree, Group):
            parts.append(str(tree))
        elif tree.delimiter is Delimiter.BRACE:
            parts.append("{ ")
            stack.append(_Frame(tree.stream.trees, " }", len(parts) - 1))
        else:
            parts.append(tree.delimiter.open)
            stack.append(_Frame(tree.stream.trees, tree.delimiter.close))
    return "".join(parts)
