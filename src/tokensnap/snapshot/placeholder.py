# topmark:header:start
#
#   project      : TokenSnap
#   file         : placeholder.py
#   file_relpath : src/tokensnap/snapshot/placeholder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Locate inline ``@`` literals inside assertion calls.

Given a source text and the 1-based line of an assertion, the locator finds
the directive call starting on that line (``assert_snapshot(...)``,
``insta::assert_token_snapshot!(...)``, ...), walks its arguments with the
Rust lexer and returns the span of the top-level ``@`` literal:

* ``@{ ... }`` / ``@{}``: token literals (`ValueKind.TOKENS`);
* ``@"..."``, ``@r"..."``, ``@r#"..."#``, ``@""``: string literals
  (`ValueKind.STRING`).

Lexing the arguments means comments and strings never confuse delimiter
matching, and malformed literal content surfaces as the same
[`TokenizeError`][tokensnap.core.errors.TokenizeError] a compiler would
report, positioned in the whole file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.constants import DEFAULT_DIRECTIVES, PLACEHOLDER_SIGIL
from tokensnap.core.errors import PlaceholderNotFoundError
from tokensnap.lang.lexer import Lexeme, LexemeKind, Lexer, unescape_string
from tokensnap.lang.tokens import Delimiter
from tokensnap.snapshot.literal import PlaceholderForm, ValueKind

if TYPE_CHECKING:
    from collections.abc import Iterator

logger: TokensnapLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class InlinePlaceholder:
    """An inline literal found in a source text.

    Attributes:
        path (Path | None): File the text was read from, if any.
        start (int): Offset of the ``@`` sigil.
        end (int): Offset just past the closing delimiter.
        line (int): 1-based line of the sigil.
        indent (str): Leading whitespace of the line holding the opening delimiter.
        form (PlaceholderForm): Shape of the literal.
        kind (ValueKind): Kind of value the literal records.
        literal (str): The literal text, ``text[start:end]``.
        content (str): Text between the braces, or the decoded string value.
    """

    path: Path | None
    start: int
    end: int
    line: int
    indent: str
    form: PlaceholderForm
    kind: ValueKind
    literal: str
    content: str


def _line_start(text: str, line: int) -> int:
    if line < 1:
        raise PlaceholderNotFoundError(f"invalid line number: {line}")
    offset = 0
    for _ in range(line - 1):
        offset = text.find("\n", offset)
        if offset < 0:
            raise PlaceholderNotFoundError(f"line {line} is past the end of the file")
        offset += 1
    return offset


def _indent_at(text: str, offset: int) -> str:
    start = text.rfind("\n", 0, offset) + 1
    end = start
    while end < offset and text[end] in " \t":
        end += 1
    return text[start:end]


def _directive_pattern(directives: tuple[str, ...]) -> re.Pattern[str]:
    names = "|".join(re.escape(name) for name in directives)
    return re.compile(rf"(?<![\w])(?:{names})\s*!?\s*\(")


def locate_placeholder(
    text: str,
    line: int,
    *,
    path: Path | None = None,
    directives: tuple[str, ...] = DEFAULT_DIRECTIVES,
) -> InlinePlaceholder:
    """Find the inline literal of the assertion call starting on ``line``.

    Args:
        text (str): The whole source text.
        line (int): 1-based line on which the directive call starts.
        path (Path | None): Source path, recorded on the placeholder.
        directives (tuple[str, ...]): Directive names to recognize.

    Returns:
        InlinePlaceholder: The located literal.

    Raises:
        PlaceholderNotFoundError: When no directive call starts on ``line`` or
            the call has no top-level ``@`` literal.
        TokenizeError: When the call's arguments cannot be tokenized.
    """
    where = f"{path}:{line}" if path else f"line {line}"
    start = _line_start(text, line)
    line_end = text.find("\n", start)
    line_end = len(text) if line_end < 0 else line_end
    match = _directive_pattern(directives).search(text, start)
    if match is None or match.start() >= line_end:
        raise PlaceholderNotFoundError(f"no assertion directive at {where}")
    logger.trace("directive %r found at offset %d", match.group(0), match.start())

    lexer = Lexer(text, match.end())
    lexemes = iter(lexer)
    depth = 0
    for lexeme in lexemes:
        if lexeme.kind is LexemeKind.OPEN:
            depth += 1
        elif lexeme.kind is LexemeKind.CLOSE:
            if depth == 0:
                break
            depth -= 1
        elif depth == 0 and lexeme.kind is LexemeKind.PUNCT and lexeme.text == PLACEHOLDER_SIGIL:
            placeholder = _literal_after(text, lexer, lexemes, lexeme, path)
            if placeholder is None:
                raise PlaceholderNotFoundError(f"malformed inline snapshot literal at {where}")
            logger.debug(
                "placeholder at %s: %s literal, offsets %d..%d",
                where,
                placeholder.form.value,
                placeholder.start,
                placeholder.end,
            )
            return placeholder
    raise PlaceholderNotFoundError(f"no inline snapshot literal in the assertion at {where}")


def _literal_after(
    text: str,
    lexer: Lexer,
    lexemes: Iterator[Lexeme],
    sigil: Lexeme,
    path: Path | None,
) -> InlinePlaceholder | None:
    opening = next(lexemes, None)
    if opening is None:
        return None
    if opening.kind is LexemeKind.LITERAL:
        value = unescape_string(opening.text)
        if value is None:
            return None
        return _placeholder(
            text,
            path,
            sigil,
            opening,
            opening.end,
            form=PlaceholderForm.STRING_LITERAL if value else PlaceholderForm.EMPTY,
            kind=ValueKind.STRING,
            content=value,
        )
    if opening.kind is not LexemeKind.OPEN or opening.text != Delimiter.BRACE.open:
        return None
    stack: list[Lexeme] = [opening]
    for lexeme in lexemes:
        if lexeme.kind is LexemeKind.OPEN:
            stack.append(lexeme)
        elif lexeme.kind is LexemeKind.CLOSE:
            opener = stack.pop()
            delimiter = Delimiter.for_open(opener.text)
            if delimiter is None or delimiter.close != lexeme.text:
                raise lexer.error(f"mismatched closing delimiter: `{lexeme.text}`", opener.start)
            if not stack:
                content = text[opening.end : lexeme.start]
                if not content.strip():
                    form = PlaceholderForm.EMPTY
                elif "\n" in content.strip():
                    form = PlaceholderForm.EXPANDED_BRACE
                else:
                    form = PlaceholderForm.COMPACT_BRACE
                return _placeholder(
                    text,
                    path,
                    sigil,
                    opening,
                    lexeme.end,
                    form=form,
                    kind=ValueKind.TOKENS,
                    content=content,
                )
    raise lexer.error("this file contains an unclosed delimiter", opening.start)


def _placeholder(
    text: str,
    path: Path | None,
    sigil: Lexeme,
    opening: Lexeme,
    end: int,
    *,
    form: PlaceholderForm,
    kind: ValueKind,
    content: str,
) -> InlinePlaceholder:
    return InlinePlaceholder(
        path=path,
        start=sigil.start,
        end=end,
        line=text.count("\n", 0, sigil.start) + 1,
        indent=_indent_at(text, opening.start),
        form=form,
        kind=kind,
        literal=text[sigil.start : end],
        content=content,
    )
