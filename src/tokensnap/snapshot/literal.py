# topmark:header:start
#
#   project      : TokenSnap
#   file         : literal.py
#   file_relpath : src/tokensnap/snapshot/literal.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Layout of inline ``@`` literals, one policy per value kind.

A [`LiteralPolicy`][tokensnap.snapshot.literal.LiteralPolicy] decides two
things for the values it handles:

* whether recorded content and fresh content are equivalent (no rewrite);
* the replacement literal text for fresh content, given the leading
  whitespace of the line holding the opening delimiter and the newline
  sequence of the file.

Expanded literals reuse that leading whitespace verbatim (tabs included) and
nest their content one level deeper with four spaces.

Token values use brace literals:

```rust
assert_snapshot!(tokens, @{ struct Foo; });
assert_snapshot!(tokens, @{
    struct Foo {
        x: u8,
    }
});
```

String values use quoted literals, switching to raw strings when escaping
would be needed and to an indented raw block for multi-line text.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Protocol

from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.constants import INDENT_WIDTH, PLACEHOLDER_SIGIL
from tokensnap.lang.lexer import tokenize, unescape_string
from tokensnap.snapshot.normalize import tokens_equal

logger: TokensnapLogger = get_logger(__name__)


class ValueKind(Enum):
    """Kind of value a snapshot literal records."""

    TOKENS = "tokens"
    STRING = "string"


class PlaceholderForm(Enum):
    """Textual shape of an inline literal."""

    EMPTY = "empty"
    COMPACT_BRACE = "compact-brace"
    EXPANDED_BRACE = "expanded-brace"
    STRING_LITERAL = "string-literal"


class LiteralPolicy(Protocol):
    """Per-kind comparison and layout of inline literals."""

    kind: ValueKind

    def equivalent(self, recorded: str, fresh: str) -> bool:
        """Return whether ``recorded`` literal content already matches ``fresh``."""
        ...

    def format(
        self, content: str, indent: str, newline: str = "\n"
    ) -> tuple[str, PlaceholderForm]:
        """Lay out ``content`` as a full literal (sigil included).

        Args:
            content (str): The fresh content, with ``\\n`` line breaks.
            indent (str): Leading whitespace of the line holding the opening delimiter.
            newline (str): Line break written between the lines of the literal.

        Returns:
            tuple[str, PlaceholderForm]: The literal text and its form.
        """
        ...


class TokenLiteralPolicy:
    """Brace literals holding rendered token trees."""

    kind: ValueKind = ValueKind.TOKENS

    def equivalent(self, recorded: str, fresh: str) -> bool:
        return tokens_equal(tokenize(recorded), tokenize(fresh))

    def format(
        self, content: str, indent: str, newline: str = "\n"
    ) -> tuple[str, PlaceholderForm]:
        body = content.strip()
        if not body:
            return PLACEHOLDER_SIGIL + "{}", PlaceholderForm.EMPTY
        if "\n" not in body:
            return f"{PLACEHOLDER_SIGIL}{{ {body} }}", PlaceholderForm.COMPACT_BRACE
        pad = indent + " " * INDENT_WIDTH
        lines = [
            pad + line.rstrip() if line.strip() else "" for line in content.strip("\n").split("\n")
        ]
        text = PLACEHOLDER_SIGIL + "{" + newline + newline.join(lines) + newline + indent + "}"
        return text, PlaceholderForm.EXPANDED_BRACE


def normalize_string(value: str) -> str:
    """Normalize the value of a string literal for comparison.

    Literals whose text starts on the line after the opening quote are
    block-formatted: the first (empty) line and a trailing whitespace-only
    line are dropped and the common indentation is removed. Other values are
    returned unchanged.
    """
    if not value.lstrip(" \t").startswith("\n"):
        return value
    lines = value.split("\n")[1:]
    if lines and not lines[-1].strip():
        lines.pop()
    indent = min((len(line) - len(line.lstrip()) for line in lines if line.strip()), default=0)
    return "\n".join(line[indent:] for line in lines)


def _hashes(value: str) -> int:
    runs = [len(m.group(1)) for m in re.finditer(r'"(#*)', value)]
    return max(runs) + 1 if runs else 0


class StringLiteralPolicy:
    """Quoted literals holding plain text."""

    kind: ValueKind = ValueKind.STRING

    def equivalent(self, recorded: str, fresh: str) -> bool:
        """Compare ``recorded`` with the value a literal formatted for ``fresh`` holds.

        Block literals re-indent and trim their lines, so ``fresh`` goes through
        the same layout before both sides are normalized. Recorded CRLF line
        breaks count as ``\\n``.
        """
        literal, _ = self.format(fresh, "")
        expected = unescape_string(literal[len(PLACEHOLDER_SIGIL) :])
        if expected is None:
            expected = fresh
        recorded = recorded.replace("\r\n", "\n")
        return normalize_string(recorded).rstrip() == normalize_string(expected).rstrip()

    def format(
        self, content: str, indent: str, newline: str = "\n"
    ) -> tuple[str, PlaceholderForm]:
        if not content:
            return PLACEHOLDER_SIGIL + '""', PlaceholderForm.EMPTY
        hashes = "#" * _hashes(content)
        if "\n" in content:
            lines = [
                indent + line.rstrip() if line.strip() else ""
                for line in content.rstrip("\n").split("\n")
            ]
            body = newline.join(lines)
            text = f'{PLACEHOLDER_SIGIL}r{hashes}"{newline}{body}{newline}{indent}"{hashes}'
        elif hashes or "\\" in content:
            text = f'{PLACEHOLDER_SIGIL}r{hashes}"{content}"{hashes}'
        else:
            text = f'{PLACEHOLDER_SIGIL}"{content}"'
        return text, PlaceholderForm.STRING_LITERAL


_POLICIES: dict[ValueKind, LiteralPolicy] = {
    ValueKind.TOKENS: TokenLiteralPolicy(),
    ValueKind.STRING: StringLiteralPolicy(),
}


def policy_for(kind: ValueKind) -> LiteralPolicy:
    """Return the registered policy for ``kind``."""
    return _POLICIES[kind]


def register_policy(policy: LiteralPolicy) -> LiteralPolicy | None:
    """Register ``policy`` for its kind.

    Args:
        policy (LiteralPolicy): The policy to install.

    Returns:
        LiteralPolicy | None: The policy previously registered for that kind.
    """
    previous = _POLICIES.get(policy.kind)
    _POLICIES[policy.kind] = policy
    logger.debug("literal policy for %s: %s", policy.kind.value, type(policy).__name__)
    return previous
