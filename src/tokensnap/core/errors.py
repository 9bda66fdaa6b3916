# topmark:header:start
#
#   project      : TokenSnap
#   file         : errors.py
#   file_relpath : src/tokensnap/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception hierarchy for the TokenSnap core.

The core distinguishes routing signals from failures:

* parse-tier fallbacks are *not* exceptions outside `tokensnap.lang.syntax`;
* `TokenizeError` is the host-compiler diagnostic for text that cannot be
  tokenized at all. The core never repairs or rewraps it;
* the remaining errors describe placeholder lookup, patch and config problems.

CLI-facing exceptions (with exit codes) live in `tokensnap.cli.errors`.
"""

from __future__ import annotations

from pathlib import Path


class TokensnapError(Exception):
    """Base class for all TokenSnap core errors."""


class TokenizeError(TokensnapError):
    """Source text cannot be tokenized (unterminated literal, bad delimiter).

    Attributes:
        message (str): Compiler-style message, e.g. ``unterminated double quote string``.
        offset (int): Character offset of the offending position in the lexed text.
        line (int): 1-based line of ``offset``.
        column (int): 1-based column of ``offset``.
    """

    def __init__(self, message: str, *, offset: int, line: int, column: int) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.message} (line {self.line}, column {self.column})"

    def shifted(self, *, offset: int, line: int, column: int) -> TokenizeError:
        """Return a copy relocated into an enclosing text.

        Args:
            offset (int): Offset of the lexed fragment within the enclosing text.
            line (int): 1-based line where the fragment starts.
            column (int): 1-based column where the fragment starts.

        Returns:
            TokenizeError: The same message with positions relative to the enclosing text.
        """
        return TokenizeError(
            self.message,
            offset=self.offset + offset,
            line=self.line + line - 1,
            column=self.column + column - 1 if self.line == 1 else self.column,
        )

    def render(self, source: str, path: str | Path | None = None) -> str:
        """Render a rustc-style diagnostic for this error.

        Args:
            source (str): The text the positions refer to.
            path (str | Path | None): Display path of the file.

        Returns:
            str: Multi-line diagnostic (``error: ...``, location, source line, caret).
        """
        lines = source.splitlines()
        text = lines[self.line - 1] if 0 < self.line <= len(lines) else ""
        gutter = " " * len(str(self.line))
        where = f"{path}:{self.line}:{self.column}" if path else f"{self.line}:{self.column}"
        return (
            f"error: {self.message}\n"
            f"{gutter}--> {where}\n"
            f"{gutter} |\n"
            f"{self.line} | {text}\n"
            f"{gutter} | {' ' * (self.column - 1)}^\n"
        )


class PlaceholderNotFoundError(TokensnapError):
    """No assertion directive, or no inline ``@`` literal, at the given location."""


class PatchConflictError(TokensnapError):
    """Two pending updates for one file overlap with different replacements."""


class StaleSnapshotError(TokensnapError):
    """A pending update no longer matches the text it is applied to."""


class ConfigError(TokensnapError):
    """Project configuration is unreadable or holds invalid values."""
