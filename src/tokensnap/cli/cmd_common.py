# topmark:header:start
#
#   project      : TokenSnap
#   file         : cmd_common.py
#   file_relpath : src/tokensnap/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands:
reading inputs (files or STDIN), tokenizing them with compiler-style
diagnostics, and accessing the shared console and configuration.
"""

from __future__ import annotations

from pathlib import Path

import click

from tokensnap.cli.console import SnapshotConsole
from tokensnap.cli.errors import TokensnapFileNotFoundError, TokensnapIOError, TokensnapSyntaxError
from tokensnap.config.io import ProjectConfig
from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.core.errors import TokenizeError
from tokensnap.lang.lexer import tokenize
from tokensnap.lang.tokens import TokenTree
from tokensnap.utils.file import read_source

logger: TokensnapLogger = get_logger(__name__)

STDIN_NAME: str = "-"


def get_console(ctx: click.Context) -> SnapshotConsole:
    """Return the console created by the group (a plain one when invoked standalone)."""
    ctx.ensure_object(dict)
    console = ctx.obj.get("console")
    if console is None:
        console = SnapshotConsole()
        ctx.obj["console"] = console
    return console


def get_config(ctx: click.Context) -> ProjectConfig:
    """Return the project configuration loaded by the group (defaults otherwise)."""
    ctx.ensure_object(dict)
    config = ctx.obj.get("config")
    return config if isinstance(config, ProjectConfig) else ProjectConfig()


def get_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (negative when quiet)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", 0))


def read_input(name: str) -> str:
    """Read a file, or STDIN when ``name`` is ``-``.

    Raises:
        TokensnapFileNotFoundError: When the file does not exist.
        TokensnapSyntaxError: When the file is not valid UTF-8.
        TokensnapIOError: On any other read error.
    """
    if name == STDIN_NAME:
        return click.get_text_stream("stdin").read()
    path = Path(name)
    try:
        return read_source(path)
    except FileNotFoundError as exc:
        raise TokensnapFileNotFoundError(f"File not found: {name}") from exc
    except UnicodeDecodeError as exc:
        raise TokensnapSyntaxError(f"{name}: not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise TokensnapIOError(f"Cannot read {name}: {exc}") from exc


def display_name(name: str) -> str:
    """Return the name used in diagnostics for an input."""
    return "<stdin>" if name == STDIN_NAME else name


def tokenize_input(text: str, name: str) -> TokenTree:
    """Tokenize ``text`` read from ``name``.

    Raises:
        TokensnapSyntaxError: With the compiler-style diagnostic as message.
    """
    try:
        return tokenize(text)
    except TokenizeError as exc:
        logger.debug("tokenizing %s failed: %s", name, exc)
        raise TokensnapSyntaxError(exc.render(text, display_name(name)).rstrip("\n")) from exc


def read_tokens(name: str) -> TokenTree:
    """Read and tokenize a file (or STDIN)."""
    return tokenize_input(read_input(name), name)
