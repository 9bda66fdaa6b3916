# topmark:header:start
#
#   project      : TokenSnap
#   file         : patch.py
#   file_relpath : src/tokensnap/cli/commands/patch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap `patch` command.

Rewrites the inline ``@`` literal of the assertion starting at
``SOURCE:LINE`` so that it records a new value:

```bash
tokensnap patch tests/parse.rs --line 12 --value actual.rs           # preview (exit 2)
tokensnap patch tests/parse.rs --line 12 --value actual.rs --apply   # rewrite in place
```

Without ``--apply`` the command is a dry run: it prints the diff and exits
with ``WOULD_CHANGE`` when the literal is out of date.
"""

from __future__ import annotations

from pathlib import Path

import click

from tokensnap.cli.cmd_common import (
    get_config,
    get_console,
    get_verbosity,
    read_input,
    tokenize_input,
)
from tokensnap.cli.errors import TokensnapIOError, TokensnapSyntaxError, TokensnapUsageError
from tokensnap.cli.exit_codes import ExitCode
from tokensnap.cli.options import settings_override_options
from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.config.settings import settings_scope
from tokensnap.core.errors import PlaceholderNotFoundError, TokenizeError
from tokensnap.snapshot.literal import ValueKind
from tokensnap.snapshot.patch import apply_updates, compute_update, patch_files
from tokensnap.snapshot.placeholder import locate_placeholder
from tokensnap.snapshot.render import render_for_literal
from tokensnap.utils.diff import unified_diff

logger: TokensnapLogger = get_logger(__name__)


@click.command(
    name="patch",
    help="Update the inline snapshot literal of the assertion at SOURCE:LINE.",
)
@click.argument("source", type=click.Path(dir_okay=False))
@click.option(
    "--line",
    "-l",
    "line",
    type=click.IntRange(min=1),
    required=True,
    help="1-based line on which the assertion call starts.",
)
@click.option(
    "--value",
    "value_source",
    type=click.Path(dir_okay=False, allow_dash=True),
    required=True,
    help="File holding the new value ('-' for STDIN).",
)
@click.option(
    "--string",
    "as_string",
    is_flag=True,
    default=False,
    help="Record the value as plain text instead of as a token tree.",
)
@click.option(
    "--apply",
    "apply_changes",
    is_flag=True,
    default=False,
    help="Write the change (default: dry run).",
)
@settings_override_options
def patch_command(
    *,
    source: str,
    line: int,
    value_source: str,
    as_string: bool,
    apply_changes: bool,
    format_tokens: bool | None,
    ignore_docs: bool | None,
) -> None:
    """Update one inline snapshot literal.

    Args:
        source (str): Source file holding the assertion.
        line (int): Line on which the assertion call starts.
        value_source (str): File (or ``-``) holding the new value.
        as_string (bool): Record the value as text.
        apply_changes (bool): Write the change instead of previewing it.
        format_tokens (bool | None): Override of the ``format_tokens`` setting.
        ignore_docs (bool | None): Override of the ``ignore_docs_for_tokens`` setting.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    config = get_config(ctx)
    verbosity = get_verbosity(ctx)

    text = read_input(source)
    value_text = read_input(value_source)
    path = Path(source)
    with settings_scope(format_tokens=format_tokens, ignore_docs_for_tokens=ignore_docs):
        try:
            placeholder = locate_placeholder(text, line, path=path, directives=config.directives)
        except PlaceholderNotFoundError as exc:
            raise TokensnapUsageError(str(exc)) from exc
        except TokenizeError as exc:
            raise TokensnapSyntaxError(exc.render(text, source).rstrip("\n")) from exc

        if as_string:
            kind, content = ValueKind.STRING, value_text
        else:
            tokens = tokenize_input(value_text, value_source)
            kind, content = ValueKind.TOKENS, render_for_literal(tokens)
        try:
            update = compute_update(text, placeholder, content, kind=kind)
        except TokenizeError as exc:
            raise TokensnapSyntaxError(
                f"{source}:{placeholder.line}: recorded value: {exc}"
            ) from exc

    if update is None:
        if verbosity >= 0:
            console.status(source, line, "snapshot is up to date")
        return

    diff = unified_diff(text, apply_updates(text, [update]), path=source)
    if verbosity >= 0:
        console.diff(diff)
    if not apply_changes:
        ctx.exit(ExitCode.WOULD_CHANGE)

    report = patch_files([update])
    if not report.ok:
        raise TokensnapIOError(
            "; ".join(
                f"Cannot patch {failed}: {message}" for failed, message in report.failed.items()
            )
        )
    if verbosity >= 0:
        console.status(source, line, "snapshot updated")
