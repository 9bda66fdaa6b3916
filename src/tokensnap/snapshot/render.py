# topmark:header:start
#
#   project      : TokenSnap
#   file         : render.py
#   file_relpath : src/tokensnap/snapshot/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical text of token trees for snapshots.

[`render`][tokensnap.snapshot.render.render] formats a tree the way rustfmt
would when it parses as a file or an expression, and falls back to the raw
token rendering otherwise (or when formatting is switched off).
[`render_for_literal`][tokensnap.snapshot.render.render_for_literal] adapts
the result for embedding in an inline ``@{ ... }`` literal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.config.settings import current_settings
from tokensnap.lang.printer import unparse_expr, unparse_file
from tokensnap.snapshot.normalize import CompleteUnit, Expression, parse_tiered, without_docs

if TYPE_CHECKING:
    from tokensnap.lang.tokens import TokenTree

logger: TokensnapLogger = get_logger(__name__)


def render(tokens: TokenTree) -> str:
    """Render ``tokens`` as canonical text.

    Args:
        tokens (TokenTree): The token tree.

    Returns:
        str: Formatted source for complete units (without the trailing newline)
        and expressions; the raw rendering otherwise.
    """
    settings = current_settings()
    if not settings.format_tokens:
        return str(tokens)
    form = parse_tiered(tokens)
    if settings.ignore_docs_for_tokens:
        form = without_docs(form)
    try:
        if isinstance(form, CompleteUnit):
            text = unparse_file(form.file)
            return text[:-1] if text.endswith("\n") else text
        if isinstance(form, Expression):
            return unparse_expr(form.expr)
    except RecursionError:
        logger.warning("token tree too deeply nested to format; using raw rendering")
    return str(tokens)


def render_for_literal(tokens: TokenTree) -> str:
    """Render ``tokens`` for an inline literal.

    Multi-line text is framed by newlines (``"\\n" + text.rstrip() + "\\n"``) so
    the literal layout can put it on lines of its own; single-line text is
    returned unchanged.
    """
    rendered = render(tokens)
    if "\n" in rendered:
        return "\n" + rendered.rstrip() + "\n"
    return rendered
