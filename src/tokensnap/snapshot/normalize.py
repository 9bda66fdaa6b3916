# topmark:header:start
#
#   project      : TokenSnap
#   file         : normalize.py
#   file_relpath : src/tokensnap/snapshot/normalize.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tiered parsing and semantic equality of token trees.

A token tree is interpreted at the first tier that accepts it:

1. [`CompleteUnit`][tokensnap.snapshot.normalize.CompleteUnit]: a whole
   source file (items and inner attributes);
2. [`Expression`][tokensnap.snapshot.normalize.Expression]: a single expression;
3. [`Unparsed`][tokensnap.snapshot.normalize.Unparsed]: anything else, kept as
   its raw rendering.

Parse failures never escape this module: a tier that does not apply simply
yields `Unparsed`. Tiers 1 and 2 require a clean tree-sitter parse of the raw
rendering. Structural comparison at these tiers ignores whitespace, formatting,
trailing commas and (by default) doc comments; tier 3 compares raw text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.config.settings import current_settings
from tokensnap.lang.strip import strip_docs
from tokensnap.lang.syntax import try_parse_expr, try_parse_file

if TYPE_CHECKING:
    from tokensnap.lang.syntax import SyntaxNode
    from tokensnap.lang.tokens import TokenTree

logger: TokensnapLogger = get_logger(__name__)


class Tier(Enum):
    """Interpretation tiers, in attempt order."""

    COMPLETE_UNIT = "complete-unit"
    EXPRESSION = "expression"
    UNPARSED = "unparsed"


@dataclass(frozen=True, slots=True)
class CompleteUnit:
    """A token tree that parses as a whole source file (a ``source_file`` tree)."""

    file: SyntaxNode

    @property
    def tier(self) -> Tier:
        return Tier.COMPLETE_UNIT


@dataclass(frozen=True, slots=True)
class Expression:
    """A token tree that parses as a single expression."""

    expr: SyntaxNode

    @property
    def tier(self) -> Tier:
        return Tier.EXPRESSION


@dataclass(frozen=True, slots=True)
class Unparsed:
    """A token tree no parser accepts, kept as its raw rendering."""

    text: str

    @property
    def tier(self) -> Tier:
        return Tier.UNPARSED


ParsedForm = Union[CompleteUnit, Expression, Unparsed]

_STRUCTURED: tuple[Tier, ...] = (Tier.COMPLETE_UNIT, Tier.EXPRESSION)


def parse_as(tokens: TokenTree, tier: Tier) -> ParsedForm:
    """Interpret ``tokens`` at ``tier`` only.

    Args:
        tokens (TokenTree): The token tree.
        tier (Tier): The tier to attempt.

    Returns:
        ParsedForm: The parsed form, or `Unparsed` when the tier does not apply.
    """
    if tier is Tier.COMPLETE_UNIT:
        file = try_parse_file(tokens)
        if file is not None:
            return CompleteUnit(file)
    elif tier is Tier.EXPRESSION:
        expr = try_parse_expr(tokens)
        if expr is not None:
            return Expression(expr)
    return Unparsed(str(tokens))


def parse_tiered(tokens: TokenTree) -> ParsedForm:
    """Interpret ``tokens`` at the first tier that accepts it.

    An empty tree is an empty complete unit.

    Args:
        tokens (TokenTree): The token tree.

    Returns:
        ParsedForm: The parsed form; never raises.
    """
    for tier in _STRUCTURED:
        form = parse_as(tokens, tier)
        if not isinstance(form, Unparsed):
            logger.trace("token tree routed to tier %s", tier.value)
            return form
    logger.trace("token tree routed to tier %s", Tier.UNPARSED.value)
    return Unparsed(str(tokens))


def without_docs(form: ParsedForm) -> ParsedForm:
    """Strip doc attributes from a structured form; `Unparsed` is returned as-is."""
    if isinstance(form, CompleteUnit):
        return CompleteUnit(strip_docs(form.file))
    if isinstance(form, Expression):
        return Expression(strip_docs(form.expr))
    return form


def tokens_equal(a: TokenTree, b: TokenTree) -> bool:
    """Return whether two token trees are semantically equal.

    Both trees are tried as complete units first, then as expressions; the
    first tier accepting *both* decides, comparing syntax trees (with doc
    attributes stripped unless ``ignore_docs_for_tokens`` is off). When no
    tier accepts both, the raw renderings are compared verbatim.

    Args:
        a (TokenTree): Left token tree.
        b (TokenTree): Right token tree.

    Returns:
        bool: ``True`` when the trees are equivalent.
    """
    ignore_docs = current_settings().ignore_docs_for_tokens
    for tier in _STRUCTURED:
        left = parse_as(a, tier)
        right = parse_as(b, tier)
        if isinstance(left, Unparsed) or isinstance(right, Unparsed):
            continue
        if ignore_docs:
            left, right = without_docs(left), without_docs(right)
        equal = left == right
        logger.trace("compared at tier %s: equal=%s", tier.value, equal)
        return equal
    equal = str(a) == str(b)
    logger.trace("compared raw renderings: equal=%s", equal)
    return equal
