# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_normalize_property.py
#   file_relpath : tests/snapshot/test_normalize_property.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for semantic token equality and canonical rendering.

For generated struct and function sources this suite asserts:
1) equality is reflexive and blind to whitespace and doc comments;
2) the canonical rendering re-tokenizes to an equal tree;
3) rendering is stable: rendering the rendering changes nothing.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings

from tests.strategies_tokensnap import s_source, s_source_pair
from tokensnap.lang.lexer import tokenize
from tokensnap.snapshot.normalize import Tier, parse_tiered, tokens_equal
from tokensnap.snapshot.render import render

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

PROPERTY_SETTINGS = settings(
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.filter_too_much],
    deadline=None,
    max_examples=60,
)


@PROPERTY_SETTINGS
@given(source=s_source())
def test_generated_sources_are_complete_units(source: str) -> None:
    assert parse_tiered(tokenize(source)).tier is Tier.COMPLETE_UNIT


@PROPERTY_SETTINGS
@given(source=s_source(docs=True))
def test_equality_is_reflexive(source: str) -> None:
    tokens = tokenize(source)
    assert tokens_equal(tokens, tokens)
    assert tokens_equal(tokens, tokenize(source))


@PROPERTY_SETTINGS
@given(pair=s_source_pair())
def test_whitespace_never_matters(pair: tuple[str, str]) -> None:
    left, right = pair
    assert tokens_equal(tokenize(left), tokenize(right))


@PROPERTY_SETTINGS
@given(source=s_source(docs=True))
def test_doc_comments_ignored(source: str) -> None:
    assert tokens_equal(tokenize("/// Extra docs.\n" + source), tokenize(source))


@PROPERTY_SETTINGS
@given(source=s_source(docs=True))
def test_rendering_round_trips(source: str) -> None:
    tokens = tokenize(source)
    assert tokens_equal(tokenize(render(tokens)), tokens)


@PROPERTY_SETTINGS
@given(source=s_source())
def test_rendering_is_stable(source: str) -> None:
    once = render(tokenize(source))
    assert render(tokenize(once)) == once
