# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE-aware logger and environment log level resolution."""

from __future__ import annotations

import logging as std_logging

import pytest

from tests.conftest import parametrize
from tokensnap.config.logging import (
    TRACE_LEVEL,
    LOG_FORMAT,
    DiagnosticFormatter,
    TokensnapLogger,
    get_logger,
    resolve_env_log_level,
    setup_logging,
)
from tokensnap.constants import ENV_LOG_LEVEL


def test_get_logger_returns_tokensnap_logger() -> None:
    assert isinstance(get_logger("tokensnap.test"), TokensnapLogger)
    assert std_logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_trace_is_emitted_below_debug(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("tokensnap.test.trace")
    with caplog.at_level(TRACE_LEVEL, logger="tokensnap.test.trace"):
        logger.trace("routed to tier %s", "expression")
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (TRACE_LEVEL, "routed to tier expression")
    ]


@parametrize(
    "value, level",
    [
        ("TRACE", TRACE_LEVEL),
        ("debug", std_logging.DEBUG),
        (" warn ", std_logging.WARNING),
        ("10", 10),
        ("bogus", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, value: str, level: int | None
) -> None:
    monkeypatch.setenv(ENV_LOG_LEVEL, value)
    assert resolve_env_log_level() == level


def test_resolve_env_log_level_unset() -> None:
    assert resolve_env_log_level() is None


@parametrize(
    "name, expected",
    [
        ("tokensnap.snapshot.patch", "[WARNING] snapshot.patch: careful"),
        ("other.module", "[WARNING] other.module: careful"),
    ],
)
def test_formatter_names_component(name: str, expected: str) -> None:
    record = std_logging.LogRecord(name, std_logging.WARNING, __file__, 1, "careful", None, None)
    formatted = DiagnosticFormatter(LOG_FORMAT).format(record)
    assert expected in formatted


def test_setup_logging_replaces_handlers() -> None:
    setup_logging(level=std_logging.INFO)
    setup_logging(level=TRACE_LEVEL)
    root = std_logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, DiagnosticFormatter)
    assert root.level == TRACE_LEVEL
