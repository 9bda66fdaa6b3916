# topmark:header:start
#
#   project      : TokenSnap
#   file         : settings.py
#   file_relpath : src/tokensnap/config/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ambient, scope-stackable settings for token snapshots.

Two switches influence how token trees are compared and printed:

* ``format_tokens`` (default ``True``): pretty-print token trees through the
  structure-aware formatter; when ``False`` the raw token rendering is used.
* ``ignore_docs_for_tokens`` (default ``True``): strip doc attributes before
  structural comparison and printing.

Every thread owns its own stack of [`SettingsFrame`][tokensnap.config.settings.SettingsFrame]
overrides. [`settings_scope`][tokensnap.config.settings.settings_scope] pushes
a frame and always pops it again, whatever way the scope is left. Lookups
resolve the innermost frame that sets a value, then the process-wide base
settings (seeded from project configuration), then the defaults.

Example:
    ```python
    from tokensnap.config.settings import current_settings, settings_scope

    with settings_scope(format_tokens=False):
        assert current_settings().format_tokens is False
    assert current_settings().format_tokens is True
    ```

``settings_scope`` objects also work as decorators::

    @settings_scope(ignore_docs_for_tokens=False)
    def test_docs_matter() -> None: ...
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from tokensnap.config.logging import TokensnapLogger, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

logger: TokensnapLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Settings:
    """Fully resolved settings visible at one point of execution."""

    format_tokens: bool = True
    ignore_docs_for_tokens: bool = True


@dataclass(frozen=True, slots=True)
class SettingsFrame:
    """One override frame; ``None`` means "inherit from the enclosing frame"."""

    format_tokens: bool | None = None
    ignore_docs_for_tokens: bool | None = None


_base_lock = threading.RLock()
_base: Settings = Settings()


class _FrameStack(threading.local):
    def __init__(self) -> None:
        self.frames: list[SettingsFrame] = []


_local = _FrameStack()


def get_base_settings() -> Settings:
    """Return the process-wide base settings (below all frames)."""
    with _base_lock:
        return _base


def set_base_settings(settings: Settings) -> Settings:
    """Replace the process-wide base settings.

    Args:
        settings (Settings): New base settings.

    Returns:
        Settings: The previous base settings, so callers can restore them.
    """
    global _base
    with _base_lock:
        previous = _base
        _base = settings
    logger.debug("Base settings replaced: %s -> %s", previous, settings)
    return previous


def current_settings() -> Settings:
    """Resolve the settings visible to the calling thread.

    Returns:
        Settings: Innermost override per field, falling back to the base settings.
    """
    base = get_base_settings()
    resolved: dict[str, bool] = {}
    for f in fields(Settings):
        value: bool = getattr(base, f.name)
        for frame in reversed(_local.frames):
            override: bool | None = getattr(frame, f.name)
            if override is not None:
                value = override
                break
        resolved[f.name] = value
    return Settings(**resolved)


def frame_depth() -> int:
    """Return the number of frames active on the calling thread."""
    return len(_local.frames)


@contextmanager
def settings_scope(
    *,
    format_tokens: bool | None = None,
    ignore_docs_for_tokens: bool | None = None,
) -> Iterator[Settings]:
    """Push an override frame for the duration of a ``with`` block.

    On exit (normal, early return or exception) the stack is truncated back to
    its depth at entry, restoring the exact previously visible settings.

    Args:
        format_tokens (bool | None): Override for ``format_tokens``.
        ignore_docs_for_tokens (bool | None): Override for ``ignore_docs_for_tokens``.

    Yields:
        Settings: The settings resolved inside the new scope.
    """
    frame = SettingsFrame(
        format_tokens=format_tokens,
        ignore_docs_for_tokens=ignore_docs_for_tokens,
    )
    frames: list[SettingsFrame] = _local.frames
    depth = len(frames)
    frames.append(frame)
    logger.trace("settings frame pushed (depth=%d): %s", depth + 1, frame)
    try:
        yield current_settings()
    finally:
        del frames[depth:]
        logger.trace("settings frame popped (depth=%d)", depth)
