# topmark:header:start
#
#   project      : TokenSnap
#   file         : session.py
#   file_relpath : src/tokensnap/snapshot/session.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Snapshot assertion runtime.

A [`SnapshotSession`][tokensnap.snapshot.session.SnapshotSession] checks
fresh values against recorded snapshots:

* inline literals (``assert_snapshot!(tokens, @{ ... })``) located through
  the assertion's [`CallSite`][tokensnap.snapshot.session.CallSite];
* named snapshot files (see `tokensnap.snapshot.store`).

In `SnapshotMode.REPORT` a mismatch raises
[`SnapshotMismatchError`][tokensnap.snapshot.session.SnapshotMismatchError]
carrying a unified diff. In `SnapshotMode.ACCEPT` the change is queued and
written by [`finish`][tokensnap.snapshot.session.SnapshotSession.finish]:
each source file is read once and all its placeholders are rewritten in a
single atomic replace, however many assertions it holds.

Sessions may be shared by worker threads.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from tokensnap.config.io import ProjectConfig
from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.lang.lexer import tokenize
from tokensnap.lang.tokens import TokenTree
from tokensnap.snapshot.literal import ValueKind
from tokensnap.snapshot.normalize import tokens_equal
from tokensnap.snapshot.patch import (
    PatchReport,
    PendingUpdate,
    apply_updates,
    compute_update,
    patch_files,
)
from tokensnap.snapshot.placeholder import locate_placeholder
from tokensnap.snapshot.render import render_for_literal
from tokensnap.snapshot.store import read_snapshot, snapshot_content, snapshot_path, write_snapshot
from tokensnap.utils.diff import unified_diff
from tokensnap.utils.file import compute_relpath, read_source

logger: TokensnapLogger = get_logger(__name__)


class SnapshotMode(Enum):
    """What a session does with mismatches."""

    REPORT = "report"
    ACCEPT = "accept"


@dataclass(frozen=True, slots=True)
class CallSite:
    """Location of an assertion: source file, 1-based line, optional module name."""

    path: Path
    line: int
    module: str | None = None

    @property
    def module_name(self) -> str:
        """Module name used in snapshot file names (the file stem by default)."""
        return self.module or self.path.stem


@dataclass(frozen=True, slots=True)
class MismatchRecord:
    """A detected difference between a recorded and a fresh value."""

    path: Path
    diff: str
    new_content: str


class SnapshotMismatchError(AssertionError):
    """A snapshot does not match (report mode)."""

    def __init__(self, record: MismatchRecord) -> None:
        super().__init__(f"snapshot mismatch in {record.path}\n{record.diff}")
        self.record = record


class SnapshotSession:
    """Check values against snapshots and collect accepted changes.

    Args:
        mode (SnapshotMode): Report or accept mismatches.
        config (ProjectConfig | None): Directives and snapshot file layout.
    """

    def __init__(
        self,
        mode: SnapshotMode = SnapshotMode.REPORT,
        *,
        config: ProjectConfig | None = None,
    ) -> None:
        self.mode = mode
        self.config = config or ProjectConfig()
        self.mismatches: list[MismatchRecord] = []
        self._lock = threading.Lock()
        self._sources: dict[Path, str] = {}
        self._pending: list[PendingUpdate] = []
        self._named: dict[Path, str] = {}

    def _source(self, path: Path) -> str:
        with self._lock:
            text = self._sources.get(path)
            if text is None:
                text = read_source(path)
                self._sources[path] = text
            return text

    def _mismatch(self, record: MismatchRecord) -> None:
        with self._lock:
            self.mismatches.append(record)
        logger.info("snapshot mismatch in %s", record.path)
        if self.mode is SnapshotMode.REPORT:
            raise SnapshotMismatchError(record)

    def assert_inline(self, actual: TokenTree | str, site: CallSite) -> None:
        """Check ``actual`` against the inline literal of the assertion at ``site``.

        Args:
            actual (TokenTree | str): The fresh value (token tree or plain text).
            site (CallSite): The assertion's location.

        Raises:
            SnapshotMismatchError: In report mode, when the literal does not match.
            PlaceholderNotFoundError: When there is no assertion or literal at ``site``.
            TokenizeError: When the recorded literal cannot be tokenized.
        """
        text = self._source(site.path)
        placeholder = locate_placeholder(
            text, site.line, path=site.path, directives=self.config.directives
        )
        if isinstance(actual, TokenTree):
            kind, new_content = ValueKind.TOKENS, render_for_literal(actual)
        else:
            kind, new_content = ValueKind.STRING, actual
        update = compute_update(text, placeholder, new_content, kind=kind)
        if update is None:
            return
        preview = apply_updates(text, [update])
        diff = unified_diff(text, preview, path=compute_relpath(site.path))
        self._mismatch(MismatchRecord(site.path, diff, new_content))
        with self._lock:
            self._pending.append(update)

    def assert_named(self, actual: TokenTree | str, name: str, site: CallSite) -> None:
        """Check ``actual`` against the named snapshot file for ``site``.

        Raises:
            SnapshotMismatchError: In report mode, when the file is missing or differs.
            TokenizeError: When the recorded token snapshot cannot be tokenized.
        """
        path = snapshot_path(site, name, self.config)
        existing = read_snapshot(path)
        if isinstance(actual, TokenTree):
            content = snapshot_content(actual)
            if existing is not None and tokens_equal(actual, tokenize(existing)):
                return
        else:
            content = actual if actual.endswith("\n") else actual + "\n"
            if existing == content:
                return
        diff = unified_diff(existing or "", content, path=compute_relpath(path))
        self._mismatch(MismatchRecord(path, diff, content))
        with self._lock:
            self._named[path] = content

    def finish(self) -> PatchReport:
        """Write all accepted changes and reset the session.

        Returns:
            PatchReport: Written and failed files (inline sources and snapshot files).
        """
        with self._lock:
            pending, self._pending = self._pending, []
            named, self._named = self._named, {}
            self._sources.clear()
        report = patch_files(pending)
        for path, content in named.items():
            try:
                write_snapshot(path, content)
            except OSError as exc:
                logger.error("failed to write snapshot %s: %s", path, exc)
                report.failed[path] = str(exc)
                continue
            report.succeeded.append(path)
        logger.info(
            "session finished: %d file(s) written, %d failed",
            len(report.succeeded),
            len(report.failed),
        )
        return report
