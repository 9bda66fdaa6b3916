# topmark:header:start
#
#   project      : TokenSnap
#   file         : patch.py
#   file_relpath : src/tokensnap/snapshot/patch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pending inline-literal updates and their application to source files.

An update replaces exactly the span of one placeholder (``@`` through the
closing delimiter); everything outside the span is kept byte-for-byte.

All updates for one file are applied against a single snapshot of its text,
from the last span to the first, so earlier offsets stay valid. Identical
duplicate updates collapse into one; two different updates touching
overlapping spans raise
[`PatchConflictError`][tokensnap.core.errors.PatchConflictError]. An update
whose span no longer holds the expected literal raises
[`StaleSnapshotError`][tokensnap.core.errors.StaleSnapshotError].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.core.errors import PatchConflictError, StaleSnapshotError, TokensnapError
from tokensnap.snapshot.literal import policy_for
from tokensnap.utils.file import detect_newline, read_source, write_text_atomic

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from tokensnap.snapshot.literal import PlaceholderForm, ValueKind
    from tokensnap.snapshot.placeholder import InlinePlaceholder

logger: TokensnapLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PendingUpdate:
    """Replacement of one placeholder span."""

    path: Path | None
    start: int
    end: int
    old_text: str
    new_text: str
    form: PlaceholderForm


@dataclass
class PatchReport:
    """Outcome of [`patch_files`][tokensnap.snapshot.patch.patch_files]."""

    succeeded: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when no file failed."""
        return not self.failed


def compute_update(
    text: str,
    placeholder: InlinePlaceholder,
    new_content: str,
    *,
    kind: ValueKind | None = None,
) -> PendingUpdate | None:
    """Compute the update turning ``placeholder`` into a literal for ``new_content``.

    Args:
        text (str): The source text the placeholder was located in.
        placeholder (InlinePlaceholder): The located literal.
        new_content (str): The fresh value, as rendered for a literal.
        kind (ValueKind | None): Kind of the fresh value (defaults to the literal's kind).

    Returns:
        PendingUpdate | None: The update, or ``None`` when the recorded content is
        already equivalent to ``new_content``.
    """
    policy = policy_for(kind or placeholder.kind)
    if policy.equivalent(placeholder.content, new_content):
        logger.debug("placeholder at line %d is up to date", placeholder.line)
        return None
    new_text, form = policy.format(new_content, placeholder.indent, detect_newline(text))
    old_text = text[placeholder.start : placeholder.end]
    logger.debug(
        "placeholder at line %d: %s -> %s literal",
        placeholder.line,
        placeholder.form.value,
        form.value,
    )
    return PendingUpdate(
        path=placeholder.path,
        start=placeholder.start,
        end=placeholder.end,
        old_text=old_text,
        new_text=new_text,
        form=form,
    )


def apply_updates(text: str, updates: Iterable[PendingUpdate]) -> str:
    """Apply ``updates`` to ``text`` in one pass.

    Args:
        text (str): The text all update offsets refer to.
        updates (Iterable[PendingUpdate]): Updates for this text.

    Returns:
        str: The rewritten text.

    Raises:
        PatchConflictError: When two different updates overlap.
        StaleSnapshotError: When an update's span does not hold its ``old_text``.
    """
    ordered = sorted(set(updates), key=lambda u: (u.start, u.end), reverse=True)
    for later, earlier in zip(ordered, ordered[1:]):
        if earlier.end > later.start:
            raise PatchConflictError(
                f"conflicting updates at offsets {earlier.start}..{earlier.end} "
                f"and {later.start}..{later.end}"
            )
    result = text
    for update in ordered:
        current = text[update.start : update.end]
        if current != update.old_text:
            raise StaleSnapshotError(
                f"expected {update.old_text!r} at offsets {update.start}..{update.end}, "
                f"found {current!r}"
            )
        result = result[: update.start] + update.new_text + result[update.end :]
    return result


def patch_files(updates: Iterable[PendingUpdate]) -> PatchReport:
    """Apply ``updates`` to the files they target.

    Each file is read once, rewritten with all of its updates and replaced
    atomically. A failure on one file is recorded in the report and does not
    prevent the other files from being patched.

    Args:
        updates (Iterable[PendingUpdate]): Updates; each must carry a path.

    Returns:
        PatchReport: Patched and failed files.
    """
    by_path: dict[Path, list[PendingUpdate]] = {}
    for update in updates:
        if update.path is None:
            raise ValueError("cannot patch an update without a path")
        by_path.setdefault(update.path, []).append(update)

    report = PatchReport()
    for path, pending in by_path.items():
        try:
            text = read_source(path)
            patched = apply_updates(text, pending)
            if patched != text:
                write_text_atomic(path, patched)
        except (OSError, TokensnapError) as exc:
            logger.error("failed to patch %s: %s", path, exc)
            report.failed[path] = str(exc)
            continue
        logger.info("patched %s (%d update(s))", path, len(pending))
        report.succeeded.append(path)
    return report
