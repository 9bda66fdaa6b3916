# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_file.py
#   file_relpath : tests/utils/test_file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File utils: newline-preserving reads, atomic writes and relative paths."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from tests.conftest import parametrize, write_file
from tokensnap.utils.file import compute_relpath, detect_newline, read_source, write_text_atomic


def test_read_source_keeps_line_endings(tmp_path: Path) -> None:
    path = write_file(tmp_path / "a.rs", "a\r\nb\n")
    assert read_source(path) == "a\r\nb\n"


@parametrize(
    "text, newline",
    [
        ("a\r\nb\nc", "\r\n"),
        ("a\nb\r\n", "\n"),
        ("a\rb", "\r"),
        ("no break", "\n"),
        ("", "\n"),
    ],
)
def test_detect_newline_returns_first_break(text: str, newline: str) -> None:
    assert detect_newline(text) == newline


def test_write_text_atomic_replaces_content(tmp_path: Path) -> None:
    path = write_file(tmp_path / "a.rs", "old\n")
    write_text_atomic(path, "new\r\n")
    assert read_source(path) == "new\r\n"
    assert os.listdir(tmp_path) == ["a.rs"]


def test_write_text_atomic_creates_file(tmp_path: Path) -> None:
    path = tmp_path / "b.rs"
    write_text_atomic(path, "fresh")
    assert read_source(path) == "fresh"


def test_write_text_atomic_preserves_mode(tmp_path: Path) -> None:
    path = write_file(tmp_path / "a.rs", "old\n")
    path.chmod(0o600)
    write_text_atomic(path, "new\n")
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_write_text_atomic_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        write_text_atomic(tmp_path / "nope" / "a.rs", "x")


def test_compute_relpath(tmp_path: Path) -> None:
    root = tmp_path / "proj"
    inner = write_file(root / "src" / "lib.rs", "")
    outer = write_file(tmp_path / "other" / "x.rs", "")
    assert compute_relpath(inner, root) == Path("src/lib.rs")
    assert compute_relpath(outer, root) == Path("../other/x.rs")
