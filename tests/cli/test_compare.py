# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_compare.py
#   file_relpath : tests/cli/test_compare.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `compare` checks token files for semantic equality."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.cli.conftest import assert_exit, assert_SUCCESS, run_cli_in
from tests.conftest import write_file
from tokensnap.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


def test_compare_ignores_formatting(tmp_path: Path) -> None:
    write_file(tmp_path / "recorded.rs", "struct Foo { x: i32 }")
    write_file(tmp_path / "actual.rs", "struct    Foo   {\n x  :  i32 }")
    result = run_cli_in(tmp_path, ["compare", "recorded.rs", "actual.rs"])
    assert_SUCCESS(result)
    assert result.output == "equal\n"


def test_compare_reports_difference(tmp_path: Path) -> None:
    write_file(tmp_path / "recorded.rs", "struct Foo;")
    write_file(tmp_path / "actual.rs", "struct Bar;")
    result = run_cli_in(tmp_path, ["compare", "recorded.rs", "actual.rs"])
    assert_exit(result, ExitCode.FAILURE)
    lines = result.output.splitlines()
    assert lines[0] == "different"
    assert "-struct Foo;" in lines
    assert "+struct Bar;" in lines


def test_compare_stdin_against_file(tmp_path: Path) -> None:
    write_file(tmp_path / "recorded.rs", "1 + 2")
    result = run_cli_in(tmp_path, ["compare", "recorded.rs", "-"], input_text="1+2")
    assert_SUCCESS(result)


def test_compare_doc_comments(tmp_path: Path) -> None:
    write_file(tmp_path / "recorded.rs", "/// Docs.\nstruct Foo;")
    write_file(tmp_path / "actual.rs", "struct Foo;")
    assert_SUCCESS(run_cli_in(tmp_path, ["compare", "recorded.rs", "actual.rs"]))
    result = run_cli_in(tmp_path, ["compare", "--keep-docs", "recorded.rs", "actual.rs"])
    assert_exit(result, ExitCode.FAILURE)


def test_compare_quiet(tmp_path: Path) -> None:
    write_file(tmp_path / "recorded.rs", "struct Foo;")
    write_file(tmp_path / "actual.rs", "struct Bar;")
    result = run_cli_in(tmp_path, ["-q", "compare", "recorded.rs", "actual.rs"])
    assert_exit(result, ExitCode.FAILURE)
    assert result.output == ""


def test_compare_missing_file(tmp_path: Path) -> None:
    write_file(tmp_path / "recorded.rs", "struct Foo;")
    result = run_cli_in(tmp_path, ["compare", "recorded.rs", "nope.rs"])
    assert_exit(result, ExitCode.FILE_NOT_FOUND)
