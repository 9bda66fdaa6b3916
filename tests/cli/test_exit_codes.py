# topmark:header:start
#
#   project      : TokenSnap
#   file         : test_exit_codes.py
#   file_relpath : tests/cli/test_exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: group-level failures map to sysexits-style exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.cli.conftest import assert_exit, assert_SUCCESS, run_cli, run_cli_in
from tests.conftest import write_file
from tokensnap.cli.exit_codes import ExitCode
from tokensnap.config.settings import Settings, current_settings

if TYPE_CHECKING:
    from pathlib import Path


def test_invalid_configuration(tmp_path: Path) -> None:
    write_file(tmp_path / "tokensnap.toml", 'format_tokens = "yes"\n')
    result = run_cli_in(tmp_path, ["version"])
    assert_exit(result, ExitCode.CONFIG_ERROR)
    assert "'format_tokens' must be a boolean" in result.output


def test_malformed_configuration(tmp_path: Path) -> None:
    write_file(tmp_path / "tokensnap.toml", "format_tokens = \n")
    assert_exit(run_cli_in(tmp_path, ["version"]), ExitCode.CONFIG_ERROR)


def test_explicit_configuration_file(tmp_path: Path) -> None:
    conf = write_file(tmp_path / "conf" / "snap.toml", "format_tokens = false\n")
    write_file(tmp_path / "lib.rs", "struct A { x: u8 }")
    result = run_cli_in(tmp_path, ["--config", str(conf), "fmt", "lib.rs"])
    assert_SUCCESS(result)
    assert result.output == "struct A { x : u8 }\n"


def test_base_settings_restored_after_command(tmp_path: Path) -> None:
    write_file(tmp_path / "tokensnap.toml", "ignore_docs_for_tokens = false\n")
    assert_SUCCESS(run_cli_in(tmp_path, ["version"]))
    assert current_settings() == Settings()


def test_verbose_and_quiet_are_exclusive() -> None:
    assert_exit(run_cli(["-v", "-q", "version"]), ExitCode.USAGE_ERROR)


def test_no_subcommand_prints_help() -> None:
    result = run_cli([])
    assert_SUCCESS(result)
    assert "Hint: use 'tokensnap fmt FILE'" in result.output
    assert "tree-diff" in result.output
