# tests/test_cli.py
"""
Tests for the bc-checker command-line interface (CLI).

Scope
-----
1.  **Command Registration**: `check`, `verify` and `log` appear in `--help`.
2.  **Exit Codes**: every outcome maps to the documented exit code.
3.  **Configuration**: defaults come from `BC_*` environment variables.
4.  **Error Handling**: unexpected failures exit 1 with a readable message.

We use `typer.testing.CliRunner` to invoke the app in-process.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from bcchecker.cli import app
from bcchecker.core.contracts.change import ChangeEntry
from bcchecker.core.errors import BreakingChangesBlockedError
from bcchecker.core.settings import load_settings


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Create a fresh CliRunner for each test."""
    return CliRunner()


@pytest.fixture  # type: ignore[misc]
def files(
    tmp_path: Path, valid_sdl: str, compatible_sdl: str, breaking_sdl: str
) -> dict[str, Path]:
    """Write the sample schemas to disk and return their paths plus the snapshot path."""
    paths = {"snapshot": tmp_path / "schema.snapshot.graphql"}
    sources = {"valid": valid_sdl, "compatible": compatible_sdl, "breaking": breaking_sdl}
    for name, sdl in sources.items():
        paths[name] = tmp_path / f"{name}.graphql"
        paths[name].write_text(sdl, encoding="utf-8")
    return paths


def _check(runner: CliRunner, files: dict[str, Path], schema: str, *extra: str) -> Any:
    return runner.invoke(
        app, ["check", "--schema", str(files[schema]), "--snapshot", str(files["snapshot"]), *extra]
    )


def test_cli_help_shows_usage(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    for command in ("check", "verify", "log"):
        assert command in result.output


def test_first_run_creates_snapshot_and_fails(runner: CliRunner, files: dict[str, Path]) -> None:
    result = _check(runner, files, "valid")
    assert result.exit_code == 1, result.output
    assert "New schema snapshot saved" in result.output
    assert files["snapshot"].exists()


def test_unchanged_schema_passes(runner: CliRunner, files: dict[str, Path]) -> None:
    _check(runner, files, "valid")
    result = _check(runner, files, "valid")
    assert result.exit_code == 0, result.output
    assert "Congratulations!" in result.output


def test_compatible_change_regenerates_snapshot(runner: CliRunner, files: dict[str, Path]) -> None:
    _check(runner, files, "valid")
    before = files["snapshot"].read_text(encoding="utf-8")

    result = _check(runner, files, "compatible")

    assert result.exit_code == 1, result.output
    assert "IS OUTDATED" in result.output
    assert files["snapshot"].read_text(encoding="utf-8") != before


def test_breaking_change_is_blocked(runner: CliRunner, files: dict[str, Path]) -> None:
    _check(runner, files, "valid")
    before = files["snapshot"].read_text(encoding="utf-8")

    result = _check(runner, files, "breaking")

    assert result.exit_code == 1, result.output
    assert "BREAKING CHANGES" in result.output
    assert "FIELD_REMOVED" in result.output
    assert "not allowed" in result.output
    assert files["snapshot"].read_text(encoding="utf-8") == before


def test_allowed_breaking_change_is_recorded(runner: CliRunner, files: dict[str, Path]) -> None:
    _check(runner, files, "valid")

    result = _check(runner, files, "breaking", "--allow-breaking-changes")
    assert result.exit_code == 1, result.output
    assert "FIELD_REMOVED" in result.output
    assert "#   FIELD_REMOVED:" in files["snapshot"].read_text(encoding="utf-8")

    rerun = _check(runner, files, "breaking")
    assert rerun.exit_code == 0, rerun.output

    history = runner.invoke(app, ["log", str(files["snapshot"])])
    assert history.exit_code == 0, history.output
    assert "FIELD_REMOVED" in history.output


def test_allow_breaking_changes_from_environment(
    runner: CliRunner, files: dict[str, Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    _check(runner, files, "valid")
    monkeypatch.setenv("BC_ALLOW_BREAKING_CHANGES", "true")
    load_settings.cache_clear()

    result = _check(runner, files, "breaking")

    assert result.exit_code == 1, result.output
    assert "IS OUTDATED" in result.output


def test_schema_and_snapshot_from_environment(
    runner: CliRunner, files: dict[str, Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("BC_SCHEMA", str(files["valid"]))
    monkeypatch.setenv("BC_SNAPSHOT_LOCATION", str(files["snapshot"]))

    result = runner.invoke(app, ["check"])

    assert result.exit_code == 1, result.output
    assert files["snapshot"].exists()


def test_missing_schema_is_a_usage_error(runner: CliRunner) -> None:
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 2
    assert "No schema given" in result.output


def test_tampered_snapshot_is_rejected(runner: CliRunner, files: dict[str, Path]) -> None:
    _check(runner, files, "valid")
    snapshot = files["snapshot"]
    snapshot.write_text(snapshot.read_text(encoding="utf-8").replace("id: String", "id: ID"))

    result = _check(runner, files, "valid")

    assert result.exit_code == 1, result.output
    assert "Manual changes" in result.output


def test_unexpected_error_exits_1(runner: CliRunner, files: dict[str, Path]) -> None:
    with patch("bcchecker.cli.check_backward_compatibility", side_effect=RuntimeError("boom")):
        result = _check(runner, files, "valid")
    assert result.exit_code == 1
    assert "boom" in result.output


def test_verify_command(runner: CliRunner, files: dict[str, Path]) -> None:
    _check(runner, files, "valid")
    snapshot = files["snapshot"]

    ok = runner.invoke(app, ["verify", str(snapshot)])
    assert ok.exit_code == 0, ok.output
    assert "Signed and untouched" in ok.output

    snapshot.write_text(snapshot.read_text(encoding="utf-8") + "\n# hand edit\n")
    edited = runner.invoke(app, ["verify", str(snapshot)])
    assert edited.exit_code == 1
    assert "Modified after it was generated" in edited.output

    unsigned = runner.invoke(app, ["verify", str(files["valid"])])
    assert unsigned.exit_code == 1
    assert "Not signed" in unsigned.output


def test_log_command_without_history(runner: CliRunner, files: dict[str, Path]) -> None:
    _check(runner, files, "valid")
    result = runner.invoke(app, ["log", str(files["snapshot"])])
    assert result.exit_code == 0, result.output
    assert "No breaking changes recorded" in result.output


def test_log_command_rejects_untrusted_snapshot(runner: CliRunner, files: dict[str, Path]) -> None:
    result = runner.invoke(app, ["log", str(files["valid"])])
    assert result.exit_code == 1
    assert "Not a valid signed snapshot" in result.output


def test_change_descriptions_are_printed_verbatim(
    runner: CliRunner, files: dict[str, Path]
) -> None:
    change = ChangeEntry(kind="FIELD_REMOVED", description="Query.items type [foo] was removed.")
    blocked = BreakingChangesBlockedError([change])
    with patch("bcchecker.cli.check_backward_compatibility", side_effect=blocked):
        result = _check(runner, files, "valid")
    assert result.exit_code == 1
    assert "[foo]" in result.output


def test_bracketed_snapshot_path_is_printed_verbatim(
    runner: CliRunner, files: dict[str, Path], tmp_path: Path
) -> None:
    snapshot = tmp_path / "[bold]snap.graphql"
    result = runner.invoke(
        app, ["check", "--schema", str(files["valid"]), "--snapshot", str(snapshot)]
    )
    assert result.exit_code == 1, result.output
    assert "[bold]snap.graphql" in result.output.replace("\n", "")

    verified = runner.invoke(app, ["verify", str(snapshot)])
    assert verified.exit_code == 0, verified.output
    assert "[bold]snap.graphql" in verified.output.replace("\n", "")
