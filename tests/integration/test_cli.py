"""
Tests for the ccsync command-line interface.
"""

import json
from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner

from ccsync import __version__
from ccsync.cli.main import cli

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, global_root: Path, local_root: Path):
    def _invoke(*args: str, input: str | None = None):
        base = ["--no-config", "--global-path", str(global_root), "--local-path", str(local_root)]
        return runner.invoke(cli, [*base, *args], obj={}, input=input)

    return _invoke


class TestSyncCommands:
    """Tests for to-local and to-global."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_to_local_yes_all(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "x")

        result = invoke("--yes-all", "to-local")

        assert result.exit_code == 0, result.output
        assert (local_root / "agents" / "a.md").read_text() == "x"
        assert "Success" in result.output

    def test_to_global_json(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(local_root / "commands" / "c.md", "c")

        result = invoke("--yes-all", "--json", "to-global")

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["created"] == 1
        assert data["success"] is True
        assert (global_root / "commands" / "c.md").exists()

    def test_dry_run(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "x")

        result = invoke("--dry-run", "to-local")

        assert result.exit_code == 0, result.output
        assert not (local_root / "agents").exists()

    def test_interactive_decline(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "x")

        result = invoke("to-local", input="n\n")

        assert result.exit_code == 0, result.output
        assert not (local_root / "agents" / "a.md").exists()

    def test_interactive_quit(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "x")

        result = invoke("to-local", input="q\n")

        assert result.exit_code == 0
        assert "Sync cancelled by user." in result.output
        assert not (local_root / "agents" / "a.md").exists()

    def test_unresolved_conflict_exits_nonzero(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "new")
        write_file(local_root / "agents" / "a.md", "old")

        result = invoke("--dry-run", "to-local", "--conflict", "fail")

        assert result.exit_code == 1
        assert "Conflict" in result.output
        assert "Completed with errors" in result.output

    def test_conflict_option(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "new")
        write_file(local_root / "agents" / "a.md", "old")

        result = invoke("--yes-all", "to-local", "--conflict", "skip")

        assert result.exit_code == 0, result.output
        assert (local_root / "agents" / "a.md").read_text() == "old"

    def test_type_option(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "a")
        write_file(global_root / "commands" / "c.md", "c")

        result = invoke("--yes-all", "to-local", "--type", "agents")

        assert result.exit_code == 0, result.output
        assert (local_root / "agents" / "a.md").exists()
        assert not (local_root / "commands").exists()


class TestInspectionCommands:
    """Tests for status, diff and config."""

    def test_status_json(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "a")
        write_file(local_root / "commands" / "c.md", "c")

        result = invoke("--json", "status")

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["to-local"] == [{"path": "agents/a.md", "action": "create", "error": None}]
        assert data["to-global"] == [{"path": "commands/c.md", "action": "create", "error": None}]
        assert not (local_root / "agents").exists()

    def test_status_table(
        self, invoke, global_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "a")

        result = invoke("status")

        assert result.exit_code == 0, result.output
        assert "agents/a.md" in result.output
        assert "No items found for to-global" in result.output

    def test_diff_shows_conflicts(
        self, invoke, global_root: Path, local_root: Path, write_file: Callable[..., Path]
    ) -> None:
        write_file(global_root / "agents" / "a.md", "new line\n")
        write_file(local_root / "agents" / "a.md", "old line\n")

        result = invoke("diff")

        assert result.exit_code == 0, result.output
        assert "-old line" in result.output
        assert "+new line" in result.output

    def test_diff_without_conflicts(self, invoke) -> None:
        result = invoke("diff")
        assert result.exit_code == 0
        assert "No differences found" in result.output

    def test_config_json(self, runner: CliRunner, temp_dir: Path) -> None:
        config_file = temp_dir / "custom.toml"
        config_file.write_text('ignore = ["*.bak"]\nconflict_strategy = "newer"\n')

        result = runner.invoke(cli, ["--config", str(config_file), "--json", "config"], obj={})

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["files"] == [str(config_file)]
        assert data["config"]["ignore"] == ["*.bak"]
        assert data["config"]["conflict_strategy"] == "newer"

    def test_config_and_no_config_conflict(self, runner: CliRunner, temp_dir: Path) -> None:
        config_file = temp_dir / "custom.toml"
        config_file.write_text("")
        result = runner.invoke(cli, ["--config", str(config_file), "--no-config", "config"], obj={})
        assert result.exit_code == 2

    def test_invalid_config(self, runner: CliRunner, temp_dir: Path) -> None:
        config_file = temp_dir / "bad.toml"
        config_file.write_text("ignore = [\n")
        result = runner.invoke(cli, ["--config", str(config_file), "config"], obj={})
        assert result.exit_code == 1
        assert "Configuration error" in result.output
