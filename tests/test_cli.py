"""Tests for the root mdmeta CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from mdmeta import __version__
from mdmeta.cli import cli
from tests.conftest import read_lines, write_doc


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "mdmeta" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner, workspace: Path) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json", "--no-interact"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


# --- Commands registered ---

EXPECTED_COMMANDS = ["update", "fill-empty", "insert-missing", "scan", "tokens"]


@pytest.mark.parametrize("name", EXPECTED_COMMANDS)
def test_command_registered(name: str) -> None:
    assert name in cli.commands


@pytest.mark.parametrize("name", EXPECTED_COMMANDS)
def test_command_help(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, [name, "--help"])
    assert result.exit_code == 0
    assert "--category" in result.output


# --- Config ---


def test_config_file_moves_vocabulary(cli_runner: CliRunner, workspace: Path) -> None:
    vocab = workspace / "vocab"
    vocab.mkdir()
    (vocab / "ref.txt").write_text("owner\n")
    config = workspace / "custom.toml"
    config.write_text('[vocabulary]\ndirectory = "vocab"\nreference_file = "ref.txt"\n')
    result = cli_runner.invoke(cli, ["-q", "-c", str(config), "tokens", "--category", "ref"])
    assert result.exit_code == 0, result.output
    assert result.stdout == "owner\n"


def test_env_config_path(
    cli_runner: CliRunner, workspace: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config = workspace / "conf" / "mdmeta.toml"
    config.parent.mkdir()
    config.write_text('[metadata]\nlist_keys = ["title"]\n')
    (config.parent / "MetadataTokensForRef.txt").write_text("title\n")
    monkeypatch.setenv("MDMETA_CONFIG", str(config))
    docs = workspace / "docs"
    docs.mkdir()
    path = write_doc(docs, "a.md", "---", "---")
    result = cli_runner.invoke(
        cli, ["insert-missing", str(docs), "title", "a,b", "--category", "reference"]
    )
    assert result.exit_code == 0, result.output
    assert read_lines(path) == ["---", "title:", "- a", "- b", "---"]


def test_invalid_config(cli_runner: CliRunner, workspace: Path) -> None:
    (workspace / "mdmeta.toml").write_text("[vocabulary\n")
    result = cli_runner.invoke(cli, ["tokens", "--category", "ref"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output


# --- Verbose ---


def test_verbose_shows_telemetry(cli_runner: CliRunner, docs: Path) -> None:
    write_doc(docs, "a.md", "---", "---")
    result = cli_runner.invoke(
        cli, ["-v", "insert-missing", "docs", "ms.author", "jdoe", "--category", "reference"]
    )
    assert result.exit_code == 0, result.output
    assert "ReconcileService.reconcile" in result.stdout
    assert "a.md  (status=modified)" in result.stdout
