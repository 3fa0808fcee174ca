"""Tests for the tokens CLI command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from mdmeta.cli import cli
from tests.conftest import CONCEPTUAL_TOKENS


class TestTokensCommand:
    def test_quiet(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "tokens", "--category", "conceptual"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == sorted(CONCEPTUAL_TOKENS)

    def test_json(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "tokens", "--category", "ref"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["category"] == "reference"

    def test_missing_file(self, cli_runner: CliRunner, workspace: Path) -> None:
        (workspace / "MetadataTokensForRef.txt").unlink()
        result = cli_runner.invoke(cli, ["tokens", "--category", "reference"])
        assert result.exit_code == 1
        assert "Could not open the reference tokens file" in result.stderr
