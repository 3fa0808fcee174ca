"""Tests for the scan CLI command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from mdmeta.cli import cli
from tests.conftest import write_doc


class TestScanCommand:
    def test_json(self, cli_runner: CliRunner, docs: Path) -> None:
        write_doc(docs, "a.md", "---", "ms.author: jdoe", "---")
        write_doc(docs, "b.md", "---", "---")
        result = cli_runner.invoke(
            cli, ["--json", "scan", "docs", "ms.author", "--category", "reference"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "scan"
        assert data["data"]["counts"] == {"populated": 1, "empty": 0, "missing": 1}

    def test_quiet(self, cli_runner: CliRunner, docs: Path) -> None:
        write_doc(docs, "a.md", "---", "ms.author:", "---")
        result = cli_runner.invoke(cli, ["-q", "scan", "docs", "ms.author", "--category", "ref"])
        assert result.exit_code == 0
        assert result.stdout == "a.md\tempty\n"

    def test_rich(self, cli_runner: CliRunner, docs: Path) -> None:
        write_doc(docs, "a.md", "---", "ms.author: jdoe", "---")
        result = cli_runner.invoke(cli, ["scan", "docs", "ms.author", "--category", "ref"])
        assert result.exit_code == 0
        assert result.stdout.startswith("OK  scan")
        assert "jdoe" in result.stdout

    def test_invalid_token(self, cli_runner: CliRunner, docs: Path) -> None:
        result = cli_runner.invoke(cli, ["scan", "docs", "topic_type", "--category", "reference"])
        assert result.exit_code == 1
        assert "ERROR  scan" in result.stderr
