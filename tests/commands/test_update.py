"""Tests for the update CLI command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from mdmeta.cli import cli
from tests.conftest import read_lines, write_doc


class TestUpdateCommand:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["update", "--help"])
        assert result.exit_code == 0
        assert "--category" in result.output
        assert "--dry-run" in result.output
        assert "--per-file" not in result.output

    def test_replaces_value(self, cli_runner: CliRunner, docs: Path) -> None:
        path = write_doc(docs, "a.md", "---", "ms.author: old", "---", "body")
        result = cli_runner.invoke(
            cli, ["update", "docs", "ms.author", "jdoe", "--category", "reference"]
        )
        assert result.exit_code == 0, result.output
        assert read_lines(path) == ["---", "ms.author: jdoe", "---", "body"]
        assert 'Successfully inserted "ms.author: jdoe" into a.md.' in result.stdout
        assert "Successfully modified 1 files." in result.stdout

    def test_ref_alias(self, cli_runner: CliRunner, docs: Path) -> None:
        path = write_doc(docs, "a.md", "---", "ms.author: old", "---")
        result = cli_runner.invoke(cli, ["update", "docs", "ms.author", "jdoe", "--category", "REF"])
        assert result.exit_code == 0, result.output
        assert read_lines(path)[1] == "ms.author: jdoe"

    def test_absent_and_empty_untouched(self, cli_runner: CliRunner, docs: Path) -> None:
        absent = write_doc(docs, "a.md", "---", "title: X", "---")
        empty = write_doc(docs, "b.md", "---", "ms.author:", "---")
        before = (absent.read_bytes(), empty.read_bytes())
        result = cli_runner.invoke(
            cli, ["update", "docs", "ms.author", "jdoe", "--category", "reference"]
        )
        assert result.exit_code == 0
        assert (absent.read_bytes(), empty.read_bytes()) == before
        assert 'Cannot update "ms.author" in a.md because the file did not contain the token.' in (
            result.stdout
        )
        assert 'Didn\'t find any files to modify for "ms.author".' in result.stdout

    def test_json_output(self, cli_runner: CliRunner, docs: Path) -> None:
        write_doc(docs, "a.md", "---", "ms.author: old", "---")
        result = cli_runner.invoke(
            cli, ["--json", "update", "docs", "ms.author", "jdoe", "--category", "reference"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "update"
        assert data["data"]["modified"] == 1
        assert data["data"]["files"][0]["status"] == "modified"

    def test_value_required(self, cli_runner: CliRunner, docs: Path) -> None:
        result = cli_runner.invoke(cli, ["update", "docs", "ms.author", "--category", "reference"])
        assert result.exit_code == 2

    def test_category_required(self, cli_runner: CliRunner, docs: Path) -> None:
        result = cli_runner.invoke(cli, ["update", "docs", "ms.author", "jdoe"])
        assert result.exit_code == 2
        assert "--category" in result.output

    def test_unknown_category(self, cli_runner: CliRunner, docs: Path) -> None:
        result = cli_runner.invoke(
            cli, ["update", "docs", "ms.author", "jdoe", "--category", "tutorial"]
        )
        assert result.exit_code == 2


class TestUpdateErrors:
    def test_invalid_token(self, cli_runner: CliRunner, docs: Path) -> None:
        path = write_doc(docs, "a.md", "---", "bogus: old", "---")
        result = cli_runner.invoke(cli, ["update", "docs", "bogus", "new", "--category", "reference"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Invalid metadata token" in result.stderr
        assert read_lines(path) == ["---", "bogus: old", "---"]

    def test_missing_directory(self, cli_runner: CliRunner, workspace: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "update", "nope", "ms.author", "jdoe", "--category", "reference"]
        )
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "NOT_A_DIRECTORY"

    def test_vocabulary_unavailable(
        self, cli_runner: CliRunner, workspace: Path, docs: Path
    ) -> None:
        (workspace / "MetadataTokensForRef.txt").unlink()
        result = cli_runner.invoke(
            cli, ["--json", "update", "docs", "ms.author", "jdoe", "--category", "reference"]
        )
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "VOCABULARY_UNAVAILABLE"

    def test_blank_value(self, cli_runner: CliRunner, docs: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "update", "docs", "ms.author", " ", "--category", "reference"]
        )
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_VALUE"
