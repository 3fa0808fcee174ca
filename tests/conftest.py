"""Shared pytest fixtures and test helpers for mdmeta tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from mdmeta.config.settings import MdmetaSettings
from mdmeta.services.telemetry import disable_telemetry

REFERENCE_TOKENS = [
    "title",
    "description",
    "ms.author",
    "ms.date",
    "ms.topic",
    "api_name",
    "product",
]

CONCEPTUAL_TOKENS = ["title", "description", "ms.author", "topic_type"]


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """A verbose CLI run enables telemetry for the rest of the context."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temp directory holding both vocabulary lists; becomes the CWD.

    Clears MDMETA_* env vars so a developer's shell cannot leak settings in.
    """
    for name in list(os.environ):
        if name.startswith("MDMETA_"):
            monkeypatch.delenv(name)
    (tmp_path / "MetadataTokensForRef.txt").write_text("\n".join(REFERENCE_TOKENS) + "\n")
    (tmp_path / "MetadataTokensForConceptual.txt").write_text("\n".join(CONCEPTUAL_TOKENS) + "\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def docs(workspace: Path) -> Path:
    """Empty ``docs/`` directory inside the workspace."""
    path = workspace / "docs"
    path.mkdir()
    return path


@pytest.fixture
def settings(workspace: Path) -> MdmetaSettings:
    return MdmetaSettings.from_cli(config_root=workspace)


def write_doc(directory: Path, name: str, *lines: str) -> Path:
    """Write a document made of *lines*, newline-terminated."""
    path = directory / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()
