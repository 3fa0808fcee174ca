"""Command: replace the value of a key that is present and populated."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdmeta.commands._base import MdmCommand
from mdmeta.commands._reconcile import (
    category_option,
    directory_argument,
    dry_run_option,
    run_reconcile,
)
from mdmeta.domain.actions import Action

if TYPE_CHECKING:
    from mdmeta.commands._context import AppContext


@click.command(
    cls=MdmCommand,
    examples="""\
  mdmeta update docs/api ms.author jdoe --category reference
  mdmeta update docs/concepts product "azure,dotnet" --category conceptual
  mdmeta update docs/api ms.date 01/31/2024 --category ref --dry-run""",
)
@directory_argument
@click.argument("key")
@click.argument("value")
@category_option
@dry_run_option
@click.pass_obj
def update(
    app: AppContext,
    directory: Path,
    key: str,
    value: str,
    category: str,
    dry_run: bool,
) -> None:
    """Update KEY to VALUE in every file where it already has a value.

    The same VALUE is applied to all files. Files where KEY is missing or
    empty are reported and left alone.
    """
    run_reconcile(
        app,
        Action.UPDATE,
        directory=directory,
        key=key,
        category=category,
        value=value,
        dry_run=dry_run,
    )
