"""Command: fill a key that is present but has no value."""

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
    "fill-empty",
    cls=MdmCommand,
    examples="""\
  mdmeta fill-empty docs/api description "API reference" --category reference
  mdmeta fill-empty docs/api description --per-file --category reference
  mdmeta fill-empty docs/concepts topic_type conceptual --category conceptual --dry-run""",
)
@directory_argument
@click.argument("key")
@click.argument("value", required=False)
@category_option
@click.option("--per-file", is_flag=True, help="Prompt for a value for each file.")
@dry_run_option
@click.pass_obj
def fill_empty(
    app: AppContext,
    directory: Path,
    key: str,
    value: str | None,
    category: str,
    per_file: bool,
    dry_run: bool,
) -> None:
    """Fill KEY with VALUE in every file where KEY is present but empty."""
    run_reconcile(
        app,
        Action.FIND_EMPTY,
        directory=directory,
        key=key,
        category=category,
        value=value,
        per_file=per_file,
        dry_run=dry_run,
    )
