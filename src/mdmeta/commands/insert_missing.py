"""Command: insert a key that is absent from the front matter."""

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
    "insert-missing",
    cls=MdmCommand,
    examples="""\
  mdmeta insert-missing docs/api ms.author jdoe --category reference
  mdmeta insert-missing docs/api api_name "Foo.Bar,Foo.Baz" --category ref
  mdmeta insert-missing docs/concepts ms.topic --per-file --category conceptual""",
)
@directory_argument
@click.argument("key")
@click.argument("value", required=False)
@category_option
@click.option("--per-file", is_flag=True, help="Prompt for a value for each file.")
@dry_run_option
@click.pass_obj
def insert_missing(
    app: AppContext,
    directory: Path,
    key: str,
    value: str | None,
    category: str,
    per_file: bool,
    dry_run: bool,
) -> None:
    """Insert KEY with VALUE at the end of the front matter where KEY is absent.

    A file whose front matter is never closed by a second ``---`` line
    counts as missing every key; KEY is then appended at end of file.
    """
    run_reconcile(
        app,
        Action.FIND_MISSING,
        directory=directory,
        key=key,
        category=category,
        value=value,
        per_file=per_file,
        dry_run=dry_run,
    )
