"""Command: report where a key is populated, empty, or missing."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdmeta.commands._base import MdmCommand
from mdmeta.commands._reconcile import category_option, directory_argument
from mdmeta.domain.types import parse_category

if TYPE_CHECKING:
    from mdmeta.commands._context import AppContext


@click.command(
    cls=MdmCommand,
    examples="""\
  mdmeta scan docs/api ms.author --category reference
  mdmeta --json scan docs/concepts product --category conceptual
  mdmeta -q scan docs/api description --category ref""",
)
@directory_argument
@click.argument("key")
@category_option
@click.pass_obj
def scan(app: AppContext, directory: Path, key: str, category: str) -> None:
    """Show the state of KEY in each file of DIRECTORY. Never writes."""
    from mdmeta.services.reconcile import ReconcileService

    app.emit(ReconcileService(app.settings).scan(directory, key, parse_category(category)))
