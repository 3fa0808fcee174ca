"""Command: list the valid metadata tokens for a category."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdmeta.commands._base import MdmCommand
from mdmeta.commands._reconcile import category_option
from mdmeta.domain.types import parse_category

if TYPE_CHECKING:
    from mdmeta.commands._context import AppContext


@click.command(
    cls=MdmCommand,
    examples="""\
  mdmeta tokens --category reference
  mdmeta -q tokens --category conceptual""",
)
@category_option
@click.pass_obj
def tokens(app: AppContext, category: str) -> None:
    """List the metadata keys accepted for a topic category."""
    from mdmeta.services.vocabulary import VocabularyService

    app.emit(VocabularyService(app.settings).list_tokens(parse_category(category)))
