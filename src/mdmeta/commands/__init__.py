"""Subcommand modules for mdmeta.

Provides register_commands() which uses deferred imports to keep
``mdmeta --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the reconcile commands and the read-only helpers."""
    from mdmeta.commands.fill_empty import fill_empty
    from mdmeta.commands.insert_missing import insert_missing
    from mdmeta.commands.scan import scan
    from mdmeta.commands.tokens import tokens
    from mdmeta.commands.update import update

    cli.add_command(update)
    cli.add_command(fill_empty)
    cli.add_command(insert_missing)
    cli.add_command(scan)
    cli.add_command(tokens)
