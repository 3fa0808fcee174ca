"""Shared options and plumbing for the update / fill-empty / insert-missing commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from mdmeta.domain.types import parse_category

if TYPE_CHECKING:
    from mdmeta.commands._context import AppContext
    from mdmeta.domain.actions import Action
    from mdmeta.domain.frontmatter import ScanResult
    from mdmeta.services.reconcile import ValueSupplier

CATEGORY_CHOICES = ["reference", "ref", "conceptual"]


def category_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--category",
        type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
        required=True,
        help="Topic category; selects the vocabulary of valid keys.",
    )(func)


def directory_argument(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.argument("directory", type=click.Path(path_type=Path, file_okay=False))(func)


def dry_run_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--dry-run", is_flag=True, help="Report what would change without writing."
    )(func)


def prompt_supplier(key: str) -> ValueSupplier:
    """Ask the operator for a value for each document that will be written.

    ``skip`` leaves the current document alone; ``exit`` stops the batch.
    """
    from mdmeta.services.reconcile import Abort

    def supply(path: Path, scan: ScanResult) -> str | None:
        state = "has an empty" if scan.found else "is missing"
        click.echo(f'{path.name} {state} "{key}".', err=True)
        while True:
            answer: str = click.prompt(
                f"Enter the value for {key} (commas separate list values; "
                '"skip" to skip this file, "exit" to stop)',
                default="",
                show_default=False,
                err=True,
            )
            command = answer.strip().lower()
            if command == "exit":
                raise Abort
            if command == "skip":
                return None
            if command:
                return answer
            click.echo("Invalid metadata value. Please enter a valid metadata value.", err=True)

    return supply


def run_reconcile(
    app: AppContext,
    action: Action,
    *,
    directory: Path,
    key: str,
    category: str,
    value: str | None,
    per_file: bool = False,
    dry_run: bool = False,
) -> None:
    """Validate CLI-level inputs, run the service, and emit the result."""
    from mdmeta.services.reconcile import ReconcileRequest, ReconcileService

    supplier: ValueSupplier | None = None
    if per_file:
        if value is not None:
            raise click.UsageError("Give either VALUE or --per-file, not both.")
        if app.settings.no_interact:
            raise click.UsageError("--per-file prompts for values and cannot run with --no-interact.")
        supplier = prompt_supplier(key)
    elif value is None:
        raise click.UsageError("Missing VALUE (or pass --per-file to be asked per file).")

    request = ReconcileRequest(
        action=action,
        directory=directory,
        key=key,
        category=parse_category(category),
        value=value,
        dry_run=dry_run,
    )
    app.emit(ReconcileService(app.settings).reconcile(request, supplier=supplier))
