"""CLI commands for browsing the menu."""

from __future__ import annotations

import click

from menucart.domain.exceptions import DomainException
from menucart.infrastructure.bootstrap import menu_source


@click.command("list")
def menu_list() -> None:
    """List every item on the menu."""
    try:
        catalog = menu_source().snapshot()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not len(catalog):
        click.echo("No menu items found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Available':>10}")
    click.echo("-" * 53)
    for item in catalog:
        available = "yes" if item.is_available else "no"
        click.echo(f"{item.id:<6} {item.name:<24} {str(item.price):>10} {available:>10}")
