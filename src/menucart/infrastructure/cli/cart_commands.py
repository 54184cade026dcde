"""CLI commands for the per-user cart.

The active user is not persisted between runs, so every command selects it
with ``--user`` before doing anything else.
"""

from __future__ import annotations

import click

from menucart.application.add_to_cart import AddToCartHandler
from menucart.application.cart_repository import CartRepository
from menucart.application.checkout import CheckoutHandler
from menucart.application.dto import CartDTO
from menucart.application.show_cart import ShowCartHandler
from menucart.domain.exceptions import DomainException
from menucart.infrastructure.bootstrap import cart_repository, menu_source

_user_option = click.option("--user", "user_id", required=True, help="User ID.")
_item_option = click.option("--item", "item_id", required=True, help="Menu item ID.")


def _open_cart(user_id: str) -> CartRepository:
    repo = cart_repository()
    try:
        repo.set_active_user(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    return repo


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying a reconciled cart."""
    if dto.is_empty:
        click.echo(f"Cart of {dto.user_id} is empty.")
        return

    click.echo(f"Cart of {dto.user_id}")
    if dto.has_unavailable_items:
        click.echo(f"  ! {dto.unavailable_count} unavailable item(s) in your cart")
    click.echo()
    click.echo(
        f"  {'ID':<6} {'Item':<20} {'Qty':>5} {'Price':>10} {'Total':>10} {'Status':>12}"
    )
    click.echo(f"  {'-'*68}")
    for item in dto.items:
        price = item.current_price
        if item.price_changed:
            price = f"*{price}"
        click.echo(
            f"  {item.item_id:<6} {item.name:<20} {item.quantity:>5} "
            f"{price:>10} {item.line_total:>10} {item.status:>12}"
        )
    click.echo(f"  {'-'*68}")
    click.echo(f"  {'Items':<27} {dto.total_quantity:>20}")
    if dto.has_unavailable_items:
        click.echo(f"  {'Orderable items':<27} {dto.total_quantity_available:>20}")
    click.echo(f"  {'Total':<27} {dto.display_total:>20}")


def _show(repo: CartRepository) -> None:
    handler = ShowCartHandler(cart_repo=repo, menu_source=menu_source())
    try:
        dto = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


def _run(repo: CartRepository, action) -> None:
    try:
        action()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _show(repo)


@click.command("show")
@_user_option
def cart_show(user_id: str) -> None:
    """Show the cart reconciled against the current menu."""
    _show(_open_cart(user_id))


@click.command("add")
@_user_option
@_item_option
def cart_add(user_id: str, item_id: str) -> None:
    """Add one unit of a menu item to the cart."""
    repo = _open_cart(user_id)
    handler = AddToCartHandler(cart_repo=repo, menu_source=menu_source())

    try:
        dto = handler.handle(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {item_id} added to cart.")
    _display_cart(dto)


@click.command("remove")
@_user_option
@_item_option
def cart_remove(user_id: str, item_id: str) -> None:
    """Remove a line from the cart."""
    repo = _open_cart(user_id)
    _run(repo, lambda: repo.remove_item(item_id))


@click.command("set-qty")
@_user_option
@_item_option
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_set_quantity(user_id: str, item_id: str, quantity: int) -> None:
    """Set the quantity of a line already in the cart."""
    repo = _open_cart(user_id)
    _run(repo, lambda: repo.set_quantity(item_id, quantity))


@click.command("inc")
@_user_option
@_item_option
def cart_inc(user_id: str, item_id: str) -> None:
    """Increase a line's quantity by one."""
    repo = _open_cart(user_id)
    _run(repo, lambda: repo.increment_quantity(item_id))


@click.command("dec")
@_user_option
@_item_option
def cart_dec(user_id: str, item_id: str) -> None:
    """Decrease a line's quantity by one (removes it at zero)."""
    repo = _open_cart(user_id)
    _run(repo, lambda: repo.decrement_quantity(item_id))


@click.command("clear")
@_user_option
def cart_clear(user_id: str) -> None:
    """Empty the cart."""
    repo = _open_cart(user_id)
    try:
        repo.clear()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo("Cart cleared.")


@click.command("checkout")
@_user_option
@click.option("--keep", is_flag=True, default=False, help="Keep the cart after checkout.")
def cart_checkout(user_id: str, keep: bool) -> None:
    """Build an order draft from the available items in the cart."""
    repo = _open_cart(user_id)
    handler = CheckoutHandler(cart_repo=repo, menu_source=menu_source())

    try:
        dto = handler.handle(clear_cart=not keep)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order draft for {dto.user_id}")
    click.echo()
    click.echo(f"  {'Item':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.current_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")

    for item in dto.skipped:
        reason = "no longer on the menu" if item.status == "DELETED" else "unavailable"
        click.echo(f"  Skipped {item.name} x{item.quantity} ({reason})")

    if dto.cart_cleared:
        click.echo("Cart cleared.")
