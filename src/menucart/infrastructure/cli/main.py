import logging

import click

from menucart.infrastructure.cli.cart_commands import (
    cart_add,
    cart_checkout,
    cart_clear,
    cart_dec,
    cart_inc,
    cart_remove,
    cart_set_quantity,
    cart_show,
)
from menucart.infrastructure.cli.menu_commands import menu_list


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """menucart: restaurant cart engine"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def cart() -> None:
    """Manage a user's cart."""


@cli.group()
def menu() -> None:
    """Browse the menu."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_checkout)
cart.add_command(cart_clear)
cart.add_command(cart_dec)
cart.add_command(cart_inc)
cart.add_command(cart_remove)
cart.add_command(cart_set_quantity)
cart.add_command(cart_show)
menu.add_command(menu_list)
