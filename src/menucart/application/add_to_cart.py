"""Application service: Add To Cart use case.

Resolves a menu item id against the current menu before handing a snapshot
of it to the cart repository.  The repository itself accepts any snapshot;
the menu checks belong to this use case.
"""

from __future__ import annotations

from menucart.application.cart_repository import CartRepository
from menucart.application.dto import CartDTO, to_cart_dto
from menucart.domain.exceptions import EntityNotFoundError, ValidationError
from menucart.domain.repository.menu_source import MenuSource
from menucart.domain.service.cart_reconciler import reconcile


class AddToCartHandler:

    def __init__(self, cart_repo: CartRepository, menu_source: MenuSource) -> None:
        self._cart_repo = cart_repo
        self._menu_source = menu_source

    def handle(self, item_id: str) -> CartDTO:
        if self._cart_repo.active_user_id is None:
            raise ValidationError("Please log in before adding items to your cart")

        catalog = self._menu_source.snapshot()
        menu_item = catalog.get(item_id)
        if menu_item is None:
            raise EntityNotFoundError(f"Menu item '{item_id}' not found")
        if not menu_item.is_available:
            raise ValidationError(f"'{menu_item.name}' is currently unavailable")

        cart = self._cart_repo.add_item(menu_item)
        return to_cart_dto(self._cart_repo.active_user_id, reconcile(cart, catalog))
