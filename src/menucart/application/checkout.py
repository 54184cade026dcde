"""Application service: Checkout use case.

Turns the active cart into an order draft.  Only lines that are still on
the menu and currently available are included, charged at the live menu
price.  Withdrawn or disabled lines are reported as skipped, never charged.

Payment and order persistence are handled elsewhere; this use case stops
at the draft and (by default) empties the cart once it has been built.
"""

from __future__ import annotations

from menucart.application.cart_repository import CartRepository
from menucart.application.dto import CheckoutDTO, to_line_dto
from menucart.domain.exceptions import ValidationError
from menucart.domain.repository.menu_source import MenuSource
from menucart.domain.service.cart_reconciler import reconcile


class CheckoutHandler:

    def __init__(self, cart_repo: CartRepository, menu_source: MenuSource) -> None:
        self._cart_repo = cart_repo
        self._menu_source = menu_source

    def handle(self, clear_cart: bool = True) -> CheckoutDTO:
        user_id = self._cart_repo.active_user_id
        if user_id is None:
            raise ValidationError("Please log in before checking out")

        view = reconcile(self._cart_repo.get_active_cart(), self._menu_source.snapshot())
        if view.total_quantity_available == 0:
            raise ValidationError("Cart has no available items to order")

        draft = CheckoutDTO(
            user_id=user_id,
            items=[to_line_dto(item) for item in view.available],
            skipped=[to_line_dto(item) for item in view.unavailable],
            total_quantity=view.total_quantity_available,
            total=str(view.total_price_available),
            cart_cleared=clear_cart,
        )

        if clear_cart:
            self._cart_repo.clear()

        return draft
