"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from menucart.application.cart_repository import CartRepository
from menucart.application.dto import CartDTO, to_cart_dto
from menucart.domain.repository.menu_source import MenuSource
from menucart.domain.service.cart_reconciler import reconcile


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository, menu_source: MenuSource) -> None:
        self._cart_repo = cart_repo
        self._menu_source = menu_source

    def handle(self) -> CartDTO:
        """Reconcile the active cart against the latest menu snapshot."""
        view = reconcile(self._cart_repo.get_active_cart(), self._menu_source.snapshot())
        return to_cart_dto(self._cart_repo.active_user_id, view)
