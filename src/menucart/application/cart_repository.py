"""Application service: per-user cart ownership.

CartRepository is the only component allowed to change cart contents.  It
holds the in-memory CartStore, routes every operation to the active user's
cart, and writes the whole store through a CartStorage before returning.

Every mutation is applied to a copy first.  The copy replaces the live store
only after the storage write succeeded, so memory and disk never disagree.
With no active user, every operation is a no-op returning an empty cart.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from menucart.domain.exceptions import DomainException, PersistenceError
from menucart.domain.model.cart import Cart, CartStore
from menucart.domain.model.menu import MenuItem
from menucart.domain.repository.cart_storage import CartStorage

logger = logging.getLogger(__name__)


class CartRepository:

    def __init__(self, storage: CartStorage) -> None:
        self._storage = storage
        # The active user is session state: after a reload nobody is active.
        self._store = CartStore(carts=storage.load())

    # --- Active user ----------------------------------------------------------

    @property
    def active_user_id(self) -> str | None:
        return self._store.active_user_id

    def set_active_user(self, user_id: str | None) -> Cart:
        """Make *user_id* the target of cart operations.

        ``None`` and ``""`` both mean "nobody is signed in".  A user seen for
        the first time gets an empty cart.  Other users' carts are untouched.
        """
        user_id = user_id or None
        updated = self._store.copy()
        updated.active_user_id = user_id

        if user_id is not None and user_id not in updated.carts:
            updated.carts[user_id] = Cart()
            self._commit(updated)
        else:
            self._store = updated

        logger.debug("Active cart user set to %r", user_id)
        return self.get_active_cart()

    def get_active_cart(self) -> Cart:
        cart = self._store.active_cart
        return Cart() if cart is None else cart.copy()

    # --- Mutations ------------------------------------------------------------

    def add_item(self, menu_item: MenuItem) -> Cart:
        """Add one unit of *menu_item*, merging with an existing line."""
        return self._mutate("add_item", lambda cart: cart.add(menu_item))

    def remove_item(self, item_id: str) -> Cart:
        return self._mutate("remove_item", lambda cart: cart.remove(item_id))

    def set_quantity(self, item_id: str, quantity: int) -> Cart:
        return self._mutate(
            "set_quantity", lambda cart: cart.set_quantity(item_id, quantity)
        )

    def increment_quantity(self, item_id: str) -> Cart:
        return self._mutate("increment_quantity", lambda cart: cart.increment(item_id))

    def decrement_quantity(self, item_id: str) -> Cart:
        return self._mutate("decrement_quantity", lambda cart: cart.decrement(item_id))

    def clear(self) -> Cart:
        return self._mutate("clear", lambda cart: cart.clear())

    # --- Queries (raw cart, not reconciled against the menu) ------------------

    def is_item_in_cart(self, item_id: str) -> bool:
        cart = self._store.active_cart
        return cart is not None and cart.contains(item_id)

    def item_quantity(self, item_id: str) -> int:
        cart = self._store.active_cart
        return 0 if cart is None else cart.quantity_of(item_id)

    # --- Internal helpers -----------------------------------------------------

    def _mutate(self, operation: str, change: Callable[[Cart], None]) -> Cart:
        user_id = self._store.active_user_id
        current = self._store.active_cart
        if user_id is None or current is None:
            return Cart()

        updated = self._store.copy()
        change(updated.carts[user_id])

        if updated.carts[user_id] == current:
            return current.copy()

        self._commit(updated)
        logger.debug(
            "%s on cart of %r -> %d line(s)",
            operation,
            user_id,
            len(updated.carts[user_id].items),
        )
        return self.get_active_cart()

    def _commit(self, updated: CartStore) -> None:
        try:
            self._storage.save(updated.carts)
        except PersistenceError:
            logger.error("Could not persist carts; change discarded")
            raise
        except (OSError, DomainException) as exc:
            logger.error("Could not persist carts; change discarded")
            raise PersistenceError(f"Could not save carts: {exc}") from exc
        self._store = updated
