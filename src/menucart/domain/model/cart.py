"""Cart aggregate and the per-user store that owns it.

A Cart is an ordered list of line items, one per menu item id. All quantity
rules live here; the repository only decides *which* cart is touched and
when it is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from menucart.domain.model.menu import MenuItem
from menucart.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class LineItem:
    """A quantity of one menu item inside one user's cart.

    ``name`` and ``unit_price`` are a snapshot taken when the item was first
    added. They are not kept in sync with the menu; reconciliation supplies
    the live values.
    """

    item_id: str
    name: str
    unit_price: Money  # snapshot at add time
    quantity: Quantity

    def with_quantity(self, quantity: int) -> LineItem:
        return replace(self, quantity=Quantity(quantity))

    @staticmethod
    def from_menu_item(menu_item: MenuItem) -> LineItem:
        return LineItem(
            item_id=menu_item.id,
            name=menu_item.name,
            unit_price=menu_item.price,
            quantity=Quantity(1),
        )


@dataclass
class Cart:
    """One user's cart.

    Invariants:
    - at most one LineItem per ``item_id`` (adding again accumulates)
    - every stored LineItem has quantity >= 1
    - ``items`` keeps insertion order
    """

    items: list[LineItem] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add(self, menu_item: MenuItem) -> None:
        """Add one unit of *menu_item*.

        An existing line only gets its quantity bumped; its name/price
        snapshot is deliberately left as it was.
        """
        index = self._index_of(menu_item.id)
        if index is None:
            self.items.append(LineItem.from_menu_item(menu_item))
            return
        line = self.items[index]
        self.items[index] = line.with_quantity(line.quantity.value + 1)

    def remove(self, item_id: str) -> None:
        self.items = [line for line in self.items if line.item_id != item_id]

    def set_quantity(self, item_id: str, quantity: int) -> None:
        """Set the quantity of an existing line; <= 0 removes it.

        Never creates a line for an id that is not already in the cart.
        """
        if quantity <= 0:
            self.remove(item_id)
            return
        index = self._index_of(item_id)
        if index is None:
            return
        self.items[index] = self.items[index].with_quantity(quantity)

    def increment(self, item_id: str) -> None:
        line = self.find(item_id)
        if line is not None:
            self.set_quantity(item_id, line.quantity.value + 1)

    def decrement(self, item_id: str) -> None:
        line = self.find(item_id)
        if line is not None:
            self.set_quantity(item_id, line.quantity.value - 1)

    def clear(self) -> None:
        self.items = []

    # --- Queries --------------------------------------------------------------

    def find(self, item_id: str) -> LineItem | None:
        index = self._index_of(item_id)
        return None if index is None else self.items[index]

    def contains(self, item_id: str) -> bool:
        return self._index_of(item_id) is not None

    def quantity_of(self, item_id: str) -> int:
        line = self.find(item_id)
        return 0 if line is None else line.quantity.value

    def copy(self) -> Cart:
        # LineItems are frozen, a new list is enough.
        return Cart(items=list(self.items))

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, item_id: str) -> int | None:
        for i, line in enumerate(self.items):
            if line.item_id == item_id:
                return i
        return None


@dataclass
class CartStore:
    """All carts, keyed by user id, plus the currently active user.

    ``active_user_id`` is session state and is never persisted.
    """

    carts: dict[str, Cart] = field(default_factory=dict)
    active_user_id: str | None = None

    @property
    def active_cart(self) -> Cart | None:
        if self.active_user_id is None:
            return None
        return self.carts.get(self.active_user_id)

    def copy(self) -> CartStore:
        return CartStore(
            carts={user_id: cart.copy() for user_id, cart in self.carts.items()},
            active_user_id=self.active_user_id,
        )
