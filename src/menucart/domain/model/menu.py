"""Menu catalog snapshot.

The menu is owned by a remote service and refreshed on its own schedule.
The cart engine only ever sees an immutable, in-memory snapshot of it taken
at the moment a cart is reconciled.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from menucart.domain.model.value_objects import Money


@dataclass(frozen=True)
class MenuItem:
    """A sellable item as the menu currently describes it."""

    id: str
    name: str
    price: Money
    is_available: bool = True


class MenuCatalog:
    """Read-only snapshot of the menu, indexed by item id.

    If the source lists the same id twice, the first entry wins.
    """

    def __init__(self, items: Iterable[MenuItem] = ()) -> None:
        self._items: tuple[MenuItem, ...] = tuple(items)
        self._by_id: dict[str, MenuItem] = {}
        for item in self._items:
            self._by_id.setdefault(item.id, item)

    def get(self, item_id: str) -> MenuItem | None:
        return self._by_id.get(item_id)

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
