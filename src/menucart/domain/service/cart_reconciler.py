"""Domain service: Cart Reconciliation.

Combines a stored cart with the current menu snapshot to decide, per line,
the live price and whether the item can still be ordered.  Everything here
is a pure function of its arguments: no storage access, no clock, no
mutation.  Two calls with the same cart and catalog always produce equal
output.

Pricing policy:
- ``total_price`` sums the *stored* snapshot prices over every line.  It is
  what the cart showed the user when items were added.
- ``total_price_available`` sums the *live* menu prices over orderable lines
  only.  This is what checkout charges.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from menucart.domain.model.cart import Cart
from menucart.domain.model.enriched import EnrichedLineItem
from menucart.domain.model.menu import MenuCatalog
from menucart.domain.model.value_objects import DEFAULT_CURRENCY, Money


def enrich(cart: Cart, catalog: MenuCatalog) -> list[EnrichedLineItem]:
    """Augment every cart line with live price and availability.

    Output order matches the cart's insertion order.
    """
    enriched: list[EnrichedLineItem] = []
    for line in cart.items:
        menu_item = catalog.get(line.item_id)
        if menu_item is None:
            # Withdrawn from the menu: no live price, fall back to the snapshot.
            current_price = line.unit_price
            still_exists = False
            is_available = False
        else:
            current_price = menu_item.price
            still_exists = True
            is_available = menu_item.is_available
        enriched.append(
            EnrichedLineItem(
                item_id=line.item_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity.value,
                current_price=current_price,
                is_available=is_available,
                still_exists=still_exists,
            )
        )
    return enriched


def partition_by_availability(
    items: Iterable[EnrichedLineItem],
) -> tuple[list[EnrichedLineItem], list[EnrichedLineItem]]:
    """Split into (available, unavailable), preserving order in each.

    Deleted and merely disabled items both land in ``unavailable``; their
    ``still_exists`` flag tells them apart.
    """
    available: list[EnrichedLineItem] = []
    unavailable: list[EnrichedLineItem] = []
    for item in items:
        if item.is_orderable:
            available.append(item)
        else:
            unavailable.append(item)
    return available, unavailable


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


def total_quantity(items: Iterable[EnrichedLineItem]) -> int:
    return sum(item.quantity for item in items)


def total_price(items: Iterable[EnrichedLineItem]) -> Money:
    return _sum_money(item.unit_price * item.quantity for item in items)


def total_quantity_available(items: Iterable[EnrichedLineItem]) -> int:
    available, _ = partition_by_availability(items)
    return total_quantity(available)


def total_price_available(items: Iterable[EnrichedLineItem]) -> Money:
    available, _ = partition_by_availability(items)
    return _sum_money(item.current_price * item.quantity for item in available)


def _sum_money(amounts: Iterable[Money]) -> Money:
    result: Money | None = None
    for amount in amounts:
        result = amount if result is None else result + amount
    return result if result is not None else Money.zero(DEFAULT_CURRENCY)


# ---------------------------------------------------------------------------
# Full view
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CartView:
    """Everything the cart and checkout screens need, computed in one pass."""

    items: tuple[EnrichedLineItem, ...]
    available: tuple[EnrichedLineItem, ...]
    unavailable: tuple[EnrichedLineItem, ...]
    total_quantity: int
    total_price: Money
    total_quantity_available: int
    total_price_available: Money

    @property
    def has_unavailable_items(self) -> bool:
        return bool(self.unavailable)

    @property
    def display_total(self) -> Money:
        """The total the cart summary shows.

        Once anything in the cart can no longer be ordered, the summary
        switches to the live, chargeable total.
        """
        if self.has_unavailable_items:
            return self.total_price_available
        return self.total_price


def reconcile(cart: Cart, catalog: MenuCatalog) -> CartView:
    """Enrich *cart* against *catalog* and compute every aggregate.

    Recomputed from scratch on each call; carts are small.
    """
    items: Sequence[EnrichedLineItem] = enrich(cart, catalog)
    available, unavailable = partition_by_availability(items)
    return CartView(
        items=tuple(items),
        available=tuple(available),
        unavailable=tuple(unavailable),
        total_quantity=total_quantity(items),
        total_price=total_price(items),
        total_quantity_available=total_quantity_available(items),
        total_price_available=total_price_available(items),
    )
