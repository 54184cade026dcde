"""Enriched line items: a cart line seen through the current menu.

Built fresh by the reconciler on every call and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from menucart.domain.model.value_objects import Money


class ItemStatus(Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"  # still on the menu, currently disabled
    DELETED = "DELETED"  # no longer on the menu at all


@dataclass(frozen=True)
class EnrichedLineItem:
    item_id: str
    name: str
    unit_price: Money  # what the cart stored at add time
    quantity: int
    current_price: Money  # live menu price, or unit_price if the item is gone
    is_available: bool
    still_exists: bool

    @property
    def is_orderable(self) -> bool:
        return self.is_available and self.still_exists

    @property
    def status(self) -> ItemStatus:
        if not self.still_exists:
            return ItemStatus.DELETED
        if not self.is_available:
            return ItemStatus.UNAVAILABLE
        return ItemStatus.AVAILABLE

    @property
    def current_line_total(self) -> Money:
        return self.current_price * self.quantity
