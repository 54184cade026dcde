"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry reconciled cart data from the application layer to the CLI
without exposing raw line items or Money objects to the presentation code.
"""

from __future__ import annotations

from dataclasses import dataclass

from menucart.domain.model.enriched import EnrichedLineItem
from menucart.domain.service.cart_reconciler import CartView


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    item_id: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "€10.00"
    current_price: str
    line_total: str  # at the live price
    status: str  # AVAILABLE / UNAVAILABLE / DELETED
    price_changed: bool


@dataclass(frozen=True)
class CartDTO:
    """Output: the reconciled active cart."""

    user_id: str | None
    items: list[CartLineDTO]
    unavailable_count: int
    total_quantity: int
    total_price: str
    total_quantity_available: int
    total_price_available: str
    display_total: str

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def has_unavailable_items(self) -> bool:
        return self.unavailable_count > 0


@dataclass(frozen=True)
class CheckoutDTO:
    """Output: the order draft produced at checkout.

    ``items`` holds only orderable lines; ``skipped`` lists what was left out.
    """

    user_id: str
    items: list[CartLineDTO]
    skipped: list[CartLineDTO]
    total_quantity: int
    total: str
    cart_cleared: bool


# --- Mapping ------------------------------------------------------------------


def to_line_dto(item: EnrichedLineItem) -> CartLineDTO:
    return CartLineDTO(
        item_id=item.item_id,
        name=item.name,
        quantity=item.quantity,
        unit_price=str(item.unit_price),
        current_price=str(item.current_price),
        line_total=str(item.current_line_total),
        status=item.status.value,
        price_changed=item.current_price != item.unit_price,
    )


def to_cart_dto(user_id: str | None, view: CartView) -> CartDTO:
    return CartDTO(
        user_id=user_id,
        items=[to_line_dto(item) for item in view.items],
        unavailable_count=len(view.unavailable),
        total_quantity=view.total_quantity,
        total_price=str(view.total_price),
        total_quantity_available=view.total_quantity_available,
        total_price_available=str(view.total_price_available),
        display_total=str(view.display_total),
    )
