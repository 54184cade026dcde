"""Integration tests for the Checkout use case."""

import pytest

from menucart.application.cart_repository import CartRepository
from menucart.application.checkout import CheckoutHandler
from menucart.domain.exceptions import PersistenceError, ValidationError
from tests.fakes import FailingCartStorage, FakeMenuSource, menu_item


def _setup() -> tuple[CheckoutHandler, CartRepository, FakeMenuSource, FailingCartStorage]:
    storage = FailingCartStorage()
    repo = CartRepository(storage)
    repo.set_active_user("alice")
    menu = FakeMenuSource([
        menu_item("1", "Pizza Margherita", "10.00"),
        menu_item("2", "Spaghetti Carbonara", "14.00"),
        menu_item("3", "Tiramisu", "6.50"),
    ])
    return CheckoutHandler(repo, menu), repo, menu, storage


class TestCheckout:

    def test_charges_live_price_for_available_items_only(self):
        handler, repo, menu, _ = _setup()
        for item in (menu.items[0], menu.items[0], menu.items[1], menu.items[2]):
            repo.add_item(item)

        menu.items = [
            menu_item("1", "Pizza Margherita", "12.50"),
            menu_item("2", "Spaghetti Carbonara", "14.00", available=False),
        ]

        dto = handler.handle()
        assert [i.item_id for i in dto.items] == ["1"]
        assert dto.total_quantity == 2
        assert dto.total == "€25.00"
        assert [(i.item_id, i.status) for i in dto.skipped] == [
            ("2", "UNAVAILABLE"),
            ("3", "DELETED"),
        ]

    def test_clears_cart_by_default(self):
        handler, repo, menu, _ = _setup()
        repo.add_item(menu.items[0])
        dto = handler.handle()
        assert dto.cart_cleared
        assert repo.get_active_cart().items == []

    def test_keep_cart(self):
        handler, repo, menu, _ = _setup()
        repo.add_item(menu.items[0])
        dto = handler.handle(clear_cart=False)
        assert not dto.cart_cleared
        assert repo.item_quantity("1") == 1

    def test_empty_cart_rejected(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="no available items"):
            handler.handle()

    def test_only_unavailable_items_rejected(self):
        handler, repo, menu, _ = _setup()
        repo.add_item(menu.items[2])
        menu.items = []
        with pytest.raises(ValidationError, match="no available items"):
            handler.handle()
        assert repo.item_quantity("3") == 1

    def test_signed_out_rejected(self):
        handler, repo, _, _ = _setup()
        repo.set_active_user(None)
        with pytest.raises(ValidationError, match="log in"):
            handler.handle()

    def test_storage_failure_keeps_cart(self):
        handler, repo, menu, storage = _setup()
        repo.add_item(menu.items[0])
        storage.fail = True
        with pytest.raises(PersistenceError):
            handler.handle()
        assert repo.item_quantity("1") == 1
