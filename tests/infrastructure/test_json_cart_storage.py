"""Tests for the JSON-file cart storage (real files under tmp_path)."""

import json
import logging

import pytest

from menucart.domain.exceptions import PersistenceError
from menucart.domain.model.cart import Cart
from menucart.domain.model.menu import MenuCatalog
from menucart.domain.model.value_objects import Money
from menucart.domain.service.cart_reconciler import reconcile
from menucart.infrastructure.persistence.json_cart_storage import JsonCartStorage
from tests.fakes import menu_item


def _cart(*items) -> Cart:
    cart = Cart()
    for item in items:
        cart.add(item)
    return cart


class TestJsonCartStorage:

    def test_construction_does_not_touch_disk(self, tmp_path):
        path = tmp_path / "nested" / "carts.json"
        storage = JsonCartStorage(path)
        assert not path.exists()
        assert not path.parent.exists()
        assert storage.load() == {}

    def test_unwritable_location_fails_only_on_save(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        storage = JsonCartStorage(blocker / "carts.json")
        assert storage.load() == {}
        with pytest.raises(PersistenceError):
            storage.save({"alice": Cart()})

    def test_save_and_load(self, tmp_path):
        storage = JsonCartStorage(tmp_path / "carts.json")
        pizza = menu_item("1", "Pizza", "12.50")
        storage.save({
            "alice": _cart(pizza, pizza, menu_item("3", "Tiramisu", "6.50")),
            "bob": Cart(),
        })

        loaded = JsonCartStorage(tmp_path / "carts.json").load()
        assert set(loaded) == {"alice", "bob"}
        assert [line.item_id for line in loaded["alice"].items] == ["1", "3"]
        assert loaded["alice"].find("1").unit_price == Money.of("12.50")
        assert loaded["alice"].quantity_of("1") == 2
        assert loaded["bob"].items == []

    def test_file_format(self, tmp_path):
        path = tmp_path / "carts.json"
        JsonCartStorage(path).save({"alice": _cart(menu_item("1", "Pizza", "12.50"))})
        raw = json.loads(path.read_text())
        assert raw == {
            "carts": {
                "alice": {
                    "items": [
                        {
                            "itemId": "1",
                            "name": "Pizza",
                            "unitPrice": "12.50",
                            "quantity": 1,
                        }
                    ]
                }
            }
        }
        assert "activeUserId" not in raw

    def test_numeric_price_accepted(self, tmp_path):
        path = tmp_path / "carts.json"
        path.write_text(json.dumps({"carts": {"alice": {"items": [
            {"itemId": 1, "name": "Pizza", "unitPrice": 10.0, "quantity": 2}
        ]}}}))
        loaded = JsonCartStorage(path).load()
        assert loaded["alice"].find("1").unit_price == Money.of("10")

    def test_stored_currency_is_ignored(self, tmp_path):
        # Lines always load in the default currency.
        path = tmp_path / "carts.json"
        path.write_text(json.dumps({"carts": {"alice": {"items": [
            {"itemId": "1", "name": "Pizza", "unitPrice": "12.50", "currency": "USD", "quantity": 1},
            {"itemId": "2", "name": "Pasta", "unitPrice": "14.00", "quantity": 1},
        ]}}}))
        loaded = JsonCartStorage(path).load()
        assert loaded["alice"].find("1").unit_price == Money.of("12.50")

        view = reconcile(loaded["alice"], MenuCatalog())
        assert view.total_price == Money.of("26.50")
        assert view.total_price_available == Money.zero()

    def test_missing_file_loads_empty(self, tmp_path):
        path = tmp_path / "carts.json"
        assert JsonCartStorage(path).load() == {}

    @pytest.mark.parametrize("content", [
        "not json",
        "[]",
        '{"carts": []}',
        '{"carts": {"alice": {"items": [{"itemId": "1"}]}}}',
        '{"carts": {"alice": {"items": [{"itemId": "1", "name": "P", "unitPrice": "1", "quantity": 0}]}}}',
        '{"carts": {"alice": {"items": [{"itemId": "1", "name": "P", "unitPrice": "-1", "quantity": 1}]}}}',
        '{"carts": {"alice": {"items": ['
        '{"itemId": "1", "name": "P", "unitPrice": "1", "quantity": 1},'
        '{"itemId": "1", "name": "P", "unitPrice": "1", "quantity": 1}]}}}',
    ])
    def test_malformed_file_loads_empty(self, tmp_path, caplog, content):
        path = tmp_path / "carts.json"
        path.write_text(content)
        with caplog.at_level(logging.WARNING):
            assert JsonCartStorage(path).load() == {}
        assert "Ignoring unreadable cart store" in caplog.text

    def test_save_failure_raises_persistence_error(self, tmp_path):
        path = tmp_path / "carts.json"
        storage = JsonCartStorage(path)
        path.mkdir()  # a directory where the file should be
        with pytest.raises(PersistenceError):
            storage.save({"alice": Cart()})

    def test_no_temp_files_left_behind(self, tmp_path):
        storage = JsonCartStorage(tmp_path / "carts.json")
        storage.save({"alice": _cart(menu_item("1"))})
        assert [p.name for p in tmp_path.iterdir()] == ["carts.json"]
