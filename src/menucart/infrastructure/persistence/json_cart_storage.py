"""JSON-file-backed implementation of CartStorage.

File layout::

    {"carts": {"<user id>": {"items": [
        {"itemId": "1", "name": "Pizza", "unitPrice": "12.50", "quantity": 2}
    ]}}}

The active user is never written.  A missing or malformed file loads as an
empty store.  Saves go through a temporary file and ``os.replace`` so a crash
mid-write leaves the previous file in place.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from menucart.domain.exceptions import PersistenceError, ValidationError
from menucart.domain.model.cart import Cart, LineItem
from menucart.domain.model.value_objects import Money, Quantity
from menucart.domain.repository.cart_storage import CartStorage

logger = logging.getLogger(__name__)


class JsonCartStorage(CartStorage):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- CartStorage interface ------------------------------------------------

    def load(self) -> dict[str, Cart]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return self._to_domain(raw)
        except FileNotFoundError:
            return {}
        except (
            OSError,
            ValueError,
            KeyError,
            TypeError,
            AttributeError,
            ValidationError,
        ) as exc:
            logger.warning(
                "Ignoring unreadable cart store %s (%s); starting empty",
                self._file_path,
                exc,
            )
            return {}

    def save(self, carts: dict[str, Cart]) -> None:
        try:
            self._persist_raw(self._to_raw(carts))
        except OSError as exc:
            raise PersistenceError(
                f"Could not write cart store {self._file_path}: {exc}"
            ) from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(carts: dict[str, Cart]) -> dict:
        return {
            "carts": {
                user_id: {
                    "items": [
                        {
                            "itemId": line.item_id,
                            "name": line.name,
                            "unitPrice": str(line.unit_price.amount),
                            "quantity": line.quantity.value,
                        }
                        for line in cart.items
                    ]
                }
                for user_id, cart in carts.items()
            }
        }

    @staticmethod
    def _to_domain(raw: dict) -> dict[str, Cart]:
        if not isinstance(raw, dict):
            raise TypeError(f"expected an object, got {type(raw).__name__}")
        raw_carts = raw.get("carts", {})
        if not isinstance(raw_carts, dict):
            raise TypeError("'carts' must be an object")

        carts: dict[str, Cart] = {}
        for user_id, raw_cart in raw_carts.items():
            items = [
                LineItem(
                    item_id=str(i["itemId"]),
                    name=i["name"],
                    unit_price=Money.of(i["unitPrice"]),
                    quantity=Quantity(i["quantity"]),
                )
                for i in raw_cart["items"]
            ]
            cart = Cart()
            for line in items:
                if cart.contains(line.item_id):
                    raise ValueError(f"duplicate item '{line.item_id}' for user {user_id!r}")
                cart.items.append(line)
            carts[user_id] = cart
        return carts

    # --- File helpers ---------------------------------------------------------

    def _persist_raw(self, raw: dict) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(raw, indent=2) + "\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
