"""JSON-file-backed implementation of MenuSource.

Reads a list of ``{id, name, price, isAvailable}`` records, the shape the
menu API returns.  The file is re-read on every snapshot so an external
refresh is picked up on the next reconciliation.
"""

from __future__ import annotations

import json
from pathlib import Path

from menucart.domain.exceptions import MenuSourceError, ValidationError
from menucart.domain.model.menu import MenuCatalog, MenuItem
from menucart.domain.model.value_objects import Money
from menucart.domain.repository.menu_source import MenuSource


class JsonMenuSource(MenuSource):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- MenuSource interface -------------------------------------------------

    def snapshot(self) -> MenuCatalog:
        if not self._file_path.exists():
            return MenuCatalog()
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return MenuCatalog([self._to_domain(item) for item in raw])
        except (
            OSError,
            ValueError,
            KeyError,
            TypeError,
            AttributeError,
            ValidationError,
        ) as exc:
            raise MenuSourceError(f"Could not read menu {self._file_path}: {exc}") from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> MenuItem:
        # Older menu payloads used "available" instead of "isAvailable".
        is_available = raw.get("isAvailable", raw.get("available", True))
        return MenuItem(
            id=str(raw["id"]),
            name=raw["name"],
            price=Money.of(raw["price"]),
            is_available=bool(is_available),
        )
