"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from menucart.application.cart_repository import CartRepository
from menucart.infrastructure.persistence.json_cart_storage import JsonCartStorage
from menucart.infrastructure.persistence.json_menu_source import JsonMenuSource

DATA_DIR_ENV = "MENUCART_DATA_DIR"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else _DEFAULT_DATA_DIR


def cart_storage() -> JsonCartStorage:
    return JsonCartStorage(data_dir() / "carts.json")


def menu_source() -> JsonMenuSource:
    return JsonMenuSource(data_dir() / "menu.json")


def cart_repository() -> CartRepository:
    return CartRepository(cart_storage())
