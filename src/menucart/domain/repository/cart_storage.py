"""Abstract persistence boundary for the cart store.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, in-memory)
live in the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from menucart.domain.model.cart import Cart


class CartStorage(ABC):

    @abstractmethod
    def load(self) -> dict[str, Cart]:
        """Return every persisted cart keyed by user id.

        A missing or unreadable store yields an empty mapping, never an error.
        """

    @abstractmethod
    def save(self, carts: dict[str, Cart]) -> None:
        """Atomically replace the persisted store with *carts*.

        Raises PersistenceError if the write could not be completed.
        """
