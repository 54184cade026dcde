"""Abstract provider of menu catalog snapshots."""

from __future__ import annotations

from abc import ABC, abstractmethod

from menucart.domain.model.menu import MenuCatalog


class MenuSource(ABC):

    @abstractmethod
    def snapshot(self) -> MenuCatalog:
        """Return the latest available menu, without waiting for a refresh."""
