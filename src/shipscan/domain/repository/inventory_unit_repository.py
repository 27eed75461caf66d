"""Abstract repository for the inventory unit directory.

The directory is owned by inventory intake; fulfillment looks units up
by barcode and writes them back only when a shipment is finalized.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shipscan.domain.model.inventory import InventoryUnit


class InventoryUnitRepository(ABC):

    @abstractmethod
    def get_by_id(self, unit_id: str) -> InventoryUnit | None:
        """Return a unit by its ID, or None."""

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> InventoryUnit | None:
        """Return the unit carrying *barcode*, or None."""

    @abstractmethod
    def save(self, unit: InventoryUnit) -> None:
        """Persist an updated unit."""
