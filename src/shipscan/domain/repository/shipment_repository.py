"""Abstract repository for Shipment records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shipscan.domain.model.shipment import Shipment


class ShipmentRepository(ABC):

    @abstractmethod
    def get_by_id(self, shipment_id: int) -> Shipment | None:
        """Return a shipment by its ID, or None."""

    @abstractmethod
    def get_by_order_id(self, order_id: int) -> Shipment | None:
        """Return the shipment for an order, or None if not shipped."""

    @abstractmethod
    def list_all(self) -> list[Shipment]:
        """Return every shipment."""

    @abstractmethod
    def save(self, shipment: Shipment) -> None:
        """Persist a new shipment, assigning its ID."""
