"""Abstract append-only store for ScanRecords.

There is deliberately no update or delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shipscan.domain.model.scan import ScanRecord


class ScanRepository(ABC):

    @abstractmethod
    def find(self, order_id: int, barcode: str) -> ScanRecord | None:
        """Return the record for (order, barcode), or None."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[ScanRecord]:
        """Return the order's records in insertion order."""

    @abstractmethod
    def list_for_barcode(self, barcode: str) -> list[ScanRecord]:
        """Return the records for *barcode* across every order."""

    @abstractmethod
    def add(self, record: ScanRecord) -> None:
        """Append a record.  Callers guarantee (order, barcode) is new."""
