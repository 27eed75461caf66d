"""Abstract unit of work.

Groups the repositories touched by one use case so their changes are
committed together or not at all.  Used as a context manager::

    with uow:
        ...
        uow.commit()

Leaving the block without ``commit()`` (or because of an exception)
rolls every staged change back.  Implementations serialize units of
work against the same store, so a check made inside the block is still
true when the block commits.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shipscan.domain.repository.inventory_unit_repository import (
    InventoryUnitRepository,
)
from shipscan.domain.repository.order_repository import OrderRepository
from shipscan.domain.repository.scan_repository import ScanRepository
from shipscan.domain.repository.shipment_repository import ShipmentRepository


class UnitOfWork(ABC):

    orders: OrderRepository
    units: InventoryUnitRepository
    scans: ScanRepository
    shipments: ShipmentRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, *exc_info) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every staged change durable.

        Raises LedgerWriteError if storage fails; in that case nothing
        was applied.
        """

    @abstractmethod
    def rollback(self) -> None:
        """Discard staged changes.  A no-op after a successful commit."""
