"""Application service: Finalize Shipment use case.

Runs the finalizer inside a single unit of work.  Either the units are
marked sold, the shipment written and the order closed together, or
none of it happens.
"""

from __future__ import annotations

from shipscan.application.dto import ShipmentDTO
from shipscan.application.mapping import shipment_to_dto
from shipscan.domain.exceptions import EntityNotFoundError
from shipscan.domain.repository.unit_of_work import UnitOfWork
from shipscan.domain.service.scan_ledger import ScanLedger
from shipscan.domain.service.shipment_finalizer import ShipmentFinalizer


class FinalizeShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, notes: str | None = None) -> ShipmentDTO:
        with self._uow as uow:
            finalizer = ShipmentFinalizer(
                uow.orders, uow.units, uow.shipments, ScanLedger(uow.scans)
            )
            shipment = finalizer.finalize(order_id, notes=notes)
            uow.commit()

            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            return shipment_to_dto(shipment, order)
