"""Domain service: Shipment Finalizer.

Closes an order out once every line item holds exactly its required
quantity of distinct scanned units.  Completeness is judged from the
scan ledger only; counts reported by a client are never trusted.

Uses the same two-phase approach as the rest of the domain:
  Phase 1 — load and validate every unit the ledger references.
            Fails fast before any mutation.
  Phase 2 — mark units sold, write the Shipment, mark the order shipped.

All-or-nothing visibility comes from the unit of work the caller runs
this in: nothing is durable until it commits, and any exception rolls
back every staged change.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from shipscan.domain.exceptions import (
    EntityNotFoundError,
    OrderAlreadyShippedError,
    OrderIncompleteError,
    ValidationError,
)
from shipscan.domain.model.inventory import InventoryUnit
from shipscan.domain.model.order import Order
from shipscan.domain.model.scan import ScanRecord
from shipscan.domain.model.shipment import Shipment, ShipmentLine
from shipscan.domain.repository.inventory_unit_repository import (
    InventoryUnitRepository,
)
from shipscan.domain.repository.order_repository import OrderRepository
from shipscan.domain.repository.shipment_repository import ShipmentRepository
from shipscan.domain.service.scan_ledger import ScanLedger

logger = logging.getLogger(__name__)


class ShipmentFinalizer:

    def __init__(
        self,
        order_repo: OrderRepository,
        unit_repo: InventoryUnitRepository,
        shipment_repo: ShipmentRepository,
        ledger: ScanLedger,
    ) -> None:
        self._order_repo = order_repo
        self._unit_repo = unit_repo
        self._shipment_repo = shipment_repo
        self._ledger = ledger

    def finalize(self, order_id: int, notes: str | None = None) -> Shipment:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        order.ensure_open()
        if self._shipment_repo.get_by_order_id(order_id) is not None:
            raise OrderAlreadyShippedError(
                f"Order {order.order_no} already has a shipment"
            )

        records = self._ledger.list_for_order(order_id)
        self._check_complete(order, records)

        # Phase 1: load and validate every scanned unit
        bindings: list[tuple[ScanRecord, InventoryUnit]] = []
        for record in records:
            unit = self._load_unit(record)
            if unit.sold and unit.order_id != order_id:
                raise ValidationError(
                    f"Unit {unit.barcode} was sold to another order after it was scanned"
                )
            bindings.append((record, unit))

        # Phase 2: mutate and persist
        now = datetime.now(timezone.utc)
        for record, unit in bindings:
            unit.mark_sold(order_id, record.order_item_id, at=now)
            self._unit_repo.save(unit)

        shipment = Shipment(
            id=None,
            order_id=order_id,
            lines=[
                ShipmentLine(
                    order_item_id=record.order_item_id,
                    unit_id=unit.id,
                    barcode=record.barcode,
                )
                for record, unit in bindings
            ],
            notes=notes,
            created_at=now,
        )
        self._shipment_repo.save(shipment)

        order.mark_shipped(at=now)
        self._order_repo.save(order)

        logger.info(
            "Order %s finalized as shipment #%s (%d units)",
            order.order_no,
            shipment.id,
            len(bindings),
            extra={"order_id": order_id, "shipment_id": shipment.id},
        )
        return shipment

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _check_complete(order: Order, records: list[ScanRecord]) -> None:
        scanned: dict[str, list[str]] = {}
        for record in records:
            scanned.setdefault(record.order_item_id, []).append(record.barcode)

        missing = [
            item.id
            for item in order.items
            if len(set(scanned.get(item.id, []))) != item.quantity.value
        ]
        if missing:
            raise OrderIncompleteError(missing)

    def _load_unit(self, record: ScanRecord) -> InventoryUnit:
        unit = None
        if record.unit_id is not None:
            unit = self._unit_repo.get_by_id(record.unit_id)
        if unit is None:
            unit = self._unit_repo.get_by_barcode(record.barcode)
        if unit is None:
            raise EntityNotFoundError(
                f"No inventory unit for scanned barcode {record.barcode}"
            )
        return unit
