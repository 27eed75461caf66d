"""JSON-file-backed implementation of ShipmentRepository."""

from __future__ import annotations

from datetime import datetime

from shipscan.domain.exceptions import ValidationError
from shipscan.domain.model.shipment import Shipment, ShipmentLine
from shipscan.domain.repository.shipment_repository import ShipmentRepository
from shipscan.infrastructure.persistence.json_store import JsonDocument


class JsonShipmentRepository(ShipmentRepository):

    def __init__(self, document: JsonDocument) -> None:
        self._document = document

    # --- ShipmentRepository interface -----------------------------------------

    def get_by_id(self, shipment_id: int) -> Shipment | None:
        for raw in self._load_raw():
            if raw["id"] == shipment_id:
                return self._to_domain(raw)
        return None

    def get_by_order_id(self, order_id: int) -> Shipment | None:
        for raw in self._load_raw():
            if raw["order_id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Shipment]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, shipment: Shipment) -> None:
        # Shipments are written once and never updated.
        if shipment.id is not None:
            raise ValidationError(f"Shipment #{shipment.id} is immutable")
        if self.get_by_order_id(shipment.order_id) is not None:
            raise ValidationError(
                f"Order #{shipment.order_id} already has a shipment"
            )
        records = self._load_raw()
        shipment.id = max((r["id"] for r in records), default=0) + 1
        records.append(self._to_raw(shipment))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(shipment: Shipment) -> dict:
        return {
            "id": shipment.id,
            "order_id": shipment.order_id,
            "notes": shipment.notes,
            "created_at": shipment.created_at.isoformat(),
            "lines": [
                {
                    "order_item_id": line.order_item_id,
                    "unit_id": line.unit_id,
                    "barcode": line.barcode,
                }
                for line in shipment.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Shipment:
        return Shipment(
            id=raw["id"],
            order_id=raw["order_id"],
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            lines=[
                ShipmentLine(
                    order_item_id=line["order_item_id"],
                    unit_id=line.get("unit_id"),
                    barcode=line["barcode"],
                )
                for line in raw["lines"]
            ],
        )

    # --- Document helpers -----------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return self._document.records

    def _persist_raw(self, records: list[dict]) -> None:
        self._document.replace(records)
