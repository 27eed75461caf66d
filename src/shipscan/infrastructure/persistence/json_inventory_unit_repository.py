"""JSON-file-backed implementation of InventoryUnitRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from shipscan.domain.model.inventory import InventoryUnit, UnitKind
from shipscan.domain.model.value_objects import Dimensions
from shipscan.domain.repository.inventory_unit_repository import (
    InventoryUnitRepository,
)
from shipscan.infrastructure.persistence.json_store import JsonDocument


class JsonInventoryUnitRepository(InventoryUnitRepository):

    def __init__(self, document: JsonDocument) -> None:
        self._document = document

    # --- InventoryUnitRepository interface ------------------------------------

    def get_by_id(self, unit_id: str) -> InventoryUnit | None:
        for raw in self._load_raw():
            if raw["id"] == unit_id:
                return self._to_domain(raw)
        return None

    def get_by_barcode(self, barcode: str) -> InventoryUnit | None:
        for raw in self._load_raw():
            if raw["barcode"] == barcode:
                return self._to_domain(raw)
        return None

    def save(self, unit: InventoryUnit) -> None:
        records = self._load_raw()
        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == unit.id:
                records[i] = self._to_raw(unit)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(unit))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(unit: InventoryUnit) -> dict:
        return {
            "id": unit.id,
            "barcode": unit.barcode,
            "kind": unit.kind.value,
            "category": unit.category,
            "dimensions": unit.dimensions.to_raw(),
            "inspected": unit.inspected,
            "sold": unit.sold,
            "remaining_length": (
                str(unit.remaining_length) if unit.remaining_length is not None else None
            ),
            "order_id": unit.order_id,
            "order_item_id": unit.order_item_id,
            "sold_at": unit.sold_at.isoformat() if unit.sold_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryUnit:
        remaining = raw.get("remaining_length")
        sold_at = raw.get("sold_at")
        return InventoryUnit(
            id=str(raw["id"]),
            barcode=raw["barcode"],
            kind=UnitKind(raw.get("kind", UnitKind.BULK.value)),
            category=raw.get("category", ""),
            dimensions=Dimensions.from_raw(raw.get("dimensions")),
            inspected=raw.get("inspected", False),
            sold=raw.get("sold", False),
            remaining_length=Decimal(str(remaining)) if remaining is not None else None,
            order_id=raw.get("order_id"),
            order_item_id=raw.get("order_item_id"),
            sold_at=datetime.fromisoformat(sold_at) if sold_at else None,
        )

    # --- Document helpers -----------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return self._document.records

    def _persist_raw(self, records: list[dict]) -> None:
        self._document.replace(records)
