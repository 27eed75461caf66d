"""Shipment — the immutable record of a finalized order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class ShipmentLine:
    """Binds one order item to one unit that satisfied it."""

    order_item_id: str
    unit_id: str | None
    barcode: str


@dataclass
class Shipment:
    """Created exactly once per order by the finalizer.

    ``id`` is None until the repository assigns one on save.
    """

    id: int | None
    order_id: int
    lines: list[ShipmentLine]
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def units_for_item(self, order_item_id: str) -> list[str]:
        return [
            line.unit_id
            for line in self.lines
            if line.order_item_id == order_item_id and line.unit_id is not None
        ]
