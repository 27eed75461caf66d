"""InventoryUnit — a physical, individually barcoded unit of stock.

Units are owned by the inventory directory (intake and inspection are
external).  The fulfillment flow only reads them and, at finalization,
writes the sold flag and order association.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from shipscan.domain.exceptions import ValidationError
from shipscan.domain.model.value_objects import Dimensions


class UnitKind(Enum):
    BULK = "BULK"
    SUBDIVIDED = "SUBDIVIDED"


@dataclass
class InventoryUnit:
    """A bulk roll or one of the rolls cut from it.

    Invariants:
    - ``barcode`` never changes once assigned
    - a sold unit always carries the ``order_id`` it was sold to
    """

    id: str
    barcode: str
    kind: UnitKind
    category: str
    dimensions: Dimensions = field(default_factory=Dimensions)
    inspected: bool = False
    sold: bool = False
    remaining_length: Decimal | None = None  # bulk units only
    order_id: int | None = None
    order_item_id: str | None = None
    sold_at: datetime | None = None

    def ineligibility_reason(self, order_id: int) -> str | None:
        """Why this unit cannot be shipped on *order_id*, or None if it can."""
        if self.sold and self.order_id != order_id:
            return f"Unit {self.barcode} has already been sold to a different order"
        if not self.inspected:
            return f"Unit {self.barcode} has not been inspected"
        if (
            self.kind == UnitKind.BULK
            and self.remaining_length is not None
            and self.remaining_length <= 0
        ):
            return f"Unit {self.barcode} has no remaining length"
        return None

    def is_reserved_elsewhere(self, order_id: int) -> bool:
        return self.order_id is not None and self.order_id != order_id

    def mark_sold(
        self,
        order_id: int,
        order_item_id: str,
        at: datetime | None = None,
    ) -> None:
        """Record the unit as shipped on *order_id*."""
        if self.sold and self.order_id != order_id:
            raise ValidationError(
                f"Unit {self.barcode} is already sold to order #{self.order_id}"
            )
        self.sold = True
        self.order_id = order_id
        self.order_item_id = order_item_id
        self.sold_at = at or datetime.now(timezone.utc)
