"""Domain service: Barcode Matcher.

Resolves a scanned barcode to an inventory unit and to the order line
item it should satisfy.  Read-only: the only thing it consults besides
the order and the unit directory is the scan ledger, to make
re-presenting an accepted scan idempotent and to keep one unit from
being claimed by two open orders.

Association priority:
  1. BOUND     — the unit was reserved for one of this order's items.
  2. TYPE      — the unit category matches the item type tag and the
                 dimensions are compatible.
  3. TYPE_ONLY — the category matches but the dimensions do not.
  4. FALLBACK  — the first order item.

Categories match case-insensitively when either contains the other, or
when one names sublimation and the other paper.  TYPE_ONLY and FALLBACK
are heuristics; scans matched that way are flagged for manual review.

Within every tier but BOUND an item that still has outstanding quantity
wins over one that is already satisfied, so a multi-item order is not
piled onto its first line.
"""

from __future__ import annotations

import logging

from shipscan.domain.exceptions import (
    EntityNotFoundError,
    NoSuchUnitError,
    UnitNotEligibleError,
)
from shipscan.domain.model.inventory import InventoryUnit
from shipscan.domain.model.order import Order, OrderItem
from shipscan.domain.model.scan import MatchKind, MatchResult
from shipscan.domain.model.value_objects import Barcode
from shipscan.domain.repository.inventory_unit_repository import (
    InventoryUnitRepository,
)
from shipscan.domain.repository.order_repository import OrderRepository
from shipscan.domain.service.quantity_rules import rule_for
from shipscan.domain.service.scan_ledger import ScanLedger

logger = logging.getLogger(__name__)


def categories_match(type_tag: str, category: str) -> bool:
    """Loose comparison of an order item type tag with a unit category."""
    item_type = type_tag.strip().lower()
    unit_type = category.strip().lower()
    if not item_type or not unit_type:
        return False
    if item_type in unit_type or unit_type in item_type:
        return True
    return ("sublimation" in item_type and "paper" in unit_type) or (
        "sublimation" in unit_type and "paper" in item_type
    )


class BarcodeMatcher:

    def __init__(
        self,
        order_repo: OrderRepository,
        unit_repo: InventoryUnitRepository,
        ledger: ScanLedger,
    ) -> None:
        self._order_repo = order_repo
        self._unit_repo = unit_repo
        self._ledger = ledger

    def resolve(self, order_id: int, barcode_value: str) -> MatchResult:
        """Resolve *barcode_value* against the order's requirements.

        Raises NoSuchUnitError if the barcode is unknown or belongs to
        another order, UnitNotEligibleError if the unit cannot ship.
        """
        order = self._load_order(order_id)
        return self.resolve_for(order, Barcode(barcode_value).value)

    def resolve_for(self, order: Order, barcode: str) -> MatchResult:
        previous = self._ledger.find(order.id, barcode)  # type: ignore[arg-type]
        if previous is not None:
            return MatchResult(
                order_item_id=previous.order_item_id,
                unit_id=previous.unit_id,
                already_scanned=True,
                match_kind=previous.match_kind,
            )

        unit = self._unit_repo.get_by_barcode(barcode)
        if unit is None:
            raise NoSuchUnitError(
                f"Barcode {barcode} does not match any unit in inventory"
            )

        reason = unit.ineligibility_reason(order.id)  # type: ignore[arg-type]
        if reason is not None:
            raise UnitNotEligibleError(reason)

        if unit.is_reserved_elsewhere(order.id):  # type: ignore[arg-type]
            raise NoSuchUnitError(
                f"Unit {barcode} is reserved for another order"
            )

        claimant = self._open_claimant(order, barcode)
        if claimant is not None:
            raise NoSuchUnitError(
                f"Unit {barcode} is already scanned for open order {claimant.order_no}"
            )

        item, kind = self._associate(order, unit)
        if kind.needs_review:
            logger.warning(
                "%s match for %s on order %s -> item %s",
                kind.value,
                barcode,
                order.order_no,
                item.id,
                extra={"order_id": order.id, "barcode": barcode},
            )
        return MatchResult(order_item_id=item.id, unit_id=unit.id, match_kind=kind)

    # --- Internal helpers -----------------------------------------------------

    def _load_order(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    def _open_claimant(self, order: Order, barcode: str) -> Order | None:
        """The other open order whose ledger already holds *barcode*."""
        for record in self._ledger.records_for_barcode(barcode):
            if record.order_id == order.id:
                continue
            other = self._order_repo.get_by_id(record.order_id)
            if other is not None and not other.is_shipped:
                return other
        return None

    def _associate(
        self, order: Order, unit: InventoryUnit
    ) -> tuple[OrderItem, MatchKind]:
        if unit.order_item_id is not None:
            for item in order.items:
                if item.id == unit.order_item_id:
                    return item, MatchKind.BOUND

        same_type = [
            item for item in order.items if categories_match(item.type_tag, unit.category)
        ]
        compatible = [
            item for item in same_type if item.dimensions.compatible_with(unit.dimensions)
        ]
        if compatible:
            return self._prefer_outstanding(order, compatible), MatchKind.TYPE
        if same_type:
            return self._prefer_outstanding(order, same_type), MatchKind.TYPE_ONLY

        return self._prefer_outstanding(order, order.items), MatchKind.FALLBACK

    def _prefer_outstanding(
        self, order: Order, candidates: list[OrderItem]
    ) -> OrderItem:
        scanned = self._ledger.barcodes_by_item(order.id)  # type: ignore[arg-type]
        for item in candidates:
            rule = rule_for(item)
            if rule.satisfied_count(scanned.get(item.id, [])) < item.quantity.value:
                return item
        return candidates[0]
