"""Domain service: Fulfillment State Tracker.

Decides whether a scan is accepted, and derives each line item's
progress purely from the scan ledger plus the order's quantities.
Nothing here caches counts between calls: persist first, then project.

This is the only place where item type changes a business rule (see
``quantity_rules``).  The caller must run ``accept`` inside a unit of
work and commit it; the check and the ledger append then happen under
the same writer lock, so two racing scans cannot both pass a stale count.
"""

from __future__ import annotations

import logging

from shipscan.domain.exceptions import (
    EntityNotFoundError,
    NoSuchUnitError,
    UnitNotEligibleError,
)
from shipscan.domain.model.order import Order
from shipscan.domain.model.progress import OrderProgress
from shipscan.domain.model.scan import (
    AcceptResult,
    Accepted,
    AlreadyScanned,
    NoMatch,
    QuantityExceeded,
    UnitNotEligible,
)
from shipscan.domain.model.value_objects import Barcode
from shipscan.domain.repository.order_repository import OrderRepository
from shipscan.domain.service.barcode_matcher import BarcodeMatcher
from shipscan.domain.service.quantity_rules import rule_for
from shipscan.domain.service.scan_ledger import ScanLedger

logger = logging.getLogger(__name__)


class FulfillmentStateTracker:

    def __init__(
        self,
        order_repo: OrderRepository,
        matcher: BarcodeMatcher,
        ledger: ScanLedger,
    ) -> None:
        self._order_repo = order_repo
        self._matcher = matcher
        self._ledger = ledger

    def accept(self, order_id: int, barcode_value: str) -> AcceptResult:
        """Validate a scan against the order and record it if admissible.

        Raises OrderAlreadyShippedError for a closed order.
        """
        order = self._load_order(order_id)
        order.ensure_open()
        barcode = Barcode(barcode_value).value

        try:
            match = self._matcher.resolve_for(order, barcode)
        except NoSuchUnitError as exc:
            logger.info("Scan %s rejected on order %s: %s", barcode, order.order_no, exc)
            return NoMatch(reason=str(exc))
        except UnitNotEligibleError as exc:
            logger.info("Scan %s rejected on order %s: %s", barcode, order.order_no, exc)
            return UnitNotEligible(reason=str(exc))

        if match.already_scanned:
            return AlreadyScanned(order_item_id=match.order_item_id)

        item = order.find_item(match.order_item_id)
        scanned = self._ledger.barcodes_by_item(order_id).get(item.id, [])
        rule = rule_for(item)
        if not rule.admits(barcode, scanned, item.quantity.value):
            logger.info(
                "Scan %s exceeds quantity %s for item %s on order %s",
                barcode,
                item.quantity.value,
                item.id,
                order.order_no,
            )
            return QuantityExceeded(
                order_item_id=item.id, quantity=item.quantity.value
            )

        self._ledger.record(
            order_id=order_id,
            order_item_id=item.id,
            barcode=barcode,
            unit_id=match.unit_id,
            match_kind=match.match_kind,
        )
        new_count = rule.satisfied_count([*scanned, barcode])
        return Accepted(
            order_item_id=item.id,
            new_count=new_count,
            remaining=item.quantity.value - new_count,
            match_kind=match.match_kind,
        )

    def progress(self, order_id: int) -> OrderProgress:
        """Rebuild the order's progress from the ledger."""
        return self._ledger.progress_for(self._load_order(order_id))

    def _load_order(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order
