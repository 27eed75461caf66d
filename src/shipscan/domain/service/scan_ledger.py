"""Domain service: Scan Ledger.

The durable, append-only record of accepted scans and the single source
of truth for "what has been scanned so far".  Progress shown to an
operator after a reload or a crash is rebuilt from here, never from
session state.

``(order_id, barcode)`` is unique: recording the same pair twice returns
the existing record instead of inserting a duplicate.
"""

from __future__ import annotations

import logging

from shipscan.domain.model.order import Order
from shipscan.domain.model.progress import ItemProgress, OrderProgress
from shipscan.domain.model.scan import MatchKind, ScanRecord
from shipscan.domain.repository.scan_repository import ScanRepository

logger = logging.getLogger(__name__)


class ScanLedger:

    def __init__(self, scan_repo: ScanRepository) -> None:
        self._scan_repo = scan_repo

    def record(
        self,
        order_id: int,
        order_item_id: str,
        barcode: str,
        unit_id: str | None,
        match_kind: MatchKind = MatchKind.BOUND,
    ) -> ScanRecord:
        """Append a scan, or return the existing one for this barcode."""
        existing = self._scan_repo.find(order_id, barcode)
        if existing is not None:
            logger.debug(
                "Scan %s already recorded for order %s", barcode, order_id
            )
            return existing

        record = ScanRecord(
            order_id=order_id,
            order_item_id=order_item_id,
            barcode=barcode,
            unit_id=unit_id,
            match_kind=match_kind,
        )
        self._scan_repo.add(record)
        return record

    def find(self, order_id: int, barcode: str) -> ScanRecord | None:
        return self._scan_repo.find(order_id, barcode)

    def list_for_order(self, order_id: int) -> list[ScanRecord]:
        return self._scan_repo.list_for_order(order_id)

    def barcodes_by_item(self, order_id: int) -> dict[str, list[str]]:
        """Map each order item ID to its scanned barcodes, in scan order."""
        result: dict[str, list[str]] = {}
        for record in self.list_for_order(order_id):
            result.setdefault(record.order_item_id, []).append(record.barcode)
        return result

    def records_for_barcode(self, barcode: str) -> list[ScanRecord]:
        """Every order's record of *barcode*."""
        return self._scan_repo.list_for_barcode(barcode)

    def progress_for(self, order: Order) -> OrderProgress:
        """Project the order's per-item progress from its records."""
        barcodes: dict[str, list[str]] = {}
        review: dict[str, list[str]] = {}
        for record in self.list_for_order(order.id):  # type: ignore[arg-type]
            barcodes.setdefault(record.order_item_id, []).append(record.barcode)
            if record.needs_review:
                review.setdefault(record.order_item_id, []).append(record.barcode)

        items = tuple(
            ItemProgress(
                order_item_id=item.id,
                type_tag=item.type_tag,
                quantity=item.quantity.value,
                scanned_barcodes=tuple(dict.fromkeys(barcodes.get(item.id, []))),
                review_barcodes=tuple(review.get(item.id, [])),
            )
            for item in order.items
        )
        return OrderProgress(
            order_id=order.id,  # type: ignore[arg-type]
            order_no=order.order_no,
            shipped=order.is_shipped,
            items=items,
        )
