"""Application service: Submit Scan use case.

Invoked once per physical or manual scan.  Matching, the quantity check
and the ledger append run inside one unit of work, so the check is
re-validated at write time.  If the commit fails the scan is not
accepted and the caller gets a retryable LedgerWriteError; re-submitting
the same barcode is safe.
"""

from __future__ import annotations

import logging

from shipscan.domain.model.scan import AcceptResult
from shipscan.domain.repository.unit_of_work import UnitOfWork
from shipscan.domain.service.barcode_matcher import BarcodeMatcher
from shipscan.domain.service.fulfillment_tracker import FulfillmentStateTracker
from shipscan.domain.service.scan_ledger import ScanLedger

logger = logging.getLogger(__name__)


class SubmitScanHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, barcode: str) -> AcceptResult:
        with self._uow as uow:
            ledger = ScanLedger(uow.scans)
            matcher = BarcodeMatcher(uow.orders, uow.units, ledger)
            tracker = FulfillmentStateTracker(uow.orders, matcher, ledger)

            result = tracker.accept(order_id, barcode)
            uow.commit()

        logger.info(
            "Scan %s on order #%s -> %s",
            barcode.strip(),
            order_id,
            result.status,
            extra={"order_id": order_id, "scan_status": result.status},
        )
        return result
