"""Application service: Show Scan Status use case (query).

Used to restore the scan screen after a reload: everything is rebuilt
from the scan ledger.
"""

from __future__ import annotations

from shipscan.application.dto import ScanStatusDTO
from shipscan.application.mapping import progress_to_dto
from shipscan.domain.exceptions import EntityNotFoundError
from shipscan.domain.repository.unit_of_work import UnitOfWork
from shipscan.domain.service.scan_ledger import ScanLedger


class ShowScanStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> ScanStatusDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            progress = ScanLedger(uow.scans).progress_for(order)
            return progress_to_dto(progress, order.status.value)
