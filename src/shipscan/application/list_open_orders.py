"""Application service: List Open Orders use case (query)."""

from __future__ import annotations

from shipscan.application.dto import OrderSummaryDTO
from shipscan.application.mapping import TIMESTAMP_FORMAT
from shipscan.domain.model.order import OrderStatus
from shipscan.domain.repository.unit_of_work import UnitOfWork


class ListOpenOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[OrderSummaryDTO]:
        """Orders still awaiting shipment, oldest first."""
        with self._uow as uow:
            summaries = []
            for order in uow.orders.list_by_status(OrderStatus.OPEN):
                scanned = len(uow.scans.list_for_order(order.id))  # type: ignore[arg-type]
                summaries.append(
                    OrderSummaryDTO(
                        id=order.id,  # type: ignore[arg-type]
                        order_no=order.order_no,
                        customer_name=order.customer_name,
                        item_count=len(order.items),
                        scanned_total=scanned,
                        required_total=order.total_quantity,
                        created_at=order.created_at.strftime(TIMESTAMP_FORMAT),
                    )
                )
            return summaries
