"""Application services: shipment history queries."""

from __future__ import annotations

from shipscan.application.dto import ShipmentDTO
from shipscan.application.mapping import shipment_to_dto
from shipscan.domain.exceptions import EntityNotFoundError
from shipscan.domain.repository.unit_of_work import UnitOfWork


class ShipmentHistoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, search: str | None = None) -> list[ShipmentDTO]:
        """Finalized shipments, newest first.

        ``search`` matches the order number or customer name,
        case-insensitively.
        """
        needle = search.strip().lower() if search else ""
        with self._uow as uow:
            result: list[ShipmentDTO] = []
            for shipment in uow.shipments.list_all():
                order = uow.orders.get_by_id(shipment.order_id)
                if order is None:
                    continue
                haystack = f"{order.order_no} {order.customer_name}".lower()
                if needle and needle not in haystack:
                    continue
                result.append(shipment_to_dto(shipment, order))
        return sorted(result, key=lambda s: (s.created_at, s.id), reverse=True)


class ShowShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, shipment_id: int) -> ShipmentDTO:
        with self._uow as uow:
            shipment = uow.shipments.get_by_id(shipment_id)
            if shipment is None:
                raise EntityNotFoundError(f"Shipment #{shipment_id} not found")
            order = uow.orders.get_by_id(shipment.order_id)
            if order is None:
                raise EntityNotFoundError(
                    f"Order #{shipment.order_id} for shipment #{shipment_id} not found"
                )
            return shipment_to_dto(shipment, order)
