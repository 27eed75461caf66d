"""Domain -> DTO mapping shared by several use cases."""

from __future__ import annotations

from shipscan.application.dto import (
    ItemProgressDTO,
    ScanStatusDTO,
    ShipmentDTO,
    ShipmentLineDTO,
)
from shipscan.domain.model.order import Order
from shipscan.domain.model.progress import OrderProgress
from shipscan.domain.model.shipment import Shipment

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


def shipment_to_dto(shipment: Shipment, order: Order) -> ShipmentDTO:
    return ShipmentDTO(
        id=shipment.id,  # type: ignore[arg-type]
        order_id=order.id,  # type: ignore[arg-type]
        order_no=order.order_no,
        customer_name=order.customer_name,
        lines=[
            ShipmentLineDTO(
                order_item_id=line.order_item_id,
                unit_id=line.unit_id,
                barcode=line.barcode,
            )
            for line in shipment.lines
        ],
        notes=shipment.notes,
        created_at=shipment.created_at.strftime(TIMESTAMP_FORMAT),
    )


def progress_to_dto(progress: OrderProgress, status: str) -> ScanStatusDTO:
    return ScanStatusDTO(
        order_id=progress.order_id,
        order_no=progress.order_no,
        status=status,
        items=[
            ItemProgressDTO(
                order_item_id=item.order_item_id,
                type_tag=item.type_tag,
                quantity=item.quantity,
                scanned_count=item.scanned_count,
                remaining=item.remaining,
                scanned_barcodes=list(item.scanned_barcodes),
                review_barcodes=list(item.review_barcodes),
            )
            for item in progress.items
        ],
        scanned_total=progress.scanned_total,
        required_total=progress.required_total,
        ready=progress.ready,
    )
