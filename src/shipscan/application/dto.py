"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ItemProgressDTO:
    """Output: scan progress of one line item."""

    order_item_id: str
    type_tag: str
    quantity: int
    scanned_count: int
    remaining: int
    scanned_barcodes: list[str]
    review_barcodes: list[str]


@dataclass(frozen=True)
class ScanStatusDTO:
    """Output: what has been scanned for an order so far."""

    order_id: int
    order_no: str
    status: str
    items: list[ItemProgressDTO]
    scanned_total: int
    required_total: int
    ready: bool


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: one order awaiting shipment."""

    id: int
    order_no: str
    customer_name: str
    item_count: int
    scanned_total: int
    required_total: int
    created_at: str


@dataclass(frozen=True)
class ShipmentLineDTO:
    order_item_id: str
    unit_id: str | None
    barcode: str


@dataclass(frozen=True)
class ShipmentDTO:
    """Output: a finalized shipment as displayed to the user."""

    id: int
    order_id: int
    order_no: str
    customer_name: str
    lines: list[ShipmentLineDTO]
    notes: str | None
    created_at: str
