"""Helpers to build orders and inventory units for tests."""

from __future__ import annotations

from decimal import Decimal

from shipscan.domain.model.inventory import InventoryUnit, UnitKind
from shipscan.domain.model.order import Order, OrderItem
from shipscan.domain.model.value_objects import Dimensions, Quantity
from shipscan.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def make_item(
    item_id: str = "i1",
    type_tag: str = "Sublimation Paper",
    qty: int = 1,
    width: str | None = None,
) -> OrderItem:
    return OrderItem(
        id=item_id,
        order_id=None,
        type_tag=type_tag,
        quantity=Quantity(qty),
        dimensions=Dimensions(width=width),
    )


def make_order(*items: OrderItem, order_no: str = "SO-0001") -> Order:
    """Create an open order; defaults to one ordinary item of quantity 1."""
    return Order.create(
        order_no=order_no,
        customer_name="Acme Prints",
        items=list(items) or [make_item()],
    )


def make_unit(
    barcode: str,
    category: str = "Sublimation Paper",
    unit_id: str | None = None,
    kind: UnitKind = UnitKind.BULK,
    inspected: bool = True,
    remaining: str | None = "100",
    width: str | None = None,
    order_id: int | None = None,
    order_item_id: str | None = None,
    sold: bool = False,
) -> InventoryUnit:
    return InventoryUnit(
        id=unit_id or f"u-{barcode}",
        barcode=barcode,
        kind=kind,
        category=category,
        dimensions=Dimensions(width=width),
        inspected=inspected,
        sold=sold,
        remaining_length=Decimal(remaining) if remaining is not None else None,
        order_id=order_id,
        order_item_id=order_item_id,
    )


def seed_store(data_dir, orders, units) -> None:
    """Write orders and units into a JSON store directory."""
    with JsonUnitOfWork(data_dir) as uow:
        for order in orders:
            uow.orders.save(order)
        for unit in units:
            uow.units.save(unit)
        uow.commit()
