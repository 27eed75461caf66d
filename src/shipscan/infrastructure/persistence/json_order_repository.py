"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from shipscan.domain.model.order import Order, OrderItem, OrderStatus
from shipscan.domain.model.value_objects import Dimensions, Quantity
from shipscan.domain.repository.order_repository import OrderRepository
from shipscan.infrastructure.persistence.json_store import JsonDocument


class JsonOrderRepository(OrderRepository):

    def __init__(self, document: JsonDocument) -> None:
        self._document = document

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        orders = [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["status"] == status.value
        ]
        return sorted(orders, key=lambda o: o.created_at)

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        if order.id is None:
            order.id = self.next_id()
            for item in order.items:
                item.order_id = order.id

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_no": order.order_no,
            "customer_name": order.customer_name,
            "note": order.note,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "shipped_at": order.shipped_at.isoformat() if order.shipped_at else None,
            "items": [
                {
                    "id": item.id,
                    "type": item.type_tag,
                    "product": item.product,
                    "quantity": item.quantity.value,
                    "dimensions": item.dimensions.to_raw(),
                    "weight": str(item.weight) if item.weight is not None else None,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                id=str(i["id"]),
                order_id=raw["id"],
                type_tag=i["type"],
                product=i.get("product"),
                quantity=Quantity(i["quantity"]),
                dimensions=Dimensions.from_raw(i.get("dimensions")),
                weight=Decimal(i["weight"]) if i.get("weight") is not None else None,
            )
            for i in raw["items"]
        ]
        shipped_at = raw.get("shipped_at")
        return Order(
            id=raw["id"],
            order_no=raw["order_no"],
            customer_name=raw["customer_name"],
            items=items,
            note=raw.get("note"),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            shipped_at=datetime.fromisoformat(shipped_at) if shipped_at else None,
        )

    # --- Document helpers -----------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return self._document.records

    def _persist_raw(self, orders: list[dict]) -> None:
        self._document.replace(orders)
