"""Order aggregate — what the customer is waiting for.

The Order is an aggregate root that owns its line items.  Orders are
created by an external order-entry process; this package only moves
them from OPEN to SHIPPED.  Scan progress is *not* stored here: it is
always derived from the scan ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from shipscan.domain.exceptions import OrderAlreadyShippedError, ValidationError
from shipscan.domain.model.value_objects import Dimensions, Quantity


class OrderStatus(Enum):
    OPEN = "OPEN"
    SHIPPED = "SHIPPED"


# Item type tags whose fulfillment constraint is "N distinct units".
SERIALIZED_TYPE_TAGS = frozenset({"jumbo roll"})


@dataclass
class OrderItem:
    """One required category/quantity within an order.

    ``dimensions`` and ``weight`` are display and matching hints only.
    """

    id: str
    order_id: int | None
    type_tag: str
    quantity: Quantity
    product: str | None = None
    dimensions: Dimensions = field(default_factory=Dimensions)
    weight: Decimal | None = None

    @property
    def is_serialized(self) -> bool:
        return self.type_tag.strip().lower() in SERIALIZED_TYPE_TAGS


@dataclass
class Order:
    """Aggregate root for customer orders awaiting shipment.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_no: str
    customer_name: str
    items: list[OrderItem]
    note: str | None = None
    status: OrderStatus = OrderStatus.OPEN
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    shipped_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_no: str,
        customer_name: str,
        items: list[OrderItem],
        note: str | None = None,
    ) -> Order:
        """Create a new open order, enforcing all invariants."""
        if not order_no or not order_no.strip():
            raise ValidationError("Order number is required")
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        seen: set[str] = set()
        for item in items:
            if item.id in seen:
                raise ValidationError(f"Duplicate order item ID '{item.id}'")
            seen.add(item.id)

        return Order(
            id=None,
            order_no=order_no.strip(),
            customer_name=customer_name.strip(),
            items=list(items),
            note=note,
        )

    # --- State transitions ----------------------------------------------------

    def ensure_open(self) -> None:
        if self.status == OrderStatus.SHIPPED:
            raise OrderAlreadyShippedError(
                f"Order {self.order_no} has already been shipped"
            )

    def mark_shipped(self, at: datetime | None = None) -> None:
        """Transition OPEN -> SHIPPED.  Shipped orders are immutable."""
        self.ensure_open()
        self.status = OrderStatus.SHIPPED
        self.shipped_at = at or datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def is_shipped(self) -> bool:
        return self.status == OrderStatus.SHIPPED

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self.items)

    def find_item(self, item_id: str) -> OrderItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise ValidationError(
            f"Order item '{item_id}' not found in order {self.order_no}"
        )
