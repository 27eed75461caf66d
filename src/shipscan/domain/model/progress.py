"""Read-only projection of an order's scan progress."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ItemProgress:
    order_item_id: str
    type_tag: str
    quantity: int
    scanned_barcodes: tuple[str, ...]
    review_barcodes: tuple[str, ...] = ()

    @property
    def scanned_count(self) -> int:
        return len(self.scanned_barcodes)

    @property
    def remaining(self) -> int:
        return max(self.quantity - self.scanned_count, 0)

    @property
    def is_complete(self) -> bool:
        return self.scanned_count == self.quantity


@dataclass(frozen=True)
class OrderProgress:
    order_id: int
    order_no: str
    shipped: bool
    items: tuple[ItemProgress, ...]

    @property
    def scanned_total(self) -> int:
        return sum(item.scanned_count for item in self.items)

    @property
    def required_total(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def ready(self) -> bool:
        """True when every item holds exactly its quantity of distinct units."""
        return not self.shipped and all(item.is_complete for item in self.items)

    @property
    def incomplete_item_ids(self) -> list[str]:
        return [item.order_item_id for item in self.items if not item.is_complete]
