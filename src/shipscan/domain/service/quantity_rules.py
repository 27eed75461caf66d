"""Quantity rules — when may one more unit be accepted for a line item?

Most item types are counted: once as many scans as the required quantity
have been recorded, the item is satisfied.  Uniquely-serialized types
(jumbo rolls) are constrained by *distinct units* instead: each roll is
individually identified, so the test is whether this exact barcode is
already held and whether the distinct barcodes have reached quantity.

Rules are selected per item from a small closed registry so new
serialization schemes do not touch the acceptance loop.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from shipscan.domain.model.order import OrderItem


class QuantityRule(ABC):

    name: str = ""

    @abstractmethod
    def admits(self, barcode: str, scanned: Sequence[str], quantity: int) -> bool:
        """True if *barcode* may be accepted given what was already scanned."""

    @abstractmethod
    def satisfied_count(self, scanned: Sequence[str]) -> int:
        """How many units of the requirement *scanned* accounts for."""


class CountRule(QuantityRule):
    """Scanned count must stay within quantity."""

    name = "count"

    def admits(self, barcode: str, scanned: Sequence[str], quantity: int) -> bool:
        return len(scanned) < quantity

    def satisfied_count(self, scanned: Sequence[str]) -> int:
        return len(scanned)


class DistinctUnitRule(QuantityRule):
    """Distinct barcodes must stay within quantity."""

    name = "distinct"

    def admits(self, barcode: str, scanned: Sequence[str], quantity: int) -> bool:
        if barcode in scanned:
            return False
        return len(set(scanned)) < quantity

    def satisfied_count(self, scanned: Sequence[str]) -> int:
        return len(set(scanned))


COUNT_RULE = CountRule()
DISTINCT_UNIT_RULE = DistinctUnitRule()


def rule_for(item: OrderItem) -> QuantityRule:
    if item.is_serialized:
        return DISTINCT_UNIT_RULE
    return COUNT_RULE
