"""Scan records and the outcomes of submitting a scan.

A ScanRecord is append-only: once written it is never updated or
deleted.  Everything the operator sees about progress is a projection
of these records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar


class MatchKind(Enum):
    BOUND = "BOUND"  # unit was reserved for this order item
    TYPE = "TYPE"  # category and dimensions matched the item
    TYPE_ONLY = "TYPE_ONLY"  # category matched, dimensions did not
    FALLBACK = "FALLBACK"  # nothing better; first order item

    @property
    def needs_review(self) -> bool:
        """Heuristic matches should be checked by a person."""
        return self in (MatchKind.TYPE_ONLY, MatchKind.FALLBACK)


@dataclass(frozen=True)
class ScanRecord:
    order_id: int
    order_item_id: str
    barcode: str
    unit_id: str | None
    match_kind: MatchKind = MatchKind.BOUND
    scanned_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def needs_review(self) -> bool:
        return self.match_kind.needs_review


@dataclass(frozen=True)
class MatchResult:
    """What the barcode matcher resolved a scan to."""

    order_item_id: str
    unit_id: str | None
    already_scanned: bool = False
    match_kind: MatchKind = MatchKind.BOUND


# --- Accept results ------------------------------------------------------------


class AcceptResult:
    """Base for every outcome of submitting a scan."""

    status: ClassVar[str] = ""
    accepted: ClassVar[bool] = False


@dataclass(frozen=True)
class Accepted(AcceptResult):
    status: ClassVar[str] = "ACCEPTED"
    accepted: ClassVar[bool] = True

    order_item_id: str
    new_count: int
    remaining: int
    match_kind: MatchKind = MatchKind.BOUND

    @property
    def needs_review(self) -> bool:
        return self.match_kind.needs_review


@dataclass(frozen=True)
class AlreadyScanned(AcceptResult):
    """Not an error: confirms a scan that was accepted earlier."""

    status: ClassVar[str] = "ALREADY_SCANNED"
    accepted: ClassVar[bool] = True

    order_item_id: str


@dataclass(frozen=True)
class QuantityExceeded(AcceptResult):
    status: ClassVar[str] = "QUANTITY_EXCEEDED"

    order_item_id: str
    quantity: int


@dataclass(frozen=True)
class NoMatch(AcceptResult):
    status: ClassVar[str] = "NO_MATCH"

    reason: str


@dataclass(frozen=True)
class UnitNotEligible(AcceptResult):
    status: ClassVar[str] = "UNIT_NOT_ELIGIBLE"

    reason: str
