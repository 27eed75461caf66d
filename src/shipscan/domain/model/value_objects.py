"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from shipscan.domain.exceptions import ValidationError

_NON_NUMERIC = re.compile(r"[^0-9.]")


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Barcode:
    """A scanned barcode value.

    Scanners and manual entry often add surrounding whitespace, so the
    value is stripped.  Case and inner characters are significant: a
    barcode identifies exactly one physical unit.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError(
                f"Barcode must be a string, got {type(self.value).__name__}"
            )
        stripped = self.value.strip()
        if not stripped:
            raise ValidationError("Barcode value is required")
        object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Dimensions:
    """Physical attributes used as matching hints, never as identity.

    Values are kept as entered (e.g. ``"1600mm"``).  Comparison strips
    everything but digits and dots; a missing value on either side is a
    wildcard.
    """

    gsm: str | None = None
    width: str | None = None
    length: str | None = None

    def compatible_with(self, other: Dimensions) -> bool:
        return all(
            _loose_equal(mine, theirs)
            for mine, theirs in (
                (self.gsm, other.gsm),
                (self.width, other.width),
                (self.length, other.length),
            )
        )

    def to_raw(self) -> dict:
        return {"gsm": self.gsm, "width": self.width, "length": self.length}

    @staticmethod
    def from_raw(raw: dict | None) -> Dimensions:
        raw = raw or {}
        return Dimensions(
            gsm=_as_text(raw.get("gsm")),
            width=_as_text(raw.get("width")),
            length=_as_text(raw.get("length")),
        )


def _as_text(value) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _loose_equal(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return True
    left = _NON_NUMERIC.sub("", a)
    right = _NON_NUMERIC.sub("", b)
    if not left or not right:
        return True
    try:
        return Decimal(left) == Decimal(right)
    except InvalidOperation:
        return left == right
