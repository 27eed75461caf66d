"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Each exception is classified as retryable or not.  Only retryable errors
(storage write failures) should trigger automatic re-submission by a
caller; re-submitting a scan is safe because the ledger is idempotent per
barcode.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    retryable = False


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class NoSuchUnitError(DomainException):
    """The scanned barcode does not resolve to a unit usable by this order."""


class UnitNotEligibleError(DomainException):
    """The unit exists but cannot be shipped (uninspected, exhausted, sold)."""


class OrderAlreadyShippedError(DomainException):
    """The order is closed; no further scans or finalization are allowed."""


class OrderIncompleteError(DomainException):
    """Finalization was attempted before every line item was satisfied."""

    def __init__(self, missing_item_ids: list[str]) -> None:
        self.missing_item_ids = list(missing_item_ids)
        super().__init__(
            "Order is not fully scanned; incomplete items: "
            + ", ".join(self.missing_item_ids)
        )


class LedgerWriteError(DomainException):
    """A durable write failed.  Nothing was applied; retry the same call."""

    retryable = True
