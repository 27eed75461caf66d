"""JSON-file-backed implementation of ScanRepository (append-only)."""

from __future__ import annotations

from datetime import datetime

from shipscan.domain.exceptions import ValidationError
from shipscan.domain.model.scan import MatchKind, ScanRecord
from shipscan.domain.repository.scan_repository import ScanRepository
from shipscan.infrastructure.persistence.json_store import JsonDocument


class JsonScanRepository(ScanRepository):

    def __init__(self, document: JsonDocument) -> None:
        self._document = document

    # --- ScanRepository interface ---------------------------------------------

    def find(self, order_id: int, barcode: str) -> ScanRecord | None:
        for raw in self._load_raw():
            if raw["order_id"] == order_id and raw["barcode"] == barcode:
                return self._to_domain(raw)
        return None

    def list_for_order(self, order_id: int) -> list[ScanRecord]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["order_id"] == order_id
        ]

    def list_for_barcode(self, barcode: str) -> list[ScanRecord]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["barcode"] == barcode
        ]

    def add(self, record: ScanRecord) -> None:
        if self.find(record.order_id, record.barcode) is not None:
            raise ValidationError(
                f"Barcode {record.barcode} already recorded for order #{record.order_id}"
            )
        records = self._load_raw()
        records.append(self._to_raw(record))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: ScanRecord) -> dict:
        return {
            "order_id": record.order_id,
            "order_item_id": record.order_item_id,
            "barcode": record.barcode,
            "unit_id": record.unit_id,
            "match_kind": record.match_kind.value,
            "scanned_at": record.scanned_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> ScanRecord:
        return ScanRecord(
            order_id=raw["order_id"],
            order_item_id=raw["order_item_id"],
            barcode=raw["barcode"],
            unit_id=raw.get("unit_id"),
            match_kind=MatchKind(raw.get("match_kind", MatchKind.BOUND.value)),
            scanned_at=datetime.fromisoformat(raw["scanned_at"]),
        )

    # --- Document helpers -----------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return self._document.records

    def _persist_raw(self, records: list[dict]) -> None:
        self._document.replace(records)
