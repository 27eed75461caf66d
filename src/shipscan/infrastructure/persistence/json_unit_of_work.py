"""JSON-file-backed implementation of UnitOfWork.

Commit protocol (all-or-nothing across files):
  1. Write every changed document into a commit journal, atomically.
  2. Replace each changed file, atomically.
  3. Delete the journal.

Every unit of work replays a leftover journal before it reads anything,
so a crash between steps 1 and 3 is rolled forward and readers never see
half a commit.  A crash before step 1 completes leaves nothing behind.

Units of work on the same data directory are serialized from
``__enter__`` to ``__exit__``: across processes by a file lock on
``.lock``, and across threads of one process by a re-entrant lock in
front of it.  Documents are read only after both are held.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from shipscan.domain.exceptions import LedgerWriteError
from shipscan.domain.repository.unit_of_work import UnitOfWork
from shipscan.infrastructure.persistence.file_lock import FileLock
from shipscan.infrastructure.persistence.json_inventory_unit_repository import (
    JsonInventoryUnitRepository,
)
from shipscan.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from shipscan.infrastructure.persistence.json_scan_repository import (
    JsonScanRepository,
)
from shipscan.infrastructure.persistence.json_shipment_repository import (
    JsonShipmentRepository,
)
from shipscan.infrastructure.persistence.json_store import (
    JsonDocument,
    read_json,
    write_json_atomic,
)

logger = logging.getLogger(__name__)

ORDERS_FILE = "orders.json"
UNITS_FILE = "units.json"
SCANS_FILE = "scans.json"
SHIPMENTS_FILE = "shipments.json"
JOURNAL_FILE = ".commit-journal.json"
LOCK_FILE = ".lock"


class _StoreLock:
    """Thread lock plus file lock for one data directory.

    The file lock is taken when the outermost holder in this process
    enters and released when it leaves, so nested units of work in one
    thread do not deadlock on their own lock file.
    """

    def __init__(self, data_dir: Path) -> None:
        self._thread_lock = threading.RLock()
        self._file_lock = FileLock(data_dir / LOCK_FILE)
        self._depth = 0

    def acquire(self) -> None:
        self._thread_lock.acquire()
        try:
            if self._depth == 0:
                self._file_lock.acquire()
        except BaseException:
            self._thread_lock.release()
            raise
        self._depth += 1

    def release(self) -> None:
        self._depth -= 1
        try:
            if self._depth == 0:
                self._file_lock.release()
        finally:
            self._thread_lock.release()


_locks: dict[Path, _StoreLock] = {}
_locks_guard = threading.Lock()


def _lock_for(data_dir: Path) -> _StoreLock:
    with _locks_guard:
        if data_dir not in _locks:
            _locks[data_dir] = _StoreLock(data_dir)
        return _locks[data_dir]


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir).resolve()
        self._lock = _lock_for(self._data_dir)
        self._documents: dict[str, JsonDocument] = {}

    # --- Context manager ------------------------------------------------------

    def __enter__(self) -> JsonUnitOfWork:
        try:
            self._lock.acquire()
        except OSError as exc:
            raise LedgerWriteError(f"Storage unavailable: {exc}") from exc
        try:
            self._recover()
        except OSError as exc:
            self._lock.release()
            raise LedgerWriteError(f"Storage unavailable: {exc}") from exc
        except BaseException:
            self._lock.release()
            raise

        self._documents = {
            name: JsonDocument(self._data_dir / name)
            for name in (ORDERS_FILE, UNITS_FILE, SCANS_FILE, SHIPMENTS_FILE)
        }
        self.orders = JsonOrderRepository(self._documents[ORDERS_FILE])
        self.units = JsonInventoryUnitRepository(self._documents[UNITS_FILE])
        self.scans = JsonScanRepository(self._documents[SCANS_FILE])
        self.shipments = JsonShipmentRepository(self._documents[SHIPMENTS_FILE])
        return self

    def __exit__(self, *exc_info) -> None:
        try:
            self.rollback()
        finally:
            self._lock.release()

    # --- UnitOfWork interface -------------------------------------------------

    def commit(self) -> None:
        changed = {
            name: doc.records for name, doc in self._documents.items() if doc.dirty
        }
        if not changed:
            return

        journal = self._data_dir / JOURNAL_FILE
        try:
            write_json_atomic(journal, changed)
        except OSError as exc:
            logger.error("Commit journal write failed: %s", exc)
            raise LedgerWriteError(f"Storage unavailable: {exc}") from exc

        try:
            self._apply(changed)
            journal.unlink()
        except OSError as exc:
            # The journal is durable; the next unit of work completes it.
            logger.error("Commit apply failed, left in journal: %s", exc)
            raise LedgerWriteError(
                f"Storage unavailable while applying commit: {exc}"
            ) from exc

        for doc in self._documents.values():
            doc.mark_clean()

    def rollback(self) -> None:
        for doc in self._documents.values():
            doc.discard()

    # --- Journal --------------------------------------------------------------

    def _apply(self, changed: dict[str, list[dict]]) -> None:
        for name, records in changed.items():
            write_json_atomic(self._data_dir / name, records)

    def _recover(self) -> None:
        journal = self._data_dir / JOURNAL_FILE
        pending = read_json(journal, default=None)
        if pending is None:
            return
        logger.warning(
            "Replaying interrupted commit for %s", ", ".join(sorted(pending))
        )
        self._apply(pending)
        journal.unlink()
