"""Race tests across processes: one process per scan, as the CLI runs."""

import multiprocessing
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path

from shipscan.application.submit_scan import SubmitScanHandler
from shipscan.domain.exceptions import LedgerWriteError
from shipscan.infrastructure.persistence.json_unit_of_work import (
    JOURNAL_FILE,
    JsonUnitOfWork,
)
from tests.builders import make_item, make_order, make_unit, seed_store


def submit_in_process(data_dir: str, barcode: str) -> str:
    try:
        result = SubmitScanHandler(JsonUnitOfWork(Path(data_dir))).handle(1, barcode)
    except LedgerWriteError as exc:
        return f"ERROR: {exc}"
    return result.status


def _run_in_processes(data_dir, barcodes):
    context = multiprocessing.get_context("spawn")
    with ProcessPoolExecutor(max_workers=6, mp_context=context) as pool:
        futures = [pool.submit(submit_in_process, str(data_dir), b) for b in barcodes]
        return [f.result() for f in futures]


class TestScansFromSeparateProcesses:

    def test_quantity_ceiling_holds(self, tmp_path):
        order = make_order(make_item("i1", qty=3))
        seed_store(tmp_path, [order], [make_unit(f"B{n}") for n in range(12)])

        statuses = _run_in_processes(tmp_path, [f"B{n}" for n in range(12)])

        assert statuses.count("ACCEPTED") == 3, statuses
        assert statuses.count("QUANTITY_EXCEEDED") == 9, statuses
        with JsonUnitOfWork(tmp_path) as uow:
            assert len(uow.scans.list_for_order(1)) == 3
        assert not (tmp_path / JOURNAL_FILE).exists()

    def test_every_acknowledged_scan_is_durable(self, tmp_path):
        order = make_order(make_item("i1", qty=10))
        barcodes = [f"B{n}" for n in range(10)]
        seed_store(tmp_path, [order], [make_unit(b) for b in barcodes])

        statuses = _run_in_processes(tmp_path, barcodes)

        assert statuses == ["ACCEPTED"] * 10
        with JsonUnitOfWork(tmp_path) as uow:
            stored = sorted(r.barcode for r in uow.scans.list_for_order(1))
        assert stored == sorted(barcodes)
