"""End-to-end tests for the click CLI against a temporary JSON store."""

import json

import pytest
from click.testing import CliRunner

from shipscan.infrastructure.cli.main import cli
from shipscan.infrastructure.logging_config import reset_logging
from shipscan.infrastructure.persistence.json_unit_of_work import JOURNAL_FILE
from tests.builders import make_item, make_order, make_unit, seed_store


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.delenv("SHIPSCAN_DATA_DIR", raising=False)
    monkeypatch.delenv("SHIPSCAN_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SHIPSCAN_LOG_FORMAT", raising=False)
    order = make_order(make_item("i1", "Sublimation Paper", qty=2), order_no="SO-0100")
    seed_store(tmp_path, [order], [make_unit(b) for b in "ABC"])
    return tmp_path


def _invoke(store, *args):
    return CliRunner().invoke(cli, ["--data-dir", str(store), *args])


class TestScanCommands:

    def test_scan_reports_each_barcode(self, store):
        result = _invoke(store, "scan", "--order", "1", "A", "A", "B")

        assert result.exit_code == 0, result.output
        assert "A: accepted for item i1 (1 scanned, 1 remaining)" in result.output
        assert "A: already scanned for item i1" in result.output
        assert "B: accepted for item i1 (2 scanned, 0 remaining)" in result.output

    def test_rejected_scan_exits_nonzero(self, store):
        _invoke(store, "scan", "--order", "1", "A", "B")

        result = _invoke(store, "scan", "--order", "1", "C")

        assert result.exit_code == 2
        assert "C: rejected, item i1 already has all 2 units" in result.output

    def test_unknown_order_is_an_error(self, store):
        result = _invoke(store, "scan", "--order", "7", "A")
        assert result.exit_code == 1
        assert "Order #7 not found" in result.output

    def test_status_shows_progress(self, store):
        _invoke(store, "scan", "--order", "1", "A", "B")

        result = _invoke(store, "status", "--order", "1")

        assert result.exit_code == 0, result.output
        assert "Order SO-0100" in result.output
        assert "Ready to finalize." in result.output

    def test_orders_lists_open_orders(self, store):
        result = _invoke(store, "orders")
        assert result.exit_code == 0
        assert "SO-0100" in result.output
        assert "0/2" in result.output


class TestFinalizeCommand:

    def test_finalize_incomplete_order_fails(self, store):
        _invoke(store, "scan", "--order", "1", "A")

        result = _invoke(store, "finalize", "--order", "1")

        assert result.exit_code == 1
        assert "incomplete items: i1" in result.output

    def test_finalize_then_history(self, store):
        _invoke(store, "scan", "--order", "1", "A", "B")

        result = _invoke(store, "finalize", "--order", "1", "--notes", "dock 3")
        assert result.exit_code == 0, result.output
        assert "Order SO-0100 shipped as shipment #1, 2 units." in result.output

        listing = _invoke(store, "shipments", "list", "--search", "acme")
        assert "SO-0100" in listing.output

        shown = _invoke(store, "shipments", "show", "--id", "1")
        assert "Notes:    dock 3" in shown.output
        assert "u-B" in shown.output

    def test_scan_after_finalize_refused(self, store):
        _invoke(store, "scan", "--order", "1", "A", "B")
        _invoke(store, "finalize", "--order", "1")

        result = _invoke(store, "scan", "--order", "1", "C")

        assert result.exit_code == 1
        assert "shipped" in result.output.lower()


class TestCliErrors:

    def test_invalid_log_level_in_environment(self, store, monkeypatch):
        monkeypatch.setenv("SHIPSCAN_LOG_LEVEL", "VERBOSE")

        result = _invoke(store, "orders")

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_storage_failure_during_recovery_is_reported(self, store):
        # A pending commit that cannot be applied: its target is a directory.
        (store / "blocked.json").mkdir()
        (store / JOURNAL_FILE).write_text(json.dumps({"blocked.json": []}))

        for args in (["orders"], ["shipments", "list"]):
            result = _invoke(store, *args)
            assert result.exit_code == 1, result.output
            assert "retry the same command" in result.output
            assert "Traceback" not in result.output
