"""Unit tests for the BarcodeMatcher domain service."""

import pytest

from shipscan.domain.exceptions import (
    EntityNotFoundError,
    NoSuchUnitError,
    UnitNotEligibleError,
    ValidationError,
)
from shipscan.domain.model.scan import MatchKind
from shipscan.domain.service.barcode_matcher import BarcodeMatcher, categories_match
from shipscan.domain.service.scan_ledger import ScanLedger
from tests.builders import make_item, make_order, make_unit
from tests.fakes import FakeUnitOfWork


def _setup(order, units):
    uow = FakeUnitOfWork([order], units)
    ledger = ScanLedger(uow.scans)
    return BarcodeMatcher(uow.orders, uow.units, ledger), ledger


class TestLookup:

    def test_unknown_barcode(self):
        matcher, _ = _setup(make_order(), [])
        with pytest.raises(NoSuchUnitError, match="does not match any unit"):
            matcher.resolve(1, "NOPE")

    def test_unknown_order(self):
        matcher, _ = _setup(make_order(), [make_unit("A")])
        with pytest.raises(EntityNotFoundError):
            matcher.resolve(99, "A")

    def test_empty_barcode(self):
        matcher, _ = _setup(make_order(), [])
        with pytest.raises(ValidationError):
            matcher.resolve(1, "  ")

    def test_uninspected_unit(self):
        matcher, _ = _setup(make_order(), [make_unit("A", inspected=False)])
        with pytest.raises(UnitNotEligibleError, match="inspected"):
            matcher.resolve(1, "A")

    def test_exhausted_unit(self):
        matcher, _ = _setup(make_order(), [make_unit("A", remaining="0")])
        with pytest.raises(UnitNotEligibleError, match="remaining"):
            matcher.resolve(1, "A")

    def test_unit_sold_to_other_order(self):
        matcher, _ = _setup(make_order(), [make_unit("A", sold=True, order_id=5)])
        with pytest.raises(UnitNotEligibleError, match="different order"):
            matcher.resolve(1, "A")

    def test_unit_reserved_for_other_order(self):
        matcher, _ = _setup(make_order(), [make_unit("A", order_id=5)])
        with pytest.raises(NoSuchUnitError, match="another order"):
            matcher.resolve(1, "A")

    def test_whitespace_around_barcode_ignored(self):
        matcher, _ = _setup(make_order(), [make_unit("A")])
        assert matcher.resolve(1, " A\n").unit_id == "u-A"


class TestAssociation:

    def test_bound_unit_wins(self):
        order = make_order(
            make_item("paper", "Sublimation Paper"),
            make_item("jumbo", "Jumbo Roll"),
        )
        unit = make_unit("A", category="Sublimation Paper", order_item_id="jumbo")
        matcher, _ = _setup(order, [unit])

        match = matcher.resolve(1, "A")

        assert match.order_item_id == "jumbo"
        assert match.match_kind == MatchKind.BOUND

    def test_type_match_is_case_insensitive(self):
        order = make_order(
            make_item("paper", "Sublimation Paper"),
            make_item("jumbo", "Jumbo Roll"),
        )
        matcher, _ = _setup(order, [make_unit("J1", category="JUMBO ROLL")])

        match = matcher.resolve(1, "J1")

        assert match.order_item_id == "jumbo"
        assert match.match_kind == MatchKind.TYPE

    def test_type_match_respects_dimensions(self):
        order = make_order(
            make_item("narrow", "Sublimation Paper", width="1118"),
            make_item("wide", "Sublimation Paper", width="1600"),
        )
        matcher, _ = _setup(order, [make_unit("A", width="1600mm")])

        assert matcher.resolve(1, "A").order_item_id == "wide"

    def test_type_match_prefers_item_with_outstanding_quantity(self):
        order = make_order(
            make_item("first", "Sublimation Paper", qty=1),
            make_item("second", "Sublimation Paper", qty=1),
        )
        matcher, ledger = _setup(order, [make_unit("A"), make_unit("B")])
        ledger.record(1, "first", "A", "u-A")

        assert matcher.resolve(1, "B").order_item_id == "second"

    def test_fallback_to_first_item(self):
        order = make_order(
            make_item("first", "Transfer Film"),
            make_item("second", "Ink"),
        )
        matcher, _ = _setup(order, [make_unit("A", category="Sublimation Paper")])

        match = matcher.resolve(1, "A")

        assert match.order_item_id == "first"
        assert match.match_kind == MatchKind.FALLBACK


class TestAlreadyScanned:

    def test_previous_scan_returned(self):
        order = make_order(make_item("i1", qty=2))
        matcher, ledger = _setup(order, [make_unit("A")])
        ledger.record(1, "i1", "A", "u-A")

        match = matcher.resolve(1, "A")

        assert match.already_scanned
        assert match.order_item_id == "i1"

    def test_previous_scan_wins_over_later_ineligibility(self):
        order = make_order(make_item("i1"))
        matcher, ledger = _setup(order, [make_unit("A", inspected=False)])
        ledger.record(1, "i1", "A", "u-A")

        assert matcher.resolve(1, "A").already_scanned


class TestLooseTypeMatching:

    def test_category_contained_in_type_tag(self):
        order = make_order(
            make_item("i1", "Jumbo Roll"),
            make_item("i2", "Sublimation Paper 90gsm"),
        )
        matcher, _ = _setup(order, [make_unit("P1", category="Sublimation Paper")])

        match = matcher.resolve(1, "P1")

        assert match.order_item_id == "i2"
        assert match.match_kind == MatchKind.TYPE

    def test_sublimation_and_paper_are_equivalent(self):
        order = make_order(
            make_item("film", "Transfer Film"),
            make_item("sub", "Sublimation"),
        )
        matcher, _ = _setup(order, [make_unit("P1", category="Coated Paper")])

        assert matcher.resolve(1, "P1").order_item_id == "sub"

    def test_type_only_when_dimensions_differ(self):
        order = make_order(
            make_item("film", "Transfer Film"),
            make_item("paper", "Sublimation Paper", width="1118"),
        )
        matcher, _ = _setup(order, [make_unit("P1", width="1600")])

        match = matcher.resolve(1, "P1")

        assert match.order_item_id == "paper"
        assert match.match_kind == MatchKind.TYPE_ONLY
        assert match.match_kind.needs_review


class TestCategoriesMatch:

    @pytest.mark.parametrize(
        "type_tag, category",
        [
            ("Jumbo Roll", "jumbo roll"),
            ("Sublimation Paper 90gsm", "Sublimation Paper"),
            ("Paper", "Sublimation Paper"),
            ("Sublimation", "Kraft Paper"),
        ],
    )
    def test_matches(self, type_tag, category):
        assert categories_match(type_tag, category)

    @pytest.mark.parametrize(
        "type_tag, category",
        [
            ("Jumbo Roll", "Sublimation Paper"),
            ("Transfer Film", "Ink"),
            ("Jumbo Roll", ""),
        ],
    )
    def test_does_not_match(self, type_tag, category):
        assert not categories_match(type_tag, category)


class TestClaimedByAnotherOrder:

    def _two_orders(self):
        first = make_order(make_item("i1"), order_no="SO-0001")
        second = make_order(make_item("i1"), order_no="SO-0002")
        uow = FakeUnitOfWork([first, second], [make_unit("A")])
        ledger = ScanLedger(uow.scans)
        return BarcodeMatcher(uow.orders, uow.units, ledger), ledger, uow

    def test_unit_scanned_into_open_order_is_refused(self):
        matcher, ledger, _ = self._two_orders()
        ledger.record(2, "i1", "A", "u-A")

        with pytest.raises(NoSuchUnitError, match="open order SO-0002"):
            matcher.resolve(1, "A")

    def test_claim_ends_when_other_order_ships(self):
        matcher, ledger, uow = self._two_orders()
        ledger.record(2, "i1", "A", "u-A")
        other = uow.orders.get_by_id(2)
        other.mark_shipped()
        uow.orders.save(other)

        assert matcher.resolve(1, "A").unit_id == "u-A"
