"""Unit tests for the per-type quantity rules."""

from shipscan.domain.service.quantity_rules import (
    COUNT_RULE,
    DISTINCT_UNIT_RULE,
    CountRule,
    DistinctUnitRule,
    rule_for,
)
from tests.builders import make_item


class TestRuleSelection:

    def test_jumbo_roll_uses_distinct_rule(self):
        assert rule_for(make_item(type_tag="Jumbo Roll")) is DISTINCT_UNIT_RULE

    def test_other_types_use_count_rule(self):
        assert rule_for(make_item(type_tag="Divided Roll")) is COUNT_RULE


class TestCountRule:

    def test_admits_below_quantity(self):
        assert CountRule().admits("C", ["A"], quantity=2)

    def test_rejects_at_quantity(self):
        assert not CountRule().admits("C", ["A", "B"], quantity=2)

    def test_satisfied_count_is_scan_count(self):
        assert CountRule().satisfied_count(["A", "B"]) == 2


class TestDistinctUnitRule:

    def test_admits_new_barcode_below_quantity(self):
        assert DistinctUnitRule().admits("J3", ["J1", "J2"], quantity=3)

    def test_rejects_barcode_already_held(self):
        assert not DistinctUnitRule().admits("J1", ["J1"], quantity=3)

    def test_rejects_new_barcode_at_quantity(self):
        assert not DistinctUnitRule().admits("J4", ["J1", "J2", "J3"], quantity=3)

    def test_repeated_barcodes_count_once(self):
        # Re-rendered duplicates must not eat into the quantity.
        assert DistinctUnitRule().satisfied_count(["J1", "J1", "J2"]) == 2
        assert DistinctUnitRule().admits("J3", ["J1", "J1", "J2"], quantity=3)
