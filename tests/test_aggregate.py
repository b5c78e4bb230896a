"""
Tests for aggregation by event type.
"""

import random

import pytest

from stormrank.aggregate import aggregate
from stormrank.damage import InvalidExponentCode
from tests.conftest import make_record


class TestAggregate:

    def test_scenario(self, scenario_records):
        result = aggregate(scenario_records)
        assert set(result) == {"tornado", "flood"}

        tornado = result["tornado"]
        assert tornado.fatalities == 5
        assert tornado.injuries == 2
        assert tornado.property_damage == 10_000
        assert tornado.crop_damage == 1_000_000

        flood = result["flood"]
        assert flood.fatalities == 0
        assert flood.injuries == 1
        assert flood.property_damage == 5_000_000_000
        assert flood.crop_damage == 0

    def test_casualty_totals_are_ints(self, scenario_records):
        tornado = aggregate(scenario_records)["tornado"]
        assert isinstance(tornado.fatalities, int)
        assert isinstance(tornado.injuries, int)
        assert isinstance(tornado.property_damage, float)

    def test_prenormalized_keys_used_as_given(self):
        records = [make_record("Tornado", fatalities=1), make_record("tornado", fatalities=2)]
        result = aggregate(records, normalized=True)
        assert set(result) == {"Tornado", "tornado"}

    def test_literal_policy_keeps_groups_apart(self, scenario_records):
        result = aggregate(scenario_records, collapse=False)
        assert set(result) == {"tornado", "tornado ", "flood"}

    def test_order_does_not_matter(self, scenario_records):
        records = scenario_records + [
            make_record("HAIL", injuries=3, prop=(2, "h"), row_id=3),
            make_record("hail", fatalities=1, crop=(4, "k"), row_id=4),
            make_record("Flood", prop=(1, "m"), row_id=5),
        ]
        expected = aggregate(records)
        rng = random.Random(7)
        for _ in range(5):
            shuffled = records[:]
            rng.shuffle(shuffled)
            assert aggregate(shuffled) == expected

    def test_all_zero_group_is_kept(self):
        result = aggregate([make_record("FOG")])
        assert result["fog"].fatalities == 0
        assert result["fog"].property_damage == 0
        assert result["fog"].crop_damage == 0

    def test_invalid_code_aborts_with_row(self, scenario_records):
        records = scenario_records + [make_record("HAIL", prop=(1, "x"), row_id=17)]
        with pytest.raises(InvalidExponentCode) as exc:
            aggregate(records)
        assert exc.value.code == "x"
        assert exc.value.row_id == 17
        assert "row 17" in str(exc.value)

    def test_empty_input(self):
        assert aggregate([]) == {}
