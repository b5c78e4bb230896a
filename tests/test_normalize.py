"""
Tests for event-type normalization.
"""

import pytest

from stormrank.normalize import normalize_event_type, normalize_records
from tests.conftest import make_record


class TestNormalizeEventType:

    def test_frost_freeze_variants_match(self):
        a = normalize_event_type("FROST/FREEZE")
        b = normalize_event_type("frost freeze")
        assert a == b == "frost freeze"
        assert "/" not in a and a == a.lower()

    def test_runs_collapse_and_trim(self):
        assert normalize_event_type("  TSTM WIND//HAIL+ ") == "tstm wind hail"
        assert normalize_event_type("Tornado!") == "tornado"
        assert normalize_event_type("THUNDERSTORM\tWINDS") == "thunderstorm winds"

    def test_literal_policy(self):
        assert normalize_event_type("FROST//FREEZE", collapse=False) == "frost  freeze"
        assert normalize_event_type("Tornado!", collapse=False) == "tornado "
        assert normalize_event_type("HAIL+", collapse=False) == "hail "

    def test_no_synonym_merging(self):
        assert normalize_event_type("TSTM WIND") != normalize_event_type("THUNDERSTORM WIND")

    @pytest.mark.parametrize("collapse", [True, False])
    @pytest.mark.parametrize("raw", ["FROST/FREEZE", "  Heavy  Rain; ", "Hail+", "flash-flood"])
    def test_idempotent(self, raw, collapse):
        once = normalize_event_type(raw, collapse=collapse)
        assert normalize_event_type(once, collapse=collapse) == once


class TestNormalizeRecords:

    def test_returns_new_records(self):
        original = [make_record("FLASH FLOOD/FLOOD", fatalities=1)]
        cleaned = normalize_records(original)
        assert cleaned[0].event_type == "flash flood flood"
        assert cleaned[0].fatalities == 1
        assert original[0].event_type == "FLASH FLOOD/FLOOD"
