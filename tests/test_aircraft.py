"""Tests for aircraft resolution and registry merging in aircraft.py"""

import pandas as pd
import pytest

from flight_budget.aircraft import merge_with_registry, registration_key, resolve_aircraft, used_aircraft_ids
from flight_budget.domain import AircraftProfile, AircraftSource, FlightRecord
from flight_budget.extract import extract_tables
from flight_budget.normalize import normalize_aircraft_table, valid_flight_rows


@pytest.fixture
def resolved(sample_export):
    tables = extract_tables(sample_export)
    aircraft = normalize_aircraft_table(tables.aircraft)
    flights = valid_flight_rows(tables.flights)
    return {p.aircraft_id: p for p in resolve_aircraft(aircraft, flights)}


class TestResolveAircraft:
    """Tests for the resolve_aircraft function."""

    def test_profiles_from_aircraft_table(self, resolved):
        assert list(resolved) == ["N12345", "SIM1", "SIM2"]
        cessna = resolved["N12345"]
        assert cessna.aircraft_type == "Cessna 172S"
        assert cessna.year == "1998"
        assert cessna.source is AircraftSource.IMPORTED
        assert not cessna.is_simulator

    def test_logged_time_per_aircraft(self, resolved):
        assert resolved["N12345"].total_time == pytest.approx(5.5)
        assert resolved["SIM1"].total_time == pytest.approx(1.5)
        assert resolved["SIM2"].total_time == 0

    def test_simulator_without_make_gets_device_name(self, resolved):
        assert resolved["SIM1"].aircraft_type == "BATD Simulator"
        assert resolved["SIM1"].is_batd
        assert resolved["SIM2"].aircraft_type == "Redbird FMX"

    def test_unknown_aircraft_without_type_is_skipped(self, resolved):
        assert "N999XY" not in resolved

    def test_aircraft_described_by_flight_rows(self):
        flights = valid_flight_rows(pd.DataFrame({
            "Date": ["2024-01-01", "2024-01-02"],
            "AircraftID": ["N55", "N55"],
            "TotalTime": ["1.2", "0.8"],
            "AircraftType": ["Piper PA-28", "Piper PA-28"],
        }))
        profiles = resolve_aircraft(normalize_aircraft_table(pd.DataFrame()), flights)
        assert len(profiles) == 1
        assert profiles[0].aircraft_type == "Piper PA-28"
        assert profiles[0].total_time == pytest.approx(2.0)

    def test_no_tables(self):
        assert resolve_aircraft(pd.DataFrame(), pd.DataFrame()) == []


class TestMergeWithRegistry:
    """Tests for the merge_with_registry function."""

    def test_exact_match_updates_stored_entry(self):
        registry = [AircraftProfile("N12345", make="Cessna", source=AircraftSource.PREVIOUSLY_STORED, stored_id="a1")]
        imported = [AircraftProfile("N12345", make="Cessna", model="172S", total_time=5.5)]
        plan = merge_with_registry(imported, registry)
        assert plan.new == []
        assert plan.updates["a1"].model == "172S"
        assert plan.updates["a1"].stored_id == "a1"
        assert plan.updates["a1"].total_time == 5.5

    def test_stored_entry_without_id_is_keyed_by_registration(self):
        registry = [AircraftProfile("N12345", source=AircraftSource.PREVIOUSLY_STORED)]
        plan = merge_with_registry([AircraftProfile("N12345")], registry)
        assert list(plan.updates) == ["N12345"]

    def test_non_match_is_new(self):
        registry = [AircraftProfile("N1", stored_id="a1")]
        plan = merge_with_registry([AircraftProfile("N2")], registry)
        assert [p.aircraft_id for p in plan.new] == ["N2"]
        assert plan.updates == {}

    def test_exact_match_is_case_sensitive(self):
        registry = [AircraftProfile("N123AB", stored_id="a1")]
        plan = merge_with_registry([AircraftProfile("n123ab ")], registry)
        assert len(plan.new) == 1

    def test_normalized_match(self):
        registry = [AircraftProfile("N123AB", stored_id="a1")]
        plan = merge_with_registry([AircraftProfile("n123ab ")], registry, normalize=True)
        assert plan.new == []
        assert "a1" in plan.updates

    def test_registration_key(self):
        assert registration_key(" N1 ") == " N1 "
        assert registration_key(" N1 ", normalize=True) == "n1"


class TestUsedAircraftIds:
    def test_first_use_order(self):
        records = [
            FlightRecord(None, aircraft_id="N2"),
            FlightRecord(None, aircraft_id="SIM1"),
            FlightRecord(None, aircraft_id="N2"),
            FlightRecord(None, aircraft_id=" "),
        ]
        assert used_aircraft_ids(records) == ["N2", "SIM1"]
