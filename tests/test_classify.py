"""Tests for simulator and approach classification in classify.py"""

import pandas as pd
import pytest

from flight_budget.classify import (
    approach_types,
    build_equipment_index,
    classify_approach,
    classify_equipment,
    is_simulator,
)
from flight_budget.domain import AircraftProfile, ApproachType, EquipmentClass


class TestClassifyEquipment:
    """Tests for the classify_equipment function."""

    @pytest.mark.parametrize("code", ["AATD", "aatd", "FTD", "ftd"])
    def test_simulators(self, code):
        assert classify_equipment(code) is EquipmentClass.SIMULATOR

    @pytest.mark.parametrize("code", ["BATD", "batd", " Batd "])
    def test_batd(self, code):
        assert classify_equipment(code) is EquipmentClass.BATD

    @pytest.mark.parametrize("code", ["aircraft", "", None, "FFS"])
    def test_everything_else_is_an_aircraft(self, code):
        assert classify_equipment(code) is EquipmentClass.AIRCRAFT

    def test_profile_flags(self):
        batd = AircraftProfile("SIM1", equipment_type="batd")
        ftd = AircraftProfile("SIM2", equipment_type="FTD")
        plane = AircraftProfile("N1", equipment_type="aircraft")
        assert batd.is_simulator and batd.is_batd
        assert ftd.is_simulator and not ftd.is_batd
        assert not plane.is_simulator and not plane.is_batd


class TestBuildEquipmentIndex:
    """Tests for the build_equipment_index function."""

    def test_indexes_canonical_table(self):
        table = pd.DataFrame({
            "aircraft_id": ["N1", "SIM1", "SIM2"],
            "equipment_type": ["aircraft", "batd", "aatd"],
        })
        index = build_equipment_index(table)
        assert index == {
            "N1": EquipmentClass.AIRCRAFT,
            "SIM1": EquipmentClass.BATD,
            "SIM2": EquipmentClass.SIMULATOR,
        }

    def test_unknown_aircraft_is_not_a_simulator(self):
        index = build_equipment_index(pd.DataFrame({"aircraft_id": ["SIM1"], "equipment_type": ["batd"]}))
        assert is_simulator("SIM1", index)
        assert not is_simulator("N999", index)

    def test_empty_table(self):
        assert build_equipment_index(pd.DataFrame()) == {}


class TestClassifyApproach:
    """Tests for the approach-type mapping table."""

    @pytest.mark.parametrize(
        "descriptor,expected",
        [
            ("1;ILS RWY 07;07;KPWM;;", ApproachType.ILS),
            ("1;ILS OR LOC RWY 07;07;KPWM;;", ApproachType.ILS),
            ("1;LOC BC RWY 26;26;KPWM;;", ApproachType.LOC),
            ("2;vor-a;;KLEB;;", ApproachType.VOR),
            ("1;RNAV (GPS) RWY 19;19;KALB;;", ApproachType.RNAV),
            ("1;GPS RWY 11;11;KAUG;;", ApproachType.RNAV),
            ("1;NDB RWY 32;32;KBHB;;", ApproachType.NDB),
        ],
    )
    def test_maps_types(self, descriptor, expected):
        assert classify_approach(descriptor) is expected

    def test_unknown_type(self):
        assert classify_approach("1;VISUAL;07;KPWM;;") is None

    def test_no_type_field(self):
        assert classify_approach("ILS") is None

    def test_distinct_types(self):
        found = approach_types([
            "1;ILS RWY 07;07;KPWM;;",
            "1;ILS RWY 25;25;KBOS;;",
            "1;RNAV (GPS) RWY 19;19;KALB;;",
            "1;CONTACT;;KALB;;",
        ])
        assert found == {ApproachType.ILS, ApproachType.RNAV}
