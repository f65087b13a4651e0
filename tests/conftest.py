"""Shared ForeFlight export fixtures."""

from datetime import datetime

import pytest


FLIGHTS_HEADER = (
    "Date,AircraftID,From,To,TotalTime,PIC,DualReceived,CrossCountry,Night,"
    "ActualInstrument,SimulatedInstrument,SimulatedFlight,Distance,[Hours]Complex,"
    "Approach1,Approach2,Approach3,Approach4,Approach5,Approach6"
)

AIRCRAFT_LINES = [
    "Aircraft Table,,,,",
    "AircraftID,equipType (FAA),Year,Make,Model",
    "N12345,aircraft,1998,Cessna,172S",
    "SIM1,batd,,,",
    "SIM2,ftd,,Redbird,FMX",
    ",,,,",
]

FLIGHT_LINES = [
    # dual hood work, exactly two months before NOW
    "2024-03-01,N12345,KPWM,KBOS,2.0,0,2.0,0,0,0.5,1.0,0,0,0,,,,,,",
    # solo 310 nm cross-country with ILS, RNAV and VOR approaches
    "2024-04-01,N12345,KPWM,KALB,3.5,3.5,0,3.5,0,0,0,0,310,0,"
    "1;ILS OR LOC RWY 01;01;KALB;;,1;RNAV (GPS) RWY 19;19;KALB;;,1;VOR RWY 28;28;KPWM;;,,,",
    # BATD session
    "2024-04-15,SIM1,,,0,0,1.5,0,0,0,1.0,1.5,0,0,,,,,,",
    # no date: dropped
    ",N12345,,,1.0,1.0,0,0,0,0,0,0,0,0,,,,,,",
    # no time: dropped
    "2024-04-20,N12345,,,0,0,0,0,0,0,0,0,0,0,,,,,,",
    # aircraft missing from the aircraft table
    "2024-02-01,N999XY,KPWM,KPWM,1.0,1.0,0,0,0,0,0,0,0,0,,,,,,",
]

NOW = datetime(2024, 5, 1, 12, 0)


def make_export(flight_lines, aircraft_lines=AIRCRAFT_LINES, signature=True):
    lines = []
    lines.append(
        "ForeFlight Logbook Import,This row is required for importing into ForeFlight. Do not delete or modify."
        if signature else "Some Other Logbook,"
    )
    lines.append(",")
    lines.extend(aircraft_lines or [])
    lines.append("Flights Table,,,,")
    lines.append(FLIGHTS_HEADER)
    lines.extend(flight_lines)
    return "\n".join(lines) + "\n"


@pytest.fixture
def sample_export():
    return make_export(FLIGHT_LINES)


@pytest.fixture
def now():
    return NOW
