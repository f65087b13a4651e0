from __future__ import annotations
import logging
from typing import Dict, List

import numpy as np
import pandas as pd

from .domain import FlightRecord

logger = logging.getLogger(__name__)

# -----------------------------
# Header variants
# -----------------------------
# canonical name -> accepted header spellings (compared after _normalize_col)
FLIGHT_COLUMN_ALIASES: Dict[str, List[str]] = {
    "date": ["Date"],
    "aircraft_id": ["AircraftID", "Aircraft ID", "aircraftID", "Registration"],
    "total_time": ["TotalTime", "Total Time", "Flight Time"],
    "pic": ["PIC"],
    "cross_country": ["CrossCountry", "Cross Country", "XC"],
    "dual_received": ["DualReceived", "Dual Received"],
    "actual_instrument": ["ActualInstrument", "Actual Instrument"],
    "simulated_instrument": ["SimulatedInstrument", "Simulated Instrument"],
    "simulated_flight": ["SimulatedFlight", "Simulated Flight", "Simulator"],
    "complex_time": ["[Hours]Complex", "Complex"],
    "night_time": ["Night", "NightTime", "Night Time"],
    "distance_nm": ["Distance", "DistanceNM"],
    "approach1": ["Approach1"],
    "approach2": ["Approach2"],
    "approach3": ["Approach3"],
    "approach4": ["Approach4"],
    "approach5": ["Approach5"],
    "approach6": ["Approach6"],
    # flight-embedded aircraft description, only used when the aircraft table is silent
    "aircraft_type": ["Aircraft Type", "Type"],
    "make": ["Make"],
    "model": ["Model"],
    "year": ["Year"],
}

AIRCRAFT_COLUMN_ALIASES: Dict[str, List[str]] = {
    "aircraft_id": ["AircraftID", "Aircraft ID", "aircraftID"],
    "make": ["Make"],
    "model": ["Model"],
    "year": ["Year"],
    "equipment_type": ["equipType (FAA)", "equipType", "EquipmentType"],
    "aircraft_class": ["aircraftClass (FAA)", "aircraftClass"],
    "type_code": ["TypeCode"],
}

FLIGHT_NUMERIC_COLUMNS = [
    "total_time",
    "pic",
    "cross_country",
    "dual_received",
    "actual_instrument",
    "simulated_instrument",
    "simulated_flight",
    "complex_time",
    "night_time",
    "distance_nm",
]

APPROACH_COLUMNS = [f"approach{i}" for i in range(1, 7)]


# -----------------------------
# Helpers
# -----------------------------
def _normalize_col(c: str) -> str:
    return c.strip().lower().replace(" ", "").replace("_", "")


def _pick_col(df: pd.DataFrame, candidates: list[str]) -> str | None:
    # match by normalized name
    norm_map = {_normalize_col(c): c for c in df.columns}
    for cand in candidates:
        key = _normalize_col(cand)
        if key in norm_map:
            return norm_map[key]
    return None


def canonicalize_columns(df: pd.DataFrame, aliases: Dict[str, List[str]]) -> pd.DataFrame:
    """
    Rename known header variants to canonical names, once.

    Canonical columns missing from the input are added as empty strings, so
    downstream code never has to probe for alternative spellings.
    Unknown columns are dropped.
    """
    out = pd.DataFrame(index=df.index)
    for canonical, candidates in aliases.items():
        col = _pick_col(df, candidates)
        if col is None:
            out[canonical] = ""
        else:
            out[canonical] = df[col].astype(str).str.strip()
    return out


def parse_or_zero(values: pd.Series) -> pd.Series:
    """Numeric parse where anything unreadable, blank, infinite or negative becomes 0.0."""
    cleaned = values.astype(str).str.replace(",", "", regex=False).str.strip()
    parsed = pd.to_numeric(cleaned, errors="coerce").astype(float)
    parsed = parsed.where(np.isfinite(parsed), 0.0)
    return parsed.clip(lower=0.0)


# -----------------------------
# Flights
# -----------------------------
def valid_flight_rows(flights: pd.DataFrame) -> pd.DataFrame:
    """
    Canonicalize a raw flights table and keep only rows that describe a flight.

    A row is kept when it has a date and either TotalTime > 0 or
    SimulatedFlight > 0. Numeric columns come back as floats.
    """
    df = canonicalize_columns(flights, FLIGHT_COLUMN_ALIASES)
    for col in FLIGHT_NUMERIC_COLUMNS:
        df[col] = parse_or_zero(df[col])

    has_date = df["date"] != ""
    has_time = (df["total_time"] > 0) | (df["simulated_flight"] > 0)
    valid = df.loc[has_date & has_time].reset_index(drop=True)

    dropped = len(df) - len(valid)
    if dropped:
        logger.debug("Dropped %d flight rows without a date or logged time", dropped)
    return valid


def normalize_flights(flights: pd.DataFrame, already_valid: bool = False) -> List[FlightRecord]:
    """Convert a flights table into FlightRecords, dropping rows that are not flights."""
    df = flights if already_valid else valid_flight_rows(flights)
    if len(df) == 0:
        return []

    dates = pd.to_datetime(df["date"], errors="coerce", format="mixed")

    records: List[FlightRecord] = []
    for i, row in enumerate(df.itertuples(index=False)):
        ts = dates.iloc[i]
        approaches = tuple(
            a for a in (getattr(row, c) for c in APPROACH_COLUMNS) if a
        )
        records.append(
            FlightRecord(
                date=None if pd.isna(ts) else ts.date(),
                aircraft_id=row.aircraft_id,
                total_time=float(row.total_time),
                pic=float(row.pic),
                cross_country=float(row.cross_country),
                dual_received=float(row.dual_received),
                actual_instrument=float(row.actual_instrument),
                simulated_instrument=float(row.simulated_instrument),
                simulated_flight=float(row.simulated_flight),
                complex_time=float(row.complex_time),
                night_time=float(row.night_time),
                distance_nm=float(row.distance_nm),
                approaches=approaches,
            )
        )
    return records


# -----------------------------
# Aircraft table
# -----------------------------
def normalize_aircraft_table(aircraft: pd.DataFrame) -> pd.DataFrame:
    """Canonical aircraft metadata, one row per identified aircraft."""
    if aircraft is None or len(aircraft.columns) == 0:
        return pd.DataFrame(columns=list(AIRCRAFT_COLUMN_ALIASES))
    df = canonicalize_columns(aircraft, AIRCRAFT_COLUMN_ALIASES)
    return df.loc[df["aircraft_id"] != ""].reset_index(drop=True)
