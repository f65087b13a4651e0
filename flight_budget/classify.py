"""Simulator-device and instrument-approach classification."""

from __future__ import annotations
from typing import Dict, Iterable, Mapping, Set, Tuple

import pandas as pd

from .domain import SIMULATOR_EQUIPMENT, ApproachType, EquipmentClass


# Ordered: the first row whose pattern occurs in the approach type wins,
# so "ILS OR LOC RWY 24" is an ILS. The diversity check counts members of
# ApproachType, so any new pattern must map onto an existing member.
APPROACH_PATTERNS: Tuple[Tuple[ApproachType, Tuple[str, ...]], ...] = (
    (ApproachType.ILS, ("ILS",)),
    (ApproachType.LOC, ("LOC",)),
    (ApproachType.VOR, ("VOR",)),
    (ApproachType.RNAV, ("RNAV", "GPS")),
    (ApproachType.NDB, ("NDB",)),
)


def classify_equipment(code: str | None) -> EquipmentClass:
    """Map an FAA equipType code (any case) onto a device class."""
    code = (code or "").strip().upper()
    if code == "BATD":
        return EquipmentClass.BATD
    if code in SIMULATOR_EQUIPMENT:
        return EquipmentClass.SIMULATOR
    return EquipmentClass.AIRCRAFT


def build_equipment_index(aircraft: pd.DataFrame) -> Dict[str, EquipmentClass]:
    """
    Aircraft id -> device class, from a canonical aircraft table.

    Only aircraft present in the table get an entry; callers treat
    anything missing as a real aircraft.
    """
    index: Dict[str, EquipmentClass] = {}
    if aircraft is None or len(aircraft) == 0 or "aircraft_id" not in aircraft.columns:
        return index
    codes = aircraft["equipment_type"] if "equipment_type" in aircraft.columns else pd.Series("", index=aircraft.index)
    for aircraft_id, code in zip(aircraft["aircraft_id"], codes):
        index[str(aircraft_id).strip()] = classify_equipment(code)
    return index


def equipment_class_for(aircraft_id: str, equipment: Mapping[str, EquipmentClass]) -> EquipmentClass:
    return equipment.get(aircraft_id.strip(), EquipmentClass.AIRCRAFT)


def is_simulator(aircraft_id: str, equipment: Mapping[str, EquipmentClass]) -> bool:
    return equipment_class_for(aircraft_id, equipment) is not EquipmentClass.AIRCRAFT


def classify_approach(descriptor: str) -> ApproachType | None:
    """
    Approach type of one logged approach.

    Descriptors look like "1;RNAV (GPS);24;KPWM;;" - the second field is
    the free-text type. Returns None when there is no second field or no
    pattern matches.
    """
    parts = descriptor.split(";")
    if len(parts) < 2:
        return None
    kind = parts[1].strip().upper()
    for approach_type, patterns in APPROACH_PATTERNS:
        if any(p in kind for p in patterns):
            return approach_type
    return None


def approach_types(descriptors: Iterable[str]) -> Set[ApproachType]:
    found: Set[ApproachType] = set()
    for d in descriptors:
        t = classify_approach(d)
        if t is not None:
            found.add(t)
    return found
