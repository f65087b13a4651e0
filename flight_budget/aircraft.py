"""Aircraft identity resolution for logbook import."""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from .classify import classify_equipment
from .domain import AircraftProfile, AircraftSource, EquipmentClass, FlightRecord, ImportPlan

logger = logging.getLogger(__name__)


def _display_type(make: str, model: str) -> str:
    return f"{make} {model}".strip()


def registration_key(registration: str, normalize: bool = False) -> str:
    """
    Key used to match registrations against the stored registry.

    Without normalize the match is exact and case-sensitive, which is what
    stored registries have always been keyed on. normalize trims and
    case-folds so "n123ab " and "N123AB" are the same aircraft.
    """
    if normalize:
        return registration.strip().casefold()
    return registration


def resolve_aircraft(aircraft: pd.DataFrame, flights: pd.DataFrame) -> List[AircraftProfile]:
    """
    Build one profile per aircraft seen in an export.

    The aircraft table is authoritative for make, model, year and equipment
    type. Aircraft that only appear in the flights table are described from
    the type/make/model columns embedded in the flight rows, and are skipped
    when those are empty too. Logged time per aircraft is TotalTime for real
    aircraft and SimulatedFlight for simulator devices.

    Args:
        aircraft: Canonical aircraft table (normalize_aircraft_table)
        flights: Canonical, already filtered flight rows (valid_flight_rows)

    Returns:
        Profiles in order of first appearance, tagged as imported
    """
    profiles: Dict[str, dict] = {}

    if aircraft is not None and len(aircraft) > 0:
        for row in aircraft.itertuples(index=False):
            aircraft_id = row.aircraft_id.strip()
            device = classify_equipment(row.equipment_type)
            simulator = device is not EquipmentClass.AIRCRAFT
            display = _display_type(row.make, row.model)
            if not display and simulator:
                display = f"{row.equipment_type.strip().upper()} Simulator"

            if not aircraft_id or not (display or simulator):
                logger.debug("Skipping aircraft %r: no type and not a simulator", aircraft_id)
                continue

            profiles[aircraft_id] = dict(
                aircraft_id=aircraft_id,
                make=row.make,
                model=row.model,
                year=row.year,
                equipment_type=row.equipment_type.strip().lower(),
                aircraft_type=display,
            )

    totals: Dict[str, float] = {}
    if flights is not None and len(flights) > 0:
        for row in flights.itertuples(index=False):
            aircraft_id = row.aircraft_id.strip()
            if not aircraft_id:
                continue

            if aircraft_id not in profiles:
                display = row.aircraft_type or _display_type(row.make, row.model)
                if not display:
                    continue
                profiles[aircraft_id] = dict(
                    aircraft_id=aircraft_id,
                    make=row.make,
                    model=row.model,
                    year=row.year,
                    aircraft_type=display,
                )

            simulator = classify_equipment(profiles[aircraft_id].get("equipment_type")) is not EquipmentClass.AIRCRAFT
            logged = row.simulated_flight if simulator else row.total_time
            totals[aircraft_id] = totals.get(aircraft_id, 0.0) + float(logged)

    result = [
        AircraftProfile(total_time=totals.get(aircraft_id, 0.0), source=AircraftSource.IMPORTED, **fields)
        for aircraft_id, fields in profiles.items()
    ]
    logger.info("Resolved %d aircraft from export", len(result))
    return result


def merge_with_registry(
    imported: Iterable[AircraftProfile],
    registry: Sequence[AircraftProfile],
    normalize: bool = False,
) -> ImportPlan:
    """
    Split imported aircraft into updates of stored aircraft and new entries.

    A stored aircraft matches when its registration equals the imported one
    (exactly, unless normalize is set). A non-match is not an error: the
    aircraft is simply added.
    """
    by_registration: Dict[str, AircraftProfile] = {}
    for stored in registry:
        by_registration.setdefault(registration_key(stored.aircraft_id, normalize), stored)

    plan = ImportPlan()
    for profile in imported:
        existing = by_registration.get(registration_key(profile.aircraft_id, normalize))
        if existing is None:
            plan.new.append(profile)
            continue

        key = existing.stored_id or existing.aircraft_id
        plan.updates[key] = replace(profile, stored_id=key)
        logger.debug("Aircraft %s matches stored entry %s", profile.aircraft_id, key)

    logger.info("Import plan: %d new, %d updates", len(plan.new), len(plan.updates))
    return plan


def used_aircraft_ids(records: Iterable[FlightRecord]) -> List[str]:
    """Distinct aircraft identifiers in order of first use."""
    seen: Dict[str, None] = {}
    for rec in records:
        aircraft_id = rec.aircraft_id.strip()
        if aircraft_id:
            seen.setdefault(aircraft_id, None)
    return list(seen)
