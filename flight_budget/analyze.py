"""Pipeline orchestration for logbook analysis."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .aggregate import aggregate
from .aircraft import resolve_aircraft
from .classify import build_equipment_index, is_simulator
from .domain import AggregateHours, AircraftProfile, EquipmentClass, FlightRecord, RequirementEvaluation
from .errors import EmptyResultError, LogbookImportError
from .extract import CSVSource, extract_tables, read_export
from .normalize import normalize_aircraft_table, normalize_flights, valid_flight_rows
from .requirements import evaluate

logger = logging.getLogger(__name__)


@dataclass
class Logbook:
    """A parsed export: valid flights plus whatever the aircraft table said."""
    records: List[FlightRecord]
    flight_rows: pd.DataFrame                 # canonical columns, valid rows only
    aircraft_table: pd.DataFrame              # canonical columns
    equipment: Dict[str, EquipmentClass] = field(default_factory=dict)

    @property
    def simulator_sessions(self) -> int:
        return sum(1 for r in self.records if is_simulator(r.aircraft_id, self.equipment))

    @property
    def aircraft_flights(self) -> int:
        return len(self.records) - self.simulator_sessions


@dataclass
class LogbookAnalysis:
    logbook: Logbook
    hours: AggregateHours
    aircraft: List[AircraftProfile]
    evaluation: Optional[RequirementEvaluation] = None

    @property
    def summary(self) -> str:
        n_flights = self.logbook.aircraft_flights
        n_sims = self.logbook.simulator_sessions
        msg = f"Processed {n_flights} flight{'s' if n_flights != 1 else ''}"
        if n_sims > 0:
            msg += f" and {n_sims} simulator session{'s' if n_sims != 1 else ''}"
        return msg + "."


def load_logbook(source: CSVSource) -> Logbook:
    """
    Read and normalize a ForeFlight export.

    Raises:
        InvalidFormatError, MissingSectionError: the document is not a usable export
        EmptyResultError: no row describes a flight
    """
    tables = extract_tables(read_export(source))

    aircraft = normalize_aircraft_table(tables.aircraft)
    rows = valid_flight_rows(tables.flights)
    if len(rows) == 0:
        raise EmptyResultError(rows_read=len(tables.flights))

    records = normalize_flights(rows, already_valid=True)
    logger.info("Loaded %d valid flights (%d rows read)", len(records), len(tables.flights))

    return Logbook(
        records=records,
        flight_rows=rows,
        aircraft_table=aircraft,
        equipment=build_equipment_index(aircraft),
    )


def analyze_logbook(
    logbook: Logbook,
    certificate: Optional[str] = None,
    now: Optional[datetime] = None,
) -> LogbookAnalysis:
    hours = aggregate(logbook.records, logbook.equipment, now=now)
    evaluation = evaluate(hours, certificate) if certificate else None
    return LogbookAnalysis(
        logbook=logbook,
        hours=hours,
        aircraft=resolve_aircraft(logbook.aircraft_table, logbook.flight_rows),
        evaluation=evaluation,
    )


def analyze_export(
    source: CSVSource,
    certificate: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Tuple[Optional[LogbookAnalysis], Optional[str]]:
    """
    Run the complete logbook analysis pipeline.

    1. Split the export into aircraft and flights tables
    2. Normalize and filter flight rows
    3. Aggregate experience totals
    4. Evaluate the chosen certificate (if any)
    5. Resolve the aircraft flown

    Args:
        source: Path, text, bytes or file-like object holding the export
        certificate: Requirement table key ("ir", "cpl", "cfi") or None
        now: Evaluation time for recency rules

    Returns:
        Tuple of (result, error):
        - On success: (LogbookAnalysis, None)
        - On failure: (None, error_message)
    """
    try:
        logbook = load_logbook(source)
        return analyze_logbook(logbook, certificate, now=now), None
    except LogbookImportError as e:
        logger.warning("Logbook import failed: %s", e.message)
        return None, e.message
    except OSError as e:
        logger.warning("Could not read logbook: %s", e)
        return None, f"Could not read logbook: {e.strerror or e}"
