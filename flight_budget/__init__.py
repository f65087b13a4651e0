"""
Flight Budget - Logbook Analysis & Certification Requirements

A toolkit for turning a ForeFlight logbook export into certification
progress. Classifies simulator sessions, derives composite experience
totals (PIC cross-country, instrument training, long cross-countries),
evaluates them against instrument, commercial and instructor requirement
tables, and prices out the training that is still needed.
"""

from .domain import (
    AggregateHours,
    AircraftProfile,
    ApproachType,
    CertificationRequirement,
    EquipmentClass,
    FlightRecord,
    RequirementEvaluation,
    RequirementResult,
    RequirementStatus,
)
from .errors import (
    EmptyResultError,
    InvalidFormatError,
    LogbookImportError,
    MissingSectionError,
    UnknownCertificateError,
)
from .extract import extract_tables, read_export
from .normalize import normalize_flights, normalize_aircraft_table, valid_flight_rows
from .classify import build_equipment_index, classify_approach, classify_equipment
from .aggregate import aggregate
from .aircraft import merge_with_registry, resolve_aircraft
from .requirements import CERTIFICATE_REQUIREMENTS, evaluate
from .budget import BudgetInputs, estimate_budget
from .analyze import analyze_export, load_logbook

__all__ = [
    # Domain models
    "AggregateHours",
    "AircraftProfile",
    "ApproachType",
    "CertificationRequirement",
    "EquipmentClass",
    "FlightRecord",
    "RequirementEvaluation",
    "RequirementResult",
    "RequirementStatus",
    # Errors
    "LogbookImportError",
    "InvalidFormatError",
    "MissingSectionError",
    "EmptyResultError",
    "UnknownCertificateError",
    # Parsing
    "read_export",
    "extract_tables",
    "valid_flight_rows",
    "normalize_flights",
    "normalize_aircraft_table",
    # Classification
    "build_equipment_index",
    "classify_equipment",
    "classify_approach",
    # Aggregation / evaluation
    "aggregate",
    "CERTIFICATE_REQUIREMENTS",
    "evaluate",
    # Aircraft import
    "resolve_aircraft",
    "merge_with_registry",
    # Budget
    "BudgetInputs",
    "estimate_budget",
    # Pipeline
    "analyze_export",
    "load_logbook",
]

__version__ = "0.1.0"
