from __future__ import annotations
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple


# -----------------------------
# Enumerations
# -----------------------------
class EquipmentClass(str, Enum):
    AIRCRAFT = "aircraft"
    SIMULATOR = "simulator"   # AATD / FTD
    BATD = "batd"             # basic ATD, a simulator that is also tracked separately


class ApproachType(str, Enum):
    ILS = "ILS"
    LOC = "LOC"
    VOR = "VOR"
    RNAV = "RNAV"   # GPS approaches are filed here too
    NDB = "NDB"


class HourCategory(str, Enum):
    DUAL = "dual"
    SOLO = "solo"


class RequirementStatus(str, Enum):
    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    NOT_STARTED = "not-started"


class AircraftSource(str, Enum):
    MANUAL = "manual"
    IMPORTED = "imported"
    PREVIOUSLY_STORED = "previously-stored"


# -----------------------------
# Logbook line item
# -----------------------------
@dataclass(frozen=True)
class FlightRecord:
    date: Optional[date]    # None when the date cell was present but unreadable
    aircraft_id: str = ""

    total_time: float = 0.0
    pic: float = 0.0
    cross_country: float = 0.0
    dual_received: float = 0.0
    actual_instrument: float = 0.0
    simulated_instrument: float = 0.0   # hood time in a real aircraft, instrument time in a sim
    simulated_flight: float = 0.0       # time logged in a flight simulation device
    complex_time: float = 0.0
    night_time: float = 0.0
    distance_nm: float = 0.0

    approaches: Tuple[str, ...] = ()    # raw "count;type;runway;airport;..." descriptors

    @property
    def instrument_time(self) -> float:
        return self.actual_instrument + self.simulated_instrument

    @property
    def is_solo(self) -> bool:
        # all of the flight logged as PIC with no instruction received
        return self.pic == self.total_time and self.dual_received == 0


# -----------------------------
# Aircraft
# -----------------------------
SIMULATOR_EQUIPMENT = frozenset({"AATD", "BATD", "FTD"})


@dataclass(frozen=True)
class AircraftProfile:
    aircraft_id: str            # registration / tail number, or an internal key for sims
    make: str = ""
    model: str = ""
    year: str = ""
    equipment_type: str = ""    # FAA equipType code: aircraft, batd, aatd, ftd ...
    aircraft_type: str = ""     # display name, normally "Make Model"
    total_time: float = 0.0     # filled in during import only
    source: AircraftSource = AircraftSource.IMPORTED
    stored_id: Optional[str] = None   # registry key when loaded from a previous session

    @property
    def equipment_class(self) -> EquipmentClass:
        from .classify import classify_equipment
        return classify_equipment(self.equipment_type)

    @property
    def is_simulator(self) -> bool:
        return self.equipment_class is not EquipmentClass.AIRCRAFT

    @property
    def is_batd(self) -> bool:
        return self.equipment_class is EquipmentClass.BATD


@dataclass
class ImportPlan:
    """Outcome of merging freshly imported aircraft with a stored registry."""
    new: List[AircraftProfile] = field(default_factory=list)
    updates: Dict[str, AircraftProfile] = field(default_factory=dict)   # stored id -> replacement


# -----------------------------
# Aggregated experience
# -----------------------------
# Python attribute -> name used by requirement tables and exported summaries
AGGREGATE_FIELD_NAMES: Dict[str, str] = {
    "total_time": "totalTime",
    "pic_time": "picTime",
    "pic_xc": "picXC",
    "xc_time": "xcTime",
    "dual_received": "dualReceived",
    "instrument_total": "instrumentTotal",
    "actual_instrument": "actualInstrument",
    "simulated_instrument": "simulatedInstrument",
    "sim_time": "simTime",
    "sim_instrument_time": "simInstrumentTime",
    "batd_time": "batdTime",
    "instrument_dual_airplane": "instrumentDualAirplane",
    "recent_instrument": "recentInstrument",
    "complex_time": "complexTime",
    "night_time": "nightTime",
    "day_xc": "dayXC",
    "night_xc": "nightXC",
    "solo_long_xc": "soloLongXC",
    "long_xc": "longXC",
    "ir_250nm_xc": "ir250nmXC",
}


@dataclass
class AggregateHours:
    total_time: float = 0.0
    pic_time: float = 0.0
    pic_xc: float = 0.0
    xc_time: float = 0.0
    dual_received: float = 0.0

    instrument_total: float = 0.0
    actual_instrument: float = 0.0      # real aircraft only
    simulated_instrument: float = 0.0   # real aircraft only (hood)

    sim_time: float = 0.0               # simulator devices only
    sim_instrument_time: float = 0.0
    batd_time: float = 0.0

    instrument_dual_airplane: float = 0.0
    recent_instrument: float = 0.0
    complex_time: float = 0.0
    night_time: float = 0.0

    day_xc: float = 0.0
    night_xc: float = 0.0
    solo_long_xc: float = 0.0   # best single qualifying flight, not a sum
    long_xc: float = 0.0
    ir_250nm_xc: int = 0        # 0/1 latch

    def get(self, name: str, default: float = 0.0) -> float:
        """Look up a total by attribute name or by its requirement-table name."""
        for attr, alias in AGGREGATE_FIELD_NAMES.items():
            if name in (attr, alias):
                return getattr(self, attr)
        return default

    def as_dict(self, aliases: bool = False) -> Dict[str, float]:
        values = asdict(self)
        if aliases:
            return {AGGREGATE_FIELD_NAMES[k]: v for k, v in values.items()}
        return values


# -----------------------------
# Certification requirements
# -----------------------------
@dataclass(frozen=True)
class CertificationRequirement:
    name: str
    required: float
    field: str                  # a key of AGGREGATE_FIELD_NAMES (either spelling)
    category: HourCategory
    is_special: bool = False    # single qualifying event: done / not done
    show_breakdown: bool = False


@dataclass
class RequirementResult:
    name: str
    current: float
    required: float
    percent: float
    status: RequirementStatus
    needed: float
    is_special: bool
    category: HourCategory
    breakdown: Optional[Dict[str, float]] = None

    @property
    def completed(self) -> bool:
        return self.status is RequirementStatus.COMPLETED


@dataclass
class RequirementEvaluation:
    certificate: str
    results: List[RequirementResult]
    dual_needed: float = 0.0    # default allocation: max, not sum, of dual shortfalls
    solo_needed: float = 0.0
