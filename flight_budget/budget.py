"""Training cost estimate from allocated hours and aircraft rates."""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Optional

from .domain import RequirementEvaluation


AVG_HOURS_PER_LESSON = 1.5
WEEKS_PER_MONTH = 4.33
DEFAULT_LESSONS_PER_WEEK = 2.0


@dataclass(frozen=True)
class AircraftRate:
    rate_type: str = "wet"      # "wet" (fuel included) or "dry"
    wet_rate: float = 0.0
    dry_rate: float = 0.0
    fuel_price: float = 0.0     # per gallon
    fuel_burn: float = 0.0      # gallons per hour

    @property
    def hourly(self) -> float:
        if self.rate_type == "dry":
            return self.dry_rate + self.fuel_price * self.fuel_burn
        return self.wet_rate


@dataclass(frozen=True)
class AircraftAllocation:
    aircraft_id: str
    rate: AircraftRate
    dual_hours: float = 0.0
    solo_hours: float = 0.0
    family_hours: float = 0.0   # personal flying, budgeted but not training


@dataclass(frozen=True)
class AircraftCost:
    aircraft_id: str
    dual: float
    solo: float
    family: float

    @property
    def total(self) -> float:
        return self.dual + self.solo + self.family


@dataclass
class BudgetInputs:
    allocations: List[AircraftAllocation] = field(default_factory=list)
    ground_hours: float = 0.0
    instructor_rate: float = 0.0

    headset: float = 0.0
    books: float = 0.0
    bag: float = 0.0

    medical: float = 0.0
    knowledge_test: float = 0.0
    checkride: float = 0.0
    insurance: float = 0.0

    foreflight: float = 0.0
    online_school: float = 0.0

    contingency_percent: float = 0.0
    lessons_per_week: float = DEFAULT_LESSONS_PER_WEEK


@dataclass
class BudgetEstimate:
    aircraft: List[AircraftCost]
    dual_hours: float
    solo_hours: float
    family_hours: float
    flight_training: float      # dual + solo flying plus ground instruction
    family_flying: float
    gear: float
    exams: float
    subscriptions: float
    subtotal: float
    contingency: float
    total: float
    months_to_complete: int
    monthly_budget: float


def aircraft_cost(alloc: AircraftAllocation, instructor_rate: float) -> AircraftCost:
    rate = alloc.rate.hourly
    return AircraftCost(
        aircraft_id=alloc.aircraft_id,
        dual=alloc.dual_hours * (rate + instructor_rate),
        solo=alloc.solo_hours * rate,
        family=alloc.family_hours * rate,
    )


def estimate_budget(inputs: BudgetInputs) -> BudgetEstimate:
    """
    Price out the remaining training.

    Contingency is a percentage of everything, personal flying included.
    The monthly figure spreads the training budget (personal flying
    excluded, its own contingency added) over the months the allocated
    dual and solo hours take at lessons_per_week lessons of 1.5 h.
    """
    costs = [aircraft_cost(a, inputs.instructor_rate) for a in inputs.allocations]

    dual_hours = sum(a.dual_hours for a in inputs.allocations)
    solo_hours = sum(a.solo_hours for a in inputs.allocations)
    family_hours = sum(a.family_hours for a in inputs.allocations)

    ground = inputs.ground_hours * inputs.instructor_rate
    flight_training = sum(c.dual + c.solo for c in costs) + ground
    family_flying = sum(c.family for c in costs)

    gear = inputs.headset + inputs.books + inputs.bag
    exams = inputs.medical + inputs.knowledge_test + inputs.checkride + inputs.insurance
    subscriptions = inputs.foreflight + inputs.online_school

    subtotal = flight_training + family_flying + gear + exams + subscriptions
    contingency_rate = inputs.contingency_percent / 100
    contingency = subtotal * contingency_rate

    lessons_per_week = inputs.lessons_per_week or DEFAULT_LESSONS_PER_WEEK
    training_hours = dual_hours + solo_hours
    if training_hours > 0:
        weeks = training_hours / (lessons_per_week * AVG_HOURS_PER_LESSON)
        months = weeks / WEEKS_PER_MONTH
        training_budget = flight_training + gear + exams + subscriptions
        monthly = training_budget * (1 + contingency_rate) / months
        months_to_complete = math.ceil(months)
    else:
        monthly = 0.0
        months_to_complete = 0

    return BudgetEstimate(
        aircraft=costs,
        dual_hours=dual_hours,
        solo_hours=solo_hours,
        family_hours=family_hours,
        flight_training=flight_training,
        family_flying=family_flying,
        gear=gear,
        exams=exams,
        subscriptions=subscriptions,
        subtotal=subtotal,
        contingency=contingency,
        total=subtotal + contingency,
        months_to_complete=months_to_complete,
        monthly_budget=monthly,
    )


def allocate_hours(
    evaluation: Optional[RequirementEvaluation],
    allocations: List[AircraftAllocation],
) -> List[AircraftAllocation]:
    """
    Pre-fill hours from a requirement evaluation.

    The first aircraft gets the suggested dual and solo hours, the others
    keep theirs. Without an evaluation every aircraft is reset to zero.
    Personal flying hours are left alone.
    """
    out: List[AircraftAllocation] = []
    for i, alloc in enumerate(allocations):
        if evaluation is None:
            dual = solo = 0.0
        elif i == 0:
            dual, solo = evaluation.dual_needed, evaluation.solo_needed
        else:
            dual, solo = alloc.dual_hours, alloc.solo_hours
        out.append(
            AircraftAllocation(
                aircraft_id=alloc.aircraft_id,
                rate=alloc.rate,
                dual_hours=dual,
                solo_hours=solo,
                family_hours=alloc.family_hours,
            )
        )
    return out
