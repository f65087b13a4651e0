"""Certificate requirement tables and progress evaluation."""

from __future__ import annotations
import logging
from typing import Dict, List

from .domain import (
    AggregateHours,
    CertificationRequirement,
    HourCategory,
    RequirementEvaluation,
    RequirementResult,
    RequirementStatus,
)
from .errors import UnknownCertificateError

logger = logging.getLogger(__name__)

DUAL = HourCategory.DUAL
SOLO = HourCategory.SOLO

# -----------------------------
# Requirement tables
# -----------------------------
CERTIFICATE_NAMES: Dict[str, str] = {
    "ir": "Instrument Rating",
    "cpl": "Commercial Pilot",
    "cfi": "Certified Flight Instructor",
}

CERTIFICATE_REQUIREMENTS: Dict[str, List[CertificationRequirement]] = {
    "ir": [
        CertificationRequirement("50 hours PIC cross country", 50, "picXC", SOLO),
        CertificationRequirement("10 hours PIC XC in airplanes", 10, "picXC", SOLO),
        CertificationRequirement("40 hours actual or simulated instrument", 40, "instrumentTotal", DUAL, show_breakdown=True),
        CertificationRequirement("15 hours instrument training from instructor", 15, "instrumentDualAirplane", DUAL),
        CertificationRequirement("One 250nm XC: 3 approaches, 3 approach types", 1, "ir250nmXC", DUAL, is_special=True),
        CertificationRequirement("3 hours instrument training (last 2 months)", 3, "recentInstrument", DUAL),
    ],
    "cpl": [
        CertificationRequirement("250 hours total time", 250, "totalTime", SOLO),
        CertificationRequirement("100 hours PIC", 100, "picTime", SOLO),
        CertificationRequirement("50 hours PIC in airplanes", 50, "picTime", SOLO),
        CertificationRequirement("50 hours PIC cross country", 50, "picXC", SOLO),
        CertificationRequirement("10 hours PIC XC in airplanes", 10, "picXC", SOLO),
        CertificationRequirement("20 hours training (total)", 20, "dualReceived", DUAL),
        CertificationRequirement("10 hours instrument training", 10, "instrumentDualAirplane", DUAL),
        CertificationRequirement("5 hours instrument in single engine", 5, "instrumentDualAirplane", DUAL),
        CertificationRequirement("10 hours complex or TAA", 10, "complexTime", DUAL),
        CertificationRequirement("One 2hr day XC (100nm+ from origin)", 1, "dayXC", DUAL, is_special=True),
        CertificationRequirement("One 2hr night XC (100nm+ from origin)", 1, "nightXC", DUAL, is_special=True),
        CertificationRequirement("3 hours training (last 2 months)", 3, "recentInstrument", DUAL),
        CertificationRequirement("10 hours solo or PIC time", 10, "picTime", SOLO),
        CertificationRequirement("One solo 300nm XC (one leg 250nm+)", 1, "soloLongXC", SOLO, is_special=True),
        CertificationRequirement("5 hours night VFR (10 T/O and landings)", 5, "nightTime", SOLO, is_special=True),
    ],
    "cfi": [
        CertificationRequirement("250 hours total time", 250, "totalTime", SOLO),
        CertificationRequirement("100 hours PIC", 100, "picTime", SOLO),
        CertificationRequirement("50 hours PIC cross country", 50, "picXC", SOLO),
        CertificationRequirement("15 hours instrument (in training)", 15, "instrumentTotal", DUAL),
    ],
}


def requirement_status(percent: float) -> RequirementStatus:
    if percent >= 100:
        return RequirementStatus.COMPLETED
    if percent > 0:
        return RequirementStatus.IN_PROGRESS
    return RequirementStatus.NOT_STARTED


def evaluate_requirement(req: CertificationRequirement, hours: AggregateHours) -> RequirementResult:
    current = float(hours.get(req.field, 0.0) or 0.0)
    needed = max(req.required - current, 0.0)
    percent = min(current / req.required, 1.0) * 100 if req.required > 0 else 100.0

    breakdown = None
    if req.show_breakdown:
        breakdown = {
            "batdTime": hours.batd_time,
            "simInstrumentTime": hours.sim_instrument_time,
        }

    return RequirementResult(
        name=req.name,
        current=current,
        required=float(req.required),
        percent=percent,
        status=requirement_status(percent),
        needed=needed,
        is_special=req.is_special,
        category=req.category,
        breakdown=breakdown,
    )


def evaluate(hours: AggregateHours, certificate: str) -> RequirementEvaluation:
    """
    Measure progress toward a certificate.

    Special requirements (single qualifying flights) are reported as done or
    not done and stay out of the hour allocation. For the rest, the hours
    still needed per category are the largest shortfall in that category,
    not the sum: one block of flying counts toward every overlapping
    requirement at once.

    Raises:
        UnknownCertificateError: certificate is not a key of CERTIFICATE_REQUIREMENTS
    """
    try:
        reqs = CERTIFICATE_REQUIREMENTS[certificate]
    except KeyError:
        raise UnknownCertificateError(certificate) from None

    results: List[RequirementResult] = []
    dual_needed = 0.0
    solo_needed = 0.0

    for req in reqs:
        res = evaluate_requirement(req, hours)
        results.append(res)

        if res.is_special:
            continue
        if res.category is HourCategory.DUAL:
            dual_needed = max(dual_needed, res.needed)
        else:
            solo_needed = max(solo_needed, res.needed)

    logger.debug("%s: dual needed %.1f, solo needed %.1f", certificate, dual_needed, solo_needed)
    return RequirementEvaluation(
        certificate=certificate,
        results=results,
        dual_needed=dual_needed,
        solo_needed=solo_needed,
    )
