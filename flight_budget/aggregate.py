"""Folding flight records into certification experience totals."""

from __future__ import annotations
import logging
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

import pandas as pd

from .classify import approach_types, equipment_class_for
from .domain import AggregateHours, EquipmentClass, FlightRecord

logger = logging.getLogger(__name__)


# Distance thresholds (nautical miles)
LONG_XC_MIN_NM = 50.0
SOLO_LONG_XC_MIN_NM = 300.0
INSTRUMENT_XC_MIN_NM = 250.0

# Instrument cross-country: approaches flown and distinct approach types
INSTRUMENT_XC_MIN_APPROACHES = 3
INSTRUMENT_XC_MIN_APPROACH_TYPES = 3

# Recent instrument training window (calendar months before evaluation)
RECENCY_MONTHS = 2


def recency_window_start(now: Optional[datetime] = None) -> date:
    """First calendar day that still counts as recent."""
    ts = pd.Timestamp(now if now is not None else datetime.now()).normalize()
    return (ts - pd.DateOffset(months=RECENCY_MONTHS)).date()


def _xc_clip(rec: FlightRecord) -> float:
    return min(rec.cross_country, rec.total_time)


def _instrument_dual_clip(rec: FlightRecord) -> float:
    return min(rec.dual_received, rec.instrument_time, rec.total_time)


def qualifies_instrument_xc(rec: FlightRecord) -> bool:
    """
    True when one flight carries three approaches of three different types.

    Distance and aircraft checks are the caller's; this only looks at the
    logged approaches.
    """
    if len(rec.approaches) < INSTRUMENT_XC_MIN_APPROACHES:
        return False
    return len(approach_types(rec.approaches)) >= INSTRUMENT_XC_MIN_APPROACH_TYPES


def aggregate(
    records: Iterable[FlightRecord],
    equipment: Optional[Mapping[str, EquipmentClass]] = None,
    now: Optional[datetime] = None,
) -> AggregateHours:
    """
    Fold flight records into a fresh AggregateHours.

    Every total only ever grows while records are folded in. Intersections
    (PIC and cross-country, dual and instrument) are clipped per flight so a
    flight never contributes more than any of the times it logged.
    solo_long_xc keeps the best single flight and ir_250nm_xc is a 0/1 latch.

    Args:
        records: Normalized flight records, in logbook order
        equipment: Aircraft id -> device class; missing ids are real aircraft
        now: Evaluation time for the recency window (defaults to now)

    Returns:
        Totals for this record list. Nothing is shared between calls.
    """
    equipment = equipment or {}
    window_start = recency_window_start(now)
    hours = AggregateHours()
    n_sim = 0

    for rec in records:
        total = rec.total_time
        xc = rec.cross_country
        instrument = rec.instrument_time

        # 1. plain totals
        hours.total_time += total
        hours.pic_time += rec.pic
        hours.xc_time += xc
        hours.dual_received += rec.dual_received
        hours.complex_time += rec.complex_time
        hours.night_time += rec.night_time

        # 2. simulator device vs real aircraft
        device = equipment_class_for(rec.aircraft_id, equipment)
        simulator = device is not EquipmentClass.AIRCRAFT
        if simulator:
            n_sim += 1
            hours.sim_time += rec.simulated_flight
            hours.sim_instrument_time += rec.simulated_instrument
            if device is EquipmentClass.BATD and rec.simulated_flight > 0:
                hours.batd_time += rec.simulated_flight
            hours.instrument_total += rec.simulated_instrument
        else:
            hours.actual_instrument += rec.actual_instrument
            hours.simulated_instrument += rec.simulated_instrument
            hours.instrument_total += instrument

        # 3. PIC cross-country
        if rec.pic > 0 and xc > 0:
            hours.pic_xc += min(rec.pic, xc, total)

        # 4./5. instrument training received in an airplane, and its recent share
        if not simulator and rec.dual_received > 0 and instrument > 0:
            clip = _instrument_dual_clip(rec)
            hours.instrument_dual_airplane += clip
            if rec.date is not None and rec.date >= window_start:
                hours.recent_instrument += clip

        if xc <= 0:
            continue

        # 6. day / night cross-country
        if rec.night_time > 0:
            hours.night_xc += min(xc, rec.night_time, total)
        else:
            hours.day_xc += _xc_clip(rec)

        # 7. long and solo long cross-country
        if rec.distance_nm >= LONG_XC_MIN_NM:
            hours.long_xc += _xc_clip(rec)
            if rec.is_solo and rec.distance_nm >= SOLO_LONG_XC_MIN_NM:
                hours.solo_long_xc = max(hours.solo_long_xc, _xc_clip(rec))

        # 8. instrument cross-country with approach diversity
        if not simulator and rec.distance_nm >= INSTRUMENT_XC_MIN_NM and qualifies_instrument_xc(rec):
            hours.ir_250nm_xc = 1

    logger.debug(
        "Aggregated logbook: %.1f total hours, %d simulator sessions",
        hours.total_time, n_sim,
    )
    return hours
