"""
Command line report for a ForeFlight logbook export.

    python -m flight_budget.cli --input logbook.csv --cert ir
    flight-budget --input logbook.csv --cert cpl --json
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from datetime import datetime
from typing import List, Optional

from .analyze import LogbookAnalysis, analyze_export
from .requirements import CERTIFICATE_NAMES


SUMMARY_FIELDS = [
    ("total_time", "Total time"),
    ("pic_time", "PIC"),
    ("pic_xc", "PIC cross-country"),
    ("dual_received", "Dual received"),
    ("instrument_total", "Instrument (total)"),
    ("actual_instrument", "  actual"),
    ("simulated_instrument", "  simulated (hood)"),
    ("sim_instrument_time", "  in simulators"),
    ("instrument_dual_airplane", "Instrument training in airplane"),
    ("recent_instrument", "Instrument training, last 2 months"),
]


def _report(result: LogbookAnalysis) -> str:
    lines = [result.summary, ""]
    for attr, label in SUMMARY_FIELDS:
        lines.append(f"{label:<36} {getattr(result.hours, attr):7.1f}")

    ev = result.evaluation
    if ev is None:
        return "\n".join(lines)

    lines += ["", f"{CERTIFICATE_NAMES.get(ev.certificate, ev.certificate)} requirements:"]
    for r in ev.results:
        if r.is_special:
            state = "Completed" if r.completed else "Not completed"
            lines.append(f"  [{r.status.value:<11}] {r.name}: {state}")
        else:
            lines.append(
                f"  [{r.status.value:<11}] {r.name}: {r.current:.1f} / {r.required:g} hrs, {r.needed:.1f} needed"
            )
        if r.breakdown:
            lines.append(
                f"      ({r.breakdown['batdTime']:.1f} BATD hours included, "
                f"{r.breakdown['simInstrumentTime']:.1f} total simulator hours included)"
            )
    lines += ["", f"Suggested allocation: {ev.dual_needed:.1f} dual, {ev.solo_needed:.1f} solo"]
    return "\n".join(lines)


def _as_json(result: LogbookAnalysis) -> str:
    payload = {
        "flights": result.logbook.aircraft_flights,
        "simulator_sessions": result.logbook.simulator_sessions,
        "hours": result.hours.as_dict(aliases=True),
        "aircraft": [
            {
                "registration": a.aircraft_id,
                "type": a.aircraft_type,
                "year": a.year,
                "is_simulator": a.is_simulator,
                "total_time": round(a.total_time, 1),
            }
            for a in result.aircraft
        ],
    }
    ev = result.evaluation
    if ev is not None:
        payload["certificate"] = ev.certificate
        payload["requirements"] = [
            {
                "name": r.name,
                "current": r.current,
                "required": r.required,
                "percent": r.percent,
                "status": r.status.value,
                "needed": r.needed,
                "is_special": r.is_special,
            }
            for r in ev.results
        ]
        payload["dual_needed"] = ev.dual_needed
        payload["solo_needed"] = ev.solo_needed
    return json.dumps(payload, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Summarize a ForeFlight logbook export.")
    parser.add_argument("--input", type=str, required=True, help="Path to the ForeFlight CSV export")
    parser.add_argument("--cert", choices=sorted(CERTIFICATE_NAMES), default=None, help="Certificate to evaluate")
    parser.add_argument("--now", type=datetime.fromisoformat, default=None, help="Evaluation date (YYYY-MM-DD)")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a text report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    result, err = analyze_export(args.input, certificate=args.cert, now=args.now)
    if err or result is None:
        print(f"error: {err}", file=sys.stderr)
        return 1

    print(_as_json(result) if args.json else _report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
