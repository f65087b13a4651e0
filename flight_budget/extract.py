"""Splitting a ForeFlight logbook export into its aircraft and flights tables."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from io import StringIO
from pathlib import Path
from typing import IO, List, Union

import pandas as pd

from .errors import InvalidFormatError, MissingSectionError

logger = logging.getLogger(__name__)


PRODUCT_SIGNATURE = "ForeFlight Logbook Import"
AIRCRAFT_SECTION_MARKER = "Aircraft Table"
FLIGHTS_SECTION_MARKER = "Flights Table"

# The flights header must carry both of these column names
FLIGHTS_HEADER_DATE = "Date"
FLIGHTS_HEADER_AIRCRAFT = "AircraftID"
FLIGHTS_HEADER_LOOKAHEAD = 4   # lines scanned after the "Flights Table" marker

CSVSource = Union[str, bytes, Path, IO[bytes], IO[str]]


@dataclass
class ExportTables:
    aircraft: pd.DataFrame   # empty when the export has no aircraft section
    flights: pd.DataFrame
    flights_header_line: int


def read_export(source: CSVSource) -> str:
    """
    Return the export as text.

    A str holding a line break or the product signature is taken to be the
    document itself, any other str is a path. Byte content is decoded as
    UTF-8 (BOM tolerated).

    Raises:
        OSError: a path that cannot be read
    """
    if isinstance(source, Path):
        data = source.read_bytes()
    elif isinstance(source, str):
        if "\n" in source or "\r" in source or PRODUCT_SIGNATURE in source:
            return source.lstrip("\ufeff")
        data = Path(source).read_bytes()
    elif isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    else:
        data = source.read()

    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8-sig", errors="replace")
    return data.lstrip("\ufeff")


def _read_table(lines: List[str]) -> pd.DataFrame:
    if not any(line.strip(" ,") for line in lines):
        return pd.DataFrame()

    text = "\n".join(lines)
    n_columns = len(pd.read_csv(StringIO(text), dtype=str, nrows=0, index_col=False).columns)
    overlong: List[int] = []

    def _fit_row(fields: List[str]) -> List[str]:
        # spreadsheet edits leave stray trailing cells; keep the row, drop the surplus
        overlong.append(len(fields))
        return fields[:n_columns]

    df = pd.read_csv(
        StringIO(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        engine="python",
        on_bad_lines=_fit_row,
    )
    if overlong:
        logger.warning("Truncated %d row(s) with more than %d fields", len(overlong), n_columns)

    df = df.fillna("")   # short rows
    df.columns = [str(c).strip() for c in df.columns]

    # ForeFlight pads short sections with rows made only of commas
    if len(df) > 0:
        filled = df.apply(lambda col: col.str.strip() != "")
        df = df.loc[filled.any(axis=1)].reset_index(drop=True)
    return df


def extract_tables(text: str) -> ExportTables:
    """
    Locate the aircraft and flights sections of an export and parse both.

    Raises:
        InvalidFormatError: first line lacks the product signature
        MissingSectionError: no flights header within the lookahead window
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")

    if len(lines) == 0 or PRODUCT_SIGNATURE not in lines[0]:
        raise InvalidFormatError(lines[0] if lines else "")

    aircraft_idx = -1
    flights_marker_idx = -1
    flights_idx = -1

    for i, line in enumerate(lines):
        if AIRCRAFT_SECTION_MARKER in line:
            aircraft_idx = i + 1
        if FLIGHTS_SECTION_MARKER in line:
            flights_marker_idx = i
            for j in range(i + 1, min(i + 1 + FLIGHTS_HEADER_LOOKAHEAD, len(lines))):
                if FLIGHTS_HEADER_DATE in lines[j] and FLIGHTS_HEADER_AIRCRAFT in lines[j]:
                    flights_idx = j
                    break
            break

    if flights_idx == -1:
        raise MissingSectionError(FLIGHTS_SECTION_MARKER)

    logger.debug("Flights table header found at line %d", flights_idx)

    if 0 < aircraft_idx <= flights_marker_idx:
        aircraft = _read_table(lines[aircraft_idx:flights_marker_idx])
        logger.debug("Aircraft table: %d rows", len(aircraft))
    else:
        logger.info("Export has no aircraft table; simulator detection disabled")
        aircraft = pd.DataFrame()

    flights = _read_table(lines[flights_idx:])
    logger.debug("Flights table: %d rows", len(flights))

    return ExportTables(aircraft=aircraft, flights=flights, flights_header_line=flights_idx)
