from __future__ import annotations

import csv
import io
import math
from typing import List, Optional

from firewatch.domain.models import FireObservation, parse_confidence

FIRMS_COLUMNS = [
    "latitude",
    "longitude",
    "brightness",
    "scan",
    "track",
    "acq_date",
    "acq_time",
    "satellite",
    "instrument",
    "confidence",
    "version",
    "bright_t31",
    "frp",
    "daynight",
]


def parse_firms_csv(text: str) -> List[FireObservation]:
    """Parse a FIRMS area CSV (header row + 14 fixed columns) into observations.

    Rows that are truncated or carry invalid coordinates are dropped.
    """
    rows = list(csv.reader(io.StringIO(text.strip())))
    observations: List[FireObservation] = []
    for columns in rows[1:]:
        if len(columns) < len(FIRMS_COLUMNS):
            continue
        lat = _to_float(columns[0])
        lon = _to_float(columns[1])
        if lat is None or lon is None:
            continue
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            continue
        observations.append(
            FireObservation(
                latitude=lat,
                longitude=lon,
                brightness=_to_float(columns[2]),
                scan=_to_float(columns[3]),
                track=_to_float(columns[4]),
                acq_date=columns[5].strip(),
                acq_time=columns[6].strip(),
                satellite=columns[7].strip(),
                instrument=columns[8].strip(),
                confidence=parse_confidence(columns[9]),
                version=columns[10].strip(),
                bright_t31=_to_float(columns[11]),
                frp=_to_float(columns[12]) or 0.0,
                daynight=columns[13].strip() or None,
            )
        )
    return observations


def _to_float(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value
