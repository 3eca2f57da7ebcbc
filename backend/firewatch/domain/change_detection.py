from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .models import ChangeSummary, DetectionResult, FireChange, FireObservation, Period

# 0.01 grados ~= 1.1 km en el ecuador; dos detecciones más cercanas son el mismo foco
PROXIMITY_THRESHOLD = 0.01
# Cambio relativo mínimo de FRP para reportar growing/diminishing
FRP_CHANGE_THRESHOLD = 0.20
# Techo fijo (MW) para normalizar la intensidad de focos nuevos/extinguidos
FRP_SCALE_MW = 100.0
GRID_CELLS_PER_DEGREE = 100

CellKey = Tuple[int, int]


@dataclass(frozen=True)
class DetectionConfig:
    proximity_threshold: float = PROXIMITY_THRESHOLD
    frp_change_threshold: float = FRP_CHANGE_THRESHOLD
    frp_scale_mw: float = FRP_SCALE_MW
    cells_per_degree: int = GRID_CELLS_PER_DEGREE


DEFAULT_CONFIG = DetectionConfig()


def cell_key(lat: float, lon: float, cells_per_degree: int = GRID_CELLS_PER_DEGREE) -> CellKey:
    return math.floor(lat * cells_per_degree), math.floor(lon * cells_per_degree)


def build_grid_index(
    observations: Sequence[FireObservation],
    cells_per_degree: int = GRID_CELLS_PER_DEGREE,
) -> Dict[CellKey, List[int]]:
    """Map each grid cell to the positions of the observations that fall in it."""
    index: Dict[CellKey, List[int]] = defaultdict(list)
    for position, obs in enumerate(observations):
        index[cell_key(obs.latitude, obs.longitude, cells_per_degree)].append(position)
    return index


def find_closest(
    target: FireObservation,
    candidates: Sequence[FireObservation],
    index: Dict[CellKey, List[int]],
    config: DetectionConfig = DEFAULT_CONFIG,
) -> Optional[int]:
    """Position of the nearest candidate strictly within the proximity threshold.

    The target's own cell and its 8 neighbours are searched (more rings when
    the threshold spans several cells), so matches that straddle a cell
    boundary are not lost.
    """
    row, col = cell_key(target.latitude, target.longitude, config.cells_per_degree)
    reach = max(1, math.ceil(config.proximity_threshold * config.cells_per_degree))
    offsets = range(-reach, reach + 1)
    neighbourhood = sorted(
        position
        for d_row in offsets
        for d_col in offsets
        for position in index.get((row + d_row, col + d_col), ())
    )
    closest: Optional[int] = None
    min_distance = math.inf
    for position in neighbourhood:
        candidate = candidates[position]
        distance = math.hypot(candidate.latitude - target.latitude, candidate.longitude - target.longitude)
        if distance < config.proximity_threshold and distance < min_distance:
            closest = position
            min_distance = distance
    return closest


def change_id(kind: str, lat: float, lon: float) -> str:
    return f"{kind}_{lat:.5f}_{lon:.5f}"


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def classify_pair(
    before: FireObservation,
    after: FireObservation,
    config: DetectionConfig = DEFAULT_CONFIG,
) -> Optional[FireChange]:
    """Growing/diminishing event for a matched pair, or None when the FRP is steady.

    A zero (or negative) FRP before means any positive FRP after is reported
    as growing at full intensity.
    """
    if before.frp <= 0:
        if after.frp <= 0:
            return None
        kind = "growing"
        intensity = 1.0
    else:
        frp_change = (after.frp - before.frp) / before.frp
        if abs(frp_change) <= config.frp_change_threshold:
            return None
        kind = "growing" if frp_change > 0 else "diminishing"
        intensity = _clamp_unit(abs(frp_change))
    return FireChange(
        identifier=change_id(kind, after.latitude, after.longitude),
        latitude=after.latitude,
        longitude=after.longitude,
        kind=kind,
        intensity=intensity,
        before_frp=before.frp,
        after_frp=after.frp,
        confidence=min(after.confidence, before.confidence),
        first_detected=before.acq_date,
        last_detected=after.acq_date,
    )


def new_fire(obs: FireObservation, config: DetectionConfig = DEFAULT_CONFIG) -> FireChange:
    return FireChange(
        identifier=change_id("new", obs.latitude, obs.longitude),
        latitude=obs.latitude,
        longitude=obs.longitude,
        kind="new",
        intensity=_clamp_unit(obs.frp / config.frp_scale_mw),
        after_frp=obs.frp,
        confidence=obs.confidence,
        first_detected=obs.acq_date,
    )


def extinguished_fire(obs: FireObservation, config: DetectionConfig = DEFAULT_CONFIG) -> FireChange:
    return FireChange(
        identifier=change_id("extinguished", obs.latitude, obs.longitude),
        latitude=obs.latitude,
        longitude=obs.longitude,
        kind="extinguished",
        intensity=_clamp_unit(obs.frp / config.frp_scale_mw),
        before_frp=obs.frp,
        confidence=obs.confidence,
        last_detected=obs.acq_date,
    )


def summarize(changes: Sequence[FireChange]) -> ChangeSummary:
    counts = {"new": 0, "growing": 0, "diminishing": 0, "extinguished": 0}
    for change in changes:
        counts[change.kind] += 1
    return ChangeSummary(
        new_fires=counts["new"],
        growing_fires=counts["growing"],
        diminishing_fires=counts["diminishing"],
        extinguished_fires=counts["extinguished"],
        total_changes=len(changes),
    )


def detect_changes(
    period_a: Sequence[FireObservation],
    period_b: Sequence[FireObservation],
    period_a_label: Period,
    period_b_label: Period,
    config: Optional[DetectionConfig] = None,
) -> DetectionResult:
    """Compare two sets of fire observations and classify what changed.

    Period-B observations are matched against the nearest period-A observation
    within ``config.proximity_threshold``. Matches whose relative FRP change
    exceeds ``config.frp_change_threshold`` become growing/diminishing events,
    unmatched period-B observations become new fires, and period-A
    observations no period-B observation matched become extinguished fires.
    A period-A observation may be the closest match for several period-B
    observations.

    Events are ordered by period-B iteration, followed by extinguished fires
    in period-A order.
    """
    config = config or DEFAULT_CONFIG
    index = build_grid_index(period_a, config.cells_per_degree)
    matched: set[int] = set()
    changes: List[FireChange] = []

    for after in period_b:
        position = find_closest(after, period_a, index, config)
        if position is None:
            changes.append(new_fire(after, config))
            continue
        matched.add(position)
        change = classify_pair(period_a[position], after, config)
        if change is not None:
            changes.append(change)

    for position, before in enumerate(period_a):
        if position not in matched:
            changes.append(extinguished_fire(before, config))

    return DetectionResult(
        period1=period_a_label,
        period2=period_b_label,
        changes=tuple(changes),
        summary=summarize(changes),
    )
