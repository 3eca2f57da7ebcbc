from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

CHANGE_KINDS = ("new", "growing", "diminishing", "extinguished")

# VIIRS publica la confianza como categoría (low/nominal/high)
CATEGORICAL_CONFIDENCE = {
    "l": 30.0,
    "low": 30.0,
    "n": 60.0,
    "nominal": 60.0,
    "h": 90.0,
    "high": 90.0,
}
DEFAULT_CONFIDENCE = 50.0


def parse_confidence(raw: Any) -> float:
    """Numeric confidence from a FIRMS value: a number or a VIIRS category letter."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
        return value if math.isfinite(value) else DEFAULT_CONFIDENCE
    text = str(raw or "").strip().lower()
    if text in CATEGORICAL_CONFIDENCE:
        return CATEGORICAL_CONFIDENCE[text]
    try:
        value = float(text)
    except ValueError:
        return DEFAULT_CONFIDENCE
    return value if math.isfinite(value) else DEFAULT_CONFIDENCE


@dataclass(frozen=True)
class FireObservation:
    latitude: float
    longitude: float
    frp: float
    confidence: float
    acq_date: str
    brightness: Optional[float] = None
    scan: Optional[float] = None
    track: Optional[float] = None
    acq_time: Optional[str] = None
    satellite: Optional[str] = None
    instrument: Optional[str] = None
    version: Optional[str] = None
    bright_t31: Optional[float] = None
    daynight: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FireObservation":
        lat = payload.get("latitude", payload.get("lat"))
        lon = payload.get("longitude", payload.get("lon"))
        if lat is None or lon is None:
            raise ValueError("latitude and longitude are required")
        return cls(
            latitude=float(lat),
            longitude=float(lon),
            frp=float(payload.get("frp") or 0.0),
            confidence=parse_confidence(payload.get("confidence")),
            acq_date=str(payload.get("acq_date", "")),
            brightness=payload.get("brightness"),
            scan=payload.get("scan"),
            track=payload.get("track"),
            acq_time=payload.get("acq_time"),
            satellite=payload.get("satellite"),
            instrument=payload.get("instrument"),
            version=payload.get("version"),
            bright_t31=payload.get("bright_t31"),
            daynight=payload.get("daynight"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "brightness": self.brightness,
            "scan": self.scan,
            "track": self.track,
            "acq_date": self.acq_date,
            "acq_time": self.acq_time,
            "satellite": self.satellite,
            "instrument": self.instrument,
            "confidence": self.confidence,
            "version": self.version,
            "bright_t31": self.bright_t31,
            "frp": self.frp,
            "daynight": self.daynight,
        }


@dataclass(frozen=True)
class Period:
    start_date: str
    end_date: str
    label: str

    def day_count(self) -> int:
        """Inclusive number of days covered by the period."""
        start = date.fromisoformat(self.start_date)
        end = date.fromisoformat(self.end_date)
        return abs((end - start).days) + 1

    def to_dict(self) -> Dict[str, str]:
        return {"startDate": self.start_date, "endDate": self.end_date, "label": self.label}


@dataclass(frozen=True)
class MapBounds:
    west: float
    south: float
    east: float
    north: float

    def __post_init__(self):
        for name in ("west", "east"):
            value = getattr(self, name)
            if not -180 <= value <= 180:
                raise ValueError(f"{name} must be within [-180, 180], got {value}")
        for name in ("south", "north"):
            value = getattr(self, name)
            if not -90 <= value <= 90:
                raise ValueError(f"{name} must be within [-90, 90], got {value}")

    def as_area(self) -> str:
        return f"{self.west},{self.south},{self.east},{self.north}"


@dataclass(frozen=True)
class FireChange:
    identifier: str
    latitude: float
    longitude: float
    kind: str
    intensity: float
    confidence: float
    before_frp: Optional[float] = None
    after_frp: Optional[float] = None
    first_detected: Optional[str] = None
    last_detected: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.identifier,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "changeType": self.kind,
            "intensity": self.intensity,
            "confidence": self.confidence,
        }
        optional = {
            "beforeFrp": self.before_frp,
            "afterFrp": self.after_frp,
            "firstDetected": self.first_detected,
            "lastDetected": self.last_detected,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload


@dataclass(frozen=True)
class ChangeSummary:
    new_fires: int = 0
    growing_fires: int = 0
    diminishing_fires: int = 0
    extinguished_fires: int = 0
    total_changes: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "newFires": self.new_fires,
            "growingFires": self.growing_fires,
            "diminishingFires": self.diminishing_fires,
            "extinguishedFires": self.extinguished_fires,
            "totalChanges": self.total_changes,
        }


@dataclass(frozen=True)
class DetectionResult:
    period1: Period
    period2: Period
    changes: Tuple[FireChange, ...]
    summary: ChangeSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period1": self.period1.to_dict(),
            "period2": self.period2.to_dict(),
            "changes": [change.to_dict() for change in self.changes],
            "summary": self.summary.to_dict(),
        }
