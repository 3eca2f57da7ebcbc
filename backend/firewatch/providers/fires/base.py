from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from firewatch.domain.models import FireObservation, MapBounds

MIN_DAY_RANGE = 1
MAX_DAY_RANGE = 10


@dataclass
class FireDataResponse:
    source: str
    area: str
    day_range: int
    data: List[FireObservation] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "data": [obs.to_dict() for obs in self.data],
            "count": self.count,
            "source": self.source,
            "area": self.area,
            "dateRange": f"{self.day_range} days",
        }
        if self.message:
            payload["message"] = self.message
        return payload


class FireProvider(Protocol):
    """Contract for satellite hotspot providers."""

    async def fetch_fires(
        self,
        *,
        bounds: MapBounds,
        day_range: int,
        date: Optional[str] = None,
        source: Optional[str] = None,
    ) -> FireDataResponse:
        raise NotImplementedError
