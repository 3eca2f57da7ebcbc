from __future__ import annotations

from typing import Optional

from firewatch.config import settings
from firewatch.domain.models import MapBounds
from firewatch.infra.firms.csv_parser import parse_firms_csv
from firewatch.infra.firms.firms_client import FirmsClient

from .base import MAX_DAY_RANGE, MIN_DAY_RANGE, FireDataResponse, FireProvider


class FirmsFireProvider(FireProvider):
    def __init__(self, client: Optional[FirmsClient] = None, default_source: Optional[str] = None):
        self.client = client or FirmsClient()
        self.default_source = default_source or settings.firms_source

    async def fetch_fires(
        self,
        *,
        bounds: MapBounds,
        day_range: int,
        date: Optional[str] = None,
        source: Optional[str] = None,
    ) -> FireDataResponse:
        if not MIN_DAY_RANGE <= day_range <= MAX_DAY_RANGE:
            raise ValueError(f"Day range must be between {MIN_DAY_RANGE} and {MAX_DAY_RANGE}.")
        source = source or self.default_source
        csv_text = await self.client.fetch_area_csv(bounds, source=source, day_range=day_range, date=date)
        observations = parse_firms_csv(csv_text) if csv_text else []
        return FireDataResponse(
            source=source,
            area=bounds.as_area(),
            day_range=day_range,
            data=observations,
            message=None if observations else "No fire data available.",
        )
