from __future__ import annotations

import asyncio
import logging
from typing import Optional

from firewatch.domain.change_detection import DetectionConfig, detect_changes
from firewatch.domain.models import DetectionResult, MapBounds, Period
from firewatch.providers.fires.base import MAX_DAY_RANGE, MIN_DAY_RANGE, FireProvider

logger = logging.getLogger(__name__)


def period_day_range(period: Period) -> int:
    return max(MIN_DAY_RANGE, min(MAX_DAY_RANGE, period.day_count()))


class ChangeDetectionService:
    def __init__(self, provider: FireProvider, config: Optional[DetectionConfig] = None):
        self.provider = provider
        self.config = config

    async def compare(self, bounds: MapBounds, period1: Period, period2: Period) -> DetectionResult:
        """Fetch both periods concurrently and classify the fire changes between them."""
        before, after = await asyncio.gather(
            self._fetch_period(bounds, period1),
            self._fetch_period(bounds, period2),
        )
        result = detect_changes(before.data, after.data, period1, period2, self.config)
        summary = result.summary
        logger.info(
            f"[change_detection] area={bounds.as_area()} before={before.count} after={after.count} "
            f"new={summary.new_fires} growing={summary.growing_fires} "
            f"diminishing={summary.diminishing_fires} extinguished={summary.extinguished_fires}"
        )
        return result

    async def _fetch_period(self, bounds: MapBounds, period: Period):
        return await self.provider.fetch_fires(
            bounds=bounds,
            day_range=period_day_range(period),
            date=period.start_date,
        )
