from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from firewatch.api.deps import get_detection_config, get_fire_provider
from firewatch.domain.change_detection import DetectionConfig
from firewatch.domain.models import MapBounds, Period
from firewatch.infra.firms.errors import FireDataError
from firewatch.providers.fires.base import FireProvider
from firewatch.services.change_detection import ChangeDetectionService

router = APIRouter(tags=["change-detection"])
logger = logging.getLogger(__name__)


class BoundsIn(BaseModel):
    west: float
    south: float
    east: float
    north: float


class PeriodIn(BaseModel):
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")
    label: str = ""


class ChangeDetectionRequest(BaseModel):
    bounds: BoundsIn
    period1: PeriodIn
    period2: PeriodIn


@router.post("/change-detection")
async def run_change_detection(
    body: ChangeDetectionRequest,
    provider: FireProvider = Depends(get_fire_provider),
    config: DetectionConfig = Depends(get_detection_config),
):
    try:
        bounds = MapBounds(
            west=body.bounds.west,
            south=body.bounds.south,
            east=body.bounds.east,
            north=body.bounds.north,
        )
        period1 = _to_period(body.period1)
        period2 = _to_period(body.period2)
        # Valida las fechas antes de llamar al proveedor
        period1.day_count()
        period2.day_count()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    service = ChangeDetectionService(provider, config)
    try:
        result = await service.compare(bounds, period1, period2)
    except FireDataError as exc:
        logger.error(f"Error in change detection: {exc.detail}")
        raise HTTPException(
            status_code=502,
            detail={"error": "Failed to perform change detection", "details": exc.detail},
        ) from exc
    return result.to_dict()


def _to_period(payload: PeriodIn) -> Period:
    return Period(start_date=payload.start_date, end_date=payload.end_date, label=payload.label)
