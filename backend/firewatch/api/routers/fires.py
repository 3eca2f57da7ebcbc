from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from firewatch.api.deps import get_fire_provider
from firewatch.domain.models import MapBounds
from firewatch.infra.firms.errors import FireDataError
from firewatch.providers.fires.base import MAX_DAY_RANGE, MIN_DAY_RANGE, FireProvider

router = APIRouter(tags=["fires"])
logger = logging.getLogger(__name__)


@router.get("/fires")
async def get_fires(
    west: float = Query(-180.0),
    south: float = Query(-90.0),
    east: float = Query(180.0),
    north: float = Query(90.0),
    day_range: int = Query(1, alias="dayRange", ge=MIN_DAY_RANGE, le=MAX_DAY_RANGE),
    source: Optional[str] = Query(None, description="FIRMS source, e.g. VIIRS_SNPP_NRT"),
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="Fecha inicial YYYY-MM-DD"),
    provider: FireProvider = Depends(get_fire_provider),
):
    try:
        bounds = MapBounds(west=west, south=south, east=east, north=north)
    except ValueError as exc:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid coordinates. Must be within valid lat/lng bounds. ({exc})",
        ) from exc

    try:
        response = await provider.fetch_fires(bounds=bounds, day_range=day_range, date=date, source=source)
    except FireDataError as exc:
        logger.error(f"Error fetching fire data: {exc.detail}")
        raise HTTPException(
            status_code=502,
            detail={"error": "Failed to fetch fire data", "details": exc.detail},
        ) from exc
    return response.to_dict()
