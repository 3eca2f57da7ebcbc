from __future__ import annotations

import logging
from typing import Optional

import httpx

from firewatch.config import settings
from firewatch.domain.models import MapBounds

from .errors import FirmsError

logger = logging.getLogger(__name__)


class FirmsClient:
    """Client for the NASA FIRMS area API (CSV output)."""

    BASE_URL = "https://firms.modaps.eosdis.nasa.gov/api/area/csv"

    def __init__(
        self,
        map_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.map_key = map_key or settings.firms_map_key
        self.base_url = (base_url or settings.firms_base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.firms_timeout
        self.user_agent = user_agent or settings.firms_user_agent
        self.transport = transport

    def build_url(self, bounds: MapBounds, source: str, day_range: int, date: Optional[str] = None) -> str:
        url = f"{self.base_url}/{self.map_key}/{source}/{bounds.as_area()}/{day_range}"
        if date:
            url += f"/{date}"
        return url

    async def fetch_area_csv(
        self,
        bounds: MapBounds,
        *,
        source: str,
        day_range: int,
        date: Optional[str] = None,
    ) -> str:
        """
        Download the hotspots CSV for an area.

        Returns:
            Raw CSV text; empty when FIRMS answers 404 (no data for the area/range).

        Raises:
            FirmsError: on transport failures or any other non-2xx response.
        """
        url = self.build_url(bounds, source, day_range, date)
        logger.info(f"Fetching FIRMS hotspots source={source} area={bounds.as_area()} days={day_range} date={date}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                transport=self.transport,
            ) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise FirmsError("FIRMS request failed", detail=str(exc)) from exc

        if resp.status_code == 404:
            return ""
        if resp.is_error:
            raise FirmsError(
                f"FIRMS API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )
        return resp.text
