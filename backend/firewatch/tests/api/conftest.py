from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from firewatch.api.main import create_app
from firewatch.domain.models import FireObservation
from firewatch.infra.firms.errors import FirmsError
from firewatch.providers.fires.base import FireDataResponse


class StubFireProvider:
    def __init__(self, by_date: Dict[Optional[str], List[FireObservation]], fail: bool = False):
        self.by_date = by_date
        self.fail = fail
        self.calls: list[dict] = []

    async def fetch_fires(self, *, bounds, day_range: int, date: Optional[str] = None, source: Optional[str] = None):
        self.calls.append({"area": bounds.as_area(), "day_range": day_range, "date": date, "source": source})
        if self.fail:
            raise FirmsError("FIRMS API error: 503 Service Unavailable", status_code=503)
        data = self.by_date.get(date, [])
        return FireDataResponse(
            source=source or "VIIRS_SNPP_NRT",
            area=bounds.as_area(),
            day_range=day_range,
            data=data,
            message=None if data else "No fire data available.",
        )


def fire(lat: float, lon: float, frp: float, acq_date: str, confidence: float = 80) -> FireObservation:
    return FireObservation(
        latitude=lat,
        longitude=lon,
        frp=frp,
        confidence=confidence,
        acq_date=acq_date,
        acq_time="1230",
        satellite="N",
        instrument="VIIRS",
        daynight="D",
    )


def _build_client(provider):
    app = create_app(provider=provider, configure_logging=False)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def stub_provider():
    return StubFireProvider(
        {
            None: [fire(10.0, 20.0, 50, "2024-01-10")],
            "2024-01-01": [fire(10.000, 20.000, 50, "2024-01-01"), fire(11.0, 21.0, 40, "2024-01-02")],
            "2024-01-08": [fire(10.001, 20.001, 80, "2024-01-08", confidence=85), fire(12.0, 22.0, 250, "2024-01-09")],
        }
    )


@pytest.fixture()
def api_client(stub_provider):
    yield from _build_client(stub_provider)


@pytest.fixture()
def failing_api_client():
    yield from _build_client(StubFireProvider({}, fail=True))
