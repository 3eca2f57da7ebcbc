from __future__ import annotations

from fastapi import HTTPException, Request

from firewatch.domain.change_detection import DetectionConfig
from firewatch.providers.fires.base import FireProvider


def get_fire_provider(request: Request) -> FireProvider:
    provider = getattr(request.app.state, "fire_provider", None)
    if provider is None:
        raise HTTPException(status_code=500, detail="Fire provider not configured")
    return provider


def get_detection_config(request: Request) -> DetectionConfig:
    return getattr(request.app.state, "detection_config", None) or DetectionConfig()
