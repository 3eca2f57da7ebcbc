from __future__ import annotations

import os

from firewatch.domain.change_detection import (
    FRP_CHANGE_THRESHOLD,
    FRP_SCALE_MW,
    PROXIMITY_THRESHOLD,
    DetectionConfig,
)


class Settings:
    # NASA FIRMS
    firms_map_key: str = os.getenv("NASA_FIRMS_MAP_KEY", "demo_key")
    firms_base_url: str = os.getenv("FIRMS_BASE_URL", "https://firms.modaps.eosdis.nasa.gov/api/area/csv")
    firms_source: str = os.getenv("FIRMS_SOURCE", "VIIRS_SNPP_NRT")
    firms_timeout: float = float(os.getenv("FIRMS_TIMEOUT", "30"))
    firms_user_agent: str = os.getenv("FIRMS_USER_AGENT", "firewatch/0.1")

    # API
    frontend_origin: str = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Change detection
    proximity_threshold: float = float(os.getenv("FIRE_PROXIMITY_THRESHOLD_DEG", str(PROXIMITY_THRESHOLD)))
    frp_change_threshold: float = float(os.getenv("FIRE_FRP_CHANGE_THRESHOLD", str(FRP_CHANGE_THRESHOLD)))
    frp_scale_mw: float = float(os.getenv("FIRE_FRP_SCALE_MW", str(FRP_SCALE_MW)))

    def detection_config(self) -> DetectionConfig:
        return DetectionConfig(
            proximity_threshold=self.proximity_threshold,
            frp_change_threshold=self.frp_change_threshold,
            frp_scale_mw=self.frp_scale_mw,
        )


settings = Settings()
