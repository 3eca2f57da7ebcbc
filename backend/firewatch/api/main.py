from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from firewatch.api.routers import change_detection, fires
from firewatch.config import settings
from firewatch.logging_config import setup_logging
from firewatch.providers.fires.base import FireProvider
from firewatch.providers.fires.firms import FirmsFireProvider


def create_app(provider: Optional[FireProvider] = None, *, configure_logging: bool = True) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # El logging JSON se instala al arrancar el servidor, no al importar
        if configure_logging:
            setup_logging(settings.log_level)
        yield

    app = FastAPI(title="Firewatch API", version="0.1.0", lifespan=lifespan)
    app.state.fire_provider = provider or FirmsFireProvider()
    app.state.detection_config = settings.detection_config()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(fires.router, prefix="/api")
    app.include_router(change_detection.router, prefix="/api")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
