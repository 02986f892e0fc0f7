"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, routes
from .config import settings


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, root_path="")
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "endpoints": {
                "health": f"{settings.api_prefix}/health",
                "optimize": f"{settings.api_prefix}/routes/optimize",
                "routes": f"{settings.api_prefix}/routes",
            },
            "defaults": {
                "start_location": {"lat": settings.default_start_lat, "lng": settings.default_start_lng},
                "fill_level_threshold": settings.fill_level_threshold,
                "max_stops": settings.max_stops,
                "average_speed_kmh": settings.average_speed_kmh,
                "service_time_minutes": settings.service_time_minutes,
            },
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    return app


app = create_app()
