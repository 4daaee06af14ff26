from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripplanner.shared.config.settings import settings
from tripplanner.shared.logging.logger import setup_logging

from tripplanner.shared.api.health import router as health_router
from tripplanner.features.rules.api.routes import router as rules_router
from tripplanner.features.itinerary.api.routes import router as itinerary_router

log = logging.getLogger("app")


def _csv(value: str) -> List[str]:
    if not value or value == "*":
        return ["*"]
    return [v.strip() for v in value.split(",") if v.strip()]


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="Trip Planner Rules", version="1.0.0")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_csv(settings.CORS_ALLOW_ORIGINS),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=_csv(settings.CORS_ALLOW_METHODS),
        allow_headers=_csv(settings.CORS_ALLOW_HEADERS),
    )

    # Routers
    app.include_router(health_router)
    app.include_router(rules_router,     prefix="/v1")
    app.include_router(itinerary_router, prefix="/v1")

    if not settings.LLM_API_KEY:
        log.warning("LLM_API_KEY is not set; /v1/itineraries/generate will fail with API_ERROR")

    return app

# Uvicorn/Gunicorn entry point
app = create_app()
