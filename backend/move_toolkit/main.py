# backend/move_toolkit/main.py
from __future__ import annotations

"""
FastAPI application setup.

This module depends on:
- move_toolkit.config.get_settings for configuration
- move_toolkit.services.actions.create_coordinator for the action coordinator
- move_toolkit.api.api_router for route registration

Run locally with:

    uvicorn move_toolkit.main:app --port 8765
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from move_toolkit.api import api_router
from move_toolkit.config import Settings, get_settings
from move_toolkit.services.actions import create_coordinator

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the app around one coordinator (and so one set of action states).
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.coordinator = create_coordinator(settings)

    # ---- CORS ----

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(o) for o in settings.allowed_origins],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---- Routes ----

    app.include_router(api_router, prefix="/api")

    # ---- Healthcheck ----

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    logger.info("%s ready (aptos=%s)", settings.app_name, settings.aptos_path)
    return app


app = create_app()
