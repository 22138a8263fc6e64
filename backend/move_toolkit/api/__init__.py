# backend/move_toolkit/api/__init__.py
from __future__ import annotations

"""
API router aggregation.

This module exposes a single `api_router` that the FastAPI app
can include with a prefix such as `/api`.
"""

from fastapi import APIRouter

from . import actions, diagnostics, notifications, projects, tools

api_router = APIRouter()
api_router.include_router(actions.router)
api_router.include_router(diagnostics.router)
api_router.include_router(projects.router)
api_router.include_router(notifications.router)
api_router.include_router(tools.router)
