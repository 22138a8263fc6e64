# backend/move_toolkit/api/deps.py
from __future__ import annotations

"""
FastAPI dependencies.

The coordinator, diagnostic store and notifier are created once by the
app factory (move_toolkit.main.create_app) and kept on `app.state`.
"""

from fastapi import Request

from move_toolkit.config import Settings
from move_toolkit.services.actions import ActionCoordinator, DiagnosticStore, LoggingNotifier


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_coordinator(request: Request) -> ActionCoordinator:
    return request.app.state.coordinator


def get_store(request: Request) -> DiagnosticStore:
    return request.app.state.coordinator.sink


def get_notifier(request: Request) -> LoggingNotifier:
    return request.app.state.coordinator.notifier
