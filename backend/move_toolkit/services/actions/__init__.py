# backend/move_toolkit/services/actions/__init__.py
from __future__ import annotations

"""
Action service package.

This package provides:
- Move project discovery (workspace.py)
- Editor-facing sinks and notifiers (sinks.py)
- The action coordinator (runner.py)
- A create_coordinator(settings) convenience helper

The concrete aptos command builders live under move_toolkit.services.tools
and are wired in by the coordinator.
"""

from .runner import ActionCoordinator, ActionRun  # noqa: F401
from .sinks import DiagnosticStore, LoggingNotifier  # noqa: F401
from .workspace import ProjectInfo, find_project_root, read_project_info  # noqa: F401


def create_coordinator(settings) -> ActionCoordinator:
    """
    Build a coordinator with the in-memory sink and logging notifier.

    It is safe to call from:
    - the FastAPI app factory
    - CLI utilities
    - tests that want the real collaborators
    """
    return ActionCoordinator(
        settings,
        sink=DiagnosticStore(),
        notifier=LoggingNotifier(history=settings.notification_history),
    )
