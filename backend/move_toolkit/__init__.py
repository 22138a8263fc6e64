# backend/move_toolkit/__init__.py
from __future__ import annotations

"""
Marks `move_toolkit` as a Python package.

Routers live in move_toolkit/api, services in move_toolkit/services, etc.
"""
