# backend/move_toolkit/api/tools.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from move_toolkit.api.deps import get_app_settings
from move_toolkit.config import Settings
from move_toolkit.services.tools.base import detect_tool_version, resolve_executable

router = APIRouter(prefix="/tools", tags=["tools"])


class ToolInfo(BaseModel):
    name: str
    path: str
    resolved_path: str | None
    version: str | None
    default_network: str


@router.get("", response_model=list[ToolInfo])
def list_tools(settings: Settings = Depends(get_app_settings)) -> list[ToolInfo]:
    """
    Return the configured aptos CLI and whether it can be launched.

    `resolved_path` is null when the binary is not on PATH; every action
    will then be rejected with 503 before a process is started.
    """
    resolved = resolve_executable(settings.aptos_path)
    return [
        ToolInfo(
            name="aptos",
            path=settings.aptos_path,
            resolved_path=resolved,
            version=detect_tool_version(resolved) if resolved else None,
            default_network=settings.default_network.value,
        )
    ]
