# backend/move_toolkit/api/projects.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from move_toolkit import schemas
from move_toolkit.errors import ManifestError, ProjectNotFoundError
from move_toolkit.services.actions import find_project_root, read_project_info

router = APIRouter(prefix="/project", tags=["project"])


@router.get("", response_model=schemas.ProjectRead)
def get_project(cwd: str = Query(...)) -> schemas.ProjectRead:
    """
    Describe the Move package enclosing `cwd` (from its Move.toml).
    """
    try:
        root = find_project_root(cwd)
    except ProjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    try:
        info = read_project_info(root)
    except ManifestError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return schemas.ProjectRead(
        root=str(info.root),
        name=info.name,
        version=info.version,
        addresses=info.addresses,
        dependencies=info.dependencies,
        dev_dependencies=info.dev_dependencies,
    )
