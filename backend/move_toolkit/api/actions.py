# backend/move_toolkit/api/actions.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from move_toolkit import schemas
from move_toolkit.api.deps import get_coordinator
from move_toolkit.errors import (
    ActionAlreadyRunningError,
    ActionArgumentError,
    InvalidNetworkError,
    ProcessLaunchError,
    ProjectNotFoundError,
)
from move_toolkit.models import Action
from move_toolkit.services.actions import ActionCoordinator, ActionRun
from move_toolkit.services.reports import build_run_markdown, summary_to_dict

router = APIRouter(prefix="/actions", tags=["actions"])

# Precondition errors -> HTTP status codes
_STATUS_CODES = {
    ProjectNotFoundError: 404,
    ActionAlreadyRunningError: 409,
    InvalidNetworkError: 422,
    ActionArgumentError: 422,
    ProcessLaunchError: 503,
}


def run_to_read(run: ActionRun) -> schemas.ActionRunRead:
    return schemas.ActionRunRead(
        action=run.action.value,
        status=run.status,
        buffer=run.buffer,
        command=run.command,
        exit_code=run.exit_code,
        duration_seconds=run.duration_seconds,
        failure_reason=run.failure_reason,
        parse_error=run.parse_error,
        summary=summary_to_dict(run.summary),
        classification=schemas.ClassificationRead.from_result(run.classification),
        started_at=run.started_at,
        finished_at=run.finished_at,
    )


@router.post("/{action}", response_model=schemas.ActionRunRead)
async def trigger_action(
    action: Action,
    payload: schemas.ActionRequest,
    coordinator: ActionCoordinator = Depends(get_coordinator),
) -> schemas.ActionRunRead:
    """
    Run an aptos action and wait for it to finish.

    Precondition failures are returned before any process starts:
    404 no Move.toml, 409 already running, 422 bad network or missing
    argument, 503 aptos CLI not found.
    """
    try:
        run = await coordinator.run(
            action,
            cwd=payload.cwd,
            buffer=payload.buffer,
            network=payload.network,
            name=payload.name,
            dependency=payload.dependency,
        )
    except tuple(_STATUS_CODES) as exc:
        raise HTTPException(status_code=_STATUS_CODES[type(exc)], detail=str(exc)) from exc
    return run_to_read(run)


@router.get("/{action}", response_model=schemas.ActionStateRead)
def get_action_state(
    action: Action,
    coordinator: ActionCoordinator = Depends(get_coordinator),
) -> schemas.ActionStateRead:
    last_run = coordinator.last_run(action)
    return schemas.ActionStateRead(
        action=action.value,
        status=coordinator.status(action),
        last_run=run_to_read(last_run) if last_run else None,
    )


@router.get("/{action}/report", response_class=PlainTextResponse)
def get_action_report(
    action: Action,
    coordinator: ActionCoordinator = Depends(get_coordinator),
) -> str:
    last_run = coordinator.last_run(action)
    if not last_run:
        raise HTTPException(status_code=404, detail=f"No {action.value} run yet")
    return build_run_markdown(last_run)
