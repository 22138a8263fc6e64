# backend/move_toolkit/api/notifications.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from move_toolkit import schemas
from move_toolkit.api.deps import get_notifier
from move_toolkit.services.actions import LoggingNotifier

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[schemas.NotificationRead])
def list_notifications(
    notifier: LoggingNotifier = Depends(get_notifier),
) -> list[schemas.NotificationRead]:
    return [
        schemas.NotificationRead(
            message=n.message,
            level=n.level.value,
            created_at=n.created_at,
        )
        for n in notifier.recent()
    ]
