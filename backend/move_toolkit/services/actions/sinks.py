from __future__ import annotations

"""backend/move_toolkit/services/actions/sinks.py

Editor-facing collaborators of the action coordinator.

- DiagnosticSink: receives the diagnostics of a run for one buffer
- Notifier: receives user-visible notifications
- DiagnosticStore: in-memory sink the HTTP layer reads diagnostics from
- LoggingNotifier: logs notifications and keeps a bounded history

Rendering (signs, underlines, floats) is the editor's job; nothing here
decides where a diagnostic is drawn.
"""

import enum
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, Dict, List, Protocol, Sequence

from move_toolkit.models import Diagnostic

logger = logging.getLogger(__name__)

DEFAULT_BUFFER = "0"


class NotificationLevel(str, enum.Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


_LOG_LEVELS = {
    NotificationLevel.DEBUG: logging.DEBUG,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.WARN: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


class DiagnosticSink(Protocol):
    """Minimal interface for whatever renders diagnostics."""

    def publish(self, buffer: str, diagnostics: Sequence[Diagnostic]) -> None:
        ...


class Notifier(Protocol):
    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        ...


@dataclass
class Notification:
    message: str
    level: NotificationLevel
    created_at: datetime = field(default_factory=datetime.utcnow)


class LoggingNotifier:
    """Notifier that logs and remembers the most recent notifications."""

    def __init__(self, history: int = 50) -> None:
        self._history: Deque[Notification] = deque(maxlen=history)

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        logger.log(_LOG_LEVELS[level], message)
        self._history.append(Notification(message=message, level=level))

    def recent(self) -> List[Notification]:
        return list(self._history)

    def clear(self) -> None:
        self._history.clear()


class DiagnosticStore:
    """Keeps the last published diagnostics per buffer."""

    def __init__(self) -> None:
        self._diagnostics: Dict[str, tuple[Diagnostic, ...]] = {}

    def publish(self, buffer: str, diagnostics: Sequence[Diagnostic]) -> None:
        self._diagnostics[buffer] = tuple(diagnostics)

    def get(self, buffer: str) -> tuple[Diagnostic, ...]:
        return self._diagnostics.get(buffer, ())

    def clear(self, buffer: str | None = None) -> None:
        if buffer is None:
            self._diagnostics.clear()
        else:
            self._diagnostics.pop(buffer, None)
