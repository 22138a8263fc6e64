# backend/move_toolkit/schemas/__init__.py
from __future__ import annotations

"""
Pydantic schemas for request/response models.

This module is the API contract layer and depends on:
- move_toolkit.models (enums and dataclasses)

It is used by:
- API routes
- the editor-side client, which reads diagnostics in `DiagnosticRead` shape
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from move_toolkit.models import (
    ActionStatus,
    Category,
    ClassificationResult,
    Diagnostic,
    Severity,
)


# ---------- Diagnostic Schemas ----------


class DiagnosticRead(BaseModel):
    line: int
    column: int
    severity: Severity
    message: str
    category: Category
    located: bool
    source: str

    @classmethod
    def from_diagnostic(cls, diagnostic: Diagnostic) -> "DiagnosticRead":
        return cls(
            line=diagnostic.line,
            column=diagnostic.column,
            severity=diagnostic.severity,
            message=diagnostic.message,
            category=diagnostic.category,
            located=diagnostic.located,
            source=diagnostic.source,
        )


class ClassificationRead(BaseModel):
    diagnostics: List[DiagnosticRead]
    counts: Dict[Category, int]

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "ClassificationRead":
        return cls(
            diagnostics=[DiagnosticRead.from_diagnostic(d) for d in result.diagnostics],
            counts=dict(result.counts),
        )


class ClassifyRequest(BaseModel):
    """
    Raw output lines to classify, e.g. captured stderr from a manual run.
    """

    lines: List[str] = Field(default_factory=list)


class SummaryRead(BaseModel):
    text: str
    counts: Dict[Category, int]


# ---------- Action Schemas ----------


class ActionRequest(BaseModel):
    """
    Payload for triggering an aptos action.

    cwd is the editor's working directory (or the current buffer's path);
    the project root is discovered from there.
    """

    cwd: str
    buffer: str = "0"
    network: Optional[str] = None
    name: Optional[str] = None
    dependency: Optional[str] = None

    @field_validator("cwd")
    @classmethod
    def _non_empty_cwd(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("cwd must not be empty")
        return value


class ActionRunRead(BaseModel):
    action: str
    status: ActionStatus
    buffer: str
    command: List[str]
    exit_code: Optional[int]
    duration_seconds: Optional[float]
    failure_reason: Optional[str]
    parse_error: Optional[str]
    summary: Optional[Any] = None
    classification: ClassificationRead
    started_at: Optional[datetime]
    finished_at: Optional[datetime]


class ActionStateRead(BaseModel):
    action: str
    status: ActionStatus
    last_run: Optional[ActionRunRead] = None


# ---------- Project Schemas ----------


class ProjectRead(BaseModel):
    root: str
    name: Optional[str]
    version: Optional[str]
    addresses: Dict[str, str]
    dependencies: List[str]
    dev_dependencies: List[str]


# ---------- Notification Schemas ----------


class NotificationRead(BaseModel):
    message: str
    level: str
    created_at: datetime
