# backend/move_toolkit/api/diagnostics.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from move_toolkit import schemas
from move_toolkit.api.deps import get_coordinator, get_store
from move_toolkit.models import Category, ClassificationResult, Diagnostic
from move_toolkit.services.actions import ActionCoordinator, DiagnosticStore
from move_toolkit.services.diagnostics import classify_lines
from move_toolkit.services.diagnostics.summary import (
    format_summary,
    next_diagnostic,
    previous_diagnostic,
    quick_fixes,
)

router = APIRouter(prefix="/diagnostics", tags=["diagnostics"])


def editor_entry(diagnostic: Diagnostic) -> dict:
    """Editor dict for `diagnostic`, with its quick fixes in `user_data`."""
    entry = diagnostic.to_editor()
    entry["user_data"]["quick_fixes"] = [
        {"title": fix.title, "kind": fix.kind} for fix in quick_fixes(diagnostic)
    ]
    return entry


@router.post("/classify", response_model=schemas.ClassificationRead)
def classify(
    payload: schemas.ClassifyRequest,
    coordinator: ActionCoordinator = Depends(get_coordinator),
) -> schemas.ClassificationRead:
    """
    Classify raw output lines without running anything.
    """
    result = classify_lines(
        payload.lines,
        coordinator.table,
        source=coordinator.settings.diagnostic_source,
    )
    return schemas.ClassificationRead.from_result(result)


@router.get("/{buffer}", response_model=list[dict])
def get_buffer_diagnostics(
    buffer: str,
    category: Category | None = Query(default=None),
    store: DiagnosticStore = Depends(get_store),
) -> list[dict]:
    """
    Diagnostics last published for `buffer`, in the editor's own format.
    """
    diagnostics = store.get(buffer)
    if category is not None:
        diagnostics = tuple(d for d in diagnostics if d.category == category)
    return [editor_entry(d) for d in diagnostics]


@router.get("/{buffer}/summary", response_model=schemas.SummaryRead)
def get_buffer_summary(
    buffer: str,
    store: DiagnosticStore = Depends(get_store),
    coordinator: ActionCoordinator = Depends(get_coordinator),
) -> schemas.SummaryRead:
    diagnostics = store.get(buffer)
    counts: dict[Category, int] = {}
    for d in diagnostics:
        counts[d.category] = counts.get(d.category, 0) + 1
    result = ClassificationResult(diagnostics=diagnostics, counts=counts)
    return schemas.SummaryRead(text=format_summary(result, coordinator.table), counts=counts)


@router.get("/{buffer}/next", response_model=dict | None)
def get_next_diagnostic(
    buffer: str,
    line: int = Query(..., ge=0),
    category: Category | None = Query(default=None),
    store: DiagnosticStore = Depends(get_store),
) -> dict | None:
    """
    First located diagnostic below 0-based `line`, or null at the end.
    """
    found = next_diagnostic(store.get(buffer), line, category)
    return editor_entry(found) if found else None


@router.get("/{buffer}/previous", response_model=dict | None)
def get_previous_diagnostic(
    buffer: str,
    line: int = Query(..., ge=0),
    category: Category | None = Query(default=None),
    store: DiagnosticStore = Depends(get_store),
) -> dict | None:
    found = previous_diagnostic(store.get(buffer), line, category)
    return editor_entry(found) if found else None


@router.delete("/{buffer}")
def clear_buffer_diagnostics(
    buffer: str,
    store: DiagnosticStore = Depends(get_store),
) -> dict:
    store.clear(buffer)
    return {"status": "cleared"}
