# backend/move_toolkit/services/reports/markdown_builder.py
from __future__ import annotations

"""
Markdown report generation for action runs.

This module is deliberately pure and side-effect free: it takes an
ActionRun and returns a markdown string the editor shows in its
summary view (a float or a scratch buffer).

It does **not** hit the filesystem or run any process.
"""

from collections import defaultdict
from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import Any, List

from move_toolkit.models import Diagnostic, Severity
from move_toolkit.services.actions.runner import ActionRun
from move_toolkit.services.diagnostics.summary import format_summary

_SEVERITY_ORDER = [Severity.ERROR, Severity.WARN, Severity.INFO, Severity.HINT]


def _format_dt(dt: datetime | None) -> str:
    if not dt:
        return "-"
    # ISO-like but more human
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


def summary_to_dict(summary: Any) -> Any:
    """Plain-data view of a parser summary (dataclass, list or JSON value)."""
    if is_dataclass(summary) and not isinstance(summary, type):
        return asdict(summary)
    return summary


def _diagnostic_entry(idx: int, diagnostic: Diagnostic) -> str:
    location = diagnostic.position_label()
    where = f"`{location}`" if location else "_unpositioned_"
    return f"{idx}. [{diagnostic.category.value}] {where} {diagnostic.message}"


def _summary_lines(summary: Any) -> List[str]:
    data = summary_to_dict(summary)
    if isinstance(data, dict):
        lines = []
        for key, value in data.items():
            if value in (None, [], {}):
                continue
            if isinstance(value, list):
                lines.append(f"- **{key}:** {len(value)}")
                lines.extend(f"  - `{item}`" for item in value)
            else:
                lines.append(f"- **{key}:** `{value}`")
        return lines or ["_Nothing to report._"]
    if isinstance(data, list):
        return [f"- **entries:** {len(data)}"]
    return [f"- `{data}`"]


def build_run_markdown(run: ActionRun) -> str:
    """
    Build a markdown report for a finished action run.
    """
    lines: list[str] = []

    # Header
    lines.append(f"# aptos {run.action.value}")
    lines.append("")
    lines.append(f"**Status:** `{run.status.value}`")
    lines.append(f"**Command:** `{' '.join(run.command)}`")
    exit_code = run.exit_code if run.exit_code is not None else "-"
    lines.append(f"**Exit code:** `{exit_code}`")
    duration = f"{run.duration_seconds:.2f}s" if run.duration_seconds is not None else "-"
    lines.append(f"**Duration:** {duration}")
    if run.failure_reason:
        lines.append(f"**Failure reason:** `{run.failure_reason}`")
    lines.append(f"**Started at:** {_format_dt(run.started_at)}")
    lines.append(f"**Finished at:** {_format_dt(run.finished_at)}")
    lines.append("")

    # Parsed stdout
    lines.append("## Output")
    lines.append("")
    if run.parse_error:
        lines.append(f"_Could not parse CLI output: {run.parse_error}_")
    elif run.summary is None:
        lines.append("_No structured output._")
    else:
        lines.extend(_summary_lines(run.summary))
    lines.append("")

    # Diagnostics
    lines.append("## Diagnostics")
    lines.append("")
    lines.append("```")
    lines.append(format_summary(run.classification))
    lines.append("```")
    lines.append("")
    if not run.classification.diagnostics:
        return "\n".join(lines)

    grouped: dict[Severity, list[Diagnostic]] = defaultdict(list)
    for d in run.classification.diagnostics:
        grouped[d.severity].append(d)

    for severity in _SEVERITY_ORDER:
        if severity not in grouped:
            continue
        lines.append(f"### {severity.value}")
        lines.append("")
        for idx, d in enumerate(grouped[severity], start=1):
            lines.append(_diagnostic_entry(idx, d))
        lines.append("")

    return "\n".join(lines)
