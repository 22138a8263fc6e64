from __future__ import annotations

"""backend/move_toolkit/services/tools/output.py

Parsers for the *success* path of aptos CLI output (stdout).

Diagnostics come from stderr through the classifier; this module extracts
the structured summary shown after a run: built modules, test results,
published transaction, account list.

Most aptos commands finish by printing a JSON document such as
``{"Result": ...}`` or ``{"Error": "..."}`` after any free-text progress
lines. Malformed JSON raises OutputParseError; callers decide how to degrade.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List

from move_toolkit.errors import OutputParseError

_BUILDING_RE = re.compile(r"^\s*BUILDING\s+(\S+)")
_COMPILING_MODULE_RE = re.compile(r"^\s*Compiling module\s+(\S+)", re.IGNORECASE)
_TEST_CASE_RE = re.compile(r"^\s*\[\s*(PASS|FAIL|TIMEOUT)\s*\]\s+(\S+)")
_TEST_RESULT_RE = re.compile(
    r"Test result:\s*(\w+)\.\s*Total tests:\s*(\d+);\s*passed:\s*(\d+);\s*failed:\s*(\d+)",
    re.IGNORECASE,
)


def _json_start(lines: List[str]) -> int | None:
    for index, line in enumerate(lines):
        if line.lstrip().startswith(("{", "[")):
            return index
    return None


def parse_json_output(lines: Iterable[str], *, required: bool = True) -> Any:
    """Parse the trailing JSON document of a CLI run.

    Returns None when no JSON is present and ``required`` is False.
    """
    lines = list(lines)
    start = _json_start(lines)
    if start is None:
        if required:
            raise OutputParseError("No JSON document found in CLI output")
        return None
    blob = "\n".join(lines[start:])
    try:
        return json.loads(blob)
    except json.JSONDecodeError as exc:
        raise OutputParseError(f"Malformed JSON in CLI output: {exc}") from exc


def _result_of(payload: Any) -> Any:
    if isinstance(payload, dict) and "Result" in payload:
        return payload["Result"]
    return payload


def _error_of(payload: Any) -> str | None:
    if isinstance(payload, dict) and isinstance(payload.get("Error"), str):
        return payload["Error"]
    return None


@dataclass
class BuildSummary:
    packages: List[str] = field(default_factory=list)
    modules: List[str] = field(default_factory=list)
    error: str | None = None


def parse_build_output(lines: Iterable[str]) -> BuildSummary:
    lines = list(lines)
    summary = BuildSummary()
    for line in lines:
        building = _BUILDING_RE.match(line)
        if building:
            summary.packages.append(building.group(1))
            continue
        compiling = _COMPILING_MODULE_RE.match(line)
        if compiling:
            summary.modules.append(compiling.group(1))

    payload = parse_json_output(lines, required=False)
    result = _result_of(payload)
    if isinstance(result, list):
        summary.modules.extend(str(m) for m in result if str(m) not in summary.modules)
    summary.error = _error_of(payload)
    return summary


@dataclass
class TestSummary:
    passed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    total: int | None = None
    ok: bool | None = None

    __test__ = False  # not a pytest test class


def parse_test_output(lines: Iterable[str]) -> TestSummary:
    summary = TestSummary()
    for line in lines:
        case = _TEST_CASE_RE.match(line)
        if case:
            status, name = case.groups()
            if status.upper() == "PASS":
                summary.passed.append(name)
            else:
                summary.failed.append(name)
            continue
        verdict_line = _TEST_RESULT_RE.search(line)
        if verdict_line:
            verdict, total, _passed, _failed = verdict_line.groups()
            summary.total = int(total)
            summary.ok = verdict.upper() == "OK"

    if summary.total is None and (summary.passed or summary.failed):
        summary.total = len(summary.passed) + len(summary.failed)
    if summary.ok is None and summary.total is not None:
        summary.ok = not summary.failed
    return summary


@dataclass
class PublishSummary:
    transaction_hash: str | None = None
    success: bool | None = None
    vm_status: str | None = None
    gas_used: int | None = None
    error: str | None = None


def parse_publish_output(lines: Iterable[str]) -> PublishSummary:
    payload = parse_json_output(lines)
    summary = PublishSummary(error=_error_of(payload))
    result = _result_of(payload)
    if isinstance(result, dict):
        summary.transaction_hash = result.get("transaction_hash")
        summary.success = result.get("success")
        summary.vm_status = result.get("vm_status")
        gas = result.get("gas_used")
        if gas is not None:
            try:
                summary.gas_used = int(gas)
            except (TypeError, ValueError) as exc:
                raise OutputParseError(f"Invalid gas_used: {gas!r}") from exc
    return summary


def parse_account_list(lines: Iterable[str]) -> List[Any]:
    """Account resources listed by ``aptos account list --output json``."""
    payload = parse_json_output(lines)
    error = _error_of(payload)
    if error:
        raise OutputParseError(error)
    result = _result_of(payload)
    if not isinstance(result, list):
        raise OutputParseError("Expected a list of account resources")
    return result
