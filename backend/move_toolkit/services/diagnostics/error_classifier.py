from __future__ import annotations

"""backend/move_toolkit/services/diagnostics/error_classifier.py

Centralized failure classification for aptos CLI executions.

Where classifier.py turns individual output lines into diagnostics, this
module looks at a whole ToolResult (stdout, stderr, return code, etc.)
and assigns a single stable, machine-readable `failure_reason` string
used in notifications and in the action run summary.

The classification is:
- deterministic (no randomness)
- text-based (pattern matching against known error signatures)

failure_reason values:
- timeout
- process-spawn-error
- tool-not-found
- tool-output-parse-error
- tool-compilation-error
- tool-runtime-error
- tool-non-zero-exit
- unknown-error
"""

from typing import Optional

from move_toolkit.services.tools.base import ToolResult


def _text(value: Optional[str]) -> str:
    return (value or "").strip()


def _lower(value: Optional[str]) -> str:
    return _text(value).lower()


def _contains_any(haystack: str, needles: list[str]) -> bool:
    return any(n in haystack for n in needles)


def classify_tool_failure(result: ToolResult) -> str:
    """Classify a CLI failure into a stable failure_reason code.

    This function assumes the invocation did *not* succeed.
    It never returns None; at minimum it returns "unknown-error".
    """
    stdout = _lower(result.output)
    stderr = _lower(result.error)
    combined = f"{stdout}\n{stderr}"
    rc = result.return_code
    parsing_error = _text(result.parsing_error)
    existing_reason = _text(result.failure_reason)

    # 1) Respect explicit timeout/spawn markers from the runner layer
    if existing_reason in ("timeout", "process-spawn-error"):
        return existing_reason

    # 2) Binary missing behind a wrapper script
    if _contains_any(
        combined,
        [
            "aptos: command not found",
            "aptos: not found",
            "no such file or directory: 'aptos'",
        ],
    ):
        return "tool-not-found"

    # 3) Parsing / JSON issues
    if parsing_error:
        return "tool-output-parse-error"

    # 4) Runtime / VM failures (tests, simulated transactions)
    if _contains_any(
        combined,
        [
            "aborted with code",
            "execution_failure",
            "arithmetic error",
            "out_of_gas",
            "out of gas",
            "vmerror",
        ],
    ):
        return "tool-runtime-error"

    # 5) Compilation / build issues
    if _contains_any(
        combined,
        [
            "compilation error",
            "compilation failed",
            "failed to compile",
            "could not compile",
            "unable to resolve packages",
            "error[e",
            "error:",
        ],
    ):
        return "tool-compilation-error"

    # 6) Non-zero exit without a more specific classification
    if rc is not None and rc != 0:
        return "tool-non-zero-exit"

    # 7) Fall back to existing reason or unknown
    if existing_reason:
        return existing_reason
    return "unknown-error"
