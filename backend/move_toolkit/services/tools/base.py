from __future__ import annotations

"""backend/move_toolkit/services/tools/base.py

Shared utilities for running the aptos CLI.

This module provides:

- ToolResult: structured result for a single CLI invocation
- run_command: async helper that executes a CommandSpec and buffers its output
- resolve_executable: PATH lookup used as the launch precondition
- detect_tool_version: small helper for binaries that support --version

The runner never streams: callers only see stdout/stderr once the process
has fully exited (or has been killed after its timeout).
"""

import asyncio
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from pathlib import Path

from move_toolkit.models import CommandSpec

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Result of a single CLI invocation."""

    success: bool
    output: str
    error: str | None = None
    return_code: int | None = None
    command: list[str] | None = None
    workdir: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    duration_seconds: float | None = None
    parsing_error: str | None = None
    failure_reason: str | None = None

    @property
    def timed_out(self) -> bool:
        return self.failure_reason == "timeout"

    @property
    def spawn_failed(self) -> bool:
        return self.failure_reason == "process-spawn-error"

    def stdout_lines(self) -> list[str]:
        return (self.output or "").splitlines()

    def stderr_lines(self) -> list[str]:
        # A timeout/spawn error stores the reason, not process output, in `error`.
        if self.timed_out or self.spawn_failed:
            return []
        return (self.error or "").splitlines()


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="ignore")


async def run_command(
    spec: CommandSpec,
    *,
    env: dict[str, str] | None = None,
) -> ToolResult:
    """Run ``spec`` and capture its stdout/stderr once it exits.

    The timeout in ``spec`` is enforced here: the process is killed and the
    result carries ``failure_reason="timeout"``. An executable that cannot be
    started yields ``failure_reason="process-spawn-error"``.
    """
    environment = os.environ.copy()
    environment.update(env or {})
    cmd = spec.argv
    workdir = str(spec.workdir) if spec.workdir is not None else None

    logger.debug("Running %s (cwd=%s, timeout=%ss)", spec.display(), workdir, spec.timeout)
    started_at = datetime.utcnow()
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=workdir,
            env=environment,
        )
    except OSError as exc:
        finished_at = datetime.utcnow()
        return ToolResult(
            success=False,
            output="",
            error=str(exc),
            return_code=None,
            command=cmd,
            workdir=workdir,
            started_at=started_at,
            finished_at=finished_at,
            duration_seconds=(finished_at - started_at).total_seconds(),
            failure_reason="process-spawn-error",
        )

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=spec.timeout)
    except asyncio.TimeoutError:
        proc.kill()
        stdout, _ = await proc.communicate()
        finished_at = datetime.utcnow()
        return ToolResult(
            success=False,
            output=_decode(stdout),
            error="timeout",
            return_code=None,
            command=cmd,
            workdir=workdir,
            started_at=started_at,
            finished_at=finished_at,
            duration_seconds=(finished_at - started_at).total_seconds(),
            failure_reason="timeout",
        )

    finished_at = datetime.utcnow()
    error_output = _decode(stderr)
    return ToolResult(
        success=proc.returncode == 0,
        output=_decode(stdout),
        error=error_output or None,
        return_code=proc.returncode,
        command=cmd,
        workdir=workdir,
        started_at=started_at,
        finished_at=finished_at,
        duration_seconds=(finished_at - started_at).total_seconds(),
        # Detailed failure_reason will be set by error_classifier.
        failure_reason=None,
    )


def resolve_executable(binary: str) -> str | None:
    """Return the full path of ``binary`` if it can be executed, else None."""
    candidate = Path(binary).expanduser()
    if candidate.parent != Path(".") or candidate.is_absolute():
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
        return None
    return shutil.which(binary)


@lru_cache(maxsize=32)
def detect_tool_version(binary: str) -> str | None:
    """Best-effort version detection for the CLI binary."""
    try:
        proc = subprocess.run(
            [binary, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
        output = (proc.stdout or proc.stderr or "").strip()
        return output.splitlines()[0] if output else None
    except (OSError, subprocess.TimeoutExpired):
        return None
