"""Shared fixtures: settings, a Move package on disk and a fake process runner."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from move_toolkit.config import Settings
from move_toolkit.models import CommandSpec
from move_toolkit.services.actions import ActionCoordinator, DiagnosticStore, LoggingNotifier
from move_toolkit.services.tools.base import ToolResult

MOVE_TOML = """\
[package]
name = "hello_blockchain"
version = "0.0.1"

[addresses]
hello_blockchain = "_"

[dependencies.AptosFramework]
git = "https://github.com/aptos-labs/aptos-core.git"
rev = "mainnet"
subdir = "aptos-move/framework/aptos-framework"

[dev-dependencies]
"""


def make_result(
    *,
    stdout: str = "",
    stderr: str = "",
    return_code: int | None = 0,
    failure_reason: str | None = None,
) -> ToolResult:
    return ToolResult(
        success=return_code == 0 and failure_reason is None,
        output=stdout,
        error=stderr or None,
        return_code=return_code,
        duration_seconds=0.5,
        failure_reason=failure_reason,
    )


class FakeRunner:
    """Stands in for run_command; optionally blocks until `gate` is set."""

    def __init__(self, result: ToolResult | None = None, gate: asyncio.Event | None = None) -> None:
        self.result = result or make_result()
        self.gate = gate
        self.calls: list[CommandSpec] = []

    async def __call__(self, spec: CommandSpec) -> ToolResult:
        self.calls.append(spec)
        if self.gate is not None:
            await self.gate.wait()
        return self.result


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, aptos_path="aptos", timeout_seconds=5)


@pytest.fixture
def move_project(tmp_path: Path) -> Path:
    root = tmp_path / "hello_blockchain"
    (root / "sources").mkdir(parents=True)
    (root / "Move.toml").write_text(MOVE_TOML, encoding="utf-8")
    (root / "sources" / "hello.move").write_text("module hello_blockchain::message {}\n", encoding="utf-8")
    return root


@pytest.fixture
def no_project(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


def make_coordinator(
    settings: Settings,
    runner: FakeRunner,
    *,
    which_found: bool = True,
) -> ActionCoordinator:
    return ActionCoordinator(
        settings,
        sink=DiagnosticStore(),
        notifier=LoggingNotifier(),
        runner=runner,
        which=lambda binary: f"/usr/local/bin/{binary}" if which_found else None,
    )
