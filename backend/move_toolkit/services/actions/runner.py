from __future__ import annotations

"""backend/move_toolkit/services/actions/runner.py

Action coordinator: one aptos CLI invocation per user-triggered action.

Responsibilities:
- Check preconditions (Move.toml, CLI on PATH, valid network) before any
  process starts
- Track per-action state: IDLE -> RUNNING -> {SUCCEEDED, FAILED, TIMED_OUT}
- Reject a trigger for an action that is already RUNNING
- Await the process runner, then route stdout to the action's success
  parser and stderr to the diagnostic classifier
- Hand diagnostics to the DiagnosticSink and notify the user

Everything runs on the event loop: the only suspension point is awaiting
the process runner, so the RUNNING check-and-set cannot interleave.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Tuple

from move_toolkit.config import Settings
from move_toolkit.errors import (
    ActionAlreadyRunningError,
    ActionArgumentError,
    MoveToolkitError,
    OutputParseError,
    ProcessLaunchError,
)
from move_toolkit.models import (
    Action,
    ActionStatus,
    ClassificationResult,
    CommandSpec,
)
from move_toolkit.services.actions.sinks import (
    DEFAULT_BUFFER,
    DiagnosticSink,
    NotificationLevel,
    Notifier,
)
from move_toolkit.services.actions.workspace import find_project_root
from move_toolkit.services.diagnostics.classifier import classify_lines
from move_toolkit.services.diagnostics.error_classifier import classify_tool_failure
from move_toolkit.services.diagnostics.patterns import PatternTable, build_pattern_table
from move_toolkit.services.diagnostics.summary import format_diagnostic
from move_toolkit.services.tools import aptos, output
from move_toolkit.services.tools.base import ToolResult, resolve_executable, run_command

logger = logging.getLogger(__name__)

ProcessRunner = Callable[[CommandSpec], Awaitable[ToolResult]]

# (started, succeeded, failed) notification texts per action.
_MESSAGES: Dict[Action, Tuple[str, str, str]] = {
    Action.BUILD: ("Building Move project...", "Build successful!", "Build failed!"),
    Action.TEST: ("Running Move tests...", "All tests passed!", "Some tests failed!"),
    Action.DEPLOY: ("Deploying modules...", "Deployment successful!", "Deployment failed!"),
    Action.INIT: (
        "Initializing Move project...",
        "Project initialized successfully!",
        "Failed to initialize project",
    ),
    Action.ADD_DEPENDENCY: (
        "Adding dependency...",
        "Dependency added successfully!",
        "Failed to add dependency",
    ),
    Action.ACCOUNT_LIST: ("Fetching accounts...", "Account info retrieved", "Failed to get account info"),
    Action.ACCOUNT_CREATE: (
        "Creating new account...",
        "Account created successfully!",
        "Failed to create account",
    ),
    Action.NETWORK_SWITCH: ("Switching network...", "Network switched successfully!", "Failed to switch network"),
    Action.NETWORK_INFO: ("Fetching network info...", "Network info retrieved", "Failed to get network info"),
}

_PARSERS: Dict[Action, Callable[[list[str]], Any]] = {
    Action.BUILD: output.parse_build_output,
    Action.TEST: output.parse_test_output,
    Action.DEPLOY: output.parse_publish_output,
    Action.ACCOUNT_LIST: output.parse_account_list,
    Action.NETWORK_INFO: output.parse_json_output,
}

# Failed test runs print a warning, not an error: the CLI itself worked.
_FAILURE_LEVELS = {Action.TEST: NotificationLevel.WARN}


@dataclass
class ActionRun:
    """Outcome of one coordinated action."""

    action: Action
    status: ActionStatus
    buffer: str
    command: list[str]
    classification: ClassificationResult = field(default_factory=ClassificationResult)
    exit_code: int | None = None
    duration_seconds: float | None = None
    summary: Any = None
    failure_reason: str | None = None
    parse_error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def diagnostics(self):
        return self.classification.diagnostics


class ActionCoordinator:
    """Runs aptos CLI actions, one in flight per action at a time."""

    def __init__(
        self,
        settings: Settings,
        *,
        sink: DiagnosticSink,
        notifier: Notifier,
        runner: ProcessRunner = run_command,
        table: PatternTable | None = None,
        which: Callable[[str], str | None] = resolve_executable,
    ) -> None:
        self.settings = settings
        self.sink = sink
        self.notifier = notifier
        self.table = table if table is not None else build_pattern_table(settings.extra_patterns)
        self._runner = runner
        self._which = which
        self._status: Dict[Action, ActionStatus] = {}
        self._last_runs: Dict[Action, ActionRun] = {}

    # ---- State ----

    def status(self, action: Action | str) -> ActionStatus:
        return self._status.get(Action(action), ActionStatus.IDLE)

    def is_running(self, action: Action | str) -> bool:
        return self.status(action) == ActionStatus.RUNNING

    def last_run(self, action: Action | str) -> ActionRun | None:
        return self._last_runs.get(Action(action))

    # ---- Command construction ----

    def build_spec(
        self,
        action: Action,
        *,
        cwd: str | Path,
        network: str | None = None,
        name: str | None = None,
        dependency: str | None = None,
    ) -> CommandSpec:
        """Build the CommandSpec for ``action``; raises on unmet preconditions."""
        settings = self.settings
        workdir = Path(cwd)

        if action in aptos.PROJECT_BUILDERS:
            return aptos.PROJECT_BUILDERS[action](settings, find_project_root(workdir))
        if action == Action.ADD_DEPENDENCY:
            root = find_project_root(workdir)
            if not dependency:
                raise ActionArgumentError("add-dependency needs a dependency (address::module)")
            return aptos.add_dependency_command(settings, root, dependency)
        if action == Action.INIT:
            if not name:
                raise ActionArgumentError("init needs a project name")
            return aptos.init_project_command(settings, name, workdir)
        if action == Action.ACCOUNT_LIST:
            return aptos.account_list_command(settings, workdir)
        if action == Action.ACCOUNT_CREATE:
            return aptos.account_create_command(settings, workdir)
        if action == Action.NETWORK_SWITCH:
            net = aptos.parse_network(network, settings)
            return aptos.network_switch_command(settings, net, workdir)
        if action == Action.NETWORK_INFO:
            return aptos.network_info_command(settings, workdir)
        raise ActionArgumentError(f"Unsupported action: {action}")

    # ---- Execution ----

    async def run(
        self,
        action: Action | str,
        *,
        cwd: str | Path,
        buffer: str = DEFAULT_BUFFER,
        network: str | None = None,
        name: str | None = None,
        dependency: str | None = None,
    ) -> ActionRun:
        """Run ``action`` to completion and return its ActionRun.

        Raises (after notifying the user, before any process starts):
            ActionAlreadyRunningError: the same action is still RUNNING.
            ProjectNotFoundError: no Move.toml for a project action.
            InvalidNetworkError: network-switch to an unknown network.
            ActionArgumentError: a required argument is missing.
            ProcessLaunchError: the aptos binary cannot be found.
        """
        action = Action(action)
        started, _, _ = _MESSAGES[action]

        if self.is_running(action):
            self.notifier.notify(f"{action.value} already running", NotificationLevel.WARN)
            raise ActionAlreadyRunningError(action.value)

        try:
            spec = self.build_spec(
                action, cwd=cwd, network=network, name=name, dependency=dependency
            )
            if self._which(spec.executable) is None:
                raise ProcessLaunchError(
                    spec.executable, "Aptos CLI not found. Please install aptos CLI."
                )
        except MoveToolkitError as exc:
            self.notifier.notify(str(exc), NotificationLevel.ERROR)
            raise

        self._status[action] = ActionStatus.RUNNING
        self.notifier.notify(started, NotificationLevel.INFO)
        logger.info("Starting %s: %s", action.value, spec.display())

        run: ActionRun | None = None
        try:
            try:
                result = await self._runner(spec)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Process runner crashed for %s", action.value)
                result = ToolResult(
                    success=False,
                    output="",
                    error=str(exc),
                    command=spec.argv,
                    failure_reason="runner-exception",
                )
            run = self._complete(action, spec, result, buffer)
        finally:
            # RUNNING never outlives the call, even on cancellation.
            if run is None:
                logger.error("%s aborted before completion", action.value)
                self._status[action] = ActionStatus.FAILED
            else:
                self._status[action] = run.status
                self._last_runs[action] = run
        return run

    def _complete(
        self,
        action: Action,
        spec: CommandSpec,
        result: ToolResult,
        buffer: str,
    ) -> ActionRun:
        _, succeeded, failed = _MESSAGES[action]

        # stderr is classified even on success: warnings live there too.
        classification = classify_lines(
            result.stderr_lines(), self.table, source=self.settings.diagnostic_source
        )
        run = ActionRun(
            action=action,
            status=ActionStatus.SUCCEEDED,
            buffer=buffer,
            command=spec.argv,
            classification=classification,
            exit_code=result.return_code,
            duration_seconds=result.duration_seconds,
            started_at=result.started_at,
            finished_at=result.finished_at,
        )

        if result.timed_out:
            run.status = ActionStatus.TIMED_OUT
            run.failure_reason = "timeout"
            self.notifier.notify(
                f"{failed} (timed out after {spec.timeout:g}s)", NotificationLevel.ERROR
            )
        elif result.spawn_failed or result.failure_reason == "runner-exception":
            run.status = ActionStatus.FAILED
            run.failure_reason = result.failure_reason
            self.notifier.notify(
                f"{failed}: cannot launch {spec.executable}: {result.error}",
                NotificationLevel.ERROR,
            )
        else:
            self._parse_stdout(action, result, run)
            if result.return_code == 0:
                message = succeeded
                if len(classification):
                    message = f"{succeeded} ({len(classification)} diagnostics)"
                self.notifier.notify(message, NotificationLevel.INFO)
            else:
                run.status = ActionStatus.FAILED
                run.failure_reason = classify_tool_failure(result)
                self.notifier.notify(
                    f"{failed} ({len(classification)} diagnostics, see diagnostics list)",
                    _FAILURE_LEVELS.get(action, NotificationLevel.ERROR),
                )
            if run.parse_error:
                self.notifier.notify(
                    f"Could not parse {action.value} output: {run.parse_error}",
                    NotificationLevel.WARN,
                )

        logger.info(
            "Finished %s: status=%s exit=%s diagnostics=%d",
            action.value,
            run.status.value,
            result.return_code,
            len(classification),
        )
        for diagnostic in classification:
            logger.debug("%s: %s", action.value, format_diagnostic(diagnostic))
        self.sink.publish(buffer, classification.diagnostics)
        return run

    @staticmethod
    def _parse_stdout(action: Action, result: ToolResult, run: ActionRun) -> None:
        parser = _PARSERS.get(action)
        lines = result.stdout_lines()
        if parser is None or not lines:
            return
        try:
            run.summary = parser(lines)
        except (OutputParseError, ValueError, TypeError) as exc:
            result.parsing_error = str(exc)
            run.parse_error = str(exc)
