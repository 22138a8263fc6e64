from __future__ import annotations

"""backend/move_toolkit/errors.py

Exception hierarchy for the toolkit.

Precondition failures (no Move.toml, missing CLI binary, bad network name,
an action that is already running) are raised *before* any process starts.
Process outcomes themselves (timeouts, spawn errors, non-zero exits) are not
exceptions: they are carried as data on ToolResult and classified by
services.diagnostics.error_classifier.
"""


class MoveToolkitError(Exception):
    """Base class for all toolkit errors."""


class ProjectNotFoundError(MoveToolkitError):
    """No Move.toml in the start directory or any of its ancestors."""

    def __init__(self, start: str) -> None:
        self.start = start
        super().__init__(f"No Move.toml found in {start} or any parent directory")


class ProcessLaunchError(MoveToolkitError):
    """The CLI executable is missing or cannot be run."""

    def __init__(self, executable: str, reason: str | None = None) -> None:
        self.executable = executable
        self.reason = reason
        message = f"Cannot launch '{executable}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidNetworkError(MoveToolkitError):
    """Network name outside of local/devnet/testnet/mainnet."""

    def __init__(self, network: str, valid: list[str]) -> None:
        self.network = network
        self.valid = valid
        super().__init__(
            f"Invalid network '{network}'. Valid options: {', '.join(valid)}"
        )


class ActionAlreadyRunningError(MoveToolkitError):
    """A second trigger arrived while the same action was still running."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"{action} already running")


class OutputParseError(MoveToolkitError):
    """Structured CLI output (``--output json``) could not be parsed."""


class ManifestError(MoveToolkitError):
    """Move.toml exists but cannot be read or parsed."""


class ActionArgumentError(MoveToolkitError):
    """An action was triggered without an argument it needs (name, dependency)."""
