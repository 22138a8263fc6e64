# backend/move_toolkit/models/__init__.py
from __future__ import annotations

"""
Core in-memory models for the Move toolkit.

Models:
- Severity / Category: classification enums for diagnostics
- ErrorPattern: one rule of the pattern table (regex, category, severity)
- Diagnostic: a single classified line of CLI output
- ClassificationResult: ordered diagnostics + per-category counts
- CommandSpec: executable + args + working directory + timeout
- Action / ActionStatus / Network: the coordinator's vocabulary

Everything here is immutable. Diagnostics are produced fresh on every
classification run and handed over to the editor sink as-is.
"""

import enum
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple


class Severity(str, enum.Enum):
    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    HINT = "HINT"

    @property
    def level(self) -> int:
        """Numeric severity as understood by the editor (1 = most severe)."""
        return _SEVERITY_LEVELS[self]


_SEVERITY_LEVELS = {
    Severity.ERROR: 1,
    Severity.WARN: 2,
    Severity.INFO: 3,
    Severity.HINT: 4,
}


class Category(str, enum.Enum):
    SYNTAX = "syntax"
    TYPE = "type"
    BORROW = "borrow"
    RESOURCE = "resource"
    MODULE = "module"
    COMPILATION = "compilation"
    RUNTIME = "runtime"


class Action(str, enum.Enum):
    BUILD = "build"
    TEST = "test"
    DEPLOY = "deploy"
    INIT = "init"
    ADD_DEPENDENCY = "add-dependency"
    ACCOUNT_LIST = "account-list"
    ACCOUNT_CREATE = "account-create"
    NETWORK_SWITCH = "network-switch"
    NETWORK_INFO = "network-info"

    @property
    def requires_project(self) -> bool:
        return self in _PROJECT_ACTIONS


_PROJECT_ACTIONS = frozenset(
    {Action.BUILD, Action.TEST, Action.DEPLOY, Action.ADD_DEPENDENCY}
)


class ActionStatus(str, enum.Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"


class Network(str, enum.Enum):
    LOCAL = "local"
    DEVNET = "devnet"
    TESTNET = "testnet"
    MAINNET = "mainnet"


DIAGNOSTIC_SOURCE = "move_compiler"


@dataclass(frozen=True)
class ErrorPattern:
    """One rule of the pattern table.

    The regex is matched with ``search`` (anywhere in the line) and
    case-insensitively.
    """

    pattern: str
    category: Category
    severity: Severity
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE))

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None


@dataclass(frozen=True)
class Diagnostic:
    """A classified line of CLI output.

    ``line`` and ``column`` are 0-based. When no ``line:column`` token could be
    extracted the diagnostic is *unlocated*: position is (0, 0) and
    ``located`` is False, so renderers must not place it in the buffer.
    """

    line: int
    column: int
    severity: Severity
    message: str
    category: Category
    located: bool = True
    source: str = DIAGNOSTIC_SOURCE

    def position_label(self) -> str | None:
        """1-based ``line:column`` as the CLI printed it, or None if unlocated."""
        if not self.located:
            return None
        return f"{self.line + 1}:{self.column + 1}"

    def to_editor(self) -> Dict[str, Any]:
        """Shape expected by the editor's diagnostic API."""
        return {
            "lnum": self.line,
            "col": self.column,
            "severity": self.severity.level,
            "message": self.message,
            "source": self.source,
            "user_data": {
                "category": self.category.value,
                "located": self.located,
            },
        }


@dataclass(frozen=True)
class ClassificationResult:
    """Ordered diagnostics for one CLI invocation plus per-category counts."""

    diagnostics: Tuple[Diagnostic, ...] = ()
    counts: Mapping[Category, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)

    def by_category(self, category: Category) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.category == category]

    def located(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.located]

    def unlocated(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.located]

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


@dataclass(frozen=True)
class CommandSpec:
    """A single CLI invocation, consumed once by the process runner."""

    executable: str
    args: Tuple[str, ...]
    workdir: Path | None = None
    timeout: float = 30.0

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def display(self) -> str:
        return " ".join(self.argv)
