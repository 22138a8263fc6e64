from __future__ import annotations

"""backend/move_toolkit/services/tools/__init__.py

aptos CLI adapter.

- base: ToolResult and the async process runner
- aptos: CommandSpec builders, one per action
- output: parsers for the success path (stdout) of each action
"""

from .base import ToolResult, run_command  # noqa: F401
