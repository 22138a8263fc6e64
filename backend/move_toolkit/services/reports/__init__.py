# backend/move_toolkit/services/reports/__init__.py
from __future__ import annotations

"""
Reporting utilities for action runs.

High-level helpers exposed:

- build_run_markdown(run) -> str
- summary_to_dict(summary) -> plain data for JSON responses
"""

from .markdown_builder import build_run_markdown, summary_to_dict  # noqa: F401
