from __future__ import annotations

"""
Diagnostics and error classification utilities.

This package provides:
- patterns: the ordered pattern table (regex, category, severity)
- classifier: pure line-by-line classification into Diagnostic records
- summary: summaries, navigation and quick-fix suggestions
- error_classifier: classify whole CLI failures into stable,
  machine-readable reasons that can be surfaced in notifications

The goal is to keep error handling logic centralized and deterministic.
"""

from .classifier import classify_lines, classify_text  # noqa: F401
from .patterns import DEFAULT_TABLE, PatternTable, build_pattern_table  # noqa: F401
