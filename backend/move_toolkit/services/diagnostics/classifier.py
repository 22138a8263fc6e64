from __future__ import annotations

"""backend/move_toolkit/services/diagnostics/classifier.py

Turn captured CLI output lines into structured diagnostics.

classify_lines() is a pure function: the same lines and table always give
an equal ClassificationResult. Each input line produces at most one
Diagnostic; lines that match no pattern are dropped.
"""

import re
from collections import Counter
from typing import Iterable, Tuple

from move_toolkit.models import (
    DIAGNOSTIC_SOURCE,
    ClassificationResult,
    Diagnostic,
)
from move_toolkit.services.diagnostics.patterns import DEFAULT_TABLE, PatternTable

POSITION_RE = re.compile(r"(\d+):(\d+)")

UNLOCATED: Tuple[int, int] = (0, 0)


def extract_position(line: str) -> Tuple[int, int] | None:
    """Return the first usable ``line:column`` token as 0-based coordinates.

    The CLI prints 1-based numbers; tokens with a zero component are
    skipped. None when no token is usable.
    """
    for match in POSITION_RE.finditer(line):
        row, col = int(match.group(1)), int(match.group(2))
        if row >= 1 and col >= 1:
            return row - 1, col - 1
    return None


def classify_line(
    line: str,
    table: PatternTable = DEFAULT_TABLE,
    *,
    source: str = DIAGNOSTIC_SOURCE,
) -> Diagnostic | None:
    text = line.rstrip("\r\n")
    if not text.strip():
        return None

    rule = table.first_match(text)
    if rule is None:
        return None

    position = extract_position(text)
    located = position is not None
    row, col = position if position is not None else UNLOCATED
    return Diagnostic(
        line=row,
        column=col,
        severity=rule.severity,
        message=text.strip(),
        category=rule.category,
        located=located,
        source=source,
    )


def classify_lines(
    lines: Iterable[str],
    table: PatternTable = DEFAULT_TABLE,
    *,
    source: str = DIAGNOSTIC_SOURCE,
) -> ClassificationResult:
    """Classify ``lines`` in order against ``table`` (first match wins)."""
    diagnostics = []
    for line in lines:
        diagnostic = classify_line(line, table, source=source)
        if diagnostic is not None:
            diagnostics.append(diagnostic)

    counts = Counter(d.category for d in diagnostics)
    return ClassificationResult(diagnostics=tuple(diagnostics), counts=dict(counts))


def classify_text(
    text: str | None,
    table: PatternTable = DEFAULT_TABLE,
    *,
    source: str = DIAGNOSTIC_SOURCE,
) -> ClassificationResult:
    return classify_lines((text or "").splitlines(), table, source=source)
