from __future__ import annotations

"""backend/move_toolkit/services/diagnostics/summary.py

Read-only helpers over classified diagnostics:

- format_summary: the "Diagnostic Summary:" text shown to the user
- next_diagnostic / previous_diagnostic: category-aware navigation
- quick_fixes: fix suggestions for well-known messages

Navigation only ever considers located diagnostics; unlocated ones have no
buffer position to jump to.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from move_toolkit.models import Category, ClassificationResult, Diagnostic
from move_toolkit.services.diagnostics.patterns import DEFAULT_TABLE, PatternTable

SUMMARY_HEADER = "Diagnostic Summary:"
NO_DIAGNOSTICS = "  No diagnostics found"


def format_summary(
    result: ClassificationResult,
    table: PatternTable = DEFAULT_TABLE,
) -> str:
    """Render per-category counts, in the table's category order."""
    lines = [SUMMARY_HEADER]
    order = table.categories() + [c for c in Category if c not in table.categories()]
    for category in order:
        count = result.counts.get(category, 0)
        if count:
            lines.append(f"  {category.value}: {count}")
    if len(lines) == 1:
        lines.append(NO_DIAGNOSTICS)
    return "\n".join(lines)


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """One list entry; unlocated diagnostics are marked instead of positioned."""
    where = diagnostic.position_label() or "-"
    return f"[{diagnostic.severity.value}] {diagnostic.category.value} {where}: {diagnostic.message}"


def _located(
    diagnostics: Iterable[Diagnostic],
    category: Category | None,
) -> list[Diagnostic]:
    return [
        d
        for d in diagnostics
        if d.located and (category is None or d.category == category)
    ]


def next_diagnostic(
    diagnostics: Iterable[Diagnostic],
    line: int,
    category: Category | None = None,
) -> Diagnostic | None:
    """First located diagnostic strictly below 0-based ``line``."""
    candidates = [d for d in _located(diagnostics, category) if d.line > line]
    if not candidates:
        return None
    return min(candidates, key=lambda d: (d.line, d.column))


def previous_diagnostic(
    diagnostics: Iterable[Diagnostic],
    line: int,
    category: Category | None = None,
) -> Diagnostic | None:
    """Last located diagnostic strictly above 0-based ``line``."""
    candidates = [d for d in _located(diagnostics, category) if d.line < line]
    if not candidates:
        return None
    return max(candidates, key=lambda d: (d.line, d.column))


@dataclass(frozen=True)
class QuickFix:
    title: str
    kind: str


_QUICK_FIXES: Sequence[tuple[Category, re.Pattern[str], QuickFix]] = (
    (
        Category.SYNTAX,
        re.compile(r"expected ';'", re.IGNORECASE),
        QuickFix("Add missing semicolon", "insert-semicolon"),
    ),
    (
        Category.TYPE,
        re.compile(r"cannot find type|unbound type", re.IGNORECASE),
        QuickFix("Add missing use statement", "add-use"),
    ),
    (
        Category.RESOURCE,
        re.compile(r"abilit(?:y|ies)|'(?:copy|drop|store|key)'", re.IGNORECASE),
        QuickFix("Add missing ability", "add-ability"),
    ),
    (
        Category.MODULE,
        re.compile(r"unbound module|unresolved address", re.IGNORECASE),
        QuickFix("Add missing dependency", "add-dependency"),
    ),
)


def quick_fixes(diagnostic: Diagnostic) -> list[QuickFix]:
    """Suggestions for ``diagnostic``; the editor is responsible for edits."""
    return [
        fix
        for category, pattern, fix in _QUICK_FIXES
        if diagnostic.category == category and pattern.search(diagnostic.message)
    ]
