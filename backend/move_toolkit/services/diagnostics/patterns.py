from __future__ import annotations

"""backend/move_toolkit/services/diagnostics/patterns.py

Ordered pattern table used to classify lines of aptos / Move compiler output.

The table is pure data: each row is an ErrorPattern (regex, category,
severity). The classifier walks the rows in declaration order and the
first row that matches a line wins. Ambiguous lines therefore always
take the earliest declared rule; there is no "best match" scoring.

Adding a category or a signature is a data change here (or a row in
Settings.extra_patterns), never a change to the matching loop.
"""

from typing import Any, Iterable, Iterator, Mapping, Sequence, Tuple

from move_toolkit.models import Category, ErrorPattern, Severity

# Prefix shared by compiler error lines: "error:" or "error[E01002]:".
_ERROR = r"\berror(?:\[E\d+\])?:"


DEFAULT_PATTERNS: Tuple[ErrorPattern, ...] = (
    # Syntax: parser complaints
    ErrorPattern(
        _ERROR + r".*(?:expected .+ but found|unexpected (?:token|end of file)"
        r"|unterminated|invalid (?:token|character)|parse error|syntax error)",
        Category.SYNTAX,
        Severity.ERROR,
    ),
    # Type checker
    ErrorPattern(
        _ERROR + r".*(?:type mismatch|incompatible type|invalid type|cannot find type"
        r"|unbound type|expected type|invalid (?:argument|return) type|invalid call)",
        Category.TYPE,
        Severity.ERROR,
    ),
    # Reference safety
    ErrorPattern(
        _ERROR + r".*(?:borrow|reference|dangling|still being (?:used|borrowed)"
        r"|mutable ownership)",
        Category.BORROW,
        Severity.ERROR,
    ),
    # Abilities / resource safety
    ErrorPattern(
        _ERROR + r".*(?:abilit(?:y|ies)|'(?:copy|drop|store|key)'|resource"
        r"|without the 'drop' ability|unused value)",
        Category.RESOURCE,
        Severity.ERROR,
    ),
    # Name resolution across modules / packages
    ErrorPattern(
        _ERROR + r".*(?:unbound (?:module|function|struct|address)|module .* not found"
        r"|cyclic (?:module )?dependency|invalid (?:use|import)|unresolved (?:address|name)"
        r"|friend)",
        Category.MODULE,
        Severity.ERROR,
    ),
    # Runtime / VM failures (test runs, simulated publishes)
    ErrorPattern(
        r"(?:\baborted\b|abort(?:ed)? with code|arithmetic error|MISSING_DATA"
        r"|EXECUTION_FAILURE|\bVMError\b|out of gas|OUT_OF_GAS)",
        Category.RUNTIME,
        Severity.ERROR,
    ),
    # Anything else that calls itself an error
    ErrorPattern(
        r"(?:" + _ERROR + r"|compilation (?:error|failed)|failed to compile"
        r"|could not compile|unable to resolve packages)",
        Category.COMPILATION,
        Severity.ERROR,
    ),
    ErrorPattern(r"^\s*warning(?:\[W\d+\])?:", Category.COMPILATION, Severity.WARN),
    ErrorPattern(r"^\s*(?:note|info):", Category.COMPILATION, Severity.INFO),
    ErrorPattern(r"^\s*(?:help|hint):", Category.COMPILATION, Severity.HINT),
)


class PatternTable(Sequence[ErrorPattern]):
    """Immutable, ordered collection of ErrorPattern rows."""

    def __init__(self, rules: Iterable[ErrorPattern] = DEFAULT_PATTERNS) -> None:
        self._rules: Tuple[ErrorPattern, ...] = tuple(rules)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> "PatternTable":
        """Build a table from plain mappings (e.g. configuration rows).

        Each row needs ``pattern`` and ``category``; ``severity`` defaults to
        ERROR. Unknown categories or severities raise ValueError.
        """
        rules = []
        for row in rows:
            try:
                pattern = row["pattern"]
                category = Category(str(row["category"]).lower())
            except KeyError as exc:
                raise ValueError(f"Pattern row is missing {exc.args[0]!r}: {row!r}") from exc
            severity = Severity(str(row.get("severity", Severity.ERROR.value)).upper())
            rules.append(ErrorPattern(pattern, category, severity))
        return cls(rules)

    def extend(self, rules: Iterable[ErrorPattern]) -> "PatternTable":
        """Return a new table with ``rules`` appended after the existing ones."""
        return PatternTable((*self._rules, *rules))

    def first_match(self, line: str) -> ErrorPattern | None:
        for rule in self._rules:
            if rule.matches(line):
                return rule
        return None

    def categories(self) -> list[Category]:
        """Categories in first-declared order, without duplicates."""
        seen: list[Category] = []
        for rule in self._rules:
            if rule.category not in seen:
                seen.append(rule.category)
        return seen

    def __getitem__(self, index):  # type: ignore[override]
        return self._rules[index]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[ErrorPattern]:
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"PatternTable({len(self._rules)} rules)"


DEFAULT_TABLE = PatternTable(DEFAULT_PATTERNS)


def build_pattern_table(extra_rows: Iterable[Mapping[str, Any]] = ()) -> PatternTable:
    """Default table plus any user-configured rows appended at the end."""
    extra = PatternTable.from_rows(extra_rows)
    if not extra:
        return DEFAULT_TABLE
    return DEFAULT_TABLE.extend(extra)
