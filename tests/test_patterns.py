from __future__ import annotations

import pytest

from move_toolkit.models import Category, ErrorPattern, Severity
from move_toolkit.services.diagnostics.patterns import (
    DEFAULT_TABLE,
    PatternTable,
    build_pattern_table,
)


@pytest.mark.parametrize(
    ("line", "category", "severity"),
    [
        ("error: expected ';' but found 'let'", Category.SYNTAX, Severity.ERROR),
        ("error[E04003]: type mismatch at 3:7", Category.TYPE, Severity.ERROR),
        ("error[E07003]: invalid usage of reference", Category.BORROW, Severity.ERROR),
        ("error[E05001]: ability constraint not satisfied", Category.RESOURCE, Severity.ERROR),
        ("error[E03002]: unbound module '0x1::coin'", Category.MODULE, Severity.ERROR),
        ("Test was aborted with code 65537", Category.RUNTIME, Severity.ERROR),
        ("error: something else went wrong", Category.COMPILATION, Severity.ERROR),
        ("Compilation failed", Category.COMPILATION, Severity.ERROR),
        ("warning[W09002]: unused variable", Category.COMPILATION, Severity.WARN),
        ("note: see declaration", Category.COMPILATION, Severity.INFO),
        ("help: add a semicolon", Category.COMPILATION, Severity.HINT),
    ],
)
def test_default_table_categories(line: str, category: Category, severity: Severity) -> None:
    rule = DEFAULT_TABLE.first_match(line)
    assert rule is not None
    assert rule.category is category
    assert rule.severity is severity


def test_non_diagnostic_lines_do_not_match() -> None:
    for line in ["Compiling module Foo", "Built successfully", "BUILDING hello", ""]:
        assert DEFAULT_TABLE.first_match(line) is None


def test_first_declared_rule_wins() -> None:
    table = PatternTable(
        [
            ErrorPattern(r"boom", Category.RUNTIME, Severity.WARN),
            ErrorPattern(r"boom", Category.SYNTAX, Severity.ERROR),
        ]
    )
    rule = table.first_match("boom at 1:1")
    assert rule is not None
    assert rule.category is Category.RUNTIME


def test_from_rows_and_extend_append_after_defaults() -> None:
    table = build_pattern_table(
        [{"pattern": r"^lint:", "category": "Syntax", "severity": "hint"}]
    )
    assert len(table) == len(DEFAULT_TABLE) + 1
    assert table[-1].category is Category.SYNTAX
    assert table[-1].severity is Severity.HINT
    assert table.first_match("lint: prefer snake_case").severity is Severity.HINT


def test_from_rows_rejects_bad_rows() -> None:
    with pytest.raises(ValueError):
        PatternTable.from_rows([{"category": "syntax"}])
    with pytest.raises(ValueError):
        PatternTable.from_rows([{"pattern": "x", "category": "nonsense"}])


def test_build_pattern_table_without_extras_is_default() -> None:
    assert build_pattern_table() is DEFAULT_TABLE


def test_categories_in_declaration_order() -> None:
    assert DEFAULT_TABLE.categories() == [
        Category.SYNTAX,
        Category.TYPE,
        Category.BORROW,
        Category.RESOURCE,
        Category.MODULE,
        Category.RUNTIME,
        Category.COMPILATION,
    ]
